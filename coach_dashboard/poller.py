"""
Background refresh worker.

Design:
- Runs in its own daemon thread so the UI stays responsive.
- start() runs one cycle straight away, then one cycle every `interval`
  seconds until stop().
- Every cycle runs each job in turn. A job that raises is logged and
  skipped; the other jobs and the schedule carry on.
- stop() sets the stop event and joins the thread. Once it returns no job
  will be called again.
"""

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from .config import BUS_DATA_URL, POLL_INTERVAL_SEC, SUMMARY_URL
from .loaders import load_source_rows
from .state import DashboardState
from .transforms import build_bus_records, resolve_daily_summary

logger = logging.getLogger(__name__)

Job = Callable[[], None]
Fetch = Callable[[str], list[dict[str, Any]]]


class PollScheduler:
    def __init__(
        self,
        jobs: Mapping[str, Job],
        interval: float = POLL_INTERVAL_SEC,
        on_cycle: Callable[[int], None] | None = None,
    ):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.jobs = dict(jobs)
        self.interval = interval
        self.on_cycle = on_cycle
        self.cycles = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("PollScheduler can only be started once")
        self._thread = threading.Thread(target=self._loop, name="poll-scheduler", daemon=True)
        self._thread.start()
        logger.info("Polling %d sources every %.0fs", len(self.jobs), self.interval)

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("Poll worker still finishing a cycle after %.1fs", timeout or 0)

    def run_cycle(self) -> None:
        """Run every job once, isolating failures."""
        for name, job in self.jobs.items():
            if self._stop.is_set():
                return
            try:
                job()
            except Exception:
                logger.exception("Refresh of '%s' failed; keeping previous data", name)
        self.cycles += 1
        if self.on_cycle is not None:
            try:
                self.on_cycle(self.cycles)
            except Exception:
                logger.exception("on_cycle callback failed")

    def _loop(self) -> None:
        while not self._stop.is_set():
            self.run_cycle()
            if self._stop.wait(self.interval):
                break
        logger.info("Poll worker stopped after %d cycles", self.cycles)

    def __enter__(self) -> "PollScheduler":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()


def build_refresh_jobs(
    state: DashboardState,
    bus_source: str = BUS_DATA_URL,
    summary_source: str = SUMMARY_URL,
    fetch: Fetch = load_source_rows,
) -> dict[str, Job]:
    """Build the two refresh jobs that feed `state`.

    Each job fetches its whole table and replaces its half of the state in
    one step; a failed fetch raises before anything is replaced.
    """

    def refresh_records() -> None:
        rows = fetch(bus_source)
        state.replace_records(build_bus_records(rows))

    def refresh_summary() -> None:
        rows = fetch(summary_source)
        state.replace_summary(resolve_daily_summary(rows))

    return {"bus_data": refresh_records, "summary": refresh_summary}


def release_worker(resource: tuple[DashboardState, PollScheduler], timeout: float = 5.0) -> None:
    """Stop the scheduler of a cached (state, scheduler) pair leaving the cache."""
    _, scheduler = resource
    logger.info("Releasing poll worker")
    scheduler.stop(timeout)
