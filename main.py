"""
Gobind Coach — Production dashboard pipeline smoke test.

Runs one refresh cycle against the configured sources and prints the
manpower summary, status counts and the requested page.

Usage:
    python main.py [--demo] [--mode Descending] [--page 0] [--watch 60]
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from coach_dashboard.config import LOG_FORMAT, LOG_LEVEL, POLL_INTERVAL_SEC
from coach_dashboard.dashboard import configured_sources, get_dashboard_view
from coach_dashboard.models import ViewMode, ViewState
from coach_dashboard.poller import PollScheduler, build_refresh_jobs
from coach_dashboard.preferences import PreferenceStore
from coach_dashboard.state import DashboardState

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt="%H:%M:%S")
logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--demo", action="store_true", help="use simulated sheets instead of the live endpoints")
    parser.add_argument("--mode", choices=[m.value for m in ViewMode], help="sort order (default: saved preference)")
    parser.add_argument("--page", type=int, default=0, help="zero-based page to print")
    parser.add_argument("--watch", type=float, default=0, metavar="SECONDS",
                        help="keep polling for this long, printing after every cycle")
    return parser.parse_args(argv)


def print_view(state: DashboardState, view_state: ViewState) -> None:
    view = get_dashboard_view(state.snapshot(), view_state)
    summary = view["summary"]
    counts = view["counts"]

    print()
    print(f"  Date: {summary['date']}")
    print(f"  Manpower Present:    {summary['manpower_present']}")
    print(f"  Drivers Present:     {summary['drivers_present']}")
    print(f"  Supervisors Present: {summary['supervisors_present']}")
    print()
    print(f"  Total Buses in Production: {counts['total']}"
          f"  (working {counts['active']}, not working {counts['inactive']})")
    print(f"  View: {view['mode']}  |  Page {view['page'] + 1} of {max(view['page_count'], 1)}")
    print("-" * 70)

    chart = view["chart"]
    if chart.empty:
        print("  No production data.")
    else:
        print(chart[["label", "text", "stage", "status"]].to_string(index=False))
    print("-" * 70)


def main(argv: list[str] | None = None) -> int:
    """Run the refresh pipeline and print the dashboard view."""
    args = parse_args(argv)

    prefs = PreferenceStore()
    mode = ViewMode(args.mode) if args.mode else prefs.load()
    if args.mode:
        prefs.save(mode)

    try:
        view_state = ViewState(mode=mode, page=args.page)
    except ValueError as e:
        logger.error("%s", e)
        return 2

    print("=" * 70)
    print("  GOBIND COACH — Production Dashboard")
    print("=" * 70)

    state = DashboardState()
    bus_source, summary_source = configured_sources(demo=True) if args.demo else configured_sources()
    jobs = build_refresh_jobs(state, bus_source, summary_source)

    if args.watch <= 0:
        PollScheduler(jobs).run_cycle()
        print_view(state, view_state)
        return 0

    scheduler = PollScheduler(jobs, on_cycle=lambda _: print_view(state, view_state))
    with scheduler:
        deadline = time.monotonic() + args.watch
        while time.monotonic() < deadline:
            time.sleep(min(POLL_INTERVAL_SEC, max(deadline - time.monotonic(), 0)))
    print(f"\nStopped after {scheduler.cycles} refresh cycles.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
