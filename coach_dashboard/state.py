"""
Design (state.py)
- Purpose: Hold the latest bus records and manpower summary behind a lock so
           the poller can replace them while the UI reads.
- Inputs: Full record lists / summaries from a completed fetch.
- Outputs: Immutable Snapshot objects.
- Side effects: Replaces internal references; stamps update times.
- Thread-safety: All reads and writes take the internal lock. Each replace
                 swaps the whole value, so readers never see a partial set.
"""

import threading
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from .models import BusRecord, ManpowerSummary
from .transforms import today_string


@dataclass(frozen=True)
class Snapshot:
    records: tuple[BusRecord, ...]
    summary: ManpowerSummary
    records_updated: datetime | None = None
    summary_updated: datetime | None = None

    @property
    def last_updated(self) -> datetime | None:
        stamps = [s for s in (self.records_updated, self.summary_updated) if s is not None]
        return max(stamps) if stamps else None


class DashboardState:
    """
    Design (DashboardState)
    - State:
        _records: tuple of BusRecord from the last successful bus fetch
        _summary: ManpowerSummary from the last successful summary fetch
                  (sentinel for today until the first fetch lands)
        _records_updated / _summary_updated: when each was last replaced
        _lock: threading.Lock guarding all of the above
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: tuple[BusRecord, ...] = ()
        self._summary = ManpowerSummary.not_found(today_string())
        self._records_updated: datetime | None = None
        self._summary_updated: datetime | None = None

    def replace_records(self, records: Iterable[BusRecord]) -> None:
        frozen = tuple(records)
        with self._lock:
            self._records = frozen
            self._records_updated = datetime.now()

    def replace_summary(self, summary: ManpowerSummary) -> None:
        with self._lock:
            self._summary = summary
            self._summary_updated = datetime.now()

    def snapshot(self) -> Snapshot:
        with self._lock:
            return Snapshot(
                records=self._records,
                summary=self._summary,
                records_updated=self._records_updated,
                summary_updated=self._summary_updated,
            )
