"""
Value objects shared by the pipeline: bus records, the daily manpower
summary, and the view state the front end sorts and pages with.

Records are rebuilt from the sheet on every poll; nothing here keeps
identity across refreshes.
"""

from dataclasses import dataclass, field
from enum import Enum

from .config import NOT_FOUND


class Status(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class ViewMode(str, Enum):
    NORMAL = "Normal"
    ASCENDING = "Ascending"
    DESCENDING = "Descending"

    @classmethod
    def parse(cls, value: object) -> "ViewMode | None":
        """Return the member named by `value` (case-insensitive), else None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        wanted = value.strip().lower()
        for mode in cls:
            if mode.value.lower() == wanted:
                return mode
        return None


@dataclass(frozen=True)
class BusRecord:
    """One row of the production sheet.

    id: chassis name, else the serial cell, else "Row N" (1-based position).
    work_pct: total work done, 0-100.
    status: ACTIVE when the row reads "yes", otherwise INACTIVE.
    serial: sheet serial number, None when the sheet has no serial column.
    extra: every sheet field rendered as text, in sheet order.
    """
    id: str
    work_pct: float = 0.0
    status: Status = Status.INACTIVE
    serial: int | None = None
    extra: dict[str, str] = field(default_factory=dict, compare=False)

    @property
    def is_active(self) -> bool:
        return self.status is Status.ACTIVE


@dataclass(frozen=True)
class ManpowerSummary:
    """Manpower counts for one day, as text.

    found is False only for the sentinel built by not_found(); a matched
    row keeps found=True whatever its cells read.
    """
    date: str
    manpower_present: str
    drivers_present: str
    supervisors_present: str
    found: bool = True

    @classmethod
    def not_found(cls, date: str) -> "ManpowerSummary":
        return cls(date, NOT_FOUND, NOT_FOUND, NOT_FOUND, found=False)


@dataclass(frozen=True)
class ViewState:
    mode: ViewMode = ViewMode.NORMAL
    page: int = 0

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError(f"page must be >= 0, got {self.page}")
