"""
View transforms: sort, count and paginate normalised records for display.

All functions are pure. Sorting is always stable, so equal keys keep the
order they had in the sheet.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from .config import PAGE_SIZE
from .models import BusRecord, ViewMode, ViewState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusCounts:
    total: int = 0
    active: int = 0
    inactive: int = 0


@dataclass(frozen=True)
class ViewResult:
    """Everything a front end needs to draw one page of the chart."""
    records: list[BusRecord]
    visible: list[BusRecord]
    counts: StatusCounts
    mode: ViewMode
    page: int
    page_count: int

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return (self.page + 1) * PAGE_SIZE < self.counts.total


def sort_records(records: Sequence[BusRecord], mode: ViewMode) -> list[BusRecord]:
    """Return a new list ordered for `mode`.

    - NORMAL: by sheet serial when the sheet has one (missing -> 0),
      otherwise sheet order.
    - ASCENDING / DESCENDING: by work percentage.
    """
    if mode is ViewMode.ASCENDING:
        return sorted(records, key=lambda r: r.work_pct)
    if mode is ViewMode.DESCENDING:
        # sorted(reverse=True) keeps ties in input order
        return sorted(records, key=lambda r: r.work_pct, reverse=True)
    if any(r.serial is not None for r in records):
        return sorted(records, key=lambda r: r.serial or 0)
    return list(records)


def page_count(total: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages needed for `total` records (0 for an empty set)."""
    return math.ceil(total / page_size) if total > 0 else 0


def paginate(
    records: Sequence[BusRecord],
    page: int,
    page_size: int = PAGE_SIZE,
) -> list[BusRecord]:
    """Slice out page `page` (zero-based). Past the end yields an empty list."""
    if page < 0:
        raise ValueError(f"page must be >= 0, got {page}")
    start = page * page_size
    return list(records[start:start + page_size])


def count_by_status(records: Sequence[BusRecord]) -> StatusCounts:
    active = sum(1 for r in records if r.is_active)
    return StatusCounts(total=len(records), active=active, inactive=len(records) - active)


def apply_view(records: Sequence[BusRecord], view: ViewState) -> ViewResult:
    """Sort, count and paginate `records` for `view`.

    Counts cover the whole sorted set, not just the visible page.
    """
    ordered = sort_records(records, view.mode)
    return ViewResult(
        records=ordered,
        visible=paginate(ordered, view.page),
        counts=count_by_status(ordered),
        mode=view.mode,
        page=view.page,
        page_count=page_count(len(ordered)),
    )


# ---------------------------------------------------------------------------
# Navigation helpers for the front end
# ---------------------------------------------------------------------------

def next_page(page: int, total: int, page_size: int = PAGE_SIZE) -> int:
    """Advance one page; a no-op on the last page."""
    if (page + 1) * page_size >= total:
        return page
    return page + 1


def previous_page(page: int) -> int:
    """Go back one page; a no-op on page 0."""
    return page - 1 if page > 0 else 0


def clamp_page(page: int, total: int, page_size: int = PAGE_SIZE) -> int:
    """Pull `page` back into range after the record set shrank."""
    pages = page_count(total, page_size)
    if pages == 0:
        return 0
    clamped = min(max(page, 0), pages - 1)
    if clamped != page:
        logger.debug("Page %d out of range for %d records, showing %d", page, total, clamped)
    return clamped
