"""
Data transforms: normalise raw sheet rows into BusRecords and resolve
today's manpower summary from the flat summary table.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from .config import (
    ID_COLUMN,
    SERIAL_COLUMN,
    STATUS_COLUMN,
    SUMMARY_DATE_COLUMN,
    SUMMARY_DATE_FORMAT,
    SUMMARY_DRIVERS_COLUMN,
    SUMMARY_MANPOWER_COLUMN,
    SUMMARY_SUPERVISORS_COLUMN,
    WORK_COLUMN,
)
from .loaders.utils import cell_to_text, parse_int, parse_percent
from .models import BusRecord, ManpowerSummary
from .status import detect_status

logger = logging.getLogger(__name__)


def normalise_row(
    row: Mapping[str, Any],
    work_column: str = WORK_COLUMN,
    id_column: str = ID_COLUMN,
    serial_column: str = SERIAL_COLUMN,
    status_column: str | None = STATUS_COLUMN,
    position: int | None = None,
) -> BusRecord:
    """Map one loosely typed sheet row to a BusRecord.

    Never raises on bad cell values: an unparseable work percentage is 0,
    a row without a yes/no cell is INACTIVE. A blank chassis name falls
    back to the serial cell, then to "Row N" when `position` (0-based) is
    given.
    """
    serial = None
    if serial_column in row:
        serial = parse_int(row.get(serial_column))

    label = cell_to_text(row.get(id_column)) or cell_to_text(row.get(serial_column))
    if not label and position is not None:
        label = f"Row {position + 1}"

    return BusRecord(
        id=label,
        work_pct=parse_percent(row.get(work_column)),
        status=detect_status(row, status_column),
        serial=serial,
        extra={str(k): cell_to_text(v) for k, v in row.items()},
    )


def build_bus_records(rows: Iterable[Any], **columns: Any) -> list[BusRecord]:
    """Normalise a whole production table, preserving row order.

    Parameters
    ----------
    rows : Rows as returned by the loaders.
    columns : Column-name overrides forwarded to normalise_row().
    """
    records = []
    skipped = 0
    for position, row in enumerate(rows):
        if not isinstance(row, Mapping):
            skipped += 1
            continue
        records.append(normalise_row(row, position=position, **columns))

    if skipped:
        logger.warning("Skipped %d rows that were not objects", skipped)
    logger.info("Normalised %d bus records", len(records))
    return records


def today_string(today: date | None = None) -> str:
    """Format the local calendar day the way the summary sheet writes it (26-11-2025)."""
    return (today or date.today()).strftime(SUMMARY_DATE_FORMAT)


def resolve_daily_summary(
    rows: Iterable[Any],
    target: str | None = None,
) -> ManpowerSummary:
    """Find the summary row for `target` (default: today).

    Matching is exact string equality after trimming; the first matching
    row wins. When nothing matches, a sentinel summary reading "Not Found"
    is returned instead of raising.
    """
    target = (target or today_string()).strip()

    for row in rows:
        if not isinstance(row, Mapping):
            continue
        if cell_to_text(row.get(SUMMARY_DATE_COLUMN)) != target:
            continue
        return ManpowerSummary(
            date=cell_to_text(row.get(SUMMARY_DATE_COLUMN)) or target,
            manpower_present=cell_to_text(row.get(SUMMARY_MANPOWER_COLUMN)) or "0",
            drivers_present=cell_to_text(row.get(SUMMARY_DRIVERS_COLUMN)) or "0",
            supervisors_present=cell_to_text(row.get(SUMMARY_SUPERVISORS_COLUMN)) or "0",
        )

    logger.info("No manpower summary row for %s", target)
    return ManpowerSummary.not_found(target)
