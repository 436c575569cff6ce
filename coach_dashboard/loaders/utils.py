"""
Shared utilities for sheet ingestion: tolerant number parsing, cell-to-text
rendering, header detection.
"""

import logging
import math
from datetime import date, datetime
from typing import Any

from ..config import SUMMARY_DATE_FORMAT

logger = logging.getLogger(__name__)


def safe_float(val: Any) -> float | None:
    """Coerce a value to float, returning None for non-numeric values.

    Handles percentage strings like "78%" and rejects NaN/infinity so the
    result is always displayable.
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, str):
        val = val.strip()
        if val.endswith("%"):
            val = val[:-1].strip()
        if not val:
            return None
    try:
        out = float(val)
    except (ValueError, TypeError):
        return None
    if math.isnan(out) or math.isinf(out):
        return None
    return out


def parse_percent(val: Any) -> float:
    """Parse a percentage cell to a float in 0-100. Malformed input gives 0."""
    out = safe_float(val)
    if out is None:
        if val not in (None, ""):
            logger.debug("Unparseable percentage %r, using 0", val)
        return 0.0
    return min(max(out, 0.0), 100.0)


def parse_int(val: Any, default: int = 0) -> int:
    """Parse an integer cell ("12", "12.0", 12). Malformed input gives `default`."""
    out = safe_float(val)
    if out is None:
        return default
    return int(out)


def cell_to_text(val: Any) -> str:
    """Render a sheet cell as the text the JSON endpoint would serve.

    Date cells (from exported workbooks) use the DD-MM-YYYY sheet format,
    whole floats drop their ".0", None becomes "".
    """
    if val is None:
        return ""
    if isinstance(val, (datetime, date)):
        return val.strftime(SUMMARY_DATE_FORMAT)
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val).strip()


def find_header_row(
    sheet,
    signature: set[str],
    max_rows: int = 20,
    min_matches: int = 1,
) -> int | None:
    """Scan an openpyxl sheet for the row containing signature strings.

    Returns the 1-based row index where at least `min_matches` cells match
    values in `signature`, or None if not found within `max_rows`.
    """
    for row_idx in range(1, min(max_rows, sheet.max_row) + 1):
        matches = 0
        for cell in sheet[row_idx]:
            if cell.value is not None and str(cell.value).strip() in signature:
                matches += 1
        if matches >= min_matches:
            return row_idx
    return None
