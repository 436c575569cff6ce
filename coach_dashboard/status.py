"""
Status classification — pure functions with no side effects.

The production sheet has no fixed status column: whichever cell of a row
reads "yes" or "no" decides whether the bus is being worked on. A
deployment can pin the column with config.STATUS_COLUMN; the scan stays as
the fallback.
"""

import logging
from collections.abc import Mapping
from typing import Any

from .config import STATUS_ACTIVE_VALUE, STATUS_INACTIVE_VALUE
from .models import Status

logger = logging.getLogger(__name__)

_STATUS_VALUES = {
    STATUS_ACTIVE_VALUE: Status.ACTIVE,
    STATUS_INACTIVE_VALUE: Status.INACTIVE,
}


def status_from_value(value: Any) -> Status | None:
    """Map a cell to a Status if it reads exactly yes/no, ignoring case and padding."""
    if not isinstance(value, str):
        return None
    return _STATUS_VALUES.get(value.strip().lower())


def detect_status(row: Mapping[str, Any], status_column: str | None = None) -> Status:
    """Return ACTIVE or INACTIVE for a raw sheet row.

    Logic
    -----
    - status_column set and its cell reads yes/no -> that value.
    - otherwise the first field, in row order, whose string value reads
      yes/no decides.
    - no such field -> INACTIVE.
    """
    if status_column is not None:
        pinned = status_from_value(row.get(status_column))
        if pinned is not None:
            return pinned
        logger.debug("Status column '%s' empty or not yes/no, scanning row", status_column)

    for value in row.values():
        status = status_from_value(value)
        if status is not None:
            return status
    return Status.INACTIVE
