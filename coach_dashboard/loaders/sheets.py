"""
Loader for opensheet-style JSON endpoints.

Each GET returns the whole sheet as a JSON array of row objects keyed by
the header cells. There are no paging or filter parameters.
"""

import logging
from typing import Any

import requests

from ..config import HTTP_TIMEOUT_SEC
from ..errors import SheetFetchError

logger = logging.getLogger(__name__)

_HEADERS = {"Accept": "application/json"}


def fetch_rows(
    url: str,
    session: requests.Session | None = None,
    timeout: float = HTTP_TIMEOUT_SEC,
) -> list[dict[str, Any]]:
    """Fetch a sheet as a list of row dicts.

    Raises
    ------
    SheetFetchError
        On network errors, non-2xx responses, invalid JSON, or a body that
        is not a JSON array.
    """
    if not url:
        raise SheetFetchError("<unset>", "no source URL configured")

    http = session or requests
    try:
        resp = http.get(url, headers=_HEADERS, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise SheetFetchError(url, f"HTTP error: {e}") from e

    try:
        payload = resp.json()
    except ValueError as e:
        raise SheetFetchError(url, "response is not valid JSON") from e

    if not isinstance(payload, list):
        raise SheetFetchError(url, f"expected a JSON array, got {type(payload).__name__}")

    rows = [row for row in payload if isinstance(row, dict)]
    skipped = len(payload) - len(rows)
    if skipped:
        logger.warning("Skipped %d non-object rows from %s", skipped, url)

    logger.info("Fetched %d rows from %s", len(rows), url)
    return rows
