"""Dispatch a configured source string to the right loader."""

import logging
from typing import Any

import requests

from ..config import HTTP_TIMEOUT_SEC
from ..errors import SheetFetchError
from ..simulator import demo_rows
from .sheets import fetch_rows
from .workbook import load_workbook_rows

logger = logging.getLogger(__name__)


def load_source_rows(
    source: str,
    session: requests.Session | None = None,
    timeout: float = HTTP_TIMEOUT_SEC,
) -> list[dict[str, Any]]:
    """Load rows from an http(s) JSON endpoint or an exported .xlsx path.

    A path may carry a sheet name after '#', e.g. "export.xlsx#Summary".
    "demo://bus" and "demo://summary" serve simulated sheets.
    """
    if not source:
        raise SheetFetchError("<unset>", "no source configured")

    if source.startswith(("http://", "https://")):
        return fetch_rows(source, session=session, timeout=timeout)

    if source.startswith("demo://"):
        logger.debug("Serving simulated rows for %s", source)
        return demo_rows(source)

    path, _, sheet_name = source.partition("#")
    if path.lower().endswith(".xlsx"):
        return load_workbook_rows(path, sheet_name=sheet_name or None)

    raise SheetFetchError(source, "unsupported source; expected an http(s) URL or .xlsx path")
