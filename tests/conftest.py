"""Shared fixtures: sample sheet rows and a mocked requests session."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests


def make_response(
    status_code: int = 200,
    json_data: Any = None,
    text: str = "",
    reason: str = "",
    json_error: bool = False,
) -> MagicMock:
    """Build a mock requests.Response."""
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    resp.text = text
    resp.reason = reason
    if json_error:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = json_data
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def mock_session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def bus_rows() -> list[dict[str, str]]:
    """Two buses as the opensheet endpoint serves them."""
    return [
        {"Chassi Name": "B1", "TOTAL BUS WORK": "40%", "WORKING": "no"},
        {"Chassi Name": "B2", "TOTAL BUS WORK": "90%", "WORKING": "yes"},
    ]


@pytest.fixture
def summary_rows() -> list[dict[str, str]]:
    return [
        {"DATE": "25-11-2025", "MANPOWER PRESENT": "120", "DRIVERS PRESENT": "8", "SUPERVISORS PRESENT": "5"},
        {"DATE": "26-11-2025", "MANPOWER PRESENT": "132", "DRIVERS PRESENT": "10", "SUPERVISORS PRESENT": "6"},
        {"DATE": "26-11-2025", "MANPOWER PRESENT": "999", "DRIVERS PRESENT": "99", "SUPERVISORS PRESENT": "99"},
    ]


def make_rows(n: int, pct: str = "50%") -> list[dict[str, str]]:
    return [{"Chassi Name": f"GC-{i}", "TOTAL BUS WORK": pct} for i in range(n)]
