"""
Configuration: data sources, sheet column names, refresh and paging constants.

Values that differ per deployment (source URLs, poll interval, status
column) can be overridden with COACH_DASHBOARD_* environment variables.
"""

import os
from pathlib import Path


def _env(key: str, default: str | None = None) -> str | None:
    """Read a COACH_DASHBOARD_* variable, treating blank values as unset."""
    value = os.environ.get(f"COACH_DASHBOARD_{key}")
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_float(key: str, default: float) -> float:
    raw = _env(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Data sources — opensheet JSON endpoints (or exported .xlsx paths)
# ---------------------------------------------------------------------------
_SHEET_URL = "https://opensheet.elk.sh/1PiArZhuPYdslTQzdxMLvrFGh-Jsa5LLVs2P8_Kc9--I/Sheet1"

BUS_DATA_URL = _env("BUS_URL", _SHEET_URL)
SUMMARY_URL = _env("SUMMARY_URL", _SHEET_URL)

AUTH_BASE_URL = _env("AUTH_URL", "https://production-backend-mx0s.onrender.com")
LOGIN_PATH = "/api/auth/login"
SIGNUP_PATH = "/api/auth/signup"

HTTP_TIMEOUT_SEC = _env_float("HTTP_TIMEOUT", 15.0)

DEMO_MODE = _env("DEMO", "0").lower() in {"1", "true", "yes", "on"}

# ---------------------------------------------------------------------------
# Production sheet columns
# ---------------------------------------------------------------------------
ID_COLUMN = "Chassi Name"
WORK_COLUMN = "TOTAL BUS WORK"
SERIAL_COLUMN = "S.NO"

# Explicit yes/no column. None keeps the schema-free scan over all fields.
STATUS_COLUMN = _env("STATUS_COLUMN")

STATUS_ACTIVE_VALUE = "yes"
STATUS_INACTIVE_VALUE = "no"

# ---------------------------------------------------------------------------
# Manpower summary columns
# ---------------------------------------------------------------------------
SUMMARY_DATE_COLUMN = "DATE"
SUMMARY_MANPOWER_COLUMN = "MANPOWER PRESENT"
SUMMARY_DRIVERS_COLUMN = "DRIVERS PRESENT"
SUMMARY_SUPERVISORS_COLUMN = "SUPERVISORS PRESENT"

SUMMARY_DATE_FORMAT = "%d-%m-%Y"
NOT_FOUND = "Not Found"

# ---------------------------------------------------------------------------
# Refresh & paging
# ---------------------------------------------------------------------------
POLL_INTERVAL_SEC = _env_float("POLL_INTERVAL", 20.0)
PAGE_SIZE = 20

# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------
PREFERENCE_KEY = "gc_view"
PREFERENCES_FILENAME = "preferences.json"
PREFERENCES_DIR = Path(_env("HOME", str(Path.home() / ".coach_dashboard")))

# ---------------------------------------------------------------------------
# Chart presentation
# ---------------------------------------------------------------------------
DASHBOARD_TITLE = "Gobind Coach Production Dashboard"

# Production stage bands drawn behind the bars: (label, lower %, upper %, fill)
STAGE_BANDS: list[tuple[str, float, float, str]] = [
    ("STR", 0.0, 25.0, "rgba(255, 230, 200, 0.2)"),
    ("PNL", 25.0, 50.0, "rgba(200, 230, 255, 0.2)"),
    ("PNT", 50.0, 75.0, "rgba(200, 255, 200, 0.2)"),
    ("ASM", 75.0, 100.0, "rgba(255, 200, 200, 0.2)"),
]

STATUS_COLORS = {
    "active": ("rgba(34,197,94,0.8)", "rgba(21,128,61,1)"),
    "inactive": ("rgba(239,68,68,0.8)", "rgba(185,28,28,1)"),
}

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_LEVEL = (_env("LOG_LEVEL", "INFO") or "INFO").upper()
