"""
Simulated sheet generator for the production dashboard.

Produces rows in the exact shape the opensheet endpoint serves (every cell
a string, header cells as keys) so the dashboard and CLI run offline.
All values are synthetic.
"""

from datetime import date

import numpy as np
import pandas as pd

from .config import (
    ID_COLUMN,
    SERIAL_COLUMN,
    SUMMARY_DATE_COLUMN,
    SUMMARY_DATE_FORMAT,
    SUMMARY_DRIVERS_COLUMN,
    SUMMARY_MANPOWER_COLUMN,
    SUMMARY_SUPERVISORS_COLUMN,
    WORK_COLUMN,
)

DEMO_BUS_SOURCE = "demo://bus"
DEMO_SUMMARY_SOURCE = "demo://summary"

# ---------------------------------------------------------------------------
# Typical line parameters
# ---------------------------------------------------------------------------
_MODELS = ["GC-9M", "GC-12M", "GC-12M AC", "GC-SLEEPER"]

# Work share contributed by each line stage, in production order
_STAGES = [
    ("STRUCTURE", 25),
    ("PANELLING", 25),
    ("PAINT", 25),
    ("ASSEMBLY", 25),
]


def generate_bus_rows(n_buses: int = 45, seed: int | None = 42) -> list[dict[str, str]]:
    """Generate a simulated production sheet.

    Each bus gets a serial, chassis name, per-stage completion, a total
    work percentage and a "WORKING" yes/no flag. A few rows carry blank or
    malformed totals, as hand-edited sheets do.
    """
    rng = np.random.default_rng(seed)
    rows = []

    for i in range(1, n_buses + 1):
        total = float(np.clip(rng.beta(2.0, 1.6) * 100, 0, 100))
        remaining = total
        stage_cells = {}
        for stage, share in _STAGES:
            done = min(remaining, share)
            stage_cells[f"{stage} %"] = f"{round(done / share * 100)}%"
            remaining -= done

        total_cell = f"{round(total)}%"
        roll = rng.random()
        if roll < 0.04:
            total_cell = ""
        elif roll < 0.06:
            total_cell = "TBD"

        rows.append({
            SERIAL_COLUMN: str(i),
            ID_COLUMN: f"GC-{1000 + i}",
            "MODEL": _MODELS[int(rng.integers(len(_MODELS)))],
            **stage_cells,
            WORK_COLUMN: total_cell,
            "WORKING": "Yes" if rng.random() < 0.7 else "No",
        })

    return rows


def generate_summary_rows(
    today: date | None = None,
    days: int = 7,
    seed: int | None = 42,
) -> list[dict[str, str]]:
    """Generate a manpower summary sheet covering the `days` up to `today`."""
    rng = np.random.default_rng(seed)
    end = pd.Timestamp(today or date.today())
    dates = pd.date_range(end=end, periods=days, freq="D")

    rows = []
    for day in dates:
        is_sunday = day.dayofweek == 6
        manpower = int(rng.normal(140, 8) * (0.4 if is_sunday else 1.0))
        rows.append({
            SUMMARY_DATE_COLUMN: day.strftime(SUMMARY_DATE_FORMAT),
            SUMMARY_MANPOWER_COLUMN: str(manpower),
            SUMMARY_DRIVERS_COLUMN: str(int(rng.integers(6, 14))),
            SUMMARY_SUPERVISORS_COLUMN: str(int(rng.integers(4, 9))),
        })

    return rows


def demo_rows(source: str) -> list[dict[str, str]]:
    """Serve a demo:// source."""
    if source == DEMO_SUMMARY_SOURCE:
        return generate_summary_rows()
    return generate_bus_rows()
