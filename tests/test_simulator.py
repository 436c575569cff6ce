from __future__ import annotations

from datetime import date

from coach_dashboard.models import ViewMode, ViewState
from coach_dashboard.simulator import generate_bus_rows, generate_summary_rows
from coach_dashboard.transforms import build_bus_records, resolve_daily_summary
from coach_dashboard.views import apply_view


class TestSimulator:
    def test_bus_rows_are_sheet_shaped(self) -> None:
        rows = generate_bus_rows(n_buses=30)
        assert len(rows) == 30
        assert all(isinstance(v, str) for row in rows for v in row.values())
        assert rows[0]["S.NO"] == "1"

    def test_seeded_output_is_repeatable(self) -> None:
        assert generate_bus_rows(seed=7) == generate_bus_rows(seed=7)

    def test_rows_normalise_cleanly(self) -> None:
        records = build_bus_records(generate_bus_rows(n_buses=45))
        result = apply_view(records, ViewState(mode=ViewMode.NORMAL))
        assert [r.serial for r in result.records] == list(range(1, 46))
        assert all(0.0 <= r.work_pct <= 100.0 for r in records)
        assert result.page_count == 3

    def test_summary_covers_today(self) -> None:
        today = date(2025, 11, 26)
        rows = generate_summary_rows(today=today, days=5)
        assert len(rows) == 5
        assert rows[-1]["DATE"] == "26-11-2025"
        assert resolve_daily_summary(rows, "26-11-2025").found
