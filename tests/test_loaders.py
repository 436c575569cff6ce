from __future__ import annotations

from datetime import datetime

import openpyxl
import pytest
import requests

from coach_dashboard.errors import SheetFetchError
from coach_dashboard.loaders import fetch_rows, load_source_rows, load_workbook_rows
from coach_dashboard.loaders.utils import cell_to_text, parse_int, parse_percent, safe_float
from tests.conftest import make_response

URL = "https://opensheet.example/sheet/Sheet1"


class TestFetchRows:
    def test_returns_rows(self, mock_session, bus_rows) -> None:
        mock_session.get.return_value = make_response(json_data=bus_rows)
        assert fetch_rows(URL, session=mock_session) == bus_rows
        args, kwargs = mock_session.get.call_args
        assert args[0] == URL
        assert kwargs["timeout"] > 0

    def test_drops_non_object_rows(self, mock_session) -> None:
        mock_session.get.return_value = make_response(json_data=[{"a": "1"}, "x", 3])
        assert fetch_rows(URL, session=mock_session) == [{"a": "1"}]

    def test_http_error(self, mock_session) -> None:
        mock_session.get.return_value = make_response(status_code=503)
        with pytest.raises(SheetFetchError):
            fetch_rows(URL, session=mock_session)

    def test_network_error(self, mock_session) -> None:
        mock_session.get.side_effect = requests.ConnectionError("unreachable")
        with pytest.raises(SheetFetchError) as exc:
            fetch_rows(URL, session=mock_session)
        assert exc.value.source == URL

    def test_invalid_json(self, mock_session) -> None:
        mock_session.get.return_value = make_response(json_error=True)
        with pytest.raises(SheetFetchError):
            fetch_rows(URL, session=mock_session)

    def test_non_array_body(self, mock_session) -> None:
        mock_session.get.return_value = make_response(json_data={"error": "sheet not found"})
        with pytest.raises(SheetFetchError):
            fetch_rows(URL, session=mock_session)

    def test_empty_url(self) -> None:
        with pytest.raises(SheetFetchError):
            fetch_rows("")


def write_workbook(path, rows, title="Sheet1", preamble=0):
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title
    for _ in range(preamble):
        ws.append(["Gobind Coach production tracker"])
    for row in rows:
        ws.append(row)
    wb.save(path)
    return path


class TestLoadWorkbookRows:
    def test_reads_rows_as_text(self, tmp_path) -> None:
        path = write_workbook(tmp_path / "export.xlsx", [
            ["S.NO", "Chassi Name", "TOTAL BUS WORK", "WORKING"],
            [1, "B1", "40%", "no"],
            [2, "B2", "90%", "yes"],
        ])
        rows = load_workbook_rows(path)
        assert rows == [
            {"S.NO": "1", "Chassi Name": "B1", "TOTAL BUS WORK": "40%", "WORKING": "no"},
            {"S.NO": "2", "Chassi Name": "B2", "TOTAL BUS WORK": "90%", "WORKING": "yes"},
        ]

    def test_finds_header_below_title_rows(self, tmp_path) -> None:
        path = write_workbook(tmp_path / "export.xlsx", [
            ["Chassi Name", "TOTAL BUS WORK"],
            ["B1", "10%"],
        ], preamble=2)
        assert load_workbook_rows(path) == [{"Chassi Name": "B1", "TOTAL BUS WORK": "10%"}]

    def test_date_cells_use_sheet_format(self, tmp_path) -> None:
        path = write_workbook(tmp_path / "summary.xlsx", [
            ["DATE", "MANPOWER PRESENT"],
            [datetime(2025, 11, 26), 132],
        ])
        assert load_workbook_rows(path) == [{"DATE": "26-11-2025", "MANPOWER PRESENT": "132"}]

    def test_skips_empty_rows(self, tmp_path) -> None:
        path = write_workbook(tmp_path / "export.xlsx", [
            ["Chassi Name", "TOTAL BUS WORK"],
            [None, None],
            ["B1", "10%"],
        ])
        assert len(load_workbook_rows(path)) == 1

    def test_named_sheet(self, tmp_path) -> None:
        path = tmp_path / "export.xlsx"
        wb = openpyxl.Workbook()
        wb.active.append(["Chassi Name"])
        ws = wb.create_sheet("Summary")
        ws.append(["DATE", "MANPOWER PRESENT"])
        ws.append(["26-11-2025", "9"])
        wb.save(path)
        assert load_workbook_rows(path, sheet_name="Summary") == [{"DATE": "26-11-2025", "MANPOWER PRESENT": "9"}]

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(SheetFetchError):
            load_workbook_rows(tmp_path / "nope.xlsx")

    def test_not_a_workbook(self, tmp_path) -> None:
        path = tmp_path / "broken.xlsx"
        path.write_text("plain text", encoding="utf-8")
        with pytest.raises(SheetFetchError):
            load_workbook_rows(path)


class TestLoadSourceRows:
    def test_http_goes_to_fetch(self, mock_session, bus_rows) -> None:
        mock_session.get.return_value = make_response(json_data=bus_rows)
        assert load_source_rows(URL, session=mock_session) == bus_rows

    def test_xlsx_with_sheet_name(self, tmp_path) -> None:
        path = tmp_path / "export.xlsx"
        wb = openpyxl.Workbook()
        wb.active.title = "Buses"
        wb.active.append(["Chassi Name", "TOTAL BUS WORK"])
        wb.active.append(["B9", "75%"])
        wb.save(path)
        assert load_source_rows(f"{path}#Buses") == [{"Chassi Name": "B9", "TOTAL BUS WORK": "75%"}]

    def test_demo_sources(self) -> None:
        assert load_source_rows("demo://bus")
        assert "DATE" in load_source_rows("demo://summary")[0]

    @pytest.mark.parametrize("source", ["", "ftp://host/sheet", "sheet.csv"])
    def test_unsupported(self, source) -> None:
        with pytest.raises(SheetFetchError):
            load_source_rows(source)


class TestCellHelpers:
    def test_safe_float(self) -> None:
        assert safe_float("78%") == 78.0
        assert safe_float("=SUM(A1:A3)") is None
        assert safe_float(float("nan")) is None
        assert safe_float(False) is None

    def test_parse_percent_never_raises(self) -> None:
        for raw in ("", "x", None, object(), "1e999", "--5%"):
            assert parse_percent(raw) == 0.0

    def test_parse_int(self) -> None:
        assert parse_int("12") == 12
        assert parse_int("12.0") == 12
        assert parse_int("") == 0
        assert parse_int("x", default=-1) == -1

    def test_cell_to_text(self) -> None:
        assert cell_to_text(None) == ""
        assert cell_to_text(3.0) == "3"
        assert cell_to_text(2.5) == "2.5"
        assert cell_to_text(" B1 ") == "B1"
        assert cell_to_text(datetime(2025, 1, 5)) == "05-01-2025"
