"""
Loader for an exported copy of the production spreadsheet (.xlsx).

The Google Sheet can be downloaded as a workbook and served from disk when
the JSON endpoint is unavailable. Rows come back in the same shape the
endpoint returns: dicts of header -> text, in sheet order.
"""

import logging
from pathlib import Path
from typing import Any

import openpyxl

from ..config import ID_COLUMN, SUMMARY_DATE_COLUMN, WORK_COLUMN
from ..errors import SheetFetchError
from .utils import cell_to_text, find_header_row

logger = logging.getLogger(__name__)

# Header cells that identify either table; one match is enough.
DEFAULT_SIGNATURE = {ID_COLUMN, WORK_COLUMN, SUMMARY_DATE_COLUMN}


def load_workbook_rows(
    path: str | Path,
    sheet_name: str | None = None,
    signature: set[str] | None = None,
) -> list[dict[str, Any]]:
    """Load one sheet of an exported workbook as a list of row dicts.

    Assumptions
    -----------
    - The header row is within the first 20 rows and contains at least one
      of the `signature` labels. If none is found, row 1 is the header.
    - Columns with a blank header cell are dropped.
    - Fully empty rows are skipped.
    - Date cells are rendered as DD-MM-YYYY to match the sheet display.

    Raises
    ------
    SheetFetchError
        When the file is missing or cannot be opened as a workbook.
    """
    path = Path(path)
    if not path.exists():
        raise SheetFetchError(str(path), "file not found")

    try:
        wb = openpyxl.load_workbook(path, data_only=True, read_only=False)
    except Exception as e:
        logger.exception("Failed to open workbook: %s", path)
        raise SheetFetchError(str(path), f"cannot open workbook: {e}") from e

    try:
        if sheet_name is not None and sheet_name in wb.sheetnames:
            ws = wb[sheet_name]
        else:
            if sheet_name is not None:
                logger.warning("Sheet '%s' not found, using '%s'", sheet_name, wb.sheetnames[0])
            ws = wb[wb.sheetnames[0]]

        header_row = find_header_row(ws, signature or DEFAULT_SIGNATURE)
        if header_row is None:
            logger.warning("No known header found in %s, assuming row 1", path)
            header_row = 1

        headers: list[tuple[int, str]] = []
        for col_idx, cell in enumerate(ws[header_row]):
            label = cell_to_text(cell.value)
            if label:
                headers.append((col_idx, label))

        rows: list[dict[str, Any]] = []
        for values in ws.iter_rows(min_row=header_row + 1, values_only=True):
            record = {}
            for col_idx, label in headers:
                raw = values[col_idx] if col_idx < len(values) else None
                record[label] = cell_to_text(raw)
            if any(record.values()):
                rows.append(record)
    finally:
        wb.close()

    logger.info("Loaded %d rows from %s", len(rows), path)
    return rows
