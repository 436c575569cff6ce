"""Data ingestion loaders for the production and manpower sheets."""

from .sheets import fetch_rows
from .sources import load_source_rows
from .workbook import load_workbook_rows

__all__ = [
    "fetch_rows",
    "load_source_rows",
    "load_workbook_rows",
]
