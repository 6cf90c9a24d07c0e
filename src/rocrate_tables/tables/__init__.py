"""Crate-to-table building, flattening and CSV export."""

from .builder import TableBuilder, build_tables
from .flatten import build_columns, clean_cell, flatten_row, flatten_table
from .service import export_crate_tables
from .writer import csv_filename, write_csv

__all__ = [
    "TableBuilder",
    "build_tables",
    "build_columns",
    "clean_cell",
    "flatten_row",
    "flatten_table",
    "export_crate_tables",
    "csv_filename",
    "write_csv",
]
