"""CSV output for flattened tables."""

from __future__ import annotations

import csv
from pathlib import Path

from rocrate_tables.core.logging import get_logger
from rocrate_tables.core.models import FlatTable

LOGGER = get_logger(__name__)


def csv_filename(crate_path: Path | str, table_name: str) -> str:
    crate_name = Path(crate_path).resolve().name
    return f"{crate_name}_{table_name}.csv"


def write_csv(table: FlatTable, path: Path) -> Path:
    """Write the header row followed by the table rows."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(table.headers)
        writer.writerows(table.rows)
    LOGGER.info("tables.csv_written", table=table.name, path=str(path), rows=len(table.rows))
    return path
