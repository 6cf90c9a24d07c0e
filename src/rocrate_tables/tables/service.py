"""Export every configured table of a crate to CSV."""

from __future__ import annotations

from pathlib import Path

from rocrate_tables.core.config import Settings, get_settings
from rocrate_tables.core.logging import get_logger
from rocrate_tables.crate.loader import load_crate, load_table_config

from .builder import TableBuilder
from .flatten import flatten_table
from .writer import csv_filename, write_csv

LOGGER = get_logger(__name__)


def export_crate_tables(
    crate_path: Path | str,
    config_path: Path | str | None = None,
    output_dir: Path | str | None = None,
    *,
    settings: Settings | None = None,
) -> list[Path]:
    """Load the crate and config, then write one CSV per non-empty table.

    Crate and configuration errors are raised before any file is written.
    """
    resolved_settings = settings or get_settings()
    graph = load_crate(crate_path, settings=resolved_settings)
    config = load_table_config(config_path, settings=resolved_settings)
    target_dir = Path(output_dir) if output_dir is not None else resolved_settings.output_dir

    tables = TableBuilder(config, crate_path).build(graph)
    written: list[Path] = []
    for name, table in tables.items():
        if not table.rows:
            LOGGER.info("tables.empty", table=name)
            continue
        flat = flatten_table(table, resolved_settings.max_values)
        written.append(write_csv(flat, target_dir / csv_filename(crate_path, name)))
    return written
