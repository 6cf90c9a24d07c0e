#!/usr/bin/env python
"""Export the entities of an RO-Crate to one CSV file per configured type."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rocrate_tables.core.config import get_settings
from rocrate_tables.core.exceptions import CrateTablesError
from rocrate_tables.core.logging import configure_logging
from rocrate_tables.tables import export_crate_tables


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="crate_to_csv", description=__doc__)
    parser.add_argument(
        "crate_path",
        type=Path,
        help="Path to the crate directory.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=get_settings().default_config_path,
        help="Path to the table config file.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()
    try:
        export_crate_tables(args.crate_path, args.config)
    except CrateTablesError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
