"""Second pass: turn a variable-width table into fixed CSV columns.

A property of width ``w`` becomes ``w`` repeated ``prop`` columns, or ``w``
repeated ``prop, prop_id`` pairs when any of its values was a reference.
Each row's values are dealt out across those columns in order.
"""

from __future__ import annotations

import json
import re
from typing import Any, Sequence

from rocrate_tables.core.config import DEFAULT_MAX_VALUES
from rocrate_tables.core.logging import get_logger
from rocrate_tables.core.models import Column, FlatTable, Row, TableAccumulator, ValueCell

LOGGER = get_logger(__name__)

_LINE_BREAKS = re.compile(r"[\r\n]+")


def clean_cell(value: Any) -> str:
    """Render a value as a single-line, trimmed CSV cell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, (dict, list, tuple)):
        text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    else:
        text = str(value)
    return _LINE_BREAKS.sub(r"\\n", text).strip()


def build_columns(table: TableAccumulator, max_values: int = DEFAULT_MAX_VALUES) -> list[Column]:
    columns: list[Column] = []
    for prop, width in table.keys.items():
        if width > max_values:
            LOGGER.warning(
                "tables.width_exceeded",
                table=table.name,
                prop=prop,
                width=width,
                max_values=max_values,
            )
            continue
        paired = table.has_refs(prop)
        for _ in range(width):
            columns.append(Column(prop))
            if paired:
                columns.append(Column(prop, is_id=True))
    return columns


def flatten_row(row: Row, columns: Sequence[Column], refs: frozenset[str]) -> list[str]:
    cursors: dict[str, int] = {}
    cells: list[str] = []
    for column in columns:
        position = cursors.get(column.prop, 0)
        cell = _cell_at(row, column.prop, position)
        if column.is_id:
            cells.append(clean_cell(cell.ref_id if cell else None))
            cursors[column.prop] = position + 1
        else:
            cells.append(clean_cell(cell.display if cell else None))
            if column.prop not in refs:
                cursors[column.prop] = position + 1
    return cells


def flatten_table(table: TableAccumulator, max_values: int = DEFAULT_MAX_VALUES) -> FlatTable:
    """Return headers and fixed-width rows for one accumulated table."""
    columns = build_columns(table, max_values)
    rows = [flatten_row(row, columns, table.refs) for row in table.rows]
    return FlatTable(name=table.name, headers=[column.header for column in columns], rows=rows)


def _cell_at(row: Row, prop: str, position: int) -> ValueCell | None:
    values = row.get(prop) or ()
    if position < len(values):
        return values[position]
    return None
