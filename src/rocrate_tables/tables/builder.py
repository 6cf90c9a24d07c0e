"""First pass: group crate entities into per-type tables of variable-width rows."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Sequence
from urllib.parse import unquote

from rocrate_tables.core.config import TableConfig, TableOptions
from rocrate_tables.core.logging import get_logger
from rocrate_tables.core.models import TableAccumulator, ValueCell
from rocrate_tables.crate.graph import ID_KEY, TYPE_KEY, CrateGraph, Entity, Reference

LOGGER = get_logger(__name__)


class _TableState:
    """Mutable accumulator used while the build pass is running."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.rows: list[dict[str, list[ValueCell]]] = []
        self.keys: dict[str, int] = {}
        self.refs: set[str] = set()

    def track(self, prop: str, count: int) -> None:
        self.keys[prop] = max(count, self.keys.get(prop, 0))

    def freeze(self) -> TableAccumulator:
        rows = tuple(
            MappingProxyType({prop: tuple(cells) for prop, cells in row.items()})
            for row in self.rows
        )
        return TableAccumulator(
            name=self.name,
            rows=rows,
            keys=MappingProxyType(dict(self.keys)),
            refs=frozenset(self.refs),
        )


class TableBuilder:
    """Collect one row per (entity, configured type) pair."""

    def __init__(self, config: TableConfig, crate_root: Path | str) -> None:
        self._config = config
        self._crate_root = Path(crate_root)

    def build(self, graph: CrateGraph) -> dict[str, TableAccumulator]:
        states = {name: _TableState(name) for name in self._config.tables}
        for entity in graph.entities():
            for type_name in entity.types:
                options = self._config.options_for(type_name)
                if options is None:
                    continue
                state = states[type_name]
                state.rows.append(self._build_row(entity, options, state, graph))
        for state in states.values():
            LOGGER.debug(
                "tables.built",
                table=state.name,
                rows=len(state.rows),
                columns=len(state.keys),
            )
        return {name: state.freeze() for name, state in states.items()}

    def _build_row(
        self,
        entity: Entity,
        options: TableOptions,
        state: _TableState,
        graph: CrateGraph,
    ) -> dict[str, list[ValueCell]]:
        row: dict[str, list[ValueCell]] = {}
        for prop, values in entity.items():
            if prop == TYPE_KEY:
                continue
            if prop == options.load_text:
                row[prop] = self._load_text(values)
                state.track(prop, len(values))
                continue

            state.keys.setdefault(prop, 0)
            cells: list[ValueCell] = []
            expanded = 0
            for value in values:
                if isinstance(value, Reference):
                    if prop in options.expand_props:
                        target = graph.get_entity(value.id)
                        if target is not None:
                            _expand_reference(prop, target, row, state)
                            expanded += 1
                            continue
                    cells.append(ValueCell(value.label, value.id))
                    state.refs.add(prop)
                else:
                    cells.append(ValueCell(value))

            if expanded and expanded == len(values):
                continue
            row[prop] = cells
            state.track(prop, len(values))
        return row

    def _load_text(self, values: Sequence[Any]) -> list[ValueCell]:
        if not values:
            return []
        first = values[0]
        raw_path = first.id if isinstance(first, Reference) else first
        if not isinstance(raw_path, str) or not raw_path:
            return []
        path = self._resolve_text_path(raw_path)
        if path is None:
            return []
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            LOGGER.warning("tables.load_text_failed", path=str(path), error=str(exc))
            return []
        return [ValueCell(content)]

    def _resolve_text_path(self, raw_path: str) -> Path | None:
        for candidate in dict.fromkeys((raw_path, unquote(raw_path))):
            path = self._crate_root / candidate.lstrip("/")
            if path.is_file():
                return path
        return None


def _expand_reference(
    prop: str,
    target: Entity,
    row: dict[str, list[ValueCell]],
    state: _TableState,
) -> None:
    """Inline the target's properties as ``{prop}_{subprop}`` columns.

    A later target of the same property replaces the cells of an earlier one.
    """
    state.refs.add(prop)
    for sub_prop, sub_values in target.items():
        if sub_prop == ID_KEY:
            continue
        column = f"{prop}_{sub_prop}"
        cells: list[ValueCell] = []
        for sub_value in sub_values:
            if isinstance(sub_value, Reference):
                cells.append(ValueCell(sub_value.label, sub_value.id))
                state.refs.add(column)
            else:
                cells.append(ValueCell(sub_value))
        row[column] = cells
        state.track(column, len(cells))


def build_tables(
    graph: CrateGraph,
    config: TableConfig,
    crate_root: Path | str,
) -> dict[str, TableAccumulator]:
    """Convenience wrapper around :class:`TableBuilder`."""
    return TableBuilder(config, crate_root).build(graph)
