"""Shared data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Sequence


@dataclass(slots=True, frozen=True)
class ValueCell:
    display: Any
    ref_id: str | None = None


Row = Mapping[str, Sequence[ValueCell]]


@dataclass(slots=True, frozen=True)
class TableAccumulator:
    """Rows of one table plus the per-property width and reference metadata.

    ``keys`` maps each property to the widest value sequence seen for it, in
    first-seen order. ``refs`` names the properties that carried at least one
    reference in any row.
    """

    name: str
    rows: tuple[Row, ...] = ()
    keys: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    refs: frozenset[str] = frozenset()

    def has_refs(self, prop: str) -> bool:
        return prop in self.refs


@dataclass(slots=True, frozen=True)
class Column:
    prop: str
    is_id: bool = False

    @property
    def header(self) -> str:
        return f"{self.prop}_id" if self.is_id else self.prop


@dataclass(slots=True)
class FlatTable:
    name: str
    headers: list[str]
    rows: list[list[str]] = field(default_factory=list)
