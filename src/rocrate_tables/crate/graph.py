"""In-memory view of an RO-Crate JSON-LD graph.

Every property is exposed as a tuple of values. Values that point at another
entity (``{"@id": ...}``) become :class:`Reference` objects, which resolve
their target lazily through the owning :class:`CrateGraph`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

ID_KEY = "@id"
TYPE_KEY = "@type"
NAME_KEY = "name"
LABEL_KEY = "rdfs:label"


@dataclass(frozen=True)
class Reference:
    id: str
    graph: CrateGraph | None = field(default=None, repr=False, compare=False)

    @property
    def target(self) -> Entity | None:
        if self.graph is None:
            return None
        return self.graph.get_entity(self.id)

    @property
    def label(self) -> str:
        """Display text: the target's names, else its rdfs:label, else the id."""
        target = self.target
        if target is not None:
            for key in (NAME_KEY, LABEL_KEY):
                text = ",".join(_label_part(value) for value in target.get(key, ()))
                if text:
                    return text
        return self.id


def _label_part(value: Any) -> str:
    if isinstance(value, Reference):
        return value.id
    if value is None:
        return ""
    return str(value)


class Entity(Mapping[str, tuple[Any, ...]]):
    """Read-only property bag with insertion-ordered keys."""

    __slots__ = ("_properties",)

    def __init__(self, properties: Mapping[str, tuple[Any, ...]]) -> None:
        self._properties = dict(properties)

    def __getitem__(self, key: str) -> tuple[Any, ...]:
        return self._properties[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        return f"Entity(id={self.id!r}, types={self.types!r})"

    @property
    def id(self) -> str | None:
        values = self._properties.get(ID_KEY) or ()
        return str(values[0]) if values else None

    @property
    def types(self) -> tuple[str, ...]:
        return tuple(str(value) for value in self._properties.get(TYPE_KEY, ()))


class CrateGraph:
    """Entity iteration and id lookup over a flattened JSON-LD document."""

    def __init__(self, nodes: list[Mapping[str, Any]] | None = None) -> None:
        self._entities: list[Entity] = []
        self._index: dict[str, Entity] = {}
        for node in nodes or []:
            self.add(node)

    @classmethod
    def from_metadata(cls, document: Any) -> CrateGraph:
        if isinstance(document, dict):
            nodes = document.get("@graph")
            if nodes is None:
                nodes = [document]
        else:
            nodes = document
        if not isinstance(nodes, list) or not all(isinstance(node, dict) for node in nodes):
            raise ValueError("Expected a JSON-LD document with an `@graph` array of objects")
        return cls(nodes)

    def add(self, node: Mapping[str, Any]) -> Entity:
        properties: dict[str, tuple[Any, ...]] = {}
        for key, raw in node.items():
            if key == ID_KEY:
                properties[key] = (str(raw),)
            elif key == TYPE_KEY:
                properties[key] = tuple(str(value) for value in _as_tuple(raw))
            else:
                properties[key] = tuple(self._normalize_value(value) for value in _as_tuple(raw))
        entity = Entity(properties)
        self._entities.append(entity)
        if entity.id is not None:
            self._index[entity.id] = entity
        return entity

    def entities(self) -> Iterator[Entity]:
        return iter(self._entities)

    def get_entity(self, entity_id: str) -> Entity | None:
        return self._index.get(entity_id)

    def __len__(self) -> int:
        return len(self._entities)

    def _normalize_value(self, value: Any) -> Any:
        if isinstance(value, dict) and value.get(ID_KEY):
            return Reference(str(value[ID_KEY]), self)
        return value


def _as_tuple(raw: Any) -> tuple[Any, ...]:
    if isinstance(raw, list):
        return tuple(raw)
    if isinstance(raw, tuple):
        return raw
    return (raw,)
