from __future__ import annotations

import json
from pathlib import Path

import pytest

from rocrate_tables.core.config import Settings, TableConfig
from rocrate_tables.core.exceptions import (
    ConfigurationError,
    CrateNotFoundError,
    CrateParseError,
    MetadataNotFoundError,
)
from rocrate_tables.crate.graph import CrateGraph, Reference
from rocrate_tables.crate.loader import load_crate, load_table_config

METADATA = {
    "@context": "https://w3id.org/ro/crate/1.1/context",
    "@graph": [
        {"@id": "ro-crate-metadata.json", "@type": "CreativeWork", "about": {"@id": "./"}},
        {"@id": "./", "@type": "Dataset", "name": "Example crate", "hasPart": [{"@id": "a.txt"}]},
        {"@id": "a.txt", "@type": "File", "name": "A"},
    ],
}


def _write_crate(root: Path, metadata=METADATA) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "ro-crate-metadata.json").write_text(json.dumps(metadata), encoding="utf-8")
    return root


def test_load_crate_builds_graph(tmp_path: Path) -> None:
    graph = load_crate(_write_crate(tmp_path / "crate"), settings=Settings())

    assert len(graph) == 3
    root = graph.get_entity("./")
    assert root is not None
    assert root.types == ("Dataset",)
    assert root["name"] == ("Example crate",)
    (part,) = root["hasPart"]
    assert isinstance(part, Reference)
    assert part.target is graph.get_entity("a.txt")
    assert part.label == "A"
    assert graph.get_entity("nothing") is None


def test_graph_accepts_single_entity_document() -> None:
    graph = CrateGraph.from_metadata({"@id": "#only", "@type": "Thing", "name": "Only"})

    assert [entity.id for entity in graph.entities()] == ["#only"]


def test_graph_rejects_non_object_nodes() -> None:
    with pytest.raises(ValueError):
        CrateGraph.from_metadata({"@graph": ["not an entity"]})


def test_missing_directory_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(CrateNotFoundError):
        load_crate(tmp_path / "absent", settings=Settings())


def test_file_instead_of_directory_is_fatal(tmp_path: Path) -> None:
    target = tmp_path / "file.json"
    target.write_text("{}", encoding="utf-8")

    with pytest.raises(CrateNotFoundError):
        load_crate(target, settings=Settings())


def test_missing_metadata_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(MetadataNotFoundError):
        load_crate(tmp_path, settings=Settings())


def test_invalid_metadata_is_fatal(tmp_path: Path) -> None:
    (tmp_path / "ro-crate-metadata.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(CrateParseError):
        load_crate(tmp_path, settings=Settings())


def test_metadata_filename_comes_from_settings(tmp_path: Path) -> None:
    (tmp_path / "custom.json").write_text(json.dumps(METADATA), encoding="utf-8")

    graph = load_crate(tmp_path, settings=Settings(metadata_filename="custom.json"))

    assert len(graph) == 3


def test_load_table_config_accepts_wrapped_and_bare_documents(tmp_path: Path) -> None:
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(
        json.dumps({"tables": {"Person": {"expand_props": ["knows"], "load_text": "bio"}}}),
        encoding="utf-8",
    )
    bare = tmp_path / "bare.json"
    bare.write_text(json.dumps({"Person": {}, "Place": {"unknown": 1}}), encoding="utf-8")

    wrapped_config = load_table_config(wrapped, settings=Settings())
    bare_config = load_table_config(bare, settings=Settings())

    options = wrapped_config.options_for("Person")
    assert options is not None
    assert options.expand_props == frozenset({"knows"})
    assert options.load_text == "bio"
    assert list(bare_config.tables) == ["Person", "Place"]
    assert bare_config.options_for("Dataset") is None


def test_default_config_is_bundled() -> None:
    config = load_table_config(settings=Settings())

    assert isinstance(config, TableConfig)
    assert "Person" in config.tables


@pytest.mark.parametrize(
    "content",
    ["{broken", "[1, 2]", json.dumps({"tables": {"Person": {"expand_props": 3}}})],
)
def test_bad_config_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_table_config(path, settings=Settings())


def test_missing_config_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_table_config(tmp_path / "missing.json", settings=Settings())
