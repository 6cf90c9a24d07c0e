"""Crate and table configuration loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from rocrate_tables.core.config import Settings, TableConfig, get_settings
from rocrate_tables.core.exceptions import (
    ConfigurationError,
    CrateNotFoundError,
    CrateParseError,
    MetadataNotFoundError,
)
from rocrate_tables.core.logging import get_logger

from .graph import CrateGraph

LOGGER = get_logger(__name__)


def load_crate(crate_path: Path | str, *, settings: Settings | None = None) -> CrateGraph:
    """Validate the crate directory and return its entity graph."""
    resolved_settings = settings or get_settings()
    path = Path(crate_path)
    if not path.is_dir():
        raise CrateNotFoundError(f"{crate_path} is not a valid directory")
    metadata_path = path / resolved_settings.metadata_filename
    if not metadata_path.is_file():
        raise MetadataNotFoundError(f"Metadata file not found in {crate_path}")
    try:
        document = _read_json(metadata_path)
        graph = CrateGraph.from_metadata(document)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValueError) as exc:
        raise CrateParseError(f"Unable to read {metadata_path}: {exc}") from exc
    LOGGER.debug("crate.loaded", path=str(path), entities=len(graph))
    return graph


def load_table_config(
    config_path: Path | str | None = None,
    *,
    settings: Settings | None = None,
) -> TableConfig:
    """Read and validate the type-to-table configuration document."""
    resolved_settings = settings or get_settings()
    path = Path(config_path) if config_path else resolved_settings.default_config_path
    try:
        document = _read_json(path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Unable to read config file {path}: {exc}") from exc
    if not isinstance(document, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    try:
        config = TableConfig.model_validate(document)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid config file {path}: {exc}") from exc
    LOGGER.debug("config.loaded", path=str(path), tables=sorted(config.tables))
    return config


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))
