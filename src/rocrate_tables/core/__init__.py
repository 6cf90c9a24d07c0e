"""Shared core utilities for crate table exports."""

from .config import Settings, TableConfig, TableOptions, get_settings
from .exceptions import (
    ConfigurationError,
    CrateNotFoundError,
    CrateParseError,
    CrateTablesError,
    MetadataNotFoundError,
)
from .logging import configure_logging
from .models import Column, FlatTable, TableAccumulator, ValueCell

__all__ = [
    "Settings",
    "TableConfig",
    "TableOptions",
    "Column",
    "FlatTable",
    "TableAccumulator",
    "ValueCell",
    "CrateTablesError",
    "CrateNotFoundError",
    "MetadataNotFoundError",
    "CrateParseError",
    "ConfigurationError",
    "get_settings",
    "configure_logging",
]
