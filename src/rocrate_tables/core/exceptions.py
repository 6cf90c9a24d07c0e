"""Custom exception hierarchy for crate table exports."""

from __future__ import annotations


class CrateTablesError(Exception):
    """Base error for crate table exports."""


class CrateNotFoundError(CrateTablesError):
    """Raised when the crate path is missing or is not a directory."""


class MetadataNotFoundError(CrateTablesError):
    """Raised when the crate directory has no metadata descriptor."""


class CrateParseError(CrateTablesError):
    """Raised when the metadata descriptor cannot be parsed."""


class ConfigurationError(CrateTablesError):
    """Raised when the table configuration is unreadable or malformed."""
