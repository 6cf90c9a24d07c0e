"""Application configuration primitives."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_TABLE_CONFIG_PATH = PACKAGE_ROOT / "data" / "default_config.json"
DEFAULT_METADATA_FILENAME = "ro-crate-metadata.json"
DEFAULT_MAX_VALUES = 5


class Settings(BaseSettings):
    """Central configuration for crate table exports."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    max_values: int = DEFAULT_MAX_VALUES
    output_dir: Path = Path(".")
    metadata_filename: str = DEFAULT_METADATA_FILENAME
    default_config_path: Path = DEFAULT_TABLE_CONFIG_PATH

    model_config = SettingsConfigDict(env_prefix="CRATE_TABLES_", env_file=(), extra="ignore")


class TableOptions(BaseModel):
    """Per-type options controlling how entities become table rows."""

    load_text: str | None = None
    expand_props: frozenset[str] = frozenset()

    model_config = ConfigDict(frozen=True, extra="ignore")


class TableConfig(BaseModel):
    """Mapping of entity type name to table options.

    Accepts both ``{"tables": {...}}`` documents and a bare mapping of
    table names.
    """

    tables: dict[str, TableOptions] = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _unwrap_tables(cls, data: object) -> object:
        if isinstance(data, dict) and "tables" not in data:
            return {"tables": data}
        return data

    def options_for(self, type_name: str) -> TableOptions | None:
        return self.tables.get(type_name)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()
