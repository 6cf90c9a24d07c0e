"""RO-Crate graph access and loading."""

from .graph import CrateGraph, Entity, Reference
from .loader import load_crate, load_table_config

__all__ = [
    "CrateGraph",
    "Entity",
    "Reference",
    "load_crate",
    "load_table_config",
]
