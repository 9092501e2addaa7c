"""Chained hash map with pluggable key hashing."""

from . import analysis, config, contracts, core, logs, metrics
from .core import ChainedHashMap, Hashable, IntKey, StringKey, new_map, string_key

__all__ = [
    "analysis",
    "config",
    "contracts",
    "core",
    "logs",
    "metrics",
    "ChainedHashMap",
    "Hashable",
    "IntKey",
    "StringKey",
    "new_map",
    "string_key",
]
