from .chain import Chain
from .hashing import (
    DEFAULT_HASH_BITS,
    SUPPORTED_HASH_BITS,
    Hashable,
    IntKey,
    StringKey,
    elf_hash,
    string_key,
)
from .maps import ChainedHashMap, new_map

__all__ = [
    "Chain",
    "ChainedHashMap",
    "Hashable",
    "IntKey",
    "StringKey",
    "elf_hash",
    "new_map",
    "string_key",
    "DEFAULT_HASH_BITS",
    "SUPPORTED_HASH_BITS",
]
