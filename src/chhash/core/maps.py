from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterator, List, Optional, Tuple, TypeVar

from chhash.contracts.error import InvalidConfigurationError
from chhash.core.chain import Chain
from chhash.core.hashing import Hashable

logger = logging.getLogger("chhash")

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass
class _Entry(Generic[K, V]):
    key: K
    value: V


class ChainedHashMap(Generic[K, V]):
    """Fixed-size hash map resolving collisions with per-bucket chains.

    Keys supply their own hash code via ``hash_code()``. The bucket count never
    changes, so the load factor grows without bound as entries are added.
    """

    __slots__ = ("_bucket_count", "_buckets", "_size")

    def __init__(self, bucket_count: int) -> None:
        if isinstance(bucket_count, bool) or not isinstance(bucket_count, int):
            raise InvalidConfigurationError(
                f"bucket_count must be an integer, got {type(bucket_count).__name__}"
            )
        if bucket_count <= 0:
            raise InvalidConfigurationError(
                f"bucket_count must be > 0, got {bucket_count}",
                hint="a chained map needs at least one bucket",
            )
        self._bucket_count = bucket_count
        self._buckets: List[Chain[_Entry[K, V]]] = [Chain() for _ in range(bucket_count)]
        self._size = 0
        logger.debug("ChainedHashMap created with %d buckets", bucket_count)

    @property
    def bucket_count(self) -> int:
        return self._bucket_count

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return self._lookup(key) is not None  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"ChainedHashMap(bucket_count={self._bucket_count}, size={self._size})"

    def _slot(self, key: K) -> Tuple[int, int]:
        code = key.hash_code()
        if isinstance(code, bool) or not isinstance(code, int):
            raise TypeError(
                f"{type(key).__name__}.hash_code() returned {type(code).__name__}, expected int"
            )
        # Floored modulo keeps negative codes inside [0, bucket_count).
        return code, code % self._bucket_count

    def _index(self, key: K) -> int:
        return self._slot(key)[1]

    def _lookup(self, key: K) -> Optional[_Entry[K, V]]:
        found: List[_Entry[K, V]] = []

        def match(entry: _Entry[K, V], _index: int) -> bool:
            if entry.key == key:
                found.append(entry)
                return True
            return False

        self._buckets[self._index(key)].each(match)
        return found[0] if found else None

    def get(self, key: K) -> Tuple[Optional[V], bool]:
        entry = self._lookup(key)
        if entry is None:
            return None, False
        return entry.value, True

    def set(self, key: K, value: V) -> None:
        entry = self._lookup(key)
        if entry is not None:
            entry.value = value
            return
        self._buckets[self._index(key)].append(_Entry(key, value))
        self._size += 1

    def delete(self, key: K) -> bool:
        removed = self._buckets[self._index(key)].remove_first(lambda entry: entry.key == key)
        if removed is None:
            return False
        self._size -= 1
        return True

    def items(self) -> Iterator[Tuple[K, V]]:
        for chain in self._buckets:
            for entry in chain:
                yield entry.key, entry.value

    def load_factor(self) -> float:
        return self._size / self._bucket_count

    def chain_lengths(self) -> List[int]:
        return [len(chain) for chain in self._buckets]

    def max_chain_len(self) -> int:
        return max(self.chain_lengths(), default=0)


def new_map(bucket_count: int) -> ChainedHashMap[Any, Any]:
    """Create an empty map with ``bucket_count`` chains."""

    return ChainedHashMap(bucket_count)


__all__ = ["ChainedHashMap", "new_map"]
