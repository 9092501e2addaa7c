"""Hashing capability for chained hash map keys.

Keys are not hashed with Python's builtin ``hash()``. Every key type supplies
its own integer hash code through :class:`Hashable`, which keeps bucket
placement stable across interpreter runs (no ``PYTHONHASHSEED`` dependence).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from chhash.contracts.error import InvalidConfigurationError

SUPPORTED_HASH_BITS: tuple[int, ...] = (32, 64)
DEFAULT_HASH_BITS: int = 64

_ELF_HIGH_NIBBLE: int = 0xF0000000


@runtime_checkable
class Hashable(Protocol):
    """Anything that can map itself to a deterministic integer hash code.

    Implementations must be pure: equal keys (``==``) must return equal codes.
    Codes may be negative.
    """

    def hash_code(self) -> int: ...


def _check_bits(bits: int) -> None:
    if isinstance(bits, bool) or not isinstance(bits, int) or bits not in SUPPORTED_HASH_BITS:
        raise InvalidConfigurationError(
            f"hash width must be one of {SUPPORTED_HASH_BITS}, got {bits!r}",
            hint="use 64 to match native word-sized hashing",
        )


def _to_signed(value: int, bits: int) -> int:
    if value & (1 << (bits - 1)):
        return value - (1 << bits)
    return value


def elf_hash(data: bytes, *, bits: int = DEFAULT_HASH_BITS) -> int:
    """Classic ELF rolling hash over ``data`` using ``bits``-wide wraparound.

    Each byte shifts the accumulator left by one nibble before being added.
    Whenever the nibble at bits 28..31 is set it is folded down into bits
    4..7 and then cleared. With ``bits=32`` the result always fits in 28 bits.
    With ``bits=64`` carries past bit 31 are never cleared, so long inputs can
    wrap into negative codes just like a signed machine word.
    """

    _check_bits(bits)
    mask = (1 << bits) - 1
    val = 0
    for byte in data:
        val = ((val << 4) + byte) & mask
        tmp = val & _ELF_HIGH_NIBBLE
        if tmp:
            val ^= tmp >> 24
            val ^= tmp
    return _to_signed(val, bits)


@dataclass(frozen=True, slots=True)
class StringKey:
    """String key hashed with :func:`elf_hash` over its UTF-8 bytes."""

    value: str
    bits: int = DEFAULT_HASH_BITS

    def __post_init__(self) -> None:
        _check_bits(self.bits)

    def hash_code(self) -> int:
        return elf_hash(self.value.encode("utf-8"), bits=self.bits)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class IntKey:
    """Integer key whose hash code is the integer itself."""

    value: int

    def hash_code(self) -> int:
        return self.value


def string_key(text: str, *, bits: int = DEFAULT_HASH_BITS) -> StringKey:
    return StringKey(text, bits)


__all__ = [
    "DEFAULT_HASH_BITS",
    "SUPPORTED_HASH_BITS",
    "Hashable",
    "IntKey",
    "StringKey",
    "elf_hash",
    "string_key",
]
