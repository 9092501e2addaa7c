"""Structural invariant checks for chained hash maps."""

from __future__ import annotations

from typing import Any, List, Tuple

from chhash.contracts.error import InvariantError
from chhash.core.maps import ChainedHashMap


def verify_map(
    m: ChainedHashMap[Any, Any], verbose: bool = False, *, strict: bool = False
) -> Tuple[bool, List[str]]:
    """Check size bookkeeping, bucket placement and per-chain key uniqueness.

    Returns ``(ok, messages)``. With ``strict=True`` a failure raises
    :class:`InvariantError` carrying the first message instead.
    """

    msgs: List[str] = []
    total = 0
    for idx, chain in enumerate(m._buckets):  # pylint: disable=protected-access
        seen: List[Any] = []
        for entry in chain:
            total += 1
            home = m._index(entry.key)  # pylint: disable=protected-access
            if home != idx:
                msgs.append(f"Misplaced key {entry.key!r}: in bucket {idx}, hashes to {home}")
            if entry.key in seen:
                msgs.append(f"Duplicate key {entry.key!r} in bucket {idx}")
            seen.append(entry.key)
    if total != len(m):
        msgs.append(f"Size mismatch: size={len(m)}, summed={total}")
    ok = not msgs
    if strict and not ok:
        raise InvariantError(msgs[0], hint=f"{len(msgs)} invariant violation(s) found")
    if verbose:
        msgs.append(
            f"Buckets={m.bucket_count}, Size={len(m)}, "
            f"LF={m.load_factor():.3f}, MaxChainLen={m.max_chain_len()}"
        )
    return ok, msgs


__all__ = ["verify_map"]
