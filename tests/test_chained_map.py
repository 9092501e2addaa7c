from __future__ import annotations

from typing import Any

import pytest

from chhash.contracts.error import BadInputError, InvalidConfigurationError
from chhash.core.hashing import IntKey, StringKey
from chhash.core.maps import ChainedHashMap, new_map
from tests.util.keys import BrokenKey, CollidingKey, FloatHashKey, RawHashKey


def test_set_then_get_returns_value(small_map: ChainedHashMap[Any, Any]) -> None:
    small_map.set(StringKey("alpha"), 1)
    assert small_map.get(StringKey("alpha")) == (1, True)
    assert len(small_map) == 1


def test_get_missing_key_reports_absence(small_map: ChainedHashMap[Any, Any]) -> None:
    small_map.set(StringKey("present"), "x")
    assert small_map.get(StringKey("absent")) == (None, False)
    assert StringKey("absent") not in small_map


def test_stored_none_is_distinguishable_from_absence(small_map: ChainedHashMap[Any, Any]) -> None:
    small_map.set(IntKey(3), None)
    assert small_map.get(IntKey(3)) == (None, True)


def test_colliding_string_keys_resolve_by_chain_scan() -> None:
    m = new_map(4)
    a, e = StringKey("a"), StringKey("e")
    assert a.hash_code() % 4 == e.hash_code() % 4 == 1

    m.set(a, 1)
    m.set(e, 2)

    assert m.get(a) == (1, True)
    assert m.get(e) == (2, True)
    assert m.chain_lengths() == [0, 2, 0, 0]


def test_single_bucket_holds_fifty_keys() -> None:
    m: ChainedHashMap[IntKey, int] = ChainedHashMap(1)
    for i in range(50):
        m.set(IntKey(i), i * 10)

    assert len(m) == 50
    assert m.max_chain_len() == 50
    for i in range(50):
        assert m.get(IntKey(i)) == (i * 10, True)


def test_repeated_set_updates_in_place(small_map: ChainedHashMap[Any, Any]) -> None:
    key = StringKey("dup")
    small_map.set(key, "v1")
    small_map.set(StringKey("dup"), "v2")

    assert small_map.get(key) == ("v2", True)
    assert len(small_map) == 1
    assert sum(small_map.chain_lengths()) == 1
    assert list(small_map.items()) == [(key, "v2")]


def test_negative_hash_codes_land_in_range() -> None:
    m = new_map(4)
    key = RawHashKey("neg", -7)
    m.set(key, "neg")

    assert m.get(key) == ("neg", True)
    assert m.chain_lengths() == [0, 1, 0, 0]


def test_delete_removes_entry(small_map: ChainedHashMap[Any, Any]) -> None:
    small_map.set(IntKey(1), "one")
    small_map.set(IntKey(2), "two")

    assert small_map.delete(IntKey(1)) is True
    assert small_map.get(IntKey(1)) == (None, False)
    assert small_map.get(IntKey(2)) == ("two", True)
    assert len(small_map) == 1


def test_delete_missing_key_is_noop(small_map: ChainedHashMap[Any, Any]) -> None:
    small_map.set(IntKey(1), "one")
    assert small_map.delete(IntKey(5)) is False
    assert len(small_map) == 1


def test_delete_within_collision_chain_keeps_neighbours() -> None:
    m = new_map(2)
    keys = [CollidingKey(i) for i in range(4)]
    for idx, key in enumerate(keys):
        m.set(key, idx)

    assert m.delete(keys[1]) is True
    assert m.delete(keys[3]) is True
    # Appending after removing the tail must still link correctly.
    m.set(CollidingKey(9), 9)

    assert [k for k, _ in m.items()] == [keys[0], keys[2], CollidingKey(9)]
    assert m.get(keys[2]) == (2, True)
    assert len(m) == 3


def test_reinsert_after_delete(small_map: ChainedHashMap[Any, Any]) -> None:
    small_map.set(StringKey("k"), 1)
    small_map.delete(StringKey("k"))
    small_map.set(StringKey("k"), 2)
    assert small_map.get(StringKey("k")) == (2, True)
    assert len(small_map) == 1


@pytest.mark.parametrize("bad", [0, -3])
def test_non_positive_bucket_count_rejected(bad: int) -> None:
    with pytest.raises(InvalidConfigurationError):
        ChainedHashMap(bad)


@pytest.mark.parametrize("bad", [True, 2.5, "8"])
def test_non_integer_bucket_count_rejected(bad: Any) -> None:
    with pytest.raises(BadInputError):
        ChainedHashMap(bad)


def test_hash_failures_propagate(small_map: ChainedHashMap[Any, Any]) -> None:
    with pytest.raises(RuntimeError, match="hash exploded"):
        small_map.set(BrokenKey(), 1)
    with pytest.raises(RuntimeError):
        small_map.get(BrokenKey())
    assert len(small_map) == 0


def test_non_integer_hash_code_rejected(small_map: ChainedHashMap[Any, Any]) -> None:
    with pytest.raises(TypeError):
        small_map.set(FloatHashKey(), 1)


def test_load_factor_is_unbounded() -> None:
    m = new_map(2)
    for i in range(10):
        m.set(IntKey(i), i)
    assert m.bucket_count == 2
    assert m.load_factor() == pytest.approx(5.0)


def test_empty_map_stats() -> None:
    m = new_map(3)
    assert len(m) == 0
    assert m.max_chain_len() == 0
    assert m.load_factor() == 0.0
    assert list(m.items()) == []
    assert "bucket_count=3" in repr(m)
