"""Tests for the search, retrieval, reduction and conversion methods of `Lazy`."""

from operator import add

import pytest

import lazyiter as li


def _tracked(data: list[int]) -> tuple[li.Lazy[int], list[int]]:
    pulled: list[int] = []
    return li.Lazy(data).for_each(pulled.append), pulled


def test_find_short_circuits() -> None:
    """Test that `find` stops pulling at the first match."""
    it, pulled = _tracked([1, 2, 3, 4])
    assert it.find(lambda x: x > 2) == li.Some(3)
    assert pulled == [1, 2, 3]
    assert it.to_list() == [4]


def test_find_distinguishes_none_elements() -> None:
    """Test that a matching `None` element is not confused with no match."""
    assert li.Lazy.of(1, None).find(lambda x: x is None) == li.Some(None)
    assert li.Lazy.of(1, 2).find(lambda x: x is None) is li.NONE


def test_every_and_some_short_circuit() -> None:
    """Test that `every` and `some` stop at the decisive element."""
    it, pulled = _tracked([1, 2, 3, 4])
    assert it.some(lambda x: x > 2) is True
    assert pulled == [1, 2, 3]

    it, pulled = _tracked([1, 2, 3, 4])
    assert it.every(lambda x: x <= 2) is False
    assert pulled == [1, 2, 3]

    assert li.Lazy.of(1, 2).every(lambda x: x > 0) is True
    assert li.Lazy.of(1, 2).some(lambda x: x > 5) is False
    assert li.Lazy.of().some(lambda x: True) is False


def test_includes() -> None:
    """Test `includes` equality semantics and short-circuit."""
    it, pulled = _tracked([1, 2, 3, 4])
    assert it.includes(3) is True
    assert pulled == [1, 2, 3]
    assert li.Lazy.of(1.0, 2.0).includes(1) is True
    assert li.Lazy.of(1, 2).includes(5) is False
    marker = object()
    assert li.Lazy.of(object(), marker).includes(marker) is True


def test_shift_leaves_the_rest() -> None:
    """Test that `shift` pulls exactly one element."""
    it, pulled = _tracked([1, 2, 3])
    assert it.shift() == li.Some(1)
    assert pulled == [1]
    assert it.to_list() == [2, 3]
    assert it.shift() is li.NONE


def test_pop_exhausts() -> None:
    """Test that `pop` returns the last element and consumes everything."""
    it = li.Lazy.of(1, 2, None)
    assert it.pop() == li.Some(None)
    assert it.next() is li.NONE
    assert li.Lazy.of().pop() is li.NONE


def test_reduce() -> None:
    """Test left folds with and without an initial value."""
    assert li.Lazy.of(1, 2, 3).reduce(add, 0) == 6
    assert li.Lazy.of(1, 2, 3).reduce(lambda acc, x: acc * 10 + x) == 123
    assert li.Lazy.of().reduce(add, 42) == 42
    with pytest.raises(TypeError):
        li.Lazy.of().reduce(add)


def test_reduce_right() -> None:
    """Test right folds with and without an initial value."""
    assert li.Lazy.of(1, 2, 3).reduce_right(lambda acc, x: acc * 10 + x, 0) == 321
    assert li.Lazy.of(1, 2, 3).reduce_right(lambda acc, x: acc * 10 + x) == 321
    assert li.Lazy.of().reduce_right(add, "x") == "x"
    with pytest.raises(TypeError):
        li.Lazy.of().reduce_right(add)


def test_join() -> None:
    """Test joining with the default and a custom separator."""
    assert li.Lazy.of(1, 2, 3).join() == "1,2,3"
    assert li.Lazy.of("a", None, "b").join("") == "ab"
    assert li.Lazy.of().join() == ""
    with li.config_context(join_separator="; "):
        assert li.Lazy.of(1, 2).join() == "1; 2"


def test_to_list_and_set() -> None:
    """Test list and set conversions, with and without selectors."""
    assert li.Lazy.of(3, 1, 3).to_list() == [3, 1, 3]
    assert li.Lazy.of(3, 1, 3).to_list(str) == ["3", "1", "3"]
    assert li.Lazy.of(3, 1, 3).to_set() == {1, 3}
    assert li.Lazy.of(3, -3, 1).to_set(abs) == {1, 3}


def test_to_map_last_write_wins() -> None:
    """Test that duplicate keys keep the last record, at the first key position."""
    rows = [
        {"id": "b", "n": 1},
        {"id": "a", "n": 2},
        {"id": "b", "n": 3},
    ]
    result = li.Lazy(rows).to_map(lambda r: r["id"])
    assert result == {"b": rows[2], "a": rows[1]}
    assert list(result) == ["b", "a"]
    assert li.Lazy(rows).to_map(lambda r: r["id"], lambda r: r["n"]) == {"b": 3, "a": 2}


def test_to_map_keeps_key_types() -> None:
    """Test that `to_map` does not convert keys."""
    assert li.Lazy.of(1, "1").to_map(lambda x: x, type) == {1: int, "1": str}


def test_to_object_uses_string_keys() -> None:
    """Test that `to_object` builds a record keyed by strings."""
    result = li.Lazy.of(1, "1", 2).to_object(lambda x: x)
    assert result == {"1": "1", "2": 2}
    assert li.Lazy.of().to_object(lambda x: x) == {}


def test_collect() -> None:
    """Test draining into arbitrary collections."""
    assert li.Lazy.of(1, 2).collect() == (1, 2)
    assert li.Lazy.entries({"a": 1}).collect(dict) == {"a": 1}
