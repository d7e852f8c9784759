"""Tests for the pull protocol, ownership and construction of `Lazy`."""

from collections.abc import Iterator

import pytest

import lazyiter as li


class _Counting:
    """Iterable recording how many elements were pulled from it."""

    def __init__(self, data: list[int]) -> None:
        self.data = data
        self.pulled = 0

    def __iter__(self) -> Iterator[int]:
        for item in self.data:
            self.pulled += 1
            yield item


class _Reviving:
    """Broken iterator that produces values again after signaling exhaustion."""

    def __init__(self) -> None:
        self.calls = 0

    def __iter__(self) -> "_Reviving":
        return self

    def __next__(self) -> int:
        self.calls += 1
        if self.calls == 2:
            raise StopIteration
        return self.calls


def test_round_trip() -> None:
    """Test that a sequence survives construction and draining unchanged."""
    data = [3, None, "a", 3]
    assert li.Lazy(data).to_list() == data
    assert li.Lazy.from_(data).to_list() == data
    assert li.Lazy.of(*data).to_list() == data


def test_is_an_iterator() -> None:
    """Test that `Lazy` follows the standard iterator protocol."""
    it = li.Lazy.of(1, 2)
    assert iter(it) is it
    assert next(it) == 1
    assert list(it) == [2]


def test_next_returns_option() -> None:
    """Test that `next()` distinguishes a `None` element from exhaustion."""
    it = li.Lazy.of(None)
    assert it.next() == li.Some(None)
    assert it.next() is li.NONE


def test_exhausted_stays_exhausted() -> None:
    """Test that pulling an exhausted cursor keeps reporting exhaustion."""
    it = li.Lazy(_Reviving())
    assert next(it) == 1
    with pytest.raises(StopIteration):
        next(it)
    for _ in range(3):
        assert it.next().is_none()


def test_adaptors_never_revive_the_source() -> None:
    """Test that adaptors reading past an early end of the source see it as exhausted."""
    assert li.Lazy(_Reviving()).splice(5, 0, "x").to_list() == [1, "x"]
    assert li.Lazy(_Reviving()).fill("z", 3).to_list() == [1]
    assert li.Lazy(_Reviving()).slice(0, 4).to_list() == [1]
    assert li.Lazy(_Reviving()).push(9).concat(_Reviving()).to_list() == [1, 9, 1]


def test_one_pull_per_element() -> None:
    """Test that a chain pulls nothing before it is consumed, then one element per output."""
    source = _Counting([1, 2, 3, 4, 5])
    chain = li.Lazy(source).map(lambda x: x * 2).filter(lambda x: x > 0).for_each(lambda _: None)
    assert source.pulled == 0
    assert chain.shift() == li.Some(2)
    assert source.pulled == 1
    assert chain.shift() == li.Some(4)
    assert source.pulled == 2


def test_chaining_moves_the_receiver() -> None:
    """Test that a chained method makes the original cursor unusable."""
    original = li.Lazy.of(1, 2, 3)
    mapped = original.map(lambda x: x + 1)
    with pytest.raises(li.CursorMovedError):
        next(original)
    with pytest.raises(li.CursorMovedError):
        original.filter(bool)
    with pytest.raises(li.CursorMovedError):
        original.to_list()
    assert mapped.to_list() == [2, 3, 4]


def test_concat_moves_the_other_cursor() -> None:
    """Test that `concat` also takes ownership of a `Lazy` argument."""
    other = li.Lazy.of(3)
    joined = li.Lazy.of(1, 2).concat(other)
    with pytest.raises(li.CursorMovedError):
        other.next()
    assert joined.to_list() == [1, 2, 3]


def test_concat_on_moved_cursor_keeps_the_other() -> None:
    """Test that a failed `concat` does not take ownership of its argument."""
    spent = li.Lazy.of(1)
    spent.map(str)
    other = li.Lazy.of(2, 3)
    with pytest.raises(li.CursorMovedError):
        spent.concat(other)
    assert other.to_list() == [2, 3]


def test_moved_error_is_runtime_error() -> None:
    """Test the exception hierarchy of `CursorMovedError`."""
    assert issubclass(li.CursorMovedError, RuntimeError)


def test_repr_does_not_pull() -> None:
    """Test that `repr` describes the cursor without consuming it."""
    it = li.Lazy.of(1, 2)
    assert repr(it) == "Lazy(generator)"
    it.map(str)
    assert repr(it) == "Lazy(<moved>)"


def test_record_entry_points() -> None:
    """Test keys, values and entries of a record, in insertion order."""
    record = {"b": 1, "a": 2}
    assert li.Lazy.keys(record).to_list() == ["b", "a"]
    assert li.Lazy.values(record).to_list() == [1, 2]
    entries = li.Lazy.entries(record).to_list()
    assert entries == [("b", 1), ("a", 2)]
    assert entries[0].key == "b"
    assert entries[0].value == 1


def test_inner_and_into() -> None:
    """Test access to the wrapped iterator and piping into functions."""
    it = li.Lazy([1, 2, 3])
    assert list(it.inner()) == [1, 2, 3]
    assert li.Lazy.of(1, 2, 3).into(sum) == 6
    assert li.Lazy.of(1, 2).into(lambda lz, n: lz.push(n).to_list(), 3) == [1, 2, 3]


def test_callback_error_propagates() -> None:
    """Test that an exception raised by a callback reaches the caller at pull time."""

    def _boom(x: int) -> int:
        if x == 2:
            raise KeyError(x)
        return x

    chain = li.Lazy.of(1, 2, 3).map(_boom)
    assert chain.shift() == li.Some(1)
    with pytest.raises(KeyError):
        chain.shift()
