from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import NamedTuple, Protocol

type Comparator[T] = Callable[[T, T], int]
"""Three-way ordering function: negative, zero or positive."""
type Predicate[T] = Callable[[T], object]
"""Function deciding whether an element matches, by truthiness."""


class Item[K, V](NamedTuple):
    """A key-value pair of a record, as produced by `Lazy.entries()`."""

    key: K
    """The key of the item."""
    value: V
    """The value associated with the key."""

    def __repr__(self) -> str:
        return f"({self.key!r}, {self.value!r})"


# typeshed protocols


class SupportsKeysAndGetItem[K, V](Protocol):
    def keys(self) -> Iterable[K]: ...
    def __getitem__(self, key: K, /) -> V: ...


class SupportsSub[T](Protocol):
    def __sub__(self, other: T, /) -> int | float: ...
