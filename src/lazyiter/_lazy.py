from __future__ import annotations

import functools
import itertools
import logging
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from types import GeneratorType
from typing import TYPE_CHECKING, Any, Concatenate, Final

import cytoolz as cz
import more_itertools as mit

from ._core import CommonBase, check_sort_algorithm, get_config
from ._errors import CursorMovedError
from ._results import NONE, Option, Some
from ._sort import descending, sort_buffer
from ._types import Item

if TYPE_CHECKING:
    from ._core import SortAlgorithm
    from ._types import Comparator, Predicate, SupportsKeysAndGetItem

logger = logging.getLogger(__name__)

_MISSING: Final[Any] = object()


def _check_index(name: str, value: int | None) -> None:
    if value is not None and value < 0:
        msg = f"{name} must be a non-negative integer or None, got {value!r}"
        raise ValueError(msg)


def _fused[T](data: Iterator[T]) -> Iterator[T]:
    # a generator stays finished once its source reports exhaustion
    yield from data


def _iter_repr(data: Iterator[object] | None) -> str:
    if data is None:
        return "<moved>"
    return type(data).__name__


class Lazy[T](CommonBase[Iterator[T]], Iterator[T]):
    """A single-use, pull-based sequence with array-like chainable methods.

    `Lazy` implements the `Iterator` protocol: every `next()` call pulls exactly one element through the whole chain, and nothing is computed before that.

    - Methods returning a `Lazy` (`map`, `filter`, `splice`, `sort`, ...) take ownership of the elements.
      The instance they were called on is spent, and using it again raises `CursorMovedError`.
    - Other methods (`to_list`, `find`, `shift`, ...) pull from the instance itself, as far as they need.
    - Once exhausted, a `Lazy` stays exhausted.

    `sort`, `reverse`, `pop`, `join` and `reduce_right` must buffer the whole sequence.
    Never call them on an unbounded source.

    Args:
        data (Iterable[T]): Any object that can be iterated over.

    Example:
    ```python
    >>> import lazyiter as li
    >>> (
    ...     li.Lazy(range(10))
    ...     .filter(lambda x: x % 2 == 0)
    ...     .map(lambda x: x * 10)
    ...     .splice(1, 2, -1)
    ...     .to_list()
    ... )
    [0, -1, 60, 80]

    ```
    """

    _inner: Iterator[T]
    _moved: bool

    __slots__ = ("_moved",)

    def __init__(self, data: Iterable[T]) -> None:
        inner = iter(data)
        self._inner = inner if isinstance(inner, GeneratorType) else _fused(inner)
        self._moved = False

    def __repr__(self) -> str:
        inner = None if self._moved else self._inner
        return f"{self.__class__.__name__}({_iter_repr(inner)})"

    def __next__(self) -> T:
        if self._moved:
            raise self._moved_error()
        return next(self._inner)

    def _moved_error(self) -> CursorMovedError:
        logger.debug(f"{self!r} used after its elements were moved")
        return CursorMovedError(
            f"this {self.__class__.__name__} was moved into another one by a chained call and cannot be used anymore"
        )

    def _take(self) -> Iterator[T]:
        if self._moved:
            raise self._moved_error()
        self._moved = True
        return self._inner

    def _iter[**P, U](
        self,
        factory: Callable[Concatenate[Iterator[T], P], Iterator[U]],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Lazy[U]:
        return Lazy(factory(self._take(), *args, **kwargs))

    def next(self) -> Option[T]:
        """Pull one element.

        Returns:
            Option[T]: `Some(element)`, or `NONE` once the sequence is exhausted.

        Example:
        ```python
        >>> import lazyiter as li
        >>> it = li.Lazy.of(None, 2)
        >>> it.next()
        Some(None)
        >>> it.next()
        Some(2)
        >>> it.next()
        NONE
        >>> it.next()
        NONE

        ```
        """
        try:
            return Some(next(self))
        except StopIteration:
            return NONE

    # constructors --------------------------------------------------------------

    @staticmethod
    def from_[U](data: Iterable[U]) -> Lazy[U]:
        """Create a `Lazy` from any iterable. Same as the constructor.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.from_("abc").to_list()
        ['a', 'b', 'c']

        ```
        """
        return Lazy(data)

    @staticmethod
    def of[U](*items: U) -> Lazy[U]:
        """Create a `Lazy` from unpacked values.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, 2, 3).to_list()
        [1, 2, 3]

        ```
        """
        return Lazy(items)

    @staticmethod
    def keys[K](record: SupportsKeysAndGetItem[K, Any]) -> Lazy[K]:
        """Create a `Lazy` over the keys of a record, in its own order.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.keys({"a": 1, "b": 2}).to_list()
        ['a', 'b']

        ```
        """
        return Lazy(record.keys())

    @staticmethod
    def values[K, V](record: SupportsKeysAndGetItem[K, V]) -> Lazy[V]:
        """Create a `Lazy` over the values of a record, in the order of its keys.

        Values are looked up as they are pulled.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.values({"a": 1, "b": 2}).to_list()
        [1, 2]

        ```
        """
        return Lazy(record[key] for key in record.keys())

    @staticmethod
    def entries[K, V](record: SupportsKeysAndGetItem[K, V]) -> Lazy[Item[K, V]]:
        """Create a `Lazy` over the `(key, value)` pairs of a record, as `Item` named tuples.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.entries({"a": 1, "b": 2}).to_list()
        [('a', 1), ('b', 2)]
        >>> li.Lazy.entries({"a": 1}).map(lambda item: item.value).to_list()
        [1]

        ```
        """
        return Lazy(Item(key, record[key]) for key in record.keys())

    # adaptors ------------------------------------------------------------------

    def filter(self, predicate: Predicate[T]) -> Lazy[T]:
        """Keep the elements for which **predicate** is truthy.

        Args:
            predicate (Predicate[T]): Function called with each element.

        Returns:
            Lazy[T]: The matching elements, in order.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy(range(6)).filter(lambda x: x % 3 == 0).to_list()
        [0, 3]

        ```
        """

        def _filter(data: Iterator[T]) -> Iterator[T]:
            return filter(predicate, data)

        return self._iter(_filter)

    def map[R](self, func: Callable[[T], R]) -> Lazy[R]:
        """Apply **func** to every element.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, 2, 3).map(str).to_list()
        ['1', '2', '3']

        ```
        """

        def _map(data: Iterator[T]) -> Iterator[R]:
            return map(func, data)

        return self._iter(_map)

    def slice(self, start: int = 0, end: int | None = None) -> Lazy[T]:
        """Keep the elements from index **start** up to, but excluding, index **end**.

        The first **start** elements are still pulled from upstream, then dropped.
        Nothing past **end** is ever pulled.

        Args:
            start (int): Index of the first element to keep. Defaults to 0.
            end (int | None): Index to stop at. `None` means no bound. Defaults to None.

        Returns:
            Lazy[T]: The selected elements.

        Raises:
            ValueError: If **start** or **end** is negative.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy(range(10)).slice(2, 5).to_list()
        [2, 3, 4]
        >>> li.Lazy(range(10)).slice(8).to_list()
        [8, 9]
        >>> li.Lazy(range(3)).slice(5).to_list()
        []

        ```
        """
        _check_index("start", start)
        _check_index("end", end)

        def _slice(data: Iterator[T]) -> Iterator[T]:
            return itertools.islice(data, start, end)

        return self._iter(_slice)

    def splice(self, start: int = 0, delete_count: int = 0, *items: T) -> Lazy[T]:
        """Remove **delete_count** elements at index **start** and insert **items** in their place.

        Works like `list[start:start + delete_count] = items`, in a single forward pass.

        Args:
            start (int): Index where the removal and insertion happen. Defaults to 0.
            delete_count (int): Number of upstream elements to drop. Defaults to 0.
            *items (T): Elements inserted at **start**.

        Returns:
            Lazy[T]: The spliced sequence.

        Raises:
            ValueError: If **start** or **delete_count** is negative.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, 2, 3, 4, 5).splice(1, 2, "a", "b", "c").to_list()
        [1, 'a', 'b', 'c', 4, 5]
        >>> li.Lazy.of(1, 2).splice(5, 1, 9).to_list()
        [1, 2, 9]

        ```
        """
        _check_index("start", start)
        _check_index("delete_count", delete_count)

        def _splice(data: Iterator[T]) -> Iterator[T]:
            yield from itertools.islice(data, start)
            mit.consume(data, delete_count)
            yield from items
            yield from data

        return self._iter(_splice)

    def fill(self, value: T, start: int = 0, end: int | None = None) -> Lazy[T]:
        """Replace the elements from index **start** up to, but excluding, index **end** by **value**.

        One **value** is produced per replaced upstream element: the length never changes.

        Args:
            value (T): The replacement.
            start (int): First index to replace. Defaults to 0.
            end (int | None): Index to stop replacing at. `None` means no bound. Defaults to None.

        Returns:
            Lazy[T]: The filled sequence.

        Raises:
            ValueError: If **start** or **end** is negative.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy(range(6)).fill(0, 2, 4).to_list()
        [0, 1, 0, 0, 4, 5]
        >>> li.Lazy.of(1, 2).fill(0, 5).to_list()
        [1, 2]

        ```
        """
        _check_index("start", start)
        _check_index("end", end)
        count = None if end is None else max(end - start, 0)

        def _fill(data: Iterator[T]) -> Iterator[T]:
            yield from itertools.islice(data, start)
            for _ in itertools.islice(data, count):
                yield value
            yield from data

        return self._iter(_fill)

    def push(self, *values: T) -> Lazy[T]:
        """Append **values** after the last element.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, 2).push(3, 4).to_list()
        [1, 2, 3, 4]

        ```
        """

        def _push(data: Iterator[T]) -> Iterator[T]:
            return cz.itertoolz.concat((data, values))

        return self._iter(_push)

    def unshift(self, *values: T) -> Lazy[T]:
        """Prepend **values** before the first element.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(3, 4).unshift(1, 2).to_list()
        [1, 2, 3, 4]

        ```
        """

        def _unshift(data: Iterator[T]) -> Iterator[T]:
            return cz.itertoolz.concat((values, data))

        return self._iter(_unshift)

    def concat(self, other: Iterable[T]) -> Lazy[T]:
        """Yield all elements of self, then all elements of **other**.

        If **other** is a `Lazy`, it is moved as well.
        It is left untouched if this instance was already moved.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, 2).concat(li.Lazy.of(3)).concat([4]).to_list()
        [1, 2, 3, 4]

        ```
        """
        if self._moved:
            raise self._moved_error()
        tail = other._take() if isinstance(other, Lazy) else other

        def _concat(data: Iterator[T]) -> Iterator[T]:
            return itertools.chain(data, tail)

        return self._iter(_concat)

    def for_each(self, callback: Callable[[T], object]) -> Lazy[T]:
        """Call **callback** on each element as it passes through, and yield it unchanged.

        Nothing happens until the result is pulled from.

        Example:
        ```python
        >>> import lazyiter as li
        >>> seen = []
        >>> it = li.Lazy.of(1, 2, 3).for_each(seen.append)
        >>> seen
        []
        >>> it.to_list(), seen
        ([1, 2, 3], [1, 2, 3])

        ```
        """

        def _for_each(data: Iterator[T]) -> Iterator[T]:
            for item in data:
                callback(item)
                yield item

        return self._iter(_for_each)

    # materializing -------------------------------------------------------------

    def sort(
        self,
        compare: Comparator[T] = descending,
        *,
        algorithm: SortAlgorithm | None = None,
    ) -> Lazy[T]:
        """Sort the elements with a three-way **compare** function.

        For two consecutive outputs `a` then `b`, `compare(a, b) >= 0`.
        The default comparator, `descending`, is `b - a`: numbers come out in ascending order.

        The whole upstream is buffered on the first pull, then sorted in place.

        - `"heap"` heapifies the buffer in O(n), then pays O(log n) per element pulled.
        - `"quick"` is an iterative three-way quicksort, robust to many duplicate keys.

        Args:
            compare (Comparator[T]): Returns a positive number when its first argument must come first. Defaults to `descending`.
            algorithm (SortAlgorithm | None): `"heap"` or `"quick"`. Defaults to `get_config().sort_algorithm`.

        Returns:
            Lazy[T]: The sorted elements.

        Raises:
            ValueError: If **algorithm** is unknown.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(3, 1, 2, 1).sort().to_list()
        [1, 1, 2, 3]
        >>> li.Lazy.of(3, 1, 2, 1).sort(lambda a, b: a - b, algorithm="quick").to_list()
        [3, 2, 1, 1]
        >>> words = li.Lazy.of("bb", "a", "ccc")
        >>> words.sort(lambda a, b: len(b) - len(a)).to_list()
        ['a', 'bb', 'ccc']

        ```
        """
        name = check_sort_algorithm(get_config().sort_algorithm if algorithm is None else algorithm)

        def _sort(data: Iterator[T]) -> Iterator[T]:
            yield from sort_buffer(list(data), compare, name)

        return self._iter(_sort)

    def reverse(self) -> Lazy[T]:
        """Yield the elements from last to first.

        The whole upstream is buffered on the first pull.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, 2, 3, 4).reverse().to_list()
        [4, 3, 2, 1]

        ```
        """

        def _reverse(data: Iterator[T]) -> Iterator[T]:
            buffer = list(data)
            logger.debug(f"reversing {len(buffer)} buffered elements")
            yield from reversed(buffer)

        return self._iter(_reverse)

    # single items --------------------------------------------------------------

    def shift(self) -> Option[T]:
        """Pull the first element. The rest stays available.

        Example:
        ```python
        >>> import lazyiter as li
        >>> it = li.Lazy.of(1, 2, 3)
        >>> it.shift()
        Some(1)
        >>> it.to_list()
        [2, 3]

        ```
        """
        return self.next()

    def pop(self) -> Option[T]:
        """Exhaust the sequence and return its last element.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, 2, 3).pop()
        Some(3)
        >>> li.Lazy.of().pop()
        NONE

        ```
        """

        def _pop(data: Iterable[T]) -> Option[T]:
            tail = deque(data, maxlen=1)
            return Some(tail[0]) if tail else NONE

        return self.into(_pop)

    # search --------------------------------------------------------------------

    def every(self, predicate: Predicate[T]) -> bool:
        """Whether **predicate** is truthy for every element. Stops at the first failure.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(2, 4, 6).every(lambda x: x % 2 == 0)
        True
        >>> li.Lazy.of().every(lambda x: False)
        True

        ```
        """

        def _every(data: Iterable[T]) -> bool:
            return all(predicate(item) for item in data)

        return self.into(_every)

    def some(self, predicate: Predicate[T]) -> bool:
        """Whether **predicate** is truthy for at least one element. Stops at the first match.

        Example:
        ```python
        >>> import lazyiter as li
        >>> it = li.Lazy.of(1, 2, 3, 4)
        >>> it.some(lambda x: x > 2)
        True
        >>> it.to_list()
        [4]

        ```
        """

        def _some(data: Iterable[T]) -> bool:
            return any(predicate(item) for item in data)

        return self.into(_some)

    def find(self, predicate: Predicate[T]) -> Option[T]:
        """Return the first element for which **predicate** is truthy.

        Args:
            predicate (Predicate[T]): Function called with each element until one matches.

        Returns:
            Option[T]: `Some(element)` if found, `NONE` otherwise.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, 2, 3, 4).find(lambda x: x > 2)
        Some(3)
        >>> li.Lazy.of(1, 2).find(lambda x: x > 2)
        NONE

        ```
        """

        def _find(data: Iterable[T]) -> Option[T]:
            for item in data:
                if predicate(item):
                    return Some(item)
            return NONE

        return self.into(_find)

    def includes(self, target: object) -> bool:
        """Whether an element is **target** or equal to it. Stops at the first match.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, 2, 3).includes(2)
        True
        >>> li.Lazy.of(1, 2, 3).includes("2")
        False

        ```
        """

        def _includes(data: Iterable[T]) -> bool:
            return target in data

        return self.into(_includes)

    # reductions and conversions ------------------------------------------------

    def reduce[U](self, func: Callable[[U, T], U], initial: U = _MISSING) -> U:
        """Fold the elements from left to right, in a single pass.

        Without **initial**, the first element is the starting value.

        Args:
            func (Callable[[U, T], U]): Called with the accumulator and the next element.
            initial (U): Starting value.

        Returns:
            U: The final accumulator.

        Raises:
            TypeError: If the sequence is empty and no **initial** is given.

        Example:
        ```python
        >>> import lazyiter as li
        >>> from operator import add
        >>> li.Lazy.of(1, 2, 3).reduce(add, 0)
        6
        >>> li.Lazy.of("a", "b", "c").reduce(add)
        'abc'

        ```
        """

        def _reduce(data: Iterable[T]) -> U:
            if initial is _MISSING:
                return functools.reduce(func, data)  # type: ignore[arg-type]
            return functools.reduce(func, data, initial)

        return self.into(_reduce)

    def reduce_right[U](self, func: Callable[[U, T], U], initial: U = _MISSING) -> U:
        """Fold the elements from right to left.

        Same as `reduce`, but the sequence is buffered and walked from its last element.

        Example:
        ```python
        >>> import lazyiter as li
        >>> from operator import add
        >>> li.Lazy.of("a", "b", "c").reduce_right(add, "")
        'cba'
        >>> li.Lazy.of([1], [2]).reduce_right(add)
        [2, 1]

        ```
        """

        def _reduce_right(data: Iterable[T]) -> U:
            buffer = list(data)
            if initial is _MISSING:
                return functools.reduce(func, reversed(buffer))  # type: ignore[arg-type]
            return functools.reduce(func, reversed(buffer), initial)

        return self.into(_reduce_right)

    def join(self, separator: str | None = None) -> str:
        """Concatenate the string form of every element, with **separator** between them.

        `None` elements become empty strings.

        Args:
            separator (str | None): Defaults to `get_config().join_separator`, which is `","`.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, None, 3).join()
        '1,,3'
        >>> li.Lazy.of("a", "b").join(" - ")
        'a - b'

        ```
        """
        sep = get_config().join_separator if separator is None else separator

        def _join(data: Iterable[T]) -> str:
            buffer = ["" if item is None else str(item) for item in data]
            return sep.join(buffer)

        return self.into(_join)

    def collect[R](self, collector: Callable[[Iterable[T]], R] = tuple) -> R:  # type: ignore[assignment]
        """Exhaust the sequence into any collection constructor.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, 2).collect()
        (1, 2)
        >>> li.Lazy.of(1, 2).collect(frozenset)
        frozenset({1, 2})

        ```
        """
        return self.into(collector)

    def to_list[R](self, selector: Callable[[T], R] | None = None) -> list[R]:
        """Exhaust the sequence into a `list`, optionally mapping each element first.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, 2).to_list(lambda x: x * 2)
        [2, 4]

        ```
        """
        if selector is None:
            return self.collect(list)  # type: ignore[return-value]
        return self.map(selector).collect(list)

    def to_set[R](self, selector: Callable[[T], R] | None = None) -> set[R]:
        """Exhaust the sequence into a `set`, optionally mapping each element first.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, 2, 3, 4).to_set(lambda x: x % 2)
        {0, 1}

        ```
        """
        if selector is None:
            return self.collect(set)  # type: ignore[return-value]
        return self.map(selector).collect(set)

    def to_map[K, V](
        self,
        key: Callable[[T], K],
        value: Callable[[T], V] | None = None,
    ) -> dict[K, V]:
        """Exhaust the sequence into a `dict`, keyed by **key**.

        Keys are kept as returned by **key**.
        When two elements share a key, the last one wins, at the position where the key first appeared.

        Args:
            key (Callable[[T], K]): Computes the key of each element.
            value (Callable[[T], V] | None): Computes the stored value. Defaults to the element itself.

        Returns:
            dict[K, V]: The mapping.

        Example:
        ```python
        >>> import lazyiter as li
        >>> rows = [{"id": 1, "v": "a"}, {"id": 2, "v": "b"}, {"id": 1, "v": "c"}]
        >>> li.Lazy(rows).to_map(lambda r: r["id"], lambda r: r["v"])
        {1: 'c', 2: 'b'}

        ```
        """
        get_value = cz.functoolz.identity if value is None else value
        return self.map(lambda item: (key(item), get_value(item))).collect(dict)

    def to_object[V](
        self,
        key: Callable[[T], object],
        value: Callable[[T], V] | None = None,
    ) -> dict[str, V]:
        """Exhaust the sequence into a record: a `dict` whose keys are the `str()` of **key**.

        Same rules as `to_map` otherwise, so `1` and `"1"` end up on the same entry.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, "1", 2).to_object(lambda x: x, lambda x: type(x).__name__)
        {'1': 'str', '2': 'int'}

        ```
        """
        get_value = cz.functoolz.identity if value is None else value

        def _assign(record: dict[str, V], item: T) -> dict[str, V]:
            record[str(key(item))] = get_value(item)
            return record

        return self.reduce(_assign, {})
