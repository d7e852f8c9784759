"""In-place sorting generators used by `Lazy.sort`.

Both functions take a mutable list and a three-way comparator, reorder the list in place and yield its elements in sorted order.

Sorted order means that for two consecutive outputs `a` then `b`, `compare(a, b) >= 0`.
With the default `descending` comparator (`b - a`) numbers therefore come out in ascending order.

Neither function validates the comparator: an inconsistent one produces some permutation of the input, never an error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any, Final

from ._core import SortAlgorithm
from ._types import Comparator, SupportsSub

logger = logging.getLogger(__name__)


def descending[T: SupportsSub[Any]](a: T, b: T) -> int | float:
    """Default comparator, `b - a`.

    Example:
    ```python
    >>> import lazyiter as li
    >>> li.Lazy.of(3, 1, 2).sort(li.descending).to_list()
    [1, 2, 3]
    >>> li.Lazy.of(3, 1, 2).sort(lambda a, b: a - b).to_list()
    [3, 2, 1]

    ```
    """
    return b - a


# heap -----------------------------------------------------------------------


def _sift_down[T](heap: list[T], compare: Comparator[T], start: int, pos: int) -> None:
    # moves heap[pos] towards the root while it must come before its parent
    item = heap[pos]
    while pos > start:
        parent_pos = (pos - 1) >> 1
        parent = heap[parent_pos]
        if compare(item, parent) > 0:
            heap[pos] = parent
            pos = parent_pos
            continue
        break
    heap[pos] = item


def _sift_up[T](heap: list[T], compare: Comparator[T], pos: int, end: int) -> None:
    # Floyd: walk the hole down to a leaf along the preferred children, then bubble the item back up.
    start = pos
    item = heap[pos]
    child = 2 * pos + 1
    while child < end:
        right = child + 1
        if right < end and compare(heap[child], heap[right]) <= 0:
            child = right
        heap[pos] = heap[child]
        pos = child
        child = 2 * pos + 1
    heap[pos] = item
    _sift_down(heap, compare, start, pos)


def heapify[T](heap: list[T], compare: Comparator[T]) -> list[T]:
    """Arrange **heap** in place so that its root is the element that sorts first, in O(n).

    Example:
    ```python
    >>> from lazyiter import heapify, descending
    >>> heapify([5, 3, 8, 1], descending)[0]
    1

    ```
    """
    end = len(heap)
    for pos in reversed(range(end // 2)):
        _sift_up(heap, compare, pos, end)
    return heap


def heap_sort[T](buffer: list[T], compare: Comparator[T]) -> Iterator[T]:
    """Heapify **buffer**, then yield its elements in sorted order, one sift per element.

    The first element is available right after the O(n) heapify.
    **buffer** shrinks while the generator runs and is empty once it is exhausted.

    Args:
        buffer (list[T]): Elements to sort. Consumed.
        compare (Comparator[T]): Three-way comparator.

    Yields:
        T: The elements of **buffer**, sorted.

    Example:
    ```python
    >>> from lazyiter import heap_sort, descending
    >>> list(heap_sort([4, 1, 3, 1, 2], descending))
    [1, 1, 2, 3, 4]

    ```
    """
    heap = heapify(buffer, compare)
    while heap:
        last = heap.pop()
        if not heap:
            yield last
            return
        first = heap[0]
        heap[0] = last
        _sift_up(heap, compare, 0, len(heap))
        yield first


# three-way quicksort --------------------------------------------------------


def _median_of_three[T](buffer: list[T], compare: Comparator[T], i: int, j: int, k: int) -> int:
    a, b, c = buffer[i], buffer[j], buffer[k]
    if compare(a, b) > 0:
        if compare(b, c) > 0:
            return j
        return k if compare(a, c) > 0 else i
    if compare(c, b) > 0:
        return j
    return k if compare(c, a) > 0 else i


def _partition[T](buffer: list[T], compare: Comparator[T], lo: int, hi: int) -> tuple[int, int]:
    """Bentley-McIlroy three-way partition of `buffer[lo:hi + 1]`.

    Keys equal to the pivot are parked at both ends during the scan and swapped next to the pivot afterwards.

    Returns `(lt, gt)` such that `buffer[lo:lt + 1]` sorts before the pivot, `buffer[lt + 1:gt]` ties with it and `buffer[gt:hi + 1]` sorts after it.
    """
    if hi - lo >= 2:
        m = _median_of_three(buffer, compare, lo, lo + (hi - lo) // 2, hi)
        buffer[lo], buffer[m] = buffer[m], buffer[lo]
    pivot = buffer[lo]
    i, j = lo, hi + 1
    p, q = lo, hi + 1
    while True:
        i += 1
        while i < hi and i < q and compare(buffer[i], pivot) > 0:
            i += 1
        j -= 1
        while j > p and compare(pivot, buffer[j]) > 0:
            j -= 1
        if i == j and compare(buffer[i], pivot) == 0:
            p += 1
            buffer[p], buffer[i] = buffer[i], buffer[p]
        if i >= j:
            break
        buffer[i], buffer[j] = buffer[j], buffer[i]
        if compare(buffer[i], pivot) == 0:
            p += 1
            buffer[p], buffer[i] = buffer[i], buffer[p]
        if compare(buffer[j], pivot) == 0:
            q -= 1
            buffer[q], buffer[j] = buffer[j], buffer[q]
    i = j + 1
    for k in range(lo, p + 1):
        buffer[k], buffer[j] = buffer[j], buffer[k]
        j -= 1
    for k in range(hi, q - 1, -1):
        buffer[k], buffer[i] = buffer[i], buffer[k]
        i += 1
    return j, i


def quick_sort[T](buffer: list[T], compare: Comparator[T]) -> Iterator[T]:
    """Sort **buffer** in place with an iterative three-way quicksort, yielding elements as their final position is known.

    Ranges waiting to be processed live on an explicit stack of `(is_leaf, first, last)` tuples.
    Leaf ranges (keys equal to a pivot, or a single element) are yielded directly; other ranges are partitioned and their three parts pushed back.

    Many duplicate keys keep the cost close to O(n log n).
    Adversarial inputs can still reach O(n²): there is no random pivot.

    Args:
        buffer (list[T]): Elements to sort, reordered in place.
        compare (Comparator[T]): Three-way comparator.

    Yields:
        T: The elements of **buffer**, sorted.

    Example:
    ```python
    >>> from lazyiter import quick_sort, descending
    >>> list(quick_sort([3, 1, 3, 2, 3, 0], descending))
    [0, 1, 2, 3, 3, 3]

    ```
    """
    stack: list[tuple[bool, int, int]] = [(False, 0, len(buffer) - 1)]
    while stack:
        is_leaf, first, last = stack.pop()
        if is_leaf or last - first < 1:
            yield from buffer[first : last + 1]
            continue
        lt, gt = _partition(buffer, compare, first, last)
        stack.append((False, gt, last))
        stack.append((True, lt + 1, gt - 1))
        stack.append((False, first, lt))


SORTERS: Final[dict[SortAlgorithm, Callable[[list[Any], Comparator[Any]], Iterator[Any]]]] = {
    "heap": heap_sort,
    "quick": quick_sort,
}


def sort_buffer[T](buffer: list[T], compare: Comparator[T], algorithm: SortAlgorithm) -> Iterator[T]:
    logger.debug(f"sorting {len(buffer)} buffered elements with {algorithm} sort")
    return SORTERS[algorithm](buffer, compare)
