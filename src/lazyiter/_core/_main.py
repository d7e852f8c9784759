from __future__ import annotations

from abc import ABC
from collections.abc import Callable
from typing import Concatenate, Self


class Pipeable:
    __slots__ = ()

    def into[**P, R](
        self,
        func: Callable[Concatenate[Self, P], R],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> R:
        """Pass `Self` to a function and return its result.

        `x.into(f)` is `f(x)`, written so that it reads left to right at the end of a chain.

        Every terminal operation of `Lazy` is built on top of this method.

        Args:
            func (Callable[Concatenate[Self, P], R]): Function receiving the instance as first argument.
            *args (P.args): Positional arguments to pass to the function.
            **kwargs (P.kwargs): Keyword arguments to pass to the function.

        Returns:
            R: Whatever **func** returns.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(3, 1, 2).into(sorted)
        [1, 2, 3]
        >>> li.Lazy.of(1, 2).push(3).into(sum)
        6

        ```
        """
        return func(self, *args, **kwargs)

    def inspect[**P](
        self,
        func: Callable[Concatenate[Self, P], object],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Self:
        """Pass the instance to a function for its side effects, then return the instance.

        Unlike `Lazy.for_each`, **func** receives the wrapper itself, not the elements.

        Be careful: if **func** iterates the instance, the elements it pulls are gone.

        Args:
            func (Callable[Concatenate[Self, P], object]): Function called with the instance.
            *args (P.args): Positional arguments to pass to the function.
            **kwargs (P.kwargs): Keyword arguments to pass to the function.

        Returns:
            Self: The instance itself.

        Example:
        ```python
        >>> import lazyiter as li
        >>> li.Lazy.of(1, 2, 3).inspect(print).to_list()
        Lazy(generator)
        [1, 2, 3]

        ```
        """
        func(self, *args, **kwargs)
        return self


class CommonBase[T](ABC, Pipeable):
    """Base class for the wrappers of this package.

    Holds a single underlying value in `_inner` and nothing else.

    Args:
        data (T): The underlying data to wrap.
    """

    _inner: T

    __slots__ = ("_inner",)

    def __init__(self, data: T) -> None:
        self._inner = data

    def inner(self) -> T:
        """Get the underlying data.

        Returns:
            T: The underlying data.
        """
        return self._inner
