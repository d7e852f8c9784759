from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never, TypeIs


class OptionUnwrapError(RuntimeError): ...


class Option[T](ABC):
    """The result of an operation that may have no value.

    `Some(value)` carries a value, which can itself be `None`.
    `NONE` is the single instance meaning "no value".

    `Lazy.shift`, `Lazy.pop`, `Lazy.find` and `Lazy.next` return an `Option`, so that an element equal to `None` is never mistaken for an exhausted cursor.
    """

    __slots__ = ()

    @abstractmethod
    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        """
        Returns `True` if the option carries a value.

        Example:
            ```python
            >>> from lazyiter import Some, NONE
            >>> Some(None).is_some()
            True
            >>> NONE.is_some()
            False

            ```
        """
        ...

    @abstractmethod
    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        """Returns `True` if the option is `NONE`."""
        ...

    @abstractmethod
    def unwrap(self) -> T:
        """
        Returns the contained value.

        Raises:
            OptionUnwrapError: If the option is `NONE`.

        Example:
            ```python
            >>> import lazyiter as li
            >>> li.Lazy.of(7, 8).shift().unwrap()
            7
            >>> li.Lazy.of().shift().unwrap()
            Traceback (most recent call last):
                ...
            lazyiter._results._option.OptionUnwrapError: called `unwrap` on `NONE`

            ```
        """
        ...

    def expect(self, msg: str) -> T:
        """
        Returns the contained value, or raises with **msg** if there is none.

        Raises:
            OptionUnwrapError: If the option is `NONE`.
        """
        if self.is_some():
            return self.unwrap()
        msg = f"{msg} (called `expect` on `NONE`)"
        raise OptionUnwrapError(msg)

    def unwrap_or(self, default: T) -> T:
        """
        Returns the contained value or **default**.

        Example:
            ```python
            >>> import lazyiter as li
            >>> li.Lazy.of(1, 2).find(lambda x: x > 5).unwrap_or(-1)
            -1

            ```
        """
        return self.unwrap() if self.is_some() else default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        """Returns the contained value or calls **f** to compute one."""
        return self.unwrap() if self.is_some() else f()

    def map[U](self, f: Callable[[T], U]) -> Option[U]:
        """
        Applies **f** to the contained value, leaving `NONE` untouched.

        Example:
            ```python
            >>> from lazyiter import Some, NONE
            >>> Some("abc").map(len)
            Some(3)
            >>> NONE.map(len)
            NONE

            ```
        """
        if self.is_some():
            return Some(f(self.unwrap()))
        return NONE

    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Calls **f** with the contained value and returns its `Option`, or `NONE`."""
        if self.is_some():
            return f(self.unwrap())
        return NONE

    def or_else(self, f: Callable[[], Option[T]]) -> Option[T]:
        """Returns the option if it carries a value, otherwise the result of **f**."""
        return self if self.is_some() else f()


@dataclass(slots=True)
class Some[T](Option[T]):
    value: T

    def __repr__(self) -> str:
        return f"Some({self.value!r})"

    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        return True

    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(slots=True)
class NoneOption(Option[Any]):
    def __repr__(self) -> str:
        return "NONE"

    def is_some(self) -> TypeIs[Some[Any]]:  # type: ignore[misc]
        return False

    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        return True

    def unwrap(self) -> Never:
        raise OptionUnwrapError("called `unwrap` on `NONE`")


NONE: Option[Any] = NoneOption()
