from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Literal, TypeIs

logger = logging.getLogger(__name__)

type SortAlgorithm = Literal["heap", "quick"]

SORT_ALGORITHMS: frozenset[str] = frozenset({"heap", "quick"})
ENV_SORT_ALGORITHM = "LAZYITER_SORT_ALGORITHM"


def is_sort_algorithm(name: object) -> TypeIs[SortAlgorithm]:
    return name in SORT_ALGORITHMS


def check_sort_algorithm(name: object) -> SortAlgorithm:
    if not is_sort_algorithm(name):
        msg = f"unknown sort algorithm {name!r}, expected one of {sorted(SORT_ALGORITHMS)}"
        raise ValueError(msg)
    return name


@dataclass(slots=True, frozen=True)
class Config:
    """Package wide defaults.

    Attributes:
        sort_algorithm (SortAlgorithm): Algorithm used by `Lazy.sort` when none is given.
        join_separator (str): Separator used by `Lazy.join` when none is given.
    """

    sort_algorithm: SortAlgorithm = "heap"
    join_separator: str = ","


def _from_env() -> Config:
    name = os.environ.get(ENV_SORT_ALGORITHM)
    if name is None:
        return Config()
    logger.debug(f"sort algorithm {name!r} read from {ENV_SORT_ALGORITHM}")
    return Config(sort_algorithm=check_sort_algorithm(name))


_CONFIG: list[Config] = [_from_env()]


def get_config() -> Config:
    """Return the current configuration.

    Example:
    ```python
    >>> from lazyiter import get_config
    >>> get_config().join_separator
    ','

    ```
    """
    return _CONFIG[-1]


def set_config(**changes: object) -> Config:
    """Replace the current configuration with an updated copy and return it.

    Args:
        **changes (object): Fields of `Config` to change.

    Returns:
        Config: The new configuration.

    Raises:
        ValueError: If `sort_algorithm` is not a known algorithm.
        TypeError: If a name is not a field of `Config`.
    """
    if "sort_algorithm" in changes:
        check_sort_algorithm(changes["sort_algorithm"])
    new = replace(get_config(), **changes)  # type: ignore[arg-type]
    _CONFIG[-1] = new
    logger.debug(f"configuration set to {new}")
    return new


@contextmanager
def config_context(**changes: object) -> Iterator[Config]:
    """Temporarily change the configuration inside a `with` block.

    Example:
    ```python
    >>> import lazyiter as li
    >>> with li.config_context(join_separator="-"):
    ...     li.Lazy.of(1, 2, 3).join()
    '1-2-3'
    >>> li.Lazy.of(1, 2, 3).join()
    '1,2,3'

    ```
    """
    _CONFIG.append(get_config())
    try:
        yield set_config(**changes)
    finally:
        _CONFIG.pop()
