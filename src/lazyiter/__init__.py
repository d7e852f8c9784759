from ._core import Config, SortAlgorithm, config_context, get_config, set_config
from ._errors import CursorMovedError
from ._lazy import Lazy
from ._results import NONE, NoneOption, Option, OptionUnwrapError, Some
from ._sort import descending, heap_sort, heapify, quick_sort
from ._types import Comparator, Item, Predicate

__all__ = [
    "NONE",
    "Comparator",
    "Config",
    "CursorMovedError",
    "Item",
    "Lazy",
    "NoneOption",
    "Option",
    "OptionUnwrapError",
    "Predicate",
    "Some",
    "SortAlgorithm",
    "config_context",
    "descending",
    "get_config",
    "heap_sort",
    "heapify",
    "quick_sort",
    "set_config",
]
