from ._config import (
    Config,
    SortAlgorithm,
    check_sort_algorithm,
    config_context,
    get_config,
    set_config,
)
from ._main import CommonBase, Pipeable

__all__ = [
    "CommonBase",
    "Config",
    "Pipeable",
    "SortAlgorithm",
    "check_sort_algorithm",
    "config_context",
    "get_config",
    "set_config",
]
