"""Benchmarks: heap sort vs three-way quicksort vs `sorted`."""

from __future__ import annotations

import random
import statistics
import timeit
from collections.abc import Callable
from functools import cmp_to_key
from typing import Annotated, Final, NamedTuple

import typer
from rich.console import Console
from rich.table import Table

import lazyiter as li

type Dataset = Callable[[int, random.Random], list[int]]

app = typer.Typer(help="Sorting benchmarks for lazyiter.")

CONSOLE: Final = Console()

DATASETS: Final[dict[str, Dataset]] = {
    "random": lambda n, rng: [rng.randrange(n) for _ in range(n)],
    "few keys": lambda n, rng: [rng.randrange(4) for _ in range(n)],
    "sorted": lambda n, _: list(range(n)),
    "reversed": lambda n, _: list(range(n, 0, -1)),
}


class Timing(NamedTuple):
    """Median timings of one dataset, in seconds."""

    dataset: str
    heap_full: float
    quick_full: float
    heap_first: float
    quick_first: float
    builtin: float


def _median(func: Callable[[], object], runs: int) -> float:
    return statistics.median(timeit.repeat(func, number=1, repeat=runs))


def _measure(name: str, data: list[int], runs: int) -> Timing:
    key = cmp_to_key(li.descending)

    def _full(algorithm: li.SortAlgorithm) -> Callable[[], object]:
        return lambda: li.Lazy(data).sort(algorithm=algorithm).to_list()

    def _first(algorithm: li.SortAlgorithm) -> Callable[[], object]:
        return lambda: li.Lazy(data).sort(algorithm=algorithm).shift()

    return Timing(
        dataset=name,
        heap_full=_median(_full("heap"), runs),
        quick_full=_median(_full("quick"), runs),
        heap_first=_median(_first("heap"), runs),
        quick_first=_median(_first("quick"), runs),
        builtin=_median(lambda: sorted(data, key=key, reverse=True), runs),
    )


def _build_table(size: int) -> Table:
    table = Table(title=f"Sorting {size:,} integers (ms, median)")
    table.add_column("Dataset", style="cyan")
    for column in ("heap", "quick", "heap 1st", "quick 1st", "sorted"):
        table.add_column(column, justify="right", style="green")
    return table


def _add_row(table: Table, timing: Timing) -> None:
    table.add_row(
        timing.dataset,
        *li.Lazy(timing[1:]).map(lambda sec: f"{sec * 1_000:.2f}").to_list(),
    )


@app.command()
def main(
    size: Annotated[int, typer.Option(help="Number of elements to sort.")] = 10_000,
    runs: Annotated[int, typer.Option(help="Repetitions per measurement.")] = 5,
    seed: Annotated[int, typer.Option(help="Seed of the random datasets.")] = 0,
) -> None:
    """Run the sorting benchmarks and print a table."""
    CONSOLE.print("Running benchmarks...", style="bold blue")
    rng = random.Random(seed)
    table = _build_table(size)
    (
        li.Lazy.entries(DATASETS)
        .map(lambda item: _measure(item.key, item.value(size, rng), runs))
        .for_each(lambda timing: _add_row(table, timing))
        .to_list()
    )
    CONSOLE.print(table)


if __name__ == "__main__":
    app()
