"""Chunked map-reduce over a lazy entity stream using a thread pool."""

from __future__ import annotations

from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from itertools import islice
from typing import Callable, Iterable, Iterator, TypeVar

from .utils.logging import get_logger

LOGGER = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def chunked(items: Iterable[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive lists of at most ``size`` items."""

    if size < 1:
        raise ValueError("chunk size must be at least 1")
    iterator = iter(items)
    while True:
        chunk = list(islice(iterator, size))
        if not chunk:
            return
        yield chunk


def tree_reduce(partials: list[R], combine: Callable[[R, R], R], empty: Callable[[], R]) -> R:
    """Combine ``partials`` pairwise until a single result remains.

    Neighbouring results are merged level by level, so ``combine`` only has
    to be associative.
    """

    if not partials:
        return empty()
    level = list(partials)
    while len(level) > 1:
        merged = [combine(level[i], level[i + 1]) for i in range(0, len(level) - 1, 2)]
        if len(level) % 2:
            merged.append(level[-1])
        level = merged
    return level[0]


def par_map_reduce(
    items: Iterable[T],
    fold: Callable[[R, T], R],
    empty: Callable[[], R],
    combine: Callable[[R, R], R],
    *,
    max_workers: int = 4,
    chunk_size: int = 1000,
) -> R:
    """Fold ``items`` in parallel chunks and merge the partial results.

    Every chunk is folded into its own accumulator starting from ``empty()``;
    workers never share state.  At most ``max_workers * 2`` chunks are in
    flight, so ``items`` is only pulled as fast as the workers drain it.
    Partial results are gathered in submission order and combined with
    :func:`tree_reduce`.  Exceptions raised inside a worker propagate to the
    caller.
    """

    def fold_chunk(chunk: list[T]) -> R:
        acc = empty()
        for item in chunk:
            acc = fold(acc, item)
        return acc

    max_in_flight = max_workers * 2
    partials: list[R] = []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        pending: deque[Future[R]] = deque()
        for chunk in chunked(items, chunk_size):
            if len(pending) >= max_in_flight:
                partials.append(pending.popleft().result())
            pending.append(executor.submit(fold_chunk, chunk))
        while pending:
            partials.append(pending.popleft().result())

    LOGGER.debug("Folded %d chunks with %d workers", len(partials), max_workers)
    return tree_reduce(partials, combine, empty)


__all__ = ["chunked", "par_map_reduce", "tree_reduce"]
