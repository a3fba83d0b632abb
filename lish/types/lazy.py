"""Lazy, single-pass sequences.

A LazySeq wraps an iterator. Consumers pull elements on demand, so a sequence
may be unbounded (`(Array.range 0)`) as long as whatever consumes it stops.
Once consumed it is exhausted; `Array.toArray` materializes it into a list.
"""

from __future__ import annotations

from itertools import count
from typing import Callable, Iterable, Iterator, Optional

from lish import LishValue


class LazySeq:
    __slots__ = ("_iterator", "label")

    def __init__(self, source: Iterable[LishValue], label: str = "lazy"):
        self._iterator: Iterator[LishValue] = iter(source)
        self.label = label

    def __iter__(self) -> Iterator[LishValue]:
        return self._iterator

    def __repr__(self) -> str:
        return f"<{self.label} sequence>"

    def map(self, fn: Callable[[LishValue], LishValue]) -> LazySeq:
        return LazySeq((fn(x) for x in self._iterator), "map")

    def filter(self, pred: Callable[[LishValue], bool]) -> LazySeq:
        return LazySeq((x for x in self._iterator if pred(x)), "filter")


def number_range(start: int | float, end: Optional[int | float] = None, step: int | float = 1) -> LazySeq:
    """Numbers from `start` (inclusive) to `end` (exclusive). Unbounded without `end`."""
    if end is None:
        return LazySeq(count(start, step), "range")

    def gen() -> Iterator[int | float]:
        i = start
        if step > 0:
            while i < end:
                yield i
                i += step
        else:
            while i > end:
                yield i
                i += step

    return LazySeq(gen(), "range")
