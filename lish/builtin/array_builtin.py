"""The `Array` namespace: sequence operations over arrays and lazy sequences.

Operations that can stay lazy (`map`, `filter`, `flatMap`, `drop`, `tail`) do
so when handed a LazySeq and return plain arrays otherwise. `take` always
returns an array and stops pulling once it has enough elements, which is what
makes unbounded ranges usable.
"""
from __future__ import annotations

from functools import cmp_to_key
from itertools import chain, islice

from lish import LishValue
from lish.assertions import (
    assert_function,
    assert_iterable,
    assert_length_exact,
    assert_length_range,
    assert_number,
    assert_string,
)
from lish.debug_utils.pprint import format_value
from lish.errors import LishRuntimeError
from lish.evaluation.apply import apply
from lish.reader.tokens import Location
from lish.types.function import Lib
from lish.types.lazy import LazySeq, number_range


def _items(value: LishValue):
    """Iteration view: maps iterate as [key value] pairs."""
    if isinstance(value, dict):
        return ([k, v] for k, v in value.items())
    return value


def _seq_and_fn(name: str, args: list[LishValue], loc: Location):
    assert_length_exact(name, 2, loc, args)
    seq, fn = args
    assert_iterable(loc, seq)
    assert_function(loc, fn)
    return _items(seq), fn


def range_(args: list[LishValue], loc: Location) -> LazySeq:
    """(Array.range 0 3) => 0 1 2, lazily. (Array.range 5) counts up forever."""
    assert_length_range("range", 1, 3, loc, args)
    for arg in args:
        assert_number(loc, arg)
    if len(args) == 3 and args[2] == 0:
        loc.fail("range step must not be zero", LishRuntimeError)
    return number_range(*args)


def from_(args: list[LishValue], loc: Location) -> list:
    return list(args)


def to_array(args: list[LishValue], loc: Location) -> list:
    assert_length_exact("toArray", 1, loc, args)
    seq = args[0]
    assert_iterable(loc, seq)
    return list(_items(seq))


def map_(args: list[LishValue], loc: Location) -> LishValue:
    seq, fn = _seq_and_fn("map", args, loc)
    if isinstance(seq, LazySeq):
        return seq.map(lambda x: apply(fn, [x], loc))
    return [apply(fn, [x], loc) for x in seq]


def flat_map(args: list[LishValue], loc: Location) -> LishValue:
    seq, fn = _seq_and_fn("flatMap", args, loc)

    def results():
        for x in seq:
            inner = apply(fn, [x], loc)
            assert_iterable(loc, inner)
            yield from _items(inner)

    if isinstance(seq, LazySeq):
        return LazySeq(results(), "flatMap")
    return list(results())


def filter_(args: list[LishValue], loc: Location) -> LishValue:
    seq, fn = _seq_and_fn("filter", args, loc)
    if isinstance(seq, LazySeq):
        return seq.filter(lambda x: apply(fn, [x], loc))
    return [x for x in seq if apply(fn, [x], loc)]


def fold(args: list[LishValue], loc: Location) -> LishValue:
    """(Array.fold $xs init $f) => (f (f init x0) x1) ..."""
    assert_length_exact("fold", 3, loc, args)
    seq, acc, fn = args
    assert_iterable(loc, seq)
    assert_function(loc, fn)
    for x in _items(seq):
        acc = apply(fn, [acc, x], loc)
    return acc


def _single_seq(name: str, args: list[LishValue], loc: Location):
    assert_length_exact(name, 1, loc, args)
    seq = args[0]
    assert_iterable(loc, seq)
    return _items(seq)


def head(args: list[LishValue], loc: Location) -> LishValue:
    return next(iter(_single_seq("head", args, loc)), None)


def tail(args: list[LishValue], loc: Location) -> LishValue:
    seq = _single_seq("tail", args, loc)
    rest = islice(seq, 1, None)
    if isinstance(seq, LazySeq):
        return LazySeq(rest, "tail")
    return list(rest)


def init(args: list[LishValue], loc: Location) -> list:
    return list(_single_seq("init", args, loc))[:-1]


def last(args: list[LishValue], loc: Location) -> LishValue:
    result = None
    for result in _single_seq("last", args, loc):
        pass
    return result


def _seq_and_count(name: str, args: list[LishValue], loc: Location):
    assert_length_exact(name, 2, loc, args)
    seq, size = args
    assert_iterable(loc, seq)
    assert_number(loc, size)
    return _items(seq), max(int(size), 0)


def take(args: list[LishValue], loc: Location) -> list:
    seq, size = _seq_and_count("take", args, loc)
    return list(islice(seq, size))


def drop(args: list[LishValue], loc: Location) -> LishValue:
    seq, size = _seq_and_count("drop", args, loc)
    rest = islice(seq, size, None)
    if isinstance(seq, LazySeq):
        return LazySeq(rest, "drop")
    return list(rest)


def length(args: list[LishValue], loc: Location) -> int:
    seq = _single_seq("length", args, loc)
    if hasattr(seq, "__len__"):
        return len(seq)
    return sum(1 for _ in seq)


def join(args: list[LishValue], loc: Location) -> str:
    """(Array.join $xs ", "), separator defaults to a single space."""
    assert_length_range("join", 1, 2, loc, args)
    seq = args[0]
    assert_iterable(loc, seq)
    separator = args[1] if len(args) == 2 else " "
    assert_string(loc, separator)
    return separator.join(format_value(x) for x in _items(seq))


def reverse(args: list[LishValue], loc: Location) -> list:
    return list(_single_seq("reverse", args, loc))[::-1]


def sort(args: list[LishValue], loc: Location) -> list:
    """(Array.sort $xs) or (Array.sort $xs $compare) where compare returns a number."""
    assert_length_range("sort", 1, 2, loc, args)
    seq = args[0]
    assert_iterable(loc, seq)
    items = list(_items(seq))
    if len(args) == 1:
        return sorted(items)
    compare = args[1]
    assert_function(loc, compare)
    return sorted(items, key=cmp_to_key(lambda a, b: apply(compare, [a, b], loc)))


def concat(args: list[LishValue], loc: Location) -> list:
    for seq in args:
        assert_iterable(loc, seq)
    return list(chain.from_iterable(_items(seq) for seq in args))


ARRAY = {
    "range": range_,
    "from": from_,
    "toArray": to_array,
    "map": map_,
    "flatMap": flat_map,
    "filter": filter_,
    "fold": fold,
    "head": head,
    "tail": tail,
    "init": init,
    "last": last,
    "take": take,
    "drop": drop,
    "length": length,
    "join": join,
    "reverse": reverse,
    "sort": sort,
    "concat": concat,
}


def namespace() -> dict[str, Lib]:
    return {name: Lib(f"Array.{name}", fn) for name, fn in ARRAY.items()}
