"""Pair and list primitives.

Traversals go through list_items, so a circular chain is rejected with a
PrimitiveArgumentError instead of looping forever.
"""

from __future__ import annotations

import functools
import itertools

from sable import LispValue
from sable.builtin.checks import (
    expect_at_least,
    expect_between,
    expect_count,
    expect_index,
    expect_list,
    expect_pair,
    expect_procedure,
    fail,
)
from sable.evaluation.evaluator import apply_procedure
from sable.printer import profile, write_string
from sable.types.datum import eq, equal, is_true
from sable.types.environment import Environment
from sable.types.nil import Nil, Void
from sable.types.pair import Pair, is_circular, list_items, make_list, split_list


# -------------------------------
# Pairs
# -------------------------------
def cons(env: Environment, args: list[LispValue]) -> Pair:
    expect_count("cons", args, 2)
    return Pair(args[0], args[1])


def accessor(path: str):
    """Build c[ad]+r: `path` is read right to left, 'a' taking the car and 'd' the cdr."""
    name = f"c{path}r"

    def access(env: Environment, args: list[LispValue]) -> LispValue:
        expect_count(name, args, 1, "pair")
        value = args[0]
        for step in reversed(path):
            if not isinstance(value, Pair):
                raise fail(f"'{name} can't take the c{step}r of {profile(value)} in {write_string(args[0])}!")
            value = value.car if step == "a" else value.cdr
        return value

    return name, access


ACCESSORS = dict(
    accessor("".join(path))
    for depth in range(1, 5)
    for path in itertools.product("ad", repeat=depth)
)


def set_car(env: Environment, args: list[LispValue]) -> LispValue:
    expect_count("set-car!", args, 2)
    expect_pair("set-car!", args[0]).car = args[1]
    return Void


def set_cdr(env: Environment, args: list[LispValue]) -> LispValue:
    expect_count("set-cdr!", args, 2)
    expect_pair("set-cdr!", args[0]).cdr = args[1]
    return Void


def is_pair(env: Environment, args: list[LispValue]) -> bool:
    expect_count("pair?", args, 1)
    return isinstance(args[0], Pair)


def is_atom(env: Environment, args: list[LispValue]) -> bool:
    expect_count("atom?", args, 1)
    return not isinstance(args[0], Pair)


# -------------------------------
# Construction
# -------------------------------
def list_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    return make_list(args)


def list_star(env: Environment, args: list[LispValue]) -> LispValue:
    """(list* 1 2 3) is (1 2 . 3)."""
    expect_at_least("list*", args, 2)
    return make_list(args[:-1], args[-1])


def _shallow_copy(value: LispValue) -> LispValue:
    split = split_list(value)
    if split is None:
        return value
    items, tail = split
    return make_list(items, tail)


def append(env: Environment, args: list[LispValue]) -> LispValue:
    """Join lists. Every argument but the last must be a proper list; the last may be anything."""
    if not args:
        return Nil
    if len(args) == 1:
        return args[0]
    items: list[LispValue] = []
    for value in args[:-1]:
        part = list_items(value)
        if part is None:
            raise fail(f"'append can't append data to non-list {profile(value)}")
        items.extend(part)
    return make_list(items, _shallow_copy(args[-1]))


# -------------------------------
# Queries
# -------------------------------
def length(env: Environment, args: list[LispValue]) -> float:
    expect_count("length", args, 1, "list")
    return float(len(expect_list("length", args[0])))


def reverse(env: Environment, args: list[LispValue]) -> LispValue:
    expect_count("reverse", args, 1, "list")
    return make_list(reversed(expect_list("reverse", args[0])))


def last(env: Environment, args: list[LispValue]) -> LispValue:
    expect_count("last", args, 1, "non-empty list")
    items = expect_list("last", args[0])
    if not items:
        raise fail(f"'last didn't receive a non-empty list: {profile(args[0])}")
    return items[-1]


def init(env: Environment, args: list[LispValue]) -> LispValue:
    """Every element but the last."""
    expect_count("init", args, 1, "non-empty list")
    items = expect_list("init", args[0])
    if not items:
        raise fail(f"'init didn't receive a non-empty list: {profile(args[0])}")
    return make_list(items[:-1])


def ref(env: Environment, args: list[LispValue]) -> LispValue:
    expect_count("ref", args, 2)
    items = expect_list("ref", args[0])
    index = expect_index("ref", args[1])
    if index >= len(items):
        raise fail(f"'ref index {index} is out of bounds for list {write_string(args[0])}")
    return items[index]


def sublist(env: Environment, args: list[LispValue]) -> LispValue:
    """(sublist lst start [length]); runs to the end when length is omitted."""
    expect_between("sublist", args, 2, 3)
    items = expect_list("sublist", args[0])
    start = expect_index("sublist", args[1])
    if len(args) == 3:
        return make_list(items[start:start + expect_index("sublist", args[2])])
    return make_list(items[start:])


def _member(name: str, same):
    def primitive(env: Environment, args: list[LispValue]) -> LispValue:
        expect_count(name, args, 2)
        expect_list(name, args[1])
        cell = args[1]
        while isinstance(cell, Pair):
            if same(cell.car, args[0]):
                return cell
            cell = cell.cdr
        return False

    return primitive


def _entries(name: str, value: LispValue) -> list[Pair]:
    """Alist entries: each one a list of at least (key value)."""
    items = list_items(value)
    if items is None or not all(isinstance(e, Pair) and isinstance(e.cdr, Pair) for e in items):
        raise fail(f"'{name} arg {profile(value)} isn't an alist (list of key-value lists)!")
    return items


def _assoc(name: str, same):
    def primitive(env: Environment, args: list[LispValue]) -> LispValue:
        """Return the value stored under the key, or #f."""
        expect_count(name, args, 2)
        for entry in _entries(name, args[1]):
            if same(entry.car, args[0]):
                return entry.cdr.car
        return False

    return primitive


# -------------------------------
# Higher order
# -------------------------------
def _rows(name: str, lists: list[LispValue]) -> list[tuple]:
    """Transpose the argument lists, stopping at the shortest."""
    return list(zip(*(expect_list(name, lst) for lst in lists)))


def map_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    expect_at_least("map", args, 2)
    proc = expect_procedure("map", args[0])
    return make_list([apply_procedure(proc, list(row), env) for row in _rows("map", args[1:])])


def for_each(env: Environment, args: list[LispValue]) -> LispValue:
    expect_at_least("for-each", args, 2)
    proc = expect_procedure("for-each", args[0])
    for row in _rows("for-each", args[1:]):
        apply_procedure(proc, list(row), env)
    return Void


def filter_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    expect_count("filter", args, 2)
    proc = expect_procedure("filter", args[0])
    items = expect_list("filter", args[1])
    return make_list([item for item in items if is_true(apply_procedure(proc, [item], env))])


def fold(env: Environment, args: list[LispValue]) -> LispValue:
    """(fold f seed lst) calls (f acc item) from the left."""
    expect_count("fold", args, 3)
    proc = expect_procedure("fold", args[0])
    acc = args[1]
    for item in expect_list("fold", args[2]):
        acc = apply_procedure(proc, [acc, item], env)
    return acc


def fold_right(env: Environment, args: list[LispValue]) -> LispValue:
    """(fold-right f seed lst) calls (f item acc) from the right."""
    expect_count("fold-right", args, 3)
    proc = expect_procedure("fold-right", args[0])
    acc = args[1]
    for item in reversed(expect_list("fold-right", args[2])):
        acc = apply_procedure(proc, [item, acc], env)
    return acc


def _ordering(proc, env: Environment):
    def compare(a: LispValue, b: LispValue) -> int:
        if is_true(apply_procedure(proc, [a, b], env)):
            return -1
        if is_true(apply_procedure(proc, [b, a], env)):
            return 1
        return 0

    return functools.cmp_to_key(compare)


def sort(env: Environment, args: list[LispValue]) -> LispValue:
    """(sort less? lst): a new list, stable for elements neither before the other."""
    expect_count("sort", args, 2)
    proc = expect_procedure("sort", args[0])
    items = expect_list("sort", args[1])
    return make_list(sorted(items, key=_ordering(proc, env)))


def is_sorted(env: Environment, args: list[LispValue]) -> bool:
    expect_count("sorted?", args, 2)
    proc = expect_procedure("sorted?", args[0])
    items = expect_list("sorted?", args[1])
    return not any(is_true(apply_procedure(proc, [b, a], env)) for a, b in zip(items, items[1:]))


# -------------------------------
# Predicates
# -------------------------------
def is_list_builtin(env: Environment, args: list[LispValue]) -> bool:
    expect_count("list?", args, 1)
    return list_items(args[0]) is not None


def is_dotted_list(env: Environment, args: list[LispValue]) -> bool:
    """(list*? x): a pair chain ending in something other than ()."""
    expect_count("list*?", args, 1)
    if not isinstance(args[0], Pair):
        return False
    split = split_list(args[0])
    return split is not None and split[1] is not Nil


def is_circular_list(env: Environment, args: list[LispValue]) -> bool:
    expect_count("circular-list?", args, 1)
    return is_circular(args[0])


def is_alist(env: Environment, args: list[LispValue]) -> bool:
    expect_count("alist?", args, 1)
    items = list_items(args[0])
    return items is not None and all(isinstance(e, Pair) and isinstance(e.cdr, Pair) for e in items)


def is_null(env: Environment, args: list[LispValue]) -> bool:
    expect_count("null?", args, 1)
    return args[0] is Nil


def register(env: Environment) -> None:
    """Register pair and list primitives into the given environment."""
    for name, fn in ACCESSORS.items():
        env.register(name, fn)
    primitives = {
        "cons": cons,
        "set-car!": set_car,
        "set-cdr!": set_cdr,
        "pair?": is_pair,
        "atom?": is_atom,
        "list": list_builtin,
        "list*": list_star,
        "append": append,
        "length": length,
        "reverse": reverse,
        "last": last,
        "init": init,
        "ref": ref,
        "sublist": sublist,
        "memq": _member("memq", eq),
        "member": _member("member", equal),
        "assq": _assoc("assq", eq),
        "assoc": _assoc("assoc", equal),
        "map": map_builtin,
        "for-each": for_each,
        "filter": filter_builtin,
        "fold": fold,
        "fold-right": fold_right,
        "sort": sort,
        "sorted?": is_sorted,
        "list?": is_list_builtin,
        "list*?": is_dotted_list,
        "circular-list?": is_circular_list,
        "alist?": is_alist,
        "null?": is_null,
    }
    for name, fn in primitives.items():
        env.register(name, fn)
