"""Mutable cons cells and helpers for walking Pair chains.

Every walker here is cycle-aware: chains built with set-cdr! may loop, so
traversals use Floyd's tortoise and hare instead of trusting the chain to end.
"""

from __future__ import annotations

from typing import Iterable, Optional

from sable import LispValue
from sable.types.nil import Nil


class Pair:
    __slots__ = ("car", "cdr")

    def __init__(self, car: LispValue, cdr: LispValue):
        self.car = car
        self.cdr = cdr

    def __repr__(self) -> str:
        from sable.printer import write_string
        return write_string(self)


def make_list(items: Iterable[LispValue], tail: LispValue = Nil) -> LispValue:
    """Build a Pair chain from `items`, terminated by `tail`."""
    result = tail
    for item in reversed(list(items)):
        result = Pair(item, result)
    return result


def split_list(obj: LispValue) -> Optional[tuple[list[LispValue], LispValue]]:
    """Return (cars, terminator) for a Pair chain, or None if the chain is circular."""
    items: list[LispValue] = []
    slow = fast = obj
    while isinstance(fast, Pair):
        items.append(fast.car)
        fast = fast.cdr
        if not isinstance(fast, Pair):
            break
        items.append(fast.car)
        fast = fast.cdr
        slow = slow.cdr
        if fast is slow:
            return None
    return items, fast


def list_items(obj: LispValue) -> Optional[list[LispValue]]:
    """Return the elements of a proper list, or None for anything else."""
    split = split_list(obj)
    if split is None or split[1] is not Nil:
        return None
    return split[0]


def is_list(obj: LispValue) -> bool:
    return list_items(obj) is not None


def is_circular(obj: LispValue) -> bool:
    slow = fast = obj
    while isinstance(fast, Pair) and isinstance(fast.cdr, Pair):
        slow = slow.cdr
        fast = fast.cdr.cdr
        if slow is fast:
            return True
    return False
