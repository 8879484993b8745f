"""Equality, truthiness, typing and copying over Sable data."""

from __future__ import annotations

from sable import LispValue
from sable.types.nil import NilType, VoidType
from sable.types.pair import Pair
from sable.types.symbol import Symbol


def is_number(obj: LispValue) -> bool:
    return isinstance(obj, float)


def is_true(obj: LispValue) -> bool:
    """Only the boolean #f is false."""
    return obj is not False


def eq(a: LispValue, b: LispValue) -> bool:
    """Shallow equality: atoms by value, everything else by identity."""
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    if isinstance(a, (float, str, Symbol)):
        return a == b
    return False


def equal(a: LispValue, b: LispValue) -> bool:
    """Deep equality over Pair structure, falling back to eq for atoms.

    Walks both structures with an explicit stack. A pair of cells already
    being compared is assumed equal, so cyclic structures terminate.
    """
    seen: set[tuple[int, int]] = set()
    stack = [(a, b)]
    while stack:
        x, y = stack.pop()
        if isinstance(x, Pair) and isinstance(y, Pair):
            key = (id(x), id(y))
            if key in seen:
                continue
            seen.add(key)
            stack.append((x.cdr, y.cdr))
            stack.append((x.car, y.car))
        elif not eq(x, y):
            return False
    return True


def type_name(obj: LispValue) -> str:
    # Late import: procedure and macro depend on the environment layer
    from sable.types.procedure import Procedure
    from sable.types.macro import Macro

    match obj:
        case bool():
            return "boolean"
        case float():
            return "number"
        case str():
            return "string"
        case Symbol():
            return "symbol"
        case NilType():
            return "nil"
        case VoidType():
            return "void"
        case Pair():
            return "pair"
        case Procedure():
            return "procedure"
        case Macro():
            return "macro"
    return type(obj).__name__


def copy_datum(obj: LispValue) -> LispValue:
    """Deep-copy Pair structure; atoms are returned unchanged.

    Shared and cyclic sub-structure in `obj` is reproduced in the copy.
    """
    if not isinstance(obj, Pair):
        return obj
    copies: dict[int, Pair] = {}
    root = Pair(None, None)
    copies[id(obj)] = root
    # Each entry is (source cell, destination cell) still to be filled in
    pending = [(obj, root)]
    while pending:
        src, dst = pending.pop()
        for slot in ("car", "cdr"):
            value = getattr(src, slot)
            if isinstance(value, Pair):
                existing = copies.get(id(value))
                if existing is None:
                    existing = Pair(None, None)
                    copies[id(value)] = existing
                    pending.append((value, existing))
                value = existing
            setattr(dst, slot, value)
    return root
