"""Serialization of Sable data.

Two renderings are provided: `display_string` for people and `write_string`
for the reader (text literals escaped). Both tolerate cyclic pairs: a cell met
again while it is still being printed is shown as `...`.
"""

from __future__ import annotations

import math
from typing import Sequence

from sable import LispValue
from sable.types.datum import type_name
from sable.types.nil import Nil, NilType, VoidType
from sable.types.pair import Pair
from sable.types.symbol import Symbol

_ESCAPES = str.maketrans({
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
})


def format_number(value: float) -> str:
    if math.isnan(value):
        return "+nan.0"
    if math.isinf(value):
        return "+inf.0" if value > 0 else "-inf.0"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def escape_text(text: str) -> str:
    return '"' + text.translate(_ESCAPES) + '"'


def _render(obj: LispValue, out: list[str], escape: bool, active: set[int]) -> None:
    match obj:
        case bool():
            out.append("#t" if obj else "#f")
        case float():
            out.append(format_number(obj))
        case str():
            out.append(escape_text(obj) if escape else obj)
        case Symbol():
            out.append(obj.name)
        case NilType():
            out.append("()")
        case VoidType():
            pass
        case Pair():
            _render_pair(obj, out, escape, active)
        case _:
            out.append(str(obj))


def _render_pair(obj: Pair, out: list[str], escape: bool, active: set[int]) -> None:
    if id(obj) in active:
        out.append("...")
        return
    out.append("(")
    marked: list[int] = []
    cell = obj
    while True:
        active.add(id(cell))
        marked.append(id(cell))
        _render(cell.car, out, escape, active)
        tail = cell.cdr
        if isinstance(tail, Pair):
            if id(tail) in active:
                out.append(" . ...")
                break
            out.append(" ")
            cell = tail
            continue
        if tail is not Nil:
            out.append(" . ")
            _render(tail, out, escape, active)
        break
    out.append(")")
    for key in marked:
        active.discard(key)


def display_string(obj: LispValue) -> str:
    out: list[str] = []
    _render(obj, out, False, set())
    return "".join(out)


def write_string(obj: LispValue) -> str:
    out: list[str] = []
    _render(obj, out, True, set())
    return "".join(out)


def profile(obj: LispValue) -> str:
    """Describe a value for error messages: its written form plus its type."""
    return f'{write_string(obj)} of type "{type_name(obj)}"'


def profile_args(args: Sequence[LispValue]) -> str:
    if not args:
        return "no args"
    return ", ".join(profile(a) for a in args)
