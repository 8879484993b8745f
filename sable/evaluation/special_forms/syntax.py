"""Shape checks shared by the special-form handlers."""

from __future__ import annotations

from sable import SExpression
from sable.errors import SableSyntaxError
from sable.printer import write_string
from sable.types.pair import Pair, list_items, make_list
from sable.types.symbol import Symbol

BEGIN = Symbol("begin")
LAMBDA = Symbol("lambda")


def syntax_error(keyword: str, reason: str, form: SExpression) -> SableSyntaxError:
    return SableSyntaxError(f"Invalid '{keyword} syntax ({reason}): {write_string(form)}", form)


def operands(form: Pair, keyword: str) -> list[SExpression]:
    """The items after the keyword; the form must be a proper list."""
    items = list_items(form.cdr)
    if items is None:
        raise syntax_error(keyword, "improper form", form)
    return items


def wrap_body(body: list[SExpression]) -> SExpression:
    """A single body expression stands alone; several become one (begin ...)."""
    if len(body) == 1:
        return body[0]
    return Pair(BEGIN, make_list(body))
