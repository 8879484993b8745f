"""Argument validation shared by the primitive library.

Every check raises PrimitiveArgumentError with the offending values profiled,
so messages read like: 'car didn't receive exactly 1 pair: 5 of type "number"
"""

from __future__ import annotations

from sable import LispValue
from sable.errors import PrimitiveArgumentError
from sable.printer import profile, profile_args
from sable.types.datum import is_number
from sable.types.pair import Pair, list_items
from sable.types.procedure import Procedure


def fail(message: str) -> PrimitiveArgumentError:
    return PrimitiveArgumentError(message)


def expect_count(name: str, args: list[LispValue], count: int, what: str = "arg") -> None:
    if len(args) != count:
        raise fail(f"'{name} didn't receive exactly {count} {what}(s): {profile_args(args)}")


def expect_at_least(name: str, args: list[LispValue], count: int) -> None:
    if len(args) < count:
        raise fail(f"'{name} expects at least {count} arg(s): {profile_args(args)}")


def expect_between(name: str, args: list[LispValue], low: int, high: int) -> None:
    if not low <= len(args) <= high:
        raise fail(f"'{name} didn't receive {low} to {high} args: {profile_args(args)}")


def expect_number(name: str, value: LispValue) -> float:
    if not is_number(value):
        raise fail(f"'{name} invalid non-numeric arg {profile(value)} received!")
    return value


def expect_numbers(name: str, args: list[LispValue], minimum: int = 1) -> list[float]:
    expect_at_least(name, args, minimum)
    return [expect_number(name, a) for a in args]


def expect_text(name: str, value: LispValue) -> str:
    if not isinstance(value, str):
        raise fail(f"'{name} arg {profile(value)} isn't a string!")
    return value


def expect_pair(name: str, value: LispValue) -> Pair:
    if not isinstance(value, Pair):
        raise fail(f"'{name} arg {profile(value)} isn't a pair!")
    return value


def expect_list(name: str, value: LispValue) -> list[LispValue]:
    """The elements of a proper, non-circular list."""
    items = list_items(value)
    if items is None:
        raise fail(f"'{name} arg {profile(value)} isn't a proper list!")
    return items


def expect_procedure(name: str, value: LispValue) -> Procedure:
    if not isinstance(value, Procedure):
        raise fail(f"'{name} arg {profile(value)} isn't a procedure!")
    return value


def expect_index(name: str, value: LispValue) -> int:
    """A non-negative integral number, as a Python int."""
    if not is_number(value) or not value.is_integer() or value < 0:
        raise fail(f"'{name} arg {profile(value)} isn't a non-negative integer!")
    return int(value)
