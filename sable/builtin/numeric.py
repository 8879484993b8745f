"""Numeric primitives.

All numbers are floats. Operations follow IEEE semantics instead of raising:
division by zero gives an infinity or NaN, and math domain errors give NaN.
"""

from __future__ import annotations

import math
import operator
import random
from typing import Callable

from sable import LispValue
from sable.builtin.checks import expect_between, expect_count, expect_number, expect_numbers
from sable.types.datum import is_number
from sable.types.environment import Environment


def ieee(fn: Callable[..., float], *xs: float) -> float:
    """Call a math function, mapping domain errors to NaN and overflow to infinity."""
    try:
        return fn(*xs)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


def divide(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def power(base: float, exponent: float) -> float:
    if base == 0.0 and exponent < 0:
        return math.inf
    return ieee(math.pow, base, exponent)


def integral(fn: Callable[[float], int], x: float) -> float:
    """Apply floor/ceil/trunc, leaving infinities and NaN unchanged."""
    return float(fn(x)) if math.isfinite(x) else x


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[LispValue]) -> float:
    return sum(expect_numbers("+", args), 0.0)


def sub(env: Environment, args: list[LispValue]) -> float:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    nums = expect_numbers("-", args)
    if len(nums) == 1:
        return -nums[0]
    result = nums[0]
    for n in nums[1:]:
        result -= n
    return result


def mul(env: Environment, args: list[LispValue]) -> float:
    return math.prod(expect_numbers("*", args), start=1.0)


def div(env: Environment, args: list[LispValue]) -> float:
    """Divide the first number by the rest; unary division inverts."""
    nums = expect_numbers("/", args)
    if len(nums) == 1:
        return divide(1.0, nums[0])
    result = nums[0]
    for n in nums[1:]:
        result = divide(result, n)
    return result


def expt(env: Environment, args: list[LispValue]) -> float:
    """Right-associative: (expt 2 3 2) is 2^(3^2)."""
    nums = expect_numbers("expt", args, 2)
    result = nums[-1]
    for base in reversed(nums[:-1]):
        result = power(base, result)
    return result


def quotient(env: Environment, args: list[LispValue]) -> float:
    expect_count("quotient", args, 2)
    a, b = expect_numbers("quotient", args)
    return integral(math.trunc, divide(a, b))


def remainder(env: Environment, args: list[LispValue]) -> float:
    """Remainder with the sign of the dividend."""
    expect_count("remainder", args, 2)
    a, b = expect_numbers("remainder", args)
    return ieee(math.fmod, a, b)


def round_number(env: Environment, args: list[LispValue]) -> float:
    """Halves round up, toward positive infinity."""
    expect_count("round", args, 1)
    return integral(math.floor, expect_number("round", args[0]) + 0.5)


def log(env: Environment, args: list[LispValue]) -> float:
    expect_count("log", args, 1)
    x = expect_number("log", args[0])
    if x == 0.0:
        return -math.inf
    return ieee(math.log, x)


def atan(env: Environment, args: list[LispValue]) -> float:
    expect_between("atan", args, 1, 2)
    nums = expect_numbers("atan", args)
    if len(nums) == 2:
        return math.atan2(*nums)
    return math.atan(nums[0])


def min_number(env: Environment, args: list[LispValue]) -> float:
    return min(expect_numbers("min", args))


def max_number(env: Environment, args: list[LispValue]) -> float:
    return max(expect_numbers("max", args))


def random_number(env: Environment, args: list[LispValue]) -> float:
    """A float in [0, 1)."""
    expect_count("random", args, 0)
    return random.random()


def unary(name: str, fn: Callable[[float], float]):
    """Lift a one-argument float function into a primitive."""

    def primitive(env: Environment, args: list[LispValue]) -> float:
        expect_count(name, args, 1)
        return fn(expect_number(name, args[0]))

    return primitive


def predicate(name: str, test: Callable[[float], bool]):
    """Lift a test on one number into a primitive returning a boolean."""

    def primitive(env: Environment, args: list[LispValue]) -> bool:
        expect_count(name, args, 1)
        return bool(test(expect_number(name, args[0])))

    return primitive


def comparison(name: str, op: Callable[[float, float], bool]):
    """A chained comparison: (< 1 2 3) holds when every adjacent pair does."""

    def primitive(env: Environment, args: list[LispValue]) -> bool:
        nums = expect_numbers(name, args, 2)
        return all(op(a, b) for a, b in zip(nums, nums[1:]))

    return primitive


def is_number_primitive(env: Environment, args: list[LispValue]) -> bool:
    expect_count("number?", args, 1)
    return is_number(args[0])


def _is_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer()


def _is_odd(x: float) -> bool:
    return math.isfinite(x) and math.fmod(abs(x), 2.0) == 1.0


def _is_even(x: float) -> bool:
    return math.isfinite(x) and math.fmod(abs(x), 2.0) == 0.0


def register(env: Environment) -> None:
    """Register the numeric primitives into the given environment."""
    primitives = {
        "+": add,
        "-": sub,
        "*": mul,
        "/": div,
        "=": comparison("=", operator.eq),
        "<": comparison("<", operator.lt),
        ">": comparison(">", operator.gt),
        "<=": comparison("<=", operator.le),
        ">=": comparison(">=", operator.ge),
        "expt": expt,
        "exp": unary("exp", lambda x: ieee(math.exp, x)),
        "log": log,
        "sqrt": unary("sqrt", lambda x: ieee(math.sqrt, x)),
        "abs": unary("abs", abs),
        "min": min_number,
        "max": max_number,
        "quotient": quotient,
        "remainder": remainder,
        "round": round_number,
        "floor": unary("floor", lambda x: integral(math.floor, x)),
        "ceiling": unary("ceiling", lambda x: integral(math.ceil, x)),
        "truncate": unary("truncate", lambda x: integral(math.trunc, x)),
        "sin": unary("sin", lambda x: ieee(math.sin, x)),
        "cos": unary("cos", lambda x: ieee(math.cos, x)),
        "tan": unary("tan", lambda x: ieee(math.tan, x)),
        "asin": unary("asin", lambda x: ieee(math.asin, x)),
        "acos": unary("acos", lambda x: ieee(math.acos, x)),
        "atan": atan,
        "sinh": unary("sinh", lambda x: ieee(math.sinh, x)),
        "cosh": unary("cosh", lambda x: ieee(math.cosh, x)),
        "tanh": unary("tanh", math.tanh),
        "asinh": unary("asinh", math.asinh),
        "acosh": unary("acosh", lambda x: ieee(math.acosh, x)),
        "atanh": unary("atanh", lambda x: ieee(math.atanh, x)),
        "random": random_number,
        "number?": is_number_primitive,
        "integer?": predicate("integer?", _is_integer),
        "finite?": predicate("finite?", math.isfinite),
        "infinite?": predicate("infinite?", math.isinf),
        "nan?": predicate("nan?", math.isnan),
        "odd?": predicate("odd?", _is_odd),
        "even?": predicate("even?", _is_even),
        "positive?": predicate("positive?", lambda x: x > 0),
        "negative?": predicate("negative?", lambda x: x < 0),
        "zero?": predicate("zero?", lambda x: x == 0),
    }
    for name, fn in primitives.items():
        env.register(name, fn)
