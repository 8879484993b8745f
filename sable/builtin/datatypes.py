"""Equality, type predicates, coercions and symbol primitives."""

from __future__ import annotations

from sable import LispValue
from sable.builtin.checks import expect_at_least, expect_count, expect_number, expect_text, fail
from sable.printer import display_string, format_number, profile, write_string
from sable.reader.parser import parse_number
from sable.types.datum import eq, equal, type_name
from sable.types.environment import Environment
from sable.types.macro import Macro
from sable.types.nil import VoidType
from sable.types.procedure import Procedure
from sable.types.symbol import Symbol


def _chained(name: str, same):
    def primitive(env: Environment, args: list[LispValue]) -> bool:
        """#t when every argument matches the first."""
        expect_at_least(name, args, 1)
        return all(same(args[0], other) for other in args[1:])

    return primitive


def _type_test(name: str, kind: type):
    def primitive(env: Environment, args: list[LispValue]) -> bool:
        expect_count(name, args, 1)
        return isinstance(args[0], kind)

    return primitive


def typeof(env: Environment, args: list[LispValue]) -> Symbol:
    expect_count("typeof", args, 1)
    return Symbol(type_name(args[0]))


def string_to_number(env: Environment, args: list[LispValue]) -> LispValue:
    """The number a string spells, or #f."""
    expect_count("string->number", args, 1, "string")
    number = parse_number(expect_text("string->number", args[0]).strip())
    return False if number is None else number


def number_to_string(env: Environment, args: list[LispValue]) -> str:
    expect_count("number->string", args, 1, "number")
    return format_number(expect_number("number->string", args[0]))


def string_to_symbol(env: Environment, args: list[LispValue]) -> Symbol:
    expect_count("string->symbol", args, 1, "string")
    return Symbol(expect_text("string->symbol", args[0]))


def symbol_to_string(env: Environment, args: list[LispValue]) -> str:
    expect_count("symbol->string", args, 1, "symbol")
    if not isinstance(args[0], Symbol):
        raise fail(f"'symbol->string arg {profile(args[0])} isn't a symbol!")
    return args[0].name


def write_to_string(env: Environment, args: list[LispValue]) -> str:
    expect_count("write-to-string", args, 1)
    return write_string(args[0])


def display_to_string(env: Environment, args: list[LispValue]) -> str:
    expect_count("display-to-string", args, 1)
    return display_string(args[0])


def symbol_append(env: Environment, args: list[LispValue]) -> Symbol:
    expect_at_least("symbol-append", args, 1)
    for a in args:
        if not isinstance(a, Symbol):
            raise fail(f"'symbol-append received a non-symbol object {profile(a)}!")
    return Symbol("".join(a.name for a in args))


def register(env: Environment) -> None:
    """Register equality, typing and coercion primitives into the given environment."""
    primitives = {
        "eq?": _chained("eq?", eq),
        "equal?": _chained("equal?", equal),
        "typeof": typeof,
        "void?": _type_test("void?", VoidType),
        "boolean?": _type_test("boolean?", bool),
        "symbol?": _type_test("symbol?", Symbol),
        "procedure?": _type_test("procedure?", Procedure),
        "macro?": _type_test("macro?", Macro),
        "string->number": string_to_number,
        "number->string": number_to_string,
        "string->symbol": string_to_symbol,
        "symbol->string": symbol_to_string,
        "write-to-string": write_to_string,
        "display-to-string": display_to_string,
        "symbol-append": symbol_append,
    }
    for name, fn in primitives.items():
        env.register(name, fn)
