"""Console primitives: printing to and reading from the interpreter's streams."""

from __future__ import annotations

from sable import LispValue
from sable.builtin.checks import expect_count, expect_text
from sable.errors import ReadIncomplete
from sable.printer import display_string, write_string
from sable.reader.parser import read
from sable.runtime_context import get_runtime
from sable.types.environment import Environment
from sable.types.nil import Void
from sable.types.pair import Pair


def display(env: Environment, args: list[LispValue]) -> LispValue:
    expect_count("display", args, 1)
    get_runtime().get_output().write(display_string(args[0]))
    return Void


def write(env: Environment, args: list[LispValue]) -> LispValue:
    expect_count("write", args, 1)
    get_runtime().get_output().write(write_string(args[0]))
    return Void


def newline(env: Environment, args: list[LispValue]) -> LispValue:
    expect_count("newline", args, 0)
    get_runtime().get_output().write("\n")
    return Void


def read_datum(env: Environment, args: list[LispValue]) -> LispValue:
    """Read one datum from the input stream, pulling lines until it is complete.

    End of input before any datum yields void.
    """
    expect_count("read", args, 0)
    stream = get_runtime().get_input()
    buffer = ""
    while True:
        line = stream.readline()
        buffer += line
        try:
            datum, _ = read(buffer)
            return datum
        except ReadIncomplete:
            if not line:
                if buffer.strip():
                    raise
                return Void


def read_string(env: Environment, args: list[LispValue]) -> LispValue:
    """(read-string s) is (datum . rest-of-s); an empty string gives void."""
    expect_count("read-string", args, 1, "string")
    text = expect_text("read-string", args[0]).strip()
    if not text:
        return Void
    datum, consumed = read(text)
    return Pair(datum, text[consumed:].strip())


def register(env: Environment) -> None:
    """Register console primitives into the given environment."""
    primitives = {
        "display": display,
        "write": write,
        "newline": newline,
        "read": read_datum,
        "read-string": read_string,
    }
    for name, fn in primitives.items():
        env.register(name, fn)
