"""String primitives."""

from __future__ import annotations

import operator
import re
from typing import Callable

from sable import LispValue
from sable.builtin.checks import (
    expect_at_least,
    expect_between,
    expect_count,
    expect_index,
    expect_list,
    expect_text,
    fail,
)
from sable.printer import profile, write_string
from sable.types.environment import Environment
from sable.types.pair import make_list


# $n names a group in a replacement; a backslash takes the next character literally
REPLACEMENT_RE = re.compile(r"\\(.)|\$(\d+)", re.DOTALL)


def string_length(env: Environment, args: list[LispValue]) -> float:
    expect_count("string-length", args, 1, "string")
    return float(len(expect_text("string-length", args[0])))


def string_empty(env: Environment, args: list[LispValue]) -> bool:
    expect_count("string-empty?", args, 1, "string")
    return expect_text("string-empty?", args[0]) == ""


def string_reverse(env: Environment, args: list[LispValue]) -> str:
    expect_count("string-reverse", args, 1, "string")
    return expect_text("string-reverse", args[0])[::-1]


def string_append(env: Environment, args: list[LispValue]) -> str:
    return "".join(expect_text("string-append", a) for a in args)


def string_ref(env: Environment, args: list[LispValue]) -> str:
    """A one-character string."""
    expect_count("string-ref", args, 2)
    text = expect_text("string-ref", args[0])
    index = expect_index("string-ref", args[1])
    if index >= len(text):
        raise fail(f"'string-ref index {index} exceeds length of string {write_string(text)}")
    return text[index]


def substring(env: Environment, args: list[LispValue]) -> str:
    """(substring s start [length]); out-of-range bounds are clipped."""
    expect_between("substring", args, 2, 3)
    text = expect_text("substring", args[0])
    start = expect_index("substring", args[1])
    if len(args) == 3:
        return text[start:start + expect_index("substring", args[2])]
    return text[start:]


def string_upcase(env: Environment, args: list[LispValue]) -> str:
    expect_count("string-upcase", args, 1, "string")
    return expect_text("string-upcase", args[0]).upper()


def string_downcase(env: Environment, args: list[LispValue]) -> str:
    expect_count("string-downcase", args, 1, "string")
    return expect_text("string-downcase", args[0]).lower()


def compile_pattern(name: str, pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise fail(f"'{name} got an invalid pattern {write_string(pattern)}: {exc}") from None


def expand_replacement(name: str, match: re.Match, template: str) -> str:
    def substitute(ref: re.Match) -> str:
        if ref.group(1) is not None:
            return ref.group(1)
        index = int(ref.group(2))
        if index > match.re.groups:
            raise fail(f"'{name} has no group {index} in its pattern")
        return match.group(index) or ""

    return REPLACEMENT_RE.sub(substitute, template)


def string_replace(env: Environment, args: list[LispValue]) -> str:
    """(string-replace s pattern replacement) replaces every regex match.

    $n in the replacement inserts group n of the match.
    """
    expect_count("string-replace", args, 3, "string")
    text, pattern, new = (expect_text("string-replace", a) for a in args)
    compiled = compile_pattern("string-replace", pattern)
    return compiled.sub(lambda m: expand_replacement("string-replace", m, new), text)



def string_trim(env: Environment, args: list[LispValue]) -> str:
    expect_count("string-trim", args, 1, "string")
    return expect_text("string-trim", args[0]).strip()


def string_contains(env: Environment, args: list[LispValue]) -> LispValue:
    """Index of the first occurrence of the 2nd string in the 1st, or #f."""
    expect_count("string-contains", args, 2, "string")
    text, needle = (expect_text("string-contains", a) for a in args)
    index = text.find(needle)
    return float(index) if index >= 0 else False


def string_contains_right(env: Environment, args: list[LispValue]) -> LispValue:
    """Index of the last occurrence of the 2nd string in the 1st, or #f."""
    expect_count("string-contains-right", args, 2, "string")
    text, needle = (expect_text("string-contains-right", a) for a in args)
    index = text.rfind(needle)
    return float(index) if index >= 0 else False


def string_join(env: Environment, args: list[LispValue]) -> str:
    expect_between("string-join", args, 1, 2)
    parts = expect_list("string-join", args[0])
    if not all(isinstance(p, str) for p in parts):
        raise fail(f"'string-join arg {profile(args[0])} isn't a string list!")
    joiner = expect_text("string-join", args[1]) if len(args) == 2 else ""
    return joiner.join(parts)


def string_split(env: Environment, args: list[LispValue]) -> LispValue:
    """Split around regex matches, dropping trailing empty strings.

    With no separator (or "") split into characters.
    """
    expect_between("string-split", args, 1, 2)
    text = expect_text("string-split", args[0])
    separator = expect_text("string-split", args[1]) if len(args) == 2 else ""
    if separator == "":
        return make_list(list(text))
    compiled = compile_pattern("string-split", separator)
    if compiled.search(text) is None:
        return make_list([text])
    parts = compiled.split(text)
    if compiled.groups:
        # keep only the text between matches, not the captured groups
        parts = parts[:: compiled.groups + 1]
    while parts and parts[-1] == "":
        parts.pop()
    return make_list(parts)



def is_string(env: Environment, args: list[LispValue]) -> bool:
    expect_count("string?", args, 1)
    return isinstance(args[0], str)


def comparison(name: str, op: Callable[[str, str], bool], fold_case: bool = False):
    """A chained string comparison over one or more strings."""

    def primitive(env: Environment, args: list[LispValue]) -> bool:
        expect_at_least(name, args, 1)
        texts = [expect_text(name, a) for a in args]
        if fold_case:
            texts = [t.casefold() for t in texts]
        return all(op(a, b) for a, b in zip(texts, texts[1:]))

    return primitive


def register(env: Environment) -> None:
    """Register string primitives into the given environment."""
    primitives = {
        "string-length": string_length,
        "string-empty?": string_empty,
        "string-reverse": string_reverse,
        "string-append": string_append,
        "string-ref": string_ref,
        "substring": substring,
        "string-upcase": string_upcase,
        "string-downcase": string_downcase,
        "string-replace": string_replace,
        "string-trim": string_trim,
        "string-contains": string_contains,
        "string-contains-right": string_contains_right,
        "string-join": string_join,
        "string-split": string_split,
        "string?": is_string,
    }
    ordered = {
        "=?": operator.eq,
        "<?": operator.lt,
        ">?": operator.gt,
        "<=?": operator.le,
        ">=?": operator.ge,
    }
    for suffix, op in ordered.items():
        primitives[f"string{suffix}"] = comparison(f"string{suffix}", op)
        primitives[f"string-ci{suffix}"] = comparison(f"string-ci{suffix}", op, fold_case=True)
    for name, fn in primitives.items():
        env.register(name, fn)
