"""
  Sable Reader: Lexer and Parser

- Lazy lexing: tokens are produced on demand and carry their source offsets,
  so `read` can report exactly how much of the buffer one datum used.
- Emits Sable data directly:

    - lists -> Pair chains ending in Nil
    - dotted lists -> Pair chains ending in the tail datum
    - ()    -> Nil
    - #t/#f -> bool
    - numbers -> float
    - strings -> str
    - everything else -> Symbol
    - 'x `x ,x ,@x -> (quote x), (quasiquote x), (unquote x), (unquote-splicing x)

Input that stops before a datum is finished raises ReadIncomplete; input
that can never form a datum raises ReadMalformed. Interactive callers keep
asking for more text on the former and report the latter.
"""

from __future__ import annotations

import math
import re
from typing import Iterator, NamedTuple, Optional

from sable import SExpression
from sable.errors import ReadIncomplete, ReadMalformed
from sable.types.nil import Nil
from sable.types.pair import Pair, make_list
from sable.types.symbol import Symbol


TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<quote>,@|[\'`,])"  # ' ` , ,@
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<open_string>")'  # string with no closing quote yet
    r'|(?P<atom>[^\s()";]+)',  # fallback: numbers, booleans, symbols
    re.DOTALL,
)
WHITESPACE_RE = re.compile(r"\s*")
NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

NAMED_NUMBERS: dict[str, float] = {
    "+inf.0": math.inf,
    "-inf.0": -math.inf,
    "+nan.0": math.nan,
    "-nan.0": math.nan,
}

ESCAPED_CHARS: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
}

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    ",": Symbol("unquote"),
    ",@": Symbol("unquote-splicing"),
}

DOT = Symbol(".")


class Token(NamedTuple):
    kind: str
    text: str
    start: int
    end: int


def lex(source: str, pos: int = 0) -> Iterator[Token]:
    """Token generator: yields Tokens, skipping whitespace and comments."""
    n = len(source)
    while True:
        pos = WHITESPACE_RE.match(source, pos).end()
        if pos >= n:
            return
        m = TOKEN_RE.match(source, pos)
        kind = m.lastgroup
        if kind != "comment":
            yield Token(kind, m.group(kind), m.start(), m.end())
        pos = m.end()


def unescape(body: str) -> str:
    return ESCAPE_RE.sub(lambda m: ESCAPED_CHARS.get(m.group(1), m.group(1)), body)


def parse_number(text: str) -> Optional[float]:
    if NUMBER_RE.fullmatch(text):
        return float(text)
    return NAMED_NUMBERS.get(text)


def parse_atom(text: str) -> SExpression:
    if text == "#t":
        return True
    if text == "#f":
        return False
    number = parse_number(text)
    if number is not None:
        return number
    return Symbol(text)


class TokenStream:
    def __init__(self, token_iter: Iterator[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []
        self.last_end = 0

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise ReadIncomplete("Unexpected end of input")
        self.buffer.pop(0)
        self.last_end = token.end
        return token

    def parse_expr(self) -> SExpression:
        token = self.advance()

        match token.kind:
            case "atom":
                return parse_atom(token.text)
            case "string":
                return unescape(token.text[1:-1])
            case "open_string":
                raise ReadIncomplete("Unterminated string literal")
            case "rparen":
                raise ReadMalformed(f"Unexpected ')' at offset {token.start}")
            case "quote":
                following = self.peek()
                if following is not None and following.kind == "rparen":
                    raise ReadMalformed(f"Nothing to quote after {token.text!r} at offset {token.start}")
                return make_list([QUOTE_FORMS[token.text], self.parse_expr()])
            case "lparen":
                return self.parse_list(token)

        raise ReadMalformed(f"Unknown token: {token.kind} {token.text}")

    def parse_list(self, opener: Token) -> SExpression:
        items: list[SExpression] = []
        dots: list[int] = []
        while True:
            token = self.peek()
            if token is None:
                raise ReadIncomplete(f"Unclosed '(' at offset {opener.start}")
            if token.kind == "rparen":
                self.advance()
                break
            if token.kind == "atom" and token.text == ".":
                self.advance()
                dots.append(len(items))
                items.append(DOT)
                continue
            items.append(self.parse_expr())

        if not dots:
            return make_list(items)
        # A dot is legal only as the penultimate item; leading "(. x)" stays a plain list
        if len(dots) == 1 and dots[0] == len(items) - 2:
            if dots[0] == 0:
                return make_list(items)
            return make_list(items[:-2], items[-1])
        raise ReadMalformed(f"Misplaced '.' in list at offset {opener.start}")

    def at_end(self) -> bool:
        return self.peek() is None


def read(text: str) -> tuple[SExpression, int]:
    """Read the first datum in `text`.

    Returns the datum and the offset just past its last character, so the
    caller can resume reading at text[consumed:].
    """
    stream = TokenStream(lex(text))
    if stream.at_end():
        raise ReadIncomplete("No datum in input")
    datum = stream.parse_expr()
    return datum, stream.last_end


def read_all(text: str) -> list[SExpression]:
    """Read every datum in `text`; trailing whitespace and comments are ignored."""
    stream = TokenStream(lex(text))
    data: list[SExpression] = []
    while not stream.at_end():
        data.append(stream.parse_expr())
    return data
