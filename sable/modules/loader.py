from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from sable import LispValue, SExpression
from sable.config import get_prelude_root
from sable.evaluation.evaluator import evaluate
from sable.evaluation.special_forms.syntax import BEGIN
from sable.reader.parser import read_all
from sable.types.environment import Environment
from sable.types.nil import Void
from sable.types.pair import Pair, make_list

logger = logging.getLogger(__name__)

PRELUDE_FILES = ("core.scm",)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def read_program(code: str) -> SExpression:
    """Read a whole source text as one expression.

    A single form stands alone, several are wrapped in (begin ...), and an
    empty text reads as void.
    """
    forms = read_all(code)
    if not forms:
        return Void
    if len(forms) == 1:
        return forms[0]
    return Pair(BEGIN, make_list(forms))


def read_file(path: str | Path) -> str:
    return Path(path).read_text(encoding='utf-8')


def load_source(env: Environment, code: str) -> LispValue:
    return evaluate(read_program(code), env)


def load_file(env: Environment, path: str | Path) -> LispValue:
    """Evaluate every form in the file at `path` inside `env`."""
    logger.debug("Loading %s", path)
    return load_source(env, read_file(path))


def load_prelude(itp: _HasEvalPrelude) -> None:
    """Run the prelude sources (macros such as let, cond and quasiquote)."""
    root = get_prelude_root()
    for name in PRELUDE_FILES:
        path = root / name
        if not path.is_file():
            raise FileNotFoundError(f"Cannot find prelude file {path}")
        logger.debug("Loading prelude %s", path)
        itp.eval_prelude(read_file(path))
