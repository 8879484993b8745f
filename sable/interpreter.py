from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator, Literal, Optional, TextIO

from sable import LispValue, SExpression
from sable.builtin import register
from sable.config import get_recursion_limit
from sable.errors import EvaluationDepthError
from sable.evaluation.evaluator import evaluate
from sable.modules.loader import load_file, load_prelude
from sable.reader.parser import read_all
from sable.runtime_context import Runtime, activate
from sable.types.environment import Environment
from sable.types.nil import Void
from sable.types.pair import make_list
from sable.types.symbol import Symbol

logger = logging.getLogger(__name__)


@contextmanager
def _recursion_limit(limit: int) -> Iterator[None]:
    previous = sys.getrecursionlimit()
    if limit > previous:
        sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


class Interpreter:
    """
    Owns one global Environment and its runtime state (call stack, streams).
    Independent instances never share bindings or traces.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        *,
        argv: Iterable[str] = (),
        output: Optional[TextIO] = None,
        input: Optional[TextIO] = None,
        recursion_limit: Optional[int] = None,
    ):
        self.runtime = Runtime(output=output, input=input)
        self.recursion_limit = recursion_limit or get_recursion_limit()
        self.env: Environment = Environment()
        register(self.env)
        self.env.define(Symbol("*argv*"), make_list(list(argv)))

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            try:
                load_prelude(self)
            except FileNotFoundError as exc:
                logger.warning("Starting without prelude: %s", exc)
        elif prelude:
            self.eval_prelude(prelude)

    @property
    def call_stack(self):
        return self.runtime.call_stack

    def eval_prelude(self, code: str) -> None:
        self.eval(code)

    @contextmanager
    def depth_guard(self) -> Iterator[None]:
        """Raise the host recursion limit for the block.

        The reader and printer recurse on nesting depth just as evaluation
        does. Running out of host stack inside the block raises
        EvaluationDepthError and leaves the interpreter usable.
        """
        with _recursion_limit(self.recursion_limit):
            try:
                yield
            except RecursionError:
                raise EvaluationDepthError("Maximum recursion depth exceeded") from None

    def _run(self, thunk: Callable[[], LispValue]) -> LispValue:
        """Run `thunk` with this interpreter's runtime active.

        The trace left by a previous failure is cleared first.
        """
        self.runtime.call_stack.reset()
        with activate(self.runtime), self.depth_guard():
            return thunk()

    def eval_datum(self, expr: SExpression) -> LispValue:
        """Evaluate one datum in the global environment."""
        return self._run(lambda: evaluate(expr, self.env))

    def eval(self, code: str) -> LispValue:
        """Evaluate every datum in `code`; return the last result (void if none)."""
        with self.depth_guard():
            forms = read_all(code)
        result: LispValue = Void
        for expr in forms:
            result = self.eval_datum(expr)
        return result

    def load(self, path: str | Path) -> LispValue:
        """Evaluate a source file in the global environment."""
        return self._run(lambda: load_file(self.env, path))

    def trace(self) -> list[str]:
        """Procedure names active when the last error was raised, outermost first."""
        return self.runtime.call_stack.snapshot()

    def reset_trace(self) -> None:
        self.runtime.call_stack.reset()
