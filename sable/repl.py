"""Interactive read-eval-print loop.

Input accumulates until it holds at least one complete datum; every complete
datum in the buffer is evaluated in turn and any unfinished tail is kept for
the next line.
"""

from __future__ import annotations

import logging
import readline  # noqa: F401
from typing import Callable, Optional, TextIO

from sable.config import get_trace_limit
from sable.errors import (
    EvaluationDepthError,
    ReadIncomplete,
    ReadMalformed,
    SableError,
    SchemeExit,
)
from sable.interpreter import Interpreter
from sable.printer import write_string
from sable.reader.parser import lex, read
from sable.types.nil import Void

logger = logging.getLogger(__name__)

PROMPT = "sable> "
CONTINUATION_PROMPT = ".....> "


class ReplSession:
    def __init__(
        self,
        interpreter: Interpreter,
        output: Optional[TextIO] = None,
        trace_limit: Optional[int] = None,
    ):
        self.interpreter = interpreter
        self.output = output
        self.trace_limit = trace_limit if trace_limit is not None else get_trace_limit()
        self.buffer = ""

    @property
    def prompt(self) -> str:
        return CONTINUATION_PROMPT if self.buffer else PROMPT

    def _print(self, text: str) -> None:
        out = self.output if self.output is not None else self.interpreter.runtime.get_output()
        out.write(text + "\n")
        out.flush()

    def report(self, exc: BaseException) -> None:
        """Print an error and the call stack it left behind, then clear the stack."""
        self._print(f"ERROR: {exc}")
        if len(self.interpreter.call_stack):
            self._print(self.interpreter.call_stack.format(self.trace_limit))
        self.interpreter.reset_trace()

    def feed(self, line: str) -> None:
        """Add one line of input and evaluate whatever is now complete."""
        self.buffer += line + "\n"
        while True:
            if next(lex(self.buffer), None) is None:
                self.buffer = ""
                return
            try:
                with self.interpreter.depth_guard():
                    datum, consumed = read(self.buffer)
            except ReadIncomplete:
                return
            except (ReadMalformed, EvaluationDepthError) as exc:
                self.buffer = ""
                self.report(exc)
                return
            self.buffer = self.buffer[consumed:]
            self.evaluate(datum)

    def evaluate(self, datum) -> None:
        logger.debug("Evaluating %s", datum)
        try:
            result = self.interpreter.eval_datum(datum)
            if result is Void:
                return
            with self.interpreter.depth_guard():
                text = write_string(result)
        except SchemeExit:
            raise
        except SableError as exc:
            self.report(exc)
            return
        except KeyboardInterrupt:
            self.report(KeyboardInterrupt("Interrupted"))
            return
        self._print(text)

    def run(self, read_line: Callable[[str], str] = input) -> None:
        """Prompt until end of input. SchemeExit propagates to the caller."""
        while True:
            try:
                line = read_line(self.prompt)
            except EOFError:
                self._print("")
                return
            except KeyboardInterrupt:
                self.buffer = ""
                self._print("")
                continue
            self.feed(line)
