import io

import pytest

from sable.interpreter import Interpreter
from sable.printer import write_string


# Most tests run source text through a fresh Interpreter (primitives plus the
# prelude macros) and compare the written form of the result, which keeps
# expectations in Scheme notation: run("(list 1 2)") == "(1 2)".


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def interp(output):
    """A fresh interpreter whose display/write output goes to `output`."""
    return Interpreter(output=output)


@pytest.fixture
def run(interp):
    """Evaluate source text and return the written form of the last result."""

    def _run(code: str) -> str:
        return write_string(interp.eval(code))

    return _run
