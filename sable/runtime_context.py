from __future__ import annotations

import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional, TextIO


class CallStack:
    """Names of the procedures currently being applied, outermost first.

    Diagnostics only. Frames are pushed before a body runs and popped after it
    returns normally, so after an error the stack still shows where it happened
    until someone resets it.
    """

    __slots__ = ("frames",)

    def __init__(self):
        self.frames: list[str] = []

    def push(self, name: str) -> None:
        self.frames.append(name)

    def pop(self) -> None:
        if self.frames:
            self.frames.pop()

    def reset(self) -> None:
        self.frames.clear()

    def snapshot(self) -> list[str]:
        return list(self.frames)

    def format(self, limit: Optional[int] = None) -> str:
        frames = self.frames
        lines = ["Call stack (outermost first):"]
        if limit is not None and len(frames) > limit:
            lines.append(f"  ... {len(frames) - limit} earlier frame(s)")
            frames = frames[-limit:]
        lines.extend(f"  in {name}" for name in frames)
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.frames)


class Runtime:
    """Per-interpreter mutable state reached by procedures and I/O primitives.

    `output`/`input` left as None resolve to sys.stdout/sys.stdin at the
    moment of use, so redirections made after construction are honoured.
    """

    __slots__ = ("call_stack", "output", "input")

    def __init__(self, output: Optional[TextIO] = None, input: Optional[TextIO] = None):
        self.call_stack = CallStack()
        self.output = output
        self.input = input

    def get_output(self) -> TextIO:
        return self.output if self.output is not None else sys.stdout

    def get_input(self) -> TextIO:
        return self.input if self.input is not None else sys.stdin


# Used when no interpreter has activated its own (bare evaluator calls in tests)
_detached_runtime = Runtime()
_current_runtime: ContextVar[Optional[Runtime]] = ContextVar("sable_runtime", default=None)


def get_runtime() -> Runtime:
    runtime = _current_runtime.get()
    return runtime if runtime is not None else _detached_runtime


def get_call_stack() -> CallStack:
    return get_runtime().call_stack


@contextmanager
def activate(runtime: Runtime) -> Iterator[Runtime]:
    """Make `runtime` current for the duration of the block."""
    token = _current_runtime.set(runtime)
    try:
        yield runtime
    finally:
        _current_runtime.reset(token)
