"""File and process primitives."""

from __future__ import annotations

import logging
from pathlib import Path

from sable import LispValue
from sable.builtin.checks import expect_between, expect_count, expect_index, expect_text, fail
from sable.errors import SchemeExit
from sable.modules.loader import load_file, read_file, read_program
from sable.printer import display_string, write_string
from sable.types.environment import Environment
from sable.types.nil import Void

logger = logging.getLogger(__name__)


def _filename(name: str, args: list[LispValue], count: int = 1) -> Path:
    expect_count(name, args, count)
    return Path(expect_text(name, args[0]))


def _slurp(name: str, path: Path) -> str:
    try:
        return read_file(path)
    except OSError as exc:
        raise fail(f"'{name} couldn't read from file \"{path}\": {exc.strerror}") from exc


def _spit(name: str, path: Path, text: str) -> LispValue:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise fail(f"'{name} couldn't write to file \"{path}\": {exc.strerror}") from exc
    return Void


def file_read(env: Environment, args: list[LispValue]) -> LispValue:
    """The contents of a file as one datum: its single form, or (begin form...)."""
    path = _filename("file-read", args)
    return read_program(_slurp("file-read", path))


def file_read_string(env: Environment, args: list[LispValue]) -> str:
    path = _filename("file-read-string", args)
    return _slurp("file-read-string", path)


def file_write(env: Environment, args: list[LispValue]) -> LispValue:
    """(file-write filename datum) replaces the file with the datum's written form."""
    path = _filename("file-write", args, 2)
    return _spit("file-write", path, write_string(args[1]))


def file_display(env: Environment, args: list[LispValue]) -> LispValue:
    path = _filename("file-display", args, 2)
    return _spit("file-display", path, display_string(args[1]))


def file_delete(env: Environment, args: list[LispValue]) -> bool:
    """#t if a file was removed."""
    path = _filename("file-delete!", args)
    if not path.exists():
        return False
    path.unlink()
    return True


def is_file(env: Environment, args: list[LispValue]) -> bool:
    return _filename("file?", args).exists()


def load(env: Environment, args: list[LispValue]) -> LispValue:
    """Evaluate a source file in the caller's environment."""
    path = _filename("load", args)
    if not path.is_file():
        raise fail(f"'load couldn't read from file \"{path}\"")
    return load_file(env, path)


def exit_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(exit [code]) ends the running program."""
    expect_between("exit", args, 0, 1)
    code = expect_index("exit", args[0]) if args else 0
    logger.debug("exit requested with status %d", code)
    raise SchemeExit(code)


def register(env: Environment) -> None:
    """Register file and process primitives into the given environment."""
    primitives = {
        "file-read": file_read,
        "file-read-string": file_read_string,
        "file-write": file_write,
        "file-display": file_display,
        "file-delete!": file_delete,
        "file?": is_file,
        "load": load,
        "exit": exit_builtin,
    }
    for name, fn in primitives.items():
        env.register(name, fn)
