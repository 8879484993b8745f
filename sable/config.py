from __future__ import annotations
import logging
import os
from pathlib import Path


# Resolve installation dir (sable package directory)
_SABLE_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _SABLE_DIR / 'prelude'
_DEFAULT_RECURSION_LIMIT = 10000
_DEFAULT_TRACE_LIMIT = 20


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_prelude_root() -> Path:
    raw = os.environ.get('SABLE_PRELUDE_PATH')
    return Path(raw) if raw else _DEFAULT_PRELUDE_DIR


def get_recursion_limit() -> int:
    return int_from_env('SABLE_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT)


def get_trace_limit() -> int:
    return int_from_env('SABLE_TRACE_LIMIT', _DEFAULT_TRACE_LIMIT)


def get_log_level() -> int:
    raw = os.environ.get('SABLE_LOG_LEVEL', 'WARNING').upper()
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.WARNING
