from __future__ import annotations
import os
import sys
from dataclasses import dataclass

from psi.errors import PsiConfigError


# Defaults. The line limit is the historical 1024 byte buffer less its terminator,
# the symbol limit is the historical 256 byte token buffer less its terminator.
DEFAULT_MAX_LINE_LENGTH = 1023
DEFAULT_MAX_SYMBOL_LENGTH = 255
DEFAULT_MAX_LIST_CAPACITY = sys.maxsize
INITIAL_LIST_CAPACITY = 4
DEFAULT_PROMPT = "psi> "
DEFAULT_LOG_LEVEL = "WARNING"


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise PsiConfigError(f"{var} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise PsiConfigError(f"{var} must be positive, got {value}")
    return value


def str_from_env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    return default if raw is None else raw


def get_max_line_length() -> int:
    return int_from_env('PSI_MAX_LINE_LENGTH', DEFAULT_MAX_LINE_LENGTH)


def get_max_symbol_length() -> int:
    return int_from_env('PSI_MAX_SYMBOL_LENGTH', DEFAULT_MAX_SYMBOL_LENGTH)


def get_max_list_capacity() -> int:
    capacity = int_from_env('PSI_MAX_LIST_CAPACITY', DEFAULT_MAX_LIST_CAPACITY)
    if capacity < INITIAL_LIST_CAPACITY:
        raise PsiConfigError(
            f"PSI_MAX_LIST_CAPACITY must be at least {INITIAL_LIST_CAPACITY}, got {capacity}"
        )
    return capacity


def get_prompt() -> str:
    return str_from_env('PSI_PROMPT', DEFAULT_PROMPT)


def get_log_level() -> str:
    return str_from_env('PSI_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper()


@dataclass(frozen=True)
class Settings:
    """Limits and shell options shared by the interpreter and the REPL."""

    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    max_symbol_length: int = DEFAULT_MAX_SYMBOL_LENGTH
    max_list_capacity: int = DEFAULT_MAX_LIST_CAPACITY
    prompt: str = DEFAULT_PROMPT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            max_line_length=get_max_line_length(),
            max_symbol_length=get_max_symbol_length(),
            max_list_capacity=get_max_list_capacity(),
            prompt=get_prompt(),
            log_level=get_log_level(),
        )
