from __future__ import annotations
from enum import Enum


class Builtin(Enum):
    """Identifiers of the native operations, in registry order."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    EQ = "="
    QUIT = "quit"

    def __str__(self):
        return self.value
