from __future__ import annotations


class HaltType:
    """Evaluation outcome asking the shell to stop reading lines."""

    __slots__ = ()

    def __repr__(self): return "Halt"


Halt = HaltType()
