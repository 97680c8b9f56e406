from __future__ import annotations

import logging
import sys
from contextlib import contextmanager

from psi.config import Settings
from psi.errors import SYNTAX_ERROR, INPUT_ERROR, MEMORY_ERROR, EVAL_ERROR
from psi.evaluation.evaluator import evaluate
from psi.reader.parser import Cursor, parse
from psi.reader.syntax_check import balanced_parens
from psi.types import Outcome
from psi.types.value import Value, Error, error, release

logger = logging.getLogger(__name__)

# Python frames used per level of list nesting by the parser and the evaluator
FRAMES_PER_LEVEL = 2


@contextmanager
def recursion_headroom(extra_frames: int):
    """Temporarily raise the recursion limit by `extra_frames`."""
    old = sys.getrecursionlimit()
    sys.setrecursionlimit(old + extra_frames)
    try:
        yield
    finally:
        sys.setrecursionlimit(old)


class Interpreter:
    """
    Runs one line of Psi through the line checks, the parser and the evaluator.
    Every failure comes back as an Error value; nothing is raised to the caller.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings: Settings = settings if settings is not None else Settings.from_env()

    def check_line(self, line: str) -> Error | None:
        """Reject lines the parser should never see.

        `max_line_length` is the size of the line buffer including the newline,
        so the longest accepted line is one byte shorter.
        """
        limit = self.settings.max_line_length
        if len(line.encode("utf-8")) >= limit:
            logger.warning("Rejected input line of %d characters", len(line))
            return error(INPUT_ERROR, f"Input exceeds maximum size of {limit} bytes")
        if not line:
            return error(SYNTAX_ERROR, "Empty input")
        if not balanced_parens(line):
            return error(SYNTAX_ERROR, "Unbalanced parentheses")
        return None

    def read(self, line: str) -> Value:
        """Check and parse a line; returns the parsed tree or an Error."""
        line = line.rstrip("\r\n")
        rejected = self.check_line(line)
        if rejected is not None:
            return rejected

        cursor = Cursor(line)
        expr = parse(
            cursor,
            max_symbol_length=self.settings.max_symbol_length,
            max_list_capacity=self.settings.max_list_capacity,
        )
        if expr is None:
            return error(SYNTAX_ERROR, "Empty input or unparsable")
        cursor.skip_whitespace()
        if not isinstance(expr, Error) and not cursor.at_end():
            # Only the first expression on a line is evaluated
            logger.debug("Ignoring trailing input %r", cursor.remaining())
        return expr

    def max_depth(self) -> int:
        # Each level of nesting needs an opening and a closing parenthesis
        return self.settings.max_line_length // 2

    def eval(self, line: str) -> Outcome:
        with recursion_headroom(FRAMES_PER_LEVEL * self.max_depth()):
            return self._eval(line)

    def _eval(self, line: str) -> Outcome:
        try:
            expr = self.read(line)
            if isinstance(expr, Error):
                return expr
            logger.debug("Evaluating %s", expr)
            result = evaluate(expr)
            release(expr)
            return result
        except RecursionError:
            logger.warning("Nesting too deep in %r", line[:40])
            return error(EVAL_ERROR, "Expression nested too deeply")
        except MemoryError:
            logger.error("Out of memory while evaluating %r", line[:40])
            return error(MEMORY_ERROR, "Out of memory")
