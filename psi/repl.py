from __future__ import annotations

import logging
import sys
from typing import Callable, TextIO

from psi.errors import IO_ERROR
from psi.interpreter import Interpreter
from psi.types import Halt
from psi.types.value import error, render

logger = logging.getLogger(__name__)

QUIT_MESSAGE = "Quitting..."


class Repl:
    """Prompt, read a line, evaluate, print; until quit or end of input."""

    def __init__(
        self,
        interpreter: Interpreter | None = None,
        input_fn: Callable[[str], str] | None = None,
        output: TextIO | None = None,
        prompt: str | None = None,
    ):
        self.interpreter = interpreter if interpreter is not None else Interpreter()
        self.input_fn = input_fn if input_fn is not None else input
        self.output = output if output is not None else sys.stdout
        self.prompt = prompt if prompt is not None else self.interpreter.settings.prompt

    def write(self, text: str) -> None:
        self.output.write(text + "\n")
        self.output.flush()

    def step(self, line: str) -> bool:
        """Evaluate one line and print it. Returns False once the session should end."""
        outcome = self.interpreter.eval(line)
        if outcome is Halt:
            self.write(QUIT_MESSAGE)
            return False
        self.write(render(outcome))
        return True

    def run(self) -> int:
        while True:
            try:
                line = self.input_fn(self.prompt)
            except EOFError:
                self.write("\n" + QUIT_MESSAGE)
                return 0
            except KeyboardInterrupt:
                self.write("")
                continue
            except OSError as exc:
                logger.error("Failed to read input: %s", exc)
                self.write(render(error(IO_ERROR, "Input error")))
                continue
            if not self.step(line):
                return 0


def enable_history() -> bool:
    """Turn on line editing for input() where readline exists."""
    try:
        import readline  # noqa: F401
    except ImportError:
        return False
    return True
