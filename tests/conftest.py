import pytest

from psi.config import Settings
from psi.interpreter import Interpreter
from psi.types.value import render


@pytest.fixture
def interp():
    """Interpreter with default limits, independent of PSI_* variables."""
    return Interpreter(Settings())


@pytest.fixture
def run(interp):
    """Evaluate one line and return its rendered output."""
    def _run(line: str) -> str:
        return render(interp.eval(line))
    return _run
