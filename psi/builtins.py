from __future__ import annotations
import logging
import sys

from psi.errors import TYPE_ERROR, ARITY_ERROR, DIVISION_BY_ZERO_ERROR
from psi.types import Outcome, Halt
from psi.types.builtin_op import Builtin
from psi.types.value import Value, Number, Boolean, Symbol, number, boolean, error

logger = logging.getLogger(__name__)

# Absolute tolerance used by = on numbers
EPSILON = 1e-10


def numbers_close(a: float, b: float) -> bool:
    # EPSILON plus one ulp of the larger operand
    return abs(a - b) <= EPSILON + sys.float_info.epsilon * max(abs(a), abs(b))

# -------------------------------
# Arithmetic
# -------------------------------
def add(args: list[Outcome]) -> Value:
    total = 0.0
    for arg in args:
        if not isinstance(arg, Number):
            return error(TYPE_ERROR, "Arguments to + must be numbers")
        total += arg.value
    return number(total)

def sub(args: list[Outcome]) -> Value:
    if not args:
        return error(ARITY_ERROR, "'-' requires at least one argument")
    if not isinstance(args[0], Number):
        return error(TYPE_ERROR, "First argument to - must be a number")
    if len(args) == 1:
        return number(-args[0].value)
    if len(args) == 2:
        if not isinstance(args[1], Number):
            return error(TYPE_ERROR, "Second argument to - must be a number")
        return number(args[0].value - args[1].value)
    return error(ARITY_ERROR, "'-' currently supports 1 or 2 arguments")

def mul(args: list[Outcome]) -> Value:
    product = 1.0
    for arg in args:
        if not isinstance(arg, Number):
            return error(TYPE_ERROR, "Arguments to * must be numbers")
        product *= arg.value
    return number(product)

def div(args: list[Outcome]) -> Value:
    if len(args) != 2:
        return error(ARITY_ERROR, "'/' requires exactly 2 arguments")
    dividend, divisor = args
    if not isinstance(dividend, Number) or not isinstance(divisor, Number):
        return error(TYPE_ERROR, "Arguments to / must be numbers")
    if divisor.value == 0.0:
        return error(DIVISION_BY_ZERO_ERROR, "Division by zero")
    return number(dividend.value / divisor.value)

# -------------------------------
# Equality
# -------------------------------
def equals(args: list[Outcome]) -> Value:
    if len(args) != 2:
        return error(ARITY_ERROR, "'=' requires exactly 2 arguments")
    a, b = args
    if not isinstance(a, Value) or not isinstance(b, Value):
        return error(TYPE_ERROR, "Unsupported types for equality comparison")
    if a.tag is not b.tag:
        return boolean(False)
    match a:
        case Number():
            return boolean(numbers_close(a.value, b.value))
        case Boolean():
            return boolean(a.value == b.value)
        case Symbol():
            return boolean(a.name == b.name)
    return error(TYPE_ERROR, "Unsupported types for equality comparison")

# -------------------------------
# Control
# -------------------------------
def quit_(args: list[Outcome]) -> Outcome:
    if args:
        return error(ARITY_ERROR, "quit takes no arguments")
    return Halt

# -------------------------------
# Registry
# -------------------------------
def lookup(name: str) -> Builtin | None:
    """Linear search of the registry, in declaration order."""
    for op in Builtin:
        if op.value == name:
            return op
    return None

def apply_builtin(op: Builtin, args: list[Outcome]) -> Outcome:
    logger.debug("Applying %s to %d argument(s)", op, len(args))
    match op:
        case Builtin.ADD:
            return add(args)
        case Builtin.SUB:
            return sub(args)
        case Builtin.MUL:
            return mul(args)
        case Builtin.DIV:
            return div(args)
        case Builtin.EQ:
            return equals(args)
        case Builtin.QUIT:
            return quit_(args)
    raise ValueError(f"Unknown builtin {op!r}")

def names() -> list[str]:
    return [op.value for op in Builtin]
