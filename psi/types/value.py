"""Tagged runtime values for Psi.

Every datum the reader produces and every result the evaluator returns is one
of six variants:

    - Number   -> a float (no separate integer type)
    - Boolean  -> #t / #f
    - Symbol   -> an identifier resolved against the builtins registry
    - List     -> an ordered sequence of values, owned by the list
    - Function -> a builtin operation identifier
    - Error    -> (kind, message), a value rather than an exception

Each variant only carries the fields for its own tag. Values form trees: a list
owns its elements and nothing is shared between trees.
"""

from __future__ import annotations

import math
import sys
from enum import Enum
from io import StringIO

from psi.config import DEFAULT_MAX_LIST_CAPACITY, INITIAL_LIST_CAPACITY
from psi.errors import PsiAppendError, PsiError, LIST_ERROR, MEMORY_ERROR
from psi.types.builtin_op import Builtin


class Tag(Enum):
    NUMBER = "number"
    BOOLEAN = "boolean"
    SYMBOL = "symbol"
    LIST = "list"
    FUNCTION = "function"
    ERROR = "error"


class Value:
    __slots__ = ()
    tag: Tag

    def __str__(self) -> str:
        return render(self)


class Number(Value):
    __slots__ = ("value",)
    tag = Tag.NUMBER

    def __init__(self, value: float):
        self.value = float(value)

    def __eq__(self, other) -> bool:
        return isinstance(other, Number) and self.value == other.value

    def __hash__(self) -> int:
        return hash((Tag.NUMBER, self.value))

    def __repr__(self):
        return f"Number({self.value!r})"


class Boolean(Value):
    __slots__ = ("value",)
    tag = Tag.BOOLEAN

    def __init__(self, value: bool):
        self.value = bool(value)

    def __eq__(self, other) -> bool:
        return isinstance(other, Boolean) and self.value == other.value

    def __hash__(self) -> int:
        return hash((Tag.BOOLEAN, self.value))

    def __repr__(self):
        return f"Boolean({self.value!r})"


class Symbol(Value):
    __slots__ = ("name",)
    tag = Tag.SYMBOL

    def __init__(self, name: str):
        # Interned, symbols are compared often during lookup
        self.name = sys.intern(name)

    def __eq__(self, other) -> bool:
        return isinstance(other, Symbol) and self.name == other.name

    def __hash__(self) -> int:
        return hash((Tag.SYMBOL, self.name))

    def __repr__(self):
        return f"Symbol({self.name!r})"


class List(Value):
    """A growable, owning sequence of values.

    `capacity` mirrors a backing store that starts at four slots and doubles
    when full. It never shrinks, and `len(items) <= capacity` always holds for
    a list built through `append`.
    """

    __slots__ = ("items", "capacity")
    tag = Tag.LIST

    def __init__(self):
        self.items: list[Value] = []
        self.capacity: int = INITIAL_LIST_CAPACITY

    def is_consistent(self) -> bool:
        return self.capacity > 0 and len(self.items) <= self.capacity

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __eq__(self, other) -> bool:
        return isinstance(other, List) and self.items == other.items

    __hash__ = None

    def __repr__(self):
        return f"List({self.items!r})"


class Function(Value):
    __slots__ = ("op",)
    tag = Tag.FUNCTION

    def __init__(self, op: Builtin):
        self.op = op

    def __eq__(self, other) -> bool:
        return isinstance(other, Function) and self.op is other.op

    def __hash__(self) -> int:
        return hash((Tag.FUNCTION, self.op))

    def __repr__(self):
        return f"Function({self.op.value!r})"


class Error(Value):
    __slots__ = ("kind", "message")
    tag = Tag.ERROR

    def __init__(self, kind: str, message: str):
        self.kind = kind
        self.message = message

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Error)
            and self.kind == other.kind
            and self.message == other.message
        )

    def __hash__(self) -> int:
        return hash((Tag.ERROR, self.kind, self.message))

    def __repr__(self):
        return f"Error({self.kind!r}, {self.message!r})"


# -------------------------------
# Constructors
# -------------------------------
def number(value: float) -> Number:
    return Number(value)


def boolean(value: bool) -> Boolean:
    return Boolean(value)


def symbol(name: str) -> Symbol:
    return Symbol(name)


def function(op: Builtin) -> Function:
    return Function(op)


def empty_list() -> List:
    return List()


def error(kind: str, message: str) -> Error:
    return Error(kind, message)


# -------------------------------
# Ownership
# -------------------------------
def append(
    target: List | None,
    item: Value | None,
    max_capacity: int = DEFAULT_MAX_LIST_CAPACITY,
) -> None:
    """Push `item` as the last element of `target`.

    A refused append raises PsiAppendError and leaves `target` unchanged; the
    item is not adopted and stays the caller's to release.
    """
    if target is None or item is None:
        raise PsiAppendError(LIST_ERROR, "Cannot append a missing value")
    if not isinstance(target, List):
        raise PsiAppendError(LIST_ERROR, "Cannot append to a non-list value")
    if not target.is_consistent():
        raise PsiAppendError(LIST_ERROR, "Invalid list state")
    if len(target.items) >= target.capacity:
        if target.capacity > max_capacity // 2:
            raise PsiAppendError(MEMORY_ERROR, "List capacity would overflow")
        target.capacity *= 2
    target.items.append(item)


def release(value: Value | None) -> None:
    """Recursively drop a value tree. Safe on None and on released lists."""
    if value is None:
        return
    if isinstance(value, List):
        for item in value.items:
            release(item)
        value.items.clear()


def copy(value: Value) -> Value:
    """Deep copy into a freshly owned tree."""
    match value:
        case Number():
            return number(value.value)
        case Boolean():
            return boolean(value.value)
        case Symbol():
            return symbol(value.name)
        case Function():
            return function(value.op)
        case Error():
            return error(value.kind, value.message)
        case List():
            result = empty_list()
            for item in value.items:
                append(result, copy(item))
            return result
    raise PsiError(f"Cannot copy {value!r}")


# -------------------------------
# Rendering
# -------------------------------
_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1


def render_number(value: float) -> str:
    # Whole numbers print without decimals while they fit a 32-bit integer
    if math.isfinite(value) and value.is_integer() and _INT32_MIN <= value <= _INT32_MAX:
        return str(int(value))
    return f"{value:.3f}"


def render(value: Value) -> str:
    with StringIO() as buffer:
        _render_into(buffer, value)
        return buffer.getvalue()


def _render_into(buffer: StringIO, value: Value) -> None:
    match value:
        case Number():
            buffer.write(render_number(value.value))
        case Boolean():
            buffer.write("#t" if value.value else "#f")
        case Symbol():
            buffer.write(value.name)
        case List():
            buffer.write("(")
            for i, item in enumerate(value.items):
                if i:
                    buffer.write(" ")
                _render_into(buffer, item)
            buffer.write(")")
        case Error():
            buffer.write(f"$error{{{value.kind} {value.message}}}")
        case Function():
            buffer.write("<function>")
        case _:
            raise PsiError(f"Cannot render {value!r}")
