"""Recursive evaluator for Psi.

Reduces a parsed Value tree to a result without touching the input tree:
atoms are copied, symbols resolve to builtins, and non-empty lists evaluate
every element left to right before applying the head. The first element that
evaluates to an Error ends the evaluation and becomes the result. A Halt from a
nested (quit) is passed on like any other operand; only a top-level (quit)
halts the session.
"""

from __future__ import annotations

import logging

from psi.builtins import lookup, apply_builtin
from psi.errors import UNBOUND_ERROR, INAPPLICABLE_HEAD_ERROR, EVAL_ERROR, LIST_ERROR
from psi.types import Outcome
from psi.types.value import (
    Value,
    Number,
    Boolean,
    Symbol,
    List,
    Function,
    Error,
    number,
    boolean,
    function,
    empty_list,
    error,
    release,
)

logger = logging.getLogger(__name__)


def evaluate(expr: Value) -> Outcome:
    match expr:
        case Number():
            return number(expr.value)
        case Boolean():
            return boolean(expr.value)
        case Error():
            return error(expr.kind, expr.message)
        case Symbol():
            op = lookup(expr.name)
            if op is None:
                logger.debug("Unbound symbol %r", expr.name)
                return error(UNBOUND_ERROR, "Symbol not bound to a function")
            return function(op)
        case List():
            return evaluate_list(expr)
    return error(EVAL_ERROR, "Unsupported value for evaluation")


def evaluate_list(expr: List) -> Outcome:
    if not expr.is_consistent():
        return error(LIST_ERROR, "Invalid list count")
    if not expr.items:
        return empty_list()

    evaluated: list[Outcome] = []
    for item in expr.items:
        result = evaluate(item)
        if isinstance(result, Error):
            for done in evaluated:
                release(done)
            return result
        evaluated.append(result)

    head, *args = evaluated
    if not isinstance(head, Function):
        for done in evaluated:
            release(done)
        return error(INAPPLICABLE_HEAD_ERROR, "Expression head is not a function")

    result = apply_builtin(head.op, args)
    for done in evaluated:
        release(done)
    return result
