import pytest

from psi.builtins import lookup, apply_builtin, names
from psi.errors import (
    UNBOUND_ERROR, INAPPLICABLE_HEAD_ERROR, DIVISION_BY_ZERO_ERROR, EVAL_ERROR, LIST_ERROR,
    TYPE_ERROR, ARITY_ERROR,
)
from psi.evaluation import evaluator
from psi.evaluation.evaluator import evaluate
from psi.reader.parser import read
from psi.types import Builtin, Halt
from psi.types.value import (
    Error, Function, number, boolean, symbol, empty_list, error, append, render,
)


def test_self_evaluating_atoms_are_fresh_copies():
    for atom in (number(2.5), boolean(False), error("TypeError", "x")):
        result = evaluate(atom)
        assert result == atom
        assert result is not atom


def test_symbol_resolves_to_builtin_function():
    result = evaluate(symbol("*"))
    assert isinstance(result, Function)
    assert result.op is Builtin.MUL
    assert render(result) == "<function>"


def test_unknown_symbol_is_unbound():
    result = evaluate(symbol("undefined-symbol"))
    assert result == Error(UNBOUND_ERROR, "Symbol not bound to a function")


def test_empty_list_evaluates_to_empty_list():
    source = empty_list()
    result = evaluate(source)
    assert result == empty_list()
    assert result is not source


def test_non_function_head():
    assert evaluate(read("(1 2 3)")).kind == INAPPLICABLE_HEAD_ERROR
    assert evaluate(read("((+ 1 2) 3)")).kind == INAPPLICABLE_HEAD_ERROR
    assert evaluate(read("(#t)")).kind == INAPPLICABLE_HEAD_ERROR


def test_head_error_wins_over_later_elements():
    assert evaluate(read("(nope (/ 1 0))")).kind == UNBOUND_ERROR


def test_first_error_short_circuits(monkeypatch):
    seen = []

    def spy(name):
        seen.append(name)
        return lookup(name)

    monkeypatch.setattr(evaluator, "lookup", spy)
    result = evaluate(read("(+ 1 (/ 1 0) undefined-symbol)"))
    assert result == Error(DIVISION_BY_ZERO_ERROR, "Division by zero")
    assert "undefined-symbol" not in seen
    assert seen == ["+", "/"]


def test_error_values_in_input_are_reproduced():
    expr = empty_list()
    append(expr, symbol("+"))
    append(expr, error("Custom", "already failed"))
    assert evaluate(expr) == Error("Custom", "already failed")


def test_evaluation_does_not_mutate_input():
    expr = read("(+ 1 (* 2 3))")
    before = render(expr)
    evaluate(expr)
    evaluate(expr)
    assert render(expr) == before


def test_inconsistent_list_is_reported():
    expr = read("(+ 1 2)")
    expr.capacity = 1
    assert evaluate(expr) == Error(LIST_ERROR, "Invalid list count")


def test_unsupported_input_is_eval_error():
    assert evaluate(None) == Error(EVAL_ERROR, "Unsupported value for evaluation")


def test_quit_is_halt_not_data():
    assert evaluate(read("(quit)")) is Halt
    assert evaluate(read("(+ 1 (/ 1 0) (quit))")).kind == DIVISION_BY_ZERO_ERROR


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(+ 1 (quit))", Error(TYPE_ERROR, "Arguments to + must be numbers")),
        ("(* (quit) 2)", Error(TYPE_ERROR, "Arguments to * must be numbers")),
        ("(- (quit))", Error(TYPE_ERROR, "First argument to - must be a number")),
        ("(/ 1 (quit))", Error(TYPE_ERROR, "Arguments to / must be numbers")),
        ("(= (quit) (quit))", Error(TYPE_ERROR, "Unsupported types for equality comparison")),
        ("(quit (quit))", Error(ARITY_ERROR, "quit takes no arguments")),
        ("((quit))", Error(INAPPLICABLE_HEAD_ERROR, "Expression head is not a function")),
    ]
)
def test_nested_quit_reaches_the_operation_as_an_operand(source, expected):
    assert evaluate(read(source)) == expected


def test_quit_symbol_alone_is_a_function():
    assert evaluate(symbol("quit")) == Function(Builtin.QUIT)


def test_registry_order_and_dispatch():
    assert names() == ["+", "-", "*", "/", "=", "quit"]
    assert lookup("quitting") is None
    assert apply_builtin(Builtin.SUB, [number(3)]) == number(-3)
    assert apply_builtin(Builtin.EQ, [symbol("a"), symbol("a")]) == boolean(True)


@pytest.mark.parametrize("source", ["42", "-3.500", "#t", "#f", "()"])
def test_rendering_self_evaluating_atoms_is_idempotent(source):
    once = render(evaluate(read(source)))
    twice = render(evaluate(read(once)))
    assert once == twice
