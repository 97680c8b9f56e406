import pytest
from hypothesis import given, strategies as st

from psi.errors import SYNTAX_ERROR, MEMORY_ERROR
from psi.reader.parser import Cursor, parse, parse_all, read
from psi.reader.syntax_check import balanced_parens
from psi.types.value import Error, List, number, boolean, symbol, empty_list, append, render


def _list(*items):
    lst = empty_list()
    for item in items:
        append(lst, item)
    return lst


@pytest.mark.parametrize(
    "source, expected",
    [
        ("42", number(42)),
        ("-7", number(-7)),
        ("3.25", number(3.25)),
        (".5", number(0.5)),
        ("1e3", number(1000)),
        ("2.5E-1", number(0.25)),
        ("#t", boolean(True)),
        ("#f", boolean(False)),
        ("foo", symbol("foo")),
        ("+", symbol("+")),
        ("-", symbol("-")),
        ("-abc", symbol("-abc")),
        ("quit", symbol("quit")),
        ("()", empty_list()),
        ("(+ 1 2)", _list(symbol("+"), number(1), number(2))),
        ("  ( a  ( b c ) )  ", _list(symbol("a"), _list(symbol("b"), symbol("c")))),
        ("(#t#f)", _list(boolean(True), boolean(False))),
    ]
)
def test_parser(source, expected):
    assert read(source) == expected


def test_nested_lists():
    result = read("((a b) (c d))")
    assert isinstance(result, List)
    assert render(result) == "((a b) (c d))"
    assert [len(inner) for inner in result] == [2, 2]


@pytest.mark.parametrize("source", ["", "   ", "\t\n"])
def test_end_of_input_is_nothing_not_an_error(source):
    assert read(source) is None


@pytest.mark.parametrize(
    "source, message",
    [
        ("(1 2", "Unexpected EOF, expected ')'"),
        ("(", "Unexpected EOF, expected ')'"),
        (".", "Invalid number format"),
        ("(1 . 2)", "Invalid number format"),
        (")", "Empty symbol or unparsable token"),
        ("(a (b ) ", "Unexpected EOF, expected ')'"),
    ]
)
def test_syntax_errors(source, message):
    result = read(source)
    assert isinstance(result, Error)
    assert result.kind == SYNTAX_ERROR
    assert result.message == message


def test_error_inside_list_propagates_instead_of_partial_list():
    result = read("(+ 1 (2 .))")
    assert result == Error(SYNTAX_ERROR, "Invalid number format")


def test_symbol_length_limit():
    assert read("a" * 255) == symbol("a" * 255)
    too_long = read("a" * 256)
    assert too_long == Error(SYNTAX_ERROR, "Symbol too long")
    assert read("abcd", max_symbol_length=3) == Error(SYNTAX_ERROR, "Symbol too long")


def test_list_capacity_limit_becomes_error_value():
    result = read("(1 2 3 4 5)", max_list_capacity=7)
    assert result == Error(MEMORY_ERROR, "List capacity would overflow")
    assert render(read("(1 2 3 4 5)", max_list_capacity=8)) == "(1 2 3 4 5)"


def test_cursor_advances_past_each_expression():
    cursor = Cursor("  (a b) 12 #t rest")
    assert parse(cursor) == _list(symbol("a"), symbol("b"))
    assert cursor.remaining() == " 12 #t rest"
    assert parse(cursor) == number(12)
    assert parse(cursor) == boolean(True)
    assert parse(cursor) == symbol("rest")
    assert parse(cursor) is None
    assert cursor.at_end()


def test_numbers_stop_at_longest_literal():
    cursor = Cursor("1.5.3")
    assert parse(cursor) == number(1.5)
    assert parse(cursor) == number(0.3)


def test_failed_parse_leaves_cursor_at_failure():
    cursor = Cursor("(a . b)")
    result = parse(cursor)
    assert isinstance(result, Error)
    assert cursor.pos == 3


def test_parse_all_stops_after_error():
    exprs = list(parse_all(Cursor("1 (2 . 3) 4")))
    assert exprs[0] == number(1)
    assert isinstance(exprs[1], Error)
    assert len(exprs) == 2


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(+ 1 2)", True),
        ("((()))", True),
        ("no parens", True),
        ("(()", False),
        ("())", False),
        (")(", False),
    ]
)
def test_balanced_parens(source, expected):
    assert balanced_parens(source) is expected


@given(st.integers(min_value=-(2 ** 31), max_value=2 ** 31 - 1))
def test_integer_literals_render_unchanged(n):
    assert render(read(str(n))) == str(n)


@given(st.from_regex(r"[a-z+*/=<>!?_][a-z0-9+*/=<>!?_-]{0,20}", fullmatch=True))
def test_symbol_tokens_render_unchanged(name):
    assert render(read(name)) == name
