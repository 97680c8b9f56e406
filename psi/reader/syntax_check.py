"""Parenthesis balance check run on a line before it reaches the parser."""

from __future__ import annotations


def balanced_parens(source: str) -> bool:
    """True if every ')' closes an earlier '(' and none is left open."""
    depth = 0
    for ch in source:
        if ch == "(":
            depth += 1
        elif ch == ")":
            if depth == 0:
                return False
            depth -= 1
    return depth == 0
