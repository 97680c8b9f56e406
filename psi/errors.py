"""Error kinds and host-level exceptions for Psi.

Language errors are values (see psi.types.value.Error); the names below are the
`kind` strings those values carry. The exception classes are only for faults
in the host that the interpreter turns into error values.
"""

# Error kinds carried by Error values
SYNTAX_ERROR = "SyntaxError"
TYPE_ERROR = "TypeError"
ARITY_ERROR = "ArityError"
DIVISION_BY_ZERO_ERROR = "DivisionByZeroError"
UNBOUND_ERROR = "UnboundError"
INAPPLICABLE_HEAD_ERROR = "InapplicableHeadError"
EVAL_ERROR = "EvalError"
LIST_ERROR = "ListError"
MEMORY_ERROR = "MemoryError"
INPUT_ERROR = "InputError"
IO_ERROR = "IOError"


class PsiError(Exception):
    """ Base class for all Psi errors"""
    pass


class PsiAppendError(PsiError):
    """ Raised when a list refuses to adopt a new element"""

    def __init__(self, kind: str, message: str):
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message


class PsiConfigError(PsiError):
    """ Raised when a configuration value cannot be used"""
