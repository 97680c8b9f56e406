from psi.types.builtin_op import Builtin
from psi.types.outcome import Halt, HaltType
from psi.types.value import (
    Tag,
    Value,
    Number,
    Boolean,
    Symbol,
    List,
    Function,
    Error,
    number,
    boolean,
    symbol,
    function,
    empty_list,
    error,
    append,
    release,
    copy,
    render,
)

# An evaluation ends in a value (possibly an Error) or in Halt
Outcome = Value | HaltType
