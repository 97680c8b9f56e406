# Psi: a line-oriented REPL for a minimal S-expression language.
#
# Layout:
# - psi.types:      the tagged Value variants, builtin identifiers, the Halt outcome.
# - psi.reader:     the cursor-based parser and the parenthesis pre-check.
# - psi.builtins:   the fixed registry of native operations.
# - psi.evaluation: the recursive evaluator.
# - psi.interpreter / psi.repl: the line shell around the core.

__version__ = "0.1.0"
