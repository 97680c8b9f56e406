"""
Psi command line entry point.

    psi                 # interactive REPL
    psi -e "(+ 1 2)"    # evaluate one line and print the result
"""

from __future__ import annotations

import argparse
import logging
import sys

from psi import __version__
from psi.config import Settings
from psi.errors import PsiConfigError
from psi.interpreter import Interpreter
from psi.repl import Repl, enable_history
from psi.types import Halt
from psi.types.value import Error, render


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='psi',
        description='Psi - a REPL for a minimal S-expression language',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                      # Interactive mode
  %(prog)s -e "(+ 1 2 3)"       # Evaluate one line
  %(prog)s --log-level DEBUG    # Interactive mode with parse/eval tracing
        """
    )
    parser.add_argument(
        '-e', '--eval',
        metavar='EXPR',
        help='Evaluate one line, print the result and exit'
    )
    parser.add_argument(
        '--prompt',
        help='Prompt shown in interactive mode (default: PSI_PROMPT or "psi> ")'
    )
    parser.add_argument(
        '--log-level',
        help='Logging level for stderr diagnostics (default: PSI_LOG_LEVEL or WARNING)'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    args = create_arg_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
    except PsiConfigError as exc:
        print(f"psi: {exc}", file=sys.stderr)
        return 2

    configure_logging(args.log_level or settings.log_level)
    interpreter = Interpreter(settings)

    if args.eval is not None:
        outcome = interpreter.eval(args.eval)
        if outcome is Halt:
            return 0
        print(render(outcome))
        return 1 if isinstance(outcome, Error) else 0

    enable_history()
    return Repl(interpreter, prompt=args.prompt).run()


if __name__ == '__main__':
    sys.exit(main())
