"""
Command-line entrypoint of the equation solver.

This script either:
- Solves every expression given as argument and prints one line per expression
- Or runs an interactive prompt reading one expression per line

Interactive commands:
- ``history``: list the equations solved so far
- ``clear``: forget the history
- ``quit``: leave the prompt (end-of-file works too)
"""

import argparse
import sys
from typing import List, Optional, TextIO

from pydantic import BaseModel, Field, ValidationError

from equation_solver.client.session import CalculatorSession
from equation_solver.common.logger import configure_logging, logger

PROMPT = "> "
ERROR_PREFIX = "Error:"


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expressions : List[str]
        Expressions to solve; the interactive prompt starts when empty.
    history_size : Optional[int]
        Maximum number of history entries kept by the session.
    verbose : bool
        Enable debug logging.
    """

    expressions: List[str] = Field(default_factory=list)
    history_size: Optional[int] = Field(default=None, ge=1)
    verbose: bool = False


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments to parse, ``sys.argv[1:]`` when None
    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="equation-solver",
        description="Solve arithmetic equations using + - x / and brackets",
        epilog="Put '--' before expressions starting with a minus sign, e.g. -- '-5 + 3'",
    )

    parser.add_argument(
        "expressions",
        nargs="*",
        help="Expressions to solve, e.g. '3 + (2 x 4)'. Starts a prompt if omitted",
    )
    parser.add_argument(
        "--history-size",
        type=int,
        default=None,
        help="Maximum number of equations kept in the history",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    try:
        return CliArgs(
            expressions=args.expressions,
            history_size=args.history_size,
            verbose=args.verbose,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def solve_all(session: CalculatorSession, expressions: List[str], out: TextIO) -> int:
    """
    Solve each expression and print ``<expression> = <display>``.

    :param session: Session collecting the history
    :param expressions: Expressions to solve, in order
    :param out: Stream receiving the results
    :return: Exit status, 1 if any expression ended with an error
    """
    status = 0
    for expression in expressions:
        display = session.equals(expression)
        print(f"{expression} = {display}", file=out)
        if display.startswith(ERROR_PREFIX):
            status = 1
    return status


def run_prompt(session: CalculatorSession, stdin: TextIO, out: TextIO) -> None:
    """
    Read expressions and commands until ``quit`` or end-of-file.

    :param session: Session collecting the history
    :param stdin: Stream to read lines from
    :param out: Stream receiving prompts and results
    """
    while True:
        print(PROMPT, end="", file=out, flush=True)
        line = stdin.readline()
        if not line:
            # End-of-file
            print(file=out)
            break

        text = line.strip()
        if not text:
            continue
        command = text.lower()
        if command == "quit":
            break
        if command == "history":
            for index, entry in enumerate(session.history_lines(), start=1):
                print(f"{index}: {entry}", file=out)
            continue
        if command == "clear":
            session.clear_history()
            print("History cleared.", file=out)
            continue

        print(session.equals(text), file=out)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function of the ``equation-solver`` command.
    """
    cli_args = parse_args(argv)
    configure_logging(cli_args.verbose)

    session = CalculatorSession(max_history=cli_args.history_size)

    if cli_args.expressions:
        logger.debug(f"🧮 Solving {len(cli_args.expressions)} expressions from the command line")
        return solve_all(session, cli_args.expressions, sys.stdout)

    logger.debug("🧮 Starting interactive prompt")
    run_prompt(session, sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
