"""Monkey CLI — run .monkey files or start an interactive session."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from .errors import EvalError, MonkeyError, ParseError
from .evaluator import Evaluator
from .fmt import format_program
from .lexer import tokenize
from .parse import parse_program

logger = logging.getLogger(__name__)


USAGE: str = """\
monkey [OPTIONS] [FILE]

Run a Monkey program. With no FILE, start an interactive session.
FILE may be '-' to read the program from standard input.

Options:
  --fmt     Print the formatted program instead of running it
  --tokens  Print one token per line instead of running the program
  --ast     Print the fully parenthesized form of each statement
  --debug   Enable debug logging on stderr
  --help    Show this help message
"""

PROMPT: str = ">>> "


def repl(stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    """Read-eval-print loop over `stdin`; bindings persist between lines."""
    print("Welcome to Monkey", file=stdout)
    ev = Evaluator(stdout=stdout)
    while True:
        print(PROMPT, end="", file=stdout, flush=True)
        line = stdin.readline()
        if line == "":
            print(file=stdout)
            return 0
        line = line.strip()
        if line == ".quit":
            print("Bye!", file=stdout)
            return 0
        if line == "":
            continue
        logger.debug("repl line: %r", line)
        try:
            result = ev.evaluate(parse_program(line))
        except MonkeyError as e:
            print("error: " + str(e), file=stderr)
            continue
        print(result.to_string(), file=stdout)


def _read_source(filepath: str) -> str | None:
    if filepath == "-":
        return sys.stdin.read()
    try:
        with open(filepath, "rb") as f:
            raw = f.read()
    except FileNotFoundError:
        print("monkey: " + filepath + ": No such file or directory", file=sys.stderr)
        return None
    except OSError as e:
        print("monkey: " + filepath + ": " + str(e), file=sys.stderr)
        return None
    try:
        return raw.decode("utf-8")
    except ValueError:
        print("monkey: " + filepath + ": invalid utf-8", file=sys.stderr)
        return None


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    filepath: str = ""
    mode: str = "run"
    debug = False
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg in ("--fmt", "--tokens", "--ast"):
            if mode != "run":
                print("monkey: only one of --fmt, --tokens, --ast", file=sys.stderr)
                return 2
            mode = arg[2:]
            i += 1
        elif arg == "--debug":
            debug = True
            i += 1
        elif arg.startswith("-") and arg != "-":
            print("monkey: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        elif filepath == "":
            filepath = arg
            i += 1
        else:
            print("monkey: unexpected argument '" + arg + "'", file=sys.stderr)
            return 2

    if debug:
        logging.basicConfig(level=logging.DEBUG)

    if filepath == "":
        if mode != "run":
            print("monkey: --" + mode + " requires a file argument", file=sys.stderr)
            return 2
        return repl(sys.stdin, sys.stdout, sys.stderr)

    source = _read_source(filepath)
    if source is None:
        return 1

    if mode == "tokens":
        for tok in tokenize(source):
            print(tok.type + " " + repr(tok.value) + " " + str(tok.line) + ":" + str(tok.col))
        return 0

    try:
        program = parse_program(source)
    except ParseError as e:
        print("monkey: parse error: " + str(e), file=sys.stderr)
        return 1

    if mode == "fmt":
        print(format_program(program), end="")
        return 0
    if mode == "ast":
        for stmt in program.stmts:
            print(str(stmt))
        return 0

    try:
        Evaluator(stdout=sys.stdout).evaluate(program)
    except EvalError as e:
        print("monkey: runtime error: " + str(e), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
