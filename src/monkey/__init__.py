"""Monkey interpreter: public API."""

from __future__ import annotations

from .ast import Program
from .errors import EvalError as EvalError, MonkeyError, ParseError as ParseError
from .evaluator import Evaluator as Evaluator
from .fmt import format_source as format_source
from .lexer import tokenize as tokenize
from .object import Object
from .parse import parse_program


def parse(source: str) -> Program:
    """Parse Monkey source into a Program. Raises `ParseError`."""
    return parse_program(source)


def evaluate(program: Program, evaluator: Evaluator | None = None) -> Object:
    """Evaluate a Program. Pass an `Evaluator` to keep bindings across calls."""
    if evaluator is None:
        evaluator = Evaluator()
    return evaluator.evaluate(program)


def eval_source(source: str) -> str:
    """Parse and evaluate `source` in a fresh evaluator.

    Returns the result's display string, or the error message when parsing
    or evaluation fails.
    """
    try:
        return evaluate(parse(source)).to_string()
    except MonkeyError as e:
        return str(e)
