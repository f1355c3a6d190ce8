"""Monkey error taxonomy shared by the parser and the evaluator."""

from __future__ import annotations

from .ast import Pos


class MonkeyError(Exception):
    """Base error for Monkey parsing/evaluation."""

    def __init__(self, msg: str, pos: Pos | None = None):
        if pos is None:
            super().__init__(msg)
        else:
            super().__init__(f"{msg} at line {pos.line} col {pos.col}")
        self.msg = msg
        self.pos = pos


# ============================================================
# Parse errors
# ============================================================


class ParseError(MonkeyError):
    """Parse failure. Used directly for contextual (custom) failures."""


class UnexpectedToken(ParseError):
    """A required token was absent."""

    def __init__(self, expected: str, got: str, pos: Pos | None = None):
        super().__init__(f"expected {expected}, got '{got}'", pos)
        self.expected = expected
        self.got = got


class InvalidPrefix(ParseError):
    """An illegal token appeared where an expression must start."""

    def __init__(self, got: str, pos: Pos | None = None):
        super().__init__(f"invalid token '{got}'", pos)
        self.got = got


# ============================================================
# Evaluation errors
# ============================================================
#
# Evaluation errors never carry a position: str(err) is exactly the message.


class EvalError(MonkeyError):
    """Runtime failure. Used directly by builtins and call application."""

    def __init__(self, msg: str):
        super().__init__(msg)


class UncaughtRef(EvalError):
    def __init__(self, name: str):
        super().__init__(f"identifier not found: {name}")
        self.name = name


class TypeMismatch(EvalError):
    def __init__(self, op: str, left: str, right: str):
        super().__init__(f"type mismatch: {left} {op} {right}")
        self.op = op
        self.left = left
        self.right = right


class IndexNotSupported(TypeMismatch):
    """Index operator applied to a collection/index pair it does not accept."""

    def __init__(self, left: str, right: str):
        EvalError.__init__(self, f"index operator not supported: {left}[{right}]")
        self.op = "[]"
        self.left = left
        self.right = right


class UnknownInfixOperator(EvalError):
    def __init__(self, op: str, left: str, right: str):
        super().__init__(f"unknown operator: {left} {op} {right}")
        self.op = op
        self.left = left
        self.right = right


class UnknownPrefixOperator(EvalError):
    def __init__(self, op: str, right: str):
        super().__init__(f"unknown operator: {op}{right}")
        self.op = op
        self.right = right


class DivisionByZero(EvalError):
    def __init__(self) -> None:
        super().__init__("division by zero")


class UnsupportedKeyType(EvalError):
    def __init__(self, type_name: str):
        super().__init__(f"unusable as hash key: {type_name}")
        self.type_name = type_name
