"""Monkey token vocabulary and operator precedence table."""

from __future__ import annotations


# Token type constants. Operators, delimiters and keywords use their own
# literal text as type, so `tok.type == "+"` and `tok.type == "let"` work.
TK_ILLEGAL = "ILLEGAL"
TK_EOF = "EOF"
TK_IDENT = "IDENT"
TK_INT = "INT"
TK_STRING = "STRING"

KEYWORDS: set[str] = {
    "else",
    "false",
    "fn",
    "if",
    "let",
    "return",
    "true",
}

# Two-character operators, checked before single-character ones
MULTI_OPS: list[str] = [
    "==",
    "!=",
]

SINGLE_OPS: set[str] = {
    "=",
    "+",
    "-",
    "*",
    "/",
    "!",
    "<",
    ">",
    "(",
    ")",
    "{",
    "}",
    "[",
    "]",
    ",",
    ";",
    ":",
}

INT_MAX = 2**63 - 1
INT_MIN = -(2**63)


# Binding power, higher binds tighter
PREC_LOWEST: int = 1
PREC_EQUALS: int = 2
PREC_LESSGREATER: int = 3
PREC_SUM: int = 4
PREC_PRODUCT: int = 5
PREC_PREFIX: int = 6
PREC_CALL: int = 7

PRECEDENCES: dict[str, int] = {
    "==": PREC_EQUALS,
    "!=": PREC_EQUALS,
    "<": PREC_LESSGREATER,
    ">": PREC_LESSGREATER,
    "+": PREC_SUM,
    "-": PREC_SUM,
    "*": PREC_PRODUCT,
    "/": PREC_PRODUCT,
    "(": PREC_CALL,
    "[": PREC_CALL,
}

INFIX_OPS: set[str] = {"==", "!=", "<", ">", "+", "-", "*", "/"}
PREFIX_OPS: set[str] = {"!", "-"}


class Token:
    """A token with type, literal text, and position."""

    def __init__(self, type_: str, value: str, line: int, col: int):
        self.type: str = type_
        self.value: str = value
        self.line: int = line
        self.col: int = col

    def precedence(self) -> int:
        return PRECEDENCES.get(self.type, PREC_LOWEST)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.type == other.type and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.type, self.value))

    def __repr__(self) -> str:
        return (
            "Token("
            + self.type
            + ", "
            + repr(self.value)
            + ", "
            + str(self.line)
            + ", "
            + str(self.col)
            + ")"
        )


def lookup_ident(word: str) -> str:
    """Token type for an identifier-shaped word: the keyword itself or IDENT."""
    if word in KEYWORDS:
        return word
    return TK_IDENT
