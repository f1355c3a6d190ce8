"""Monkey lexer — turns source text into a lazy stream of tokens."""

from __future__ import annotations

from typing import Callable, Iterator

from .tokens import (
    INT_MAX,
    MULTI_OPS,
    SINGLE_OPS,
    TK_EOF,
    TK_ILLEGAL,
    TK_INT,
    TK_STRING,
    Token,
    lookup_ident,
)

# Sentinel for "past the end of input"
_END = ""


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


_INT_MAX_DIGITS = str(INT_MAX)


def _exceeds_int_max(digits: str) -> bool:
    # Compare as text; int() refuses very long digit strings.
    digits = digits.lstrip("0")
    if len(digits) != len(_INT_MAX_DIGITS):
        return len(digits) > len(_INT_MAX_DIGITS)
    return digits > _INT_MAX_DIGITS


def _is_letter(c: str) -> bool:
    return (c >= "a" and c <= "z") or (c >= "A" and c <= "Z") or c == "_"


def _is_space(c: str) -> bool:
    return c == " " or c == "\t" or c == "\n" or c == "\r"


class Lexer:
    """Single-pass lexer with a two-character window (`cur`, `peek`).

    Every token is decided with at most one character of lookahead, so the
    lexer never backtracks. Once the input is exhausted `next_token` keeps
    returning EOF.
    """

    def __init__(self, source: str):
        self._chars: Iterator[str] = iter(source)
        self.cur: str = next(self._chars, _END)
        self.peek: str = next(self._chars, _END)
        self.line: int = 1
        self.col: int = 1

    def _read_char(self) -> str:
        prev = self.cur
        if prev == "\n":
            self.line += 1
            self.col = 1
        elif prev != _END:
            self.col += 1
        self.cur = self.peek
        self.peek = next(self._chars, _END)
        return prev

    def _skip_whitespace(self) -> None:
        while self.cur != _END and _is_space(self.cur):
            self._read_char()

    def next_token(self) -> Token:
        self._skip_whitespace()
        line = self.line
        col = self.col
        c = self.cur

        if c == _END:
            return Token(TK_EOF, "", line, col)

        if _is_letter(c):
            word = self._read_while(_is_letter)
            return Token(lookup_ident(word), word, line, col)

        if _is_digit(c):
            digits = self._read_while(_is_digit)
            if _exceeds_int_max(digits):
                return Token(TK_ILLEGAL, digits, line, col)
            return Token(TK_INT, digits, line, col)

        if c == '"':
            return self._read_string(line, col)

        pair = c + self.peek
        if pair in MULTI_OPS:
            self._read_char()
            self._read_char()
            return Token(pair, pair, line, col)

        self._read_char()
        if c in SINGLE_OPS:
            return Token(c, c, line, col)
        return Token(TK_ILLEGAL, c, line, col)

    def _read_while(self, pred: Callable[[str], bool]) -> str:
        chars: list[str] = []
        while self.cur != _END and pred(self.cur):
            chars.append(self._read_char())
        return "".join(chars)

    def _read_string(self, line: int, col: int) -> Token:
        """String literal. No escape processing: backslashes pass through."""
        self._read_char()  # opening "
        chars: list[str] = []
        while self.cur != '"':
            if self.cur == _END:
                return Token(TK_ILLEGAL, '"' + "".join(chars), line, col)
            chars.append(self._read_char())
        self._read_char()  # closing "
        return Token(TK_STRING, "".join(chars), line, col)


def tokenize(source: str) -> Iterator[Token]:
    """Lazily tokenize Monkey source. The final token yielded is EOF."""
    lexer = Lexer(source)
    while True:
        tok = lexer.next_token()
        yield tok
        if tok.type == TK_EOF:
            return
