"""Monkey parser — recursive descent for statements, Pratt for expressions."""

from __future__ import annotations

from .ast import (
    ArrayLit,
    BlockStmt,
    BoolLit,
    CallExpr,
    Expr,
    ExprStmt,
    FnLit,
    HashLit,
    Ident,
    IfExpr,
    IndexExpr,
    InfixExpr,
    IntLit,
    LetStmt,
    Pos,
    PrefixExpr,
    Program,
    ReturnStmt,
    Stmt,
    StringLit,
)
from .errors import InvalidPrefix, ParseError, UnexpectedToken
from .lexer import Lexer
from .tokens import (
    INFIX_OPS,
    PREC_LOWEST,
    PREC_PREFIX,
    PREFIX_OPS,
    TK_EOF,
    TK_IDENT,
    TK_ILLEGAL,
    TK_INT,
    TK_STRING,
    Token,
)


class Parser:
    """Pratt parser over a lexer, with one token of lookahead.

    `current` is the next token to consume and `peek` the one after it; both
    advance in lockstep with the lexer. The first error aborts the parse.
    """

    def __init__(self, lexer: Lexer):
        self.lexer: Lexer = lexer
        self.current: Token = lexer.next_token()
        self.peek: Token = lexer.next_token()

    # ── Helpers ──────────────────────────────────────────────

    def advance(self) -> Token:
        tok = self.current
        self.current = self.peek
        self.peek = self.lexer.next_token()
        return tok

    def at(self, type_: str) -> bool:
        return self.current.type == type_

    def expect(self, type_: str) -> Token:
        tok = self.current
        if tok.type != type_:
            raise UnexpectedToken("'" + type_ + "'", _describe(tok), self._pos())
        return self.advance()

    def expect_ident(self) -> Token:
        tok = self.current
        if tok.type != TK_IDENT:
            raise UnexpectedToken("identifier", _describe(tok), self._pos())
        return self.advance()

    def skip_semicolon(self) -> None:
        if self.at(";"):
            self.advance()

    def _pos(self) -> Pos:
        tok = self.current
        return Pos(tok.line, tok.col)

    # ── Top Level ────────────────────────────────────────────

    def parse_program(self) -> Program:
        stmts: list[Stmt] = []
        try:
            while not self.at(TK_EOF):
                stmts.append(self.parse_stmt())
        except RecursionError:
            raise ParseError("maximum nesting depth exceeded", self._pos()) from None
        return Program(stmts)

    # ── Statements ───────────────────────────────────────────

    def parse_stmt(self) -> Stmt:
        if self.at("let"):
            return self.parse_let_stmt()
        if self.at("return"):
            return self.parse_return_stmt()
        return self.parse_expr_stmt()

    def parse_let_stmt(self) -> LetStmt:
        pos = self._pos()
        self.expect("let")
        name_tok = self.expect_ident()
        self.expect("=")
        value = self.parse_expr()
        self.skip_semicolon()
        return LetStmt(pos, name_tok.value, value)

    def parse_return_stmt(self) -> ReturnStmt:
        pos = self._pos()
        self.expect("return")
        value = self.parse_expr()
        self.skip_semicolon()
        return ReturnStmt(pos, value)

    def parse_expr_stmt(self) -> ExprStmt:
        pos = self._pos()
        expr = self.parse_expr()
        self.skip_semicolon()
        return ExprStmt(pos, expr)

    def parse_block(self) -> BlockStmt:
        """Block = '{' Stmt* '}'; an unclosed block ends at end of input."""
        pos = self._pos()
        self.expect("{")
        stmts: list[Stmt] = []
        while not self.at("}") and not self.at(TK_EOF):
            stmts.append(self.parse_stmt())
        if self.at("}"):
            self.advance()
        return BlockStmt(pos, stmts)

    # ── Expressions ──────────────────────────────────────────

    def parse_expr(self, precedence: int = PREC_LOWEST) -> Expr:
        """Precedence climbing: fold infix/call/index productions into `left`
        while the upcoming operator binds tighter than `precedence`."""
        left = self.parse_prefix()
        while not self.at(";") and precedence < self.current.precedence():
            if self.at("("):
                left = self.parse_call(left)
            elif self.at("["):
                left = self.parse_index(left)
            else:
                left = self.parse_infix(left)
        return left

    def parse_prefix(self) -> Expr:
        tok = self.current
        pos = self._pos()

        if tok.type == TK_IDENT:
            self.advance()
            return Ident(pos, tok.value)
        if tok.type == TK_INT:
            self.advance()
            return IntLit(pos, int(tok.value.lstrip("0") or "0"))
        if tok.type == TK_STRING:
            self.advance()
            return StringLit(pos, tok.value)
        if tok.type == "true" or tok.type == "false":
            self.advance()
            return BoolLit(pos, tok.type == "true")
        if tok.type in PREFIX_OPS:
            self.advance()
            operand = self.parse_expr(PREC_PREFIX)
            return PrefixExpr(pos, tok.type, operand)
        if tok.type == "(":
            self.advance()
            expr = self.parse_expr()
            self.expect(")")
            return expr
        if tok.type == "if":
            return self.parse_if()
        if tok.type == "fn":
            return self.parse_fn_literal()
        if tok.type == "[":
            self.advance()
            return ArrayLit(pos, self.parse_expr_list("]"))
        if tok.type == "{":
            return self.parse_hash()
        if tok.type == TK_ILLEGAL:
            raise InvalidPrefix(tok.value, pos)
        raise ParseError(
            "failed to parse expression, got '" + _describe(tok) + "'", pos
        )

    def parse_infix(self, left: Expr) -> InfixExpr:
        tok = self.current
        if tok.type not in INFIX_OPS:
            raise ParseError(
                "invalid infix operator '" + tok.value + "'", self._pos()
            )
        precedence = tok.precedence()
        self.advance()
        right = self.parse_expr(precedence)
        return InfixExpr(left.pos, left, tok.type, right)

    def parse_call(self, callee: Expr) -> CallExpr:
        self.expect("(")
        args = self.parse_expr_list(")")
        return CallExpr(callee.pos, callee, args)

    def parse_index(self, collection: Expr) -> IndexExpr:
        self.expect("[")
        index = self.parse_expr()
        self.expect("]")
        return IndexExpr(collection.pos, collection, index)

    def parse_expr_list(self, end: str) -> list[Expr]:
        """ExprList = ( Expr ( ',' Expr )* )? end; opener already consumed."""
        items: list[Expr] = []
        if self.at(end):
            self.advance()
            return items
        items.append(self.parse_expr())
        while self.at(","):
            self.advance()
            items.append(self.parse_expr())
        self.expect(end)
        return items

    def parse_if(self) -> IfExpr:
        """If = 'if' '(' Expr ')' Block ( 'else' Block )?"""
        pos = self._pos()
        self.expect("if")
        self.expect("(")
        condition = self.parse_expr()
        self.expect(")")
        consequence = self.parse_block()
        alternative: BlockStmt | None = None
        if self.at("else"):
            self.advance()
            alternative = self.parse_block()
        return IfExpr(pos, condition, consequence, alternative)

    def parse_fn_literal(self) -> FnLit:
        """FnLiteral = 'fn' '(' ( IDENT ( ',' IDENT )* )? ')' Block"""
        pos = self._pos()
        self.expect("fn")
        self.expect("(")
        params: list[str] = []
        if not self.at(")"):
            params.append(self.expect_ident().value)
            while self.at(","):
                self.advance()
                params.append(self.expect_ident().value)
        self.expect(")")
        body = self.parse_block()
        return FnLit(pos, params, body)

    def parse_hash(self) -> HashLit:
        """Hash = '{' ( Expr ':' Expr ( ',' Expr ':' Expr )* )? '}'"""
        pos = self._pos()
        self.expect("{")
        pairs: list[tuple[Expr, Expr]] = []
        while not self.at("}"):
            key = self.parse_expr()
            self.expect(":")
            value = self.parse_expr()
            pairs.append((key, value))
            if not self.at("}"):
                self.expect(",")
        self.expect("}")
        return HashLit(pos, pairs)


def _describe(tok: Token) -> str:
    if tok.type == TK_EOF:
        return "end of input"
    return tok.value


def parse_program(source: str) -> Program:
    """Parse Monkey source into a Program."""
    return Parser(Lexer(source)).parse_program()
