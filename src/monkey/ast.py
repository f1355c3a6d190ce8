"""Monkey AST — parse-time node definitions.

`str(node)` renders the canonical, fully parenthesized reproduction of a
node (`a + b * c` → `(a + (b * c))`). The pretty-printer in `fmt.py` is the
human-facing renderer; this one exists for debugging and round-trip checks.
"""

from __future__ import annotations

from dataclasses import dataclass


# ============================================================
# POSITION
# ============================================================


@dataclass
class Pos:
    """Source position, 1-indexed."""

    line: int
    col: int


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass
class Expr:
    """Base for all expressions."""

    pos: Pos


@dataclass
class Ident(Expr):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class IntLit(Expr):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class BoolLit(Expr):
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass
class StringLit(Expr):
    value: str

    def __str__(self) -> str:
        return '"' + self.value + '"'


@dataclass
class PrefixExpr(Expr):
    """-x, !x."""

    op: str
    operand: Expr

    def __str__(self) -> str:
        return f"({self.op}{self.operand})"


@dataclass
class InfixExpr(Expr):
    left: Expr
    op: str
    right: Expr

    def __str__(self) -> str:
        return f"({self.left} {self.op} {self.right})"


@dataclass
class IfExpr(Expr):
    """if (cond) { ... } else { ... }; alternative is None when absent."""

    condition: Expr
    consequence: BlockStmt
    alternative: BlockStmt | None

    def __str__(self) -> str:
        out = f"if ({self.condition}) {{{self.consequence}}}"
        if self.alternative is not None:
            out += f" else {{{self.alternative}}}"
        return out


@dataclass
class FnLit(Expr):
    """fn(params) { body }."""

    params: list[str]
    body: BlockStmt

    def __str__(self) -> str:
        return f"fn({', '.join(self.params)}){{{self.body}}}"


@dataclass
class CallExpr(Expr):
    callee: Expr
    args: list[Expr]

    def __str__(self) -> str:
        return f"{self.callee}({', '.join(str(a) for a in self.args)})"


@dataclass
class ArrayLit(Expr):
    elements: list[Expr]

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


@dataclass
class IndexExpr(Expr):
    collection: Expr
    index: Expr

    def __str__(self) -> str:
        return f"({self.collection}[{self.index}])"


@dataclass
class HashLit(Expr):
    """{k: v, ...}, pairs kept in source order."""

    pairs: list[tuple[Expr, Expr]]

    def __str__(self) -> str:
        inner = ", ".join(f"{k}: {v}" for k, v in self.pairs)
        return "{" + inner + "}"


# ============================================================
# STATEMENTS
# ============================================================


@dataclass
class Stmt:
    """Base for all statements."""

    pos: Pos


@dataclass
class LetStmt(Stmt):
    """let name = value;"""

    name: str
    value: Expr

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass
class ReturnStmt(Stmt):
    value: Expr

    def __str__(self) -> str:
        return f"return {self.value};"


@dataclass
class ExprStmt(Stmt):
    expr: Expr

    def __str__(self) -> str:
        return str(self.expr)


@dataclass
class BlockStmt(Stmt):
    """{ stmts }: the body of if branches and function literals."""

    stmts: list[Stmt]

    def __str__(self) -> str:
        return "".join(str(s) for s in self.stmts)


@dataclass
class Program:
    """Top-level program: ordered list of statements."""

    stmts: list[Stmt]

    def __str__(self) -> str:
        return "".join(str(s) for s in self.stmts)

    @property
    def statements(self) -> list[Stmt]:
        return self.stmts
