"""Monkey formatter — renders an AST back into canonical Monkey source.

Total over the node types in `ast.py`: a new node type must be added here
as well. Output reparses to the same tree, so formatting is idempotent.
"""

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
    PrefixExpr,
    Program,
    ReturnStmt,
    Stmt,
    StringLit,
)
from .parse import parse_program
from .tokens import PREC_CALL, PREC_LOWEST, PREC_PREFIX, PRECEDENCES


def format_program(program: Program) -> str:
    """Render a `Program` as formatted Monkey source."""
    return _Emitter().emit_program(program)


def format_source(source: str) -> str:
    """Parse and reformat Monkey source. Raises `ParseError`."""
    return format_program(parse_program(source))


class _Emitter:
    _INDENT: str = "    "

    # Literals, identifiers, fn/if/array/hash never need parentheses
    _PREC_PRIMARY: int = PREC_CALL + 1

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._indent_level: int = 0

    # ── Public ──────────────────────────────────────────────

    def emit_program(self, program: Program) -> str:
        self._lines = []
        self._indent_level = 0
        for stmt in program.stmts:
            self._emit_stmt(stmt)
        text = "\n".join(self._lines)
        if text == "":
            return ""
        return text + "\n"

    # ── Lines / Blocks ──────────────────────────────────────

    def _emit_line(self, line: str) -> None:
        self._lines.append(self._INDENT * self._indent_level + line)

    def _render_block(self, block: BlockStmt) -> str:
        """Render `{ ... }` with the body one level deeper than the current
        statement; continuation lines carry their own indentation."""
        if not block.stmts:
            return "{}"
        saved = self._lines
        self._lines = []
        self._indent_level += 1
        for stmt in block.stmts:
            self._emit_stmt(stmt)
        self._indent_level -= 1
        body = self._lines
        self._lines = saved
        return "{\n" + "\n".join(body) + "\n" + self._INDENT * self._indent_level + "}"

    # ── Statements ──────────────────────────────────────────

    def _emit_stmt(self, stmt: Stmt) -> None:
        if isinstance(stmt, LetStmt):
            self._emit_line(f"let {stmt.name} = {self._render_expr(stmt.value, PREC_LOWEST)};")
            return
        if isinstance(stmt, ReturnStmt):
            self._emit_line(f"return {self._render_expr(stmt.value, PREC_LOWEST)};")
            return
        if isinstance(stmt, ExprStmt):
            self._emit_line(self._render_expr(stmt.expr, PREC_LOWEST) + ";")
            return
        if isinstance(stmt, BlockStmt):
            self._emit_line(self._render_block(stmt))
            return
        raise NotImplementedError(f"unknown statement: {type(stmt).__name__}")

    # ── Expressions ─────────────────────────────────────────

    def _expr_prec(self, expr: Expr) -> int:
        if isinstance(expr, InfixExpr):
            return PRECEDENCES[expr.op]
        if isinstance(expr, PrefixExpr):
            return PREC_PREFIX
        if isinstance(expr, (CallExpr, IndexExpr)):
            return PREC_CALL
        return self._PREC_PRIMARY

    def _render_expr(self, expr: Expr, parent_prec: int, side: str = "") -> str:
        prec = self._expr_prec(expr)
        text = self._render_expr_inner(expr)
        if prec < parent_prec or (prec == parent_prec and side == "right"):
            return f"({text})"
        return text

    def _render_expr_inner(self, expr: Expr) -> str:
        if isinstance(expr, IntLit):
            return str(expr.value)
        if isinstance(expr, StringLit):
            return '"' + expr.value + '"'
        if isinstance(expr, BoolLit):
            return "true" if expr.value else "false"
        if isinstance(expr, Ident):
            return expr.name
        if isinstance(expr, PrefixExpr):
            operand = self._render_expr(expr.operand, PREC_PREFIX)
            return f"{expr.op}{operand}"
        if isinstance(expr, InfixExpr):
            op_prec = PRECEDENCES[expr.op]
            left = self._render_expr(expr.left, op_prec, "left")
            right = self._render_expr(expr.right, op_prec, "right")
            return f"{left} {expr.op} {right}"
        if isinstance(expr, CallExpr):
            callee = self._render_expr(expr.callee, PREC_CALL, "left")
            args = ", ".join(self._render_expr(a, PREC_LOWEST) for a in expr.args)
            return f"{callee}({args})"
        if isinstance(expr, IndexExpr):
            coll = self._render_expr(expr.collection, PREC_CALL, "left")
            idx = self._render_expr(expr.index, PREC_LOWEST)
            return f"{coll}[{idx}]"
        if isinstance(expr, ArrayLit):
            elems = ", ".join(self._render_expr(e, PREC_LOWEST) for e in expr.elements)
            return f"[{elems}]"
        if isinstance(expr, HashLit):
            pairs: list[str] = []
            for k, v in expr.pairs:
                key = self._render_expr(k, PREC_LOWEST)
                val = self._render_expr(v, PREC_LOWEST)
                pairs.append(f"{key}: {val}")
            return "{" + ", ".join(pairs) + "}"
        if isinstance(expr, FnLit):
            params = ", ".join(expr.params)
            return f"fn({params}) {self._render_block(expr.body)}"
        if isinstance(expr, IfExpr):
            cond = self._render_expr(expr.condition, PREC_LOWEST)
            out = f"if ({cond}) {self._render_block(expr.consequence)}"
            if expr.alternative is not None:
                out += f" else {self._render_block(expr.alternative)}"
            return out
        raise NotImplementedError(f"unknown expression: {type(expr).__name__}")
