"""Monkey tree-walking evaluator."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

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
from .builtins import BUILTIN_RUNTIME, BUILTIN_VALUES
from .environment import Environment
from .errors import (
    DivisionByZero,
    EvalError,
    IndexNotSupported,
    TypeMismatch,
    UncaughtRef,
    UnknownInfixOperator,
    UnknownPrefixOperator,
    UnsupportedKeyType,
)
from .object import (
    FALSE,
    NULL,
    TRUE,
    Array,
    Bool,
    Builtin,
    Function,
    Hash,
    HashableObject,
    Int,
    Null,
    Object,
    ReturnValue,
    String,
    native_bool,
)
from .tokens import INT_MAX, INT_MIN

logger = logging.getLogger(__name__)

DEFAULT_RECURSION_LIMIT = 10000


def is_truthy(obj: Object) -> bool:
    """Bool as-is, null is false, everything else is true."""
    if isinstance(obj, Bool):
        return obj.value
    if isinstance(obj, Null):
        return False
    return True


def _int_div_trunc(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZero()
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q


def _checked_int(value: int) -> Int:
    if value < INT_MIN or value > INT_MAX:
        raise EvalError("integer overflow")
    return Int(value)


def _as_hash_key(obj: Object) -> HashableObject:
    if isinstance(obj, HashableObject):
        return obj
    raise UnsupportedKeyType(obj.type_name())


class Evaluator:
    """Evaluates programs against a persistent root environment.

    Top-level bindings survive between `evaluate` calls, which is what the
    REPL relies on. `puts` output goes to `stdout` (default `sys.stdout`).
    """

    def __init__(
        self,
        *,
        stdout: TextIO | None = None,
        recursion_limit: int = DEFAULT_RECURSION_LIMIT,
    ):
        self.env: Environment = Environment()
        self.stdout: TextIO | None = stdout
        self.recursion_limit: int = recursion_limit

    def write_line(self, text: str) -> None:
        out = self.stdout if self.stdout is not None else sys.stdout
        out.write(text + "\n")

    # ---- Running -----------------------------------------------------------

    def evaluate(self, program: Program) -> Object:
        logger.debug("evaluating %d statement(s)", len(program.stmts))
        old_limit = sys.getrecursionlimit()
        if self.recursion_limit > old_limit:
            sys.setrecursionlimit(self.recursion_limit)
        try:
            result = self._eval_program(program)
        except RecursionError:
            raise EvalError("maximum recursion depth exceeded") from None
        finally:
            sys.setrecursionlimit(old_limit)
        logger.debug("result: %s", result.type_name())
        return result

    def _eval_program(self, program: Program) -> Object:
        result: Object = NULL
        for st in program.stmts:
            result, self.env = self._eval_stmt(st, self.env)
            if isinstance(result, ReturnValue):
                return result.value
        return result

    # ---- Statements --------------------------------------------------------

    def _eval_stmt(
        self, st: Stmt, env: Environment, pinned: Environment | None = None
    ) -> tuple[Object, Environment]:
        """Evaluate one statement; returns its value and the scope the
        following statements run in.

        `pinned` is the scope an enclosing block started in. A `let` never
        rebinds into it in place, since it outlives the block.
        """
        if isinstance(st, LetStmt):
            env = env.open_let(st.name, reuse=env is not pinned)
            env.define(st.name, self._eval_expr(st.value, env))
            return NULL, env
        if isinstance(st, ReturnStmt):
            return ReturnValue(self._eval_expr(st.value, env)), env
        if isinstance(st, ExprStmt):
            return self._eval_expr(st.expr, env), env
        if isinstance(st, BlockStmt):
            return self._eval_block(st, env), env
        raise EvalError(f"unknown statement {type(st).__name__}")

    def _eval_block(self, block: BlockStmt, env: Environment) -> Object:
        # Rebindings made inside the block are dropped with `scope` at the end.
        result: Object = NULL
        scope = env
        for st in block.stmts:
            result, scope = self._eval_stmt(st, scope, env)
            if isinstance(result, ReturnValue):
                return result
        return result

    # ---- Expressions -------------------------------------------------------

    def _eval_expr(self, expr: Expr, env: Environment) -> Object:
        if isinstance(expr, IntLit):
            return Int(expr.value)
        if isinstance(expr, BoolLit):
            return native_bool(expr.value)
        if isinstance(expr, StringLit):
            return String(expr.value)

        if isinstance(expr, Ident):
            val = env.get(expr.name)
            if val is not None:
                return val
            if expr.name in BUILTIN_VALUES:
                return BUILTIN_VALUES[expr.name]
            raise UncaughtRef(expr.name)

        if isinstance(expr, PrefixExpr):
            operand = self._eval_expr(expr.operand, env)
            return self._eval_prefix(expr.op, operand)

        if isinstance(expr, InfixExpr):
            left = self._eval_expr(expr.left, env)
            right = self._eval_expr(expr.right, env)
            return self._eval_infix(expr.op, left, right)

        if isinstance(expr, IfExpr):
            cond = self._eval_expr(expr.condition, env)
            if is_truthy(cond):
                return self._eval_block(expr.consequence, env)
            if expr.alternative is not None:
                return self._eval_block(expr.alternative, env)
            return NULL

        if isinstance(expr, FnLit):
            return Function(list(expr.params), expr.body, env.capture())

        if isinstance(expr, CallExpr):
            callee = self._eval_expr(expr.callee, env)
            args = [self._eval_expr(a, env) for a in expr.args]
            return self._apply(callee, args)

        if isinstance(expr, ArrayLit):
            return Array([self._eval_expr(e, env) for e in expr.elements])

        if isinstance(expr, IndexExpr):
            collection = self._eval_expr(expr.collection, env)
            index = self._eval_expr(expr.index, env)
            return self._eval_index(collection, index)

        if isinstance(expr, HashLit):
            pairs: dict[HashableObject, Object] = {}
            for k_expr, v_expr in expr.pairs:
                key = _as_hash_key(self._eval_expr(k_expr, env))
                pairs[key] = self._eval_expr(v_expr, env)
            return Hash(pairs)

        raise EvalError(f"unknown expression {type(expr).__name__}")

    def _eval_prefix(self, op: str, operand: Object) -> Object:
        if op == "!":
            return native_bool(not is_truthy(operand))
        if op == "-" and isinstance(operand, Int):
            return _checked_int(-operand.value)
        raise UnknownPrefixOperator(op, operand.type_name())

    def _eval_infix(self, op: str, left: Object, right: Object) -> Object:
        if isinstance(left, Int) and isinstance(right, Int):
            return self._eval_int_infix(op, left.value, right.value)
        if type(left) is not type(right):
            raise TypeMismatch(op, left.type_name(), right.type_name())
        if isinstance(left, Bool) and isinstance(right, Bool):
            if op == "==":
                return native_bool(left.value == right.value)
            if op == "!=":
                return native_bool(left.value != right.value)
        if isinstance(left, String) and isinstance(right, String):
            if op == "+":
                return String(left.value + right.value)
        raise UnknownInfixOperator(op, left.type_name(), right.type_name())

    def _eval_int_infix(self, op: str, a: int, b: int) -> Object:
        if op == "+":
            return _checked_int(a + b)
        if op == "-":
            return _checked_int(a - b)
        if op == "*":
            return _checked_int(a * b)
        if op == "/":
            return _checked_int(_int_div_trunc(a, b))
        if op == "<":
            return TRUE if a < b else FALSE
        if op == ">":
            return TRUE if a > b else FALSE
        if op == "==":
            return TRUE if a == b else FALSE
        if op == "!=":
            return TRUE if a != b else FALSE
        raise UnknownInfixOperator(op, "INTEGER", "INTEGER")

    def _eval_index(self, collection: Object, index: Object) -> Object:
        if isinstance(collection, Array) and isinstance(index, Int):
            i = index.value
            if i < 0 or i >= len(collection.elements):
                return NULL
            return collection.elements[i]
        if isinstance(collection, Hash):
            key = _as_hash_key(index)
            return collection.pairs.get(key, NULL)
        raise IndexNotSupported(collection.type_name(), index.type_name())

    # ---- Calls -------------------------------------------------------------

    def _apply(self, callee: Object, args: list[Object]) -> Object:
        if isinstance(callee, Function):
            call_env = Environment(callee.env)
            for name, arg in zip(callee.params, args):
                call_env.bind(name, arg)
            logger.debug("call fn(%s)", ", ".join(callee.params))
            result = self._eval_block(callee.body, call_env)
            if isinstance(result, ReturnValue):
                return result.value
            return result
        if isinstance(callee, Builtin):
            return BUILTIN_RUNTIME[callee.name](self, args)
        raise EvalError(f"not a function: {callee.type_name()}")
