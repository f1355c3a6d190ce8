"""Monkey native functions.

Each builtin receives the evaluator and the already-evaluated arguments and
validates arity and types itself, raising `EvalError` on violation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from .errors import EvalError
from .object import NULL, Array, Builtin, Int, Object, String

if TYPE_CHECKING:
    from .evaluator import Evaluator


def _check_arity(args: list[Object], want: int) -> None:
    if len(args) != want:
        raise EvalError(f"wrong number of args. got={len(args)}, want={want}")


def _bi_len(ev: Evaluator, args: list[Object]) -> Object:
    _check_arity(args, 1)
    x = args[0]
    if isinstance(x, String):
        return Int(len(x.value))
    if isinstance(x, Array):
        return Int(len(x.elements))
    raise EvalError(f"arg to `len` not supported, got {x.type_name()}")


def _bi_first(ev: Evaluator, args: list[Object]) -> Object:
    _check_arity(args, 1)
    x = args[0]
    if isinstance(x, Array) and x.elements:
        return x.elements[0]
    return NULL


def _bi_last(ev: Evaluator, args: list[Object]) -> Object:
    _check_arity(args, 1)
    x = args[0]
    if not isinstance(x, Array):
        raise EvalError("argument to `last` must be ARRAY")
    if not x.elements:
        raise EvalError("elements is empty")
    return x.elements[-1]


def _bi_rest(ev: Evaluator, args: list[Object]) -> Object:
    _check_arity(args, 1)
    x = args[0]
    if not isinstance(x, Array):
        raise EvalError("argument to `rest` must be ARRAY")
    if not x.elements:
        return NULL
    return Array(list(x.elements[1:]))


def _bi_push(ev: Evaluator, args: list[Object]) -> Object:
    _check_arity(args, 2)
    x = args[0]
    if not isinstance(x, Array):
        raise EvalError("argument to `push` must be ARRAY")
    return Array(x.elements + [args[1]])


def _bi_puts(ev: Evaluator, args: list[Object]) -> Object:
    for arg in args:
        ev.write_line(arg.to_string())
    return NULL


BUILTIN_RUNTIME: dict[str, Callable[[Evaluator, list[Object]], Object]] = {
    "len": _bi_len,
    "first": _bi_first,
    "last": _bi_last,
    "rest": _bi_rest,
    "push": _bi_push,
    "puts": _bi_puts,
}

BUILTIN_VALUES: dict[str, Builtin] = {name: Builtin(name) for name in BUILTIN_RUNTIME}
