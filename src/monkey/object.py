"""Monkey runtime values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .ast import BlockStmt

if TYPE_CHECKING:
    from .environment import Environment


class Object:
    """A runtime value."""

    def type_name(self) -> str:
        raise NotImplementedError

    def to_string(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_string()


class HashableObject(Object):
    """A value that can be used as a hash key."""

    def __hash__(self) -> int:  # pragma: no cover - implemented by subclasses
        raise NotImplementedError


@dataclass(eq=False)
class Int(HashableObject):
    value: int

    def type_name(self) -> str:
        return "INTEGER"

    def to_string(self) -> str:
        return str(self.value)

    def __hash__(self) -> int:
        return hash(("int", self.value))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Int) and self.value == other.value


@dataclass(eq=False)
class Bool(HashableObject):
    value: bool

    def type_name(self) -> str:
        return "BOOLEAN"

    def to_string(self) -> str:
        return "true" if self.value else "false"

    def __hash__(self) -> int:
        return hash(("bool", self.value))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Bool) and self.value == other.value


@dataclass(eq=False)
class String(HashableObject):
    value: str

    def type_name(self) -> str:
        return "STRING"

    def to_string(self) -> str:
        return '"' + self.value + '"'

    def __hash__(self) -> int:
        return hash(("string", self.value))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, String) and self.value == other.value


@dataclass
class Null(Object):
    def type_name(self) -> str:
        return "NULL"

    def to_string(self) -> str:
        return "null"


NULL = Null()
TRUE = Bool(True)
FALSE = Bool(False)


def native_bool(value: bool) -> Bool:
    return TRUE if value else FALSE


@dataclass
class ReturnValue(Object):
    """Wraps the value of a `return` until the enclosing call unwraps it."""

    value: Object

    def type_name(self) -> str:
        return "RETURN_VALUE"

    def to_string(self) -> str:
        return "return " + self.value.to_string()


@dataclass(eq=False)
class Function(Object):
    params: list[str]
    body: BlockStmt
    env: Environment

    def type_name(self) -> str:
        return "FUNCTION"

    def to_string(self) -> str:
        return f"fn({', '.join(self.params)}){{{self.body}}}"

    def __repr__(self) -> str:
        # The captured environment may hold this very function.
        return f"Function(params={self.params!r})"


@dataclass
class Array(Object):
    elements: list[Object]

    def type_name(self) -> str:
        return "ARRAY"

    def to_string(self) -> str:
        inner = ", ".join(v.to_string() for v in self.elements)
        return f"[{inner}]"


@dataclass
class Hash(Object):
    # Insertion-ordered; display follows source order.
    pairs: dict[HashableObject, Object]

    def type_name(self) -> str:
        return "HASH"

    def to_string(self) -> str:
        parts: list[str] = []
        for k, v in self.pairs.items():
            parts.append(f"{k.to_string()}: {v.to_string()}")
        return "{" + ", ".join(parts) + "}"


@dataclass(frozen=True)
class Builtin(Object):
    """A native function, identified by its registered name."""

    name: str

    def type_name(self) -> str:
        return "BUILTIN"

    def to_string(self) -> str:
        return "[builtin func]"
