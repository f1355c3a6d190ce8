"""Lexical scope chain for the evaluator."""

from __future__ import annotations

from .object import Object


class Environment:
    """One scope: a name → value store plus a link to the enclosing scope.

    Function values hold a reference to the scope they were created in, so a
    scope stays alive as long as any closure over it is reachable, and names
    added to it later are visible to every such closure.

    A `shadow` scope holds rebindings made by `let` and belongs to the
    nearest non-shadow ancestor (its base).
    """

    def __init__(self, parent: Environment | None = None, *, shadow: bool = False):
        self.store: dict[str, Object] = {}
        self.parent: Environment | None = parent
        self.shadow: bool = shadow
        self.captured: bool = False

    def get(self, name: str) -> Object | None:
        env: Environment | None = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.parent
        return None

    def bind(self, name: str, value: Object) -> None:
        """Bind in place in this scope."""
        self.store[name] = value

    def capture(self) -> Environment:
        """Mark this scope as held by a closure; returns it."""
        self.captured = True
        return self

    def base(self) -> Environment:
        env = self
        while env.shadow and env.parent is not None:
            env = env.parent
        return env

    def in_frame(self, name: str) -> bool:
        """Whether `name` is bound in this scope's base or one of its shadows."""
        env = self
        while True:
            if name in env.store:
                return True
            if not env.shadow or env.parent is None:
                return False
            env = env.parent

    def open_let(self, name: str, *, reuse: bool = True) -> Environment:
        """Scope a `let name = ...` evaluates its value in; the statements
        after it run there too.

        Rebinding a name already in the frame needs a new shadow scope, so
        closures created before keep seeing the old value. A shadow scope no
        closure has captured is reused instead when `reuse` is set, which
        keeps a long run of rebindings from growing the chain.
        """
        if not self.in_frame(name):
            return self
        if reuse and self.shadow and not self.captured:
            return self
        return Environment(self, shadow=True)

    def define(self, name: str, value: Object) -> None:
        """Bind `name` from a `let` run in this scope (see `open_let`).

        A fresh name goes into the base scope, where every closure over it can
        see it. A rebinding lands in this scope.
        """
        if self.in_frame(name):
            self.store[name] = value
        else:
            self.base().store[name] = value
