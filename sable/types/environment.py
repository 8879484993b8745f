"""Runtime environment for Sable.

The Environment stores bindings of Symbols to evaluated values and supports
nested lexical scopes via an `outer` link. Closures keep their defining
Environment alive by reference, so frames outlive the call that created them.
"""

from __future__ import annotations

from io import StringIO
from typing import Callable, Optional

from sable import LispValue
from sable.errors import SableTypeError, UnboundVariable
from sable.types.macro import Macro
from sable.types.procedure import PrimitiveProcedure, Procedure
from sable.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame only.

        An anonymous procedure or macro takes `name` as its display name.
        Raises SableTypeError if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise SableTypeError(f"Cannot define {name!r} as a symbol")
        if isinstance(value, (Procedure, Macro)):
            value.bind_name(name.name)
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def set(self, name: Symbol, value: LispValue) -> None:
        """Update the nearest existing binding for `name`.

        Raises UnboundVariable if no frame binds the symbol.
        """
        env = self.find(name)
        if env is None:
            raise UnboundVariable(name)
        if isinstance(value, (Procedure, Macro)):
            value.bind_name(name.name)
        env.vars[name] = value

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`, walking outward.

        Raises UnboundVariable if not found.
        """
        env = self.find(name)
        if env is None:
            raise UnboundVariable(name)
        return env.vars[name]

    def is_bound(self, name: Symbol) -> bool:
        return self.find(name) is not None

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def register(
        self, name: str, fn: Callable[[Environment, list[LispValue]], LispValue]
    ) -> PrimitiveProcedure:
        """Bind `name` to a host function called as fn(env, args)."""
        primitive = PrimitiveProcedure(fn, name)
        self.vars[Symbol(name)] = primitive
        return primitive

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variable names into the buffer."""
        buffer.write("{")
        buffer.write(", ".join(str(k) for k in self.vars))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env: Optional[Environment] = self
            chain = []
            while env is not None:
                with StringIO() as frame:
                    env._write_vars(frame)
                    chain.append(frame.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
