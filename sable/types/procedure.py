"""Callable values: host primitives and user closures.

Both kinds answer invoke(env, args, evaluate_fn). `env` is the caller's
environment; primitives receive it directly, closures ignore it in favour of
the environment they captured.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from sable import EvaluatorFn, LispValue, SExpression
from sable.runtime_context import get_call_stack
from sable.types.symbol import Symbol

if TYPE_CHECKING:
    from sable.types.environment import Environment

ANONYMOUS = "anonymous"


class Procedure:
    __slots__ = ("name",)

    def __init__(self, name: str = ANONYMOUS):
        self.name = name

    @property
    def is_anonymous(self) -> bool:
        return self.name == ANONYMOUS

    def bind_name(self, name: str) -> None:
        """Adopt `name` for display, unless already named."""
        if self.is_anonymous:
            self.name = name

    def invoke(
        self, env: Environment, args: list[LispValue], evaluate_fn: EvaluatorFn
    ) -> LispValue:
        raise NotImplementedError

    def __str__(self) -> str:
        return f"#<procedure {self.name}>"

    __repr__ = __str__


class PrimitiveProcedure(Procedure):
    """A host function with the calling convention fn(env, args)."""

    __slots__ = ("fn",)

    def __init__(
        self, fn: Callable[[Environment, list[LispValue]], LispValue], name: str = ANONYMOUS
    ):
        super().__init__(name)
        self.fn = fn

    def invoke(self, env, args, evaluate_fn=None):
        stack = get_call_stack()
        stack.push(self.name)
        result = self.fn(env, args)
        stack.pop()
        return result


class CompoundProcedure(Procedure):
    """A closure: parameters, one body expression and the defining environment.

    When `variadic` is set the last parameter collects the remaining
    arguments as a fresh proper list.
    """

    __slots__ = ("params", "body", "env", "variadic")

    def __init__(
        self,
        params: list[Symbol],
        body: SExpression,
        env: Environment,
        variadic: bool = False,
        name: str = ANONYMOUS,
    ):
        super().__init__(name)
        self.params: list[Symbol] = params
        self.body: SExpression = body
        self.env: Environment = env
        self.variadic = variadic

    def invoke(self, env, args, evaluate_fn):
        from sable.types.bind import bind_arguments

        local_env = bind_arguments(self, args)
        stack = get_call_stack()
        stack.push(self.name)
        result = evaluate_fn(self.body, local_env)
        stack.pop()
        return result
