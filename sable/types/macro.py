"""Non-hygienic macros built from a one-parameter transformer closure."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sable import EvaluatorFn, LispValue, SExpression
from sable.types.procedure import ANONYMOUS, CompoundProcedure

if TYPE_CHECKING:
    from sable.types.environment import Environment


class Macro:
    """
    Wraps a CompoundProcedure that maps an unevaluated call form to an expansion.

    The transformer runs in its own defining scope like any closure; the
    expansion it returns is then evaluated in the caller's environment.
    """

    __slots__ = ("name", "transformer")

    def __init__(self, transformer: CompoundProcedure, name: str = ANONYMOUS):
        self.name = name
        self.transformer = transformer
        if name != ANONYMOUS:
            transformer.bind_name(f"{name} transformer")

    @property
    def is_anonymous(self) -> bool:
        return self.name == ANONYMOUS

    def bind_name(self, name: str) -> None:
        if self.is_anonymous:
            self.name = name
            self.transformer.bind_name(f"{name} transformer")

    def expand(self, env: Environment, form: SExpression, evaluate_fn: EvaluatorFn) -> SExpression:
        """Run the transformer on `form` without evaluating the result."""
        return self.transformer.invoke(env, [form], evaluate_fn)

    def invoke(
        self, env: Environment, args: list[SExpression], evaluate_fn: EvaluatorFn
    ) -> LispValue:
        """`args` holds exactly one element: the whole call form."""
        (form,) = args
        return evaluate_fn(self.expand(env, form, evaluate_fn), env)

    def __str__(self) -> str:
        return f"#<macro {self.name}>"

    __repr__ = __str__
