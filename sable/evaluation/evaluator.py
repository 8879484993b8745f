"""Core evaluator for the Sable interpreter.

Dispatches on the syntactic shape of a datum: symbols are looked up, pairs
headed by a reserved word go to their special-form handler, other pairs are
applications, and everything else evaluates to itself.
"""

from __future__ import annotations

from sable import LispValue, SExpression
from sable.errors import ApplicationError
from sable.evaluation.apply import apply_form
from sable.evaluation.special_forms import SPECIAL_FORMS
from sable.printer import profile
from sable.types.environment import Environment
from sable.types.macro import Macro
from sable.types.pair import Pair
from sable.types.procedure import Procedure
from sable.types.symbol import Symbol


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """Evaluate `expr` in `env`. The datum itself is never mutated."""
    match expr:
        case Symbol():
            return env.lookup(expr)
        case Pair(car=Symbol() as head) if head in SPECIAL_FORMS:
            return SPECIAL_FORMS[head](expr, env, evaluate)
        case Pair():
            return apply_form(expr, env, evaluate)

    # --- Atoms return as-is ---
    return expr


def apply_procedure(callee: LispValue, args: list[LispValue], env: Environment) -> LispValue:
    """Call a procedure with already-evaluated arguments (used by primitives)."""
    if isinstance(callee, Procedure):
        return callee.invoke(env, args, evaluate)
    if isinstance(callee, Macro):
        raise ApplicationError(f"Can't apply macro {callee} to evaluated arguments!")
    raise ApplicationError(f"Can't apply non-procedure {profile(callee)}!")
