"""Application of procedures and macros to a call form."""

from __future__ import annotations

from sable import EvaluatorFn, LispValue
from sable.errors import ApplicationError, SableSyntaxError
from sable.printer import profile, write_string
from sable.types.environment import Environment
from sable.types.macro import Macro
from sable.types.pair import Pair, list_items
from sable.types.procedure import Procedure


def apply_form(form: Pair, env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """Evaluate the head of `form` and apply it.

    - Macro: receives the whole unevaluated form; its expansion is evaluated in `env`.
    - Procedure: operands are evaluated left to right, then the procedure is invoked.
    - Anything else raises ApplicationError.
    """
    callee = evaluate_fn(form.car, env)
    if isinstance(callee, Macro):
        return callee.invoke(env, [form], evaluate_fn)
    if not isinstance(callee, Procedure):
        raise ApplicationError(
            f"Can't apply non-procedure & non-macro {profile(callee)} in {write_string(form)}!"
        )
    operands = list_items(form.cdr)
    if operands is None:
        raise SableSyntaxError(
            f"Invalid application (improper argument list): {write_string(form)}", form
        )
    args = [evaluate_fn(operand, env) for operand in operands]
    return callee.invoke(env, args, evaluate_fn)
