from __future__ import annotations

from typing import TYPE_CHECKING

from sable import LispValue
from sable.errors import ArityError
from sable.printer import profile_args
from sable.types.environment import Environment
from sable.types.pair import make_list

if TYPE_CHECKING:
    from sable.types.procedure import CompoundProcedure


def bind_arguments(proc: CompoundProcedure, supplied_args: list[LispValue]) -> Environment:
    """
    Bind argument values to a closure's parameters.

    Fixed parameters take one argument each. A variadic closure binds its last
    parameter to a proper list of whatever is left (possibly empty).

    Returns a new Environment whose outer is the closure's captured
    environment, never the caller's.
    """
    params = proc.params
    fixed = len(params) - 1 if proc.variadic else len(params)
    supplied = len(supplied_args)

    if proc.variadic and supplied < fixed:
        raise ArityError(
            f"Procedure {proc.name} expects at least {fixed} arg(s) but received {supplied}: "
            f"{profile_args(supplied_args)}"
        )
    if not proc.variadic and supplied != fixed:
        raise ArityError(
            f"Procedure {proc.name} expects exactly {fixed} arg(s) but received {supplied}: "
            f"{profile_args(supplied_args)}"
        )

    local_env = Environment(outer=proc.env)
    for formal, value in zip(params[:fixed], supplied_args):
        local_env.define(formal, value)
    if proc.variadic:
        local_env.define(params[-1], make_list(supplied_args[fixed:]))
    return local_env
