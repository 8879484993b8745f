"""General-purpose primitives: negation, application, evaluation and combinators."""

from __future__ import annotations

from sable import LispValue
from sable.builtin.checks import expect_at_least, expect_count, expect_list, expect_procedure
from sable.evaluation.evaluator import apply_procedure, evaluate
from sable.types.datum import copy_datum
from sable.types.environment import Environment
from sable.types.nil import Void
from sable.types.procedure import PrimitiveProcedure


def logical_not(env: Environment, args: list[LispValue]) -> bool:
    expect_count("not", args, 1)
    return args[0] is False


def force(env: Environment, args: list[LispValue]) -> LispValue:
    """Run a thunk made by (delay ...)."""
    expect_count("force", args, 1, "procedure")
    return apply_procedure(expect_procedure("force", args[0]), [], env)


def apply(env: Environment, args: list[LispValue]) -> LispValue:
    """(apply proc arg-list)"""
    expect_count("apply", args, 2)
    proc = expect_procedure("apply", args[0])
    return apply_procedure(proc, expect_list("apply", args[1]), env)


def eval_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """Evaluate a datum in the caller's environment."""
    expect_count("eval", args, 1)
    return evaluate(args[0], env)


def copy(env: Environment, args: list[LispValue]) -> LispValue:
    expect_count("copy", args, 1)
    return copy_datum(args[0])


def compose(env: Environment, args: list[LispValue]) -> PrimitiveProcedure:
    """((compose f g h) x ...) is (f (g (h x ...)))."""
    expect_at_least("compose", args, 1)
    procs = [expect_procedure("compose", a) for a in args]

    def composed(call_env: Environment, call_args: list[LispValue]) -> LispValue:
        result = apply_procedure(procs[-1], call_args, call_env)
        for proc in reversed(procs[:-1]):
            result = apply_procedure(proc, [result], call_env)
        return result

    return PrimitiveProcedure(composed)


def bind(env: Environment, args: list[LispValue]) -> PrimitiveProcedure:
    """((bind f a b) c) is (f a b c)."""
    expect_at_least("bind", args, 1)
    proc = expect_procedure("bind", args[0])
    bound = list(args[1:])

    def partial(call_env: Environment, call_args: list[LispValue]) -> LispValue:
        return apply_procedure(proc, bound + call_args, call_env)

    return PrimitiveProcedure(partial)


def identity(env: Environment, args: list[LispValue]) -> LispValue:
    expect_count("id", args, 1)
    return args[0]


def void(env: Environment, args: list[LispValue]) -> LispValue:
    return Void


def register(env: Environment) -> None:
    """Register utility primitives into the given environment."""
    primitives = {
        "not": logical_not,
        "force": force,
        "apply": apply,
        "eval": eval_builtin,
        "copy": copy,
        "compose": compose,
        "bind": bind,
        "id": identity,
        "void": void,
    }
    for name, fn in primitives.items():
        env.register(name, fn)
