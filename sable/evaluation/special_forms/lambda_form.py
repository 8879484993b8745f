from __future__ import annotations

from sable import EvaluatorFn, LispValue, SExpression
from sable.evaluation.special_forms.syntax import operands, syntax_error, wrap_body
from sable.reader.parser import DOT
from sable.types.environment import Environment
from sable.types.nil import Nil
from sable.types.pair import Pair, split_list
from sable.types.procedure import CompoundProcedure
from sable.types.symbol import Symbol


def parse_parameters(formals: SExpression, form: Pair) -> tuple[list[Symbol], bool]:
    """
    Turn a lambda list into (parameter names, variadic flag).

    Accepted shapes:
    - ()            no parameters
    - (a b)         fixed parameters
    - (a b . rest)  rest collects the extra arguments
    - args or (. args)  every argument is collected into args
    """
    if formals is Nil:
        return [], False
    if isinstance(formals, Symbol):
        return [formals], True
    split = split_list(formals)
    if split is None:
        raise syntax_error("lambda", "circular parameter list", form)
    items, tail = split

    if len(items) == 2 and items[0] == DOT and tail is Nil:
        items, tail = [], items[1]
    if not all(isinstance(p, Symbol) and p != DOT for p in items):
        raise syntax_error("lambda", "non-symbol parameter", form)
    if tail is Nil:
        return items, False
    if isinstance(tail, Symbol):
        return items + [tail], True
    raise syntax_error("lambda", "non-symbol variadic parameter", form)


def lambda_form(form: Pair, env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """(lambda params body...) builds a closure over env."""
    args = operands(form, "lambda")
    if not args:
        raise syntax_error("lambda", "missing parameter list", form)
    if len(args) < 2:
        raise syntax_error("lambda", "missing procedure body", form)
    params, variadic = parse_parameters(args[0], form)
    return CompoundProcedure(params, wrap_body(args[1:]), env, variadic)
