from sable import EvaluatorFn, LispValue
from sable.evaluation.special_forms.syntax import operands
from sable.types.environment import Environment
from sable.types.nil import Void
from sable.types.pair import Pair


def begin_form(form: Pair, env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """Evaluate each expression in order; return the last result, or void if empty."""
    result = Void
    for expr in operands(form, "begin"):
        result = evaluate_fn(expr, env)
    return result
