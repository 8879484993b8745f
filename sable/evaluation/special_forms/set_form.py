from sable import EvaluatorFn, LispValue
from sable.evaluation.special_forms.syntax import operands, syntax_error
from sable.types.environment import Environment
from sable.types.nil import Void
from sable.types.pair import Pair
from sable.types.symbol import Symbol


def set_form(form: Pair, env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """(set! name value) rebinds the nearest existing binding of name."""
    args = operands(form, "set!")
    if len(args) != 2:
        raise syntax_error("set!", "expected a variable and one value", form)
    name, value_expr = args
    if not isinstance(name, Symbol):
        raise syntax_error("set!", "non-symbol variable", form)
    env.set(name, evaluate_fn(value_expr, env))
    return Void
