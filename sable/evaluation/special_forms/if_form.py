from sable import EvaluatorFn, LispValue
from sable.evaluation.special_forms.syntax import operands, syntax_error
from sable.types.datum import is_true
from sable.types.environment import Environment
from sable.types.nil import Void
from sable.types.pair import Pair


def if_form(form: Pair, env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    args = operands(form, "if")
    if len(args) not in (2, 3):
        raise syntax_error("if", "expected a test, a consequent and an optional alternative", form)

    # Only #f is false; (), 0 and "" all count as true
    if is_true(evaluate_fn(args[0], env)):
        return evaluate_fn(args[1], env)
    elif len(args) == 3:
        return evaluate_fn(args[2], env)
    else:
        return Void
