from sable import EvaluatorFn, LispValue
from sable.evaluation.special_forms.syntax import operands, syntax_error
from sable.types.datum import copy_datum
from sable.types.environment import Environment
from sable.types.pair import Pair


def quote_form(form: Pair, env: Environment, _: EvaluatorFn) -> LispValue:
    """
    (quote datum)
    Pair structure is rebuilt on every evaluation, so mutating the result
    never changes the literal in the source form.
    """
    args = operands(form, "quote")
    if len(args) != 1:
        raise syntax_error("quote", "expected exactly one datum", form)
    return copy_datum(args[0])
