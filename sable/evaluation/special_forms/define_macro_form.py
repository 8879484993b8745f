from sable import EvaluatorFn, LispValue
from sable.evaluation.special_forms.syntax import operands, syntax_error, wrap_body
from sable.types.environment import Environment
from sable.types.macro import Macro
from sable.types.nil import Void
from sable.types.pair import Pair, list_items
from sable.types.procedure import CompoundProcedure
from sable.types.symbol import Symbol


def define_macro_form(form: Pair, env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """
    (define-macro (name form-param) body...)
    The transformer closes over `env` and receives the whole call form.
    """
    args = operands(form, "define-macro")
    if len(args) < 2:
        raise syntax_error("define-macro", "missing macro body", form)

    signature = list_items(args[0])
    if signature is None or len(signature) != 2:
        raise syntax_error("define-macro", "expected (name form-param)", form)
    name, param = signature
    if not isinstance(name, Symbol) or not isinstance(param, Symbol):
        raise syntax_error("define-macro", "non-symbol macro name or parameter", form)

    transformer = CompoundProcedure([param], wrap_body(args[1:]), env)
    env.define(name, Macro(transformer))
    return Void
