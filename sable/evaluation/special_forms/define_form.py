from sable import EvaluatorFn, LispValue
from sable.evaluation.special_forms.syntax import LAMBDA, operands, syntax_error
from sable.types.environment import Environment
from sable.types.nil import Void
from sable.types.pair import Pair, make_list
from sable.types.symbol import Symbol


def define_form(form: Pair, env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """
    (define name [value])
    (define (name . params) body...)  ; sugar for (define name (lambda params body...))
    """
    args = operands(form, "define")
    if not args:
        raise syntax_error("define", "missing variable name", form)

    target = args[0]
    match target:
        case Symbol():
            if len(args) > 2:
                raise syntax_error("define", "too many variable values", form)
            value = evaluate_fn(args[1], env) if len(args) == 2 else Void
            env.define(target, value)
            return Void
        case Pair(car=Symbol() as name, cdr=params):
            if len(args) < 2:
                raise syntax_error("define", "missing function body", form)
            procedure = Pair(LAMBDA, Pair(params, make_list(args[1:])))
            return define_form(make_list([form.car, name, procedure]), env, evaluate_fn)
        case Pair():
            raise syntax_error("define", "non-symbol function name", form)

    raise syntax_error("define", "can't define a literal", form)
