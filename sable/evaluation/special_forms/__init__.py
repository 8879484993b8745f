"""Registry of special forms for the Sable evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table before ordinary application. Each handler
is called as handler(form, env, evaluate_fn) with the whole form.
"""

from sable.types.symbol import Symbol
from sable.evaluation.special_forms.begin_form import begin_form
from sable.evaluation.special_forms.define_form import define_form
from sable.evaluation.special_forms.define_macro_form import define_macro_form
from sable.evaluation.special_forms.if_form import if_form
from sable.evaluation.special_forms.lambda_form import lambda_form
from sable.evaluation.special_forms.quote_form import quote_form
from sable.evaluation.special_forms.set_form import set_form

SPECIAL_FORMS = {
    Symbol("define-macro"): define_macro_form,
    Symbol("define"): define_form,
    Symbol("def"): define_form,
    Symbol("set!"): set_form,
    Symbol("if"): if_form,
    Symbol("lambda"): lambda_form,
    Symbol("begin"): begin_form,
    Symbol("quote"): quote_form,
}
