"""Registry of special forms for the nslisp evaluator.

Maps keyword Symbols to handler functions that implement non-standard
evaluation rules. The evaluator consults this table before ordinary
function application, so these names cannot be used as operators.

Every handler has the signature
    handler(tail, context, environment, evaluate_fn, is_tail) -> value
"""

from nslisp.types.symbol import Symbol
from nslisp.evaluation.special_forms.define_forms import const_form, let_form, defn_form, defnr_form
from nslisp.evaluation.special_forms.set_form import set_form
from nslisp.evaluation.special_forms.namespace_forms import namespace_form, use_form
from nslisp.evaluation.special_forms.do_form import do_form
from nslisp.evaluation.special_forms.if_form import if_form
from nslisp.evaluation.special_forms.loop_forms import loop_form, break_form, recur_form
from nslisp.evaluation.special_forms.fn_form import fn_form

SPECIAL_FORMS = {
    Symbol("const"): const_form,
    Symbol("let"): let_form,
    Symbol("set"): set_form,
    Symbol("namespace"): namespace_form,
    Symbol("use"): use_form,
    Symbol("do"): do_form,
    Symbol("if"): if_form,
    Symbol("loop"): loop_form,
    Symbol("break"): break_form,
    Symbol("recur"): recur_form,
    Symbol("defn"): defn_form,
    Symbol("defnr"): defnr_form,
    Symbol("fn"): fn_form,
}
