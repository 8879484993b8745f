import pytest

from sable.errors import PrimitiveArgumentError, UnboundVariable
from sable.interpreter import Interpreter
from sable.types.macro import Macro


# ------------------ define-macro ------------------

def test_macro_receives_the_whole_form(run):
    run("(define-macro (form-of e) (list 'quote e))")
    assert run("(form-of 1 (2 3) x)") == "(form-of 1 (2 3) x)"


def test_my_or_expands_then_evaluates(run):
    run("(define-macro (my-or e) (list 'if (cadr e) (cadr e) (caddr e)))")
    assert run("(my-or #f 5)") == "5"
    assert run("(my-or 1 undefined-thing)") == "1"


def test_define_macro_returns_void_and_binds_a_macro(interp, run):
    assert run("(define-macro (m e) 1)") == ""
    assert isinstance(interp.eval("m"), Macro)
    assert run("m") == "#<macro m>"
    assert run("(macro? m)") == "#t"
    assert run("(procedure? m)") == "#f"


def test_macro_body_with_several_expressions(run):
    run("""
    (define-macro (swap! e)
      (define a (cadr e))
      (define b (caddr e))
      (list 'begin
            (list 'define 'sable-tmp a)
            (list 'set! a b)
            (list 'set! b 'sable-tmp)))
    """)
    assert run("(define x 1) (define y 2) (swap! x y) (list x y)") == "(2 1)"


def test_expansion_is_evaluated_in_the_caller_scope(run):
    run("(define-macro (get-x e) 'x)")
    assert run("(let ((x 42)) (get-x))") == "42"


def test_transformer_runs_in_the_defining_scope(run):
    code = """
    (define helper 100)
    (define-macro (add-helper e) (list '+ helper (cadr e)))
    (let ((helper 1)) (add-helper 5))
    """
    assert run(code) == "105"


def test_transformer_locals_do_not_touch_the_caller(run):
    code = """
    (define-macro (my-or e) (define tmp (cadr e)) (list 'if tmp tmp (caddr e)))
    (define tmp 7)
    (my-or #f tmp)
    """
    assert run(code) == "7"
    assert run("tmp") == "7"


def test_macros_can_expand_into_macros(run):
    run("(define-macro (my-unless e) (list 'if (cadr e) #f (caddr e)))")
    run("(define-macro (my-when-not e) (list 'my-unless (cadr e) (caddr e)))")
    assert run("(my-when-not #f 3)") == "3"


def test_macro_is_not_a_procedure(interp):
    interp.eval("(define-macro (m e) 1)")
    with pytest.raises(PrimitiveArgumentError):
        interp.eval("(apply m '(1 2))")


def test_macros_are_per_interpreter(interp):
    interp.eval("(define-macro (only-here e) 1)")
    other = Interpreter()
    with pytest.raises(UnboundVariable):
        other.eval("(only-here)")


# ------------------ Prelude syntax ------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(and)", "#t"),
        ("(and 1 2)", "2"),
        ("(and 1 #f 3)", "#f"),
        ("(and #f (car '()))", "#f"),
        ("(and '() 0)", "0"),
        ("(or)", "#f"),
        ("(or #f 3)", "3"),
        ("(or #f #f)", "#f"),
        ("(or 1 (car '()))", "1"),
        ("(cond ((= 1 2) 'a) ((= 1 1) 'b) (else 'c))", "b"),
        ("(cond (#f 1) (else 2 3))", "3"),
        ("(cond (#f 1))", ""),
        ("(let ((x 1) (y 2)) (+ x y))", "3"),
        ("(let () 5)", "5"),
        ("(let ((x 1)) (let ((x 2) (y x)) y))", "1"),
        ("(let loop ((i 0) (acc '())) (if (= i 3) (reverse acc) (loop (+ i 1) (cons i acc))))", "(0 1 2)"),
        ("(force (delay (+ 1 2)))", "3"),
    ],
)
def test_prelude_syntax(source, expected, run):
    assert run(source) == expected


def test_named_let_initial_values_see_the_outer_scope(run):
    source = "(let ((f 1)) (let f ((i f) (acc '())) (if (= i 3) acc (f (+ i 1) (cons i acc)))))"
    assert run(source) == "(2 1)"


def test_or_evaluates_each_operand_once(run):
    assert run("(define n 0) (or (begin (set! n (+ n 1)) n) 99) n") == "1"


def test_delay_postpones_evaluation(run, output):
    run('(define p (delay (display "ran")))')
    assert output.getvalue() == ""
    run("(force p)")
    assert output.getvalue() == "ran"


def test_no_prelude_means_no_derived_syntax():
    interp = Interpreter(prelude=None)
    with pytest.raises(UnboundVariable):
        interp.eval("(and 1 2)")
