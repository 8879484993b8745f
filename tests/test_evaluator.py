import pytest

from sable.errors import (
    ApplicationError,
    ArityError,
    SableSyntaxError,
    UnboundVariable,
)
from sable.evaluation.evaluator import apply_procedure, evaluate
from sable.printer import write_string
from sable.reader.parser import read
from sable.types.environment import Environment
from sable.types.nil import Void
from sable.types.pair import make_list
from sable.types.procedure import CompoundProcedure
from sable.types.symbol import Symbol


@pytest.fixture
def env():
    """
    A bare environment with a handful of primitives and no prelude,
    for exercising the evaluator on its own.
    """
    e = Environment()
    e.register("+", lambda env, args: sum(args, 0.0))
    e.register("-", lambda env, args: args[0] - sum(args[1:], 0.0))
    e.register("<", lambda env, args: args[0] < args[1])
    e.register("list", lambda env, args: make_list(args))
    return e


def ev(source, env):
    return evaluate(read(source)[0], env)


# ------------------ Atoms and symbols ------------------

@pytest.mark.parametrize("source", ["42", '"text"', "#t", "#f", "()"])
def test_atoms_evaluate_to_themselves(source, env):
    datum = read(source)[0]
    assert evaluate(datum, env) is datum


def test_symbol_lookup(env):
    env.define(Symbol("x"), 7.0)
    assert ev("x", env) == 7.0


def test_unbound_symbol(env):
    with pytest.raises(UnboundVariable):
        ev("nothing-here", env)


# ------------------ Application ------------------

def test_primitive_application(env):
    assert ev("(+ 1 2 3)", env) == 6.0


def test_nested_application(env):
    assert ev("(+ 1 (- 10 4))", env) == 7.0


def test_operands_evaluated_left_to_right(interp, output):
    interp.eval('(list (display "a") (display "b") (display "c"))')
    assert output.getvalue() == "abc"


@pytest.mark.parametrize("source", ["(5 1)", '("f")', "(#t)", "('(1 2) 0)"])
def test_applying_non_procedure(source, env):
    with pytest.raises(ApplicationError) as excinfo:
        ev(source, env)
    assert "Can't apply non-procedure" in str(excinfo.value)


def test_improper_application_is_syntax_error(env):
    with pytest.raises(SableSyntaxError):
        ev("(+ 1 . 2)", env)


def test_apply_procedure_rejects_non_procedures(env):
    with pytest.raises(ApplicationError):
        apply_procedure(5.0, [], env)


def test_evaluation_does_not_mutate_the_datum(env):
    datum = read("(quote (1 2))")[0]
    first = evaluate(datum, env)
    first.car = 99.0
    assert write_string(evaluate(datum, env)) == "(1 2)"
    assert write_string(datum) == "(quote (1 2))"


# ------------------ define / def / set! ------------------

def test_define_returns_void_and_binds(env):
    assert ev("(define x (+ 1 1))", env) is Void
    assert env.lookup(Symbol("x")) == 2.0


def test_define_without_value_binds_void(env):
    ev("(define x)", env)
    assert env.lookup(Symbol("x")) is Void


def test_def_is_an_alias(env):
    ev("(def y 3)", env)
    assert ev("y", env) == 3.0


def test_define_procedure_shorthand(env):
    ev("(define (add a b) (+ a b))", env)
    assert ev("(add 2 3)", env) == 5.0
    assert str(env.lookup(Symbol("add"))) == "#<procedure add>"


def test_define_variadic_shorthand(run):
    assert run("(define (f . args) args) (f 1 2)") == "(1 2)"
    assert run("(define (g a . rest) (list a rest)) (g 1 2 3)") == "(1 (2 3))"


def test_set_updates_existing_binding(env):
    ev("(define x 1)", env)
    assert ev("(set! x 2)", env) is Void
    assert ev("x", env) == 2.0


def test_set_unbound_variable(env):
    with pytest.raises(UnboundVariable):
        ev("(set! never-defined 1)", env)


def test_inner_define_does_not_leak(run, interp):
    run("(define (f) (define hidden 1) hidden) (f)")
    with pytest.raises(UnboundVariable):
        interp.eval("hidden")


# ------------------ if / begin ------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(if #t 1 2)", "1"),
        ("(if #f 1 2)", "2"),
        ("(if '() 1 2)", "1"),
        ("(if 0 1 2)", "1"),
        ('(if "" 1 2)', "1"),
        ("(if #f 1)", ""),
    ],
)
def test_if_truthiness(source, expected, run):
    assert run(source) == expected


def test_if_only_evaluates_chosen_branch(env):
    assert ev("(if #t 1 undefined-variable)", env) == 1.0


def test_begin(env):
    assert ev("(begin 1 2 3)", env) == 3.0
    assert ev("(begin)", env) is Void


# ------------------ lambda ------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("((lambda (x) x) 1)", "1"),
        ("((lambda () 5))", "5"),
        ("((lambda (a . rest) rest) 1 2 3)", "(2 3)"),
        ("((lambda (a . rest) rest) 1)", "()"),
        ("((lambda args args))", "()"),
        ("((lambda args args) 1 2)", "(1 2)"),
        ("((lambda (. xs) xs) 1 2)", "(1 2)"),
        ("((lambda (x) (define y 2) (+ x y)) 1)", "3"),
    ],
)
def test_lambda_parameter_shapes(source, expected, run):
    assert run(source) == expected


def test_lambda_builds_anonymous_closure(env):
    proc = ev("(lambda (x) x)", env)
    assert isinstance(proc, CompoundProcedure)
    assert proc.name == "anonymous"
    assert proc.params == [Symbol("x")]
    assert not proc.variadic


@pytest.mark.parametrize("source", ["((lambda (x) x))", "((lambda (x) x) 1 2)", "((lambda (x . r) x))"])
def test_arity_errors(source, env):
    with pytest.raises(ArityError):
        ev(source, env)


def test_closures_capture_defining_environment(run):
    code = """
    (define (make-adder n) (lambda (x) (+ x n)))
    (define add5 (make-adder 5))
    (define n 100)
    (add5 1)
    """
    assert run(code) == "6"


def test_closures_see_later_mutation(run):
    assert run("(let ((x 1)) (define g (lambda () x)) (set! x 2) (g))") == "2"


def test_counter_closure_keeps_state(run):
    code = """
    (define (make-counter)
      (define count 0)
      (lambda () (set! count (+ count 1)) count))
    (define c1 (make-counter))
    (define c2 (make-counter))
    (c1) (c1) (c2)
    (list (c1) (c2))
    """
    assert run(code) == "(3 2)"


def test_recursion(run):
    code = """
    (define (fact n) (if (< n 2) 1 (* n (fact (- n 1)))))
    (fact 10)
    """
    assert run(code) == "3628800"


# ------------------ quote ------------------

def test_quote_returns_datum_unevaluated(run):
    assert run("'(+ 1 2)") == "(+ 1 2)"
    assert run("(quote x)") == "x"
    assert run("''x") == "(quote x)"


def test_quote_is_fresh_on_each_evaluation(run):
    run("(define (f) '(1 2))")
    assert run("(eq? (f) (f))") == "#f"
    assert run("(equal? (f) (f))") == "#t"


def test_mutating_a_quoted_result_leaves_the_literal_alone(run):
    assert run("(define (g) '(1 2)) (set-car! (g) 9) (g)") == "(1 2)"


def test_pairs_are_shared_by_reference(run):
    assert run("(define x (list 1 2)) (define y x) (set-car! x 9) (car y)") == "9"


# ------------------ Syntax errors ------------------

@pytest.mark.parametrize(
    "source",
    [
        "(define)",
        "(define x 1 2)",
        "(define 5 1)",
        "(define (f))",
        "(define ((f) x) 1)",
        "(set! x)",
        "(set! 5 1)",
        "(set! x 1 2)",
        "(if 1)",
        "(if 1 2 3 4)",
        "(lambda)",
        "(lambda (x))",
        "(lambda (1) 1)",
        "(lambda (x . 1) x)",
        "(quote)",
        "(quote 1 2)",
        "(define-macro (m) 1)",
        "(define-macro (m a b) 1)",
        "(define-macro (m a))",
        "(define-macro m 1)",
        "(begin . 1)",
    ],
)
def test_malformed_special_forms(source, env):
    with pytest.raises(SableSyntaxError):
        ev(source, env)


def test_syntax_error_carries_the_form(env):
    with pytest.raises(SableSyntaxError) as excinfo:
        ev("(define x 1 2)", env)
    assert "(define x 1 2)" in str(excinfo.value)
    assert write_string(excinfo.value.form) == "(define x 1 2)"


def test_special_form_names_can_be_shadowed_only_as_variables(env):
    # Dispatch is on the head symbol, before any lookup
    ev("(define if 5)", env)
    assert ev("(if #f 1 2)", env) == 2.0
    assert ev("if", env) == 5.0


def test_global_redefinition_is_seen_by_closures(run):
    assert run("(define x 1) (define f (lambda () x)) (define x 2) (f)") == "2"
