import pytest

from tinylisp.environment import global_environment
from tinylisp.evaluator import call_lambda, evaluate, quote
from tinylisp.parser import (
    DotPairNode,
    ListNode,
    NilNode,
    NumberNode,
    StringNode,
    SymbolNode,
    parse,
)
from tinylisp.tokens import tokenize
from tinylisp.values import (
    Boolean,
    EvalError,
    Lambda,
    Nil,
    Number,
    Pair,
    String,
    Symbol,
    format_value,
    from_iterable,
)


def run(text, env=None):
    if env is None:
        env = global_environment()
    return evaluate(parse(tokenize(text)), env)


def test_number_literal():
    assert run("42") == Number(42.0)


def test_string_literal():
    assert run('"hi"') == String("hi")


def test_empty_list_is_nil():
    assert run("()") == Nil()
    assert evaluate(NilNode(), global_environment()) == Nil()


def test_builtin_call_matches_literal():
    assert run("(+ 2 3)") == run("5")


def test_nested_builtin_calls():
    assert run("(* (+ 1 1) (- 5 2))") == run("(* 2 3)")


def test_unbound_variable():
    with pytest.raises(EvalError, match="Unbound variable: nope"):
        run("nope")


def test_define_binds_and_returns_value():
    env = global_environment()
    assert run("(define x 7)", env) == Number(7.0)
    assert run("x", env) == Number(7.0)


@pytest.mark.parametrize("text", ["(define x)", "(define 1 2)", "(define x 1 2)"])
def test_define_errors(text):
    with pytest.raises(EvalError):
        run(text)


def test_if_branches():
    assert run("(if #t 1 2)") == run("1")
    assert run("(if #f 1 2)") == run("2")
    assert run("(if 0 1 2)") == run("2")


def test_if_rejects_non_number_condition():
    with pytest.raises(EvalError, match="condition must be number"):
        run('(if "s" 1 2)')


def test_if_arity():
    with pytest.raises(EvalError, match="Invalid if form"):
        run("(if 1 2)")


def test_atom():
    assert run("(atom 1)") == Boolean(True)
    assert run("(atom (quote (1 2)))") == Boolean(False)


def test_quote_nodes():
    assert quote(SymbolNode("a")) == Symbol("a")
    assert quote(StringNode("s")) == String("s")
    assert quote(ListNode(())) == Nil()
    assert quote(DotPairNode(NumberNode(1.0), NumberNode(2.0))) == Pair(
        Number(1.0), Number(2.0)
    )


def test_quote_list_builds_proper_list():
    result = run("(quote (1 a))")
    assert result == from_iterable([Number(1.0), Symbol("a")])
    assert list(result) == [Number(1.0), Symbol("a")]


def test_quote_arity():
    with pytest.raises(EvalError, match="Invalid quote form"):
        run("(quote)")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("(eq 1 1)", True),
        ("(eq 1 2)", False),
        ("(eq (quote a) (quote a))", True),
        ("(eq (quote a) (quote b))", False),
        ('(eq "x" "x")', True),
        ("(eq () ())", True),
        ("(eq 1 (quote a))", False),
    ],
)
def test_eq(text, expected):
    assert run(text) == Boolean(expected)


def test_eq_arity():
    with pytest.raises(EvalError, match="Invalid eq form"):
        run("(eq 1)")


def test_car_and_cdr():
    assert run("(car (quote (1 2)))") == Number(1.0)
    assert list(run("(cdr (quote (1 2)))")) == [Number(2.0)]
    assert run("(cdr (quote (1)))") == Nil()


def test_car_requires_pair():
    with pytest.raises(EvalError, match="Expected list or pair"):
        run("(car 1)")


def test_cons_makes_pair():
    result = run("(cons 1 2)")
    assert result == Pair(Number(1.0), Number(2.0))
    assert run("(car (cons 1 2))") == Number(1.0)
    assert run("(cdr (cons 1 2))") == Number(2.0)


def test_cond():
    assert run("(cond ((eq 1 2) 10) (#t 20))") == run("20")
    assert run("(cond (0 1) (else 3))") == run("3")


def test_cond_without_match():
    with pytest.raises(EvalError, match="No matching cond form"):
        run("(cond (#f 1))")


def test_cond_bad_clause():
    with pytest.raises(EvalError, match="cond clause"):
        run("(cond (1 2 3))")


def test_lambda_call():
    assert run("((lambda (x) (* x x)) 3)") == run("(* 3 3)")


def test_lambda_binds_params_positionally():
    assert run("((lambda (a b) (- a b)) 10 4)") == run("(- 10 4)")


def test_lambda_is_printed_as_function():
    closure = run("(lambda (x) x)")
    assert isinstance(closure, Lambda)
    assert format_value(closure) == "<function>"


def test_lambda_captures_environment():
    env = global_environment()
    run("(define n 4)", env)
    run("(define addn (lambda (x) (+ x n)))", env)
    assert run("(addn 1)", env) == run("(+ 1 4)")


def test_lambda_wrong_form():
    with pytest.raises(EvalError, match="Lambda expects"):
        run("(lambda (x) x x)")


def test_label_recursion():
    text = "((label fact (lambda (n) (if (eq n 0) 1 (* n (fact (- n 1)))))) 5)"
    assert run(text) == run("(* 5 4 3 2 1)")


def test_label_requires_lambda():
    with pytest.raises(EvalError, match="Label expects"):
        run("(label f 1)")


def test_call_lambda_directly():
    closure = run("(lambda (x) (+ x 1))")
    assert call_lambda(closure, [Number(1.0)]) == run("(+ 1 1)")


def test_call_lambda_too_few_args():
    closure = run("(lambda (x y) x)")
    with pytest.raises(EvalError):
        call_lambda(closure, [Number(1.0)])


@pytest.mark.parametrize("text", ["(1 2)", "((quote (1)) 2)", '("f" 1)'])
def test_non_function_head(text):
    with pytest.raises(EvalError, match="First element is not a function"):
        run(text)