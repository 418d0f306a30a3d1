"""Evaluation of syntax trees into runtime values."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .environment import Environment
from .parser import (
    DotPairNode,
    ListNode,
    NilNode,
    Node,
    NumberNode,
    StringNode,
    SymbolNode,
)
from .values import (
    Boolean,
    Builtin,
    EvalError,
    Lambda,
    Nil,
    Number,
    Pair,
    String,
    Symbol,
    Value,
    from_iterable,
)


def evaluate(node: Node, env: Environment) -> Value:
    """Evaluate a syntax tree in ``env`` and return the resulting value."""
    if isinstance(node, NumberNode):
        return Number(node.value)
    if isinstance(node, StringNode):
        return String(node.value)
    if isinstance(node, SymbolNode):
        return env.lookup(node.name)
    if isinstance(node, NilNode):
        return Nil()
    if isinstance(node, DotPairNode):
        return Pair(evaluate(node.car, env), evaluate(node.cdr, env))
    if isinstance(node, ListNode):
        return _evaluate_list(node.items, env)
    raise EvalError("Unknown node found in evaluation")


def _evaluate_list(items: Sequence[Node], env: Environment) -> Value:
    if not items:
        return Nil()
    first = items[0]
    if isinstance(first, SymbolNode):
        form = _SPECIAL_FORMS.get(first.name)
        if form is not None:
            return form(items, env)
    fn = evaluate(first, env)
    if not isinstance(fn, (Builtin, Lambda)):
        raise EvalError("First element is not a function")
    args = [evaluate(item, env) for item in items[1:]]
    if isinstance(fn, Builtin):
        return fn(args)
    return call_lambda(fn, args)


def _eval_define(items: Sequence[Node], env: Environment) -> Value:
    if len(items) != 3:
        raise EvalError("Invalid define form")
    _, sym, expr = items
    if not isinstance(sym, SymbolNode):
        raise EvalError("define: expected symbol")
    value = evaluate(expr, env)
    env.define(sym.name, value)
    return value


def _eval_if(items: Sequence[Node], env: Environment) -> Value:
    if len(items) != 4:
        raise EvalError("Invalid if form")
    _, test, then_branch, else_branch = items
    cond = evaluate(test, env)
    if not isinstance(cond, (Number, Boolean)):
        raise EvalError("if: condition must be number")
    return evaluate(then_branch if _is_true(cond) else else_branch, env)


def _eval_atom(items: Sequence[Node], env: Environment) -> Value:
    if len(items) < 2:
        raise EvalError("Invalid atom form")
    value = evaluate(items[1], env)
    return Boolean(not isinstance(value, Pair))


def _eval_quote(items: Sequence[Node], env: Environment) -> Value:
    if len(items) != 2:
        raise EvalError("Invalid quote form")
    return quote(items[1])


def quote(node: Node) -> Value:
    """Turn a syntax tree into data without evaluating it."""
    if isinstance(node, NumberNode):
        return Number(node.value)
    if isinstance(node, SymbolNode):
        return Symbol(node.name)
    if isinstance(node, StringNode):
        return String(node.value)
    if isinstance(node, NilNode):
        return Nil()
    if isinstance(node, DotPairNode):
        return Pair(quote(node.car), quote(node.cdr))
    if isinstance(node, ListNode):
        return from_iterable(quote(item) for item in node.items)
    raise EvalError("Not a valid type to evaluate")


def _eval_eq(items: Sequence[Node], env: Environment) -> Value:
    if len(items) != 3:
        raise EvalError("Invalid eq form")
    lhs = evaluate(items[1], env)
    rhs = evaluate(items[2], env)
    if isinstance(lhs, Number) and isinstance(rhs, Number):
        return Boolean(lhs.value == rhs.value)
    if isinstance(lhs, String) and isinstance(rhs, String):
        return Boolean(lhs.value == rhs.value)
    if isinstance(lhs, Symbol) and isinstance(rhs, Symbol):
        return Boolean(lhs.name == rhs.name)
    return Boolean(isinstance(lhs, Nil) and isinstance(rhs, Nil))


def _eval_pair_part(take_car: bool) -> Callable[[Sequence[Node], Environment], Value]:
    def form(items: Sequence[Node], env: Environment) -> Value:
        if len(items) != 2:
            raise EvalError("Invalid car form")
        pair = evaluate(items[1], env)
        if not isinstance(pair, Pair):
            raise EvalError("Expected list or pair")
        part = pair.car if take_car else pair.cdr
        return Nil() if part is None else part

    return form


def _eval_cons(items: Sequence[Node], env: Environment) -> Value:
    if len(items) != 3:
        raise EvalError("Invalid cons form")
    return Pair(evaluate(items[1], env), evaluate(items[2], env))


def _eval_cond(items: Sequence[Node], env: Environment) -> Value:
    for clause in items[1:]:
        if not isinstance(clause, ListNode) or len(clause.items) != 2:
            raise EvalError("Invalid cond clause it should have 2 elements")
        test, result = clause.items
        if isinstance(test, SymbolNode) and test.name == "else":
            return evaluate(result, env)
        if _is_true(evaluate(test, env)):
            return evaluate(result, env)
    raise EvalError("No matching cond form")


def _eval_lambda(items: Sequence[Node], env: Environment) -> Value:
    if len(items) == 4 or len(items) < 3:
        raise EvalError("Lambda expects a body and params")
    return Lambda(items[1], items[2], env)


def _eval_label(items: Sequence[Node], env: Environment) -> Value:
    if len(items) == 4 or len(items) < 3:
        raise EvalError("Label expects name and lambda")
    name = items[1]
    if not isinstance(name, SymbolNode):
        raise EvalError("Label expects name and lambda")
    closure = evaluate(items[2], env)
    if not isinstance(closure, Lambda):
        raise EvalError("Label expects name and lambda")
    scope = env.child()
    scope.define(name.name, closure)
    closure.env = scope
    return closure


def call_lambda(closure: Lambda, args: Sequence[Value]) -> Value:
    """Apply a user-defined procedure to already evaluated arguments."""
    params = closure.params
    if not isinstance(params, ListNode):
        raise EvalError("Lambda parameters must be a list")
    if len(args) < len(params.items):
        raise EvalError("Not enough arguments for lambda")
    scope = closure.env.child()
    for param, arg in zip(params.items, args):
        if not isinstance(param, SymbolNode):
            raise EvalError("Lambda parameters must be symbols")
        scope.define(param.name, arg)
    return evaluate(closure.body, scope)


def _is_true(value: Value) -> bool:
    if isinstance(value, Number):
        return value.value != 0.0
    if isinstance(value, Boolean):
        return value.value
    return False


_SPECIAL_FORMS: dict[str, Callable[[Sequence[Node], Environment], Value]] = {
    "define": _eval_define,
    "if": _eval_if,
    "atom": _eval_atom,
    "quote": _eval_quote,
    "eq": _eval_eq,
    "car": _eval_pair_part(True),
    "cdr": _eval_pair_part(False),
    "cons": _eval_cons,
    "cond": _eval_cond,
    "lambda": _eval_lambda,
    "label": _eval_label,
}