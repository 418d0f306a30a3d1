"""Variable environments and the built-in arithmetic procedures."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Optional

from .values import Boolean, Builtin, EvalError, Number, Value


class Environment:
    """A scope of bindings that falls back to its parent on lookup."""

    def __init__(self, parent: Optional["Environment"] = None) -> None:
        self.bindings: dict[str, Value] = {}
        self.parent = parent

    def define(self, name: str, value: Value) -> None:
        """Bind ``name`` in this scope, replacing any earlier binding."""
        self.bindings[name] = value

    def lookup(self, name: str) -> Value:
        """Find ``name`` here or in an enclosing scope."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.bindings:
                return env.bindings[name]
            env = env.parent
        raise EvalError(f"Unbound variable: {name}")

    def child(self) -> "Environment":
        """Create a new scope nested inside this one."""
        return Environment(self)


def _single_number(args: Sequence[Value]) -> float:
    if len(args) != 1:
        raise EvalError("Error: argument count must be one")
    arg = args[0]
    if not isinstance(arg, Number):
        raise EvalError("Error: argument must be an number")
    return arg.value


def builtin_add(args: Sequence[Value]) -> Number:
    total = 0.0
    for arg in args:
        if not isinstance(arg, Number):
            return Number(0.0)
        total += arg.value
    return Number(total)


def builtin_mul(args: Sequence[Value]) -> Number:
    product = 1.0
    for arg in args:
        if not isinstance(arg, Number):
            return Number(1.0)
        product *= arg.value
    return Number(product)


def builtin_sub(args: Sequence[Value]) -> Number:
    if not args:
        return Number(0.0)
    first, *rest = args
    if not isinstance(first, Number):
        return Number(0.0)
    if not rest:
        return Number(-first.value)
    result = first.value
    for arg in rest:
        if not isinstance(arg, Number):
            return Number(0.0)
        result -= arg.value
    return Number(result)


def builtin_div(args: Sequence[Value]) -> Number:
    if not args:
        return Number(1.0)
    first, *rest = args
    if not isinstance(first, Number):
        return Number(0.0)
    if not rest:
        if first.value == 0:
            raise EvalError("Error: division by zero")
        return Number(1.0 / first.value)
    result = first.value
    for arg in rest:
        if not isinstance(arg, Number):
            return Number(0.0)
        if arg.value == 0:
            raise EvalError("Error: division by zero")
        result /= arg.value
    return Number(result)


def _extreme(args: Sequence[Value], better) -> Number:
    if not args:
        return Number(0.0)
    first, *rest = args
    if not isinstance(first, Number):
        return Number(0.0)
    result = first.value
    for arg in rest:
        if not isinstance(arg, Number):
            raise EvalError("Error: sequence should be all numbers")
        if better(arg.value, result):
            result = arg.value
    return Number(result)


def builtin_max(args: Sequence[Value]) -> Number:
    return _extreme(args, lambda candidate, best: candidate > best)


def builtin_min(args: Sequence[Value]) -> Number:
    return _extreme(args, lambda candidate, best: candidate < best)


def builtin_abs(args: Sequence[Value]) -> Number:
    return Number(math.fabs(_single_number(args)))


def builtin_sqrt(args: Sequence[Value]) -> Number:
    x = _single_number(args)
    return Number(math.sqrt(x) if x >= 0 or math.isnan(x) else math.nan)


def builtin_floor(args: Sequence[Value]) -> Number:
    x = _single_number(args)
    return Number(float(math.floor(x)) if math.isfinite(x) else x)


def builtin_ceil(args: Sequence[Value]) -> Number:
    x = _single_number(args)
    return Number(float(math.ceil(x)) if math.isfinite(x) else x)


def builtin_mod(args: Sequence[Value]) -> Number:
    if len(args) != 2:
        raise EvalError("Error: argument count must be two")
    lhs, rhs = args
    if not isinstance(lhs, Number) or not isinstance(rhs, Number):
        raise EvalError("Error: argument must be an number")
    try:
        return Number(math.fmod(lhs.value, rhs.value))
    except ValueError:
        return Number(math.nan)


_BUILTINS = {
    "+": builtin_add,
    "*": builtin_mul,
    "-": builtin_sub,
    "/": builtin_div,
    "max": builtin_max,
    "min": builtin_min,
    "abs": builtin_abs,
    "sqrt": builtin_sqrt,
    "floor": builtin_floor,
    "ceil": builtin_ceil,
    "mod": builtin_mod,
    "%": builtin_mod,
}


def global_environment() -> Environment:
    """Create the top-level environment with all built-ins bound."""
    env = Environment()
    for name, fn in _BUILTINS.items():
        env.define(name, Builtin(name, fn))
    env.define("#t", Boolean(True))
    env.define("#f", Boolean(False))
    return env