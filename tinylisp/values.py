"""Runtime values produced by evaluation, and their printed form."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from .environment import Environment


class EvalError(Exception):
    """Raised when an expression cannot be evaluated."""

    exit_code = 1


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Symbol:
    name: str


@dataclass(frozen=True)
class String:
    value: str


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class Nil:
    pass


@dataclass(frozen=True)
class Pair:
    """A cons cell.  A proper list ends with a ``cdr`` of ``None``."""

    car: Optional["Value"]
    cdr: Optional["Value"] = None

    def __iter__(self) -> Iterator["Value"]:
        """Yield the ``car`` of each cell along the chain of pairs."""
        node: Optional[Value] = self
        while isinstance(node, Pair):
            yield node.car
            node = node.cdr


@dataclass(frozen=True)
class Builtin:
    """A primitive procedure that receives already evaluated arguments."""

    name: str
    fn: Callable[[Sequence["Value"]], "Value"]

    def __call__(self, args: Sequence["Value"]) -> "Value":
        return self.fn(args)


@dataclass(eq=False)
class Lambda:
    """A user-defined procedure closing over the environment it was made in."""

    params: Any
    body: Any
    env: "Environment"


Value = Union[Number, Symbol, String, Boolean, Nil, Pair, Builtin, Lambda]


def from_iterable(items: Iterable[Value]) -> Value:
    """Build a proper list of pairs from ``items``; ``Nil`` when empty."""
    result: Optional[Value] = None
    for item in reversed(list(items)):
        result = Pair(item, result)
    return Nil() if result is None else result


def format_value(value: Optional[Value]) -> str:
    """Render a value the way the interpreter prints results."""
    if value is None or isinstance(value, Nil):
        return "()"
    if isinstance(value, Number):
        return f"{value.value:g}"
    if isinstance(value, Symbol):
        return value.name
    if isinstance(value, Lambda):
        return "<function>"
    if isinstance(value, Boolean):
        return "#t" if value.value else "#f"
    if isinstance(value, Pair):
        parts = [format_value(value.car)]
        node = value.cdr
        while isinstance(node, Pair):
            parts.append(format_value(node.car))
            node = node.cdr
        text = " ".join(parts)
        if node is not None:
            text += " . " + format_value(node)
        return f"({text})"
    return "<unknown>"