"""Syntax tree nodes and a recursive-descent parser over tokens."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from .tokens import Token, TokenType


class ParseError(Exception):
    """Raised when the token stream does not form a valid expression."""

    exit_code = 64


@dataclass(frozen=True)
class NumberNode:
    value: float


@dataclass(frozen=True)
class StringNode:
    value: str


@dataclass(frozen=True)
class SymbolNode:
    name: str


@dataclass(frozen=True)
class ListNode:
    items: tuple = ()


@dataclass(frozen=True)
class DotPairNode:
    car: "Node"
    cdr: "Node"


@dataclass(frozen=True)
class NilNode:
    pass


Node = Union[NumberNode, StringNode, SymbolNode, ListNode, DotPairNode, NilNode]

_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")


def _to_number(text: str) -> float:
    """Read the longest numeric prefix of ``text``; 0.0 if there is none."""
    match = _NUMBER_PREFIX.match(text)
    return float(match.group()) if match else 0.0


class Parser:
    """Parses expressions from a sequence of tokens, tracking a position."""

    def __init__(self, tokens: Sequence[Token], pos: int = 0) -> None:
        self.tokens = tokens
        self.pos = pos

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def expect(self, token_type: TokenType) -> Token:
        """Consume the next token, which must be of ``token_type``."""
        if self.at_end():
            raise ParseError("Unexpected token found, but reached end of input")
        token = self.tokens[self.pos]
        if token.type is not token_type:
            raise ParseError("Expected some other type of input")
        self.pos += 1
        return token

    def parse_expr(self) -> Node:
        if self.at_end():
            raise ParseError("Unexpected end of input")
        token = self.tokens[self.pos]
        kind = token.type
        if kind is TokenType.PAREN_LEFT:
            self.pos += 1
            return self.parse_list()
        if kind is TokenType.PAREN_RIGHT:
            raise ParseError("Unexpected ')'")
        if kind is TokenType.NUMBER:
            self.pos += 1
            return NumberNode(_to_number(token.value))
        if kind is TokenType.SYMBOL:
            self.pos += 1
            return SymbolNode(token.value)
        if kind is TokenType.STR:
            self.pos += 1
            return StringNode(token.value)
        raise ParseError("Unexpected token found")

    def parse_list(self) -> Node:
        """Parse the remainder of a list whose '(' was already consumed."""
        items: list[Node] = []
        while not self.at_end():
            token = self.tokens[self.pos]
            if token.type is TokenType.PAREN_RIGHT:
                self.pos += 1
                return ListNode(tuple(items))
            if token.type is TokenType.SYMBOL and token.value == ".":
                self.pos += 1
                if len(items) != 1:
                    raise ParseError(
                        "Invalid dotted pair, must have exactly one item before dot"
                    )
                cdr = self.parse_expr()
                self.expect(TokenType.PAREN_RIGHT)
                return DotPairNode(items[0], cdr)
            items.append(self.parse_expr())
        raise ParseError("Unclosed '('")


def parse(tokens: Sequence[Token]) -> Node:
    """Parse the first expression in ``tokens``."""
    return Parser(tokens).parse_expr()


def parse_all(tokens: Sequence[Token]) -> list[Node]:
    """Parse every expression in ``tokens``, in order."""
    parser = Parser(tokens)
    nodes = []
    while not parser.at_end():
        nodes.append(parser.parse_expr())
    return nodes


def format_ast(node: Node) -> str:
    """Render a syntax tree as text."""
    if isinstance(node, NumberNode):
        return f"{node.value:f}"
    if isinstance(node, SymbolNode):
        return node.name
    if isinstance(node, StringNode):
        return f'"{node.value}"'
    if isinstance(node, ListNode):
        return "(" + " ".join(format_ast(item) for item in node.items) + ")"
    if isinstance(node, DotPairNode):
        return f"{format_ast(node.car)} . {format_ast(node.cdr)}"
    if isinstance(node, NilNode):
        return "()"
    raise TypeError(f"not a syntax node: {node!r}")