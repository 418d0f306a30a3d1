"""Lexical analysis: turning source text into a flat list of tokens."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_WHITESPACE = frozenset(" \t\n\v\f\r")
_SYMBOL_START = frozenset("+-*/<>=!?_&%$#")


class TokenType(enum.Enum):
    """Kinds of token produced by the tokenizer."""

    PAREN_LEFT = enum.auto()
    PAREN_RIGHT = enum.auto()
    NUMBER = enum.auto()
    STR = enum.auto()
    SYMBOL = enum.auto()
    INVALID = enum.auto()


@dataclass(frozen=True)
class Token:
    """A single token: its kind and the text it was read from."""

    type: TokenType
    value: str


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_alpha(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _ends_symbol(ch: str) -> bool:
    return ch in _WHITESPACE or ch in "()"


def read_token(text: str, pos: int) -> tuple[Token | None, int]:
    """Read one token starting at ``pos``.

    Returns the token and the position just after it.  When only
    whitespace remains, the token is ``None``.  Characters that start no
    token come back as a single-character ``INVALID`` token.
    """
    length = len(text)
    while pos < length and text[pos] in _WHITESPACE:
        pos += 1
    if pos >= length:
        return None, pos

    ch = text[pos]
    if ch == "(":
        return Token(TokenType.PAREN_LEFT, ch), pos + 1
    if ch == ")":
        return Token(TokenType.PAREN_RIGHT, ch), pos + 1

    if ch == '"':
        close = text.find('"', pos + 1)
        if close == -1:
            return Token(TokenType.STR, text[pos + 1:]), length
        return Token(TokenType.STR, text[pos + 1:close]), close + 1

    if _is_digit(ch) or (ch == "-" and pos + 1 < length and _is_digit(text[pos + 1])):
        end = pos + 1
        while end < length and (_is_digit(text[end]) or text[end] == "."):
            end += 1
        return Token(TokenType.NUMBER, text[pos:end]), end

    if _is_alpha(ch) or ch in _SYMBOL_START:
        end = pos + 1
        while end < length and not _ends_symbol(text[end]):
            end += 1
        return Token(TokenType.SYMBOL, text[pos:end]), end

    return Token(TokenType.INVALID, ch), pos + 1


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens, silently dropping invalid characters."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        token, pos = read_token(text, pos)
        if token is not None and token.type is not TokenType.INVALID:
            tokens.append(token)
    return tokens