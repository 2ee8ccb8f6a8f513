"""Tokenizer for conversion formulas."""

from __future__ import annotations

import re
from enum import Enum, auto
from dataclasses import dataclass

from unitprefs.errors import UnsafeFormulaError


class TokenType(Enum):
    NUMBER = auto()    # 3, 0.5, 1.94384, 1e-3
    IDENT = auto()     # value, pow, sqrt
    OP = auto()        # + - * /
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()
    EOF = auto()


OPERATORS = {"+", "-", "*", "/"}

_NUMBER_RE = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_IDENT_RE = re.compile(r"[A-Za-z_]\w*")

_SINGLE_CHARS = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    col: int


def tokenize(source: str) -> list[Token]:
    """Convert formula text into a list of tokens.

    Anything that is not a number, identifier, operator, parenthesis or comma
    is rejected here, before the parser ever sees it.
    """
    tokens: list[Token] = []
    pos = 0

    while pos < len(source):
        ch = source[pos]

        if ch.isspace():
            pos += 1
            continue

        if ch in OPERATORS:
            tokens.append(Token(TokenType.OP, ch, pos))
            pos += 1
            continue

        if ch in _SINGLE_CHARS:
            tokens.append(Token(_SINGLE_CHARS[ch], ch, pos))
            pos += 1
            continue

        m = _NUMBER_RE.match(source, pos)
        if m:
            tokens.append(Token(TokenType.NUMBER, m.group(0), pos))
            pos = m.end()
            continue

        m = _IDENT_RE.match(source, pos)
        if m:
            tokens.append(Token(TokenType.IDENT, m.group(0), pos))
            pos = m.end()
            continue

        raise UnsafeFormulaError(f"Unexpected character {ch!r}", formula=source, col=pos)

    tokens.append(Token(TokenType.EOF, "", len(source)))
    return tokens
