"""Token kinds and token representation for the minic lexer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from minic.source import Span


class TokenKind(Enum):
    # Identifiers and literals
    IDENTIFIER = auto()
    INTEGER_LIT = auto()

    # Special
    EOF = auto()
    ASSIGN = auto()

    # Punctuation
    COLON = auto()
    COMMA = auto()
    DOT = auto()
    SEMICOLON = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()

    # Keywords
    FN = auto()
    TRUE = auto()
    FALSE = auto()
    IF = auto()
    ELSE = auto()
    LET = auto()
    RETURN = auto()

    # Operators
    EQUAL = auto()
    NOT_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    PLUS = auto()
    MINUS = auto()
    SLASH = auto()
    STAR = auto()
    BANG = auto()


@dataclass(frozen=True)
class Token:
    """A lexical token. Two tokens are equal when kind and text match."""

    kind: TokenKind
    value: str
    span: Span | None = field(default=None, compare=False)


KEYWORDS: dict[str, TokenKind] = {
    "fn": TokenKind.FN,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "let": TokenKind.LET,
    "return": TokenKind.RETURN,
}
