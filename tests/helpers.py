"""Shared test helpers for the minic test suite."""

from __future__ import annotations

from minic.ast_nodes import Program
from minic.lexer import Lexer
from minic.parser import Parser
from minic.tokens import Token, TokenKind


def parse(source: str, **kwargs) -> tuple[Program, Parser]:
    """Lex and parse source, return (program, parser)."""
    tokens = Lexer(source, "test.mc").lex()
    parser = Parser(tokens, **kwargs)
    return parser.parse_program(), parser


def rendered(source: str) -> list[str]:
    """Parse source and return the canonical form of each statement."""
    program, parser = parse(source)
    assert not parser.errors, parser.errors
    return [str(s) for s in program.statements]


def codes(parser: Parser) -> list[str]:
    return [d.code for d in parser.diagnostics]


def toks(*pairs: tuple[TokenKind, str]) -> list[Token]:
    """Build span-less tokens from (kind, text) pairs."""
    return [Token(kind, text) for kind, text in pairs]
