"""Operator precedence levels and the lookup table driving the Pratt parser."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import IntEnum
from types import MappingProxyType

from minic.tokens import TokenKind


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2        # == !=
    LESS_GREATER = 3  # < <= > >=
    SUM = 4           # + -
    PRODUCT = 5       # * /
    PREFIX = 6        # !x -x


class PrecedenceTable(Mapping[TokenKind, Precedence]):
    """Immutable token kind -> precedence mapping.

    Kinds without an entry bind at ``Precedence.LOWEST``, which keeps them
    out of the infix loop entirely.
    """

    def __init__(self, entries: Mapping[TokenKind, Precedence]) -> None:
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, kind: TokenKind) -> Precedence:
        return self._entries[kind]

    def __iter__(self) -> Iterator[TokenKind]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        body = ", ".join(f"{k.name}: {v.name}" for k, v in self._entries.items())
        return f"PrecedenceTable({{{body}}})"

    def of(self, kind: TokenKind | None) -> Precedence:
        if kind is None:
            return Precedence.LOWEST
        return self._entries.get(kind, Precedence.LOWEST)


DEFAULT_PRECEDENCES = PrecedenceTable({
    TokenKind.EQUAL: Precedence.EQUALS,
    TokenKind.NOT_EQUAL: Precedence.EQUALS,
    TokenKind.LESS: Precedence.LESS_GREATER,
    TokenKind.LESS_EQUAL: Precedence.LESS_GREATER,
    TokenKind.GREATER: Precedence.LESS_GREATER,
    TokenKind.GREATER_EQUAL: Precedence.LESS_GREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.STAR: Precedence.PRODUCT,
})
