"""AST node definitions for the minic language.

``str(node)`` gives the canonical, fully parenthesized rendering of a node;
``node.describe()`` gives a multi-line debug description.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from minic.tokens import Token


def _header(node: Expr | Stmt) -> str:
    return f"{type(node).__name__}[{node.token.kind.name}]"


def _indent(text: str) -> str:
    return "\n".join(f"  {line}" for line in text.splitlines())


# ── Expressions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Identifier:
    token: Token
    name: str

    def __str__(self) -> str:
        return self.name

    def describe(self) -> str:
        return f"{_header(self)} {self}"


@dataclass(frozen=True)
class IntegerLiteral:
    token: Token
    value: int

    def __str__(self) -> str:
        return self.token.value

    def describe(self) -> str:
        return f"{_header(self)} {self}"


@dataclass(frozen=True)
class Boolean:
    token: Token
    value: bool

    def __str__(self) -> str:
        return self.token.value

    def describe(self) -> str:
        return f"{_header(self)} {self}"


@dataclass(frozen=True)
class PrefixExpression:
    token: Token
    operator: str
    operand: Expr

    def __str__(self) -> str:
        return f"({self.operator}{self.operand})"

    def describe(self) -> str:
        return f"{_header(self)} {self}"


@dataclass(frozen=True)
class InfixExpression:
    token: Token
    operator: str
    left: Expr
    right: Expr

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"

    def describe(self) -> str:
        return f"{_header(self)} {self}"


@dataclass(frozen=True)
class IfExpression:
    token: Token
    condition: Expr
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        text = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            text += f" else {self.alternative}"
        return text

    def describe(self) -> str:
        parts = [
            _header(self),
            _indent(f"condition: {self.condition.describe()}"),
            _indent(f"consequence: {self.consequence.describe()}"),
        ]
        if self.alternative is not None:
            parts.append(_indent(f"alternative: {self.alternative.describe()}"))
        return "\n".join(parts)


Expr = Union[
    Identifier, IntegerLiteral, Boolean,
    PrefixExpression, InfixExpression, IfExpression,
]


# ── Statements ───────────────────────────────────────────────────


@dataclass(frozen=True)
class LetStatement:
    token: Token
    name: Identifier
    value: Expr

    def __str__(self) -> str:
        return f"let {self.name} = {self.value}"

    def describe(self) -> str:
        return f"{_header(self)} {self.name}\n{_indent(self.value.describe())}"


@dataclass(frozen=True)
class ReturnStatement:
    token: Token
    value: Expr

    def __str__(self) -> str:
        return f"return {self.value}"

    def describe(self) -> str:
        return f"{_header(self)}\n{_indent(self.value.describe())}"


@dataclass(frozen=True)
class ExpressionStatement:
    token: Token
    value: Expr

    def __str__(self) -> str:
        return str(self.value)

    def describe(self) -> str:
        return f"{_header(self)}\n{_indent(self.value.describe())}"


@dataclass(frozen=True)
class BlockStatement:
    token: Token
    statements: list[Stmt]

    def __str__(self) -> str:
        if not self.statements:
            return "{}"
        return "{ " + "; ".join(str(s) for s in self.statements) + " }"

    def describe(self) -> str:
        lines = [_header(self)]
        lines.extend(_indent(s.describe()) for s in self.statements)
        return "\n".join(lines)


Stmt = Union[LetStatement, ReturnStatement, ExpressionStatement, BlockStatement]


@dataclass(frozen=True)
class Program:
    statements: list[Stmt]

    def __str__(self) -> str:
        return "\n".join(str(s) for s in self.statements)

    def describe(self) -> str:
        lines = [f"Program ({len(self.statements)} statements)"]
        lines.extend(_indent(s.describe()) for s in self.statements)
        return "\n".join(lines)
