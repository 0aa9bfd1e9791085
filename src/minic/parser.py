"""Parser for the minic language.

Transforms a token stream into an AST using a Pratt expression parser for
expressions and recursive descent for statements. Parse failures never
raise: each one is recorded as a diagnostic, the offending construct
yields ``None`` and parsing carries on with the next token.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from minic.ast_nodes import (
    BlockStatement,
    Boolean,
    Expr,
    ExpressionStatement,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Stmt,
)
from minic.errors import CompileError, Diagnostic, DiagnosticLabel, Severity
from minic.lexer import Lexer
from minic.precedence import DEFAULT_PRECEDENCES, Precedence, PrecedenceTable
from minic.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

PrefixParseFn = Callable[[], "Expr | None"]
InfixParseFn = Callable[["Expr | None"], "Expr | None"]


class Parser:
    """Parses a stream of tokens into a minic ``Program``.

    The parser pulls tokens lazily and only ever holds two of them: the
    token being parsed (``current_token``) and the one after it
    (``lookahead_token``). An ``EOF`` token, or running out of tokens,
    leaves the slot as ``None``.
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        *,
        precedences: PrecedenceTable = DEFAULT_PRECEDENCES,
        report_unterminated_blocks: bool = True,
    ) -> None:
        self._source = iter(tokens)
        self._exhausted = False
        self.precedences = precedences
        self.report_unterminated_blocks = report_unterminated_blocks
        self.diagnostics: list[Diagnostic] = []

        self._prefix_parse_fns: dict[TokenKind, PrefixParseFn] = {
            TokenKind.IDENTIFIER: self.parse_identifier,
            TokenKind.INTEGER_LIT: self.parse_integer_literal,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.TRUE: self.parse_boolean,
            TokenKind.FALSE: self.parse_boolean,
            TokenKind.IF: self.parse_if_expression,
        }
        self._infix_parse_fns: dict[TokenKind, InfixParseFn] = {
            kind: self.parse_infix_expression
            for kind in (
                TokenKind.PLUS, TokenKind.MINUS,
                TokenKind.STAR, TokenKind.SLASH,
                TokenKind.EQUAL, TokenKind.NOT_EQUAL,
                TokenKind.LESS, TokenKind.LESS_EQUAL,
                TokenKind.GREATER, TokenKind.GREATER_EQUAL,
            )
        }

        self.current_token: Token | None = self._pull()
        self.lookahead_token: Token | None = self._pull()

    @property
    def errors(self) -> list[str]:
        """Diagnostic messages in the order they were recorded."""
        return [d.message for d in self.diagnostics]

    # ── Token access ─────────────────────────────────────────────

    def _pull(self) -> Token | None:
        if self._exhausted:
            return None
        tok = next(self._source, None)
        if tok is None or tok.kind == TokenKind.EOF:
            self._exhausted = True
            return None
        return tok

    def advance(self) -> None:
        self.current_token = self.lookahead_token
        self.lookahead_token = self._pull()

    def current_is(self, kind: TokenKind) -> bool:
        return self.current_token is not None and self.current_token.kind == kind

    def lookahead_is(self, kind: TokenKind) -> bool:
        return self.lookahead_token is not None and self.lookahead_token.kind == kind

    def expect_lookahead(self, kind: TokenKind) -> bool:
        """Advance onto the lookahead token if it has the given kind.

        On a mismatch a diagnostic is recorded and the cursor stays put.
        """
        if self.lookahead_is(kind):
            self.advance()
            return True
        self._lookahead_error(kind)
        return False

    def current_precedence(self) -> Precedence:
        return self.precedences.of(self.current_token.kind if self.current_token else None)

    def lookahead_precedence(self) -> Precedence:
        return self.precedences.of(self.lookahead_token.kind if self.lookahead_token else None)

    # ── Diagnostics ──────────────────────────────────────────────

    def _error(
        self,
        code: str,
        message: str,
        token: Token | None,
        notes: list[str] | None = None,
        label: str = "",
    ) -> None:
        labels = []
        if token is not None and token.span is not None:
            labels.append(DiagnosticLabel(span=token.span, message=label))
        self.diagnostics.append(
            Diagnostic(
                severity=Severity.ERROR,
                code=code,
                message=message,
                labels=labels,
                notes=notes or [],
            )
        )

    def _lookahead_error(self, kind: TokenKind) -> None:
        tok = self.lookahead_token
        found = f"{tok.kind.name} ({tok.value!r})" if tok is not None else "end of input"
        self._error(
            "E200",
            f"expected next token to be {kind.name}, got {found} instead",
            tok if tok is not None else self.current_token,
            label=f"expected {kind.name} here",
        )

    def _no_prefix_parse_fn_error(self, tok: Token) -> None:
        self._error(
            "E201", f"no prefix parse function for {tok.kind.name} found", tok,
            label="expected an expression",
        )

    def _no_infix_parse_fn_error(self, tok: Token) -> None:
        self._error(
            "E202", f"no infix parse function for {tok.kind.name} found", tok,
            label="not an infix operator",
        )

    # ── Statements ───────────────────────────────────────────────

    def parse_program(self) -> Program:
        """Parse every remaining token into a Program.

        Statements that fail to parse are dropped; parsing always continues
        until the token source is exhausted.
        """
        logger.debug("parsing program")
        statements: list[Stmt] = []
        while self.current_token is not None:
            start = self.current_token
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            else:
                logger.debug("dropped statement starting at %s (%r)", start.kind.name, start.value)
            self.advance()
        logger.debug(
            "parsed %d statement(s) with %d diagnostic(s)",
            len(statements), len(self.diagnostics),
        )
        return Program(statements)

    def parse_statement(self) -> Stmt | None:
        tok = self.current_token
        if tok is None:
            return None
        match tok.kind:
            case TokenKind.LET:
                return self.parse_let_statement()
            case TokenKind.RETURN:
                return self.parse_return_statement()
            case TokenKind.LBRACE:
                block = self.parse_block_statement()
                self._skip_terminator()
                return block
            case _:
                return self.parse_expression_statement()

    def _skip_terminator(self) -> None:
        if self.lookahead_is(TokenKind.SEMICOLON):
            self.advance()

    def _skip_terminators(self) -> None:
        while self.lookahead_is(TokenKind.SEMICOLON):
            self.advance()

    def parse_let_statement(self) -> LetStatement | None:
        tok = self.current_token
        if not self.expect_lookahead(TokenKind.IDENTIFIER):
            return None
        name_tok = self.current_token
        name = Identifier(name_tok, name_tok.value)

        if not self.expect_lookahead(TokenKind.ASSIGN):
            return None
        self.advance()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        self._skip_terminators()
        return LetStatement(tok, name, value)

    def parse_return_statement(self) -> ReturnStatement | None:
        tok = self.current_token
        self.advance()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        self._skip_terminators()
        return ReturnStatement(tok, value)

    def parse_expression_statement(self) -> ExpressionStatement | None:
        tok = self.current_token
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        self._skip_terminator()
        return ExpressionStatement(tok, value)

    def parse_block_statement(self) -> BlockStatement:
        """Parse ``{ ... }`` starting with the opening brace as current token.

        Leaves the closing brace as the current token.
        """
        tok = self.current_token
        self.advance()

        statements: list[Stmt] = []
        while self.current_token is not None and not self.current_is(TokenKind.RBRACE):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.advance()

        if self.current_token is None and self.report_unterminated_blocks:
            self._error(
                "E204", "unterminated block: expected RBRACE before end of input", tok,
                label="block opened here",
            )
        return BlockStatement(tok, statements)

    # ── Pratt expression parser ──────────────────────────────────

    def parse_expression(self, precedence: Precedence) -> Expr | None:
        """Parse an expression binding tighter than ``precedence``."""
        tok = self.current_token
        if tok is None:
            self._error("E201", "expected an expression, found end of input", None)
            return None

        prefix = self._prefix_parse_fns.get(tok.kind)
        if prefix is None:
            self._no_prefix_parse_fn_error(tok)
            return None
        left = prefix()

        while (not self.lookahead_is(TokenKind.SEMICOLON)
               and precedence < self.lookahead_precedence()):
            op_tok = self.lookahead_token
            infix = self._infix_parse_fns.get(op_tok.kind)
            if infix is None:
                self._no_infix_parse_fn_error(op_tok)
                return left
            self.advance()
            left = infix(left)

        return left

    def parse_identifier(self) -> Identifier:
        tok = self.current_token
        return Identifier(tok, tok.value)

    def parse_integer_literal(self) -> IntegerLiteral | None:
        tok = self.current_token
        try:
            value = int(tok.value, 10)
        except ValueError:
            value = None
        if value is None or not _INT64_MIN <= value <= _INT64_MAX:
            self._error(
                "E203", f"could not parse {tok.value!r} as integer", tok,
                notes=["integer literals must fit in a signed 64-bit integer"],
                label="out of range",
            )
            return None
        return IntegerLiteral(tok, value)

    def parse_boolean(self) -> Boolean:
        tok = self.current_token
        return Boolean(tok, self.current_is(TokenKind.TRUE))

    def parse_prefix_expression(self) -> PrefixExpression | None:
        tok = self.current_token
        self.advance()
        operand = self.parse_expression(Precedence.PREFIX)
        if operand is None:
            return None
        return PrefixExpression(tok, tok.value, operand)

    def parse_infix_expression(self, left: Expr | None) -> InfixExpression | None:
        if left is None:
            return None
        tok = self.current_token
        precedence = self.current_precedence()
        self.advance()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(tok, tok.value, left, right)

    def parse_grouped_expression(self) -> Expr | None:
        self.advance()  # (
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None:
            return None
        if not self.expect_lookahead(TokenKind.RPAREN):
            return None
        return expr

    def parse_if_expression(self) -> IfExpression | None:
        tok = self.current_token
        if not self.expect_lookahead(TokenKind.LPAREN):
            return None
        self.advance()

        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_lookahead(TokenKind.RPAREN):
            return None
        if not self.expect_lookahead(TokenKind.LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.lookahead_is(TokenKind.ELSE):
            self.advance()
            if not self.expect_lookahead(TokenKind.LBRACE):
                return None
            alternative = self.parse_block_statement()

        return IfExpression(tok, condition, consequence, alternative)


def parse_source(
    source: str,
    filename: str = "<stdin>",
    *,
    strict: bool = False,
    precedences: PrecedenceTable = DEFAULT_PRECEDENCES,
    report_unterminated_blocks: bool = True,
) -> tuple[Program, list[Diagnostic]]:
    """Lex and parse ``source`` in one step.

    Lexer failures raise ``CompileError``. Parser diagnostics are returned
    alongside the program, or raised as a ``CompileError`` when ``strict``.
    """
    tokens = Lexer(source, filename).lex()
    parser = Parser(
        tokens,
        precedences=precedences,
        report_unterminated_blocks=report_unterminated_blocks,
    )
    program = parser.parse_program()
    if strict and parser.diagnostics:
        raise CompileError(parser.diagnostics)
    return program, parser.diagnostics
