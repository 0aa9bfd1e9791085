"""Lexer for the minic language.

Produces the token list consumed by the parser. Whitespace and
``/* ... */`` comments are skipped; reserved words are resolved here.
"""

from __future__ import annotations

from minic.errors import CompileError, Diagnostic, DiagnosticLabel, Severity
from minic.source import Span
from minic.tokens import KEYWORDS, Token, TokenKind

_TWO_CHAR_OPS: dict[str, TokenKind] = {
    "==": TokenKind.EQUAL,
    "!=": TokenKind.NOT_EQUAL,
    "<=": TokenKind.LESS_EQUAL,
    ">=": TokenKind.GREATER_EQUAL,
}


class Lexer:
    """Tokenizes minic source code."""

    def __init__(self, source: str, filename: str = "<stdin>") -> None:
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.col = 1
        self.tokens: list[Token] = []
        self.diagnostics: list[Diagnostic] = []

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch in " \t\r\n":
                self._advance()
            elif ch == "/" and self._peek(1) == "*":
                self._skip_block_comment()
            elif ch.isdigit():
                self._lex_number()
            elif ch.isalpha() or ch == "_":
                self._lex_identifier()
            else:
                self._lex_operator_or_punct()

        self._emit(TokenKind.EOF, "", self.line, self.col)

        if self.diagnostics:
            raise CompileError(self.diagnostics)
        return self.tokens

    # ── Helpers ───────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return "\0"

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _is_ident_char(self) -> bool:
        ch = self.source[self.pos]
        return ch.isalnum() or ch == "_"

    def _emit(self, kind: TokenKind, value: str, start_line: int, start_col: int) -> Token:
        end_col = self.col - 1 if self.col > 1 else 1
        span = Span(self.filename, start_line, start_col, self.line, end_col)
        tok = Token(kind, value, span)
        self.tokens.append(tok)
        return tok

    def _error(self, message: str, code: str, line: int, col: int, label: str = "") -> None:
        span = Span(self.filename, line, col, line, col)
        self.diagnostics.append(
            Diagnostic(
                severity=Severity.ERROR,
                code=code,
                message=message,
                labels=[DiagnosticLabel(span=span, message=label)],
            )
        )

    # ── Comments ─────────────────────────────────────────────────

    def _skip_block_comment(self) -> None:
        start_line = self.line
        start_col = self.col
        self._advance()  # /
        self._advance()  # *
        while self.pos < len(self.source):
            if self.source[self.pos] == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()
        self._error(
            "unterminated block comment", "E101", start_line, start_col,
            label="comment opened here",
        )

    # ── Words and numbers ────────────────────────────────────────

    def _lex_number(self) -> None:
        start_line = self.line
        start_col = self.col
        text = []
        while self.pos < len(self.source) and self.source[self.pos].isdigit():
            text.append(self._advance())
        self._emit(TokenKind.INTEGER_LIT, "".join(text), start_line, start_col)

    def _lex_identifier(self) -> None:
        start_line = self.line
        start_col = self.col
        text = []
        while self.pos < len(self.source) and self._is_ident_char():
            text.append(self._advance())
        word = "".join(text)
        self._emit(KEYWORDS.get(word, TokenKind.IDENTIFIER), word, start_line, start_col)

    # ── Operators and punctuation ────────────────────────────────

    def _lex_operator_or_punct(self) -> None:
        start_line = self.line
        start_col = self.col
        two = self.source[self.pos:self.pos + 2]
        if two in _TWO_CHAR_OPS:
            self._advance()
            self._advance()
            self._emit(_TWO_CHAR_OPS[two], two, start_line, start_col)
            return

        ch = self._advance()
        match ch:
            case "=":
                self._emit(TokenKind.ASSIGN, ch, start_line, start_col)
            case "+":
                self._emit(TokenKind.PLUS, ch, start_line, start_col)
            case "-":
                self._emit(TokenKind.MINUS, ch, start_line, start_col)
            case "*":
                self._emit(TokenKind.STAR, ch, start_line, start_col)
            case "/":
                self._emit(TokenKind.SLASH, ch, start_line, start_col)
            case "<":
                self._emit(TokenKind.LESS, ch, start_line, start_col)
            case ">":
                self._emit(TokenKind.GREATER, ch, start_line, start_col)
            case "!":
                self._emit(TokenKind.BANG, ch, start_line, start_col)
            case "(":
                self._emit(TokenKind.LPAREN, ch, start_line, start_col)
            case ")":
                self._emit(TokenKind.RPAREN, ch, start_line, start_col)
            case "{":
                self._emit(TokenKind.LBRACE, ch, start_line, start_col)
            case "}":
                self._emit(TokenKind.RBRACE, ch, start_line, start_col)
            case ",":
                self._emit(TokenKind.COMMA, ch, start_line, start_col)
            case ".":
                self._emit(TokenKind.DOT, ch, start_line, start_col)
            case ";":
                self._emit(TokenKind.SEMICOLON, ch, start_line, start_col)
            case ":":
                self._emit(TokenKind.COLON, ch, start_line, start_col)
            case _:
                self._error(
                    f"unexpected character: {ch!r}", "E100", start_line, start_col,
                    label="not valid here",
                )
