"""Lexer for the Monkey language.

Tokens are produced one at a time by ``next_token``; the parser pulls them
on demand. Unknown characters become ILLEGAL tokens rather than errors.
"""

from __future__ import annotations

from collections.abc import Iterator

from monkey.source import Span
from monkey.tokens import SINGLE_CHAR_TOKENS, Token, TokenKind, lookup_ident

_WHITESPACE = frozenset(" \t\n\r")


def _is_letter(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """Tokenizes Monkey source code."""

    def __init__(self, source: str, filename: str = "<stdin>") -> None:
        self.source = source
        self.filename = filename
        self.position = 0
        self.read_position = 0
        self.ch = ""
        self.line = 1
        self.col = 0
        self._read_char()

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            if tok.kind == TokenKind.EOF:
                return
            yield tok

    def lex(self) -> list[Token]:
        """Tokenize the remaining source, including the trailing EOF."""
        tokens = list(self)
        tokens.append(self.next_token())
        return tokens

    # ── Helpers ───────────────────────────────────────────────────

    def _read_char(self) -> None:
        if self.ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        if self.read_position >= len(self.source):
            self.ch = ""
        else:
            self.ch = self.source[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def _peek_char(self) -> str:
        if self.read_position >= len(self.source):
            return ""
        return self.source[self.read_position]

    def _skip_whitespace(self) -> None:
        while self.ch in _WHITESPACE:
            self._read_char()

    def _token(self, kind: TokenKind, value: str | int, line: int, col: int) -> Token:
        end_col = max(col, self.col - 1)
        return Token(kind, value, Span(self.filename, line, col, line, end_col))

    def _read_identifier(self) -> str:
        start = self.position
        while _is_letter(self.ch) or _is_digit(self.ch):
            self._read_char()
        return self.source[start:self.position]

    def _read_number(self) -> str:
        start = self.position
        while _is_digit(self.ch):
            self._read_char()
        return self.source[start:self.position]

    # ── Tokens ───────────────────────────────────────────────────

    def next_token(self) -> Token:
        """Return the next token. Keeps returning EOF once input is exhausted."""
        self._skip_whitespace()
        line, col = self.line, self.col
        ch = self.ch

        if ch == "":
            return Token(TokenKind.EOF, "", Span(self.filename, line, col, line, col))

        if _is_letter(ch):
            word = self._read_identifier()
            return self._token(lookup_ident(word), word, line, col)

        if _is_digit(ch):
            digits = self._read_number()
            return self._token(TokenKind.INT, int(digits), line, col)

        # `=` and `!` combine with a following `=`
        if ch in ("=", "!") and self._peek_char() == "=":
            self._read_char()
            self._read_char()
            kind = TokenKind.EQ if ch == "=" else TokenKind.NOT_EQ
            return self._token(kind, ch + "=", line, col)

        if ch == "=":
            self._read_char()
            return self._token(TokenKind.ASSIGN, ch, line, col)

        if ch == "!":
            self._read_char()
            return self._token(TokenKind.BANG, ch, line, col)

        self._read_char()
        kind = SINGLE_CHAR_TOKENS.get(ch, TokenKind.ILLEGAL)
        return self._token(kind, ch, line, col)
