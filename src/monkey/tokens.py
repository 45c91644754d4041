"""Token kinds and token representation for the Monkey lexer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from monkey.source import Span


class TokenKind(Enum):
    # Special
    ILLEGAL = auto()
    EOF = auto()

    # Identifiers and literals
    IDENT = auto()
    INT = auto()

    # Operators
    ASSIGN = auto()
    PLUS = auto()
    MINUS = auto()
    BANG = auto()
    ASTERISK = auto()
    SLASH = auto()
    LT = auto()
    GT = auto()
    EQ = auto()
    NOT_EQ = auto()

    # Delimiters
    COMMA = auto()
    SEMICOLON = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()

    # Keywords
    FUNCTION = auto()
    LET = auto()
    TRUE = auto()
    FALSE = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()

    def __str__(self) -> str:
        if self is TokenKind.NOT_EQ:
            return "NotEq"
        return self.name


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Union[str, int] = ""
    span: Span | None = field(default=None, compare=False, repr=False)

    def is_(self, kind: TokenKind) -> bool:
        return self.kind == kind

    def __str__(self) -> str:
        if self.kind in (TokenKind.IDENT, TokenKind.INT):
            return f"{self.kind}({self.value})"
        return str(self.kind)


KEYWORDS: dict[str, TokenKind] = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}

SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}


def lookup_ident(word: str) -> TokenKind:
    """Resolve an identifier spelling to its keyword kind, or IDENT."""
    return KEYWORDS.get(word, TokenKind.IDENT)
