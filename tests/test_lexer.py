"""Tests for the Monkey lexer and token model."""

from __future__ import annotations

import pytest

from monkey.lexer import Lexer
from monkey.source import Span
from monkey.tokens import KEYWORDS, Token, TokenKind, lookup_ident


def lex(source: str) -> list[tuple[TokenKind, str | int]]:
    """Helper: lex source and return (kind, value) pairs, excluding EOF."""
    return [(t.kind, t.value) for t in Lexer(source)]


def kinds(source: str) -> list[TokenKind]:
    """Helper: lex source and return just the token kinds, excluding EOF."""
    return [t.kind for t in Lexer(source)]


class TestLexerBasic:
    def test_empty_source(self):
        tokens = Lexer("").lex()
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF

    def test_whitespace_only(self):
        assert kinds(" \t\r\n  ") == []

    def test_identifier(self):
        assert lex("foobar") == [(TokenKind.IDENT, "foobar")]

    def test_identifier_with_digits_and_underscores(self):
        assert lex("_my_var2") == [(TokenKind.IDENT, "_my_var2")]

    def test_keywords(self):
        for word, kind in KEYWORDS.items():
            assert lex(word) == [(kind, word)], f"keyword {word}"

    def test_keywords_are_case_sensitive(self):
        assert kinds("Let FN True") == [TokenKind.IDENT] * 3

    def test_keyword_prefix_is_identifier(self):
        assert lex("letter iffy") == [(TokenKind.IDENT, "letter"), (TokenKind.IDENT, "iffy")]

    def test_integer(self):
        assert lex("12345") == [(TokenKind.INT, 12345)]

    def test_integer_then_identifier(self):
        assert lex("5x") == [(TokenKind.INT, 5), (TokenKind.IDENT, "x")]


class TestLexerOperators:
    @pytest.mark.parametrize("source, kind", [
        ("=", TokenKind.ASSIGN),
        ("+", TokenKind.PLUS),
        ("-", TokenKind.MINUS),
        ("!", TokenKind.BANG),
        ("*", TokenKind.ASTERISK),
        ("/", TokenKind.SLASH),
        ("<", TokenKind.LT),
        (">", TokenKind.GT),
        ("==", TokenKind.EQ),
        ("!=", TokenKind.NOT_EQ),
        (",", TokenKind.COMMA),
        (";", TokenKind.SEMICOLON),
        ("(", TokenKind.LPAREN),
        (")", TokenKind.RPAREN),
        ("{", TokenKind.LBRACE),
        ("}", TokenKind.RBRACE),
    ])
    def test_single_operator(self, source, kind):
        assert lex(source) == [(kind, source)]

    def test_double_equals_is_one_token(self):
        assert kinds("==") == [TokenKind.EQ]

    def test_bang_equals_is_one_token(self):
        assert kinds("!=") == [TokenKind.NOT_EQ]

    def test_separated_equals_are_assigns(self):
        assert kinds("= =") == [TokenKind.ASSIGN, TokenKind.ASSIGN]

    def test_bang_not_followed_by_equals(self):
        assert kinds("!x") == [TokenKind.BANG, TokenKind.IDENT]

    def test_triple_equals(self):
        assert kinds("===") == [TokenKind.EQ, TokenKind.ASSIGN]

    def test_bang_at_end_of_input(self):
        assert kinds("!") == [TokenKind.BANG]


class TestLexerProgram:
    def test_full_program(self):
        source = (
            "let five = 5;\n"
            "let add = fn(x, y) {\n"
            "  x + y;\n"
            "};\n"
            "!-/*5;\n"
            "5 < 10 > 5;\n"
            "if (5 < 10) { return true; } else { return false; }\n"
            "10 == 10; 10 != 9;\n"
        )
        expected = [
            (TokenKind.LET, "let"), (TokenKind.IDENT, "five"), (TokenKind.ASSIGN, "="),
            (TokenKind.INT, 5), (TokenKind.SEMICOLON, ";"),
            (TokenKind.LET, "let"), (TokenKind.IDENT, "add"), (TokenKind.ASSIGN, "="),
            (TokenKind.FUNCTION, "fn"), (TokenKind.LPAREN, "("), (TokenKind.IDENT, "x"),
            (TokenKind.COMMA, ","), (TokenKind.IDENT, "y"), (TokenKind.RPAREN, ")"),
            (TokenKind.LBRACE, "{"), (TokenKind.IDENT, "x"), (TokenKind.PLUS, "+"),
            (TokenKind.IDENT, "y"), (TokenKind.SEMICOLON, ";"), (TokenKind.RBRACE, "}"),
            (TokenKind.SEMICOLON, ";"),
            (TokenKind.BANG, "!"), (TokenKind.MINUS, "-"), (TokenKind.SLASH, "/"),
            (TokenKind.ASTERISK, "*"), (TokenKind.INT, 5), (TokenKind.SEMICOLON, ";"),
            (TokenKind.INT, 5), (TokenKind.LT, "<"), (TokenKind.INT, 10), (TokenKind.GT, ">"),
            (TokenKind.INT, 5), (TokenKind.SEMICOLON, ";"),
            (TokenKind.IF, "if"), (TokenKind.LPAREN, "("), (TokenKind.INT, 5), (TokenKind.LT, "<"),
            (TokenKind.INT, 10), (TokenKind.RPAREN, ")"), (TokenKind.LBRACE, "{"),
            (TokenKind.RETURN, "return"), (TokenKind.TRUE, "true"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.RBRACE, "}"), (TokenKind.ELSE, "else"), (TokenKind.LBRACE, "{"),
            (TokenKind.RETURN, "return"), (TokenKind.FALSE, "false"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.RBRACE, "}"),
            (TokenKind.INT, 10), (TokenKind.EQ, "=="), (TokenKind.INT, 10), (TokenKind.SEMICOLON, ";"),
            (TokenKind.INT, 10), (TokenKind.NOT_EQ, "!="), (TokenKind.INT, 9), (TokenKind.SEMICOLON, ";"),
        ]
        assert lex(source) == expected

    def test_lex_ends_with_eof(self):
        tokens = Lexer("a + b").lex()
        assert [t.kind for t in tokens] == [
            TokenKind.IDENT, TokenKind.PLUS, TokenKind.IDENT, TokenKind.EOF,
        ]


class TestLexerIllegal:
    def test_unknown_character(self):
        assert lex("@") == [(TokenKind.ILLEGAL, "@")]

    def test_illegal_does_not_stop_lexing(self):
        assert kinds("a $ b") == [TokenKind.IDENT, TokenKind.ILLEGAL, TokenKind.IDENT]

    def test_non_ascii_letter_is_illegal(self):
        assert kinds("é") == [TokenKind.ILLEGAL]

    def test_string_quote_is_illegal(self):
        assert kinds('"') == [TokenKind.ILLEGAL]

    def test_eof_is_repeated(self):
        lexer = Lexer("x")
        assert lexer.next_token().kind == TokenKind.IDENT
        for _ in range(3):
            assert lexer.next_token().kind == TokenKind.EOF


class TestLexerSpans:
    def test_span_columns(self):
        tokens = Lexer("let x == 10;", "t.monkey").lex()
        assert tokens[0].span == Span("t.monkey", 1, 1, 1, 3)
        assert tokens[1].span == Span("t.monkey", 1, 5, 1, 5)
        assert tokens[2].span == Span("t.monkey", 1, 7, 1, 8)
        assert tokens[3].span == Span("t.monkey", 1, 10, 1, 11)

    def test_span_tracks_lines(self):
        tokens = Lexer("a\n  b").lex()
        assert tokens[1].span.start_line == 2
        assert tokens[1].span.start_col == 3


class TestTokenModel:
    def test_render_payload_tokens(self):
        assert str(Token(TokenKind.IDENT, "x")) == "IDENT(x)"
        assert str(Token(TokenKind.INT, 5)) == "INT(5)"

    def test_render_plain_tokens(self):
        assert str(Token(TokenKind.PLUS, "+")) == "PLUS"
        assert str(Token(TokenKind.EOF)) == "EOF"
        assert str(Token(TokenKind.NOT_EQ, "!=")) == "NotEq"

    def test_rendering_is_deterministic(self):
        tok = Token(TokenKind.IDENT, "y")
        assert str(tok) == str(tok) == "IDENT(y)"

    def test_equality_ignores_span(self):
        a = Token(TokenKind.INT, 1, Span("a", 1, 1, 1, 1))
        b = Token(TokenKind.INT, 1, Span("b", 9, 9, 9, 9))
        assert a == b

    def test_lookup_ident(self):
        assert lookup_ident("fn") == TokenKind.FUNCTION
        assert lookup_ident("return") == TokenKind.RETURN
        assert lookup_ident("foo") == TokenKind.IDENT
