"""Pygments lexer for the Monkey language."""

from pygments.lexer import RegexLexer, words
from pygments.token import Error, Keyword, Name, Number, Operator, Punctuation, Text


class MonkeyLexer(RegexLexer):
    """Pygments lexer for the Monkey language."""

    name = "Monkey"
    aliases = ["monkey"]
    filenames = ["*.monkey"]
    mimetypes = ["text/x-monkey"]

    tokens = {
        "root": [
            (r"[ \t\r\n]+", Text),
            (r"[0-9]+", Number.Integer),
            (r"\bfn\b", Keyword.Declaration),
            (r"\blet\b", Keyword.Declaration),
            (words(("if", "else", "return"), prefix=r"\b", suffix=r"\b"), Keyword),
            (r"\b(true|false)\b", Keyword.Constant),
            # Operators (two-char before single-char)
            (r"==|!=", Operator),
            (r"[+\-*/<>!=]", Operator),
            (r"[A-Za-z_][A-Za-z0-9_]*", Name),
            (r"[(),;{}]", Punctuation),
            (r".", Error),
        ],
    }
