"""Monkey language front end: lexer, Pratt parser and AST."""

__version__ = "0.1.0"
