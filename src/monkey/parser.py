"""Parser for the Monkey language.

Statements are parsed by recursive descent and expressions by a Pratt
(precedence-climbing) engine. The parser holds two tokens, the current one
and one of lookahead, and never backtracks.

Syntax errors do not abort parsing. Each one is recorded as a diagnostic,
the construct being parsed yields no node, and parsing resumes with the
next statement. Callers inspect ``errors`` (or call ``check_errors``)
before handing the program to an evaluator.
"""

from __future__ import annotations

from enum import IntEnum

from monkey.ast_nodes import (
    BlockStatement,
    BooleanLit,
    Expr,
    ExpressionStatement,
    FunctionLit,
    Identifier,
    IfExpr,
    InfixExpr,
    InfixOp,
    IntegerLit,
    LetStatement,
    PrefixExpr,
    PrefixOp,
    Program,
    ReturnStatement,
    Stmt,
)
from monkey.errors import CompileError, Diagnostic, DiagnosticLabel, Severity
from monkey.lexer import Lexer
from monkey.tokens import Token, TokenKind

# ── Binding powers ───────────────────────────────────────────────


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7


_PRECEDENCES: dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
}

_PREFIX_OPS: dict[TokenKind, PrefixOp] = {
    TokenKind.BANG: PrefixOp.BANG,
    TokenKind.MINUS: PrefixOp.MINUS,
}

_INFIX_OPS: dict[TokenKind, InfixOp] = {
    TokenKind.PLUS: InfixOp.PLUS,
    TokenKind.MINUS: InfixOp.MINUS,
    TokenKind.ASTERISK: InfixOp.ASTERISK,
    TokenKind.SLASH: InfixOp.SLASH,
    TokenKind.LT: InfixOp.LT,
    TokenKind.GT: InfixOp.GT,
    TokenKind.EQ: InfixOp.EQ,
    TokenKind.NOT_EQ: InfixOp.NOT_EQ,
}


def precedence_of(kind: TokenKind) -> Precedence:
    return _PRECEDENCES.get(kind, Precedence.LOWEST)


class Parser:
    """Parses the tokens of one program, pulled lazily from a Lexer."""

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.diagnostics: list[Diagnostic] = []
        self.current_token: Token = lexer.next_token()
        self.peek_token: Token = lexer.next_token()

    @property
    def errors(self) -> list[str]:
        return [d.message for d in self.diagnostics]

    def check_errors(self) -> None:
        """Raise CompileError if any syntax error was recorded."""
        if self.diagnostics:
            raise CompileError(list(self.diagnostics))

    # ── Token access ─────────────────────────────────────────────

    def next_token(self) -> None:
        self.current_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def peek_precedence(self) -> Precedence:
        return precedence_of(self.peek_token.kind)

    def current_precedence(self) -> Precedence:
        return precedence_of(self.current_token.kind)

    def expect_peek(self, kind: TokenKind) -> bool:
        """Advance if the peek token has ``kind``, otherwise record an error."""
        if self.peek_token.is_(kind):
            self.next_token()
            return True
        self._error(
            "E200",
            f"expected next token to be {kind}, got {self.peek_token} instead",
            self.peek_token,
        )
        return False

    def _error(self, code: str, message: str, tok: Token, notes: list[str] | None = None) -> None:
        labels = [DiagnosticLabel(span=tok.span)] if tok.span is not None else []
        self.diagnostics.append(
            Diagnostic(
                severity=Severity.ERROR,
                code=code,
                message=message,
                labels=labels,
                notes=notes or [],
            )
        )

    def _no_prefix_parse_error(self) -> None:
        tok = self.current_token
        notes = []
        if tok.kind == TokenKind.ILLEGAL:
            notes.append(f"unrecognized character {tok.value!r}")
        self._error("E201", f"no prefix parse function for {tok}", tok, notes)

    # ── Statements ───────────────────────────────────────────────

    def parse_program(self) -> Program:
        """Parse statements until EOF. Failed statements are skipped."""
        statements: list[Stmt] = []
        while not self.current_token.is_(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return Program(tuple(statements))

    def parse_statement(self) -> Stmt | None:
        match self.current_token.kind:
            case TokenKind.LET:
                return self._parse_let_statement()
            case TokenKind.RETURN:
                return self._parse_return_statement()
            case _:
                return self._parse_expression_statement()

    def _parse_let_statement(self) -> LetStatement | None:
        if not self.expect_peek(TokenKind.IDENT):
            return None
        name = Identifier(self.current_token.value)

        if not self.expect_peek(TokenKind.ASSIGN):
            return None
        self.next_token()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self.peek_token.is_(TokenKind.SEMICOLON):
            self.next_token()
        return LetStatement(name, value)

    def _parse_return_statement(self) -> ReturnStatement | None:
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self.peek_token.is_(TokenKind.SEMICOLON):
            self.next_token()
        return ReturnStatement(value)

    def _parse_expression_statement(self) -> ExpressionStatement | None:
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None:
            return None
        if self.peek_token.is_(TokenKind.SEMICOLON):
            self.next_token()
        return ExpressionStatement(expr)

    def parse_block_statement(self) -> BlockStatement:
        """Parse from the current ``{`` up to the matching ``}`` or EOF."""
        statements: list[Stmt] = []
        self.next_token()
        while not self.current_token.is_(TokenKind.RBRACE) and not self.current_token.is_(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return BlockStatement(tuple(statements))

    # ── Pratt expression parser ──────────────────────────────────

    def parse_expression(self, precedence: Precedence) -> Expr | None:
        left = self._parse_prefix()
        if left is None:
            return None

        # Strict `<` keeps equal-precedence operators left-associative
        while not self.peek_token.is_(TokenKind.SEMICOLON) and precedence < self.peek_precedence():
            self.next_token()
            left = self._parse_infix(left)
            if left is None:
                return None

        return left

    def _parse_prefix(self) -> Expr | None:
        tok = self.current_token
        match tok.kind:
            case TokenKind.IDENT:
                return Identifier(tok.value)
            case TokenKind.INT:
                return IntegerLit(tok.value)
            case TokenKind.TRUE | TokenKind.FALSE:
                return BooleanLit(tok.kind == TokenKind.TRUE)
            case TokenKind.BANG | TokenKind.MINUS:
                return self._parse_prefix_expression()
            case TokenKind.LPAREN:
                return self._parse_grouped_expression()
            case TokenKind.IF:
                return self._parse_if_expression()
            case TokenKind.FUNCTION:
                return self._parse_function_literal()
            case _:
                self._no_prefix_parse_error()
                return None

    def _parse_infix(self, left: Expr) -> Expr | None:
        operator = _INFIX_OPS.get(self.current_token.kind)
        if operator is None:
            return None
        precedence = self.current_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpr(left, operator, right)

    def _parse_prefix_expression(self) -> PrefixExpr | None:
        operator = _PREFIX_OPS[self.current_token.kind]
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpr(operator, right)

    def _parse_grouped_expression(self) -> Expr | None:
        self.next_token()
        expr = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return expr

    def _parse_if_expression(self) -> IfExpr | None:
        if not self.expect_peek(TokenKind.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None
        consequence = self.parse_block_statement()

        # A missing `else` is not an error; `else` without `{` is.
        alternative = None
        if self.peek_token.is_(TokenKind.ELSE):
            self.next_token()
            if not self.expect_peek(TokenKind.LBRACE):
                return None
            alternative = self.parse_block_statement()

        return IfExpr(condition, consequence, alternative)

    def _parse_function_literal(self) -> FunctionLit | None:
        if not self.expect_peek(TokenKind.LPAREN):
            return None
        parameters = self._parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None
        return FunctionLit(parameters, self.parse_block_statement())

    def _parse_function_parameters(self) -> tuple[Identifier, ...] | None:
        if self.peek_token.is_(TokenKind.RPAREN):
            self.next_token()
            return ()

        if not self.expect_peek(TokenKind.IDENT):
            return None
        params = [Identifier(self.current_token.value)]
        while self.peek_token.is_(TokenKind.COMMA):
            self.next_token()
            if not self.expect_peek(TokenKind.IDENT):
                return None
            params.append(Identifier(self.current_token.value))

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return tuple(params)


def parse(source: str, filename: str = "<stdin>") -> tuple[Program, list[str]]:
    """Lex and parse ``source``; return the program and its error messages."""
    parser = Parser(Lexer(source, filename))
    program = parser.parse_program()
    return program, parser.errors
