"""AST node definitions for the Monkey language.

``str(node)`` is the canonical rendering: operators are fully
parenthesized, so ``a + b * c`` renders as ``(a + (b * c))``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

# ── Operators ────────────────────────────────────────────────────


class PrefixOp(Enum):
    BANG = "!"
    MINUS = "-"

    def __str__(self) -> str:
        return self.value


class InfixOp(Enum):
    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    def __str__(self) -> str:
        return self.value


# ── Expressions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Identifier:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntegerLit:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BooleanLit:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class FunctionLit:
    parameters: tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass(frozen=True)
class PrefixExpr:
    operator: PrefixOp
    right: Expr

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpr:
    left: Expr
    operator: InfixOp
    right: Expr

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class IfExpr:
    condition: Expr
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        text = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            text += f"else {self.alternative}"
        return text


# Constant payloads, kept apart from identifiers for later evaluation stages
Literal = Union[IntegerLit, BooleanLit, FunctionLit]

Expr = Union[Identifier, IntegerLit, BooleanLit, FunctionLit, PrefixExpr, InfixExpr, IfExpr]


# ── Statements ───────────────────────────────────────────────────


@dataclass(frozen=True)
class ExpressionStatement:
    expression: Expr

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class LetStatement:
    name: Identifier
    value: Expr

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement:
    value: Expr

    def __str__(self) -> str:
        return f"return {self.value};"


@dataclass(frozen=True)
class BlockStatement:
    statements: tuple[Stmt, ...] = ()

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


Stmt = Union[ExpressionStatement, LetStatement, ReturnStatement, BlockStatement]


# ── Program ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class Program:
    statements: tuple[Stmt, ...] = ()

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)
