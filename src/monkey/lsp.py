"""Monkey Language Server: pygls-based LSP for .monkey files.

Publishes parse diagnostics, completes keywords and let-bound names, and
shows the canonical rendering of a binding on hover. Uses stdio transport.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer

from monkey import __version__
from monkey.ast_nodes import (
    BlockStatement,
    ExpressionStatement,
    FunctionLit,
    IfExpr,
    LetStatement,
    Program,
    ReturnStatement,
)
from monkey.errors import Diagnostic, Severity
from monkey.lexer import Lexer
from monkey.parser import Parser
from monkey.source import Span
from monkey.tokens import KEYWORDS

# ── Conversion helpers ────────────────────────────────────────────

_SEVERITY_MAP = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
    Severity.NOTE: lsp.DiagnosticSeverity.Information,
}

_KEYWORD_COMPLETIONS = sorted(KEYWORDS.keys())


def span_to_range(span: Span) -> lsp.Range:
    """Convert a 1-indexed Span to a 0-indexed LSP Range."""
    return lsp.Range(
        start=lsp.Position(line=span.start_line - 1, character=span.start_col - 1),
        end=lsp.Position(line=span.end_line - 1, character=span.end_col),
    )


def to_lsp_diagnostic(d: Diagnostic) -> lsp.Diagnostic:
    span_range = lsp.Range(start=lsp.Position(line=0, character=0), end=lsp.Position(line=0, character=0))
    if d.labels:
        span_range = span_to_range(d.labels[0].span)
    message = d.message
    if d.notes:
        message += "\n" + "\n".join(f"note: {n}" for n in d.notes)
    return lsp.Diagnostic(
        range=span_range,
        severity=_SEVERITY_MAP.get(d.severity, lsp.DiagnosticSeverity.Error),
        source="monkey",
        code=d.code,
        message=message,
    )


def iter_let_statements(statements: tuple) -> Iterator[LetStatement]:
    """Yield every let statement, including those nested in blocks and literals."""
    for stmt in statements:
        if isinstance(stmt, LetStatement):
            yield stmt
            yield from _lets_in_expr(stmt.value)
        elif isinstance(stmt, BlockStatement):
            yield from iter_let_statements(stmt.statements)
        elif isinstance(stmt, (ExpressionStatement, ReturnStatement)):
            expr = stmt.expression if isinstance(stmt, ExpressionStatement) else stmt.value
            yield from _lets_in_expr(expr)


def _lets_in_expr(expr: object) -> Iterator[LetStatement]:
    if isinstance(expr, FunctionLit):
        yield from iter_let_statements(expr.body.statements)
    elif isinstance(expr, IfExpr):
        yield from iter_let_statements(expr.consequence.statements)
        if expr.alternative is not None:
            yield from iter_let_statements(expr.alternative.statements)


# ── Per-document state ────────────────────────────────────────────


@dataclass
class DocumentState:
    """Cached analysis results for a single open document."""

    source: str = ""
    program: Program | None = None
    diagnostics: list[lsp.Diagnostic] = field(default_factory=list)


# ── Server ────────────────────────────────────────────────────────

server = LanguageServer(
    "monkey-lsp", __version__,
    text_document_sync_kind=lsp.TextDocumentSyncKind.Full,
)
_state: dict[str, DocumentState] = {}


def _analyze(uri: str, source: str) -> DocumentState:
    """Lex and parse a document, cache the results and return them."""
    parser = Parser(Lexer(source, uri))
    program = parser.parse_program()
    ds = DocumentState(
        source=source,
        program=program,
        diagnostics=[to_lsp_diagnostic(d) for d in parser.diagnostics],
    )
    _state[uri] = ds
    return ds


def _get_word_at(source: str, line: int, character: int) -> str:
    """Extract the word at the given 0-indexed position."""
    lines = source.splitlines()
    if line < 0 or line >= len(lines):
        return ""
    text = lines[line]
    if character < 0 or character >= len(text):
        # Cursor may sit right after the word
        if 0 < character <= len(text):
            character -= 1
        else:
            return ""

    start = character
    while start > 0 and (text[start - 1].isalnum() or text[start - 1] == "_"):
        start -= 1
    end = character
    while end < len(text) and (text[end].isalnum() or text[end] == "_"):
        end += 1
    return text[start:end]


def _hover_text(ds: DocumentState, word: str) -> str | None:
    if word in KEYWORDS:
        return f"**keyword** `{word}`"
    if ds.program is None:
        return None
    for let in iter_let_statements(ds.program.statements):
        if let.name.value == word:
            return f"**let** `{let.name} = {let.value}`"
    return None


def _completion_items(ds: DocumentState | None) -> list[lsp.CompletionItem]:
    items = [
        lsp.CompletionItem(label=kw, kind=lsp.CompletionItemKind.Keyword)
        for kw in _KEYWORD_COMPLETIONS
    ]
    seen = set(_KEYWORD_COMPLETIONS)
    if ds is not None and ds.program is not None:
        for let in iter_let_statements(ds.program.statements):
            name = let.name.value
            if name in seen:
                continue
            seen.add(name)
            kind = lsp.CompletionItemKind.Variable
            if isinstance(let.value, FunctionLit):
                kind = lsp.CompletionItemKind.Function
            items.append(lsp.CompletionItem(label=name, kind=kind, detail=str(let.value)))
    return items


# ── LSP Feature Handlers ─────────────────────────────────────────


@server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
def did_open(params: lsp.DidOpenTextDocumentParams) -> None:
    uri = params.text_document.uri
    ds = _analyze(uri, params.text_document.text)
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=uri,
        diagnostics=ds.diagnostics,
    ))


@server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: lsp.DidChangeTextDocumentParams) -> None:
    uri = params.text_document.uri
    # Full sync: the last change carries the whole document
    source = params.content_changes[-1].text if params.content_changes else ""
    ds = _analyze(uri, source)
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=uri,
        diagnostics=ds.diagnostics,
    ))


@server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: lsp.DidCloseTextDocumentParams) -> None:
    _state.pop(params.text_document.uri, None)


@server.feature(lsp.TEXT_DOCUMENT_HOVER)
def hover(params: lsp.HoverParams) -> lsp.Hover | None:
    ds = _state.get(params.text_document.uri)
    if ds is None:
        return None
    word = _get_word_at(ds.source, params.position.line, params.position.character)
    if not word:
        return None
    content = _hover_text(ds, word)
    if content is None:
        return None
    return lsp.Hover(contents=lsp.MarkupContent(kind=lsp.MarkupKind.Markdown, value=content))


@server.feature(lsp.TEXT_DOCUMENT_COMPLETION)
def completion(params: lsp.CompletionParams) -> lsp.CompletionList:
    ds = _state.get(params.text_document.uri)
    return lsp.CompletionList(is_incomplete=False, items=_completion_items(ds))


# ── Entry point ──────────────────────────────────────────────────


def main() -> None:
    """Start the Monkey language server on stdio."""
    server.start_io()
