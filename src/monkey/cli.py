"""Monkey front-end CLI."""

from __future__ import annotations

from pathlib import Path
from typing import IO

import click

from monkey import __version__
from monkey.config import MonkeyConfig, find_config, load_config, load_nearest_config
from monkey.errors import DiagnosticRenderer
from monkey.lexer import Lexer
from monkey.parser import Parser

SOURCE_SUFFIX = ".monkey"


def _renderer(ctx: click.Context, name: str, source: str) -> DiagnosticRenderer:
    renderer = DiagnosticRenderer(color=ctx.obj["color"])
    renderer.add_source(name, source)
    return renderer


def _parse_source(ctx: click.Context, source: str, filename: str):
    """Parse source, echo rendered diagnostics to stderr. Returns (program, ok)."""
    parser = Parser(Lexer(source, filename))
    program = parser.parse_program()
    if parser.diagnostics:
        renderer = _renderer(ctx, filename, source)
        for diag in parser.diagnostics:
            click.echo(renderer.render(diag), err=True)
    return program, not parser.diagnostics


def _read(file: IO[str]) -> tuple[str, str]:
    name = getattr(file, "name", "<stdin>")
    if name == "-":
        name = "<stdin>"
    return file.read(), name


@click.group()
@click.version_option(__version__, prog_name="monkey")
@click.option("--color/--no-color", default=None, help="Colorize diagnostics.")
@click.pass_context
def main(ctx: click.Context, color: bool | None) -> None:
    """The Monkey language front end."""
    config = load_nearest_config()
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["color"] = config.output.color if color is None else color


@main.command()
@click.argument("file", type=click.File("r"))
def lex(file: IO[str]) -> None:
    """Print the token stream of a source file."""
    source, filename = _read(file)
    for tok in Lexer(source, filename).lex():
        click.echo(str(tok))


@main.command()
@click.argument("file", type=click.File("r"))
@click.pass_context
def show(ctx: click.Context, file: IO[str]) -> None:
    """Print a source file with syntax highlighting."""
    source, _ = _read(file)
    if not ctx.obj["color"]:
        click.echo(source, nl=False)
        return

    from pygments import highlight
    from pygments.formatters import TerminalFormatter

    from monkey.highlight import MonkeyLexer

    click.echo(highlight(source, MonkeyLexer(), TerminalFormatter()), nl=False, color=True)


@main.command()
@click.argument("file", type=click.File("r"))
@click.pass_context
def parse(ctx: click.Context, file: IO[str]) -> None:
    """Print the canonical rendering of each statement."""
    source, filename = _read(file)
    program, ok = _parse_source(ctx, source, filename)
    if not ok:
        raise SystemExit(1)
    for stmt in program.statements:
        click.echo(str(stmt))


@main.command()
@click.argument("file", type=click.File("r"))
@click.pass_context
def view(ctx: click.Context, file: IO[str]) -> None:
    """View the AST of a source file."""
    source, filename = _read(file)
    program, ok = _parse_source(ctx, source, filename)
    if not ok:
        raise SystemExit(1)
    _dump_ast(program, 0)


@main.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False))
@click.pass_context
def check(ctx: click.Context, path: str) -> None:
    """Parse every .monkey file of a project and report syntax errors."""
    try:
        config_path = find_config(Path(path))
        config = load_config(config_path)
        project_dir = config_path.parent
    except FileNotFoundError:
        project_dir = Path(path).resolve()
        config = MonkeyConfig()
        config.package.name = project_dir.name

    src_dir = project_dir / config.package.source_dir
    if not src_dir.is_dir():
        src_dir = project_dir

    files = sorted(src_dir.rglob(f"*{SOURCE_SUFFIX}"))
    if not files:
        click.echo(f"warning: no {SOURCE_SUFFIX} files found", err=True)
        return

    click.echo(f"checking {config.package.name}...")
    failed = 0
    for source_file in files:
        _, ok = _parse_source(ctx, source_file.read_text(), str(source_file))
        if not ok:
            failed += 1

    if failed:
        click.echo(f"checked {config.package.name}: {failed} of {len(files)} file(s) with errors", err=True)
        raise SystemExit(1)
    click.echo(f"checked {config.package.name}: {len(files)} file(s), no errors")


@main.command()
@click.pass_context
def repl(ctx: click.Context) -> None:
    """Read lines, parse them and print their canonical rendering."""
    prompt = ctx.obj["config"].repl.prompt
    stdin = click.get_text_stream("stdin")
    while True:
        click.echo(prompt, nl=False)
        line = stdin.readline()
        if not line:
            click.echo()
            return
        if not line.strip():
            continue
        program, ok = _parse_source(ctx, line, "<repl>")
        if ok:
            click.echo(str(program))


@main.command()
def lsp() -> None:
    """Start the Monkey language server."""
    from monkey.lsp import main as lsp_main

    lsp_main()


def _dump_ast(node: object, depth: int) -> None:
    """Print a readable AST dump."""
    indent = "  " * depth
    name = type(node).__name__

    if not hasattr(node, "__dataclass_fields__"):
        click.echo(f"{indent}{name}: {node!r}")
        return

    click.echo(f"{indent}{name}")
    for field_name in node.__dataclass_fields__:  # type: ignore[attr-defined]
        value = getattr(node, field_name)
        if isinstance(value, tuple):
            if value:
                click.echo(f"{indent}  {field_name}:")
                for item in value:
                    _dump_ast(item, depth + 2)
            else:
                click.echo(f"{indent}  {field_name}: []")
        elif hasattr(value, "__dataclass_fields__"):
            click.echo(f"{indent}  {field_name}:")
            _dump_ast(value, depth + 2)
        elif value is not None:
            click.echo(f"{indent}  {field_name}: {value!s}")
