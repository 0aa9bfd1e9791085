"""minic command-line interface."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from minic import __version__
from minic.config import config_for
from minic.errors import CompileError, DiagnosticRenderer
from minic.lexer import Lexer
from minic.parser import Parser
from minic.source import SourceFile


@click.group()
@click.version_option(__version__, prog_name="minic")
@click.option("--verbose", "-v", is_flag=True, help="Log parser activity to stderr.")
def main(verbose: bool) -> None:
    """Front-end parser for the minic language."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--debug", is_flag=True, help="Print debug descriptions instead of canonical forms.")
@click.option("--strict/--no-strict", default=None, help="Exit with status 1 on any diagnostic.")
@click.option("--color/--no-color", default=None, help="Colorize diagnostics.")
def parse(file: str, debug: bool, strict: bool | None, color: bool | None) -> None:
    """Parse a minic source file and print its statements."""
    path = Path(file)
    config = config_for(path)
    if strict is None:
        strict = config.parser.strict
    if color is None:
        color = config.diagnostics.color

    source = SourceFile.from_path(path)
    renderer = DiagnosticRenderer(color=color)
    renderer.add_source(source)

    try:
        tokens = Lexer(source.content, source.name).lex()
    except CompileError as e:
        for diag in e.diagnostics:
            click.echo(renderer.render(diag), err=True)
        raise SystemExit(1)

    parser = Parser(
        tokens,
        report_unterminated_blocks=config.parser.report_unterminated_blocks,
    )
    program = parser.parse_program()

    for stmt in program.statements:
        click.echo(stmt.describe() if debug else str(stmt))

    for diag in parser.diagnostics:
        click.echo(renderer.render(diag), err=True)

    if strict and parser.diagnostics:
        raise SystemExit(1)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def tokens(file: str) -> None:
    """Print the token stream of a minic source file."""
    path = Path(file)
    source = SourceFile.from_path(path)
    renderer = DiagnosticRenderer(color=config_for(path).diagnostics.color)
    renderer.add_source(source)

    try:
        toks = Lexer(source.content, source.name).lex()
    except CompileError as e:
        for diag in e.diagnostics:
            click.echo(renderer.render(diag), err=True)
        raise SystemExit(1)

    for tok in toks:
        click.echo(f"{tok.kind.name} {tok.value!r}")
