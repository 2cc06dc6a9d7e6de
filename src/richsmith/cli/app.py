"""Typer application wiring for the richsmith CLI."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

from pydantic import ValidationError
from rich.table import Table
from rich.traceback import Traceback
import typer

from richsmith.api import DEFAULT_RESOLVERS, render_rich_text
from richsmith.core.config import RenderOptions, ResolverConfig
from richsmith.core.documents import has_content as document_has_content
from richsmith.core.engine import RichTextResolver
from richsmith.core.exceptions import RichTextRenderingError

from .diagnostics import CliEmitter
from .state import debug_enabled, emit_error, get_cli_state, set_cli_state
from .utils import load_document, write_output


app = typer.Typer(
    help="Render CMS rich-text documents to HTML.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)

InputArgument = Annotated[
    str,
    typer.Argument(
        metavar="INPUT",
        help="JSON or YAML rich-text document. Use '-' to read JSON from stdin.",
    ),
]


@app.callback()
def _app_root(
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
    ),
) -> None:
    set_cli_state(verbosity=verbose, debug=debug)


@app.command(name="render")
def render(
    input_path: InputArgument,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write HTML to this file instead of stdout."),
    ] = None,
    keyed: Annotated[
        bool,
        typer.Option("--keyed/--no-keyed", help="Stamp stable key attributes on elements."),
    ] = False,
    language: Annotated[
        str | None,
        typer.Option("--language", "-l", help="Locale forwarded to the component renderer."),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option(
            "--except",
            "-x",
            help="Mark type rendered without its wrapping element (repeatable).",
        ),
    ] = None,
) -> None:
    """Render a rich-text document to HTML."""
    emitter = CliEmitter()
    try:
        document = load_document(input_path)
        options = RenderOptions(except_=exclude or [], language=language)
        html = asyncio.run(
            render_rich_text(
                document,
                options,
                config=ResolverConfig(keyed_resolvers=keyed),
                emitter=emitter,
            )
        )
    except (OSError, RichTextRenderingError, ValidationError) as exc:
        if debug_enabled():
            raise
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    write_output(html, output)


@app.command(name="resolvers")
def list_resolvers() -> None:
    """List the node types handled by the built-in resolvers."""
    registry = RichTextResolver().original_resolvers
    table = Table(title="Resolvers")
    table.add_column("Type")
    table.add_column("Resolver")
    table.add_column("Default override")
    for entry in registry.describe():
        node_type = str(entry["type"])
        overridden = "yes" if node_type in DEFAULT_RESOLVERS else ""
        table.add_row(node_type, str(entry["name"]), overridden)
    get_cli_state().console.print(table)


@app.command(name="has-content")
def has_content(input_path: InputArgument) -> None:
    """Exit with status 0 when the document has content, 1 otherwise."""
    try:
        document = load_document(input_path)
    except (OSError, RichTextRenderingError) as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=2) from exc
    present = document_has_content(document)
    typer.echo("yes" if present else "no")
    raise typer.Exit(code=0 if present else 1)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - defensive catch-all
        state = get_cli_state()
        if state.show_tracebacks:
            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
