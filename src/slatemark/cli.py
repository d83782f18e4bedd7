"""
Command-line tools for slatemark.

Converts Slate raw JSON documents to MDAST JSON and shows the type tables
the converter uses.
"""

import json
import sys
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from slatemark.config import resolve_settings
from slatemark.converters import slate_to_mdast
from slatemark.converters.tables import MARK_MAP, TYPE_MAP
from slatemark.registry import load_registry
from slatemark.utils.errors import FileSystemError, SlatemarkError, cli_error_handler
from slatemark.utils.logging import ContextKeys, LoggerFactory, get_cli_logger

app = typer.Typer(
    name="slatemark",
    help="Convert Slate editor documents to markdown syntax trees (MDAST)",
    no_args_is_help=True,
)

console = Console(stderr=True)


@app.callback()
def configure() -> None:
    """Configure logging from SLATEMARK_* environment variables."""
    try:
        settings = resolve_settings()
    except SlatemarkError as e:
        cli_error_handler.handle_error(e, "load settings")
    LoggerFactory.configure_from_settings(settings)


def _read_document(source: str) -> Any:
    if source == "-":
        raw_text = sys.stdin.read()
        location = "<stdin>"
    else:
        path = Path(source)
        cli_error_handler.validate_path_exists(path, "Input file")
        try:
            raw_text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise FileSystemError(
                f"Cannot read {path}: {e}", path=str(path), operation="read_input"
            ) from e
        location = str(path)

    try:
        document = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise FileSystemError(
            f"{location} is not valid JSON: {e}",
            path=location,
            operation="parse_input",
            user_message=f"Input is not valid JSON: {location}",
        ) from e

    if not isinstance(document, dict):
        raise FileSystemError(
            f"{location} holds a JSON {type(document).__name__}, not an object",
            path=location,
            operation="parse_input",
            user_message=f"Input must be a Slate document object: {location}",
        )
    return document


@app.command("convert")
def convert_command(
    source: str = typer.Argument(..., help="Slate raw JSON file, or '-' for stdin"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write MDAST JSON here instead of stdout"
    ),
    registry: Optional[str] = typer.Option(
        None,
        "--registry",
        "-r",
        help="Shortcode registry as module:attribute (default: $SLATEMARK_SHORTCODE_REGISTRY)",
    ),
    indent: int = typer.Option(2, "--indent", min=0, help="JSON indentation"),
) -> None:
    """
    Convert a Slate raw document to MDAST JSON.

    Example:
        slatemark convert post.json
        slatemark convert - -r myblog.shortcodes:registry < post.json
    """
    logger = get_cli_logger().bind(**{ContextKeys.CLI_COMMAND: "convert"})

    try:
        registry_spec = registry or resolve_settings().shortcode_registry
        plugins = load_registry(registry_spec) if registry_spec else None

        document = _read_document(source)
        with logger.operation_context("convert_document", **{ContextKeys.SOURCE: source}):
            mdast = slate_to_mdast(document, shortcode_plugins=plugins)
        rendered = json.dumps(mdast, indent=indent or None, ensure_ascii=False)

        if output is None:
            typer.echo(rendered)
        else:
            output.write_text(rendered + "\n", encoding="utf-8")
            console.print(f"[green]✓[/green] Wrote MDAST to [cyan]{output}[/cyan]")

        logger.info(
            "Converted document",
            **{ContextKeys.SOURCE: source},
            output=str(output or "<stdout>"),
        )
    except SlatemarkError as e:
        cli_error_handler.handle_error(e, "convert document")


@app.command("types")
def types_command() -> None:
    """Show how Slate node and mark types map to MDAST."""
    node_table = Table(title="Node types")
    node_table.add_column("Slate", style="cyan")
    node_table.add_column("MDAST", style="green")
    for slate_type, mdast_type in TYPE_MAP.items():
        node_table.add_row(slate_type, mdast_type)
    node_table.add_row("shortcode", "paragraph > html")

    mark_table = Table(title="Marks")
    mark_table.add_column("Slate", style="cyan")
    mark_table.add_column("MDAST", style="green")
    for mark_type, mdast_type in MARK_MAP.items():
        mark_table.add_row(mark_type, mdast_type)

    out = Console()
    out.print(node_table)
    out.print(mark_table)


def main() -> None:
    """Entry point for CLI script."""
    app()
