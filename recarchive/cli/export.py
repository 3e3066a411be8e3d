"""Export command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..db import close_connection_pool, get_connection, validate_connection
from ..export import ArchiveExporter
from .scrape import load_cli_config

console = Console()


def export_command(
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory. Default: <workspace>/exports",
    ),
) -> None:
    """Export issues and visible recommendations as JSON."""
    config = load_cli_config()
    db_config = config.get_db_config()

    if not validate_connection(db_config):
        console.print("[red]❌ Database connection failed![/red]")
        raise typer.Exit(1)

    if output_dir is None:
        output_dir = config.get_export_dir()

    try:
        with get_connection(db_config) as conn:
            written = ArchiveExporter().export(conn, output_dir)
    except OSError as e:
        console.print(f"[red]❌ Failed to write export: {e}[/red]")
        raise typer.Exit(1)
    finally:
        close_connection_pool()

    for path in written:
        console.print(f"  [dim]{path}[/dim]")
