"""Tag management commands."""

from typing import List

import typer
from rich.console import Console
from rich.table import Table

from ..db import TagManager, get_connection
from .scrape import load_cli_config

console = Console()
tags_app = typer.Typer(help="Manage recommendation tags")


@tags_app.command("list")
def tags_list() -> None:
    """List all tags with their usage counts."""
    config = load_cli_config()
    with get_connection(config.get_db_config()) as conn:
        tags = TagManager().list_tags(conn)

    if not tags:
        console.print("[yellow]No tags defined.[/yellow]")
        return

    table = Table(title="Tags")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Recommendations", style="green")
    for tag in tags:
        table.add_row(str(tag["id"]), tag["name"], str(tag["count"]))

    console.print(table)


@tags_app.command("add")
def tags_add(
    recommendation_id: int = typer.Argument(..., help="Recommendation ID"),
    name: str = typer.Argument(..., help="Tag name"),
) -> None:
    """Attach a tag to a recommendation."""
    config = load_cli_config()
    try:
        with get_connection(config.get_db_config()) as conn:
            tag = TagManager().add_tag(conn, recommendation_id, name)
            conn.commit()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✅ Tagged recommendation {recommendation_id} with '{tag.name}'[/green]")


@tags_app.command("remove")
def tags_remove(
    recommendation_id: int = typer.Argument(..., help="Recommendation ID"),
    name: str = typer.Argument(..., help="Tag name"),
) -> None:
    """Detach a tag from a recommendation."""
    config = load_cli_config()
    manager = TagManager()
    try:
        with get_connection(config.get_db_config()) as conn:
            tag = manager.get_by_name(conn, name)
            if tag is None:
                console.print(f"[red]Tag '{name}' not found.[/red]")
                raise typer.Exit(1)
            manager.remove_tag(conn, recommendation_id, tag.id)
            conn.commit()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✅ Removed '{tag.name}' from recommendation {recommendation_id}[/green]")


@tags_app.command("set")
def tags_set(
    recommendation_id: int = typer.Argument(..., help="Recommendation ID"),
    names: List[str] = typer.Argument(None, help="Tag names; none clears all tags"),
) -> None:
    """Replace every tag on a recommendation."""
    config = load_cli_config()
    try:
        with get_connection(config.get_db_config()) as conn:
            tags = TagManager().set_tags(conn, recommendation_id, names or [])
            conn.commit()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if tags:
        labels = ", ".join(tag.name for tag in tags)
        console.print(f"[green]✅ Recommendation {recommendation_id} tagged: {labels}[/green]")
    else:
        console.print(f"[green]✅ Cleared tags from recommendation {recommendation_id}[/green]")


@tags_app.command("delete")
def tags_delete(name: str = typer.Argument(..., help="Tag name")) -> None:
    """Delete a tag and detach it from every recommendation."""
    config = load_cli_config()
    manager = TagManager()
    try:
        with get_connection(config.get_db_config()) as conn:
            tag = manager.get_by_name(conn, name)
            if tag is None:
                console.print(f"[red]Tag '{name}' not found.[/red]")
                raise typer.Exit(1)
            manager.delete_tag(conn, tag.id)
            conn.commit()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✅ Deleted tag '{tag.name}'[/green]")
