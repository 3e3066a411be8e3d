"""Recommendation curation commands."""

import typer
from rich.console import Console

from ..db import RecommendationStorage, get_connection
from .scrape import load_cli_config

console = Console()
recs_app = typer.Typer(help="Curate stored recommendations")


@recs_app.command("hide")
def recs_hide(
    recommendation_id: int = typer.Argument(..., help="Recommendation ID"),
    unhide: bool = typer.Option(False, "--undo", help="Make the recommendation visible again"),
) -> None:
    """Hide a recommendation from exports."""
    config = load_cli_config()
    with get_connection(config.get_db_config()) as conn:
        RecommendationStorage().set_hidden(conn, recommendation_id, not unhide)
        conn.commit()

    state = "visible" if unhide else "hidden"
    console.print(f"[green]✅ Recommendation {recommendation_id} is now {state}[/green]")


@recs_app.command("dead")
def recs_dead(
    recommendation_id: int = typer.Argument(..., help="Recommendation ID"),
    alive: bool = typer.Option(False, "--undo", help="Mark the link as working again"),
) -> None:
    """Mark a recommendation's link as dead."""
    config = load_cli_config()
    with get_connection(config.get_db_config()) as conn:
        RecommendationStorage().set_dead(conn, recommendation_id, not alive)
        conn.commit()

    state = "alive" if alive else "dead"
    console.print(f"[green]✅ Recommendation {recommendation_id} marked {state}[/green]")
