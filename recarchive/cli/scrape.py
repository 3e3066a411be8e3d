"""Scrape commands."""

from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..db import close_connection_pool, validate_connection
from ..pipeline import ScrapeOrchestrator, print_backfill_summary, print_scrape_summary

console = Console()
scrape_app = typer.Typer(help="Scrape the newsletter archive and issues")


def load_cli_config() -> Config:
    """Load configuration or exit with a message."""
    config = Config()
    try:
        config.config
    except FileNotFoundError:
        console.print("[red]Config file not found. Run 'recarchive init' first.[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    return config


def _orchestrator() -> ScrapeOrchestrator:
    config = load_cli_config()

    console.print("[dim]Checking database connection...[/dim]")
    if not validate_connection(config.get_db_config()):
        console.print("[red]❌ Database connection failed![/red]")
        console.print("Please check your database configuration and ensure Postgres is running.")
        raise typer.Exit(1)

    return ScrapeOrchestrator(config)


def _finish(orchestrator: ScrapeOrchestrator, failed: bool) -> None:
    orchestrator.fetcher.close()
    close_connection_pool()
    if failed:
        raise typer.Exit(1)


@scrape_app.command("archive")
def scrape_archive() -> None:
    """Discover newsletter issues on the archive pages."""
    orchestrator = _orchestrator()
    try:
        result = orchestrator.scrape_archive()
    except KeyboardInterrupt:
        console.print("\n[yellow]Scrape interrupted by user[/yellow]")
        _finish(orchestrator, True)
    print_scrape_summary(result)
    _finish(orchestrator, result.issues_found == 0 and bool(result.errors))


@scrape_app.command("issues")
def scrape_issues(
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Maximum issues to scrape", min=1),
) -> None:
    """Parse recommendations for issues not scraped yet."""
    orchestrator = _orchestrator()
    try:
        result = orchestrator.scrape_issues(limit)
    except KeyboardInterrupt:
        console.print("\n[yellow]Scrape interrupted by user[/yellow]")
        _finish(orchestrator, True)
    print_scrape_summary(result)
    _finish(orchestrator, False)


@scrape_app.command("all")
def scrape_all() -> None:
    """Discover issues, then parse every unscraped one."""
    orchestrator = _orchestrator()
    try:
        result = orchestrator.scrape_all()
    except KeyboardInterrupt:
        console.print("\n[yellow]Scrape interrupted by user[/yellow]")
        _finish(orchestrator, True)
    print_scrape_summary(result)
    _finish(orchestrator, False)


@scrape_app.command("url")
def scrape_url(
    url: str = typer.Argument(..., help="Issue URL to scrape"),
) -> None:
    """Scrape a single issue, re-parsing it if already known."""
    orchestrator = _orchestrator()
    try:
        result = orchestrator.scrape_single_url(url)
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        _finish(orchestrator, True)
    print_scrape_summary(result)
    _finish(orchestrator, bool(result.errors))


@scrape_app.command("backfill-dates")
def backfill_dates() -> None:
    """Fill in publish dates for issues that have none."""
    orchestrator = _orchestrator()
    try:
        result = orchestrator.backfill_dates()
    except KeyboardInterrupt:
        console.print("\n[yellow]Backfill interrupted by user[/yellow]")
        _finish(orchestrator, True)
    print_backfill_summary(result)
    _finish(orchestrator, False)


@scrape_app.command("backfill-titles")
def backfill_titles(
    limit: int = typer.Option(50, "--limit", "-l", help="Maximum recommendations to check", min=1),
    all_titles: bool = typer.Option(
        False,
        "--all",
        help="Check every title, not only short or vague ones",
    ),
) -> None:
    """Replace vague recommendation titles with the linked page's title."""
    orchestrator = _orchestrator()
    try:
        result = orchestrator.backfill_titles(limit=limit, only_short_titles=not all_titles)
    except KeyboardInterrupt:
        console.print("\n[yellow]Backfill interrupted by user[/yellow]")
        _finish(orchestrator, True)
    print_backfill_summary(result)
    _finish(orchestrator, False)
