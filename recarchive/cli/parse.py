"""Offline parse command for saved pages."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..extraction import (
    describe_payload,
    extract_page_title,
    extract_publish_date,
    parse_archive_page,
    parse_newsletter_content,
)
from ..extraction.rules import NEWSLETTER_BASE_URL, NEWSLETTER_TOPIC

console = Console()


def _print_issue_page(html: str, base_url: str) -> None:
    title = extract_page_title(html)
    published = extract_publish_date(html)
    console.print(f"[bold]Title:[/bold] {title or '-'}")
    console.print(f"[bold]Published:[/bold] {published.isoformat() if published else '-'}")
    for line in describe_payload(html):
        console.print(f"[dim]{line}[/dim]")

    recommendations = parse_newsletter_content(html, base_url)
    if not recommendations:
        console.print("[yellow]No recommendations found.[/yellow]")
        return

    table = Table(title=f"Recommendations ({len(recommendations)})")
    table.add_column("Title", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Section", style="green")
    table.add_column("Flags", style="yellow")
    table.add_column("URL", style="blue")

    for rec in recommendations:
        flags = []
        if rec.is_primary_link:
            flags.append("primary")
        if rec.is_crowdsourced:
            flags.append(f"reader:{rec.contributor_name}" if rec.contributor_name else "reader")
        table.add_row(rec.title, rec.category, rec.section_name or "-", ", ".join(flags), rec.url)

    console.print(table)


def _print_archive_page(html: str, base_url: str, topic: str) -> None:
    stubs = parse_archive_page(html, base_url, topic)
    if not stubs:
        console.print("[yellow]No issues found.[/yellow]")
        return

    table = Table(title=f"Issues ({len(stubs)})")
    table.add_column("Date", style="green")
    table.add_column("Title", style="cyan")
    table.add_column("URL", style="blue")
    for stub in stubs:
        table.add_row(stub.date.isoformat() if stub.date else "-", stub.title, stub.url)

    console.print(table)


def parse_command(
    path: Path = typer.Argument(..., help="Saved HTML page to parse", exists=True, dir_okay=False),
    archive: bool = typer.Option(False, "--archive", "-a", help="Parse as an archive listing page"),
    base_url: str = typer.Option(NEWSLETTER_BASE_URL, "--base-url", help="Site root for relative links"),
    topic: str = typer.Option(NEWSLETTER_TOPIC, "--topic", help="Newsletter path used in issue links"),
) -> None:
    """Parse a saved newsletter page without touching the network or database."""
    html = path.read_text(encoding="utf-8", errors="replace")

    if archive:
        _print_archive_page(html, base_url, topic)
    else:
        _print_issue_page(html, base_url)
