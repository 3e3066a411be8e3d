"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import DEFAULT_CONFIG_DIR, Config, ConfigModel, save_config
from ..db import init_database, validate_connection

console = Console()

PASSWORD_ENV = "RECARCHIVE_DB_PASSWORD"


def init_command(
    config_dir: Path = typer.Option(
        DEFAULT_CONFIG_DIR,
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    workspace: Path = typer.Option(
        Path.home() / "Recommendation-Archive",
        "--workspace",
        "-w",
        help="Workspace root directory",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("recarchive", "--db-name", help="Database name"),
    db_user: str = typer.Option("recarchive_user", "--db-user", help="Database user"),
    base_url: str = typer.Option("https://www.theverge.com", "--base-url", help="Newsletter site root"),
    newsletter_path: str = typer.Option(
        "installer-newsletter",
        "--newsletter-path",
        help="Newsletter section path on the site",
    ),
    skip_db: bool = typer.Option(False, "--skip-db", help="Only write configuration"),
) -> None:
    """Initialize Recommendation Archive configuration and database."""
    console.print(Panel.fit("Recommendation Archive - Initialization", style="bold blue"))

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"

    try:
        config = ConfigModel(
            workspace_root=str(workspace),
            postgres={
                "host": db_host,
                "port": db_port,
                "database": db_name,
                "user": db_user,
                "password_env": PASSWORD_ENV,
            },
            scraper={"base_url": base_url, "newsletter_path": newsletter_path},
        )
    except ValueError as e:
        console.print(f"[red]❌ Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    workspace.mkdir(parents=True, exist_ok=True)
    console.print(f"✅ Created workspace: {workspace}")

    if skip_db:
        console.print("[yellow]Skipping database setup[/yellow]")
        return

    console.print("\n[bold]Testing database connection...[/bold]")
    db_config = Config.from_model(config, config_path).get_db_config()

    if not validate_connection(db_config):
        console.print(
            "[red]❌ Database connection failed![/red]\n"
            "Please ensure Postgres is running and credentials are correct.\n"
            f"Set the password via environment variable: [bold]export {PASSWORD_ENV}=your_password[/bold]"
        )
        raise typer.Exit(1)

    console.print("✅ Database connection successful")

    console.print("\n[bold]Initializing database schema...[/bold]")
    try:
        init_database(db_config)
        console.print("✅ Database schema initialized")
    except Exception as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        Panel(
            f"[green]✅ Recommendation Archive initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Workspace: {workspace}\n\n"
            f"Next steps:\n"
            f"1. Set database password: [bold]export {PASSWORD_ENV}=your_password[/bold]\n"
            f"2. Run: [bold]recarchive scrape all[/bold]\n"
            f"3. Run: [bold]recarchive export[/bold]",
            style="green",
        )
    )
