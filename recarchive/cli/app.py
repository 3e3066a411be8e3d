"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .export import export_command
from .init import init_command
from .parse import parse_command
from .recs import recs_app
from .scrape import scrape_app
from .tags import tags_app

app = typer.Typer(
    name="recarchive",
    help="Recommendation Archive - Newsletter Scraper and Exporter",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("parse")(parse_command)
app.command("export")(export_command)
app.add_typer(scrape_app, name="scrape", help="Scrape the newsletter archive and issues")
app.add_typer(tags_app, name="tags", help="Manage recommendation tags")
app.add_typer(recs_app, name="recs", help="Curate stored recommendations")


if __name__ == "__main__":
    app()
