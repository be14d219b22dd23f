"""Admin commands for init, export, import and categories."""

import sqlite3
import sys
from pathlib import Path

from rich.columns import Columns
from rich.console import Console

from tally.commands.ledger import open_session
from tally.config import create_default_config, get_config_path, load_settings
from tally.store.schema import database_exists, get_db_path, init_database

console = Console()


def init_command(force: bool = False) -> None:
    """Create the default config file and the database."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'tally init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        db_path = get_db_path()
        if database_exists(db_path):
            console.print(f"[dim]Keeping existing database: {db_path}[/dim]")
        else:
            console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
            init_database(db_path)
            console.print("[green]✓[/green] Database initialized")

        console.print("\n[green]Initialization complete![/green]", style="bold")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def export_command(output_dir: str | None = None) -> None:
    """Write all transactions to a date-stamped JSON file."""
    controller, _ = open_session()
    directory = Path(output_dir).expanduser() if output_dir else Path.cwd()

    try:
        controller.export_data(directory)
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)


def import_command(file_path: str) -> None:
    """Replace the ledger with transactions from a JSON export."""
    path = Path(file_path).expanduser()

    try:
        payload = path.read_bytes()
    except OSError as e:
        console.print(f"[red]Cannot read {path}: {e}[/red]", style="bold")
        sys.exit(1)

    controller, _ = open_session()
    if not controller.import_data(payload):
        sys.exit(1)


def categories_command() -> None:
    """Show configured categories."""
    try:
        settings = load_settings()
    except ValueError as e:
        console.print(f"[red]Config error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[cyan]Categories:[/cyan]")
    console.print(Columns(settings.categories, equal=True, expand=False, column_first=True))
