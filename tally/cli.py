"""CLI entry point for tally."""

import typer

from tally.commands.admin import categories_command, export_command, import_command, init_command
from tally.commands.ledger import (
    add_command,
    clear_command,
    list_command,
    remove_command,
    summary_command,
)
from tally.logging_setup import configure_logging

app = typer.Typer(
    name="tally",
    help="Tally - a personal income and expense ledger",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Tally - a personal income and expense ledger."""
    configure_logging("DEBUG" if verbose else None)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Create the config file and database."""
    init_command(force)


@app.command(context_settings={"ignore_unknown_options": True})
def add(
    text: str,
    amount: str = typer.Argument(..., help="Amount (negative for expenses, e.g. -200)"),
    category: str = typer.Option(..., "--category", "-c", help="Transaction category"),
    date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: today)"),
) -> None:
    """Add an income or expense transaction."""
    add_command(text, amount, category, date)


@app.command(name="list")
def list_transactions(
    category: str = typer.Option("all", "--category", "-c", help="Only show this category"),
    txn_type: str = typer.Option("all", "--type", "-t", help="'income', 'expense' or 'all'"),
) -> None:
    """List your transactions, newest first."""
    list_command(category, txn_type)


@app.command()
def summary() -> None:
    """Show your balance and spending by category."""
    summary_command()


@app.command()
def remove(
    transaction_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a transaction."""
    remove_command(transaction_id, yes)


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete ALL transactions."""
    clear_command(yes)


@app.command(name="export")
def export(
    output_dir: str = typer.Option(None, "--output", "-o", help="Output directory (default: current directory)"),
) -> None:
    """Export your transactions to JSON."""
    export_command(output_dir)


@app.command(name="import")
def import_(
    file_path: str,
) -> None:
    """Replace your transactions with a JSON export."""
    import_command(file_path)


@app.command()
def categories() -> None:
    """Show configured categories."""
    categories_command()


if __name__ == "__main__":
    app()
