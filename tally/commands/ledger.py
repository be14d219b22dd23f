"""Ledger commands (add, list, summary, remove, clear)."""

import sys
from datetime import date

import pandas as pd
import typer
from rich.console import Console

from tally.commands.console_view import ConsoleView, format_amount
from tally.config import Settings, add_category, load_settings
from tally.controller import LedgerController
from tally.errors import StorageError
from tally.ledger import LedgerStore
from tally.store.backend import SqliteKeyValueStore

console = Console()


def open_session(assume_yes: bool = False) -> tuple[LedgerController, Settings]:
    """Load settings and the ledger, and wire them to a console view.

    Exits with status 1 if the config or database cannot be opened.
    """
    try:
        settings = load_settings()
    except ValueError as e:
        console.print(f"[red]Config error: {e}[/red]", style="bold")
        sys.exit(1)

    try:
        backend = SqliteKeyValueStore(settings.db_path)
    except StorageError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    view = ConsoleView(settings.currency, console=console, assume_yes=assume_yes)
    return LedgerController(LedgerStore(backend), view), settings


def normalize_date(value: str | None) -> str:
    """Normalize a user-entered date to YYYY-MM-DD.

    ISO dates are taken as-is; anything else is parsed day-first with pandas.
    Missing values default to today.

    Raises:
        ValueError: If the date cannot be parsed.
    """
    if not value:
        return date.today().isoformat()
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        return pd.to_datetime(value, dayfirst=True).strftime("%Y-%m-%d")


def add_command(
    text: str,
    amount: str,
    category: str,
    date_value: str | None = None,
) -> None:
    """Add a transaction.

    Args:
        text: Transaction description.
        amount: Amount (negative for expenses, positive for income).
        category: Category name (must be configured).
        date_value: Transaction date (YYYY-MM-DD, DD/MM/YYYY, ...). Defaults to today.
    """
    controller, settings = open_session()

    try:
        normalized_date = normalize_date(date_value)
    except ValueError as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)

    category = category.strip()
    new_category = bool(category) and category not in settings.categories
    if new_category:
        console.print(f"[yellow]Category '{category}' isn't configured[/yellow]")
        if not typer.confirm("Add it to your categories?", default=False):
            console.print(f"[dim]Configured categories: {', '.join(settings.categories)}[/dim]")
            sys.exit(1)

    if controller.add_transaction(text, amount, category, normalized_date) is None:
        sys.exit(1)

    if new_category:
        add_category(category)
        console.print(f"[green]✓[/green] Added category: {category}")


def list_command(category: str = "all", txn_type: str = "all") -> None:
    """List transactions, newest first."""
    controller, _ = open_session()

    try:
        controller.set_filters(category, txn_type)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def summary_command() -> None:
    """Show balance, income, expense and the category breakdown."""
    controller, _ = open_session()
    controller.render_summary()


def remove_command(transaction_id: int, yes: bool = False) -> None:
    """Delete a transaction by ID.

    Args:
        transaction_id: Transaction ID (from 'tally list').
        yes: Skip the confirmation prompt.
    """
    controller, settings = open_session(assume_yes=yes)

    txn = controller.store.get(transaction_id)
    if txn is None:
        console.print(f"[red]Transaction {transaction_id} not found[/red]")
        sys.exit(1)

    console.print(f"  Date: {txn.date}")
    console.print(f"  Description: {txn.text}")
    console.print(f"  Category: {txn.category}")
    console.print(f"  Amount: {format_amount(txn.amount, settings.currency)}")

    if not controller.remove_transaction(transaction_id):
        console.print("[dim]Nothing deleted[/dim]")


def clear_command(yes: bool = False) -> None:
    """Delete every transaction and reset IDs."""
    controller, _ = open_session(assume_yes=yes)

    if not controller.clear_all():
        console.print("[dim]Nothing deleted[/dim]")
