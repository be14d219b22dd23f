"""Terminal implementation of the LedgerView callbacks."""

from collections.abc import Mapping, Sequence
from decimal import Decimal

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tally.domain.models import CategoryName, Money, NotifyKind, Transaction
from tally.domain.report import Totals, calculate_histogram_bar_length, category_share

CHART_COLORS = ["red", "blue", "yellow", "cyan", "magenta", "bright_red", "green", "white"]
BAR_WIDTH = 30


def format_amount(amount: Decimal, currency: str, signed: bool = True) -> str:
    """Format an amount with currency symbol and thousands separators.

    Args:
        amount: Amount to display.
        currency: Currency symbol.
        signed: Prefix + or - based on the amount's sign.

    Returns:
        Display string (e.g., "-₹200.00").
    """
    magnitude = f"{currency}{abs(amount):,.2f}"
    if not signed:
        return magnitude
    return f"-{magnitude}" if amount < 0 else f"+{magnitude}"


def colored_amount(amount: Decimal, currency: str) -> str:
    """Format a signed amount in red (expense) or green (income)."""
    display = format_amount(amount, currency)
    if amount < 0:
        return f"[red]{display}[/red]"
    return f"[green]{display}[/green]"


class ConsoleView:
    """Draws the ledger with rich and asks questions with typer."""

    def __init__(self, currency: str, console: Console | None = None, assume_yes: bool = False) -> None:
        self.currency = currency
        self.console = console or Console()
        self.assume_yes = assume_yes

    def render_list(self, view: Sequence[Transaction]) -> None:
        if not view:
            self.console.print("[yellow]No transactions found[/yellow]")
            return

        table = Table(title=f"Transactions (showing {len(view)})")
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Date", style="cyan")
        table.add_column("Description", style="white")
        table.add_column("Category", style="magenta")
        table.add_column("Amount", justify="right")

        for txn in view:
            table.add_row(
                str(txn.id),
                txn.date,
                escape(txn.text),
                escape(txn.category),
                colored_amount(txn.amount, self.currency),
            )

        self.console.print(table)

    def render_totals(self, totals: Totals) -> None:
        balance = format_amount(totals.balance, self.currency, signed=totals.balance < 0)
        if totals.balance < 0:
            self.console.print(f"\n[bold]Balance:[/bold] [bold red]{balance}[/bold red]")
        else:
            self.console.print(f"\n[bold]Balance:[/bold] {balance}")
        self.console.print(f"  [green]Income:[/green]  {format_amount(totals.income, self.currency)}")
        self.console.print(f"  [red]Expense:[/red] -{format_amount(totals.expense, self.currency, signed=False)}")

    def render_chart(self, breakdown: Mapping[CategoryName, Money]) -> None:
        """Render expenses per category as a horizontal histogram."""
        if not breakdown:
            self.console.print("\n[dim]No expense data available[/dim]")
            return

        self.console.print("\n[bold red]Expenses by category:[/bold red]\n")
        total = sum(breakdown.values(), Decimal(0))
        max_amount = max(breakdown.values())

        for index, (category, amount) in enumerate(breakdown.items()):
            color = CHART_COLORS[index % len(CHART_COLORS)]
            bar = "█" * calculate_histogram_bar_length(amount, max_amount, BAR_WIDTH)
            label = escape(category.capitalize())
            value = format_amount(amount, self.currency, signed=False)
            share = category_share(amount, total)
            self.console.print(f"  {label:20} {value:>14} ({share:5.1f}%) [{color}]{bar}[/{color}]")

    def notify(self, message: str, kind: NotifyKind) -> None:
        if kind == "success":
            self.console.print(f"[green]✓[/green] {escape(message)}")
        else:
            self.console.print(f"[cyan]{escape(message)}[/cyan]")

    def confirm(self, prompt: str) -> bool:
        if self.assume_yes:
            return True
        return typer.confirm(prompt, default=False)

    def alert(self, message: str) -> None:
        self.console.print(f"[red]Error: {escape(message)}[/red]", style="bold")
