"""Pure functions for totals and category breakdowns.

This module contains the functional core for reporting:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Sums are accumulated at full Decimal precision and rounded once on output.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from tally.domain.models import CategoryName, Money, Transaction

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Totals:
    """Immutable ledger totals, rounded to 2 decimal places."""

    balance: Money
    income: Money
    expense: Money


def round_money(amount: Decimal) -> Money:
    """Round an amount to 2 decimal places (half up)."""
    return Money(amount.quantize(CENTS, rounding=ROUND_HALF_UP))


def compute_totals(transactions: Iterable[Transaction]) -> Totals:
    """Calculate balance, income and expense.

    Args:
        transactions: Snapshot of the ledger.

    Returns:
        Totals where expense is a positive magnitude.
    """
    income = Decimal(0)
    spent = Decimal(0)
    for txn in transactions:
        if txn.amount > 0:
            income += txn.amount
        elif txn.amount < 0:
            spent += txn.amount

    return Totals(
        balance=round_money(income + spent),
        income=round_money(income),
        expense=round_money(-spent),
    )


def expense_by_category(transactions: Iterable[Transaction]) -> dict[CategoryName, Money]:
    """Sum expense magnitudes per category.

    Only negative amounts contribute. Categories without expenses are
    absent rather than zero.

    Args:
        transactions: Snapshot of the ledger.

    Returns:
        Dictionary of category to positive total, in order of first appearance.
    """
    breakdown: dict[CategoryName, Decimal] = {}
    for txn in transactions:
        if txn.amount < 0:
            breakdown[txn.category] = breakdown.get(txn.category, Decimal(0)) + abs(txn.amount)
    return {cat: Money(total) for cat, total in breakdown.items()}


def category_share(amount: Decimal, total: Decimal) -> float:
    """Calculate a category's percentage of the breakdown total.

    Args:
        amount: Category total.
        total: Sum of all category totals.

    Returns:
        Percentage (0-100), or 0.0 when total is not positive.
    """
    if total <= 0:
        return 0.0
    return float(amount / total * 100)


def calculate_histogram_bar_length(
    amount: Decimal,
    max_amount: Decimal,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
