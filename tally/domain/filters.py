"""Pure filtering for the transaction list view."""

from collections.abc import Iterable
from typing import get_args

from tally.domain.models import ALL, Transaction, TypeFilter

TYPE_FILTERS: tuple[TypeFilter, ...] = get_args(TypeFilter)


def filter_transactions(
    transactions: Iterable[Transaction],
    category: str = ALL,
    txn_type: TypeFilter = ALL,
) -> list[Transaction]:
    """Filter transactions by category and type, newest first.

    Zero amounts match neither "income" nor "expense". The sort is stable,
    so transactions on the same date keep their ledger order.

    Args:
        transactions: Snapshot of the ledger.
        category: Exact category to keep, or "all".
        txn_type: "income", "expense" or "all".

    Returns:
        New list sorted by date descending (may be empty).

    Raises:
        ValueError: If txn_type is not a known filter.
    """
    if txn_type not in TYPE_FILTERS:
        raise ValueError(f"Unknown type filter: {txn_type!r} (expected one of {', '.join(TYPE_FILTERS)})")

    filtered = list(transactions)

    if category != ALL:
        filtered = [txn for txn in filtered if txn.category == category]

    if txn_type == "income":
        filtered = [txn for txn in filtered if txn.is_income]
    elif txn_type == "expense":
        filtered = [txn for txn in filtered if txn.is_expense]

    return sorted(filtered, key=lambda txn: txn.date, reverse=True)
