"""View-update protocol between the ledger and a presentation layer.

The controller turns user actions into LedgerStore calls and redraws the
view after each one, so the list, totals and chart always reflect the
persisted ledger. Destructive actions go through ``LedgerView.confirm``
first; a refusal leaves the ledger and the store untouched.
"""

from collections.abc import Mapping, Sequence
from datetime import date
from pathlib import Path
from typing import Any, Protocol, cast

from tally.domain.filters import TYPE_FILTERS, filter_transactions
from tally.domain.models import ALL, CategoryName, Money, NotifyKind, Transaction, TypeFilter
from tally.domain.report import Totals, compute_totals, expense_by_category
from tally.errors import ImportFormatError, ValidationError
from tally.ledger import LedgerStore
from tally.logging_setup import get_logger

logger = get_logger("tally.controller")

CONFIRM_REMOVE = "Are you sure you want to delete this transaction?"
CONFIRM_CLEAR = "Are you sure you want to delete ALL transactions? This action cannot be undone."


class LedgerView(Protocol):
    """Presentation callbacks driven by LedgerController."""

    def render_list(self, view: Sequence[Transaction]) -> None: ...

    def render_totals(self, totals: Totals) -> None: ...

    def render_chart(self, breakdown: Mapping[CategoryName, Money]) -> None: ...

    def notify(self, message: str, kind: NotifyKind) -> None: ...

    def confirm(self, prompt: str) -> bool: ...

    def alert(self, message: str) -> None: ...


def export_filename(today: date) -> str:
    """Name of the export file for a given day."""
    return f"expense_tracker_{today.isoformat()}.json"


class LedgerController:
    """Relays user actions into a LedgerStore and keeps a LedgerView current."""

    def __init__(self, store: LedgerStore, view: LedgerView) -> None:
        self.store = store
        self.view = view
        self.category_filter: str = ALL
        self.type_filter: TypeFilter = ALL

    def filtered(self) -> list[Transaction]:
        return filter_transactions(self.store.transactions, self.category_filter, self.type_filter)

    def render_list(self) -> None:
        self.view.render_list(self.filtered())

    def render_summary(self) -> None:
        snapshot = self.store.transactions
        self.view.render_totals(compute_totals(snapshot))
        self.view.render_chart(expense_by_category(snapshot))

    def refresh(self) -> None:
        """Redraw list, totals and chart."""
        self.render_list()
        self.render_summary()

    def set_filters(self, category: str = ALL, txn_type: str = ALL) -> None:
        """Change the list filters and redraw the list.

        Raises:
            ValueError: If txn_type is not a known filter.
        """
        if txn_type not in TYPE_FILTERS:
            raise ValueError(f"Unknown type filter: {txn_type!r}")
        self.category_filter = category
        self.type_filter = cast(TypeFilter, txn_type)
        self.render_list()

    def add_transaction(self, text: Any, amount: Any, category: Any, date_value: Any) -> Transaction | None:
        """Add a transaction, alerting instead of raising on bad input."""
        try:
            txn = self.store.add(text, amount, category, date_value)
        except ValidationError as e:
            logger.debug("Rejected transaction: %s", e)
            self.view.alert(str(e))
            return None

        self.refresh()
        self.view.notify("Transaction added successfully!", "success")
        return txn

    def remove_transaction(self, txn_id: int) -> bool:
        """Delete one transaction after confirmation.

        Returns:
            True if a transaction was deleted.
        """
        if not self.view.confirm(CONFIRM_REMOVE):
            return False

        removed = self.store.remove(txn_id)
        self.refresh()
        if removed:
            self.view.notify("Transaction deleted", "info")
        else:
            self.view.notify(f"No transaction with id {txn_id}", "info")
        return removed

    def clear_all(self) -> bool:
        """Delete every transaction after confirmation.

        Returns:
            True if the ledger was cleared.
        """
        if not self.view.confirm(CONFIRM_CLEAR):
            return False

        self.store.clear_all()
        self.refresh()
        self.view.notify("All transactions cleared", "info")
        return True

    def import_data(self, payload: str | bytes | list[Any]) -> bool:
        """Replace the ledger from exported JSON.

        Returns:
            True if the import succeeded.
        """
        try:
            self.store.import_transactions(payload)
        except ImportFormatError as e:
            self.view.alert(f"Invalid file format: {e}")
            return False

        self.refresh()
        self.view.notify("Data imported successfully!", "success")
        return True

    def export_data(self, directory: Path, today: date | None = None) -> Path:
        """Write the ledger to a date-stamped JSON file.

        Args:
            directory: Destination directory (created if missing).
            today: Date for the file name. Defaults to today.

        Returns:
            Path of the written file.

        Raises:
            OSError: If the file cannot be written.
        """
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / export_filename(today or date.today())
        path.write_text(self.store.export_json() + "\n", encoding="utf-8")
        self.view.notify(f"Exported {len(self.store)} transactions to {path}", "success")
        return path
