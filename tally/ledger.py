"""Ledger store: the only owner of transaction state.

Holds the transaction sequence and the id counter, and writes both to a
KeyValueStore after every mutation. Persistence is best-effort: write
failures are logged and never raised to callers.
"""

import json
from datetime import date
from typing import Any

from tally.domain.models import Transaction
from tally.domain.transactions import (
    build_transaction,
    decode_json,
    encode_transactions,
    next_id_after,
    transactions_from_list,
)
from tally.errors import ImportFormatError, PersistenceCorruption, StorageError, ValidationError
from tally.logging_setup import get_logger
from tally.store.backend import KeyValueStore

logger = get_logger("tally.ledger")

TRANSACTIONS_KEY = "transactions"
NEXT_ID_KEY = "next_id"


def decode_state(raw_transactions: str | None, raw_next_id: str | None) -> tuple[list[Transaction], int]:
    """Decode both persisted entries into ledger state.

    A missing or unreadable counter is rebuilt from the highest stored id,
    and a counter at or below an existing id is raised past it.

    Args:
        raw_transactions: Stored transaction array, or None if absent.
        raw_next_id: Stored counter, or None if absent.

    Returns:
        Tuple of (transactions, next_id).

    Raises:
        PersistenceCorruption: If the transaction entry is absent or invalid.
    """
    if raw_transactions is None:
        raise PersistenceCorruption("No stored transactions")

    try:
        transactions = transactions_from_list(decode_json(raw_transactions))
    except (ValueError, ValidationError) as e:
        raise PersistenceCorruption(f"Stored transactions are unreadable: {e}") from e

    next_id = 1
    if raw_next_id is not None:
        try:
            stored = decode_json(raw_next_id)
        except ValueError:
            stored = None
        if isinstance(stored, int) and not isinstance(stored, bool) and stored >= 1:
            next_id = stored
        else:
            logger.warning("Ignoring unreadable id counter %r", raw_next_id)

    return transactions, next_id_after(transactions, floor=next_id)


def encode_state(transactions: list[Transaction], next_id: int) -> dict[str, str]:
    """Encode ledger state as the two persisted entries."""
    return {
        TRANSACTIONS_KEY: encode_transactions(transactions),
        NEXT_ID_KEY: json.dumps(next_id),
    }


class LedgerStore:
    """Transaction ledger persisted to a key-value store.

    Loads state on construction. Every mutating method persists the full
    state before returning.
    """

    def __init__(self, backend: KeyValueStore) -> None:
        self._backend = backend
        self._transactions: list[Transaction] = []
        self._next_id = 1
        self.load()

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Snapshot of the ledger in insertion order."""
        return tuple(self._transactions)

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._transactions)

    def get(self, txn_id: int) -> Transaction | None:
        return next((t for t in self._transactions if t.id == txn_id), None)

    def load(self) -> None:
        """Restore state from the backend.

        Missing, corrupt or unreadable data resets to an empty ledger.
        """
        try:
            raw_transactions = self._backend.get(TRANSACTIONS_KEY)
            raw_next_id = self._backend.get(NEXT_ID_KEY)
            self._transactions, self._next_id = decode_state(raw_transactions, raw_next_id)
        except StorageError as e:
            logger.warning("Could not read ledger, starting empty: %s", e)
            self._transactions, self._next_id = [], 1
        except PersistenceCorruption as e:
            if raw_transactions is not None:
                logger.warning("%s; starting with an empty ledger", e)
            else:
                logger.debug("%s; starting with an empty ledger", e)
            self._transactions, self._next_id = [], 1
        else:
            logger.debug("Loaded %d transactions (next id %d)", len(self._transactions), self._next_id)

    def save(self) -> None:
        """Write the full state to the backend (best-effort)."""
        self._write(encode_state(self._transactions, self._next_id))

    def _write(self, items: dict[str, str]) -> None:
        try:
            self._backend.set_many(items)
        except StorageError as e:
            logger.error("Failed to persist ledger: %s", e)

    def _commit(self, transactions: list[Transaction], next_id: int) -> None:
        # Encode first so a failure leaves the current state in place
        items = encode_state(transactions, next_id)
        self._transactions, self._next_id = transactions, next_id
        self._write(items)

    def add(self, text: Any, amount: Any, category: Any, date_value: str | date) -> Transaction:
        """Validate and append a new transaction.

        Args:
            text: Transaction label.
            amount: Signed amount (negative for expenses).
            category: Category name.
            date_value: ISO date string or date.

        Returns:
            The new transaction, with id equal to the previous next_id.

        Raises:
            ValidationError: If any field is missing or malformed.
        """
        txn = build_transaction(self._next_id, text, amount, category, date_value)
        self._commit([*self._transactions, txn], self._next_id + 1)
        logger.info("Added transaction %d: %s %s", txn.id, txn.text, txn.amount)
        return txn

    def remove(self, txn_id: int) -> bool:
        """Remove a transaction by id.

        Returns:
            True if a transaction was removed, False if the id was unknown.
        """
        remaining = [t for t in self._transactions if t.id != txn_id]
        removed = len(remaining) != len(self._transactions)
        self._commit(remaining, self._next_id)
        if removed:
            logger.info("Removed transaction %d", txn_id)
        return removed

    def clear_all(self) -> None:
        """Delete every transaction and reset the id counter to 1."""
        self._commit([], 1)
        logger.info("Cleared all transactions")

    def import_transactions(self, payload: str | bytes | list[Any]) -> int:
        """Replace the whole ledger with imported transactions.

        The id counter is raised past the highest imported id so later
        additions cannot collide; it is never lowered.

        Args:
            payload: JSON text, or an already-decoded list.

        Returns:
            Number of transactions imported.

        Raises:
            ImportFormatError: If payload is not a well-formed transaction array.
        """
        if isinstance(payload, (str, bytes)):
            try:
                payload = decode_json(payload.decode("utf-8") if isinstance(payload, bytes) else payload)
            except (ValueError, UnicodeDecodeError) as e:
                raise ImportFormatError(f"Not valid JSON: {e}") from e

        try:
            imported = transactions_from_list(payload)
        except ValidationError as e:
            raise ImportFormatError(str(e)) from e

        self._commit(imported, next_id_after(imported, floor=self._next_id))
        logger.info("Imported %d transactions (next id %d)", len(imported), self._next_id)
        return len(imported)

    def export_json(self) -> str:
        """Serialize the ledger as a pretty-printed JSON array."""
        return encode_transactions(self._transactions, indent=2)
