"""Shared fixtures for tally tests."""

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest

from tally import logging_setup
from tally.domain.models import CategoryName, IsoDate, Money, NotifyKind, Transaction
from tally.domain.report import Totals
from tally.errors import StorageError
from tally.ledger import LedgerStore
from tally.store.backend import SqliteKeyValueStore


class DictStore:
    """In-memory KeyValueStore that counts writes."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data = dict(data or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set_many(self, items: Mapping[str, str]) -> None:
        self.writes += 1
        self.data.update(items)


class BrokenStore:
    """KeyValueStore whose every call fails."""

    def get(self, key: str) -> str | None:
        raise StorageError("disk on fire")

    def set_many(self, items: Mapping[str, str]) -> None:
        raise StorageError("disk on fire")


class RecordingView:
    """LedgerView that records every callback."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.lists: list[list[Transaction]] = []
        self.totals: list[Totals] = []
        self.charts: list[dict[CategoryName, Money]] = []
        self.notices: list[tuple[str, NotifyKind]] = []
        self.prompts: list[str] = []
        self.alerts: list[str] = []

    def render_list(self, view: Sequence[Transaction]) -> None:
        self.lists.append(list(view))

    def render_totals(self, totals: Totals) -> None:
        self.totals.append(totals)

    def render_chart(self, breakdown: Mapping[CategoryName, Money]) -> None:
        self.charts.append(dict(breakdown))

    def notify(self, message: str, kind: NotifyKind) -> None:
        self.notices.append((message, kind))

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answer

    def alert(self, message: str) -> None:
        self.alerts.append(message)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo configure_logging() calls made by CLI tests."""
    yield
    logger = logging.getLogger("tally")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    logging_setup._CONFIGURED = False


@pytest.fixture
def dict_store() -> DictStore:
    return DictStore()


@pytest.fixture
def ledger(dict_store: DictStore) -> LedgerStore:
    return LedgerStore(dict_store)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "tally.db"


@pytest.fixture
def sqlite_store(db_path: Path) -> SqliteKeyValueStore:
    return SqliteKeyValueStore(db_path)


@pytest.fixture
def xdg_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and data directories at a temp dir."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def make_txn() -> Callable[..., Transaction]:
    """Factory for Transactions with sensible defaults."""

    def _make(
        txn_id: int,
        amount: str,
        category: str = "food",
        date: str = "2024-01-01",
        text: str = "Item",
    ) -> Transaction:
        return Transaction(
            id=txn_id,
            text=text,
            amount=Money(Decimal(amount)),
            category=CategoryName(category),
            date=IsoDate(date),
        )

    return _make


@pytest.fixture
def txn_dict() -> Callable[..., dict[str, Any]]:
    """Factory for persisted transaction objects."""

    def _make(txn_id: int, amount: Any = -10, category: str = "food", date: str = "2024-01-01") -> dict[str, Any]:
        return {"id": txn_id, "text": f"Item {txn_id}", "amount": amount, "category": category, "date": date}

    return _make


@pytest.fixture
def broken_store() -> BrokenStore:
    return BrokenStore()


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()
