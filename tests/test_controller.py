"""Tests for tally.controller.LedgerController."""

import json
from datetime import date
from decimal import Decimal

import pytest

from tally.controller import CONFIRM_CLEAR, CONFIRM_REMOVE, LedgerController, export_filename


@pytest.fixture
def controller(ledger, view) -> LedgerController:
    return LedgerController(ledger, view)


class TestRefresh:
    """Tests for redraw behavior."""

    def test_refresh_renders_everything(self, controller, view) -> None:
        """Should render list, totals and chart."""
        controller.refresh()

        assert view.lists == [[]]
        assert view.totals[-1].balance == Decimal("0.00")
        assert view.charts == [{}]

    def test_set_filters_renders_list_only(self, controller, view) -> None:
        """Should redraw the filtered list without totals."""
        controller.add_transaction("Lunch", -200, "food", "2024-01-10")
        controller.add_transaction("Salary", 5000, "salary", "2024-01-01")
        totals_before = len(view.totals)

        controller.set_filters("all", "income")

        assert [t.text for t in view.lists[-1]] == ["Salary"]
        assert len(view.totals) == totals_before

    def test_filters_persist_across_mutations(self, controller, view) -> None:
        """Should apply the current filters on every redraw."""
        controller.set_filters("food", "all")
        controller.add_transaction("Salary", 5000, "salary", "2024-01-01")

        assert view.lists[-1] == []

    def test_unknown_type_filter_keeps_previous(self, controller) -> None:
        """Should reject unknown type filters."""
        with pytest.raises(ValueError):
            controller.set_filters("all", "bogus")

        assert controller.type_filter == "all"


class TestAdd:
    """Tests for add_transaction."""

    def test_scenario_add_then_totals(self, controller, view) -> None:
        """Should redraw totals and chart after adding."""
        txn = controller.add_transaction("Lunch", -200, "food", "2024-01-10")

        assert txn is not None and txn.id == 1
        assert view.totals[-1].balance == Decimal("-200.00")
        assert view.totals[-1].income == Decimal("0.00")
        assert view.totals[-1].expense == Decimal("200.00")
        assert view.charts[-1] == {"food": Decimal("200")}
        assert view.notices[-1] == ("Transaction added successfully!", "success")

    def test_second_add_orders_by_date(self, controller, view) -> None:
        """Should list newer transactions first."""
        controller.add_transaction("Lunch", -200, "food", "2024-01-10")
        controller.add_transaction("Salary", 5000, "salary", "2024-01-01")

        assert view.totals[-1].balance == Decimal("4800.00")
        assert [t.text for t in view.lists[-1]] == ["Lunch", "Salary"]

    def test_invalid_add_alerts(self, controller, view, ledger) -> None:
        """Should alert instead of raising and not redraw."""
        result = controller.add_transaction("", 100, "food", "2024-01-01")

        assert result is None
        assert view.alerts == ["Text must not be empty"]
        assert view.lists == []
        assert len(ledger) == 0


class TestRemove:
    """Tests for remove_transaction."""

    def test_confirmed_remove(self, controller, view, ledger) -> None:
        """Should delete after confirmation and redraw."""
        controller.add_transaction("Lunch", -200, "food", "2024-01-10")
        controller.add_transaction("Salary", 5000, "salary", "2024-01-01")

        assert controller.remove_transaction(1) is True
        assert view.prompts == [CONFIRM_REMOVE]
        assert [t.text for t in ledger.transactions] == ["Salary"]
        assert view.charts[-1] == {}
        assert view.notices[-1] == ("Transaction deleted", "info")

    def test_declined_remove_changes_nothing(self, controller, view, ledger, dict_store) -> None:
        """Should abort without mutation or write when declined."""
        controller.add_transaction("Lunch", -200, "food", "2024-01-10")
        writes = dict_store.writes
        renders = len(view.lists)
        view.answer = False

        assert controller.remove_transaction(1) is False
        assert len(ledger) == 1
        assert dict_store.writes == writes
        assert len(view.lists) == renders

    def test_remove_unknown_id(self, controller, view) -> None:
        """Should report an unknown id as info."""
        assert controller.remove_transaction(42) is False
        assert view.notices[-1] == ("No transaction with id 42", "info")


class TestClearAll:
    """Tests for clear_all."""

    def test_confirmed_clear(self, controller, view, ledger) -> None:
        """Should clear and reset the counter."""
        controller.add_transaction("Lunch", -200, "food", "2024-01-10")

        assert controller.clear_all() is True
        assert view.prompts == [CONFIRM_CLEAR]
        assert len(ledger) == 0
        assert ledger.next_id == 1
        assert view.notices[-1] == ("All transactions cleared", "info")

    def test_declined_clear(self, controller, view, ledger, dict_store) -> None:
        """Should keep everything when declined."""
        controller.add_transaction("Lunch", -200, "food", "2024-01-10")
        writes = dict_store.writes
        view.answer = False

        assert controller.clear_all() is False
        assert len(ledger) == 1
        assert ledger.next_id == 2
        assert dict_store.writes == writes


class TestImportExport:
    """Tests for import_data and export_data."""

    def test_import_replaces_and_redraws(self, controller, view, ledger, txn_dict) -> None:
        """Should replace the ledger and notify."""
        controller.add_transaction("Old", -1, "food", "2024-01-01")

        payload = json.dumps([txn_dict(1), txn_dict(2, 300, "salary"), txn_dict(3)])
        assert controller.import_data(payload) is True

        assert len(ledger) == 3
        assert view.totals[-1].income == Decimal("300.00")
        assert view.notices[-1] == ("Data imported successfully!", "success")

    def test_bad_import_alerts(self, controller, view, ledger) -> None:
        """Should alert and keep the ledger."""
        controller.add_transaction("Keep", -1, "food", "2024-01-01")

        assert controller.import_data('{"not": "an array"}') is False
        assert view.alerts[-1].startswith("Invalid file format")
        assert len(ledger) == 1

    def test_export_writes_dated_file(self, controller, view, tmp_path) -> None:
        """Should write pretty JSON to a date-stamped file."""
        controller.add_transaction("Lunch", -200, "food", "2024-01-10")

        path = controller.export_data(tmp_path / "out", today=date(2024, 3, 1))

        assert path == tmp_path / "out" / "expense_tracker_2024-03-01.json"
        assert json.loads(path.read_text(encoding="utf-8"))[0]["text"] == "Lunch"
        assert view.notices[-1][1] == "success"

    def test_export_filename(self) -> None:
        """Should stamp the file with the ISO date."""
        assert export_filename(date(2025, 12, 31)) == "expense_tracker_2025-12-31.json"
