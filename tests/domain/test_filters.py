"""Tests for tally.domain.filters."""

from typing import get_args

import pytest

from tally.domain.filters import TYPE_FILTERS, filter_transactions
from tally.domain.models import TypeFilter


@pytest.fixture
def sample(make_txn):
    return [
        make_txn(1, "-200", "food", "2024-01-10", "Lunch"),
        make_txn(2, "5000", "salary", "2024-01-01", "Salary"),
        make_txn(3, "-30", "transport", "2024-01-05", "Bus"),
        make_txn(4, "0", "food", "2024-01-07", "Free sample"),
        make_txn(5, "150", "food", "2024-01-10", "Refund"),
    ]


class TestFilterTransactions:
    """Tests for filter_transactions."""

    def test_all_all_keeps_everything_newest_first(self, sample) -> None:
        """Should return every transaction sorted by date descending."""
        result = filter_transactions(sample, "all", "all")

        assert sorted(t.id for t in result) == [1, 2, 3, 4, 5]
        assert [t.date for t in result] == sorted((t.date for t in sample), reverse=True)

    def test_same_date_keeps_ledger_order(self, sample) -> None:
        """Should sort stably so same-day entries keep insertion order."""
        result = filter_transactions(sample)

        assert [t.id for t in result] == [1, 5, 4, 3, 2]

    def test_income_only(self, sample) -> None:
        """Should keep positive amounts only."""
        result = filter_transactions(sample, "all", "income")

        assert [t.id for t in result] == [5, 2]

    def test_expense_only(self, sample) -> None:
        """Should keep negative amounts only."""
        result = filter_transactions(sample, "all", "expense")

        assert [t.id for t in result] == [1, 3]

    def test_zero_amount_excluded_from_typed_filters(self, sample) -> None:
        """Should leave zero amounts out of income and expense views."""
        income = filter_transactions(sample, "all", "income")
        expense = filter_transactions(sample, "all", "expense")

        assert 4 not in {t.id for t in income + expense}

    def test_category_exact_match(self, sample) -> None:
        """Should keep only the exact category."""
        result = filter_transactions(sample, "food", "all")

        assert [t.id for t in result] == [1, 5, 4]

    def test_category_and_type_combined(self, sample) -> None:
        """Should apply both filters."""
        result = filter_transactions(sample, "food", "expense")

        assert [t.id for t in result] == [1]

    def test_category_match_is_case_sensitive(self, sample) -> None:
        """Should not match categories case-insensitively."""
        assert filter_transactions(sample, "Food", "all") == []

    def test_no_match_returns_empty_list(self, sample) -> None:
        """Should return an empty list rather than raising."""
        assert filter_transactions(sample, "salary", "expense") == []

    def test_does_not_mutate_input(self, sample) -> None:
        """Should leave the input order untouched."""
        before = list(sample)
        filter_transactions(sample)

        assert sample == before

    def test_unknown_type_raises(self, sample) -> None:
        """Should reject unknown type filters."""
        with pytest.raises(ValueError, match="Unknown type filter"):
            filter_transactions(sample, "all", "refunds")

    def test_type_filters_match_type_filter_literal(self) -> None:
        """Should accept exactly the TypeFilter values."""
        assert TYPE_FILTERS == ("all", "income", "expense") == get_args(TypeFilter)
