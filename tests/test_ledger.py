"""
Tests for the ledger service.

Includes the reference scenario: recording Lunch for 50 on an empty store.
"""

from datetime import date
from decimal import Decimal

import pytest

from nova_spend.models.events import EventType
from nova_spend.models.expense import ExpenseInput
from nova_spend.services import LedgerService, StorageError

FIXED_MILLIS = 1704067200000


def lunch(amount="50", **overrides):
    fields = {"amount": amount, "category": "food", "date": "2024-01-01", "description": "Lunch"}
    fields.update(overrides)
    return ExpenseInput.model_validate(fields)


class TestRecordExpense:
    """Recording expenses and keeping stats in step."""

    def test_lunch_on_empty_store(self, ledger, store, keys):
        """Test recording lunch on an empty store."""
        ledger.record_expense(lunch())

        assert store.get(keys.transactions) == [{
            "id": FIXED_MILLIS,
            "description": "Lunch",
            "amount": -50,
            "date": "2024-01-01",
            "category": "food",
        }]
        assert store.get(keys.stats) == {"balance": -50, "monthlyBudget": 0, "totalExpenses": 50}

    def test_stored_amount_is_negated_exactly(self, ledger):
        """Test stored amount is negated exactly."""
        transaction = ledger.record_expense(lunch("12.34"))
        assert transaction.amount == Decimal("-12.34")

    def test_large_amount_is_stored_exactly(self, ledger, stats_service):
        """A large amount with cents reads back unchanged from the store."""
        ledger.record_expense(lunch("1234567890.12"))

        assert ledger.list_transactions()[0].amount == Decimal("-1234567890.12")
        assert stats_service.read().total_expenses == Decimal("1234567890.12")

    def test_stats_move_by_entered_amount(self, ledger, stats_service):
        """Test stats move by entered amount."""
        stats_service.adjust_balance(Decimal("1000"))
        stats_service.adjust_budget(Decimal("500"))

        ledger.record_expense(lunch("120.50"))

        stats = stats_service.read()
        assert stats.balance == Decimal("879.50")
        assert stats.total_expenses == Decimal("120.50")
        assert stats.monthly_budget == Decimal("500")

    def test_ledger_is_newest_first(self, store, keys, stats_service, bus):
        """Test ledger is newest first."""
        ticks = iter([100, 200, 300])
        ledger = LedgerService(store, keys, stats_service, bus, clock=lambda: next(ticks))

        for name in ["first", "second", "third"]:
            ledger.record_expense(lunch(description=name))

        assert [t.description for t in ledger.list_transactions()] == ["third", "second", "first"]
        assert ledger.count() == 3

    def test_ids_never_go_backwards(self, ledger):
        """Two expenses within the same millisecond still get distinct ids."""
        first = ledger.record_expense(lunch())
        second = ledger.record_expense(lunch())
        assert second.id == first.id + 1

    def test_notes_are_stored(self, ledger, store, keys):
        """Test notes are stored."""
        ledger.record_expense(lunch(notes="team lunch"))
        assert store.get(keys.transactions)[0]["notes"] == "team lunch"

    def test_publishes_expense_recorded(self, ledger, received):
        """Test publishes expense recorded."""
        transaction = ledger.record_expense(lunch())
        assert [e.event_type for e in received] == [EventType.EXPENSE_RECORDED]
        assert received[0].data == {"id": transaction.id, "category": "food", "amount": "-50"}

    def test_damaged_ledger_is_replaced(self, ledger, store, keys):
        """Test damaged ledger is replaced."""
        store.set(keys.transactions, {"not": "a list"})
        ledger.record_expense(lunch())
        assert len(store.get(keys.transactions)) == 1

    def test_failed_write_changes_nothing(self, ledger, store, keys, monkeypatch):
        """Test failed write changes nothing."""
        def failing(documents):
            raise StorageError("disk full")

        monkeypatch.setattr(store, "set_many", failing)
        with pytest.raises(StorageError):
            ledger.record_expense(lunch())

        assert store.get(keys.transactions) is None
        assert store.get(keys.stats) is None


class TestListTransactions:
    def test_empty(self, ledger):
        """Test empty."""
        assert ledger.list_transactions() == []
        assert ledger.count() == 0

    def test_limit(self, ledger):
        """Test limit."""
        for _ in range(4):
            ledger.record_expense(lunch())
        assert len(ledger.list_transactions(limit=2)) == 2

    def test_invalid_entries_are_skipped(self, ledger, store, keys):
        """Test invalid entries are skipped."""
        store.set(keys.transactions, [
            {"id": 1, "description": "ok", "amount": -5, "date": "2024-01-01", "category": "food"},
            {"id": "x", "description": "bad"},
        ])
        transactions = ledger.list_transactions()
        assert len(transactions) == 1
        assert transactions[0].spent_on == date(2024, 1, 1)
        assert ledger.count() == 2
