"""Tests for the stats service."""

from decimal import Decimal, InvalidOperation

import pytest

from nova_spend.models.expense import Stats


class TestStatsService:
    def test_defaults_when_absent(self, stats_service):
        """Test defaults when absent."""
        assert stats_service.read() == Stats()

    def test_write_and_read(self, stats_service, store, keys):
        """Test write and read."""
        stats_service.write(Stats(balance=Decimal("100"), monthly_budget=Decimal("500")))
        assert store.get(keys.stats) == {"balance": 100, "monthlyBudget": 500, "totalExpenses": 0}

    def test_adjust_balance_keeps_other_fields(self, stats_service, store, keys):
        """Test adjust balance keeps other fields."""
        store.set(keys.stats, {"balance": 1, "monthlyBudget": 500, "totalExpenses": 75})
        stats = stats_service.adjust_balance(Decimal("2000"))
        assert store.get(keys.stats) == {"balance": 2000, "monthlyBudget": 500, "totalExpenses": 75}
        assert stats.balance == Decimal("2000")

    def test_adjust_budget_keeps_other_fields(self, stats_service, store, keys):
        """Test adjust budget keeps other fields."""
        store.set(keys.stats, {"balance": 10, "monthlyBudget": 0, "totalExpenses": 5})
        stats_service.adjust_budget(Decimal("300.5"))
        assert store.get(keys.stats) == {"balance": 10, "monthlyBudget": 300.5, "totalExpenses": 5}

    def test_non_finite_amount_is_rejected(self, stats_service, store, keys):
        """Test non finite amount is rejected."""
        with pytest.raises(ValueError):
            stats_service.adjust_balance(Decimal("Infinity"))
        assert store.get(keys.stats) is None

    def test_non_numeric_text_is_rejected(self, stats_service):
        """Test non numeric text is rejected."""
        with pytest.raises(InvalidOperation):
            stats_service.adjust_budget("abc")

    def test_legacy_pending_field_disappears_on_write(self, stats_service, store, keys):
        """Test legacy pending field disappears on write."""
        store.set(keys.stats, {"balance": 1, "monthlyBudget": 2, "totalExpenses": 3, "pending": 9})
        stats_service.adjust_balance(Decimal("1"))
        assert "pending" not in store.get(keys.stats)
