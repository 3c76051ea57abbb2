"""Tests for derived views: category breakdown, recent items, budget status."""

from decimal import Decimal

from nova_spend.models.expense import Category, ExpenseInput
from nova_spend.services import AnalyticsService


def spend(ledger, amount, category, description="item"):
    ledger.record_expense(ExpenseInput(
        amount=amount, category=category, date="2024-01-01", description=description,
    ))


class TestCategoryBreakdown:
    def test_empty(self, analytics):
        """Test empty."""
        assert analytics.category_breakdown() == []

    def test_totals_in_order_of_first_appearance(self, analytics, ledger):
        """Test totals in order of first appearance."""
        spend(ledger, 10, "food")
        spend(ledger, 20, "health")
        spend(ledger, 5, "food")

        breakdown = analytics.category_breakdown()
        assert [(t.category, t.total) for t in breakdown] == [
            (Category.FOOD, Decimal("15")),
            (Category.HEALTH, Decimal("20")),
        ]

    def test_positive_amounts_are_ignored(self, analytics, store, keys):
        """Test positive amounts are ignored."""
        store.set(keys.transactions, [
            {"id": 2, "description": "salary", "amount": 1000, "date": "2024-01-02", "category": "other"},
            {"id": 1, "description": "bus", "amount": -15, "date": "2024-01-01", "category": "transportation"},
        ])
        breakdown = analytics.category_breakdown()
        assert [(t.name, t.total) for t in breakdown] == [("transportation", Decimal("15"))]


class TestRecentTransactions:
    def test_newest_first_and_limited(self, analytics, ledger):
        """Test newest first and limited."""
        for i in range(7):
            spend(ledger, 1, "food", description=f"item {i}")

        recent = analytics.recent_transactions()
        assert len(recent) == 5
        assert recent[0].description == "item 6"


class TestBudgetStatus:
    def test_no_budget(self, analytics):
        """Test no budget."""
        status = analytics.budget_status()
        assert status.has_budget is False
        assert status.warning is False
        assert status.exceeded is False

    def test_under_budget(self, analytics, ledger, stats_service):
        """Test under budget."""
        stats_service.adjust_budget(Decimal("100"))
        spend(ledger, 25, "food")

        status = analytics.budget_status()
        assert status.has_budget is True
        assert status.spent == Decimal("25")
        assert status.remaining == Decimal("75")
        assert status.percent_used == 25.0
        assert status.warning is False

    def test_warning_threshold(self, analytics, ledger, stats_service):
        """Test warning threshold."""
        stats_service.adjust_budget(Decimal("100"))
        spend(ledger, 80, "food")

        status = analytics.budget_status()
        assert status.warning is True
        assert status.exceeded is False

    def test_exceeded_is_capped(self, analytics, ledger, stats_service):
        """Test exceeded is capped."""
        stats_service.adjust_budget(Decimal("100"))
        spend(ledger, 150, "food")

        status = analytics.budget_status()
        assert status.exceeded is True
        assert status.percent_used == 100.0
        assert status.remaining == Decimal("0")

    def test_custom_threshold(self, ledger, stats_service):
        """Test custom threshold."""
        analytics = AnalyticsService(ledger, stats_service, warn_at_percent=50)
        stats_service.adjust_budget(Decimal("100"))
        spend(ledger, 50, "food")
        assert analytics.budget_status().warning is True
