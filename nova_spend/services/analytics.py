"""
Analytics Service

Read-only views derived on demand from the ledger and the cached stats.
Nothing here is persisted, so there is nothing to keep in sync.
"""

from decimal import Decimal

from nova_spend.models.expense import Category, Transaction
from nova_spend.models.reports import BudgetStatus, CategoryTotal
from nova_spend.services.ledger import LedgerService
from nova_spend.services.stats import StatsService


class AnalyticsService:
    """Spending breakdowns and budget status."""

    def __init__(
        self,
        ledger: LedgerService,
        stats: StatsService,
        warn_at_percent: int = 80,
    ):
        self._ledger = ledger
        self._stats = stats
        self._warn_at_percent = warn_at_percent

    def category_breakdown(self) -> list[CategoryTotal]:
        """
        Total spending per category.

        Only expenses (negative amounts) count. Categories appear in the
        order they are first met in the ledger (newest first).
        """
        totals: dict[Category, Decimal] = {}
        for transaction in self._ledger.list_transactions():
            if transaction.is_expense:
                totals[transaction.category] = (
                    totals.get(transaction.category, Decimal("0")) + abs(transaction.amount)
                )
        return [
            CategoryTotal(category=category, total=total)
            for category, total in totals.items()
        ]

    def recent_transactions(self, limit: int = 5) -> list[Transaction]:
        return self._ledger.list_transactions(limit=limit)

    def budget_status(self) -> BudgetStatus:
        """
        Compare total expenses against the monthly budget.

        Returns:
            BudgetStatus; has_budget is False when no positive budget is set
        """
        stats = self._stats.read()
        budget = stats.monthly_budget
        spent = stats.total_expenses

        if budget <= 0:
            return BudgetStatus(has_budget=False, spent=spent)

        percent_used = float(spent / budget * 100)
        return BudgetStatus(
            has_budget=True,
            spent=spent,
            limit=budget,
            remaining=max(Decimal("0"), budget - spent),
            percent_used=min(100.0, max(0.0, percent_used)),
            warning=percent_used >= self._warn_at_percent,
            exceeded=spent >= budget,
        )
