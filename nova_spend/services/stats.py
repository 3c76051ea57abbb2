"""
Stats Service

Owns the cached summary record (balance, monthly budget, total expenses).

IMPORTANT: Nothing here ever looks at the ledger. Stats only change when
the ledger service records an expense, when the user edits balance or
budget, or when an import or reset replaces the record.
"""

from decimal import Decimal

from nova_spend.models.expense import Stats
from nova_spend.observability import get_logger
from nova_spend.services.storage import KeyValueStore, RecordKeys

logger = get_logger(__name__)


def _finite(value: Decimal) -> Decimal:
    number = Decimal(value)
    if not number.is_finite():
        raise ValueError(f"Amount must be a finite number, got {value!r}")
    return number


class StatsService:
    """Reads and edits the cached Stats record."""

    def __init__(self, store: KeyValueStore, keys: RecordKeys):
        self._store = store
        self._keys = keys

    def read(self) -> Stats:
        """Current stats; zeroed defaults when the record is absent."""
        return Stats.from_document(self._store.get(self._keys.stats))

    def write(self, stats: Stats) -> None:
        self._store.set(self._keys.stats, stats.to_document())

    def adjust_balance(self, new_balance: Decimal) -> Stats:
        """Overwrite the balance, leaving budget and total untouched."""
        stats = self.read().model_copy(update={"balance": _finite(new_balance)})
        self.write(stats)
        logger.info("balance_adjusted", balance=str(stats.balance))
        return stats

    def adjust_budget(self, new_budget: Decimal) -> Stats:
        """Overwrite the monthly budget, leaving balance and total untouched."""
        stats = self.read().model_copy(update={"monthly_budget": _finite(new_budget)})
        self.write(stats)
        logger.info("budget_adjusted", monthly_budget=str(stats.monthly_budget))
        return stats
