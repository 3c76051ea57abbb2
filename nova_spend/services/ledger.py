"""
Ledger Service

The ONLY writer of transaction history.

Recording an expense touches two records: the ledger (new transaction
prepended, newest first) and the cached stats. Both are committed together
in a single store write, so a failure leaves neither updated.

CRITICAL: Stats move by the amount AS ENTERED (a positive number):
    balance       -= entered amount
    totalExpenses += entered amount
The stored transaction carries the negated amount. Do not "simplify" this
into summing stored transactions; totals are incremental by design.
"""

import time
from typing import Any, Callable, Optional

from pydantic import ValidationError

from nova_spend.models.events import EventType
from nova_spend.models.expense import ExpenseInput, Transaction
from nova_spend.observability import get_logger
from nova_spend.services.notifications import EventBus
from nova_spend.services.stats import StatsService
from nova_spend.services.storage import KeyValueStore, RecordKeys

logger = get_logger(__name__)


def current_millis() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


class LedgerService:
    """Appends expenses and keeps the cached stats in step."""

    def __init__(
        self,
        store: KeyValueStore,
        keys: RecordKeys,
        stats: StatsService,
        bus: EventBus,
        clock: Callable[[], int] = current_millis,
    ):
        self._store = store
        self._keys = keys
        self._stats = stats
        self._bus = bus
        self._clock = clock

    def _raw_ledger(self) -> list[Any]:
        """Stored ledger as raw documents; a damaged record reads as empty."""
        document = self._store.get(self._keys.transactions)
        if document is None:
            return []
        if not isinstance(document, list):
            logger.warning("ledger_not_a_list", found=type(document).__name__)
            return []
        return document

    def _next_id(self, ledger: list[Any]) -> int:
        """Timestamp id, bumped past the newest stored id so ids never go backwards."""
        candidate = self._clock()
        stored_ids = [
            entry["id"]
            for entry in ledger
            if isinstance(entry, dict)
            and isinstance(entry.get("id"), int)
            and not isinstance(entry.get("id"), bool)
        ]
        if stored_ids and candidate <= max(stored_ids):
            candidate = max(stored_ids) + 1
        return candidate

    def record_expense(self, expense: ExpenseInput) -> Transaction:
        """
        Record an expense.

        Args:
            expense: Validated user input (amount is positive)

        Returns:
            The stored Transaction (amount negative)

        Raises:
            StorageError: If the ledger and stats cannot be persisted
        """
        ledger = self._raw_ledger()
        transaction = Transaction(
            id=self._next_id(ledger),
            description=expense.description,
            amount=-abs(expense.amount),
            spent_on=expense.spent_on,
            category=expense.category,
            notes=expense.notes,
        )

        stats = self._stats.read()
        updated_stats = stats.model_copy(update={
            "balance": stats.balance - expense.amount,
            "total_expenses": stats.total_expenses + expense.amount,
        })

        self._store.set_many({
            self._keys.transactions: [transaction.to_document(), *ledger],
            self._keys.stats: updated_stats.to_document(),
        })

        logger.info(
            "expense_recorded",
            transaction_id=transaction.id,
            category=transaction.category.value,
            amount=str(transaction.amount),
            ledger_size=len(ledger) + 1,
        )
        self._bus.publish(
            EventType.EXPENSE_RECORDED,
            {
                "id": transaction.id,
                "category": transaction.category.value,
                "amount": str(transaction.amount),
            },
            source="ledger",
        )
        return transaction

    def list_transactions(self, limit: Optional[int] = None) -> list[Transaction]:
        """
        Stored transactions, newest first.

        Entries that no longer match the schema (e.g. from a hand-edited
        backup) are skipped and logged.
        """
        transactions = []
        for index, entry in enumerate(self._raw_ledger()):
            try:
                transactions.append(Transaction.model_validate(entry))
            except ValidationError as e:
                logger.warning(
                    "transaction_skipped",
                    index=index,
                    errors=[err["msg"] for err in e.errors()],
                )
        if limit is not None:
            return transactions[:limit]
        return transactions

    def count(self) -> int:
        """Number of stored ledger entries."""
        return len(self._raw_ledger())
