"""
Data Models Package

This package contains all Pydantic models used by Nova Spend.
Everything read from or written to the store goes through these schemas.
"""

from nova_spend.models.backup import BackupDocument
from nova_spend.models.document import Money, StoredDocument
from nova_spend.models.events import Event, EventHandler, EventType
from nova_spend.models.expense import (
    Category,
    ExpenseInput,
    Stats,
    Transaction,
)
from nova_spend.models.reports import ActionResult, BudgetStatus, CategoryTotal
from nova_spend.models.settings import Currency, Settings, Theme

__all__ = [
    # Ledger models
    "Category",
    "ExpenseInput",
    "Stats",
    "Transaction",
    # Preferences
    "Currency",
    "Settings",
    "Theme",
    # Backup
    "BackupDocument",
    # Events
    "Event",
    "EventHandler",
    "EventType",
    # Reports
    "ActionResult",
    "BudgetStatus",
    "CategoryTotal",
    # Base
    "Money",
    "StoredDocument",
]
