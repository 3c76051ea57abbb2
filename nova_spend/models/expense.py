"""
Core Data Models for Nova Spend

These models define the schemas for the ledger and the cached summary.
They are designed to:
1. Enforce type safety at the input boundary
2. Keep the persisted JSON shape stable (camelCase keys, plain numbers)
3. Tolerate damaged or partial records on read

DESIGN DECISION: Amounts are Decimal everywhere in Python.
They are only converted to JSON numbers at the storage boundary.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nova_spend.models.document import Money, StoredDocument


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Category(str, Enum):
    """
    Supported expense categories.

    DESIGN DECISION: Using explicit categories rather than free text ensures
    the category breakdown always groups the same spending together.
    """
    FOOD = "food"
    TRANSPORTATION = "transportation"
    UTILITIES = "utilities"
    ENTERTAINMENT = "entertainment"
    HEALTH = "health"
    OTHER = "other"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# =============================================================================
# LEDGER MODELS
# =============================================================================

class ExpenseInput(BaseModel):
    """
    An expense as entered by the user, before it becomes a Transaction.

    CRITICAL: This is the validation boundary. Anything that gets past it
    is assumed valid by the ledger service, which never re-checks.
    """
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    amount: Decimal = Field(
        ...,
        gt=0,
        max_digits=15,
        decimal_places=2,
        description="Amount spent, always entered as a positive number (cents at most)"
    )
    category: Category = Field(
        ...,
        description="Expense category (required)"
    )
    spent_on: date = Field(
        default_factory=date.today,
        alias="date",
        description="Calendar date of the expense"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="What the money was spent on"
    )
    notes: Optional[str] = Field(
        default=None,
        max_length=1000,
        description="Optional free-form notes"
    )

    @field_validator('notes')
    @classmethod
    def blank_notes_are_absent(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class Transaction(StoredDocument):
    """
    A single recorded ledger entry.

    Negative amounts are expenses, positive amounts are income.
    Transactions are never edited in place; the ledger is only ever
    prepended to, cleared, or replaced wholesale by an import.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(
        ...,
        ge=0,
        description="Creation timestamp in milliseconds"
    )
    description: str
    amount: Money = Field(
        ...,
        description="Signed amount (negative = expense)"
    )
    spent_on: date = Field(
        ...,
        alias="date",
        description="Calendar date of the transaction"
    )
    category: Category
    notes: Optional[str] = None

    @property
    def is_expense(self) -> bool:
        return self.amount < 0


# =============================================================================
# CACHED SUMMARY
# =============================================================================

class Stats(StoredDocument):
    """
    Cached summary kept next to the ledger.

    IMPORTANT: Stats are maintained incrementally. They are never
    recomputed from the ledger, so an import or an external edit can make
    them disagree with the transactions. That divergence is accepted.
    """

    balance: Money = Field(
        default=Decimal("0"),
        description="User-declared balance, reduced by each expense"
    )
    monthly_budget: Money = Field(
        default=Decimal("0"),
        alias="monthlyBudget",
        description="User-declared monthly budget"
    )
    total_expenses: Money = Field(
        default=Decimal("0"),
        alias="totalExpenses",
        description="Sum of expenses recorded since the last reset"
    )
