"""
Derived Report Models

Results handed to the presentation layer. None of these are persisted.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field

from nova_spend.models.expense import Category


class CategoryTotal(BaseModel):
    """Total spending for one category."""

    category: Category
    total: Decimal = Field(
        ...,
        ge=0,
        description="Sum of absolute expense amounts"
    )

    @property
    def name(self) -> str:
        return self.category.value


class BudgetStatus(BaseModel):
    """How much of the monthly budget has been spent."""

    has_budget: bool
    spent: Decimal = Decimal("0")
    limit: Decimal = Decimal("0")
    remaining: Decimal = Decimal("0")
    percent_used: float = Field(
        default=0.0,
        ge=0.0,
        le=100.0,
        description="Percentage of the budget spent, capped at 100"
    )
    warning: bool = False
    exceeded: bool = False


class ActionResult(BaseModel):
    """
    Outcome of a user action, with the acknowledgment to show.

    Failures are reported once, to the user, through this object.
    """

    success: bool
    message: str = Field(
        ...,
        description="Human-readable acknowledgment"
    )
    data: Optional[Any] = Field(
        default=None,
        description="Action-specific payload (e.g. the new Transaction)"
    )
