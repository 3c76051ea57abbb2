"""
User Preference Models

Budget and balance are kept as numeric STRINGS here, exactly as the user
typed them in the settings form. They only become Decimals when mirrored
into Stats.
"""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from nova_spend.models.document import StoredDocument


class Theme(str, Enum):
    """Display theme."""
    LIGHT = "light"
    DARK = "dark"


class Currency(str, Enum):
    """
    Display currency.

    DESIGN DECISION: Currency is a display label only. Switching it never
    converts any stored amount.
    """
    INR = "INR"
    USD = "USD"

    @property
    def symbol(self) -> str:
        return "₹" if self is Currency.INR else "$"


def number_text(value: Decimal) -> str:
    """Render a Decimal the way the settings form shows it (50, not 50.00)."""
    if value == value.to_integral_value():
        return str(int(value))
    return str(value)


class Settings(StoredDocument):
    """
    User preferences.

    Every field has a default, so a missing or partially damaged record
    still reads as a usable Settings.
    """

    monthly_budget: str = Field(
        default="0",
        alias="monthlyBudget",
        description="Monthly budget as a numeric string"
    )
    balance: str = Field(
        default="0",
        description="Current balance as a numeric string"
    )
    theme: Theme = Field(
        default=Theme.LIGHT,
        description="Display theme"
    )
    notifications: bool = Field(
        default=True,
        description="Enable budget notifications"
    )
    currency: Currency = Field(
        default=Currency.INR,
        description="Display currency"
    )

    @field_validator('monthly_budget', 'balance', mode='before')
    @classmethod
    def numbers_to_text(cls, v: Any) -> Any:
        """Accept plain numbers and store their text form."""
        if isinstance(v, bool):
            raise ValueError("Expected a number, got a boolean")
        if isinstance(v, Decimal):
            return number_text(v)
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator('monthly_budget', 'balance')
    @classmethod
    def must_be_numeric(cls, v: str) -> str:
        try:
            number = Decimal(v)
        except InvalidOperation:
            raise ValueError(f"Not a number: {v!r}")
        if not number.is_finite():
            raise ValueError(f"Not a finite number: {v!r}")
        return v

    @property
    def budget_amount(self) -> Decimal:
        return Decimal(self.monthly_budget)

    @property
    def balance_amount(self) -> Decimal:
        return Decimal(self.balance)
