"""Display helpers for amounts. Currency is a label only; nothing is converted."""

from decimal import Decimal
from typing import Union

from nova_spend.models.settings import Currency


def format_amount(amount: Union[Decimal, int, float], currency: Union[Currency, str]) -> str:
    """
    Format an amount with its currency symbol and two decimals.

    Example:
        >>> format_amount(Decimal("-1234.5"), Currency.INR)
        '-₹1,234.50'
    """
    currency = Currency(currency)
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{currency.symbol}{abs(value):,.2f}"
