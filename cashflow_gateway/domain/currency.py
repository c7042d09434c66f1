"""Money rounding and GTQ/USD conversion"""

from decimal import Decimal, ROUND_HALF_UP
from cashflow_gateway.domain.exceptions import UnsupportedCurrencyError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

SUPPORTED_CURRENCIES = ("GTQ", "USD")


def round_money(amount) -> Decimal:
    """Round to 2 decimal places, half up"""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def convert_currency(amount: Decimal, from_currency: str, to_currency: str, exchange_rate: Decimal) -> Decimal:
    """
    Convert between GTQ and USD.

    Args:
        amount: Amount in from_currency
        exchange_rate: GTQ per 1 USD

    Raises:
        UnsupportedCurrencyError: If either currency is not GTQ or USD
    """
    for currency in (from_currency, to_currency):
        if currency not in SUPPORTED_CURRENCIES:
            raise UnsupportedCurrencyError(f"Unsupported currency: {currency}")

    if from_currency == to_currency:
        return amount
    if from_currency == "USD":
        return amount * exchange_rate
    return amount / exchange_rate

