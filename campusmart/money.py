from decimal import Decimal

from .conf import app_setting


def format_price(value):
    """Render a price without trailing zeros on whole amounts: 85000.00 -> '85000'."""
    amount = Decimal(str(value))
    if amount == amount.to_integral_value():
        return str(int(amount))
    return f"{amount:.2f}"


def display_price(value):
    return f"{app_setting('CURRENCY_SYMBOL')}{format_price(value)}"


def price_number(value):
    """JSON-friendly number for a stored price (int when whole)."""
    amount = Decimal(str(value))
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)
