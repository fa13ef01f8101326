"""Human-readable formatting shared by vouchers, emails and messages."""

from datetime import date

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}


def format_long_date(value: date) -> str:
    """Format a date as ``Month DD, YYYY``, e.g. ``March 05, 2026``."""
    return value.strftime("%B %d, %Y")


def format_money(amount: int, currency: str = "USD") -> str:
    """
    Format a minor-unit amount for display.

    >>> format_money(125000)
    '$1,250'
    >>> format_money(99950, "EUR")
    '€999.50'
    """
    major, minor = divmod(amount, 100)
    text = f"{major:,}" if minor == 0 else f"{major:,}.{minor:02d}"
    symbol = CURRENCY_SYMBOLS.get(currency)
    return f"{symbol}{text}" if symbol else f"{text} {currency}"
