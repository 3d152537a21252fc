"""Value formatters for display."""

from decimal import Decimal


def format_currency(value: Decimal, symbol: str = "R$") -> str:
    """
    Format decimal as Brazilian currency.

    Args:
        value: Decimal value to format
        symbol: Currency symbol (default: R$)

    Returns:
        Formatted string like "R$ 1.234,56"
    """
    negative = value < 0
    value = abs(value)

    formatted = f"{value:,.2f}"

    # Brazilian format: . for thousands, , for decimals
    formatted = formatted.replace(",", "X").replace(".", ",").replace("X", ".")

    result = f"{symbol} {formatted}"
    return f"-{result}" if negative else result


def format_percentage(value: Decimal, decimals: int = 1) -> str:
    """
    Format decimal as percentage.

    Args:
        value: Decimal value (e.g., 15.5 for 15.5%)
        decimals: Number of decimal places

    Returns:
        Formatted string like "15,5%"
    """
    formatted = f"{value:.{decimals}f}".replace(".", ",")
    return f"{formatted}%"


def format_rate(value: Decimal) -> str:
    """
    Format a configured rate exactly as stored, without padding zeros.

    Args:
        value: Rate in percent (e.g., Decimal("1.65"))

    Returns:
        Formatted string like "1,65%" or "15%"
    """
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text.replace('.', ',')}%"
