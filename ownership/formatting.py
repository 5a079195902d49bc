"""Display formatting for ownership figures."""

from __future__ import annotations

PERCENT_DECIMALS: int = 10
CURRENCY_DECIMALS: int = 2

# Shown in place of both figures when the input is rejected.
PLACEHOLDER: str = "-"


def format_percentage(value: float) -> str:
    """Format a percentage with ten decimal places, e.g. ``0.5000000000%``."""
    return f"{value:.{PERCENT_DECIMALS}f}%"


def format_currency(value: float) -> str:
    """Format a dollar amount with two decimal places, e.g. ``$370000.00``."""
    return f"${value:.{CURRENCY_DECIMALS}f}"


def format_shares(value: int) -> str:
    """Format a share count with grouping separators."""
    return f"{value:,}"
