"""Formatting utilities for currency, percentage and date display."""

from __future__ import annotations

from datetime import date
from typing import Union


def escape_dollar_for_markdown(amount: float) -> str:
    """Format a dollar amount and escape the dollar sign for markdown rendering.

    Streamlit markdown treats ``$`` as a LaTeX math delimiter, so two
    amounts in one line would otherwise render as italics.

    Example:
        >>> escape_dollar_for_markdown(1234.56)
        '\\$1,234.56'
    """
    return format_currency(amount).replace("$", "\\$")


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with two decimals.

    Negative amounts keep the minus sign in front of the dollar sign.

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(-5)
        '-$5.00'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    formatted = f"{abs(amount):,.2f}"
    prefix = "-" if amount < 0 else ""
    return f"{prefix}${formatted}" if include_sign else f"{prefix}{formatted}"


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"


def format_expense_date(value: str) -> str:
    """Render an ISO date the way the expense list shows it (``1/5/2024``).

    Unparseable values are returned unchanged.
    """
    try:
        parsed = date.fromisoformat(value)
    except (TypeError, ValueError):
        return value
    return f"{parsed.month}/{parsed.day}/{parsed.year}"
