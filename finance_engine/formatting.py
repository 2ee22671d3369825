"""Formatting utilities for currency amounts in alert text."""

from __future__ import annotations

from typing import Union

CURRENCY_SYMBOLS = {
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
    'JPY': '¥',
    'IDR': 'Rp',
    'CNY': '¥',
    'KRW': '₩',
    'SGD': 'S$',
    'MYR': 'RM',
    'THB': '฿',
    'VND': '₫',
}


def currency_symbol(currency: str) -> str:
    """Symbol for a three-letter currency code, or the code itself if unknown."""
    return CURRENCY_SYMBOLS.get((currency or '').upper(), currency)


def format_currency(amount: Union[float, int], currency: str = 'USD', include_sign: bool = True) -> str:
    """Format a currency amount with proper formatting.

    Rupiah is written without decimals and with dots as thousands
    separators; every other currency uses two decimals and commas.

    Args:
        amount: The amount to format
        currency: Three-letter currency code
        include_sign: Whether to include the currency symbol

    Returns:
        Formatted currency string

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(1500000, 'IDR')
        'Rp 1.500.000'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    if (currency or '').upper() == 'IDR':
        formatted = f"{round(amount):,}".replace(',', '.')
        return f"{currency_symbol('IDR')} {formatted}" if include_sign else formatted
    formatted = f"{amount:,.2f}"
    return f"{currency_symbol(currency)}{formatted}" if include_sign else formatted
