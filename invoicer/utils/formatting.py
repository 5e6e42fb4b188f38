"""
Display formatting for invoice amounts and currencies.
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from invoicer.utils.expression import numeric_value

CURRENCY_OPTIONS = [
    {'value': 'USD', 'label': 'US Dollar', 'symbol': '$'},
    {'value': 'EUR', 'label': 'Euro', 'symbol': '€'},
    {'value': 'GBP', 'label': 'British Pound', 'symbol': '£'},
    {'value': 'GHS', 'label': 'Ghanaian Cedi', 'symbol': '₵'},
    {'value': 'NGN', 'label': 'Nigerian Naira', 'symbol': '₦'},
    {'value': 'KES', 'label': 'Kenyan Shilling', 'symbol': 'KSh'},
]

CURRENCY_SYMBOLS = {option['value']: option['symbol'] for option in CURRENCY_OPTIONS}

CENTS = Decimal("0.01")


def _grouped(amount, trim_zeros: bool) -> str:
    value = numeric_value(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    if value == 0:
        value = abs(value)
    text = f"{value:,.2f}"
    if trim_zeros and '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def format_currency(amount, currency: Optional[str] = None) -> str:
    """
    Format an amount with thousands separators and up to two decimals.
    e.g. 1234.5 -> "1,234.5", with currency "USD 1,234.5"
    """
    formatted = _grouped(amount, trim_zeros=True)
    return f"{currency} {formatted}" if currency else formatted


def format_currency_with_symbol(amount, currency: str) -> str:
    """Format an amount with exactly two decimals behind the currency symbol."""
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), currency)
    return f"{symbol} {_grouped(amount, trim_zeros=False)}"


def get_currency_options() -> List[Dict[str, str]]:
    """Currency choices for dropdowns"""
    return [dict(option) for option in CURRENCY_OPTIONS]


def parse_currency(currency_string: str) -> Decimal:
    """Strip symbols and separators from a currency string and read the amount."""
    cleaned = re.sub(r'[^\d.\-]', '', currency_string or '')
    return numeric_value(cleaned)
