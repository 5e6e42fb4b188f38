"""
Centralized validation utilities for invoice amounts and exchange rates.
These checks run before values reach the calculator, which itself never rejects input.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Tuple

DEFAULT_MAX_EXCHANGE_RATE = Decimal("1000000")


def _to_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def validate_exchange_rate(
    rate: Any,
    max_rate: Decimal = DEFAULT_MAX_EXCHANGE_RATE
) -> Tuple[bool, List[str]]:
    """
    Validate an exchange rate value.

    Args:
        rate: Rate to validate
        max_rate: Largest plausible rate

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    number = _to_decimal(rate)
    if number is None:
        return False, ['Exchange rate must be a valid number']
    if number <= 0:
        return False, ['Exchange rate must be greater than 0']
    if number > max_rate:
        return False, ['Exchange rate seems too high']
    return True, []


def validate_percentage(value: Any, field_name: str) -> Tuple[bool, List[str]]:
    """
    Validate a 0-100 percentage such as a discount or VAT rate.

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    number = _to_decimal(value)
    if number is None:
        return False, [f'{field_name} must be a valid number']
    if number < 0 or number > 100:
        return False, [f'{field_name} must be between 0 and 100']
    return True, []


def validate_non_negative(value: Any, field_name: str) -> Tuple[bool, List[str]]:
    """
    Validate a quantity, rate or amount that cannot be negative.

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    number = _to_decimal(value)
    if number is None:
        return False, [f'{field_name} must be a valid number']
    if number < 0:
        return False, [f'{field_name} cannot be negative']
    return True, []
