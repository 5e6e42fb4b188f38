"""
Date helpers for invoice schedules.
Handles ETA and due-date arithmetic and the date formats used on invoices.
"""

from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, datetime, str]

ETA_DESCRIPTIONS = {
    7: '1 week',
    14: '2 weeks',
    30: '1 month',
    60: '2 months',
    90: '3 months',
}


def parse_date(value: DateLike) -> date:
    """
    Normalize a date, datetime or ISO string to a date.

    Args:
        value: date object, datetime object or ISO 8601 string

    Returns:
        date object

    Raises:
        ValueError: If the string is not a valid ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if text.endswith('Z'):
        text = text[:-1]
    if 'T' in text:
        return datetime.fromisoformat(text).date()
    return date.fromisoformat(text)


def calculate_eta_date(start_date: DateLike, days_total: int) -> date:
    """Return the date days_total days after start_date."""
    return parse_date(start_date) + timedelta(days=int(days_total))


def format_date_range(start_date: DateLike, days_total: int) -> str:
    """
    Format the span from start to ETA, e.g. "Jan 05 – Apr 05".
    """
    start = parse_date(start_date)
    end = calculate_eta_date(start, days_total)
    return f"{start.strftime('%b %d')} – {end.strftime('%b %d')}"


def format_eta_description(days_total: int) -> str:
    """Describe a duration in days the way invoices show it."""
    return ETA_DESCRIPTIONS.get(days_total, f"{days_total} days")


def to_iso_date(value: DateLike) -> str:
    """Format as YYYY-MM-DD"""
    return parse_date(value).isoformat()
