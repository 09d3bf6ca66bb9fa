"""Date parsing for command-line input."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("this-month", "last-month", "this-quarter", "last-quarter", "this-year", "last-year")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a posting date.

    Accepts ISO and free-form dates ("2024-01-15", "Jan 15 2024") and the
    keywords "today", "yesterday" and "N days ago".

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)
    if text.endswith(" days ago"):
        count = text[: -len(" days ago")].strip()
        if count.isdigit():
            return today - timedelta(days=int(count))

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get the first and last day of a reporting period.

    Args:
        period: One of this-month, last-month, this-quarter, last-quarter,
            this-year, last-year
        today: Reference date (defaults to today)

    Returns:
        Tuple of (start_date, end_date); current periods end today

    Raises:
        ValueError: If the period is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()
    month_start = today.replace(day=1)
    quarter_start = month_start.replace(month=3 * ((today.month - 1) // 3) + 1)
    year_start = today.replace(month=1, day=1)

    if period == "this-month":
        return (month_start, today)
    if period == "last-month":
        return (month_start - relativedelta(months=1), month_start - timedelta(days=1))
    if period == "this-quarter":
        return (quarter_start, today)
    if period == "last-quarter":
        return (quarter_start - relativedelta(months=3), quarter_start - timedelta(days=1))
    if period == "this-year":
        return (year_start, today)
    if period == "last-year":
        return (year_start - relativedelta(years=1), year_start - timedelta(days=1))

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
