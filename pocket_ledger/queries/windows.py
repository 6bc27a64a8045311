"""Calendar-relative reporting windows, anchored to a given "today"."""

import calendar
import datetime as dt
from typing import Optional

from pocket_ledger.models.transaction import DateRange


def month_to_date(today: dt.date) -> DateRange:
    """First day of the current month through today."""
    return DateRange(start=today.replace(day=1), end=today)


def previous_month(today: dt.date) -> DateRange:
    """The whole previous calendar month, using its real length."""
    year, month = (today.year - 1, 12) if today.month == 1 else (today.year, today.month - 1)
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(start=dt.date(year, month, 1), end=dt.date(year, month, last_day))


def year_to_date(today: dt.date) -> DateRange:
    """January 1st of the current year through today."""
    return DateRange(start=dt.date(today.year, 1, 1), end=today)


def previous_year(today: dt.date) -> DateRange:
    """January 1st through December 31st of last year."""
    year = today.year - 1
    return DateRange(start=dt.date(year, 1, 1), end=dt.date(year, 12, 31))


def describe_range(
    date_from: Optional[dt.date],
    date_to: Optional[dt.date],
) -> str:
    """Format date range for description."""
    if date_from and date_to:
        if date_from == date_to:
            return f"on {date_from.strftime('%d %b %Y')}"
        elif (
            date_from.day == 1
            and date_from.month == date_to.month
            and date_from.year == date_to.year
            and date_to.day == calendar.monthrange(date_to.year, date_to.month)[1]
        ):
            return f"in {date_from.strftime('%B %Y')}"
        elif date_from.year == date_to.year:
            return f"from {date_from.strftime('%d %b')} to {date_to.strftime('%d %b %Y')}"
        else:
            return f"from {date_from.strftime('%d %b %Y')} to {date_to.strftime('%d %b %Y')}"
    elif date_from:
        return f"from {date_from.strftime('%d %b %Y')}"
    elif date_to:
        return f"until {date_to.strftime('%d %b %Y')}"
    return ""
