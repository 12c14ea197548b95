"""Calendar day boundary detection."""

from datetime import date, datetime


def calendar_date(value: date | datetime) -> date:
    """Return the calendar date of a value in its own timezone."""
    if isinstance(value, datetime):
        return value.date()
    return value


def has_rolled_over(last_check_date: date | None, now: date | datetime) -> bool:
    """Return True when ``now`` falls on a different calendar date.

    A missing ``last_check_date`` means the tracker has never reconciled; that
    first run is not a rollover.
    """
    if last_check_date is None:
        return False
    return calendar_date(now) != calendar_date(last_check_date)


def days_between(last_check_date: date, now: date | datetime) -> int:
    """Return whole calendar days from ``last_check_date`` to ``now``."""
    return (calendar_date(now) - calendar_date(last_check_date)).days
