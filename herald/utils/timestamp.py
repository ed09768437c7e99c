"""Reference-instant helpers for resolving relative dates."""

from datetime import date, datetime, time, timedelta


def now() -> datetime:
    """Current local time as a timezone-aware datetime."""
    return datetime.now().astimezone()


def parse_clock(value: str) -> time:
    """
    Parse an "HH:MM" clock string into a time.

    Raises:
        ValueError: If the string is not a valid 24-hour clock time
    """
    try:
        hour_text, minute_text = value.strip().split(":")
        return time(int(hour_text), int(minute_text))
    except (ValueError, AttributeError) as exc:
        raise ValueError(f"Invalid clock time {value!r} (expected HH:MM)") from exc


def at_time_of_day(reference: datetime, day: date, clock: time) -> datetime:
    """
    Combine a calendar day with a clock time, keeping the reference's tzinfo.

    Example:
        >>> ref = datetime(2026, 2, 22, 10, 0)
        >>> at_time_of_day(ref, date(2026, 2, 23), time(9, 0))
        datetime.datetime(2026, 2, 23, 9, 0)
    """
    return datetime.combine(day, clock, tzinfo=reference.tzinfo)


def next_weekday(start: date, weekday: int, strictly_after: bool = False) -> date:
    """
    Nearest date with the given weekday (Monday=0) on or after start.

    Args:
        start: Date to search from
        weekday: Target weekday number (Monday=0, Sunday=6)
        strictly_after: Skip start itself even when it already matches

    Returns:
        The resolved date, never earlier than start
    """
    days_ahead = (weekday - start.weekday()) % 7
    if days_ahead == 0 and strictly_after:
        days_ahead = 7
    return start + timedelta(days=days_ahead)
