# src/time_utils.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

# Workout dates are calendar days in UTC
UTC = timezone.utc


def now_utc() -> datetime:
    """Current time in UTC."""
    return datetime.now(UTC)


def today_iso() -> str:
    """Today's date in UTC as YYYY-MM-DD."""
    return now_utc().date().isoformat()


def last_n_days(n: int, today: date | None = None) -> list[str]:
    """
    The last `n` calendar days as YYYY-MM-DD strings, oldest first,
    ending with `today` (UTC today by default).
    """
    if today is None:
        today = now_utc().date()
    return [(today - timedelta(days=i)).isoformat() for i in range(n - 1, -1, -1)]


def is_iso_date(value: str | None) -> bool:
    """True for a real YYYY-MM-DD calendar date."""
    if not value or len(value) != 10 or value[4] != "-" or value[7] != "-":
        return False
    try:
        date.fromisoformat(value)
        return True
    except ValueError:
        return False
