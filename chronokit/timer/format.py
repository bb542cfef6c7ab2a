"""Human-readable duration formatting."""

from __future__ import annotations

from datetime import timedelta

SECONDS_PER_DAY = 24 * 60 * 60


def to_seconds(d: float | timedelta) -> float:
    """Normalise a duration given as seconds or ``timedelta``."""
    if isinstance(d, timedelta):
        return d.total_seconds()
    return float(d)


def format_duration(d: float | timedelta) -> str:
    """Render *d* as ``"HH:MM:SS"``, or ``"Dd HH:MM:SS"`` past a day.

    >>> format_duration(90061)
    '1d 01:01:01'
    >>> format_duration(59.9)
    '00:00:59'
    """
    total = to_seconds(d)
    sign = "-" if total < 0 else ""
    whole = int(abs(total))  # truncate fractional seconds

    days, rest = divmod(whole, SECONDS_PER_DAY)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    if days > 0:
        return f"{sign}{days}d {hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
