"""Formatting utilities for display values."""

from typing import Optional


def format_uptime(seconds: float) -> str:
    """
    Format a duration as "Xd Xh Xm Xs".

    Args:
        seconds: Elapsed seconds

    Returns:
        Formatted duration, e.g. "1d 2h 3m 4s"
    """
    total = int(max(seconds, 0))
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{days}d {hours}h {minutes}m {secs}s"


def round_rating(value: Optional[float]) -> float:
    """Round an average rating to one decimal place, treating None as 0."""
    if value is None:
        return 0.0
    return round(float(value), 1)
