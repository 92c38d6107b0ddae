"""Age evaluation against the retention threshold."""

from datetime import datetime


def age_seconds(modified_at: datetime, now: datetime) -> float:
    """Seconds elapsed between modification and now.

    Both values are naive local times, so the conversion to epoch uses the
    same local timezone rules for each.
    """
    return now.timestamp() - modified_at.timestamp()


def is_expired(modified_at: datetime, now: datetime, max_age_seconds: int) -> bool:
    """True if the entry is strictly older than the threshold."""
    return age_seconds(modified_at, now) > max_age_seconds
