"""Deployment expiration helpers"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from ..api.exceptions import ExpirationError
from ..constants import EXPIRATION_PATTERN, MIN_EXPIRATION_MINUTES

_UNIT_MINUTES = {"m": 1, "h": 60, "d": 60 * 24}


def parse_time_string(value: str) -> int:
    """
    Parse a duration such as ``30m``, ``2h`` or ``1d``

    Args:
        value: Duration string

    Returns:
        Duration in minutes

    Raises:
        ExpirationError: Malformed or shorter than the minimum
    """
    match = EXPIRATION_PATTERN.match(value.strip()) if value else None
    if not match:
        raise ExpirationError(
            f'Invalid time format: "{value}". Use format like 30m, 2h, 1d'
        )

    minutes = int(match.group(1)) * _UNIT_MINUTES[match.group(2).lower()]
    if minutes < MIN_EXPIRATION_MINUTES:
        raise ExpirationError(
            f"Minimum expiration time is {MIN_EXPIRATION_MINUTES} minutes "
            f"({MIN_EXPIRATION_MINUTES}m)"
        )
    return minutes


def calculate_expires_at(value: str, now: Optional[datetime] = None) -> datetime:
    """Expiry instant for a duration string, in UTC"""
    now = now or datetime.now(timezone.utc)
    return now + timedelta(minutes=parse_time_string(value))


def _as_datetime(value: Union[str, datetime]) -> datetime:
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def is_expired(expires_at: Union[str, datetime, None],
               now: Optional[datetime] = None) -> bool:
    """Check whether an expiry instant has passed"""
    if not expires_at:
        return False
    now = now or datetime.now(timezone.utc)
    return _as_datetime(expires_at) <= now


def format_time_remaining(expires_at: Union[str, datetime],
                          now: Optional[datetime] = None) -> str:
    """
    Human readable time left before expiry

    Returns:
        ``"2d 3h remaining"``, ``"4h 10m remaining"``, ``"25m remaining"``
        or ``"expired"``
    """
    now = now or datetime.now(timezone.utc)
    remaining = _as_datetime(expires_at) - now
    total_minutes = int(remaining.total_seconds() // 60)

    if total_minutes <= 0:
        return "expired"

    days, rest = divmod(total_minutes, 60 * 24)
    hours, minutes = divmod(rest, 60)

    if days > 0:
        return f"{days}d {hours}h remaining"
    if hours > 0:
        return f"{hours}h {minutes}m remaining"
    return f"{minutes}m remaining"
