"""
Time helpers shared by the generators
"""
import random
from datetime import date, datetime, timezone
from typing import Union

from dateutil import parser


def utc_now() -> datetime:
    """Current UTC time (timezone-aware)"""
    return datetime.now(timezone.utc)


def _parse(value: Union[str, date, datetime]) -> datetime:
    """Parse without normalizing the offset"""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return parser.isoparse(value.strip())
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid ISO-8601 timestamp: {value!r}") from e


def parse_timestamp(value: Union[str, date, datetime]) -> datetime:
    """
    Parse an ISO-8601 date or datetime into an aware UTC datetime

    Naive values are taken to be UTC. Raises ValueError for unparseable strings.
    """
    parsed = _parse(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_day(value: Union[str, date, datetime]) -> datetime:
    """
    Calendar day of an ISO-8601 value, as UTC midnight

    The day is taken in the value's own offset, so "2024-01-01T00:00+08:00" is 2024-01-01.
    """
    day = _parse(value).date()
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def make_id(prefix: str, moment: datetime, rng: random.Random) -> str:
    """Record id in the form "<prefix>-<epoch ms>-<0..999>" """
    return f"{prefix}-{int(moment.timestamp() * 1000)}-{rng.randrange(1000)}"
