from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def get_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {name}")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}")


def now_local(zone: ZoneInfo) -> datetime:
    """Current wall-clock time in ``zone``, returned naive.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(zone).replace(tzinfo=None)


def to_local(value: datetime, zone: ZoneInfo) -> datetime:
    """Convert to naive wall-clock time in ``zone``.

    Naive input is taken to already be local time.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(zone).replace(tzinfo=None)


def local_day(value: Union[date, datetime, str, None], zone: ZoneInfo) -> date:
    """Truncate anything date-like to a calendar day in ``zone``.

    This is the only place attendance dates are reduced to a day, so reads
    and writes always agree on what "the same day" means.
    """
    if value is None or value == "":
        return now_local(zone).date()
    if isinstance(value, datetime):
        return to_local(value, zone).date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) == 10:
        return parse_iso_date(text)
    return to_local(parse_iso_datetime(text), zone).date()


def parse_iso_datetime(value: str) -> datetime:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid datetime: {value!r}")


def optional_local_time(value: Optional[str], zone: ZoneInfo) -> Optional[datetime]:
    if not value:
        return None
    return to_local(parse_iso_datetime(value), zone)


def week_bounds(day: date) -> tuple[date, date]:
    """Monday..Sunday week containing ``day``."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def isoformat_or_none(value: Union[date, datetime, None]) -> Optional[str]:
    return value.isoformat() if value is not None else None
