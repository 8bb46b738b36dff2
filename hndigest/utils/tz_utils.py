import re
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from typing import Optional

from hndigest.errors import ConfigError

DEFAULT_TIMEZONE = "Asia/Tokyo"
DATE_FORMAT = "%Y-%m-%d"
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def get_zone(tz_name: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {tz_name!r}") from e


def today_str(tz_name: str = DEFAULT_TIMEZONE, now: Optional[datetime] = None) -> str:
    """Current date (YYYY-MM-DD) in the given timezone."""
    tz = get_zone(tz_name)
    now = now or datetime.now(tz)
    return now.astimezone(tz).strftime(DATE_FORMAT)


def validate_date(value: str) -> str:
    """Check that ``value`` is a YYYY-MM-DD date and return it unchanged."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        raise ConfigError(f"invalid date {value!r}, expected YYYY-MM-DD")
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError as e:
        raise ConfigError(f"invalid date {value!r}, expected YYYY-MM-DD") from e
    return value
