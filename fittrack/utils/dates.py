from datetime import date, datetime, timezone, tzinfo
from typing import Optional, Union


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def today_in(tz: Optional[tzinfo] = None) -> date:
    return datetime.now(tz or timezone.utc).date()


def to_local_date(value: Union[date, datetime], tz: Optional[tzinfo] = None) -> date:
    """Calendar day of a timestamp in ``tz`` (UTC when omitted).

    Naive datetimes are taken as UTC (SQLite hands back naive values even for
    timezone-aware columns). Plain dates are returned unchanged.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(tz or timezone.utc).date()
    return value
