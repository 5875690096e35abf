from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Tuple
from zoneinfo import ZoneInfo

from fittrack.core.config import settings
from fittrack.utils.dates import today_in


def local_tz() -> tzinfo:
    """Timezone that decides where one calendar day ends and the next begins."""
    return ZoneInfo(settings.timezone)


def local_today() -> date:
    return today_in(local_tz())


def day_bounds(start: date, end: date) -> Tuple[datetime, datetime]:
    """Half-open UTC range covering the local days ``start`` through ``end``."""
    tz = local_tz()
    return (
        datetime.combine(start, time.min, tzinfo=tz).astimezone(timezone.utc),
        datetime.combine(end + timedelta(days=1), time.min, tzinfo=tz).astimezone(timezone.utc),
    )
