"""Civil calendar and timezone helpers used by the search engine."""

import calendar
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from crontide.exceptions import InvalidTimezoneError


def resolve_timezone(tz: str | tzinfo) -> tzinfo:
    """Resolve an IANA zone name (or pass through a tzinfo).

    Raises:
        InvalidTimezoneError: If the name is unknown
    """
    if isinstance(tz, tzinfo):
        return tz

    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidTimezoneError(tz) from e


def zone_name(tz: tzinfo) -> str:
    return getattr(tz, "key", None) or str(tz)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def weekday(year: int, month: int, day: int) -> int:
    """Weekday of a date, 0=Sunday .. 6=Saturday."""
    return date(year, month, day).isoweekday() % 7


def wall_clock(year: int, month: int, day: int, hour: int, minute: int, second: int) -> datetime:
    """Naive wall-clock datetime; ``day`` may run past month end into the next month."""
    start = datetime(year, month, 1, hour, minute, second)
    return start + timedelta(days=day - 1)


def localize(wall: datetime, tz: tzinfo, fold: int = 0) -> datetime | None:
    """Attach ``tz`` to a wall time, or None if the time falls in a DST gap."""
    aware = wall.replace(tzinfo=tz, fold=fold)
    round_trip = aware.astimezone(timezone.utc).astimezone(tz)
    if round_trip.replace(tzinfo=None) != wall:
        return None
    return aware


def to_local(moment: datetime, tz: tzinfo) -> datetime:
    """View a datetime in ``tz``; naive values are taken as wall time there."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


def to_epoch(moment: datetime) -> int:
    """Whole-second epoch timestamp of an aware datetime."""
    return int(moment.timestamp() // 1)


def from_epoch(timestamp: int | float, tz: tzinfo) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=tz)


def repeated_span(wall: datetime, tz: tzinfo) -> tuple[datetime, datetime] | None:
    """The wall-clock range [start, end) around ``wall`` that occurs twice.

    When clocks go back, wall times in this range happen once before the
    transition (fold 0) and again after it (fold 1). Returns None when
    ``wall`` is not repeated.
    """
    earlier = wall.replace(tzinfo=tz, fold=0)
    later = wall.replace(tzinfo=tz, fold=1)
    shift = earlier.utcoffset() - later.utcoffset()
    if shift <= timedelta(0):
        return None

    # First second on the later offset
    low, high = to_epoch(earlier), to_epoch(later)
    while low < high:
        mid = (low + high) // 2
        if from_epoch(mid, tz).utcoffset() == later.utcoffset():
            high = mid
        else:
            low = mid + 1

    start = from_epoch(low, tz).replace(tzinfo=None, fold=0)
    return start, start + shift
