"""Fire-time search.

Walks the calendar from a reference instant to the nearest wall-clock time
that satisfies every field. A cursor holds (year, month, day, hour, minute,
second); each unit seeks the next (or previous) allowed value at or past the
cursor, and a unit with no such value carries into the next larger unit,
resetting everything below it. The forward and backward searches are the
same procedure with the comparison and the reset values mirrored.

Days are special: the allowed days of a month are recomputed for every
(year, month) visited, since modifiers such as ``L``, ``LW``, ``15W``,
``FRI#3`` and ``5L`` resolve differently per month and leap year.

Wall-clock time is not monotonic in instants: when clocks go back, a range
of wall times happens twice. A reference inside that range splits the walk
into passes so fire times still come out in epoch order.
"""

import logging
from bisect import bisect_left, bisect_right
from datetime import datetime, timedelta, tzinfo
from enum import Enum
from typing import Any, Sequence

from crontide.civil import (
    days_in_month,
    localize,
    repeated_span,
    to_epoch,
    to_local,
    wall_clock,
    weekday,
)
from crontide.config import DEFAULT_CONFIG, SearchConfig
from crontide.constants import DOMAINS, HOUR, MINUTE, MONTH, SECOND, YEAR_MAX, YEAR_MIN
from crontide.exceptions import SearchExhaustedError
from crontide.fields import (
    CronFields,
    Field,
    LastDay,
    LastWeekday,
    LastWeekdayOfMonth,
    NearestWeekday,
    NthWeekday,
    Values,
    Wildcard,
)

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Which way the search walks from the reference instant."""
    FORWARD = "next"
    BACKWARD = "previous"

    @property
    def step(self) -> int:
        return 1 if self is Direction.FORWARD else -1


# Cursor slots
_YEAR, _MONTH, _DAY, _HOUR, _MINUTE, _SECOND = range(6)
_UNIT_NAMES = {_DAY: "day", _HOUR: "hour", _MINUTE: "minute", _SECOND: "second"}

# What the units below a moved unit restart from. Going backward the day
# restarts past any month's end (32) so the seek lands on the last valid day,
# including a day spilled past month end by an nth-weekday.
_RESET = {
    Direction.FORWARD: (None, 1, 1, 0, 0, 0),
    Direction.BACKWARD: (None, 12, 32, 23, 59, 59),
}

# Order in which the two occurrences of a repeated wall time are tried
_FOLDS = {
    Direction.FORWARD: (0, 1),
    Direction.BACKWARD: (1, 0),
}

_SATURDAY = 6
_SUNDAY = 0


def search(
    fields: CronFields,
    tz: tzinfo,
    reference: datetime,
    direction: Direction,
    config: SearchConfig = DEFAULT_CONFIG,
    expression: str | None = None,
) -> datetime:
    """Find the nearest fire time strictly after (or before) ``reference``.

    Args:
        fields: Parsed, validated model
        tz: Zone the schedule's wall-clock fields are read in
        reference: Starting instant; naive values are wall time in ``tz``
        direction: FORWARD for the next fire time, BACKWARD for the previous
        config: Search bounds and trace hook
        expression: Source text, used in error messages

    Returns:
        The fire time as an aware datetime in ``tz``

    Raises:
        SearchExhaustedError: If no fire time exists within the search bounds
    """
    expression = expression or str(fields)
    local = to_local(reference, tz)
    wall = local.replace(tzinfo=None, microsecond=0)

    walker = _Walker(fields, tz, to_epoch(local), direction, config, expression, local.year)
    passes = _passes(wall, local.fold, tz, direction)

    _emit(config, "start", expression=expression, direction=direction.value, cursor=_cursor(passes[0][0]))

    for start, folds, stop in passes:
        found = walker.walk(start, folds, stop)
        if found is not None:
            return found

    raise SearchExhaustedError(expression, direction.value, "no fire time within search bounds")


def _passes(
    wall: datetime,
    fold: int,
    tz: tzinfo,
    direction: Direction,
) -> list[tuple[datetime, tuple[int, ...], datetime | None]]:
    """Stretches of wall-clock time to walk, as (start, folds, stop), in instant order.

    Usually one open-ended stretch next to the reference. A reference in the
    first pass over a repeated range (forward) or the second (backward) needs
    three: the rest of its own pass, the other pass over the whole range,
    then everything beyond the range.
    """
    step = timedelta(seconds=direction.step)
    span = repeated_span(wall, tz)
    own_pass = 0 if direction is Direction.FORWARD else 1

    if span is None or fold != own_pass:
        return [(wall + step, _FOLDS[direction], None)]

    first, end = span
    if direction is Direction.FORWARD:
        return [
            (wall + step, (0,), end),
            (first, (1,), end),
            (end, _FOLDS[direction], None),
        ]
    return [
        (wall + step, (1,), first),
        (end + step, (0,), first),
        (first + step, _FOLDS[direction], None),
    ]


class _Walker:
    """Cursor walk over wall-clock time for one search."""

    def __init__(
        self,
        fields: CronFields,
        tz: tzinfo,
        ref_ts: int,
        direction: Direction,
        config: SearchConfig,
        expression: str,
        reference_year: int,
    ):
        self.fields = fields
        self.tz = tz
        self.ref_ts = ref_ts
        self.direction = direction
        self.config = config
        self.expression = expression

        self.years = _year_candidates(fields.year, reference_year, config.horizon_years)
        self.months = _unit_values(fields.month, MONTH)
        self.hours = _unit_values(fields.hours, HOUR)
        self.minutes = _unit_values(fields.minutes, MINUTE)
        self.seconds = _unit_values(fields.seconds, SECOND)

    def walk(self, start: datetime, folds: tuple[int, ...], stop: datetime | None = None) -> datetime | None:
        """Nearest fire time from ``start`` on, resolving wall times with ``folds``.

        With ``stop`` the walk is bounded: it returns None once it reaches
        ``stop`` going forward, or passes below it going backward.
        """
        direction = self.direction
        config = self.config
        cursor = _cursor(start)
        if direction is Direction.FORWARD:
            _rewind_into_spill(self.fields, cursor)

        empty_months = 0

        for iteration in range(config.max_iterations):
            if stop is not None and _month_past(cursor, stop, direction):
                return None

            year = _seek(self.years, cursor[_YEAR], direction)
            if year is None:
                if stop is not None:
                    return None
                raise SearchExhaustedError(self.expression, direction.value, "year range exhausted")
            if year != cursor[_YEAR]:
                _move(cursor, _YEAR, year, direction)

            month = _seek(self.months, cursor[_MONTH], direction)
            if month is None:
                _carry(cursor, _MONTH, direction)
                _emit(config, "carry", unit="month", cursor=tuple(cursor))
                continue
            if month != cursor[_MONTH]:
                _move(cursor, _MONTH, month, direction)

            days = effective_days(self.fields, cursor[_YEAR], cursor[_MONTH])
            if not days:
                empty_months += 1
                _emit(config, "empty_month", year=cursor[_YEAR], month=cursor[_MONTH], count=empty_months)
                # Capped for month lists only; otherwise the year bound ends the walk
                if isinstance(self.fields.month, Values) and empty_months >= config.max_empty_months:
                    raise SearchExhaustedError(
                        self.expression,
                        direction.value,
                        f"no valid day in {empty_months} consecutive months",
                    )
                _carry(cursor, _DAY, direction)
                continue
            empty_months = 0

            units = ((_DAY, days), (_HOUR, self.hours), (_MINUTE, self.minutes), (_SECOND, self.seconds))
            for level, values in units:
                found = _seek(values, cursor[level], direction)
                if found is None:
                    _carry(cursor, level, direction)
                    _emit(config, "carry", unit=_UNIT_NAMES[level], cursor=tuple(cursor))
                    break
                if found != cursor[level]:
                    _move(cursor, level, found, direction)
            else:
                if stop is not None and _wall_past(wall_clock(*cursor), stop, direction):
                    return None

                candidate = _resolve(self.fields, self.tz, cursor, self.ref_ts, direction, folds)
                _emit(config, "candidate", cursor=tuple(cursor), matched=candidate is not None)
                if candidate is not None:
                    logger.debug(
                        "Found %s fire time %s for %r after %d iterations",
                        direction.value, candidate.isoformat(), self.expression, iteration + 1,
                    )
                    return candidate

                cursor[_SECOND] += direction.step

        raise SearchExhaustedError(self.expression, direction.value, "no fire time within search bounds")


def effective_days(fields: CronFields, year: int, month: int) -> tuple[int, ...]:
    """Days of ``year``-``month`` on which the schedule may fire.

    Both day fields are resolved against the real month; a wildcard side
    imposes nothing and two constrained sides must both hold. An
    nth-weekday whose week slot starts inside the month but whose weekday
    falls past its end yields ``days_in_month + 1`` (the following month's
    first day).
    """
    length = days_in_month(year, month)
    by_month_day = _resolve_day_of_month(fields.day_of_month, year, month, length)
    by_weekday = _resolve_day_of_week(fields.day_of_week, year, month, length)

    if by_month_day is None and by_weekday is None:
        return tuple(range(1, length + 1))
    if by_month_day is None:
        return by_weekday
    if by_weekday is None:
        return by_month_day

    allowed = set(by_weekday)
    return tuple(d for d in by_month_day if d in allowed)


def date_matches(fields: CronFields, year: int, month: int, day: int) -> bool:
    """Whether the schedule fires on the given calendar date."""
    if _allows(fields.year, year) and _allows(fields.month, month):
        if day in effective_days(fields, year, month):
            return True

    if day == 1 and isinstance(fields.day_of_week, NthWeekday):
        prev_year, prev_month = _previous_month(year, month)
        spill = days_in_month(prev_year, prev_month) + 1
        return (
            _allows(fields.year, prev_year)
            and _allows(fields.month, prev_month)
            and spill in effective_days(fields, prev_year, prev_month)
        )

    return False


def time_matches(fields: CronFields, hour: int, minute: int, second: int) -> bool:
    """Whether the schedule fires at the given time of day."""
    return (
        _allows(fields.hours, hour)
        and _allows(fields.minutes, minute)
        and _allows(fields.seconds, second)
    )


def _resolve_day_of_month(field: Field, year: int, month: int, length: int) -> tuple[int, ...] | None:
    if isinstance(field, Wildcard):
        return None

    if isinstance(field, Values):
        # February 29th drops out here in common years
        return tuple(d for d in field.values if d <= length)

    if isinstance(field, LastDay):
        day = length - field.offset
        return (day,) if day >= 1 else ()

    if isinstance(field, LastWeekday):
        day = length
        while weekday(year, month, day) in (_SATURDAY, _SUNDAY):
            day -= 1
        return (day,)

    if isinstance(field, NearestWeekday):
        return _nearest_weekday(field.day, year, month, length)

    raise TypeError(f"Unsupported day-of-month constraint: {field!r}")


def _resolve_day_of_week(field: Field, year: int, month: int, length: int) -> tuple[int, ...] | None:
    if isinstance(field, Wildcard):
        return None

    if isinstance(field, Values):
        first = weekday(year, month, 1)
        return tuple(d for d in range(1, length + 1) if (first + d - 1) % 7 in field.values)

    if isinstance(field, NthWeekday):
        slot_start = 7 * (field.nth - 1) + 1
        if slot_start > length:
            return ()
        first_hit = 1 + (field.weekday - weekday(year, month, 1)) % 7
        day = first_hit + 7 * (field.nth - 1)
        return (min(day, length + 1),)

    if isinstance(field, LastWeekdayOfMonth):
        return (length - (weekday(year, month, length) - field.weekday) % 7,)

    raise TypeError(f"Unsupported day-of-week constraint: {field!r}")


def _nearest_weekday(target: int, year: int, month: int, length: int) -> tuple[int, ...]:
    if target > length:
        return ()

    dow = weekday(year, month, target)
    if dow == _SATURDAY:
        # Friday, unless that is in the previous month
        return (target - 1,) if target > 1 else (target + 2,)
    if dow == _SUNDAY:
        # Monday, unless that is in the next month
        return (target + 1,) if target < length else (target - 2,)
    return (target,)


def _resolve(
    fields: CronFields,
    tz: tzinfo,
    cursor: list[int],
    ref_ts: int,
    direction: Direction,
    folds: tuple[int, ...],
) -> datetime | None:
    """Turn the cursor into an instant, or None if it is not a real fire time.

    Wall times inside a DST gap do not exist and are skipped. A repeated
    wall time tries each of ``folds`` in turn.
    """
    wall = wall_clock(*cursor)

    for fold in folds:
        instant = localize(wall, tz, fold)
        if instant is None:
            return None

        ts = to_epoch(instant)
        beyond = ts > ref_ts if direction is Direction.FORWARD else ts < ref_ts
        if beyond and _recheck(fields, instant):
            return instant

    return None


def _recheck(fields: CronFields, instant: datetime) -> bool:
    return (
        date_matches(fields, instant.year, instant.month, instant.day)
        and time_matches(fields, instant.hour, instant.minute, instant.second)
    )


def _rewind_into_spill(fields: CronFields, cursor: list[int]) -> None:
    """Express a cursor on the 1st as the previous month's spilled day.

    An nth-weekday can spill onto the 1st from the month before; starting
    the walk there keeps that fire time reachable later the same day.
    """
    if cursor[_DAY] != 1 or not isinstance(fields.day_of_week, NthWeekday):
        return

    prev_year, prev_month = _previous_month(cursor[_YEAR], cursor[_MONTH])
    spill = days_in_month(prev_year, prev_month) + 1

    if (
        _allows(fields.year, prev_year)
        and _allows(fields.month, prev_month)
        and spill in effective_days(fields, prev_year, prev_month)
    ):
        cursor[_YEAR], cursor[_MONTH], cursor[_DAY] = prev_year, prev_month, spill


def _cursor(wall: datetime) -> list[int]:
    return [wall.year, wall.month, wall.day, wall.hour, wall.minute, wall.second]


def _wall_past(wall: datetime, stop: datetime, direction: Direction) -> bool:
    return wall >= stop if direction is Direction.FORWARD else wall < stop


def _month_past(cursor: list[int], stop: datetime, direction: Direction) -> bool:
    """Whether the cursor's month lies wholly beyond ``stop``.

    Going backward the cursor day may sit past month end (a reset or a
    spilled nth-weekday), so the month before ``stop`` is still walked.
    """
    if direction is Direction.FORWARD:
        return (cursor[_YEAR], cursor[_MONTH]) > (stop.year, stop.month)
    return (cursor[_YEAR], cursor[_MONTH]) < _previous_month(stop.year, stop.month)


def _seek(values: Sequence[int], start: int, direction: Direction) -> int | None:
    """First value >= start going forward, last value <= start going backward."""
    if direction is Direction.FORWARD:
        i = bisect_left(values, start)
        return values[i] if i < len(values) else None

    i = bisect_right(values, start)
    return values[i - 1] if i > 0 else None


def _move(cursor: list[int], level: int, value: int, direction: Direction) -> None:
    cursor[level] = value
    _reset_below(cursor, level, direction)


def _carry(cursor: list[int], level: int, direction: Direction) -> None:
    """Step the unit above ``level`` and restart ``level`` and everything below."""
    parent = level - 1
    cursor[parent] += direction.step
    _reset_below(cursor, parent, direction)

    if cursor[_MONTH] > 12:
        cursor[_YEAR] += 1
        cursor[_MONTH] = 1
    elif cursor[_MONTH] < 1:
        cursor[_YEAR] -= 1
        cursor[_MONTH] = 12


def _reset_below(cursor: list[int], level: int, direction: Direction) -> None:
    reset = _RESET[direction]
    for i in range(level + 1, len(cursor)):
        cursor[i] = reset[i]


def _previous_month(year: int, month: int) -> tuple[int, int]:
    return (year, month - 1) if month > 1 else (year - 1, 12)


def _allows(field: Field, value: int) -> bool:
    return not isinstance(field, Values) or field.contains(value)


def _unit_values(field: Field, unit: str) -> tuple[int, ...]:
    if isinstance(field, Values):
        return field.values
    min_val, max_val = DOMAINS[unit]
    return tuple(range(min_val, max_val + 1))


def _year_candidates(field: Field, reference_year: int, horizon: int) -> tuple[int, ...]:
    if isinstance(field, Values):
        return field.values
    low = max(YEAR_MIN, reference_year - horizon)
    high = min(YEAR_MAX, reference_year + horizon)
    return tuple(range(low, high + 1))


def _emit(config: SearchConfig, event: str, **details: Any) -> None:
    logger.debug("search %s: %s", event, details)
    if config.trace is not None:
        config.trace(event, details)

