"""English descriptions of parsed cron expressions.

The description is built only from the parsed model, never from a search,
as a comma-joined list of clauses in a fixed order: time of day, day,
month, year. For example:

    "0 0 12 1,15 * ?"   -> "at time 12:00 PM, on the 1st and 15th of the month"
    "0 */15 * * * ?"    -> "every 15 minutes"
    "0 0 0 29 FEB ?"    -> "at midnight, on the 29th of February"
"""

from crontide.constants import (
    DAY_OF_MONTH,
    DOMAINS,
    HOUR,
    MINUTE,
    MONTH,
    MONTH_NAMES,
    ORDINAL_WORDS,
    SECOND,
    WEEKDAY_NAMES,
)
from crontide.fields import (
    CronFields,
    Field,
    LastDay,
    LastWeekday,
    LastWeekdayOfMonth,
    NearestWeekday,
    NthWeekday,
    Values,
)

_OF_THE_MONTH = "of the month"


def translate(fields: CronFields) -> str:
    """Describe when an expression fires.

    Args:
        fields: Parsed model to describe

    Returns:
        Human-readable description, e.g. "at time 8:30 AM, every day"
    """
    seconds = _constrained(fields.seconds, SECOND)
    minutes = _constrained(fields.minutes, MINUTE)
    hours = _constrained(fields.hours, HOUR)
    months = _constrained(fields.month, MONTH)

    clauses = _time_clauses(seconds, minutes, hours)

    day_clauses = _day_clauses(fields)
    if (
        months is not None
        and len(months) == 1
        and isinstance(fields.day_of_month, Values)
        and len(day_clauses) == 1
        and day_clauses[0].endswith(_OF_THE_MONTH)
    ):
        # "on the 29th of the month" + February -> "on the 29th of February"
        month_name = MONTH_NAMES[months[0] - 1]
        day_clauses[-1] = day_clauses[-1][: -len(_OF_THE_MONTH)] + f"of {month_name}"
        months = None
    elif not day_clauses and months is None and hours is not None and len(hours) == 1:
        day_clauses = ["every day"]

    clauses.extend(day_clauses)

    if months is not None:
        clauses.append(_month_clause(months))

    if isinstance(fields.year, Values) and len(fields.year) == 1:
        clauses.append(f"in year {fields.year.first}")

    return ", ".join(clauses) or "every second"


def _time_clauses(
    seconds: tuple[int, ...] | None,
    minutes: tuple[int, ...] | None,
    hours: tuple[int, ...] | None,
) -> list[str]:
    if seconds == (0,) and minutes == (0,) and hours == (0,):
        return ["at midnight"]

    if all(unit is not None and len(unit) == 1 for unit in (seconds, minutes, hours)):
        return [f"at time {_clock(hours[0], minutes[0], seconds[0])}"]

    clauses = []

    if seconds is None:
        clauses.append("every second")
    elif seconds != (0,):
        clauses.append(_unit_clause(seconds, SECOND, "second", minutes is None))

    if minutes is None:
        if seconds == (0,):
            clauses.append("every minute")
    elif not (minutes == (0,) and seconds == (0,)):
        clauses.append(_unit_clause(minutes, MINUTE, "minute", hours is None))

    if hours is None:
        if minutes == (0,) and seconds == (0,):
            clauses.append("every hour")
    else:
        clauses.append(_unit_clause(hours, HOUR, "hour", False))

    return clauses


def _unit_clause(values: tuple[int, ...], field: str, name: str, larger_is_free: bool) -> str:
    """Phrase one time unit's values, e.g. "every 5 minutes" or "at hours 9 through 17"."""
    if len(values) == 1:
        clause = f"at {name} {values[0]}"
        if larger_is_free and field != HOUR:
            larger = "minute" if field == SECOND else "hour"
            clause += f" of every {larger}"
        return clause

    step = _common_step(values)
    if step == 1 and len(values) >= 3:
        return f"at {name}s {values[0]} through {values[-1]}"
    if step is not None and step > 1:
        min_val, max_val = DOMAINS[field]
        if values[0] == min_val and values[-1] + step > max_val:
            return f"every {step} {name}s"
        if len(values) >= 3:
            return f"every {step} {name}s from {values[0]} to {values[-1]}"

    return f"at {name}s {', '.join(str(v) for v in values)}"


def _day_clauses(fields: CronFields) -> list[str]:
    clauses = []

    dom = fields.day_of_month
    if isinstance(dom, LastDay):
        if dom.offset == 0:
            clauses.append("on the last day of the month")
        else:
            unit = "day" if dom.offset == 1 else "days"
            clauses.append(f"on {dom.offset} {unit} before the last day of the month")
    elif isinstance(dom, LastWeekday):
        clauses.append("on the last weekday of the month")
    elif isinstance(dom, NearestWeekday):
        clauses.append(f"on the nearest weekday to the {_ordinal(dom.day)} of the month")
    else:
        days = _constrained(dom, DAY_OF_MONTH)
        if days is not None:
            clauses.append(_month_days_clause(days))

    dow = fields.day_of_week
    if isinstance(dow, NthWeekday):
        clauses.append(f"on the {ORDINAL_WORDS[dow.nth - 1]} {WEEKDAY_NAMES[dow.weekday]} of the month")
    elif isinstance(dow, LastWeekdayOfMonth):
        clauses.append(f"on the last {WEEKDAY_NAMES[dow.weekday]} of the month")
    elif isinstance(dow, Values) and len(dow) < 7:
        names = [WEEKDAY_NAMES[d] for d in dow.values]
        if len(dow) >= 3 and _common_step(dow.values) == 1:
            clauses.append(f"on days {names[0]} through {names[-1]}")
        else:
            clauses.append(f"on days {', '.join(names)}")

    return clauses


def _month_days_clause(days: tuple[int, ...]) -> str:
    step = _common_step(days)
    if len(days) >= 3 and step is not None and step > 1:
        return f"on every {step} days from the {_ordinal(days[0])} to the {_ordinal(days[-1])}"
    if len(days) >= 3 and step == 1:
        return f"on the {_ordinal(days[0])} through the {_ordinal(days[-1])} of the month"
    return f"on the {_join(_ordinal(d) for d in days)} of the month"


def _month_clause(months: tuple[int, ...]) -> str:
    names = [MONTH_NAMES[m - 1] for m in months]
    if len(months) == 1:
        return f"in {names[0]}"

    step = _common_step(months)
    if len(months) >= 3 and step == 1:
        return f"in months {names[0]} through {names[-1]}"
    if step is not None and step > 1:
        if months[0] == 1 and months[-1] + step > 12:
            return f"in every {step} months"
        if len(months) >= 3:
            return f"in every {step} months from {names[0]} to {names[-1]}"

    return f"in months {_join(names)}"


def _constrained(field: Field, name: str) -> tuple[int, ...] | None:
    """Values of a field, or None when it allows its whole domain."""
    if not isinstance(field, Values):
        return None

    min_val, max_val = DOMAINS[name]
    if field.covers(min_val, max_val):
        return None
    return field.values


def _common_step(values: tuple[int, ...]) -> int | None:
    """The constant difference between consecutive values, if there is one."""
    if len(values) < 2:
        return None

    step = values[1] - values[0]
    for a, b in zip(values, values[1:]):
        if b - a != step:
            return None
    return step


def _clock(hour: int, minute: int, second: int) -> str:
    period = "AM" if hour < 12 else "PM"
    display_hour = hour % 12 or 12
    if second:
        return f"{display_hour}:{minute:02d}:{second:02d} {period}"
    return f"{display_hour}:{minute:02d} {period}"


def _ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _join(items) -> str:
    """Join as "a", "a and b", "a, b and c"."""
    items = list(items)
    if len(items) <= 1:
        return "".join(items)
    return f"{', '.join(items[:-1])} and {items[-1]}"
