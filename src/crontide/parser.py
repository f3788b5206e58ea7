"""Cron expression parser.

Supports 5, 6 and 7 field expressions:

    minute hour day-of-month month day-of-week
    second minute hour day-of-month month day-of-week
    second minute hour day-of-month month day-of-week year

Special characters:
    - * or ? (any value)
    - , (value list separator)
    - - (range of values)
    - / (step values)
    - L, L-N, LW, NW (day-of-month)
    - W#N, WL (day-of-week)

Month names (JAN-DEC) and weekday names (SUN-SAT) are accepted in their
fields. Weekdays are 0=Sunday .. 6=Saturday; 7 is also Sunday.

Examples:
    "*/5 * * * *" - Every 5 minutes
    "0 0 12 1,15 * ?" - Noon on the 1st and 15th
    "0 0 0 L * ?" - Midnight on the last day of each month
    "0 0 0 ? * FRI#3" - Midnight on the third Friday of each month
"""

import logging
import re

from crontide.constants import (
    ALIASES,
    DAY_OF_MONTH,
    DAY_OF_WEEK,
    DOMAINS,
    HOUR,
    MAX_NTH,
    MINUTE,
    MONTH,
    SECOND,
    YEAR,
)
from crontide.exceptions import (
    FieldCountError,
    InvalidNthError,
    InvalidOffsetError,
    InvalidRangeError,
    InvalidStepError,
    InvalidValueError,
    MalformedFieldError,
)
from crontide.fields import (
    WILDCARD,
    CronFields,
    Field,
    LastDay,
    LastWeekday,
    LastWeekdayOfMonth,
    NearestWeekday,
    NthWeekday,
    Values,
)
from crontide.validator import validate

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"^-?\d+$")

# An L-N offset this large leaves no day in any month
_MAX_LAST_DAY_OFFSET = 30


def parse_expression(expression: str) -> CronFields:
    """Parse and validate a cron expression.

    Args:
        expression: Cron expression string with 5 to 7 fields

    Returns:
        The immutable parsed model

    Raises:
        CronError: On the first structural, range or cross-field violation
    """
    parts = expression.split()

    if not 5 <= len(parts) <= 7:
        raise FieldCountError(expression.strip(), len(parts))

    offset = 1 if len(parts) >= 6 else 0
    seconds = parse_field(parts[0], SECOND) if offset else Values((0,))

    fields = CronFields(
        seconds=seconds,
        minutes=parse_field(parts[offset], MINUTE),
        hours=parse_field(parts[offset + 1], HOUR),
        day_of_month=parse_field(parts[offset + 2], DAY_OF_MONTH),
        month=parse_field(parts[offset + 3], MONTH),
        day_of_week=parse_field(parts[offset + 4], DAY_OF_WEEK),
        year=parse_field(parts[6], YEAR) if len(parts) == 7 else WILDCARD,
    )

    validate(fields)
    logger.debug("Parsed cron expression %r as %s", expression, fields)
    return fields


def parse_field(text: str, field: str) -> Field:
    """Parse one field's text into its normalized constraint.

    Args:
        text: Field text (e.g., "*/5", "1-10", "MON-FRI", "L-2", "FRI#3")
        field: Field name from crontide.constants

    Returns:
        The field's constraint variant

    Raises:
        CronError: If the text is malformed or out of range
    """
    token = text.upper()

    if token in ("*", "?"):
        return WILDCARD

    if field == DAY_OF_MONTH:
        special = _parse_day_of_month_special(token)
        if special is not None:
            return special

    if field == DAY_OF_WEEK:
        special = _parse_day_of_week_special(token)
        if special is not None:
            return special

    values: set[int] = set()

    for part in token.split(","):
        if not part:
            raise MalformedFieldError(field, text)
        values.update(_parse_part(part, field))

    if field == DAY_OF_WEEK:
        values = {v % 7 for v in values}

    return Values.of(values)


def _parse_part(part: str, field: str) -> range:
    """Expand a single list element into its values."""
    min_val, max_val = _domain(field)

    if "/" in part:
        # Step values: */5, 10-20/2 or 30/15
        range_part, _, step_text = part.partition("/")
        if not _INTEGER.match(step_text):
            raise MalformedFieldError(field, part)

        step = int(step_text)
        if step <= 0:
            raise InvalidStepError(field, part)

        if range_part == "*":
            start, end = _wildcard_bounds(field)
        elif "-" in range_part:
            start, end = _parse_range(range_part, field)
        else:
            start = _parse_number(range_part, field)
            end = max_val
            if not min_val <= start <= max_val:
                raise InvalidRangeError(field, part, min_val, max_val)

        return range(start, end + 1, step)

    if "-" in part:
        start, end = _parse_range(part, field)
        return range(start, end + 1)

    value = _parse_number(part, field)
    if not min_val <= value <= max_val:
        raise InvalidValueError(field, value, min_val, max_val)

    return range(value, value + 1)


def _parse_range(text: str, field: str) -> tuple[int, int]:
    min_val, max_val = _domain(field)
    start_text, _, end_text = text.partition("-")
    start = _parse_number(start_text, field)
    end = _parse_number(end_text, field)

    if start < min_val or end > max_val or start > end:
        raise InvalidRangeError(field, text, min_val, max_val)

    return start, end


def _parse_number(text: str, field: str) -> int:
    """Resolve a number or a month/weekday name."""
    if text.isdigit():
        return int(text)

    aliases = ALIASES.get(field, {})
    if text in aliases:
        return aliases[text]

    raise MalformedFieldError(field, text)


def _parse_weekday(text: str) -> int:
    value = _parse_number(text, DAY_OF_WEEK)
    min_val, max_val = DOMAINS[DAY_OF_WEEK]
    if not min_val <= value <= max_val:
        raise InvalidValueError(DAY_OF_WEEK, value, min_val, max_val)
    return value % 7


def _parse_day_of_month_special(token: str) -> Field | None:
    if token == "L":
        return LastDay()

    if token == "LW":
        return LastWeekday()

    if token.startswith("L-"):
        offset_text = token[2:]
        if not offset_text.isdigit() or int(offset_text) > _MAX_LAST_DAY_OFFSET:
            raise InvalidOffsetError(token)
        return LastDay(int(offset_text))

    if token.endswith("W") and len(token) > 1:
        day = _parse_number(token[:-1], DAY_OF_MONTH)
        min_val, max_val = DOMAINS[DAY_OF_MONTH]
        if not min_val <= day <= max_val:
            raise InvalidValueError(DAY_OF_MONTH, day, min_val, max_val)
        return NearestWeekday(day)

    return None


def _parse_day_of_week_special(token: str) -> Field | None:
    if "#" in token:
        weekday_text, _, nth_text = token.partition("#")
        weekday = _parse_weekday(weekday_text)

        if not nth_text.isdigit() or not 1 <= int(nth_text) <= MAX_NTH:
            raise InvalidNthError(token)

        return NthWeekday(weekday, int(nth_text))

    if token.endswith("L") and len(token) > 1:
        return LastWeekdayOfMonth(_parse_weekday(token[:-1]))

    return None


def _domain(field: str) -> tuple[int, int]:
    return DOMAINS[field]


def _wildcard_bounds(field: str) -> tuple[int, int]:
    """Bounds a */N step walks; day-of-week stops at Saturday."""
    min_val, max_val = _domain(field)
    if field == DAY_OF_WEEK:
        return min_val, 6
    return min_val, max_val
