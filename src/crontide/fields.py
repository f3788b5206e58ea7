"""Normalized field constraints for a parsed cron expression.

Each of the seven cron fields parses into exactly one immutable variant:

    - Wildcard: ``*`` or ``?``, no constraint
    - Values: an explicit sorted, de-duplicated set of integers
    - LastDay: ``L`` / ``L-N`` (day-of-month only)
    - LastWeekday: ``LW`` (day-of-month only)
    - NearestWeekday: ``NW`` (day-of-month only)
    - NthWeekday: ``W#N`` (day-of-week only)
    - LastWeekdayOfMonth: ``WL`` (day-of-week only)

Weekdays use 0=Sunday .. 6=Saturday throughout.
"""

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class Wildcard:
    """Matches every value of the field."""

    def __str__(self) -> str:
        return "*"


@dataclass(frozen=True)
class Values:
    """Explicit set of allowed values, kept sorted and unique."""

    values: tuple[int, ...]

    def __post_init__(self):
        normalized = tuple(sorted(set(self.values)))
        if not normalized:
            raise ValueError("Values requires at least one value")
        object.__setattr__(self, "values", normalized)

    @classmethod
    def of(cls, values: Iterable[int]) -> "Values":
        return cls(tuple(values))

    @property
    def first(self) -> int:
        return self.values[0]

    @property
    def last(self) -> int:
        return self.values[-1]

    def contains(self, value: int) -> bool:
        return value in self.values

    def covers(self, min_val: int, max_val: int) -> bool:
        """Whether the set is the field's whole domain."""
        return self.values == tuple(range(min_val, max_val + 1))

    def __len__(self) -> int:
        return len(self.values)

    def __str__(self) -> str:
        return ",".join(str(v) for v in self.values)


@dataclass(frozen=True)
class LastDay:
    """Last day of the month, optionally ``offset`` days earlier."""

    offset: int = 0

    def __str__(self) -> str:
        return f"L-{self.offset}" if self.offset else "L"


@dataclass(frozen=True)
class LastWeekday:
    """Last Monday-Friday of the month."""

    def __str__(self) -> str:
        return "LW"


@dataclass(frozen=True)
class NearestWeekday:
    """Monday-Friday closest to ``day``, never leaving the month."""

    day: int

    def __str__(self) -> str:
        return f"{self.day}W"


@dataclass(frozen=True)
class NthWeekday:
    """The ``nth`` occurrence (1-5) of ``weekday`` in the month."""

    weekday: int
    nth: int

    def __str__(self) -> str:
        return f"{self.weekday}#{self.nth}"


@dataclass(frozen=True)
class LastWeekdayOfMonth:
    """The last occurrence of ``weekday`` in the month."""

    weekday: int

    def __str__(self) -> str:
        return f"{self.weekday}L"


Field = Wildcard | Values | LastDay | LastWeekday | NearestWeekday | NthWeekday | LastWeekdayOfMonth

DAY_OF_MONTH_MODIFIERS = (LastDay, LastWeekday, NearestWeekday)
DAY_OF_WEEK_MODIFIERS = (NthWeekday, LastWeekdayOfMonth)

WILDCARD = Wildcard()


def is_wildcard(field: Field) -> bool:
    return isinstance(field, Wildcard)


def is_modifier(field: Field) -> bool:
    """Whether the field is one of the computed-per-month day modifiers."""
    return isinstance(field, DAY_OF_MONTH_MODIFIERS + DAY_OF_WEEK_MODIFIERS)


@dataclass(frozen=True)
class CronFields:
    """The immutable parsed model of a cron expression.

    Attributes:
        seconds: Seconds constraint (Values or Wildcard)
        minutes: Minutes constraint (Values or Wildcard)
        hours: Hours constraint (Values or Wildcard)
        day_of_month: Day-of-month constraint, possibly a modifier
        month: Month constraint (Values or Wildcard)
        day_of_week: Day-of-week constraint, possibly a modifier
        year: Year constraint (Values or Wildcard)
    """

    seconds: Field
    minutes: Field
    hours: Field
    day_of_month: Field
    month: Field
    day_of_week: Field
    year: Field = WILDCARD

    def __str__(self) -> str:
        return " ".join(
            str(f) for f in (
                self.seconds,
                self.minutes,
                self.hours,
                self.day_of_month,
                self.month,
                self.day_of_week,
                self.year,
            )
        )
