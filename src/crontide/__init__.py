"""Crontide - cron expression parsing, fire-time search and descriptions.

Extended Quartz-style cron with seconds and years, evaluated in any IANA
timezone with correct handling of DST gaps and repeated hours.

Basic usage:
    from crontide import CronSchedule

    schedule = CronSchedule("0 0 12 1,15 * ?", "Europe/Berlin")

    schedule.next()           # epoch seconds of the next fire time
    schedule.previous()       # epoch seconds of the previous fire time
    schedule.translate()      # "at time 12:00 PM, on the 1st and 15th of the month"

One-off helpers:
    from crontide import next_fire_time, describe

    next_fire_time("0 0 0 L * ?", "UTC", 1759060800)
    describe("0 */15 * * * ?")    # "every 15 minutes"

Special tokens:
    L, L-3, LW, 15W     day-of-month: last day, offset, last weekday, nearest weekday
    FRI#3, 5L           day-of-week: third Friday, last Friday of the month
"""

__version__ = "0.1.0"

from crontide.schedule import CronSchedule, next_fire_time, previous_fire_time, describe
from crontide.config import SearchConfig
from crontide.fields import (
    CronFields,
    Wildcard,
    Values,
    LastDay,
    LastWeekday,
    NearestWeekday,
    NthWeekday,
    LastWeekdayOfMonth,
)
from crontide.parser import parse_expression
from crontide.translator import translate
from crontide.exceptions import (
    CronError,
    StructureError,
    RangeError,
    SemanticError,
    NotFoundError,
    FieldCountError,
    MalformedFieldError,
    InvalidTimezoneError,
    InvalidValueError,
    InvalidRangeError,
    InvalidStepError,
    DayFieldConflictError,
    ImpossibleDateError,
    InvalidNthError,
    InvalidOffsetError,
    SearchExhaustedError,
)

__all__ = [
    # Schedules
    "CronSchedule",
    "next_fire_time",
    "previous_fire_time",
    "describe",
    # Configuration
    "SearchConfig",
    # Parsed model
    "parse_expression",
    "translate",
    "CronFields",
    "Wildcard",
    "Values",
    "LastDay",
    "LastWeekday",
    "NearestWeekday",
    "NthWeekday",
    "LastWeekdayOfMonth",
    # Exceptions
    "CronError",
    "StructureError",
    "RangeError",
    "SemanticError",
    "NotFoundError",
    "FieldCountError",
    "MalformedFieldError",
    "InvalidTimezoneError",
    "InvalidValueError",
    "InvalidRangeError",
    "InvalidStepError",
    "DayFieldConflictError",
    "ImpossibleDateError",
    "InvalidNthError",
    "InvalidOffsetError",
    "SearchExhaustedError",
]
