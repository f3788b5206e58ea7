"""Cross-field checks run on a parsed expression before it is used."""

from crontide.constants import MAX_DAYS_IN_MONTH, MONTH_NAMES, YEAR, YEAR_MAX, YEAR_MIN
from crontide.exceptions import DayFieldConflictError, ImpossibleDateError, InvalidRangeError
from crontide.fields import (
    CronFields,
    LastWeekdayOfMonth,
    NearestWeekday,
    Values,
)


def validate(fields: CronFields) -> None:
    """Enforce invariants spanning more than one field.

    Args:
        fields: Parsed model to check

    Raises:
        DayFieldConflictError: If both day fields constrain without a modifier
        ImpossibleDateError: If a day-of-month never occurs in a listed month
        InvalidRangeError: If a year lies outside 1970-2099
    """
    _check_day_exclusivity(fields)
    _check_days_fit_months(fields)
    _check_years(fields)


def _check_day_exclusivity(fields: CronFields) -> None:
    dom, dow = fields.day_of_month, fields.day_of_week

    if isinstance(dom, Values) and isinstance(dow, Values):
        raise DayFieldConflictError()

    if isinstance(dow, LastWeekdayOfMonth) and isinstance(dom, Values):
        raise DayFieldConflictError(
            "last weekday-of-month requires day-of-month to be a wildcard or L"
        )


def _check_days_fit_months(fields: CronFields) -> None:
    if not isinstance(fields.month, Values):
        return

    dom = fields.day_of_month
    if isinstance(dom, Values):
        days = dom.values
    elif isinstance(dom, NearestWeekday):
        days = (dom.day,)
    else:
        return

    for month in fields.month.values:
        for day in days:
            if day > MAX_DAYS_IN_MONTH[month]:
                raise ImpossibleDateError(day, month, MONTH_NAMES[month - 1])


def _check_years(fields: CronFields) -> None:
    if not isinstance(fields.year, Values):
        return

    if fields.year.first < YEAR_MIN or fields.year.last > YEAR_MAX:
        raise InvalidRangeError(YEAR, str(fields.year), YEAR_MIN, YEAR_MAX)

