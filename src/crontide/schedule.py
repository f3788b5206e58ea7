"""Cron schedules bound to a timezone.

A CronSchedule is parsed once and is immutable afterwards, so one instance
can be shared freely and queried any number of times:

    schedule = CronSchedule("0 30 8 * * ?", "America/New_York")
    schedule.next()                 # epoch seconds of the next 8:30 AM
    schedule.previous_datetime()    # the last one, as a zoned datetime
    schedule.translate()            # "at time 8:30 AM, every day"
"""

from datetime import datetime, tzinfo

from crontide.civil import from_epoch, resolve_timezone, to_epoch, to_local, zone_name
from crontide.config import DEFAULT_CONFIG, SearchConfig
from crontide.fields import CronFields
from crontide.parser import parse_expression
from crontide.search import Direction, date_matches, search, time_matches
from crontide.translator import translate

Instant = datetime | int | float


class CronSchedule:
    """A parsed cron expression evaluated in one timezone."""

    def __init__(
        self,
        expression: str,
        timezone: str | tzinfo = "UTC",
        config: SearchConfig | None = None,
    ):
        """Parse an expression and bind it to a zone.

        Args:
            expression: Cron expression with 5, 6 or 7 fields
            timezone: IANA zone name or tzinfo the fields are read in
            config: Search bounds (defaults to SearchConfig())

        Raises:
            CronError: If the expression or the zone is invalid
        """
        self._expression = expression.strip()
        self._tz = resolve_timezone(timezone)
        self._fields = parse_expression(self._expression)
        self._config = config or DEFAULT_CONFIG
        self._description = translate(self._fields)

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def timezone(self) -> tzinfo:
        return self._tz

    @property
    def fields(self) -> CronFields:
        return self._fields

    def next(self, from_: Instant | None = None) -> int:
        """Epoch seconds of the first fire time strictly after ``from_``.

        Args:
            from_: Reference datetime or epoch seconds (defaults to now)

        Raises:
            SearchExhaustedError: If no fire time exists within the search bounds
        """
        return to_epoch(self.next_datetime(from_))

    def previous(self, from_: Instant | None = None) -> int:
        """Epoch seconds of the last fire time strictly before ``from_``.

        Args:
            from_: Reference datetime or epoch seconds (defaults to now)

        Raises:
            SearchExhaustedError: If no fire time exists within the search bounds
        """
        return to_epoch(self.previous_datetime(from_))

    def next_datetime(self, from_: Instant | None = None) -> datetime:
        """Like next(), returning an aware datetime in the schedule's zone."""
        return self._search(from_, Direction.FORWARD)

    def previous_datetime(self, from_: Instant | None = None) -> datetime:
        """Like previous(), returning an aware datetime in the schedule's zone."""
        return self._search(from_, Direction.BACKWARD)

    def translate(self) -> str:
        """English description of the schedule."""
        return self._description

    def matches(self, dt: Instant) -> bool:
        """Check whether an instant is a fire time of this schedule.

        Args:
            dt: Datetime or epoch seconds; naive datetimes are wall time in
                the schedule's zone. Sub-second precision is ignored.

        Returns:
            True if the schedule fires at that second
        """
        local = self._localize(dt).replace(microsecond=0)
        return (
            date_matches(self._fields, local.year, local.month, local.day)
            and time_matches(self._fields, local.hour, local.minute, local.second)
        )

    def _search(self, from_: Instant | None, direction: Direction) -> datetime:
        reference = self._localize(from_) if from_ is not None else datetime.now(self._tz)
        return search(
            self._fields,
            self._tz,
            reference,
            direction,
            config=self._config,
            expression=self._expression,
        )

    def _localize(self, moment: Instant) -> datetime:
        if isinstance(moment, datetime):
            return to_local(moment, self._tz)
        if isinstance(moment, (int, float)) and not isinstance(moment, bool):
            return from_epoch(moment, self._tz)
        raise TypeError(f"Expected datetime or epoch seconds, got {type(moment).__name__}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CronSchedule):
            return NotImplemented
        return (self._expression, zone_name(self._tz)) == (other._expression, zone_name(other._tz))

    def __hash__(self) -> int:
        return hash((self._expression, zone_name(self._tz)))

    def __str__(self) -> str:
        """String representation."""
        return self._expression

    def __repr__(self) -> str:
        """Developer representation."""
        return f"CronSchedule('{self._expression}', '{zone_name(self._tz)}')"


def next_fire_time(
    expression: str,
    timezone: str | tzinfo = "UTC",
    from_: Instant | None = None,
) -> int:
    """Epoch seconds of the next fire time of a one-off expression."""
    return CronSchedule(expression, timezone).next(from_)


def previous_fire_time(
    expression: str,
    timezone: str | tzinfo = "UTC",
    from_: Instant | None = None,
) -> int:
    """Epoch seconds of the previous fire time of a one-off expression."""
    return CronSchedule(expression, timezone).previous(from_)


def describe(expression: str) -> str:
    """English description of an expression, e.g. "every 15 minutes"."""
    return translate(parse_expression(expression))
