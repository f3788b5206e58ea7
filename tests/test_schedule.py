"""Tests for CronSchedule and the module-level helpers."""

import time
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from crontide import (
    CronError,
    CronSchedule,
    FieldCountError,
    InvalidTimezoneError,
    SearchConfig,
    SearchExhaustedError,
    describe,
    next_fire_time,
    previous_fire_time,
)
from crontide.fields import LastDay


class TestFireTimes:
    """Test next and previous from 2025-09-28T12:00:00Z in UTC."""

    @pytest.mark.parametrize("expression,expected_next,expected_previous", [
        ("0 * * * *", 1759064400, 1759057200),
        ("0 0 0 * * ?", 1759104000, 1759017600),
        ("0 0 0 L * ?", 1759190400, 1756598400),
        ("0 0 0 ? * 5L", 1761868800, 1758844800),
        ("0 0 0 ? * 2#2", 1760400000, 1757376000),
        ("0 0 0 26W * ?", 1761523200, 1758844800),
        ("0 0 0 LW * ?", 1759190400, 1756425600),
        ("0 */15 * * * ?", 1759061700, 1759059900),
        ("0 0 0 ? JAN MON", 1767571200, 1737936000),
        ("*/5 * * * * ?", 1759060805, 1759060795),
        ("0 0 12 1,15 * ?", 1759320000, 1757937600),
        ("0 30 8 * * ?", 1759134600, 1759048200),
        ("0 0 14 ? * WED", 1759327200, 1758722400),
        ("0 0 0 29 FEB ?", 1835395200, 1709164800),
        ("59 * * * * ?", 1759060859, 1759060799),
        ("0 0,30/15 * * * ?", 1759062600, 1759059900),
        ("0 0 0 ? FEB MON#5", 1835481600, 1709251200),
    ])
    def test_next_and_previous(self, reference_ts, expression, expected_next, expected_previous):
        """Test fire times around the reference instant."""
        schedule = CronSchedule(expression)
        assert schedule.next(reference_ts) == expected_next
        assert schedule.previous(reference_ts) == expected_previous

    def test_next_after_previous_before(self, reference_ts):
        """Test results bracket the reference."""
        schedule = CronSchedule("0 0 */2 1,15 JAN,FEB ?")
        assert schedule.previous(reference_ts) < reference_ts < schedule.next(reference_ts)

    def test_stepped_hours_in_listed_months(self, reference_ts):
        """Test hour steps combined with listed days and months."""
        schedule = CronSchedule("0 0 */2 1,15 JAN,FEB ?")
        assert schedule.next_datetime(reference_ts) == datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert schedule.previous_datetime(reference_ts) == datetime(2025, 2, 15, 22, tzinfo=timezone.utc)

    def test_datetime_and_epoch_references_agree(self, reference, reference_ts):
        """Test from_ accepts datetimes and epoch seconds alike."""
        schedule = CronSchedule("0 30 8 * * ?")
        assert schedule.next(reference) == schedule.next(reference_ts)
        assert schedule.next(float(reference_ts)) == schedule.next(reference_ts)

    def test_datetime_results(self, reference):
        """Test the datetime variants return aware times in the zone."""
        schedule = CronSchedule("0 30 8 * * ?")
        result = schedule.next_datetime(reference)
        assert result == datetime(2025, 9, 29, 8, 30, tzinfo=timezone.utc)
        assert result.tzinfo is not None

    def test_defaults_to_now(self):
        """Test next and previous default to the current time."""
        schedule = CronSchedule("* * * * * ?")
        now = time.time()
        assert 0 < schedule.next() - now <= 2
        assert 0 < now - schedule.previous() <= 2

    def test_repeated_calls_identical(self, reference_ts):
        """Test the same query gives the same answer."""
        schedule = CronSchedule("0 0 0 L * ?")
        assert schedule.next(reference_ts) == schedule.next(reference_ts)
        assert schedule.previous(reference_ts) == schedule.previous(reference_ts)

    def test_unsupported_reference_type(self):
        """Test from_ must be a datetime or a number."""
        schedule = CronSchedule("* * * * *")
        with pytest.raises(TypeError):
            schedule.next("2025-09-28")

    def test_exhausted_search(self, reference_ts):
        """Test schedules without a future fire time raise."""
        schedule = CronSchedule("0 0 0 1 APR ? 2025")
        with pytest.raises(SearchExhaustedError, match="0 0 0 1 APR \\? 2025"):
            schedule.next(reference_ts)

    def test_config_applies(self, reference_ts):
        """Test search bounds come from the schedule's config."""
        schedule = CronSchedule("0 0 0 29 FEB ?", config=SearchConfig(horizon_years=1))
        with pytest.raises(SearchExhaustedError):
            schedule.next(reference_ts)


class TestTimezones:
    """Test schedules evaluated in other zones."""

    def test_new_york_offset_reflects_dst(self, reference):
        """Test 08:00 New York in late September is at -04:00."""
        schedule = CronSchedule("0 0 8 * * ?", "America/New_York")
        result = schedule.next_datetime(reference)

        assert result.isoformat() == "2025-09-29T08:00:00-04:00"
        assert schedule.next(reference) == 1759147200

    def test_new_york_previous(self, reference):
        """Test the reference itself (08:00 local) is excluded."""
        schedule = CronSchedule("0 0 8 * * ?", "America/New_York")
        assert schedule.previous_datetime(reference).isoformat() == "2025-09-27T08:00:00-04:00"

    def test_naive_reference_is_wall_time(self):
        """Test naive datetimes are read in the schedule's zone."""
        schedule = CronSchedule("0 0 8 * * ?", "America/New_York")
        result = schedule.next_datetime(datetime(2025, 9, 28, 12, 0))
        assert result.isoformat() == "2025-09-29T08:00:00-04:00"

        result = schedule.previous_datetime(datetime(2025, 9, 28, 12, 0))
        assert result.isoformat() == "2025-09-28T08:00:00-04:00"

    def test_fall_back_hour_fires_twice(self):
        """Test both New York 01:00-02:00 hours on 2025-11-02 fire in order."""
        schedule = CronSchedule("0 */15 * * * ?", "America/New_York")
        early, late = 1762062600, 1762063260  # 05:50Z and 06:01Z

        assert schedule.next(early) == 1762063200
        assert schedule.next(late) == 1762064100
        assert schedule.next(early) <= schedule.next(late)
        assert schedule.matches(1762063200) is True
        assert schedule.previous(1762066800) == 1762066500
        assert schedule.previous(1762063200) == 1762062300

    def test_tzinfo_accepted(self, new_york):
        """Test a tzinfo can be passed instead of a name."""
        assert CronSchedule("0 0 8 * * ?", new_york).timezone is new_york

    def test_unknown_timezone(self):
        """Test an unknown zone name is rejected at construction."""
        with pytest.raises(InvalidTimezoneError, match="Mars/Olympus_Mons"):
            CronSchedule("* * * * *", "Mars/Olympus_Mons")


class TestMonotonicity:
    """Test chained searches keep moving the same way."""

    CASES = [
        ("0 0 0 L * ?", "UTC", 1759060800),
        ("0 0 0 ? * 5L", "UTC", 1759060800),
        ("0 0 0 ? FEB MON#5", "UTC", 1759060800),
        ("0 0 0 29 FEB ?", "UTC", 1759060800),
        ("0 0 0 LW * MON", "UTC", 1759060800),
        ("0 */15 * * * ?", "America/New_York", 1762059600),
        ("0 */15 * * * ?", "America/New_York", 1762066800),
        ("0 30 1 * * ?", "America/New_York", 1761955200),
    ]

    @pytest.mark.parametrize("expression,zone,start", CASES)
    def test_chained_next_increases(self, expression, zone, start):
        """Test each next fire time is strictly after the one before."""
        schedule = CronSchedule(expression, zone)
        times = [start]
        for _ in range(6):
            times.append(schedule.next(times[-1]))

        assert all(a < b for a, b in zip(times, times[1:]))
        assert all(schedule.matches(t) for t in times[1:])

    @pytest.mark.parametrize("expression,zone,start", CASES)
    def test_chained_previous_decreases(self, expression, zone, start):
        """Test each previous fire time is strictly before the one after."""
        schedule = CronSchedule(expression, zone)
        times = [start]
        for _ in range(6):
            times.append(schedule.previous(times[-1]))

        assert all(a > b for a, b in zip(times, times[1:]))
        assert all(schedule.matches(t) for t in times[1:])


class TestMatches:
    """Test checking instants against a schedule."""

    def test_matches_specific_time(self):
        """Test matching specific time."""
        schedule = CronSchedule("30 9 15 6 *")
        assert schedule.matches(datetime(2024, 6, 15, 9, 30)) is True
        assert schedule.matches(datetime(2024, 6, 15, 9, 31)) is False
        assert schedule.matches(datetime(2024, 6, 16, 9, 30)) is False

    def test_matches_business_hours(self):
        """Test matching business hours (9-17 on weekdays)."""
        schedule = CronSchedule("0 9-17 ? * 1-5")

        # Monday at 10 AM
        assert schedule.matches(datetime(2024, 6, 17, 10, 0)) is True

        # Monday at 8 AM (before business hours)
        assert schedule.matches(datetime(2024, 6, 17, 8, 0)) is False

        # Saturday at 10 AM (weekend)
        assert schedule.matches(datetime(2024, 6, 22, 10, 0)) is False

    def test_matches_ignores_microseconds(self):
        """Test sub-second precision is dropped."""
        schedule = CronSchedule("0 0 12 * * ?")
        assert schedule.matches(datetime(2025, 9, 28, 12, 0, 0, 999999)) is True

    def test_matches_in_zone(self, reference):
        """Test instants are viewed in the schedule's zone."""
        schedule = CronSchedule("0 0 8 * * ?", "America/New_York")
        assert schedule.matches(reference) is True
        assert schedule.matches(1759060800) is True
        assert schedule.matches(reference + timedelta(hours=1)) is False

    def test_matches_spilled_nth_weekday(self):
        """Test the March 1st fire time of a spilled fifth Monday."""
        schedule = CronSchedule("0 0 0 ? FEB MON#5")
        assert schedule.matches(datetime(2028, 3, 1)) is True

    def test_search_results_match(self, reference_ts):
        """Test every fire time found is reported as matching."""
        for expression in ("0 0 0 LW * ?", "0 0 0 ? * 5L", "0 0 0 26W * ?", "*/5 * * * * ?"):
            schedule = CronSchedule(expression)
            assert schedule.matches(schedule.next(reference_ts))
            assert schedule.matches(schedule.previous(reference_ts))


class TestScheduleObject:
    """Test attributes, descriptions and representations."""

    def test_attributes(self):
        """Test read-only attributes."""
        schedule = CronSchedule("  0 0 0 L * ?  ", "Europe/Berlin")
        assert schedule.expression == "0 0 0 L * ?"
        assert schedule.timezone == ZoneInfo("Europe/Berlin")
        assert schedule.fields.day_of_month == LastDay()

    def test_attributes_read_only(self):
        """Test attributes cannot be reassigned."""
        schedule = CronSchedule("* * * * *")
        with pytest.raises(AttributeError):
            schedule.expression = "0 0 * * *"

    def test_translate(self):
        """Test the description is available on the schedule."""
        schedule = CronSchedule("0 0 12 1,15 * ?")
        assert schedule.translate() == "at time 12:00 PM, on the 1st and 15th of the month"
        assert schedule.translate() is schedule.translate()

    def test_str(self):
        """Test string representation."""
        expr = "0 9 * * 1-5"
        assert str(CronSchedule(expr)) == expr

    def test_repr(self):
        """Test developer representation."""
        expr = "0 9 * * 1-5"
        assert repr(CronSchedule(expr)) == f"CronSchedule('{expr}', 'UTC')"
        assert repr(CronSchedule(expr, "Asia/Tokyo")) == f"CronSchedule('{expr}', 'Asia/Tokyo')"

    def test_equality_and_hash(self):
        """Test schedules compare by expression and zone."""
        a = CronSchedule("0 0 * * *")
        b = CronSchedule("0 0 * * *", ZoneInfo("UTC"))
        c = CronSchedule("0 0 * * *", "Asia/Tokyo")

        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2
        assert a != "0 0 * * *"

    def test_invalid_expression(self):
        """Test construction fails with a cron error."""
        with pytest.raises(FieldCountError):
            CronSchedule("* * *")

        with pytest.raises(CronError):
            CronSchedule("0 0 0 30 FEB ?")


class TestHelpers:
    """Test one-off module-level helpers."""

    def test_next_fire_time(self, reference_ts):
        """Test the next helper."""
        assert next_fire_time("0 0 0 L * ?", "UTC", reference_ts) == 1759190400

    def test_previous_fire_time(self, reference_ts):
        """Test the previous helper."""
        assert previous_fire_time("0 0 0 L * ?", "UTC", reference_ts) == 1756598400

    def test_helpers_default_to_utc(self, reference_ts):
        """Test the zone defaults to UTC."""
        assert next_fire_time("0 0 0 * * ?", from_=reference_ts) == 1759104000

    def test_describe(self):
        """Test describe() without building a schedule."""
        assert describe("0 */15 * * * ?") == "every 15 minutes"
        assert describe("0 0 0 29 FEB ?") == "at midnight, on the 29th of February"
