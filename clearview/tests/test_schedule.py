import datetime

from clearview.constants import (
    SCHEDULE_INTERVAL,
    SCHEDULE_MANUAL,
    SCHEDULE_ON_STARTUP,
    UNIT_DAYS,
    UNIT_HOURS,
    UNIT_WEEKS,
)
from clearview.core.schedule import interval_timedelta, mark_indexed, parse_timestamp, should_rebuild

NOW = datetime.datetime(2024, 5, 10, 12, 0, tzinfo=datetime.timezone.utc)


def settings(schedule, value=24, unit=UNIT_HOURS, last=None):
    return {
        "schedule": schedule,
        "interval_value": value,
        "interval_unit": unit,
        "last_indexed_utc": last,
    }


def test_interval_timedelta():
    assert interval_timedelta(3, UNIT_HOURS) == datetime.timedelta(hours=3)
    assert interval_timedelta(2, UNIT_DAYS) == datetime.timedelta(days=2)
    assert interval_timedelta(1, UNIT_WEEKS) == datetime.timedelta(days=7)
    assert interval_timedelta("bad", "Fortnights") == datetime.timedelta(hours=24)


def test_missing_cache_always_rebuilds():
    assert should_rebuild(settings(SCHEDULE_MANUAL), cache_available=False)


def test_manual_and_on_startup():
    assert not should_rebuild(settings(SCHEDULE_MANUAL), cache_available=True)
    assert should_rebuild(settings(SCHEDULE_ON_STARTUP), cache_available=True)


def test_interval():
    last = (NOW - datetime.timedelta(hours=5)).isoformat()
    assert not should_rebuild(settings(SCHEDULE_INTERVAL, 6, UNIT_HOURS, last), True, now=NOW)
    assert should_rebuild(settings(SCHEDULE_INTERVAL, 4, UNIT_HOURS, last), True, now=NOW)
    assert should_rebuild(settings(SCHEDULE_INTERVAL, 1, UNIT_DAYS, None), True, now=NOW)


def test_mark_indexed_round_trips():
    s = mark_indexed(settings(SCHEDULE_INTERVAL), now=NOW)
    assert parse_timestamp(s["last_indexed_utc"]) == NOW
    assert parse_timestamp("not a date") is None
    # naive timestamps are read as UTC
    assert parse_timestamp("2024-05-10T12:00:00") == NOW
