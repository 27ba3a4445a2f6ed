# tests/test_world_time.py

import dataclasses
import random

import pytest

import rpgcal
from rpgcal.core.types import ResolvedDate, TimeOfDay
from rpgcal.engines.calendar import CalendarEngine
from rpgcal.engines.definition import EpochBased
from rpgcal.engines.specs import ALL_SPECS, GOLARION

# 2024-01-01T00:00:00Z
NEW_YEAR_2024_TS = 1704067200
# Day number of 2024-01-01 counted from 1 January of year 0.
DAYS_TO_2024 = 739251


@pytest.mark.parametrize("name", sorted(ALL_SPECS))
def test_world_time_roundtrip(name):
    random.seed(42)
    eng = rpgcal.get_engine(name)
    for _ in range(2000):
        t0 = random.randint(-10**11, 10**11)
        d = eng.world_time_to_date(t0)
        assert eng.date_to_world_time(d) == t0


@pytest.mark.parametrize("name", sorted(ALL_SPECS))
def test_world_time_roundtrip_with_creation_timestamp(name):
    random.seed(7)
    eng = rpgcal.get_engine(name)
    for _ in range(500):
        t0 = random.randint(-10**10, 10**10)
        d = eng.world_time_to_date(t0, NEW_YEAR_2024_TS)
        assert eng.date_to_world_time(d, NEW_YEAR_2024_TS) == t0


@pytest.mark.parametrize("name", sorted(ALL_SPECS))
def test_day_boundaries_roundtrip(name):
    """Seconds either side of midnight, around zero and far in the past."""
    eng = rpgcal.get_engine(name)
    spd = eng.info()["seconds_per_day"]
    for day in (-10**6, -366, -1, 0, 1, 365, 10**6):
        for t0 in (day * spd - 1, day * spd, day * spd + 1):
            assert eng.date_to_world_time(eng.world_time_to_date(t0)) == t0


def test_epoch_based_zero_is_first_day_of_epoch():
    eng = CalendarEngine(dataclasses.replace(GOLARION, world_time=EpochBased()))

    d = eng.world_time_to_date(0)
    assert (d.year, d.month, d.day) == (2700, 1, 1)
    assert d.time == TimeOfDay(0, 0, 0)

    # 2700 is a leap year under the every-4th rule: 366 days later is 2701.
    d = eng.world_time_to_date(366 * 86400)
    assert (d.year, d.month, d.day) == (2701, 1, 1)


def test_year_offset_zero_is_current_year():
    eng = rpgcal.get_engine("golarion")
    d = eng.world_time_to_date(0)
    assert (d.year, d.month, d.day) == (4725, 1, 1)

    d = eng.world_time_to_date(-1)
    assert (d.year, d.month, d.day) == (4724, 12, 31)
    assert d.time == TimeOfDay(23, 59, 59)


def test_negative_seconds_floor_into_previous_day():
    eng = rpgcal.get_engine("gregorian")
    d = eng.world_time_to_date(-1)
    assert (d.year, d.month, d.day) == (-1, 12, 31)
    assert d.time == TimeOfDay(23, 59, 59)


def test_fractional_world_time_is_floored():
    eng = rpgcal.get_engine("gregorian")
    assert eng.world_time_to_date(86400.7) == eng.world_time_to_date(86400)
    assert eng.world_time_to_date(-0.5) == eng.world_time_to_date(-1)


def test_gregorian_known_dates():
    eng = rpgcal.get_engine("gregorian")

    d = eng.world_time_to_date(0)
    assert (d.year, d.month, d.day, d.weekday) == (0, 1, 1, 6)
    assert eng.weekday_name(d.weekday) == "Saturday"

    d = eng.world_time_to_date(DAYS_TO_2024 * 86400 + 3600 * 13 + 60 * 5 + 9)
    assert (d.year, d.month, d.day) == (2024, 1, 1)
    assert d.time == TimeOfDay(13, 5, 9)
    assert eng.weekday_name(d.weekday) == "Monday"

    d = eng.world_time_to_date(730485 * 86400)
    assert (d.year, d.month, d.day) == (2000, 1, 1)
    assert eng.weekday_name(d.weekday) == "Saturday"


def test_date_to_world_time_known_value():
    date = rpgcal.make_date(2024, 1, 1)
    assert rpgcal.date_to_world_time(date) == DAYS_TO_2024 * 86400


def test_creation_timestamp_anchors_zero():
    eng = rpgcal.get_engine("gregorian")

    d = eng.world_time_to_date(0, NEW_YEAR_2024_TS)
    assert (d.year, d.month, d.day) == (2024, 1, 1)
    assert d.time == TimeOfDay(0, 0, 0)

    d = eng.world_time_to_date(5 * 3600 + 61, NEW_YEAR_2024_TS)
    assert (d.year, d.month, d.day) == (2024, 1, 1)
    assert d.time == TimeOfDay(5, 1, 1)

    d = eng.world_time_to_date(-1, NEW_YEAR_2024_TS)
    assert (d.year, d.month, d.day) == (2023, 12, 31)


def test_creation_timestamp_shifts_year_by_epoch():
    eng = rpgcal.get_engine("golarion")
    d = eng.world_time_to_date(0, NEW_YEAR_2024_TS)
    assert (d.year, d.month, d.day) == (2024 + 2700, 1, 1)


def test_creation_timestamp_overrides_interpretation():
    eng = rpgcal.get_engine("golarion")
    with_ts = eng.world_time_to_date(0, NEW_YEAR_2024_TS)
    without = eng.world_time_to_date(0)
    assert with_ts.year != without.year


def test_weekday_in_range_far_in_the_past():
    for name in ALL_SPECS:
        eng = rpgcal.get_engine(name)
        n = len(eng.definition.weekdays)
        for t in (-10**9, -10**12, -10**13, -123456789012):
            d = eng.world_time_to_date(t)
            assert 0 <= d.weekday < n


def test_non_standard_clock():
    eng = rpgcal.get_engine("decimal-clock")
    spd = 20 * 50 * 100
    assert eng.info()["seconds_per_day"] == spd

    d = eng.world_time_to_date(spd - 1)
    assert (d.year, d.month, d.day) == (1, 1, 1)
    assert d.time == TimeOfDay(19, 49, 99)

    d = eng.world_time_to_date(spd)
    assert (d.year, d.month, d.day) == (1, 1, 2)
    assert d.time == TimeOfDay(0, 0, 0)


def test_date_to_world_time_accepts_out_of_range_day():
    """Day past the end of a month spills forward instead of failing."""
    eng = rpgcal.get_engine("gregorian")
    jan_32 = ResolvedDate(2023, 1, 32)
    feb_1 = ResolvedDate(2023, 2, 1)
    assert eng.date_to_world_time(jan_32) == eng.date_to_world_time(feb_1)


@pytest.mark.parametrize("name", sorted(ALL_SPECS))
def test_huge_world_time_resolves(name):
    eng = rpgcal.get_engine(name)
    for t0 in (10**40, -10**40, 10**40 + 12345):
        d = eng.world_time_to_date(t0)
        assert 0 <= d.weekday < len(eng.definition.weekdays)
        assert eng.date_to_world_time(d) == t0


def test_year_estimate_is_exact(gregorian):
    # 400 Gregorian years are exactly 146097 days.
    d = gregorian.date_from_day_number(146097 * 10**30)
    assert (d.year, d.month, d.day) == (400 * 10**30, 1, 1)


def test_creation_timestamp_on_non_gregorian_calendar():
    eng = rpgcal.get_engine("decimal-clock")
    # 2024-03-05T10:00:00Z: fields carried over as they are, year shifted by the epoch (1).
    ts = 1709632800
    d = eng.world_time_to_date(0, ts)
    assert (d.year, d.month, d.day) == (2025, 3, 5)
    assert d.time == TimeOfDay(10, 0, 0)
    assert eng.date_to_world_time(d, ts) == 0


def test_creation_fields_outside_calendar_spill_forward():
    eng = rpgcal.get_engine("decimal-clock")
    # 2024-12-31T23:00:00Z: month 12 and hour 23 do not exist on a 10-month, 20-hour calendar.
    ts = 1735686000
    d = eng.world_time_to_date(0, ts)
    assert d.year == 2026
    assert 1 <= d.month <= 10
    assert 1 <= d.day <= eng.month_length(d.year, d.month) or d.is_intercalary
    assert d.time.hour < 20
    assert eng.date_to_world_time(d, ts) == 0
