# tests/test_definition.py

import logging

import pytest

from rpgcal.core.errors import CalendarDefinitionError, RpgcalError
from rpgcal.engines.calendar import CalendarEngine
from rpgcal.engines.definition import (
    CalendarDefinition,
    CustomLeapYear,
    EpochBased,
    GregorianLeapYear,
    Month,
    Weekday,
    YearOffset,
    from_dict,
)


def test_from_dict_parses_calendar_file(lunar_data):
    cal = from_dict(lunar_data)
    assert cal.id == "test-lunar"
    assert cal.display_name == "Lunar test calendar"
    assert len(cal.months) == 12
    assert cal.months[1] == Month("February", 28)
    assert cal.weekdays[0] == Weekday("Sunday")
    assert cal.leap_year == GregorianLeapYear(month="February", extra_days=1)
    assert cal.year.epoch == 2024
    assert cal.year.start_day == 1
    assert cal.world_time == EpochBased()

    (moon,) = cal.moons
    assert moon.name == "Luna"
    assert moon.first_new_moon.day == 11
    assert len(moon.phases) == 8
    assert moon.phases[0].single_day
    assert moon.phases[0].icon == "new"
    assert moon.color == "#f0f0f0"


def test_from_dict_custom_leap_and_year_offset(lunar_data):
    lunar_data["leapYear"] = {"rule": "custom", "interval": 4, "month": "February", "offset": 2}
    lunar_data["worldTime"] = {"interpretation": "real-time-based", "epochYear": 2000, "currentYear": 2024}
    cal = from_dict(lunar_data)
    assert cal.leap_year == CustomLeapYear(interval=4, month="February", extra_days=1, offset=2)
    assert cal.world_time == YearOffset(epoch_year=2000, current_year=2024)


def test_from_dict_weeks(lunar_data):
    lunar_data["weeks"] = {
        "type": "month-based",
        "perMonth": 4,
        "daysPerWeek": 7,
        "remainderHandling": "extend-last",
        "namingPattern": "ordinal",
        "names": [{"name": "Early"}, "Middle"],
    }
    weeks = from_dict(lunar_data).weeks
    assert weeks.per_month == 4
    assert weeks.remainder_handling == "extend-last"
    assert weeks.names == ("Early", "Middle")


def test_missing_year_section_warns(lunar_data, caplog):
    del lunar_data["year"]
    with caplog.at_level(logging.WARNING, logger="rpgcal.engines.definition"):
        cal = from_dict(lunar_data)
    assert cal.year.epoch == 0
    assert "no year section" in caplog.text


@pytest.mark.parametrize("mutate, message", [
    (lambda d: d.update(months=[]), "no months"),
    (lambda d: d.update(weekdays=[]), "no weekdays"),
    (lambda d: d["months"][0].update(days=0), "positive number of days"),
    (lambda d: d.update(time={"hoursInDay": 0}), "hours_in_day"),
    (lambda d: d.update(leapYear={"rule": "lunar"}), "unknown rule"),
    (lambda d: d.update(leapYear={"rule": "custom", "interval": 0}), "interval"),
    (lambda d: d.update(leapYear={"rule": "gregorian", "month": "Smarch"}), "Smarch"),
    (lambda d: d.update(worldTime={"interpretation": "sideways"}), "sideways"),
    (lambda d: d.update(intercalary=[{"name": "Void", "after": "Nowhere"}]), "Nowhere"),
    (lambda d: d.update(intercalary=[{"name": "Both", "after": "March", "before": "May"}]), "exactly one"),
    (lambda d: d.update(intercalary=[{"name": "Empty", "after": "March", "days": 0}]), "at least one day"),
    (lambda d: d["months"][0].update(days="31"), "expected an integer"),
    (lambda d: d["moons"][0].pop("firstNewMoon"), "firstNewMoon"),
    (lambda d: d.pop("id"), "'id'"),
])
def test_invalid_definitions_rejected(lunar_data, mutate, message):
    mutate(lunar_data)
    with pytest.raises(CalendarDefinitionError) as exc:
        from_dict(lunar_data)
    assert message in str(exc.value)


def test_definition_error_hierarchy():
    assert issubclass(CalendarDefinitionError, RpgcalError)
    assert issubclass(CalendarDefinitionError, ValueError)


def test_engine_validates_definition():
    bad = CalendarDefinition(id="bad", months=(), weekdays=(Weekday("Only"),))
    with pytest.raises(CalendarDefinitionError):
        CalendarEngine(bad)


def test_problems_are_collected():
    bad = CalendarDefinition(id="bad", months=(Month("A", 0),), weekdays=())
    with pytest.raises(CalendarDefinitionError) as exc:
        bad.validate()
    assert "'A'" in str(exc.value)
    assert "no weekdays" in str(exc.value)


def test_leap_month_clamp_warns(caplog):
    cal = CalendarDefinition(
        id="shrinking",
        months=(Month("Short", 2), Month("Long", 30)),
        weekdays=(Weekday("Day"),),
        leap_year=CustomLeapYear(interval=2, month="Short", extra_days=-5),
    )
    with caplog.at_level(logging.WARNING, logger="rpgcal.engines.calendar"):
        eng = CalendarEngine(cal)
    assert eng.month_length(0, 1) == 1
    assert eng.month_length(1, 1) == 2
    assert "clamped" in caplog.text
