"""
rpgcal.engines.definition
-------------------------
Immutable description of one calendar's geometry: months, weekdays, leap rule,
intercalary days, clock, moons and worldTime interpretation.

Calendar files are JSON with camelCase keys; ``from_dict`` is the single
parse-and-validate step that turns such a mapping into a CalendarDefinition.
Engines only ever see the validated record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple, Union

from ..core.errors import CalendarDefinitionError

logger = logging.getLogger(__name__)


# ============================================================
# Geometry
# ============================================================

@dataclass(frozen=True)
class Month:
    name: str
    days: int
    abbreviation: Optional[str] = None


@dataclass(frozen=True)
class Weekday:
    name: str
    abbreviation: Optional[str] = None


@dataclass(frozen=True)
class Intercalary:
    """
    Days inserted outside the month sequence, anchored either after or
    before a named month. Non-counting blocks do not advance the weekday.
    """
    name: str
    after: Optional[str] = None
    before: Optional[str] = None
    days: int = 1
    counts_for_weekdays: bool = True
    leap_year_only: bool = False


@dataclass(frozen=True)
class YearConfig:
    epoch: int = 0
    current_year: int = 0
    start_day: int = 0
    prefix: str = ""
    suffix: str = ""


@dataclass(frozen=True)
class TimeConfig:
    hours_in_day: int = 24
    minutes_in_hour: int = 60
    seconds_in_minute: int = 60


# ============================================================
# Leap-year rules (closed set)
# ============================================================

@dataclass(frozen=True)
class NoLeapYear:
    month: Optional[str] = None
    extra_days: int = 0

    rule = "none"
    density = Fraction(0)

    def is_leap(self, year: int) -> bool:
        return False

    def count_leap_years(self, start: int, stop: int) -> int:
        return 0


@dataclass(frozen=True)
class GregorianLeapYear:
    """Every 4th year, except centuries not divisible by 400."""
    month: Optional[str] = None
    extra_days: int = 1

    rule = "gregorian"
    density = Fraction(97, 400)

    def is_leap(self, year: int) -> bool:
        return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0

    @staticmethod
    def _through(y: int) -> int:
        return y // 4 - y // 100 + y // 400

    def count_leap_years(self, start: int, stop: int) -> int:
        """Number of leap years in [start, stop); negative if stop < start."""
        return self._through(stop - 1) - self._through(start - 1)


@dataclass(frozen=True)
class CustomLeapYear:
    """Every ``interval``-th year counted from ``offset``; no century exception."""
    interval: int
    month: Optional[str] = None
    extra_days: int = 1
    offset: int = 0

    rule = "custom"

    @property
    def density(self) -> Fraction:
        return Fraction(1, self.interval)

    def is_leap(self, year: int) -> bool:
        return (year - self.offset) % self.interval == 0

    def _through(self, y: int) -> int:
        return (y - self.offset) // self.interval

    def count_leap_years(self, start: int, stop: int) -> int:
        return self._through(stop - 1) - self._through(start - 1)


LeapYearRule = Union[NoLeapYear, GregorianLeapYear, CustomLeapYear]


# ============================================================
# worldTime interpretation (closed set)
# ============================================================

@dataclass(frozen=True)
class EpochBased:
    """worldTime 0 is the first instant of ``year.epoch``."""
    interpretation = "epoch-based"


@dataclass(frozen=True)
class YearOffset:
    """worldTime 0 is the first instant of the year ``current_year - epoch_year`` after the epoch."""
    epoch_year: int
    current_year: int

    interpretation = "year-offset"


WorldTimeMode = Union[EpochBased, YearOffset]


# ============================================================
# Moons
# ============================================================

@dataclass(frozen=True)
class MoonPhase:
    name: str
    length: float
    single_day: bool = False
    icon: Optional[str] = None


@dataclass(frozen=True)
class MoonReference:
    year: int
    month: int
    day: int


@dataclass(frozen=True)
class Moon:
    name: str
    cycle_length: float
    first_new_moon: MoonReference
    phases: Tuple[MoonPhase, ...]
    color: Optional[str] = None

    @property
    def phase_total(self) -> float:
        return sum(p.length for p in self.phases)


# ============================================================
# Weeks
# ============================================================

@dataclass(frozen=True)
class WeekConfig:
    type: Literal["month-based", "year-based"] = "month-based"
    per_month: Optional[int] = None
    days_per_week: Optional[int] = None
    remainder_handling: Literal["partial-last", "extend-last", "none"] = "partial-last"
    naming_pattern: Literal["numeric", "ordinal", "none"] = "numeric"
    names: Tuple[str, ...] = ()


# ============================================================
# The definition
# ============================================================

@dataclass(frozen=True)
class CalendarDefinition:
    id: str
    months: Tuple[Month, ...]
    weekdays: Tuple[Weekday, ...]
    leap_year: LeapYearRule = NoLeapYear()
    intercalary: Tuple[Intercalary, ...] = ()
    year: YearConfig = YearConfig()
    time: TimeConfig = TimeConfig()
    moons: Tuple[Moon, ...] = ()
    world_time: WorldTimeMode = EpochBased()
    weeks: Optional[WeekConfig] = None
    label: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.label or self.id

    def month_index(self, name: str) -> Optional[int]:
        """0-based index of the named month, or None."""
        for i, m in enumerate(self.months):
            if m.name == name:
                return i
        return None

    def validate(self) -> None:
        problems: List[str] = []

        if not self.months:
            problems.append("calendar has no months")
        for m in self.months:
            if m.days <= 0:
                problems.append(f"month '{m.name}' must have a positive number of days (got {m.days})")
        if not self.weekdays:
            problems.append("calendar has no weekdays")

        t = self.time
        for key, val in (("hours_in_day", t.hours_in_day),
                         ("minutes_in_hour", t.minutes_in_hour),
                         ("seconds_in_minute", t.seconds_in_minute)):
            if val <= 0:
                problems.append(f"time.{key} must be positive (got {val})")

        rule = self.leap_year
        if isinstance(rule, CustomLeapYear) and rule.interval <= 0:
            problems.append(f"custom leap interval must be positive (got {rule.interval})")
        if rule.month is not None and not isinstance(rule, NoLeapYear):
            if self.month_index(rule.month) is None:
                problems.append(f"leap month '{rule.month}' is not a month of this calendar")

        for ic in self.intercalary:
            if (ic.after is None) == (ic.before is None):
                problems.append(f"intercalary '{ic.name}' needs exactly one of after/before")
            anchor = ic.after if ic.after is not None else ic.before
            if anchor is not None and self.month_index(anchor) is None:
                problems.append(f"intercalary '{ic.name}' refers to unknown month '{anchor}'")
            if ic.days < 1:
                problems.append(f"intercalary '{ic.name}' must have at least one day")

        if problems:
            raise CalendarDefinitionError(f"Invalid calendar '{self.id}': " + "; ".join(problems))


# ============================================================
# Parsing calendar files
# ============================================================

def _req(d: Mapping[str, Any], key: str, ctx: str) -> Any:
    if key not in d:
        raise CalendarDefinitionError(f"{ctx}: missing required field '{key}'")
    return d[key]


def _int(val: Any, ctx: str) -> int:
    if isinstance(val, bool) or not isinstance(val, int):
        raise CalendarDefinitionError(f"{ctx}: expected an integer, got {val!r}")
    return val


def _num(val: Any, ctx: str) -> float:
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise CalendarDefinitionError(f"{ctx}: expected a number, got {val!r}")
    return float(val)


def _list(val: Any, ctx: str) -> List[Any]:
    if not isinstance(val, (list, tuple)):
        raise CalendarDefinitionError(f"{ctx}: expected a list, got {type(val).__name__}")
    return list(val)


def _parse_leap(d: Optional[Mapping[str, Any]]) -> LeapYearRule:
    if not d:
        return NoLeapYear()
    rule = d.get("rule", "none")
    month = d.get("month")
    if rule == "none":
        return NoLeapYear()
    if rule == "gregorian":
        return GregorianLeapYear(month=month, extra_days=_int(d.get("extraDays", 1), "leapYear.extraDays"))
    if rule == "custom":
        return CustomLeapYear(
            interval=_int(_req(d, "interval", "leapYear"), "leapYear.interval"),
            month=month,
            extra_days=_int(d.get("extraDays", 1), "leapYear.extraDays"),
            offset=_int(d.get("offset", 0), "leapYear.offset"),
        )
    raise CalendarDefinitionError(f"leapYear: unknown rule '{rule}'")


def _parse_world_time(d: Optional[Mapping[str, Any]], year: YearConfig) -> WorldTimeMode:
    if not d:
        return EpochBased()
    mode = d.get("interpretation", "epoch-based")
    if mode == "epoch-based":
        return EpochBased()
    if mode in ("year-offset", "real-time-based"):
        return YearOffset(
            epoch_year=_int(d.get("epochYear", year.epoch), "worldTime.epochYear"),
            current_year=_int(d.get("currentYear", year.current_year), "worldTime.currentYear"),
        )
    raise CalendarDefinitionError(f"worldTime: unknown interpretation '{mode}'")


def _parse_moon(d: Mapping[str, Any], i: int) -> Moon:
    ctx = f"moons[{i}]"
    ref = _req(d, "firstNewMoon", ctx)
    phases = tuple(
        MoonPhase(
            name=_req(p, "name", f"{ctx}.phases[{j}]"),
            length=_num(_req(p, "length", f"{ctx}.phases[{j}]"), f"{ctx}.phases[{j}].length"),
            single_day=bool(p.get("singleDay", False)),
            icon=p.get("icon"),
        )
        for j, p in enumerate(_list(d.get("phases", []), f"{ctx}.phases"))
    )
    return Moon(
        name=_req(d, "name", ctx),
        cycle_length=_num(_req(d, "cycleLength", ctx), f"{ctx}.cycleLength"),
        first_new_moon=MoonReference(
            year=_int(_req(ref, "year", f"{ctx}.firstNewMoon"), f"{ctx}.firstNewMoon.year"),
            month=_int(_req(ref, "month", f"{ctx}.firstNewMoon"), f"{ctx}.firstNewMoon.month"),
            day=_int(_req(ref, "day", f"{ctx}.firstNewMoon"), f"{ctx}.firstNewMoon.day"),
        ),
        phases=phases,
        color=d.get("color"),
    )


def _parse_weeks(d: Optional[Mapping[str, Any]]) -> Optional[WeekConfig]:
    if not d:
        return None
    names = tuple(n["name"] if isinstance(n, Mapping) else str(n) for n in d.get("names", ()))
    return WeekConfig(
        type=d.get("type", "month-based"),
        per_month=d.get("perMonth"),
        days_per_week=d.get("daysPerWeek"),
        remainder_handling=d.get("remainderHandling", "partial-last"),
        naming_pattern=d.get("namingPattern", "numeric"),
        names=names,
    )


def from_dict(data: Mapping[str, Any]) -> CalendarDefinition:
    """Parse a calendar-file mapping (camelCase keys) and validate it."""
    cid = _req(data, "id", "calendar")

    months = tuple(
        Month(
            name=_req(m, "name", f"months[{i}]"),
            days=_int(_req(m, "days", f"months[{i}]"), f"months[{i}].days"),
            abbreviation=m.get("abbreviation"),
        )
        for i, m in enumerate(_list(data.get("months", []), "months"))
    )
    weekdays = tuple(
        Weekday(name=_req(w, "name", f"weekdays[{i}]"), abbreviation=w.get("abbreviation"))
        for i, w in enumerate(_list(data.get("weekdays", []), "weekdays"))
    )

    y = data.get("year") or {}
    year = YearConfig(
        epoch=_int(y.get("epoch", 0), "year.epoch"),
        current_year=_int(y.get("currentYear", y.get("epoch", 0)), "year.currentYear"),
        start_day=_int(y.get("startDay", 0), "year.startDay"),
        prefix=y.get("prefix", ""),
        suffix=y.get("suffix", ""),
    )
    if not data.get("year"):
        logger.warning("Calendar %s has no year section; using epoch 0", cid)

    t = data.get("time") or {}
    time = TimeConfig(
        hours_in_day=_int(t.get("hoursInDay", 24), "time.hoursInDay"),
        minutes_in_hour=_int(t.get("minutesInHour", 60), "time.minutesInHour"),
        seconds_in_minute=_int(t.get("secondsInMinute", 60), "time.secondsInMinute"),
    )

    intercalary = tuple(
        Intercalary(
            name=_req(ic, "name", f"intercalary[{i}]"),
            after=ic.get("after"),
            before=ic.get("before"),
            days=_int(ic.get("days", 1), f"intercalary[{i}].days"),
            counts_for_weekdays=bool(ic.get("countsForWeekdays", True)),
            leap_year_only=bool(ic.get("leapYearOnly", False)),
        )
        for i, ic in enumerate(_list(data.get("intercalary", []), "intercalary"))
    )

    moons = tuple(_parse_moon(m, i) for i, m in enumerate(_list(data.get("moons", []), "moons")))

    definition = CalendarDefinition(
        id=cid,
        label=data.get("label") or data.get("name"),
        months=months,
        weekdays=weekdays,
        leap_year=_parse_leap(data.get("leapYear")),
        intercalary=intercalary,
        year=year,
        time=time,
        moons=moons,
        world_time=_parse_world_time(data.get("worldTime"), year),
        weeks=_parse_weeks(data.get("weeks")),
    )
    definition.validate()
    return definition
