"""
rpgcal.engines.calendar
-----------------------
The engine. Converts between linear worldTime (signed seconds) and calendar
dates for one CalendarDefinition, resolving leap years, intercalary blocks,
weekdays, weeks and moon phases.

Internal reference frame: the "day number" of a date is the count of whole
days since day 0 of ``year.epoch`` (negative before it). "Internal seconds"
are day number * seconds-per-day + seconds into the day. The worldTime
interpretation only shifts internal seconds by a constant.

Year layout: a year is an ordered sequence of segments. Each month is preceded
by its active ``before`` intercalary blocks and followed by its active
``after`` blocks. A leap day is part of its month, so an intercalary block
after the leap month follows the lengthened month. The layout depends only on
whether the year is a leap year, so both variants are built once.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict, List, Optional, Tuple

from ..core.time import seconds_of_day, seconds_per_day, seconds_per_hour, split_seconds, time_of_day, utc_fields
from ..core.types import MoonPhaseInfo, ResolvedDate, TimeOfDay, WeekInfo
from .definition import CalendarDefinition, EpochBased, Intercalary, Moon, YearOffset
from .moons import MoonPhaseCalculator

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "Unknown"


@dataclass(frozen=True)
class _Segment:
    month: int                          # 1-based month the segment belongs to
    days: int
    counts_for_weekdays: bool
    intercalary: Optional[Intercalary] = None

    @property
    def intercalary_name(self) -> Optional[str]:
        return self.intercalary.name if self.intercalary is not None else None


def _ordinal(n: int) -> str:
    suffixes = ["th", "st", "nd", "rd"]
    v = n % 100
    if 10 <= v <= 20:
        return f"{n}th"
    return f"{n}{suffixes[n % 10] if n % 10 < 4 else 'th'}"


class CalendarEngine:
    """
    Stateless computation over one CalendarDefinition.

    Construct once per definition; a different calendar means a new engine.
    Raises CalendarDefinitionError at construction for structurally invalid
    definitions, and never raises from queries afterwards.
    """
    def __init__(self, definition: CalendarDefinition):
        definition.validate()
        self.definition = definition

        self._spd = seconds_per_day(definition.time)
        self._sph = seconds_per_hour(definition.time)
        self._n_weekdays = len(definition.weekdays)

        self._month_lengths = {
            False: tuple(m.days for m in definition.months),
            True: self._leap_month_lengths(),
        }
        self._layout = {leap: self._build_layout(leap) for leap in (False, True)}
        self._year_days = {leap: sum(s.days for s in self._layout[leap]) for leap in (False, True)}
        self._year_weekday_days = {
            leap: sum(s.days for s in self._layout[leap] if s.counts_for_weekdays) for leap in (False, True)
        }

        rule = definition.leap_year
        # Exact mean year length in days.
        self._mean_year: Fraction = (
            self._year_days[False] + (self._year_days[True] - self._year_days[False]) * Fraction(rule.density)
        )

        # Selected once; every conversion adds or subtracts this constant.
        self._zero_offset = self._interpretation_offset()

        self.moons = MoonPhaseCalculator(definition.moons, self._fractional_day_number)

    # ---------------------------------------------------------
    # Construction helpers
    # ---------------------------------------------------------

    def _leap_month_lengths(self) -> Tuple[int, ...]:
        d = self.definition
        lengths = [m.days for m in d.months]
        rule = d.leap_year
        idx = d.month_index(rule.month) if rule.month is not None else None
        if idx is not None and rule.extra_days:
            lengths[idx] += rule.extra_days
            if lengths[idx] < 1:
                logger.warning(
                    "Calendar %s: leap month '%s' clamped to 1 day (was %d)", d.id, rule.month, lengths[idx]
                )
                lengths[idx] = 1
        return tuple(lengths)

    def _build_layout(self, leap: bool) -> Tuple[_Segment, ...]:
        d = self.definition
        active = [ic for ic in d.intercalary if leap or not ic.leap_year_only]
        segments: List[_Segment] = []
        for i, (month, length) in enumerate(zip(d.months, self._month_lengths[leap]), start=1):
            for ic in active:
                if ic.before == month.name:
                    segments.append(_Segment(i, ic.days, ic.counts_for_weekdays, ic))
            segments.append(_Segment(i, length, True))
            for ic in active:
                if ic.after == month.name:
                    segments.append(_Segment(i, ic.days, ic.counts_for_weekdays, ic))
        return tuple(segments)

    def _interpretation_offset(self) -> int:
        mode = self.definition.world_time
        if isinstance(mode, EpochBased):
            return 0
        if isinstance(mode, YearOffset):
            zero_year = self.definition.year.epoch + (mode.current_year - mode.epoch_year)
            return self.days_before_year(zero_year) * self._spd
        raise TypeError(f"Unknown worldTime interpretation: {type(mode)}")

    # ---------------------------------------------------------
    # Leap years and lengths
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        return self.definition.leap_year.is_leap(year)

    def month_lengths(self, year: int) -> List[int]:
        return list(self._month_lengths[self.is_leap_year(year)])

    def month_length(self, year: int, month: int) -> int:
        """Days in ``month`` (1-based) of ``year``; 0 for a month that does not exist."""
        lengths = self._month_lengths[self.is_leap_year(year)]
        if 1 <= month <= len(lengths):
            return lengths[month - 1]
        return 0

    def year_length(self, year: int) -> int:
        """Months plus active intercalary days."""
        return self._year_days[self.is_leap_year(year)]

    def weekday_days_in_year(self, year: int) -> int:
        return self._year_weekday_days[self.is_leap_year(year)]

    def active_intercalary(self, year: int) -> List[Intercalary]:
        leap = self.is_leap_year(year)
        return [ic for ic in self.definition.intercalary if leap or not ic.leap_year_only]

    def intercalary_after_month(self, year: int, month: int) -> List[Intercalary]:
        if not 1 <= month <= len(self.definition.months):
            return []
        name = self.definition.months[month - 1].name
        return [ic for ic in self.active_intercalary(year) if ic.after == name]

    def intercalary_before_month(self, year: int, month: int) -> List[Intercalary]:
        if not 1 <= month <= len(self.definition.months):
            return []
        name = self.definition.months[month - 1].name
        return [ic for ic in self.active_intercalary(year) if ic.before == name]

    def _span(self, start: int, stop: int, table: Dict[bool, int]) -> int:
        """Sum of per-year values over [start, stop) with stop >= start."""
        n = stop - start
        leaps = self.definition.leap_year.count_leap_years(start, stop)
        return (n - leaps) * table[False] + leaps * table[True]

    def days_before_year(self, year: int) -> int:
        """Day number of the first day of ``year`` (signed, 0 for the epoch year)."""
        epoch = self.definition.year.epoch
        if year >= epoch:
            return self._span(epoch, year, self._year_days)
        return -self._span(year, epoch, self._year_days)

    def _weekday_days_before_year(self, year: int) -> int:
        epoch = self.definition.year.epoch
        if year >= epoch:
            return self._span(epoch, year, self._year_weekday_days)
        return -self._span(year, epoch, self._year_weekday_days)

    # ---------------------------------------------------------
    # Day numbers
    # ---------------------------------------------------------

    def _locate(self, year: int, month: int, day: int, intercalary: Optional[str]) -> Tuple[int, int]:
        """
        (days before the date within its year, weekday-counted days before it).

        Dates that name no real slot (bad month, unknown intercalary) fall
        back to the regular month position so queries never fail.
        """
        layout = self._layout[self.is_leap_year(year)]
        days = counted = 0
        for seg in layout:
            if seg.month == month and seg.intercalary_name == intercalary:
                within = day - 1
                return days + within, counted + (within if seg.counts_for_weekdays else 0)
            days += seg.days
            if seg.counts_for_weekdays:
                counted += seg.days

        days = counted = 0
        for seg in layout:
            if seg.month >= month:
                break
            days += seg.days
            if seg.counts_for_weekdays:
                counted += seg.days
        return days + day - 1, counted + day - 1

    def day_number(self, date: ResolvedDate) -> int:
        """Whole days from day 0 of the epoch year to ``date``."""
        within, _ = self._locate(date.year, date.month, date.day, date.intercalary)
        return self.days_before_year(date.year) + within

    def _fractional_day_number(self, date: ResolvedDate) -> float:
        return self.day_number(date) + seconds_of_day(date.time, self.definition.time) / self._spd

    def _year_of_day(self, total_days: int) -> Tuple[int, int]:
        """(year, day number of its first day) for the year containing ``total_days``."""
        mean = self._mean_year
        year = self.definition.year.epoch + (total_days * mean.denominator) // mean.numerator
        start = self.days_before_year(year)
        while total_days < start:
            year -= 1
            start -= self.year_length(year)
        while total_days >= start + self.year_length(year):
            start += self.year_length(year)
            year += 1
        return year, start

    def _days_to_date(self, total_days: int, tod: TimeOfDay) -> ResolvedDate:
        year, start = self._year_of_day(total_days)
        remaining = total_days - start
        layout = self._layout[self.is_leap_year(year)]
        counted = 0
        for seg in layout:
            if remaining < seg.days:
                counted += remaining if seg.counts_for_weekdays else 0
                weekday = (self.definition.year.start_day + self._weekday_days_before_year(year) + counted) % self._n_weekdays
                return ResolvedDate(
                    year=year,
                    month=seg.month,
                    day=remaining + 1,
                    weekday=weekday,
                    time=tod,
                    intercalary=seg.intercalary_name,
                )
            remaining -= seg.days
            if seg.counts_for_weekdays:
                counted += seg.days
        raise AssertionError("day fell outside its own year")  # pragma: no cover

    def date_from_day_number(self, total_days: int, time: Optional[TimeOfDay] = None) -> ResolvedDate:
        return self._days_to_date(total_days, time or TimeOfDay())

    # ---------------------------------------------------------
    # worldTime <-> date
    # ---------------------------------------------------------

    def _creation_base(self, world_creation_timestamp: float) -> int:
        """Internal seconds of the real-world creation instant, year shifted by the epoch."""
        y, m, d, hh, mm, ss = utc_fields(world_creation_timestamp)
        base = ResolvedDate(year=y + self.definition.year.epoch, month=m, day=d, time=TimeOfDay(hh, mm, ss))
        return self._to_internal(base)

    def _to_internal(self, date: ResolvedDate) -> int:
        return self.day_number(date) * self._spd + seconds_of_day(date.time, self.definition.time)

    def _from_internal(self, seconds: int) -> ResolvedDate:
        days, sod = split_seconds(seconds, self._spd)
        return self._days_to_date(days, time_of_day(sod, self.definition.time))

    def world_time_to_date(self, world_time: float, world_creation_timestamp: Optional[float] = None) -> ResolvedDate:
        """
        Resolve worldTime (signed seconds) to a date.

        With ``world_creation_timestamp`` (Unix seconds) the real-world UTC date
        of that instant, year shifted by ``year.epoch``, is worldTime 0; this
        reproduces a host system that anchors its clock to world creation.
        The UTC month, day and hour are placed on this calendar field by field,
        not by day of year, so on a calendar shaped unlike the Gregorian one a
        field past the end of its unit spills forward (December 31 23:00 on a
        10-month, 20-hour calendar lands in the following year).
        """
        seconds = math.floor(world_time)
        if world_creation_timestamp is not None:
            return self._from_internal(self._creation_base(world_creation_timestamp) + seconds)
        return self._from_internal(seconds + self._zero_offset)

    def date_to_world_time(self, date: ResolvedDate, world_creation_timestamp: Optional[float] = None) -> int:
        internal = self._to_internal(date)
        if world_creation_timestamp is not None:
            return internal - self._creation_base(world_creation_timestamp)
        return internal - self._zero_offset

    # ---------------------------------------------------------
    # Weekdays and labels
    # ---------------------------------------------------------

    def weekday_for(self, year: int, month: int, day: int, intercalary: Optional[str] = None) -> int:
        _, counted = self._locate(year, month, day, intercalary)
        total = self._weekday_days_before_year(year) + counted
        return (self.definition.year.start_day + total) % self._n_weekdays

    def month_name(self, month: int) -> str:
        months = self.definition.months
        if 1 <= month <= len(months):
            return months[month - 1].name
        return UNKNOWN_LABEL

    def weekday_name(self, weekday: int) -> str:
        weekdays = self.definition.weekdays
        if 0 <= weekday < len(weekdays):
            return weekdays[weekday].name
        return UNKNOWN_LABEL

    def compare(self, a: ResolvedDate, b: ResolvedDate) -> int:
        x, y = self._to_internal(a), self._to_internal(b)
        return (x > y) - (x < y)

    # ---------------------------------------------------------
    # Date arithmetic
    # ---------------------------------------------------------

    def add_days(self, date: ResolvedDate, days: int) -> ResolvedDate:
        return self._days_to_date(self.day_number(date) + days, date.time)

    def add_months(self, date: ResolvedDate, months: int) -> ResolvedDate:
        """Shift by whole months, clamping the day to the target month's length."""
        n = len(self.definition.months)
        total = (date.month - 1) + months
        year = date.year + total // n
        month = total % n + 1
        day = min(date.day, self.month_length(year, month))
        return ResolvedDate(year, month, day, self.weekday_for(year, month, day), date.time)

    def add_years(self, date: ResolvedDate, years: int) -> ResolvedDate:
        year = date.year + years
        month = min(max(date.month, 1), len(self.definition.months))
        day = min(date.day, self.month_length(year, month))
        return ResolvedDate(year, month, day, self.weekday_for(year, month, day), date.time)

    def add_seconds(self, date: ResolvedDate, seconds: int) -> ResolvedDate:
        return self._from_internal(self._to_internal(date) + seconds)

    def add_minutes(self, date: ResolvedDate, minutes: int) -> ResolvedDate:
        return self.add_seconds(date, minutes * self.definition.time.seconds_in_minute)

    def add_hours(self, date: ResolvedDate, hours: int) -> ResolvedDate:
        return self.add_seconds(date, hours * self._sph)

    # ---------------------------------------------------------
    # Weeks
    # ---------------------------------------------------------

    def week_of_month(self, date: ResolvedDate) -> Optional[int]:
        """1-based week within the month, or None when weeks do not apply."""
        weeks = self.definition.weeks
        if weeks is None or weeks.type == "year-based" or date.is_intercalary:
            return None

        per_week = weeks.days_per_week or self._n_weekdays
        raw = (date.day - 1) // per_week + 1

        month_days = self.month_length(date.year, date.month)
        if month_days % per_week == 0:
            return raw

        expected = weeks.per_month if weeks.per_month is not None else month_days // per_week
        if weeks.remainder_handling == "extend-last" and raw == expected + 1:
            return expected
        if weeks.remainder_handling == "none" and raw > expected:
            return None
        return raw

    def week_info(self, date: ResolvedDate) -> Optional[WeekInfo]:
        weeks = self.definition.weeks
        n = self.week_of_month(date)
        if n is None or weeks is None:
            return None
        if 0 < n <= len(weeks.names):
            return WeekInfo(name=weeks.names[n - 1])
        if weeks.naming_pattern == "ordinal":
            return WeekInfo(name=f"{_ordinal(n)} Week", abbreviation=str(n))
        if weeks.naming_pattern == "numeric":
            return WeekInfo(name=f"Week {n}", abbreviation=str(n))
        return None

    # ---------------------------------------------------------
    # Moons
    # ---------------------------------------------------------

    def all_moons(self) -> List[Moon]:
        return list(self.definition.moons)

    def moon_phase_info(self, date: ResolvedDate, moon_name: Optional[str] = None) -> List[MoonPhaseInfo]:
        return self.moons.phase_info(date, moon_name)

    def moon_phase_at_world_time(self, world_time: float, moon_name: Optional[str] = None) -> List[MoonPhaseInfo]:
        return self.moon_phase_info(self.world_time_to_date(world_time), moon_name)

    # ---------------------------------------------------------
    # Introspection
    # ---------------------------------------------------------

    def info(self) -> Dict[str, Any]:
        d = self.definition
        return {
            "id": d.id,
            "label": d.display_name,
            "months": len(d.months),
            "weekdays": len(d.weekdays),
            "leap_rule": d.leap_year.rule,
            "intercalary": [ic.name for ic in d.intercalary],
            "moons": [m.name for m in d.moons],
            "seconds_per_day": self._spd,
            "year_days": {"common": self._year_days[False], "leap": self._year_days[True]},
            "world_time": d.world_time.interpretation,
            "epoch": d.year.epoch,
        }
