from __future__ import annotations

from typing import Dict, Tuple

from .definition import (
    CalendarDefinition,
    CustomLeapYear,
    GregorianLeapYear,
    Intercalary,
    Month,
    Moon,
    MoonPhase,
    MoonReference,
    NoLeapYear,
    TimeConfig,
    WeekConfig,
    Weekday,
    YearConfig,
    YearOffset,
)


def eight_phases(cycle: float, quarter: float = 1.0) -> Tuple[MoonPhase, ...]:
    """Standard 8-phase cycle: four single-day quarter phases, four equal spans between them."""
    span = (cycle - 4 * quarter) / 4
    return (
        MoonPhase("New Moon", quarter, True, "new"),
        MoonPhase("Waxing Crescent", span, False, "waxing-crescent"),
        MoonPhase("First Quarter", quarter, True, "first-quarter"),
        MoonPhase("Waxing Gibbous", span, False, "waxing-gibbous"),
        MoonPhase("Full Moon", quarter, True, "full"),
        MoonPhase("Waning Gibbous", span, False, "waning-gibbous"),
        MoonPhase("Last Quarter", quarter, True, "last-quarter"),
        MoonPhase("Waning Crescent", span, False, "waning-crescent"),
    )


SYNODIC_MONTH = 29.53059


# ============================================================
# GREGORIAN
# ============================================================

GREGORIAN_MONTHS = (
    Month("January", 31, "Jan"),
    Month("February", 28, "Feb"),
    Month("March", 31, "Mar"),
    Month("April", 30, "Apr"),
    Month("May", 31, "May"),
    Month("June", 30, "Jun"),
    Month("July", 31, "Jul"),
    Month("August", 31, "Aug"),
    Month("September", 30, "Sep"),
    Month("October", 31, "Oct"),
    Month("November", 30, "Nov"),
    Month("December", 31, "Dec"),
)

GREGORIAN = CalendarDefinition(
    id="gregorian",
    label="Gregorian Calendar",
    months=GREGORIAN_MONTHS,
    weekdays=tuple(Weekday(n, n[:3]) for n in
                   ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")),
    leap_year=GregorianLeapYear(month="February", extra_days=1),
    # 1 January of year 0 (proleptic) is a Saturday.
    year=YearConfig(epoch=0, current_year=2024, start_day=6, suffix=" CE"),
    moons=(
        Moon(
            name="Luna",
            cycle_length=SYNODIC_MONTH,
            first_new_moon=MoonReference(2024, 1, 11),
            phases=eight_phases(SYNODIC_MONTH),
            color="#f0f0f0",
        ),
    ),
)


# ============================================================
# GOLARION (Pathfinder, Absalom Reckoning)
# ============================================================

GOLARION = CalendarDefinition(
    id="golarion",
    label="Golarion Calendar (Absalom Reckoning)",
    months=(
        Month("Abadius", 31), Month("Calistril", 28), Month("Pharast", 31),
        Month("Gozran", 30), Month("Desnus", 31), Month("Sarenith", 30),
        Month("Erastus", 31), Month("Arodus", 31), Month("Rova", 30),
        Month("Lamashan", 31), Month("Neth", 30), Month("Kuthona", 31),
    ),
    weekdays=tuple(Weekday(n) for n in
                   ("Moonday", "Toilday", "Wealday", "Oathday", "Fireday", "Starday", "Sunday")),
    leap_year=CustomLeapYear(interval=4, month="Calistril", extra_days=1),
    year=YearConfig(epoch=2700, current_year=4725, start_day=5, suffix=" AR"),
    world_time=YearOffset(epoch_year=2700, current_year=4725),
    moons=(
        Moon(
            name="Somal",
            cycle_length=SYNODIC_MONTH,
            first_new_moon=MoonReference(4725, 1, 11),
            phases=eight_phases(SYNODIC_MONTH),
            color="#e8e8d0",
        ),
    ),
)


# ============================================================
# EXANDRIAN (Critical Role): two moons on unrelated cycles
# ============================================================

EXANDRIAN = CalendarDefinition(
    id="exandrian",
    label="Exandrian Calendar",
    months=(
        Month("Horisal", 29), Month("Misuthar", 30), Month("Dualahei", 30),
        Month("Thunsheer", 31), Month("Unndilar", 28), Month("Brussendar", 31),
        Month("Sydenstar", 32), Month("Fessuran", 29), Month("Quen'pillar", 27),
        Month("Cuersaar", 29), Month("Duscar", 32),
    ),
    weekdays=tuple(Weekday(n) for n in
                   ("Miresen", "Grissen", "Whelsen", "Conthsen", "Folsen", "Yulisen", "Da'leysen")),
    leap_year=NoLeapYear(),
    year=YearConfig(epoch=0, current_year=812, start_day=0, suffix=" P.D."),
    moons=(
        Moon(
            name="Catha",
            cycle_length=33.0,
            first_new_moon=MoonReference(812, 1, 1),
            phases=(
                MoonPhase("New Moon", 1, True, "new"),
                MoonPhase("Waxing Crescent", 7, False, "waxing-crescent"),
                MoonPhase("First Quarter", 1, True, "first-quarter"),
                MoonPhase("Waxing Gibbous", 7, False, "waxing-gibbous"),
                MoonPhase("Full Moon", 1, True, "full"),
                MoonPhase("Waning Gibbous", 7, False, "waning-gibbous"),
                MoonPhase("Last Quarter", 1, True, "last-quarter"),
                MoonPhase("Waning Crescent", 8, False, "waning-crescent"),
            ),
            color="#e0e0e0",
        ),
        Moon(
            name="Ruidus",
            cycle_length=328.0,
            first_new_moon=MoonReference(810, 1, 1),
            phases=eight_phases(328.0),
            color="#800020",
        ),
    ),
)


# ============================================================
# HARPTOS (Forgotten Realms): festivals outside the tenday cycle
# ============================================================

HARPTOS_MONTHS = tuple(Month(n, 30) for n in (
    "Hammer", "Alturiak", "Ches", "Tarsakh", "Mirtul", "Kythorn",
    "Flamerule", "Eleasis", "Eleint", "Marpenoth", "Uktar", "Nightal",
))

HARPTOS = CalendarDefinition(
    id="harptos",
    label="Calendar of Harptos",
    months=HARPTOS_MONTHS,
    weekdays=tuple(Weekday(f"{n} Day") for n in (
        "First", "Second", "Third", "Fourth", "Fifth",
        "Sixth", "Seventh", "Eighth", "Ninth", "Tenth",
    )),
    leap_year=CustomLeapYear(interval=4, month=None, extra_days=0),
    intercalary=(
        Intercalary("Midwinter", after="Hammer", counts_for_weekdays=False),
        Intercalary("Greengrass", after="Tarsakh", counts_for_weekdays=False),
        Intercalary("Midsummer", after="Flamerule", counts_for_weekdays=False),
        Intercalary("Shieldmeet", after="Flamerule", counts_for_weekdays=False, leap_year_only=True),
        Intercalary("Highharvestide", after="Eleint", counts_for_weekdays=False),
        Intercalary("Feast of the Moon", after="Uktar", counts_for_weekdays=False),
    ),
    year=YearConfig(epoch=0, current_year=1492, start_day=0, suffix=" DR"),
    weeks=WeekConfig(
        type="month-based",
        per_month=3,
        days_per_week=10,
        names=("First Tenday", "Second Tenday", "Third Tenday"),
    ),
    moons=(
        Moon(
            name="Selune",
            cycle_length=30.4375,
            first_new_moon=MoonReference(1372, 1, 1),
            phases=eight_phases(30.4375),
            color="#ffffff",
        ),
    ),
)


# ============================================================
# DECIMAL CLOCK: 20-hour days, a removed leap day, counted year-end block
# ============================================================

DECIMAL_CLOCK = CalendarDefinition(
    id="decimal-clock",
    label="Decimal Clock Test Calendar",
    months=tuple(Month(f"Month {i}", 36) for i in range(1, 11)),
    weekdays=tuple(Weekday(f"Day {i}") for i in range(1, 11)),
    leap_year=CustomLeapYear(interval=5, month="Month 10", extra_days=-1, offset=1),
    intercalary=(Intercalary("Year End", after="Month 10", days=5, counts_for_weekdays=True),),
    year=YearConfig(epoch=1, current_year=1, start_day=3),
    time=TimeConfig(hours_in_day=20, minutes_in_hour=50, seconds_in_minute=100),
)


ALL_SPECS: Dict[str, CalendarDefinition] = {
    "gregorian": GREGORIAN,
    "golarion": GOLARION,
    "exandrian": EXANDRIAN,
    "harptos": HARPTOS,
    "decimal-clock": DECIMAL_CLOCK,
}
