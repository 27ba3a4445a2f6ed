from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from .core.engine import EngineRegistry
from .core.types import MoonPhaseInfo, ResolvedDate, TimeOfDay
from .engines.calendar import CalendarEngine
from .engines.definition import CalendarDefinition, from_dict
from .engines.factory import make_engine as _make_engine

DEFAULT_CALENDAR = "gregorian"
_registry: Optional[EngineRegistry] = None

def set_registry(reg: EngineRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> EngineRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry

def list_calendars() -> List[str]:
    return _reg().list()

def calendar_info(calendar: str) -> Dict[str, Any]:
    return _reg().get(calendar).info()

def get_engine(calendar: str) -> CalendarEngine:
    return _reg().get(calendar)

def load_definition(data: Mapping[str, Any]) -> CalendarDefinition:
    return from_dict(data)

def make_engine(definition: Union[CalendarDefinition, Mapping[str, Any]]) -> CalendarEngine:
    return _make_engine(definition)

def register_calendar(
    name: str,
    calendar: Union[CalendarEngine, CalendarDefinition, Mapping[str, Any]],
    *,
    overwrite: bool = False,
) -> CalendarEngine:
    """Register (or with overwrite=True, replace) a named calendar. Returns its engine."""
    engine = calendar if isinstance(calendar, CalendarEngine) else _make_engine(calendar)
    _reg().register(name, engine, overwrite=overwrite)
    return engine

# ============================================================
# Conversions
# ============================================================

def world_time_to_date(
    world_time: float,
    *,
    calendar: str = DEFAULT_CALENDAR,
    world_creation_timestamp: Optional[float] = None,
) -> ResolvedDate:
    return _reg().get(calendar).world_time_to_date(world_time, world_creation_timestamp)

def date_to_world_time(
    date: ResolvedDate,
    *,
    calendar: str = DEFAULT_CALENDAR,
    world_creation_timestamp: Optional[float] = None,
) -> int:
    return _reg().get(calendar).date_to_world_time(date, world_creation_timestamp)

def make_date(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    *,
    calendar: str = DEFAULT_CALENDAR,
    intercalary: Optional[str] = None,
) -> ResolvedDate:
    """Build a date with its weekday filled in."""
    eng = _reg().get(calendar)
    return ResolvedDate(
        year=year,
        month=month,
        day=day,
        weekday=eng.weekday_for(year, month, day, intercalary),
        time=TimeOfDay(hour, minute, second),
        intercalary=intercalary,
    )

def is_leap_year(year: int, *, calendar: str = DEFAULT_CALENDAR) -> bool:
    return _reg().get(calendar).is_leap_year(year)

def month_length(year: int, month: int, *, calendar: str = DEFAULT_CALENDAR) -> int:
    return _reg().get(calendar).month_length(year, month)

def moon_phases(
    date: ResolvedDate,
    *,
    calendar: str = DEFAULT_CALENDAR,
    moon: Optional[str] = None,
) -> List[MoonPhaseInfo]:
    return _reg().get(calendar).moon_phase_info(date, moon)

def describe(date: ResolvedDate, *, calendar: str = DEFAULT_CALENDAR) -> Dict[str, Any]:
    """Plain-data view of a date with its labels resolved (for renderers)."""
    eng = _reg().get(calendar)
    out = date.to_dict()
    out["month_name"] = eng.month_name(date.month)
    out["weekday_name"] = eng.weekday_name(date.weekday)
    week = eng.week_info(date)
    if week is not None:
        out["week"] = week.name
    out["moons"] = [
        {"moon": m.moon.name, "phase": m.phase.name, "day_in_phase": m.day_in_phase,
         "days_until_next": m.days_until_next}
        for m in eng.moon_phase_info(date)
    ]
    return out
