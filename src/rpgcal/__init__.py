"""rpgcal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    list_calendars,
    calendar_info,
    get_engine,
    load_definition,
    make_engine,
    register_calendar,
    world_time_to_date,
    date_to_world_time,
    make_date,
    is_leap_year,
    month_length,
    moon_phases,
    describe,
)
from .core.errors import CalendarDefinitionError, RpgcalError, UnknownCalendarError
from .core.types import MoonPhaseInfo, ResolvedDate, TimeOfDay, WeekInfo
from .engines.calendar import CalendarEngine
from .engines.definition import CalendarDefinition

__all__ = [
    "list_calendars",
    "calendar_info",
    "get_engine",
    "load_definition",
    "make_engine",
    "register_calendar",
    "world_time_to_date",
    "date_to_world_time",
    "make_date",
    "is_leap_year",
    "month_length",
    "moon_phases",
    "describe",
    "CalendarEngine",
    "CalendarDefinition",
    "ResolvedDate",
    "TimeOfDay",
    "MoonPhaseInfo",
    "WeekInfo",
    "RpgcalError",
    "CalendarDefinitionError",
    "UnknownCalendarError",
]
