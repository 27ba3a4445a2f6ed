from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from .errors import UnknownCalendarError
from .types import MoonPhaseInfo, ResolvedDate

logger = logging.getLogger(__name__)

class CalendarEngineProtocol(Protocol):
    def info(self) -> Dict[str, Any]: ...
    def world_time_to_date(self, world_time: float, world_creation_timestamp: Optional[float] = None) -> ResolvedDate: ...
    def date_to_world_time(self, date: ResolvedDate, world_creation_timestamp: Optional[float] = None) -> int: ...
    def is_leap_year(self, year: int) -> bool: ...
    def month_length(self, year: int, month: int) -> int: ...
    def moon_phase_info(self, date: ResolvedDate, moon_name: Optional[str] = None) -> List[MoonPhaseInfo]: ...

@dataclass
class EngineRegistry:
    """Named engines. Entries are replaced wholesale, never edited in place."""
    _engines: Dict[str, CalendarEngineProtocol]

    def get(self, name: str) -> CalendarEngineProtocol:
        if name not in self._engines:
            raise UnknownCalendarError(f"Unknown calendar '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: CalendarEngineProtocol, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Calendar '{name}' already exists. Use overwrite=True to replace.")
        logger.debug("registering calendar engine %s", name)
        self._engines[name] = engine
