from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from ..engines.definition import Moon, MoonPhase

@dataclass(frozen=True)
class TimeOfDay:
    hour: int = 0
    minute: int = 0
    second: int = 0

@dataclass(frozen=True)
class ResolvedDate:
    """
    A calendar date produced by (or handed to) a CalendarEngine.

    month and day are 1-based, weekday is 0-based. When ``intercalary`` is set
    the date lies inside that named intercalary block and ``day`` counts days
    within the block; ``month`` is the month the block is attached to.
    """
    year: int
    month: int
    day: int
    weekday: int = 0
    time: TimeOfDay = field(default_factory=TimeOfDay)
    intercalary: Optional[str] = None

    @property
    def is_intercalary(self) -> bool:
        return self.intercalary is not None

    def replace(self, **changes: Any) -> "ResolvedDate":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "weekday": self.weekday,
            "time": {"hour": self.time.hour, "minute": self.time.minute, "second": self.time.second},
        }
        if self.intercalary is not None:
            out["intercalary"] = self.intercalary
        return out

@dataclass(frozen=True)
class MoonPhaseInfo:
    moon: "Moon"
    phase: "MoonPhase"
    phase_index: int
    day_in_phase: int
    day_in_phase_exact: float
    days_until_next: int
    days_until_next_exact: float
    phase_progress: float

@dataclass(frozen=True)
class WeekInfo:
    name: str
    abbreviation: Optional[str] = None
