"""
rpgcal.engines.moons
--------------------
Moon phase resolution. Each moon is an independent repeating sequence of
phases with fractional-day lengths, anchored to a reference new moon.

The calculator works on real-valued day numbers (days since the calendar's
epoch day 0, including the fraction of the current day), so it never needs to
know how those day numbers were produced.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Sequence

from ..core.types import MoonPhaseInfo, ResolvedDate
from .definition import Moon

logger = logging.getLogger(__name__)

# Offsets within this distance of a phase boundary belong to the next phase.
PHASE_BOUNDARY_TOLERANCE = 1e-6
_PRECISION = 1_000_000
_PROGRESS_MAX = math.nextafter(1.0, 0.0)


def _clean(value: float) -> float:
    """Round to 1e-6 days, mapping -0.0 and non-finite values to 0."""
    rounded = round(value * _PRECISION) / _PRECISION
    if rounded == 0 or not math.isfinite(rounded):
        return 0.0
    return rounded


def cycle_offset(days_since_reference: float, cycle_length: float) -> float:
    """Fold a signed day offset into [0, cycle_length).

    Dates before the reference new moon land in the matching phase of the
    previous cycle.
    """
    offset = ((days_since_reference % cycle_length) + cycle_length) % cycle_length
    if cycle_length - offset <= PHASE_BOUNDARY_TOLERANCE:
        return 0.0
    return offset


def phase_at(moon: Moon, days_since_reference: float) -> Optional[MoonPhaseInfo]:
    """Phase of ``moon`` a given number of days after its reference new moon.

    Returns None for moons that cannot be resolved (zero cycle, no phases).
    """
    if moon.cycle_length <= 0 or not moon.phases:
        return None

    offset = cycle_offset(days_since_reference, moon.cycle_length)

    start = 0.0
    index = len(moon.phases) - 1
    for i, phase in enumerate(moon.phases):
        end = start + phase.length
        if offset < end - PHASE_BOUNDARY_TOLERANCE:
            index = i
            break
        if i < len(moon.phases) - 1:
            start = end

    phase = moon.phases[index]
    length = phase.length
    exact = min(max(_clean(offset - start), 0.0), length)
    until_next = max(_clean(length - exact), 0.0)
    progress = min(max(exact / length, 0.0), _PROGRESS_MAX) if length > 0 else 0.0

    return MoonPhaseInfo(
        moon=moon,
        phase=phase,
        phase_index=index,
        day_in_phase=math.floor(exact),
        day_in_phase_exact=exact,
        days_until_next=max(math.ceil(until_next), 0),
        days_until_next_exact=until_next,
        phase_progress=progress,
    )


class MoonPhaseCalculator:
    """
    Resolves phases for a fixed set of moons.

    ``day_number`` maps a date (including its time of day) to a real day
    number; reference new moons are converted once, at construction.
    """
    def __init__(self, moons: Sequence[Moon], day_number: Callable[[ResolvedDate], float]):
        self.moons = tuple(moons)
        self._day_number = day_number
        self._references = tuple(
            day_number(ResolvedDate(m.first_new_moon.year, m.first_new_moon.month, m.first_new_moon.day))
            for m in self.moons
        )

    def phase_info(self, date: ResolvedDate, moon_name: Optional[str] = None) -> List[MoonPhaseInfo]:
        if not self.moons:
            return []

        when = self._day_number(date)
        out: List[MoonPhaseInfo] = []
        for moon, ref in zip(self.moons, self._references):
            if moon_name is not None and moon.name != moon_name:
                continue
            info = phase_at(moon, when - ref)
            if info is None:
                logger.debug("skipping moon %s: cycle length %s, %d phases",
                             moon.name, moon.cycle_length, len(moon.phases))
                continue
            out.append(info)
        return out
