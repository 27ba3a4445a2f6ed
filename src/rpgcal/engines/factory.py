"""
rpgcal.engines.factory
----------------------
Turns calendar definitions (validated records or raw calendar-file mappings)
into live engines.
"""

from __future__ import annotations
from typing import Any, Mapping, Union

from rpgcal.engines.calendar import CalendarEngine
from rpgcal.engines.definition import CalendarDefinition, from_dict


def make_engine(definition: Union[CalendarDefinition, Mapping[str, Any]]) -> CalendarEngine:
    """The universal entry point."""
    if isinstance(definition, CalendarDefinition):
        return CalendarEngine(definition)
    if isinstance(definition, Mapping):
        return CalendarEngine(from_dict(definition))
    raise TypeError(f"Cannot build a calendar engine from {type(definition)}")
