class RpgcalError(Exception):
    """Base error."""

class CalendarDefinitionError(RpgcalError, ValueError):
    """Raised when a calendar definition is structurally invalid."""

class UnknownCalendarError(RpgcalError, KeyError):
    """Raised when a calendar name is not present in the registry."""
