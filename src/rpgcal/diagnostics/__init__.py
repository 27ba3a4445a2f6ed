"""Diagnostics package.

- pretty_month, moon_table, round_trip: always available
- moon_scatter: optional (requires the ``diagnostics`` extra: numpy, matplotlib)
"""

__all__ = ["pretty_month", "moon_table", "round_trip", "moon_scatter"]
