from __future__ import annotations
from typing import TYPE_CHECKING, Tuple

from .types import TimeOfDay

if TYPE_CHECKING:
    from ..engines.definition import TimeConfig

# Unix day 0 (1970-01-01) as a Julian Day Number.
JDN_UNIX_EPOCH = 2440588
SECONDS_PER_EARTH_DAY = 86400


def seconds_per_hour(t: "TimeConfig") -> int:
    return t.minutes_in_hour * t.seconds_in_minute


def seconds_per_day(t: "TimeConfig") -> int:
    return t.hours_in_day * seconds_per_hour(t)


def split_seconds(total: int, spd: int) -> Tuple[int, int]:
    """Split signed seconds into (whole days, seconds into the day).

    Floor division, so -1 is the last second of day -1, not second -1 of day 0.
    """
    return divmod(total, spd)


def time_of_day(seconds_in_day: int, t: "TimeConfig") -> TimeOfDay:
    sph = seconds_per_hour(t)
    hour = seconds_in_day // sph
    minute = (seconds_in_day % sph) // t.seconds_in_minute
    second = seconds_in_day % t.seconds_in_minute
    return TimeOfDay(hour, minute, second)


def seconds_of_day(tod: TimeOfDay, t: "TimeConfig") -> int:
    return tod.hour * seconds_per_hour(t) + tod.minute * t.seconds_in_minute + tod.second


def ymd_from_jdn(jdn: int) -> Tuple[int, int, int]:
    """Fliegel-Van Flandern inverse (proleptic Gregorian), as a plain tuple.

    Works for any integer, including years before 1 where ``datetime.date``
    would refuse.
    """
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def utc_fields(timestamp: float) -> Tuple[int, int, int, int, int, int]:
    """Unix timestamp -> (year, month, day, hour, minute, second) in UTC."""
    days, sod = divmod(int(timestamp // 1), SECONDS_PER_EARTH_DAY)
    y, m, d = ymd_from_jdn(days + JDN_UNIX_EPOCH)
    return y, m, d, sod // 3600, (sod % 3600) // 60, sod % 60
