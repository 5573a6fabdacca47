from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone


J2000 = 2451545.0  # JD at 2000-01-01 12:00 TT
MS_PER_DAY = 24 * 60 * 60 * 1000


# ============================================================
# Civil calendar -> Julian Date
# ============================================================

def julian_date_from_calendar(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
) -> float:
    """
    Calendar date and UT time of day -> JD (Meeus ch. 7).

    `year` is astronomical (1 BC = 0, 2 BC = -1). Dates up to JD 2299160
    are read in the Julian calendar, later dates in the Gregorian calendar.
    """
    y, m = year, month
    if m < 3:
        y -= 1
        m += 12

    d = day + (hour + (minute + second / 60.0) / 60.0) / 24.0
    jd = math.floor(365.25 * (y + 4716.0)) + math.floor(30.6001 * (m + 1)) + d - 1524.5
    a = math.floor(y / 100.0)
    b = (2.0 - a + math.floor(a / 4.0)) if jd > 2299160.0 else 0.0
    return jd + b


def to_utc(dt: datetime) -> datetime:
    """Aware datetime -> same instant in UTC. Naive datetimes are rejected."""
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValueError("datetime must be timezone-aware")
    return dt.astimezone(timezone.utc)


def julian_date_from_datetime(dt: datetime) -> float:
    """Aware datetime -> JD (UT)."""
    u = to_utc(dt)
    second = u.second + u.microsecond / 1e6
    return julian_date_from_calendar(u.year, u.month, u.day, u.hour, u.minute, second)


# ============================================================
# Instant: JD + Delta T
# ============================================================

@dataclass(frozen=True)
class JulianDate:
    """
    An astronomical instant: Julian Date (UT) plus Delta T (= TT - UT, seconds).
    Every ephemeris time variable is derived from these two fields.
    """
    julian_date: float
    delta_t: float = 0.0

    @classmethod
    def from_datetime(cls, dt: datetime, delta_t: float = 0.0) -> "JulianDate":
        return cls(julian_date_from_datetime(dt), delta_t)

    @property
    def julian_ephemeris_day(self) -> float:
        return self.julian_date + self.delta_t / 86400.0

    @property
    def julian_century(self) -> float:
        return (self.julian_date - J2000) / 36525.0

    @property
    def julian_ephemeris_century(self) -> float:
        return (self.julian_ephemeris_day - J2000) / 36525.0

    @property
    def julian_ephemeris_millennium(self) -> float:
        return self.julian_ephemeris_century / 10.0


# ============================================================
# Day helpers for rise/set results
# ============================================================

def start_of_day_utc(day: date) -> datetime:
    """0h UT on the calendar date of `day` (the date is taken as written, not converted)."""
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def limit_to(x: float, max_value: float) -> float:
    """Wrap x into [0, max_value) with a floor-based modulo."""
    divided = x / max_value
    limited = max_value * (divided - math.floor(divided))
    if limited < 0.0:
        limited += max_value
    # x/max_value can round up to the next integer for tiny negative x
    return 0.0 if limited >= max_value else limited


def limit_fraction(x: float) -> float:
    """Wrap a fraction of a day into [0, 1)."""
    return limit_to(x, 1.0)


def add_fraction_of_day(day: datetime, fraction: float) -> datetime:
    """
    Turn a fraction of the UT day into a civil instant on the civil day of `day`.

    The zone offset at local midnight is folded into the fraction, which is
    then wrapped to one day and added to local midnight. The addition is done
    on absolute time so DST transitions later in the day are respected.
    """
    midnight = day.replace(hour=0, minute=0, second=0, microsecond=0)
    offset = midnight.utcoffset()
    offset_fraction = offset.total_seconds() * 1000.0 / MS_PER_DAY if offset is not None else 0.0
    add_ms = int(MS_PER_DAY * limit_fraction(fraction + offset_fraction))

    shifted = midnight.astimezone(timezone.utc) + timedelta(milliseconds=add_ms)
    return shifted.astimezone(day.tzinfo)
