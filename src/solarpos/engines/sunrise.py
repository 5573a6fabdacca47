"""
solarpos.engines.sunrise
------------------------
Sunrise, sun transit and sunset after appendix A.2 of the NREL SPA report.

Geocentric (α, δ) is evaluated at 0h TT for the day before, the day itself
and the day after; the three approximate event times are then refined by
quadratic interpolation over those samples. Whether the day has a sunrise at
all (or is polar day/night) is decided once, from the hour angle at which the
sun's centre meets the horizon elevation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Iterable, Optional, Tuple, Union

from ..core.errors import check_lat_lon
from ..core.time import (
    JulianDate,
    add_fraction_of_day,
    julian_date_from_calendar,
    limit_fraction,
    start_of_day_utc,
)
from ..core.types import AllDay, AllNight, Horizon, RegularDay, SunriseResult
from ._math import clamped_asin, limit_hour_angle, limit_to
from .spa import AlphaDelta, alpha_delta, apparent_sidereal_time_deg, nutation, true_obliquity_deg

logger = logging.getLogger(__name__)

HorizonLike = Union[Horizon, float]


def _horizon_elevation(horizon: HorizonLike) -> float:
    if isinstance(horizon, Horizon):
        return horizon.elevation
    return float(horizon)


def _as_day(day: Union[date, datetime]) -> datetime:
    if isinstance(day, datetime):
        if day.tzinfo is None or day.utcoffset() is None:
            raise ValueError("day must be timezone-aware")
        return day
    return start_of_day_utc(day)


def _limit_if_necessary(val: float) -> float:
    """Differences above 2 in magnitude are wraparounds (α near 0°/360°), not motion."""
    return limit_to(val, 1.0) if abs(val) > 2.0 else val


# ============================================================
# Day-invariant part (A.2.1 - A.2.3)
# ============================================================

@dataclass(frozen=True)
class DayContext:
    """Quantities shared by every horizon on one day at one site."""
    day: datetime
    latitude: float
    longitude: float
    delta_t: float
    nu: float                                        # sidereal time at 0h UT, degrees
    samples: Tuple[AlphaDelta, AlphaDelta, AlphaDelta]  # day -1, 0, +1 at 0h TT
    m0: float                                        # approximate transit, fraction of day (unwrapped)

    @property
    def phi(self) -> float:
        return math.radians(self.latitude)


def prepare_day(day: Union[date, datetime], latitude: float, longitude: float, delta_t: float) -> DayContext:
    check_lat_lon(latitude, longitude)
    d = _as_day(day)

    # 0h UT of the calendar date as written (not converted to UTC first)
    jd = JulianDate(julian_date_from_calendar(d.year, d.month, d.day), 0.0)

    nut = nutation(jd.julian_ephemeris_century)
    epsilon_deg = true_obliquity_deg(jd.julian_ephemeris_millennium, nut.delta_epsilon)
    nu = apparent_sidereal_time_deg(jd, nut.delta_psi, epsilon_deg)

    samples = tuple(
        alpha_delta(JulianDate(jd.julian_date + i, 0.0).julian_ephemeris_millennium, nut.delta_psi, epsilon_deg)
        for i in (-1, 0, 1)
    )

    m0 = (samples[1].alpha - longitude - nu) / 360.0
    return DayContext(
        day=d, latitude=latitude, longitude=longitude, delta_t=delta_t,
        nu=nu, samples=samples, m0=m0,
    )


# ============================================================
# Refinement (A.2.8 - A.2.12)
# ============================================================

@dataclass(frozen=True)
class _Refined:
    h_prime: float   # local hour angle, degrees [-180, 180]
    h: float         # sun altitude, degrees
    delta: float     # interpolated declination, degrees


def _refine(ctx: DayContext, m: float) -> _Refined:
    s0, s1, s2 = ctx.samples

    nu_i = ctx.nu + 360.985647 * m
    n = m + ctx.delta_t / 86400.0

    a = _limit_if_necessary(s1.alpha - s0.alpha)
    a_prime = _limit_if_necessary(s1.delta - s0.delta)
    b = _limit_if_necessary(s2.alpha - s1.alpha)
    b_prime = _limit_if_necessary(s2.delta - s1.delta)
    c = b - a
    c_prime = b_prime - a_prime

    alpha_i = s1.alpha + n * (a + b + c * n) / 2.0
    delta_i = s1.delta + n * (a_prime + b_prime + c_prime * n) / 2.0

    h_prime = limit_hour_angle(nu_i + ctx.longitude - alpha_i)

    phi = ctx.phi
    delta_rad = math.radians(delta_i)
    h = math.degrees(clamped_asin(
        math.sin(phi) * math.sin(delta_rad)
        + math.cos(phi) * math.cos(delta_rad) * math.cos(math.radians(h_prime))
    ))
    return _Refined(h_prime=h_prime, h=h, delta=delta_i)


def _transit_fraction(ctx: DayContext, m0: float) -> float:
    return m0 - _refine(ctx, m0).h_prime / 360.0


def _event_fraction(ctx: DayContext, m: float, h0_prime: float) -> float:
    r = _refine(ctx, m)
    return m + (r.h - h0_prime) / (
        360.0 * math.cos(math.radians(r.delta)) * math.cos(ctx.phi) * math.sin(math.radians(r.h_prime))
    )


# ============================================================
# Per-horizon evaluation (A.2.4 - A.2.7, A.2.13 - A.2.15)
# ============================================================

def solve_for_horizon(ctx: DayContext, horizon: HorizonLike) -> SunriseResult:
    h0_prime = _horizon_elevation(horizon)
    phi = ctx.phi
    delta0 = math.radians(ctx.samples[1].delta)

    acos_arg = (math.sin(math.radians(h0_prime)) - math.sin(phi) * math.sin(delta0)) / (
        math.cos(phi) * math.cos(delta0)
    )

    m0 = limit_fraction(ctx.m0)
    transit = add_fraction_of_day(ctx.day, _transit_fraction(ctx, m0))

    if acos_arg < -1.0:
        logger.debug("all day at lat=%s lon=%s on %s (horizon %s)", ctx.latitude, ctx.longitude, ctx.day.date(), horizon)
        return AllDay(transit=transit)
    if acos_arg > 1.0:
        logger.debug("all night at lat=%s lon=%s on %s (horizon %s)", ctx.latitude, ctx.longitude, ctx.day.date(), horizon)
        return AllNight(transit=transit)

    # left unwrapped so interpolation stays on the right side of 0h UT
    h0_deg = limit_to(math.degrees(math.acos(acos_arg)), 180.0)
    m1 = m0 - h0_deg / 360.0
    m2 = m0 + h0_deg / 360.0

    sunrise = add_fraction_of_day(ctx.day, _event_fraction(ctx, m1, h0_prime))
    sunset = add_fraction_of_day(ctx.day, _event_fraction(ctx, m2, h0_prime))
    return RegularDay(sunrise=sunrise, transit=transit, sunset=sunset)


def calculate_sunrise_transit_set(
    day: Union[date, datetime],
    latitude: float,
    longitude: float,
    delta_t: float,
    horizon: HorizonLike = Horizon.SUNRISE_SUNSET,
) -> SunriseResult:
    """
    Sunrise, transit and sunset on the civil day of `day`.

    The time of day of `day` is ignored; results are expressed in its tzinfo.
    `horizon` is a Horizon preset or any sun-centre elevation in degrees.
    """
    return solve_for_horizon(prepare_day(day, latitude, longitude, delta_t), horizon)


def calculate_sunrise_transit_set_batch(
    day: Union[date, datetime],
    latitude: float,
    longitude: float,
    delta_t: float,
    horizons: Optional[Iterable[HorizonLike]] = None,
) -> Dict[HorizonLike, SunriseResult]:
    """Several horizons for one day and site; the day-invariant work is done once."""
    ctx = prepare_day(day, latitude, longitude, delta_t)
    hs = tuple(Horizon) if horizons is None else tuple(horizons)
    return {h: solve_for_horizon(ctx, h) for h in hs}
