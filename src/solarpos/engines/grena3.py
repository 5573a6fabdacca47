"""
solarpos.engines.grena3
-----------------------
Algorithm no. 3 of Grena, "Five new algorithms for the computation of sun
position from 2010 to 2110", Solar Energy 86 (2012) 1323-1337.

Closed-form and much cheaper than SPA; advertised maximum error 0.01° within
2010-2110. Outside that window it still returns a value, with a warning.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from ..core.errors import check_lat_lon
from ..core.time import to_utc
from ..core.types import AtmosphericParameters, SolarPosition
from ._math import limit_degrees

logger = logging.getLogger(__name__)

VALID_YEARS = (2010, 2110)


def grena_t(dt: datetime) -> float:
    """Days since 2060-01-01 0h UT, via the truncated calendar formula of the paper."""
    u = to_utc(dt)
    y, m, d = u.year, u.month, u.day
    h = u.hour + u.minute / 60.0 + u.second / 3600.0
    if m <= 2:
        m += 12
        y -= 1
    return (
        int(365.25 * (y - 2000)) + int(30.6001 * (m + 1)) - int(0.01 * y)
        + d + 0.0416667 * h - 21958
    )


def _refraction_rad(e: float, atmosphere: AtmosphericParameters) -> float:
    if not atmosphere.refraction_enabled or e <= 0.0:
        return 0.0
    p, t = atmosphere.pressure, atmosphere.temperature
    return 0.08422 * (p / 1000.0) / ((273.0 + t) * math.tan(e + 0.003138 / (e + 0.08919)))


def calculate_solar_position(
    dt: datetime,
    latitude: float,
    longitude: float,
    delta_t: float,
    pressure: float = math.nan,
    temperature: float = math.nan,
) -> SolarPosition:
    """Topocentric azimuth/zenith in degrees; arguments as for the SPA engine, minus elevation."""
    check_lat_lon(latitude, longitude)
    year = to_utc(dt).year
    if not VALID_YEARS[0] <= year <= VALID_YEARS[1]:
        logger.warning("grena3 is valid for %d-%d, got year %d", VALID_YEARS[0], VALID_YEARS[1], year)

    t = grena_t(dt)
    t_e = t + 1.1574e-5 * delta_t
    omega = 0.0172019715 * t_e

    lam = (
        -1.388803 + 1.720279216e-2 * t_e
        + 3.3366e-2 * math.sin(omega - 0.06172)
        + 3.53e-4 * math.sin(2.0 * omega - 0.1163)
    )
    epsilon = 4.089567e-1 - 6.19e-9 * t_e

    s_lam, c_lam = math.sin(lam), math.cos(lam)
    s_eps = math.sin(epsilon)
    c_eps = math.sqrt(1.0 - s_eps * s_eps)

    alpha = math.atan2(s_lam * c_eps, c_lam)
    if alpha < 0.0:
        alpha += 2.0 * math.pi
    delta = math.asin(s_lam * s_eps)

    # hour angle in [-pi, pi)
    hour = 1.7528311 + 6.300388099 * t + math.radians(longitude) - alpha
    hour = math.fmod(hour + math.pi, 2.0 * math.pi) - math.pi
    if hour < -math.pi:
        hour += 2.0 * math.pi

    s_phi = math.sin(math.radians(latitude))
    c_phi = math.sqrt(1.0 - s_phi * s_phi)
    s_delta = math.sin(delta)
    c_delta = math.sqrt(1.0 - s_delta * s_delta)
    s_h, c_h = math.sin(hour), math.cos(hour)

    # products of sqrt-derived cosines can overshoot 1 near the zenith
    s_e0 = max(-1.0, min(1.0, s_phi * s_delta + c_phi * c_delta * c_h))
    e_p = math.asin(s_e0) - 4.26e-5 * math.sqrt(1.0 - s_e0 * s_e0)
    gamma = math.atan2(s_h, c_h * s_phi - s_delta * c_phi / c_delta)

    z = math.pi / 2.0 - e_p - _refraction_rad(e_p, AtmosphericParameters(pressure, temperature))

    return SolarPosition(azimuth=limit_degrees(math.degrees(gamma + math.pi)), zenith_angle=math.degrees(z))
