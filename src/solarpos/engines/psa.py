"""
solarpos.engines.psa
--------------------
The "PSA" sun position algorithm of Blanco-Muriel et al., "Computing the
solar vector", Solar Energy 70 (2001) 431-441.

About 0.5 arcminutes accuracy for 1999-2015. No Delta T input and no
refraction correction; kept for comparison with older datasets.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Tuple

from ..core.errors import check_lat_lon
from ..core.time import J2000, to_utc
from ..core.types import SolarPosition
from ._math import limit_degrees

logger = logging.getLogger(__name__)

VALID_YEARS = (1999, 2015)

EARTH_MEAN_RADIUS_KM = 6371.01
ASTRONOMICAL_UNIT_KM = 149597890.0


def _elapsed_days(u: datetime) -> Tuple[float, float]:
    """(days since J2000, decimal UT hours); integer day number as in the paper."""
    hours = u.hour + (u.minute + u.second / 60.0) / 60.0
    # C-style integer division truncates toward zero
    aux1 = int((u.month - 14) / 12)
    aux2 = (
        int(1461 * (u.year + 4800 + aux1) / 4)
        + int(367 * (u.month - 2 - 12 * aux1) / 12)
        - int(3 * int((u.year + 4900 + aux1) / 100) / 4)
        + u.day - 32075
    )
    jd = aux2 - 0.5 + hours / 24.0
    return jd - J2000, hours


def calculate_solar_position(dt: datetime, latitude: float, longitude: float) -> SolarPosition:
    check_lat_lon(latitude, longitude)
    u = to_utc(dt)
    if not VALID_YEARS[0] <= u.year <= VALID_YEARS[1]:
        logger.warning("psa is valid for %d-%d, got year %d", VALID_YEARS[0], VALID_YEARS[1], u.year)

    n, hours = _elapsed_days(u)

    # ecliptic coordinates, radians, not reduced to [0, 2pi)
    omega = 2.1429 - 0.0010394594 * n
    mean_longitude = 4.8950630 + 0.017202791698 * n
    mean_anomaly = 6.2400600 + 0.0172019699 * n
    ecliptic_longitude = (
        mean_longitude
        + 0.03341607 * math.sin(mean_anomaly)
        + 0.00034894 * math.sin(2.0 * mean_anomaly)
        - 0.0001134
        - 0.0000203 * math.sin(omega)
    )
    obliquity = 0.4090928 - 6.2140e-9 * n + 0.0000396 * math.cos(omega)

    # celestial coordinates
    s_lam = math.sin(ecliptic_longitude)
    ra = math.atan2(math.cos(obliquity) * s_lam, math.cos(ecliptic_longitude))
    if ra < 0.0:
        ra += 2.0 * math.pi
    declination = math.asin(math.sin(obliquity) * s_lam)

    # local coordinates
    gmst = 6.6974243242 + 0.0657098283 * n + hours
    lmst = math.radians(gmst * 15.0 + longitude)
    hour_angle = lmst - ra
    phi = math.radians(latitude)
    c_phi, s_phi = math.cos(phi), math.sin(phi)
    c_h = math.cos(hour_angle)

    zenith = math.acos(max(-1.0, min(1.0, c_phi * c_h * math.cos(declination) + math.sin(declination) * s_phi)))
    azimuth = math.atan2(-math.sin(hour_angle), math.tan(declination) * c_phi - s_phi * c_h)
    if azimuth < 0.0:
        azimuth += 2.0 * math.pi

    parallax = (EARTH_MEAN_RADIUS_KM / ASTRONOMICAL_UNIT_KM) * math.sin(zenith)
    return SolarPosition(azimuth=limit_degrees(math.degrees(azimuth)), zenith_angle=math.degrees(zenith + parallax))
