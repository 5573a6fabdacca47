"""
solarpos.engines.spa
--------------------
Topocentric solar position after the NREL Solar Position Algorithm:
Reda, I.; Andreas, A. (2003), "Solar Position Algorithm for Solar Radiation
Applications", NREL/TP-560-34302, revised January 2008.

Valid for the years -2000 to 6000 with an uncertainty of ±0.0003°.

The computation is split in two halves. The first (steps A.4.1 - A.4.9 of the
report) depends only on the instant and yields geocentric right ascension,
declination and apparent sidereal time. The second applies the observer's
location: hour angle, parallax, refraction, azimuth and zenith. Bulk
evaluation of many sites at one instant reuses the first half.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence, Tuple

from ..core.errors import check_lat_lon
from ..core.time import J2000, JulianDate
from ..core.types import AtmosphericParameters, SolarPosition
from ._math import clamped_asin, limit_degrees, polynomial, refraction_correction_deg
from .spa_tables import (
    NUTATION_COEFFS,
    OBLIQUITY_COEFFS,
    TERMS_B,
    TERMS_L,
    TERMS_PE,
    TERMS_R,
    TERMS_Y,
)

EARTH_FLATTENING = 0.99664719   # 1 - f
EARTH_RADIUS_M = 6378140.0


# ============================================================
# Heliocentric L, B, R (A.4.2 - A.4.3)
# ============================================================

def _lbr_terms(jme: float, table: Sequence[Sequence[Tuple[float, float, float]]]) -> Tuple[float, ...]:
    # rows are listed by decreasing amplitude; sum the small ones first
    return tuple(
        math.fsum(a * math.cos(b + c * jme) for a, b, c in reversed(rows))
        for rows in table
    )


def _lbr_polynomial(jme: float, table) -> float:
    return polynomial(jme, _lbr_terms(jme, table)) / 1e8


def heliocentric_longitude_deg(jme: float) -> float:
    return limit_degrees(math.degrees(_lbr_polynomial(jme, TERMS_L)))


def heliocentric_latitude_deg(jme: float) -> float:
    return limit_degrees(math.degrees(_lbr_polynomial(jme, TERMS_B)))


def earth_radius_vector(jme: float) -> float:
    """Earth-sun distance in AU."""
    return _lbr_polynomial(jme, TERMS_R)


# ============================================================
# Nutation and obliquity (A.4.4 - A.4.6)
# ============================================================

@dataclass(frozen=True)
class Nutation:
    delta_psi: float       # nutation in longitude, degrees
    delta_epsilon: float   # nutation in obliquity, degrees


def nutation(jce: float) -> Nutation:
    x = [polynomial(jce, coeffs) for coeffs in NUTATION_COEFFS]

    psi_sum = 0.0
    eps_sum = 0.0
    for (a, b, c, d), y in zip(TERMS_PE, TERMS_Y):
        arg = math.radians(sum(xj * yj for xj, yj in zip(x, y)))
        psi_sum += (a + b * jce) * math.sin(arg)
        eps_sum += (c + d * jce) * math.cos(arg)

    return Nutation(delta_psi=psi_sum / 36000000.0, delta_epsilon=eps_sum / 36000000.0)


def true_obliquity_deg(jme: float, delta_epsilon: float) -> float:
    epsilon0 = polynomial(jme / 10.0, OBLIQUITY_COEFFS)
    return epsilon0 / 3600.0 + delta_epsilon


def apparent_sidereal_time_deg(jd: JulianDate, delta_psi: float, epsilon_deg: float) -> float:
    """Apparent sidereal time at Greenwich, ν (A.4.8)."""
    jc = jd.julian_century
    nu0 = limit_degrees(
        280.46061837
        + 360.98564736629 * (jd.julian_date - J2000)
        + 0.000387933 * jc * jc
        - jc * jc * jc / 38710000.0
    )
    return nu0 + delta_psi * math.cos(math.radians(epsilon_deg))


# ============================================================
# Geocentric sun coordinates (A.4.7, A.4.9 - A.4.10)
# ============================================================

def geocentric_right_ascension_deg(beta: float, epsilon: float, lam: float) -> float:
    alpha = math.atan2(
        math.sin(lam) * math.cos(epsilon) - math.tan(beta) * math.sin(epsilon),
        math.cos(lam),
    )
    return limit_degrees(math.degrees(alpha))


def geocentric_declination_deg(beta: float, epsilon: float, lam: float) -> float:
    return math.degrees(clamped_asin(
        math.sin(beta) * math.cos(epsilon) + math.cos(beta) * math.sin(epsilon) * math.sin(lam)
    ))


@dataclass(frozen=True)
class AlphaDelta:
    alpha: float   # geocentric right ascension, degrees [0, 360)
    delta: float   # geocentric declination, degrees
    r: float       # earth radius vector, AU


def alpha_delta(jme: float, delta_psi: float, epsilon_deg: float) -> AlphaDelta:
    """Geocentric (α, δ) for a given JME, with nutation and obliquity supplied by the caller."""
    l_deg = heliocentric_longitude_deg(jme)
    b_deg = heliocentric_latitude_deg(jme)
    r = earth_radius_vector(jme)

    theta_deg = limit_degrees(l_deg + 180.0)
    beta = math.radians(-b_deg)
    epsilon = math.radians(epsilon_deg)

    # aberration
    delta_tau = -20.4898 / (3600.0 * r)
    lam = math.radians(theta_deg + delta_psi + delta_tau)

    return AlphaDelta(
        alpha=geocentric_right_ascension_deg(beta, epsilon, lam),
        delta=geocentric_declination_deg(beta, epsilon, lam),
        r=r,
    )


# ============================================================
# Split entry point
# ============================================================

@dataclass(frozen=True)
class SpaTimeDependent:
    """Observer-independent intermediate results for one instant."""
    julian_date: JulianDate
    nu: float      # apparent sidereal time at Greenwich, degrees
    alpha: float   # geocentric right ascension, degrees
    delta: float   # geocentric declination, degrees
    r: float       # earth radius vector, AU


def time_dependent_parts_for(jd: JulianDate) -> SpaTimeDependent:
    jme = jd.julian_ephemeris_millennium
    nut = nutation(jd.julian_ephemeris_century)
    epsilon_deg = true_obliquity_deg(jme, nut.delta_epsilon)
    ad = alpha_delta(jme, nut.delta_psi, epsilon_deg)
    nu = apparent_sidereal_time_deg(jd, nut.delta_psi, epsilon_deg)
    return SpaTimeDependent(julian_date=jd, nu=nu, alpha=ad.alpha, delta=ad.delta, r=ad.r)


def calculate_time_dependent_parts(dt: datetime, delta_t: float) -> SpaTimeDependent:
    """Compute everything that depends on time only, for reuse across many locations."""
    return time_dependent_parts_for(JulianDate.from_datetime(dt, delta_t))


def calculate_solar_position_with_time_dependent_parts(
    latitude: float,
    longitude: float,
    elevation: float,
    parts: SpaTimeDependent,
    pressure: float = math.nan,
    temperature: float = math.nan,
) -> SolarPosition:
    """Finish a position from precomputed time-dependent parts."""
    check_lat_lon(latitude, longitude)

    # observer local hour angle
    h_deg = limit_degrees(parts.nu + longitude - parts.alpha)
    h = math.radians(h_deg)

    # topocentric parallax
    xi = math.radians(8.794 / (3600.0 * parts.r))
    phi = math.radians(latitude)
    delta = math.radians(parts.delta)
    u = math.atan(EARTH_FLATTENING * math.tan(phi))
    x = math.cos(u) + elevation * math.cos(phi) / EARTH_RADIUS_M
    y = EARTH_FLATTENING * math.sin(u) + elevation * math.sin(phi) / EARTH_RADIUS_M

    denom = math.cos(delta) - x * math.sin(xi) * math.cos(h)
    delta_alpha = math.atan2(-x * math.sin(xi) * math.sin(h), denom)
    delta_prime = math.atan2((math.sin(delta) - y * math.sin(xi)) * math.cos(delta_alpha), denom)

    h_prime = math.radians(h_deg - math.degrees(delta_alpha))

    return topocentric_position(
        phi, delta_prime, h_prime, AtmosphericParameters(pressure, temperature)
    )


def topocentric_position(
    phi: float, delta_prime: float, h_prime: float, atmosphere: AtmosphericParameters
) -> SolarPosition:
    """Zenith (with refraction) and azimuth from topocentric δ′ and H′, all in radians (A.4.13 - A.4.16)."""
    e0_deg = math.degrees(clamped_asin(
        math.sin(phi) * math.sin(delta_prime)
        + math.cos(phi) * math.cos(delta_prime) * math.cos(h_prime)
    ))
    delta_e = refraction_correction_deg(e0_deg, atmosphere)
    zenith = 90.0 - (e0_deg + delta_e)

    gamma = math.atan2(
        math.sin(h_prime),
        math.cos(h_prime) * math.sin(phi) - math.tan(delta_prime) * math.cos(phi),
    )
    azimuth = limit_degrees(limit_degrees(math.degrees(gamma)) + 180.0)

    return SolarPosition(azimuth=azimuth, zenith_angle=zenith)


def calculate_solar_position(
    dt: datetime,
    latitude: float,
    longitude: float,
    elevation: float,
    delta_t: float,
    pressure: float = math.nan,
    temperature: float = math.nan,
) -> SolarPosition:
    """
    Topocentric solar position for an aware datetime and an observer.

    latitude/longitude in degrees (negative south/west), elevation in meters,
    delta_t in seconds, pressure in hPa and temperature in °C. Leaving
    pressure/temperature unset (NaN) or passing implausible values skips
    the refraction correction.
    """
    check_lat_lon(latitude, longitude)
    parts = calculate_time_dependent_parts(dt, delta_t)
    return calculate_solar_position_with_time_dependent_parts(
        latitude, longitude, elevation, parts, pressure, temperature
    )
