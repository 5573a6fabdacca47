"""
solarpos.engines._math
----------------------
Angle limiting, polynomials and the refraction term shared by the engines.
"""

from __future__ import annotations

import math
from typing import Sequence

from ..core.time import limit_to
from ..core.types import AtmosphericParameters

# Sun radius and mean refraction at the horizon (degrees). Below their sum
# the sun has fully set and no refraction correction is applied.
SUN_RADIUS = 0.26667
MEAN_HORIZON_REFRACTION = 0.5667


def limit_degrees(deg: float) -> float:
    return limit_to(deg, 360.0)


def limit_hour_angle(deg: float) -> float:
    """Wrap an hour angle (degrees) into [-180, 180]."""
    limited = limit_degrees(deg)
    if limited > 180.0:
        return limited - 360.0
    return limited


def polynomial(x: float, coeffs: Sequence[float]) -> float:
    """Horner evaluation for Σ coeffs[k] x^k."""
    acc = 0.0
    for c in reversed(coeffs):
        acc = acc * x + c
    return acc


def clamped_asin(x: float) -> float:
    """asin tolerant of |x| exceeding 1 by rounding error."""
    return math.asin(max(-1.0, min(1.0, x)))


def refraction_correction_deg(e0_deg: float, atmosphere: AtmosphericParameters) -> float:
    """
    Atmospheric refraction Δe (degrees) for a true elevation e0 (SPA eq. 42).

    Zero when refraction is disabled or the sun is below the standard
    rise/set threshold.
    """
    if not atmosphere.refraction_enabled:
        return 0.0
    if e0_deg < -(SUN_RADIUS + MEAN_HORIZON_REFRACTION):
        return 0.0
    p, t = atmosphere.pressure, atmosphere.temperature
    return (
        (p / 1010.0)
        * (283.0 / (273.0 + t))
        * 1.02 / (60.0 * math.tan(math.radians(e0_deg + 10.3 / (e0_deg + 5.11))))
    )
