"""
solarpos.engines.deltat
-----------------------
ΔT (= TT − UT) estimates in seconds.

Espenak & Meeus piecewise polynomials from the Five Millennium Canon of Solar
Eclipses (NASA/TP-2006-214141), with the 2014 update of the post-2005
branches by Espenak (eclipsewise.com, "deltatpoly2014"). Covers everything
before year 3000; there is no extrapolation beyond it.
"""

from __future__ import annotations

import datetime as _dt

from ._math import polynomial

MAX_YEAR = 3000.0


def decimal_year(year: int, month: int = 1) -> float:
    """Mid-month decimal year, y = year + (month - 0.5)/12. Years are astronomical (1 BC = 0)."""
    return year + (month - 0.5) / 12.0


def delta_t_seconds(y: float) -> float:
    """ΔT(y) in seconds for a decimal year y. Raises ValueError after year 3000."""
    if y < -500.0:
        u = (y - 1820.0) / 100.0
        return -20.0 + 32.0 * u * u
    if y < 500.0:
        return polynomial(y / 100.0, (
            10583.6, -1014.41, 33.78311, -5.952053,
            -0.1798452, 0.022174192, 0.0090316521,
        ))
    if y < 1600.0:
        return polynomial((y - 1000.0) / 100.0, (
            1574.2, -556.01, 71.23472, 0.319781,
            -0.8503463, -0.005050998, 0.0083572073,
        ))
    if y < 1700.0:
        return polynomial(y - 1600.0, (120.0, -0.9808, -0.01532, 1.0 / 7129.0))
    if y < 1800.0:
        return polynomial(y - 1700.0, (8.83, 0.1603, -0.0059285, 0.00013336, -1.0 / 1174000.0))
    if y < 1860.0:
        return polynomial(y - 1800.0, (
            13.72, -0.332447, 0.0068612, 0.0041116, -0.00037436,
            0.0000121272, -0.0000001699, 0.000000000875,
        ))
    if y < 1900.0:
        return polynomial(y - 1860.0, (7.62, 0.5737, -0.251754, 0.01680668, -0.0004473624, 1.0 / 233174.0))
    if y < 1920.0:
        return polynomial(y - 1900.0, (-2.79, 1.494119, -0.0598939, 0.0061966, -0.000197))
    if y < 1941.0:
        return polynomial(y - 1920.0, (21.20, 0.84493, -0.076100, 0.0020936))
    if y < 1961.0:
        return polynomial(y - 1950.0, (29.07, 0.407, -1.0 / 233.0, 1.0 / 2547.0))
    if y < 1986.0:
        return polynomial(y - 1975.0, (45.45, 1.067, -1.0 / 260.0, -1.0 / 718.0))
    if y < 2005.0:
        return polynomial(y - 2000.0, (63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599))
    # 2014 update
    if y < 2015.0:
        return polynomial(y - 2005.0, (64.69, 0.2930))
    if y <= MAX_YEAR:
        return polynomial(y - 2015.0, (67.62, 0.3645, 0.0039755))
    raise ValueError(f"no delta T estimate for year {y:.2f} (after {MAX_YEAR:.0f})")


def estimate(d: _dt.date) -> float:
    """ΔT estimate (seconds) for a calendar date; datetimes are accepted and read by their date."""
    return delta_t_seconds(decimal_year(d.year, d.month))
