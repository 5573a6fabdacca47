#!/usr/bin/env python3
"""
Validate SPA against a JPL development ephemeris through skyfield.

Both sides are computed without refraction, with skyfield's own ΔT model fed
to SPA so that only the sun/earth models are compared.
"""
from __future__ import annotations

import argparse
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from solarpos.engines import spa


def _need_skyfield():
    try:
        from skyfield.api import Loader, wgs84
        return Loader, wgs84
    except ImportError as e:
        raise RuntimeError('Need skyfield. Install: pip install "solarpos[ephemeris]"') from e


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate SPA azimuth/zenith against a JPL ephemeris (skyfield).")
    p.add_argument("--lat", type=float, default=39.742476)
    p.add_argument("--lon", type=float, default=-105.1786)
    p.add_argument("--elevation", type=float, default=1830.14)
    p.add_argument("--year-start", type=int, default=1950)
    p.add_argument("--year-end", type=int, default=2050)
    p.add_argument("--step-days", type=float, default=17.3)
    p.add_argument("--bsp", default="de421.bsp", help="Ephemeris file name (downloaded on first use)")
    p.add_argument("--data-dir", default=".", help="Directory for ephemeris and timescale files")
    args = p.parse_args(argv)

    Loader, wgs84 = _need_skyfield()
    load = Loader(args.data_dir)

    print(f"Loading {args.bsp}...")
    eph = load(args.bsp)
    ts = load.timescale()
    sun, earth = eph["sun"], eph["earth"]
    site = earth + wgs84.latlon(args.lat, args.lon, elevation_m=args.elevation)

    start = datetime(args.year_start, 1, 1, tzinfo=timezone.utc)
    end = datetime(args.year_end, 12, 31, tzinfo=timezone.utc)
    step = timedelta(days=args.step_days)

    n = 0
    max_az = 0.0
    max_zen = 0.0
    t = start
    while t < end:
        st = ts.from_datetime(t)
        alt, az, _ = site.at(st).observe(sun).apparent().altaz()
        ref_zen = 90.0 - alt.degrees
        if ref_zen < 85.0:
            dt_s = float(st.delta_t)
            pos = spa.calculate_solar_position(t, args.lat, args.lon, args.elevation, dt_s)
            d_az = abs((pos.azimuth - az.degrees + 180.0) % 360.0 - 180.0)
            d_zen = abs(pos.zenith_angle - ref_zen)
            max_az = max(max_az, d_az)
            max_zen = max(max_zen, d_zen)
            n += 1
        t += step

    print(f"SPA vs {args.bsp}: {n} daytime samples {args.year_start}-{args.year_end}")
    print(f"  max |azimuth error| = {max_az * 3600.0:.2f} arcsec")
    print(f"  max |zenith error|  = {max_zen * 3600.0:.2f} arcsec")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
