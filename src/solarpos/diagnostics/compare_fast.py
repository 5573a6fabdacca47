#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from solarpos.engines import deltat, grena3, psa, spa


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "solarpos[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "solarpos[diagnostics]"') from e


def _angle_diff(a: float, b: float) -> float:
    return (a - b + 180.0) % 360.0 - 180.0


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Compare the fast engines (Grena3, PSA) against SPA.")
    p.add_argument("--lat", type=float, default=52.5)
    p.add_argument("--lon", type=float, default=13.4)
    p.add_argument("--year-start", type=int, default=2010)
    p.add_argument("--year-end", type=int, default=2110)
    p.add_argument("--step-hours", type=float, default=97.0, help="Sampling step (odd values avoid aliasing with the day)")
    p.add_argument("--engine", choices=["grena3", "psa"], default="grena3")
    p.add_argument("--out-png", default="compare_fast.png")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    # per-sample validity-window warnings
    logging.getLogger("solarpos.engines").setLevel(logging.ERROR)

    start = datetime(args.year_start, 1, 1, tzinfo=timezone.utc)
    end = datetime(args.year_end, 12, 31, tzinfo=timezone.utc)
    step = timedelta(hours=args.step_hours)

    years = []
    err_az = []
    err_zen = []

    t = start
    while t < end:
        dt_s = deltat.estimate(t.date())
        ref = spa.calculate_solar_position(t, args.lat, args.lon, 0.0, dt_s)
        # azimuth is meaningless near the zenith; skip the sun below the horizon too
        if 5.0 < ref.zenith_angle < 90.0:
            if args.engine == "grena3":
                fast = grena3.calculate_solar_position(t, args.lat, args.lon, dt_s)
            else:
                fast = psa.calculate_solar_position(t, args.lat, args.lon)
            years.append(t.year + (t.timetuple().tm_yday - 0.5) / 365.25)
            err_az.append(_angle_diff(fast.azimuth, ref.azimuth))
            err_zen.append(fast.zenith_angle - ref.zenith_angle)
        t += step

    years = np.asarray(years)
    err_az = np.asarray(err_az)
    err_zen = np.asarray(err_zen)

    print(f"{args.engine} vs spa at lat={args.lat} lon={args.lon}, {len(years)} daytime samples")
    print(f"  azimuth : max |err| = {np.max(np.abs(err_az)):.5f} deg, rms = {math.sqrt(np.mean(err_az ** 2)):.5f} deg")
    print(f"  zenith  : max |err| = {np.max(np.abs(err_zen)):.5f} deg, rms = {math.sqrt(np.mean(err_zen ** 2)):.5f} deg")

    fig, axs = plt.subplots(2, 1, figsize=(12, 7), sharex=True)

    axs[0].scatter(years, err_az, s=1, alpha=0.5, color='orange')
    axs[0].set_title(f"Azimuth Error ({args.engine} - SPA)")
    axs[0].set_ylabel("Error (deg)")
    axs[0].grid(True, alpha=0.3)

    axs[1].scatter(years, err_zen, s=1, alpha=0.5, color='blue')
    axs[1].set_title(f"Zenith Angle Error ({args.engine} - SPA)")
    axs[1].set_ylabel("Error (deg)")
    axs[1].set_xlabel("Year")
    axs[1].grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(args.out_png, dpi=200)
    print(f"Plot saved to {args.out_png}")

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
