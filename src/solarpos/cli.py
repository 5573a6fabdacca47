from __future__ import annotations

import argparse
from datetime import date, datetime, timedelta, timezone, tzinfo
import logging
import sys
import importlib
import inspect
from typing import Optional

from .core.errors import SolarposError


_HORIZONS = {
    "sunrise": "SUNRISE_SUNSET",
    "civil": "CIVIL_TWILIGHT",
    "nautical": "NAUTICAL_TWILIGHT",
    "astronomical": "ASTRONOMICAL_TWILIGHT",
}


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _parse_time(s: str) -> datetime:
    """ISO 8601 with an explicit offset (or Z)."""
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        raise ValueError(f"time needs a UTC offset: {s!r}")
    return dt


def _zone(tz_name: Optional[str], tz_offset: Optional[float]) -> tzinfo:
    if tz_name:
        from zoneinfo import ZoneInfo
        return ZoneInfo(tz_name)
    if tz_offset is not None:
        return timezone(timedelta(hours=tz_offset))
    return timezone.utc


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(exc: Exception) -> int:
    print(f"error: {exc}", file=sys.stderr)
    return 2


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_position(argv: list[str]) -> int:
    import solarpos
    from solarpos.engines import deltat

    p = argparse.ArgumentParser(prog="solarpos position", description="Topocentric solar azimuth and zenith angle.")
    p.add_argument("--time", required=True, help="ISO 8601 instant with offset, e.g. 2003-10-17T12:30:30-07:00")
    p.add_argument("--lat", type=float, required=True, help="Observer latitude in degrees (negative south)")
    p.add_argument("--lon", type=float, required=True, help="Observer longitude in degrees (negative west)")
    p.add_argument("--elevation", type=float, default=0.0, help="Observer elevation in meters")
    p.add_argument("--delta-t", type=float, default=None, help="TT - UT in seconds (default: estimated)")
    p.add_argument("--pressure", type=float, default=float("nan"), help="Pressure in hPa (enables refraction)")
    p.add_argument("--temperature", type=float, default=float("nan"), help="Temperature in °C (enables refraction)")
    p.add_argument("--engine", default="spa", help="Position engine (spa, grena3, psa, ...)")
    _add_common(p)
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        dt = _parse_time(args.time)
        delta_t = args.delta_t if args.delta_t is not None else deltat.estimate(dt.astimezone(timezone.utc).date())
        pos = solarpos.solar_position(
            dt, args.lat, args.lon, args.elevation, delta_t, args.pressure, args.temperature,
            engine=args.engine,
        )
    except (SolarposError, ValueError, KeyError) as exc:
        return _fail(exc)

    print("Input:")
    print(f"  time    = {dt.isoformat()}")
    print(f"  engine  = {args.engine}")
    print(f"  delta T = {delta_t:.2f} s")
    print()
    print("Solar Position (degrees):")
    print(f"  Azimuth      = {pos.azimuth:.6f}")
    print(f"  Zenith angle = {pos.zenith_angle:.6f}")
    print(f"  Elevation    = {pos.elevation:.6f}")
    return 0


def cmd_sunrise(argv: list[str]) -> int:
    import solarpos
    from solarpos.core.types import AllDay, AllNight, Horizon
    from solarpos.engines import deltat

    p = argparse.ArgumentParser(prog="solarpos sunrise", description="Sunrise, transit and sunset for one day.")
    p.add_argument("--date", required=True, help="YYYY-MM-DD")
    p.add_argument("--lat", type=float, required=True, help="Observer latitude in degrees (negative south)")
    p.add_argument("--lon", type=float, required=True, help="Observer longitude in degrees (negative west)")
    p.add_argument("--tz-offset", type=float, default=None, help="Fixed UTC offset in hours for the output")
    p.add_argument("--tz", default=None, help="IANA time zone name for the output (overrides --tz-offset)")
    p.add_argument("--delta-t", type=float, default=None, help="TT - UT in seconds (default: estimated)")
    p.add_argument(
        "--horizon",
        action="append",
        choices=sorted(_HORIZONS),
        default=[],
        help="Horizon definition (repeatable; default: sunrise)",
    )
    _add_common(p)
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    horizons = [Horizon[_HORIZONS[h]] for h in (args.horizon or ["sunrise"])]
    try:
        d = _parse_ymd(args.date)
        day = datetime(d.year, d.month, d.day, 12, tzinfo=_zone(args.tz, args.tz_offset))
        delta_t = args.delta_t if args.delta_t is not None else deltat.estimate(d)
        results = solarpos.sunrise_transit_set_batch(day, args.lat, args.lon, delta_t, horizons)
    except (SolarposError, ValueError) as exc:
        return _fail(exc)

    print(f"Date {d.isoformat()} at lat={args.lat} lon={args.lon} (delta T = {delta_t:.2f} s)")
    for h in horizons:
        res = results[h]
        print()
        print(f"{h.name} ({h.elevation} deg):")
        if isinstance(res, AllDay):
            print("  Sun stays above the horizon all day.")
        elif isinstance(res, AllNight):
            print("  Sun stays below the horizon all day.")
        else:
            print(f"  Rise    : {res.sunrise.isoformat()}")
        print(f"  Transit : {res.transit.isoformat()}")
        if not isinstance(res, (AllDay, AllNight)):
            print(f"  Set     : {res.sunset.isoformat()}")
    return 0


def cmd_deltat(argv: list[str]) -> int:
    from solarpos.engines import deltat

    p = argparse.ArgumentParser(prog="solarpos deltat", description="Estimate Delta T (TT - UT) for a date.")
    p.add_argument("--date", required=True, help="YYYY-MM-DD")
    _add_common(p)
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        value = deltat.estimate(_parse_ymd(args.date))
    except ValueError as exc:
        return _fail(exc)
    print(f"{value:.3f}")
    return 0


def cmd_julian(argv: list[str]) -> int:
    import solarpos

    p = argparse.ArgumentParser(prog="solarpos julian", description="Julian Date and derived ephemeris times.")
    p.add_argument("--time", required=True, help="ISO 8601 instant with offset")
    p.add_argument("--delta-t", type=float, default=0.0, help="TT - UT in seconds")
    _add_common(p)
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        jd = solarpos.julian_date(_parse_time(args.time), args.delta_t)
    except ValueError as exc:
        return _fail(exc)

    print(f"  JD   = {jd.julian_date:.8f}")
    print(f"  JDE  = {jd.julian_ephemeris_day:.8f}")
    print(f"  JC   = {jd.julian_century:.10f}")
    print(f"  JCE  = {jd.julian_ephemeris_century:.10f}")
    print(f"  JME  = {jd.julian_ephemeris_millennium:.10f}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="solarpos", description="Solar position and sunrise/sunset toolkit CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("position", help="Topocentric solar position at an instant.", add_help=False)
    sub.add_parser("sunrise", help="Sunrise, transit and sunset for a day.", add_help=False)
    sub.add_parser("deltat", help="Estimate Delta T for a date.", add_help=False)
    sub.add_parser("julian", help="Julian Date of an instant.", add_help=False)

    p_diag = sub.add_parser("diag", help="Diagnostics tools (need optional extras)")
    p_diag.add_argument(
        "tool",
        choices=["compare-fast", "validate-skyfield"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    if args.cmd == "position":
        return cmd_position(rest)

    if args.cmd == "sunrise":
        return cmd_sunrise(rest)

    if args.cmd == "deltat":
        return cmd_deltat(rest)

    if args.cmd == "julian":
        return cmd_julian(rest)

    if args.cmd == "diag":
        tool_map = {
            "compare-fast": "solarpos.diagnostics.compare_fast",
            "validate-skyfield": "solarpos.diagnostics.validate_skyfield",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
