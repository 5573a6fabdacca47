from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from .core.engine import EngineRegistry, PositionEngine
from .core.time import JulianDate
from .core.types import AtmosphericParameters, Horizon, SolarPosition, SunriseResult
from .engines import deltat, grena3, spa, sunrise
from .engines.spa import SpaTimeDependent

_registry: Optional[EngineRegistry] = None

def set_registry(reg: EngineRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> EngineRegistry:
    if _registry is None:
        raise RuntimeError("Engine registry not initialized")
    return _registry

def list_engines() -> List[str]:
    return _reg().list()

def get_engine(name: str) -> PositionEngine:
    return _reg().get(name)

def engine_info(name: str) -> Dict[str, Any]:
    return _reg().get(name).info()

def register_engine(name: str, engine: PositionEngine, *, overwrite: bool = False) -> None:
    _reg().register(name, engine, overwrite=overwrite)

# ============================================================
# Solar position
# ============================================================

def solar_position(
    dt: datetime,
    latitude: float,
    longitude: float,
    elevation: float = 0.0,
    delta_t: float = 0.0,
    pressure: float = math.nan,
    temperature: float = math.nan,
    *,
    engine: str = "spa",
) -> SolarPosition:
    """
    Topocentric azimuth and zenith angle (degrees) of the sun.

    Uses SPA unless another registered engine is named. Pressure (hPa) and
    temperature (°C) enable the refraction correction when both are given.
    """
    if engine == "spa":
        return spa.calculate_solar_position(dt, latitude, longitude, elevation, delta_t, pressure, temperature)
    return _reg().get(engine).position(
        dt, latitude, longitude,
        elevation=elevation, delta_t=delta_t,
        atmosphere=AtmosphericParameters(pressure, temperature),
    )

def solar_position_fast(
    dt: datetime,
    latitude: float,
    longitude: float,
    delta_t: float = 0.0,
    pressure: float = math.nan,
    temperature: float = math.nan,
) -> SolarPosition:
    """Grena no. 3: about 0.01° accuracy for 2010-2110."""
    return grena3.calculate_solar_position(dt, latitude, longitude, delta_t, pressure, temperature)

def time_dependent_parts(dt: datetime, delta_t: float = 0.0) -> SpaTimeDependent:
    return spa.calculate_time_dependent_parts(dt, delta_t)

def solar_position_from_parts(
    parts: SpaTimeDependent,
    latitude: float,
    longitude: float,
    elevation: float = 0.0,
    pressure: float = math.nan,
    temperature: float = math.nan,
) -> SolarPosition:
    return spa.calculate_solar_position_with_time_dependent_parts(
        latitude, longitude, elevation, parts, pressure, temperature
    )

# ============================================================
# Sunrise / transit / sunset
# ============================================================

def sunrise_transit_set(
    day: Union[date, datetime],
    latitude: float,
    longitude: float,
    delta_t: float = 0.0,
    horizon: Union[Horizon, float] = Horizon.SUNRISE_SUNSET,
) -> SunriseResult:
    return sunrise.calculate_sunrise_transit_set(day, latitude, longitude, delta_t, horizon)

def sunrise_transit_set_batch(
    day: Union[date, datetime],
    latitude: float,
    longitude: float,
    delta_t: float = 0.0,
    horizons: Iterable[Union[Horizon, float]] = tuple(Horizon),
) -> Dict[Union[Horizon, float], SunriseResult]:
    return sunrise.calculate_sunrise_transit_set_batch(day, latitude, longitude, delta_t, horizons)

# ============================================================
# Time helpers
# ============================================================

def estimate_delta_t(d: date) -> float:
    return deltat.estimate(d)

def julian_date(dt: datetime, delta_t: float = 0.0) -> JulianDate:
    return JulianDate.from_datetime(dt, delta_t)
