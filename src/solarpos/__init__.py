"""solarpos public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    solar_position,
    solar_position_fast,
    sunrise_transit_set,
    sunrise_transit_set_batch,
    time_dependent_parts,
    solar_position_from_parts,
    estimate_delta_t,
    julian_date,
    list_engines,
    get_engine,
    engine_info,
    register_engine,
)
from .core.errors import DomainError, SolarposError
from .core.time import JulianDate
from .core.types import (
    AllDay,
    AllNight,
    AtmosphericParameters,
    Horizon,
    RegularDay,
    SolarPosition,
    SunriseResult,
)

__all__ = [
    "solar_position",
    "solar_position_fast",
    "sunrise_transit_set",
    "sunrise_transit_set_batch",
    "time_dependent_parts",
    "solar_position_from_parts",
    "estimate_delta_t",
    "julian_date",
    "list_engines",
    "get_engine",
    "engine_info",
    "register_engine",
    "DomainError",
    "SolarposError",
    "JulianDate",
    "AllDay",
    "AllNight",
    "AtmosphericParameters",
    "Horizon",
    "RegularDay",
    "SolarPosition",
    "SunriseResult",
]
