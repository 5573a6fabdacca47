from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class SolarPosition:
    """
    Topocentric solar position.

    azimuth: degrees in [0, 360), measured from north, eastward positive.
    zenith_angle: degrees in [0, 180], measured downwards from the zenith.
    """
    azimuth: float
    zenith_angle: float

    def __post_init__(self) -> None:
        if not (0.0 <= self.azimuth < 360.0):
            raise ValueError(f"azimuth out of range [0, 360): {self.azimuth}")
        if not (0.0 <= self.zenith_angle <= 180.0):
            raise ValueError(f"zenith angle out of range [0, 180]: {self.zenith_angle}")

    @property
    def elevation(self) -> float:
        return 90.0 - self.zenith_angle

    def __str__(self) -> str:
        return f"SolarPosition(azimuth={self.azimuth:.6f}°, zenith_angle={self.zenith_angle:.6f}°)"


@dataclass(frozen=True)
class AtmosphericParameters:
    """
    Local pressure (hPa) and temperature (°C) for the refraction correction.

    NaN means "unset". Unset or implausible values disable refraction
    instead of raising.
    """
    pressure: float = math.nan
    temperature: float = math.nan

    @property
    def refraction_enabled(self) -> bool:
        p, t = self.pressure, self.temperature
        if not (math.isfinite(p) and math.isfinite(t)):
            return False
        return 0.0 < p < 3000.0 and -273.0 < t <= 273.0


class Horizon(Enum):
    """Sun-centre elevation (degrees) that defines a rise/set event."""
    SUNRISE_SUNSET = -0.8333
    CIVIL_TWILIGHT = -6.0
    NAUTICAL_TWILIGHT = -12.0
    ASTRONOMICAL_TWILIGHT = -18.0

    @property
    def elevation(self) -> float:
        return self.value


def _require(name: str, value: object) -> None:
    if value is None:
        raise TypeError(f"{name} must not be None")


@dataclass(frozen=True)
class RegularDay:
    """A day with sunrise and sunset."""
    sunrise: datetime
    transit: datetime
    sunset: datetime

    def __post_init__(self) -> None:
        _require("sunrise", self.sunrise)
        _require("transit", self.transit)
        _require("sunset", self.sunset)


@dataclass(frozen=True)
class AllDay:
    """Polar day: the sun stays above the horizon."""
    transit: datetime

    def __post_init__(self) -> None:
        _require("transit", self.transit)


@dataclass(frozen=True)
class AllNight:
    """Polar night: the sun stays below the horizon. Transit is still the upper culmination."""
    transit: datetime

    def __post_init__(self) -> None:
        _require("transit", self.transit)


SunriseResult = Union[RegularDay, AllDay, AllNight]
