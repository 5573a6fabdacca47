"""
solarpos.engines.factory
------------------------
Wraps the position algorithms behind the PositionEngine protocol.
Arguments an algorithm has no use for are accepted and ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Tuple

from ..core.engine import PositionEngine
from ..core.types import AtmosphericParameters, SolarPosition
from . import grena3, psa, spa


@dataclass(frozen=True)
class SpaEngine:
    name: str = "spa"

    def info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "algorithm": "NREL SPA (Reda & Andreas 2003/2008)",
            "valid_years": (-2000, 6000),
            "uncertainty_deg": 0.0003,
            "uses": ("elevation", "delta_t", "atmosphere"),
        }

    def position(
        self,
        dt: datetime,
        latitude: float,
        longitude: float,
        *,
        elevation: float = 0.0,
        delta_t: float = 0.0,
        atmosphere: AtmosphericParameters = AtmosphericParameters(),
    ) -> SolarPosition:
        return spa.calculate_solar_position(
            dt, latitude, longitude, elevation, delta_t, atmosphere.pressure, atmosphere.temperature
        )


@dataclass(frozen=True)
class Grena3Engine:
    name: str = "grena3"

    def info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "algorithm": "Grena (2012) algorithm no. 3",
            "valid_years": grena3.VALID_YEARS,
            "uncertainty_deg": 0.01,
            "uses": ("delta_t", "atmosphere"),
        }

    def position(
        self,
        dt: datetime,
        latitude: float,
        longitude: float,
        *,
        elevation: float = 0.0,
        delta_t: float = 0.0,
        atmosphere: AtmosphericParameters = AtmosphericParameters(),
    ) -> SolarPosition:
        return grena3.calculate_solar_position(
            dt, latitude, longitude, delta_t, atmosphere.pressure, atmosphere.temperature
        )


@dataclass(frozen=True)
class PsaEngine:
    name: str = "psa"

    def info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "algorithm": "PSA (Blanco-Muriel et al. 2001)",
            "valid_years": psa.VALID_YEARS,
            "uncertainty_deg": 0.0083,
            "uses": (),
        }

    def position(
        self,
        dt: datetime,
        latitude: float,
        longitude: float,
        *,
        elevation: float = 0.0,
        delta_t: float = 0.0,
        atmosphere: AtmosphericParameters = AtmosphericParameters(),
    ) -> SolarPosition:
        return psa.calculate_solar_position(dt, latitude, longitude)


ALL_ENGINES: Tuple[PositionEngine, ...] = (SpaEngine(), Grena3Engine(), PsaEngine())


def make_engine(name: str) -> PositionEngine:
    for eng in ALL_ENGINES:
        if eng.name == name:
            return eng
    raise KeyError(f"Unknown engine '{name}'. Available: {sorted(e.name for e in ALL_ENGINES)}")
