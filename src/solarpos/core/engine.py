from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Protocol

from .types import AtmosphericParameters, SolarPosition

class PositionEngine(Protocol):
    name: str
    def info(self) -> Dict[str, Any]: ...
    def position(
        self,
        dt: datetime,
        latitude: float,
        longitude: float,
        *,
        elevation: float = 0.0,
        delta_t: float = 0.0,
        atmosphere: AtmosphericParameters = AtmosphericParameters(),
    ) -> SolarPosition: ...

@dataclass
class EngineRegistry:
    _engines: Dict[str, PositionEngine]

    def get(self, name: str) -> PositionEngine:
        if name not in self._engines:
            raise KeyError(f"Unknown engine '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: PositionEngine, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Engine '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine
