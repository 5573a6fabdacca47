from __future__ import annotations
from solarpos.core.engine import EngineRegistry
from solarpos.engines.factory import ALL_ENGINES

def build_registry() -> EngineRegistry:
    engines = {}
    for eng in ALL_ENGINES:
        engines[eng.name] = eng
    return EngineRegistry(engines)
