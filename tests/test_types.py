# tests/test_types.py

import math
from datetime import datetime, timezone

import pytest

from solarpos import AllDay, AllNight, AtmosphericParameters, Horizon, RegularDay, SolarPosition


@pytest.mark.parametrize("azimuth", [-0.1, 360.0, 360.1, math.nan])
def test_rejects_silly_azimuth(azimuth):
    with pytest.raises(ValueError):
        SolarPosition(azimuth, 90)


@pytest.mark.parametrize("zenith", [-0.1, 180.1, math.nan])
def test_rejects_silly_zenith_angle(zenith):
    with pytest.raises(ValueError):
        SolarPosition(90, zenith)


def test_boundaries_accepted():
    SolarPosition(0.0, 0.0)
    SolarPosition(359.999999, 180.0)


def test_elevation_and_str():
    pos = SolarPosition(194.340241, 50.111622)
    assert pos.elevation == pytest.approx(39.888378)
    assert "194.340241" in str(pos)


def test_result_records_reject_missing_values():
    now = datetime.now(timezone.utc)
    with pytest.raises(TypeError):
        AllDay(None)
    with pytest.raises(TypeError):
        AllNight(None)
    with pytest.raises(TypeError):
        RegularDay(None, now, now)
    with pytest.raises(TypeError):
        RegularDay(now, None, now)
    with pytest.raises(TypeError):
        RegularDay(now, now, None)


@pytest.mark.parametrize(
    "pressure, temperature, enabled",
    [
        (1010.0, 10.0, True),
        (820.0, 11.0, True),
        (math.nan, 10.0, False),
        (1010.0, math.nan, False),
        (-2.0, 1000.0, False),
        (3000.0, 10.0, False),
        (1010.0, -273.0, False),
        (1010.0, 273.0, True),
    ],
)
def test_refraction_enabled(pressure, temperature, enabled):
    assert AtmosphericParameters(pressure, temperature).refraction_enabled is enabled


def test_default_atmosphere_disables_refraction():
    assert AtmosphericParameters().refraction_enabled is False


def test_horizon_elevations():
    assert [h.elevation for h in Horizon] == [-0.8333, -6.0, -12.0, -18.0]
