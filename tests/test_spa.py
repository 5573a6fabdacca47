# tests/test_spa.py

import math
from datetime import datetime, timedelta, timezone

import pytest

from solarpos import DomainError
from solarpos.core.time import JulianDate
from solarpos.engines import spa

# --- NREL SPA Test Case (Appendix A.5) ---
# Date: October 17, 2003, 12:30:30 local (UTC -7)
# Latitude: 39.742476 deg, Longitude: -105.1786 deg
# Elevation: 1830.14 m, Pressure: 820 hPa, Temperature: 11 C
# Delta T: 67 seconds
#
# Targets:
# Zenith = 50.111622 deg
# Azimuth = 194.340241 deg

SPA_TIME = datetime(2003, 10, 17, 12, 30, 30, tzinfo=timezone(timedelta(hours=-7)))
SPA_LAT = 39.742476
SPA_LON = -105.1786
SPA_ELEV = 1830.14


def test_nrel_spa_example():
    pos = spa.calculate_solar_position(SPA_TIME, SPA_LAT, SPA_LON, SPA_ELEV, 67, 820, 11)
    assert pos.azimuth == pytest.approx(194.340241, abs=1e-6)
    assert pos.zenith_angle == pytest.approx(50.111622, abs=1e-6)


def test_nrel_intermediate_values():
    jd = JulianDate.from_datetime(SPA_TIME, 67)
    assert jd.julian_date == pytest.approx(2452930.312847, abs=1e-6)

    jme = jd.julian_ephemeris_millennium
    assert spa.heliocentric_longitude_deg(jme) == pytest.approx(24.0182616917, abs=1e-6)
    assert spa.heliocentric_latitude_deg(jme) == pytest.approx(-0.0001011219 % 360.0, abs=1e-6)
    assert spa.earth_radius_vector(jme) == pytest.approx(0.9965422974, abs=1e-8)

    nut = spa.nutation(jd.julian_ephemeris_century)
    assert nut.delta_psi == pytest.approx(-0.00399840, abs=1e-7)
    assert nut.delta_epsilon == pytest.approx(0.00166657, abs=1e-7)

    eps = spa.true_obliquity_deg(jme, nut.delta_epsilon)
    assert eps == pytest.approx(23.440465, abs=1e-6)

    parts = spa.time_dependent_parts_for(jd)
    assert parts.nu == pytest.approx(318.5119, abs=1e-4)
    assert parts.alpha == pytest.approx(202.22741, abs=1e-5)
    assert parts.delta == pytest.approx(-9.31434, abs=1e-5)


def test_southern_solstice():
    t = datetime(2012, 12, 22, 12, 0, 0, tzinfo=timezone.utc)

    pos = spa.calculate_solar_position(t, -41, 0, 100, 0, 1000, 20)
    assert pos.azimuth == pytest.approx(359.08592, abs=1e-4)
    assert pos.zenith_angle == pytest.approx(17.5658, abs=1e-4)

    pos = spa.calculate_solar_position(t, -3, 0, 100, 0, 1000, 20)
    assert pos.azimuth == pytest.approx(180.790356, abs=1e-4)
    assert pos.zenith_angle == pytest.approx(20.4285, abs=1e-4)


def test_silly_refraction_parameters_disable_refraction():
    pos = spa.calculate_solar_position(SPA_TIME, SPA_LAT, SPA_LON, SPA_ELEV, 67, -2, 1000)
    assert pos.azimuth == pytest.approx(194.34024, abs=1e-4)
    assert pos.zenith_angle == pytest.approx(50.1279, abs=1e-4)

    unset = spa.calculate_solar_position(SPA_TIME, SPA_LAT, SPA_LON, SPA_ELEV, 67)
    assert pos == unset


def test_refraction_lifts_the_sun():
    with_atm = spa.calculate_solar_position(SPA_TIME, SPA_LAT, SPA_LON, SPA_ELEV, 67, 1010, 10)
    without = spa.calculate_solar_position(SPA_TIME, SPA_LAT, SPA_LON, SPA_ELEV, 67)
    assert with_atm.zenith_angle < without.zenith_angle
    assert with_atm.azimuth == without.azimuth


def test_no_refraction_below_threshold():
    # local midnight in Denver: sun far below the horizon
    night = datetime(2003, 10, 17, 0, 0, 0, tzinfo=timezone(timedelta(hours=-7)))
    a = spa.calculate_solar_position(night, SPA_LAT, SPA_LON, 0, 67, 1010, 10)
    b = spa.calculate_solar_position(night, SPA_LAT, SPA_LON, 0, 67)
    assert a.zenith_angle > 90.0
    assert a == b


@pytest.mark.parametrize("lat, lon", [(139.742476, SPA_LON), (SPA_LAT, -205.1786), (math.nan, 0.0)])
def test_silly_lat_lon(lat, lon):
    with pytest.raises(DomainError):
        spa.calculate_solar_position(SPA_TIME, lat, lon, SPA_ELEV, 67, 820, 11)
    with pytest.raises(ValueError):
        spa.calculate_solar_position(SPA_TIME, lat, lon, SPA_ELEV, 67, 820, 11)


def test_naive_datetime_rejected():
    with pytest.raises(ValueError):
        spa.calculate_solar_position(datetime(2003, 10, 17, 12), SPA_LAT, SPA_LON, 0, 67)


def test_ranges_over_a_year():
    t = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for i in range(0, 366 * 24, 13):
        for lat, lon in [(89.9, 0.0), (-89.9, 179.9), (0.0, -180.0), (45.0, 90.0)]:
            pos = spa.calculate_solar_position(t + timedelta(hours=i), lat, lon, 0, 69, 1000, 10)
            assert 0.0 <= pos.azimuth < 360.0
            assert 0.0 <= pos.zenith_angle <= 180.0
