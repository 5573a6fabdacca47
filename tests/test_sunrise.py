# tests/test_sunrise.py

import logging
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

import solarpos
from solarpos import AllDay, AllNight, DomainError, Horizon, RegularDay
from solarpos.engines import spa
from solarpos.engines.sunrise import calculate_sunrise_transit_set, calculate_sunrise_transit_set_batch

# --- NREL SPA Test Case (Appendix A.5) ---
# Date: October 17, 2003, Time Zone: -7 hours
# Latitude: 39.742476 deg, Longitude: -105.1786 deg
# Delta T: 67 seconds
#
# Targets (local):
# Sunrise = 06:12:43
# Transit = 11:46:04
# Sunset  = 17:18:51

STRICT = 1.0      # seconds
REASONABLE = 40.0  # seconds, NOAA/HMNAO tables are rounded to the minute


def _close(actual: datetime, expected: datetime, tol: float) -> None:
    assert abs((actual - expected).total_seconds()) <= tol, f"{actual.isoformat()} != {expected.isoformat()}"


def _at(day: datetime, hh: int, mm: int, ss: int = 0) -> datetime:
    return day.replace(hour=hh, minute=mm, second=ss, microsecond=0)


def test_nrel_spa_sunrise_transit_sunset():
    t = datetime(2003, 10, 17, 12, 30, 30, tzinfo=timezone(timedelta(hours=-7)))
    res = calculate_sunrise_transit_set(t, 39.742476, -105.1786, 67)

    assert isinstance(res, RegularDay)
    _close(res.sunrise, _at(t, 6, 12, 43), STRICT)
    _close(res.transit, _at(t, 11, 46, 4), STRICT)
    _close(res.sunset, _at(t, 17, 18, 51), STRICT)
    assert res.sunrise.utcoffset() == timedelta(hours=-7)


def test_all_day():
    # Honningsvåg, Norway (near North Cape)
    t = datetime(2015, 6, 17, 12, 30, 30, tzinfo=timezone(timedelta(hours=2)))
    res = calculate_sunrise_transit_set(t, 70.978056, 25.974722, 0)

    assert isinstance(res, AllDay)
    _close(res.transit, _at(t, 12, 16, 55), STRICT)


def test_all_night():
    t = datetime(2015, 1, 17, 12, 30, 30, tzinfo=timezone(timedelta(hours=2)))
    res = calculate_sunrise_transit_set(t, 70.978056, 25.974722, 0)
    assert isinstance(res, AllNight)
    assert res.transit.date() == t.date()


def test_day_classification_is_logged(caplog):
    t = datetime(2015, 1, 17, 12, tzinfo=timezone(timedelta(hours=2)))
    with caplog.at_level(logging.DEBUG, logger="solarpos.engines.sunrise"):
        calculate_sunrise_transit_set(t, 70.978056, 25.974722, 0)
    assert any("all night" in r.getMessage() for r in caplog.records)


def test_new_zealand():
    t = datetime(2015, 6, 17, 12, 30, 30, tzinfo=timezone(timedelta(hours=12)))
    res = calculate_sunrise_transit_set(t, -36.8406, 174.74, 0)

    # NOAA: 7:32, 12:21:41, 17:11
    assert isinstance(res, RegularDay)
    _close(res.sunrise, _at(t, 7, 32), REASONABLE)
    _close(res.transit, _at(t, 12, 21, 41), REASONABLE)
    _close(res.sunset, _at(t, 17, 11), REASONABLE)


@pytest.mark.parametrize(
    "zone, ymd, lat, lon, rise, transit, sunset, offset_h",
    [
        # NOAA values; DST ends / starts on these days
        ("Europe/Berlin", (2015, 10, 25), 52.33, 13.3, (6, 49, 0), (11, 50, 53), (16, 52, 0), 1),
        ("Europe/Berlin", (2016, 3, 27), 52.33, 13.3, (6, 52, 0), (13, 12, 1), (19, 33, 0), 2),
        ("Pacific/Auckland", (2016, 4, 3), -36.84, 174.74, (6, 36, 0), (12, 24, 19), (18, 12, 0), 12),
        ("Pacific/Auckland", (2015, 9, 27), -36.84, 174.74, (7, 4, 0), (13, 12, 19), (19, 21, 0), 13),
    ],
)
def test_dst_transition_days(zone, ymd, lat, lon, rise, transit, sunset, offset_h):
    tz = ZoneInfo(zone)
    t = datetime(*ymd, 12, 0, tzinfo=tz)
    res = calculate_sunrise_transit_set(t, lat, lon, 68)

    def local(hms):
        return datetime(*ymd, *hms, tzinfo=timezone(timedelta(hours=offset_h)))

    assert isinstance(res, RegularDay)
    _close(res.sunrise, local(rise), REASONABLE)
    _close(res.transit, local(transit), REASONABLE)
    _close(res.sunset, local(sunset), REASONABLE)
    assert res.sunset.utcoffset() == timedelta(hours=offset_h)


# Lerwick, Scotland, 2023-03-01 (HMNAO "Daily Rise, Set and Twilight Times for the British Isles")
# sunrise sunset civil_start civil_end nautical_start nautical_end astro_start astro_end  UTC
# 07:04   17:31  06:22       18:13     05:34          19:01        04:45       19:51
LERWICK = (60.1547, -1.1494)
LERWICK_DAY = datetime(2023, 3, 1, 12, 0, tzinfo=timezone.utc)
LERWICK_TIMES = {
    Horizon.SUNRISE_SUNSET: ((7, 4), (17, 31)),
    Horizon.CIVIL_TWILIGHT: ((6, 22), (18, 13)),
    Horizon.NAUTICAL_TWILIGHT: ((5, 34), (19, 1)),
    Horizon.ASTRONOMICAL_TWILIGHT: ((4, 45), (19, 51)),
}


@pytest.mark.parametrize("horizon", list(Horizon))
def test_all_horizons(horizon):
    res = calculate_sunrise_transit_set(LERWICK_DAY, *LERWICK, 69.2, horizon)
    rise, sunset = LERWICK_TIMES[horizon]

    assert isinstance(res, RegularDay)
    _close(res.sunrise, _at(LERWICK_DAY, *rise), REASONABLE)
    _close(res.sunset, _at(LERWICK_DAY, *sunset), REASONABLE)


def test_all_horizons_single_call_matches_individual_calls():
    results = calculate_sunrise_transit_set_batch(LERWICK_DAY, *LERWICK, 69.2, list(Horizon))
    assert set(results) == set(Horizon)
    for h, res in results.items():
        assert res == calculate_sunrise_transit_set(LERWICK_DAY, *LERWICK, 69.2, h)

    # twilight brackets the day
    assert (
        results[Horizon.ASTRONOMICAL_TWILIGHT].sunrise
        < results[Horizon.NAUTICAL_TWILIGHT].sunrise
        < results[Horizon.CIVIL_TWILIGHT].sunrise
        < results[Horizon.SUNRISE_SUNSET].sunrise
    )


def test_batch_defaults_to_every_horizon():
    results = solarpos.sunrise_transit_set_batch(LERWICK_DAY, *LERWICK, 69.2)
    assert set(results) == set(Horizon)


def test_custom_horizon_elevation():
    a = calculate_sunrise_transit_set(LERWICK_DAY, *LERWICK, 69.2, -6.0)
    b = calculate_sunrise_transit_set(LERWICK_DAY, *LERWICK, 69.2, Horizon.CIVIL_TWILIGHT)
    assert a == b


@pytest.mark.parametrize(
    "lat, lon",
    [(40.7128, -74.0060), (-33.8688, 151.2093), (35.6762, 139.6503), (59.3293, 18.0686), (0.0, 0.0)],
)
def test_rise_and_set_are_on_the_horizon(lat, lon):
    # the sun centre sits at the horizon elevation at the returned instants
    tz = timezone(timedelta(hours=round(lon / 15.0)))
    for month in (1, 4, 7, 10):
        day = datetime(2023, month, 15, 12, tzinfo=tz)
        res = calculate_sunrise_transit_set(day, lat, lon, 0)
        assert isinstance(res, RegularDay)
        for when in (res.sunrise, res.sunset):
            pos = spa.calculate_solar_position(when, lat, lon, 0, 0)
            assert pos.zenith_angle == pytest.approx(90.8333, abs=0.01)

        res = calculate_sunrise_transit_set(day, lat, lon, 0, Horizon.CIVIL_TWILIGHT)
        assert isinstance(res, RegularDay)
        for when in (res.sunrise, res.sunset):
            pos = spa.calculate_solar_position(when, lat, lon, 0, 0)
            assert pos.zenith_angle == pytest.approx(96.0, abs=0.02)


@pytest.mark.parametrize(
    "day, lat, lon",
    [
        # sunset after 0h UT of the next day
        (datetime(2003, 10, 17, 12, tzinfo=timezone(timedelta(hours=-7))), 39.742476, -105.1786),
        (datetime(2023, 7, 15, 12, tzinfo=ZoneInfo("America/New_York")), 40.7128, -74.0060),
        # sunrise before 0h UT of the same day
        (datetime(2015, 9, 27, 12, tzinfo=ZoneInfo("Pacific/Auckland")), -36.84, 174.74),
        (datetime(2016, 4, 3, 12, tzinfo=ZoneInfo("Pacific/Auckland")), -36.84, 174.74),
    ],
)
def test_events_across_utc_midnight_are_on_the_horizon(day, lat, lon):
    res = calculate_sunrise_transit_set(day, lat, lon, 67)
    assert isinstance(res, RegularDay)
    for when in (res.sunrise, res.sunset):
        pos = spa.calculate_solar_position(when, lat, lon, 0, 67)
        assert pos.zenith_angle == pytest.approx(90.8333, abs=0.01)


def test_reference_times_across_utc_midnight():
    denver = datetime(2003, 10, 17, 12, tzinfo=timezone(timedelta(hours=-7)))
    res = calculate_sunrise_transit_set(denver, 39.742476, -105.1786, 67)
    _close(res.sunset, _at(denver, 17, 18, 51), STRICT)

    nz = timezone(timedelta(hours=13))
    res = calculate_sunrise_transit_set(datetime(2015, 9, 27, 12, tzinfo=ZoneInfo("Pacific/Auckland")), -36.84, 174.74, 68)
    _close(res.sunrise, datetime(2015, 9, 27, 7, 4, 14, tzinfo=nz), STRICT)
    _close(res.sunset, datetime(2015, 9, 27, 19, 20, 56, tzinfo=nz), STRICT)

    nz = timezone(timedelta(hours=12))
    res = calculate_sunrise_transit_set(datetime(2016, 4, 3, 12, tzinfo=ZoneInfo("Pacific/Auckland")), -36.84, 174.74, 68)
    _close(res.sunrise, datetime(2016, 4, 3, 6, 36, 9, tzinfo=nz), STRICT)
    _close(res.sunset, datetime(2016, 4, 3, 18, 11, 55, tzinfo=nz), STRICT)


def test_results_on_the_requested_civil_day():
    tz = timezone(timedelta(hours=-7))
    for d in range(1, 29):
        t = datetime(2003, 2, d, 23, 59, tzinfo=tz)
        res = calculate_sunrise_transit_set(t, 39.742476, -105.1786, 67)
        assert isinstance(res, RegularDay)
        for when in (res.sunrise, res.transit, res.sunset):
            assert when.date() == t.date()
            assert when.tzinfo is tz
        assert res.sunrise < res.transit < res.sunset


def test_plain_date_is_read_as_utc():
    res = calculate_sunrise_transit_set(date(2023, 3, 1), *LERWICK, 69.2)
    assert res.transit.utcoffset() == timedelta(0)
    assert res == calculate_sunrise_transit_set(LERWICK_DAY, *LERWICK, 69.2)


def test_naive_datetime_rejected():
    with pytest.raises(ValueError):
        calculate_sunrise_transit_set(datetime(2023, 3, 1, 12), *LERWICK, 69.2)


@pytest.mark.parametrize("lat, lon", [(139.742476, -105.1786), (39.742476, -205.1786)])
def test_silly_lat_lon(lat, lon):
    t = datetime(2003, 10, 17, 12, 30, 30, tzinfo=timezone(timedelta(hours=-7)))
    with pytest.raises(DomainError):
        calculate_sunrise_transit_set(t, lat, lon, 67)
    with pytest.raises(DomainError):
        calculate_sunrise_transit_set_batch(t, lat, lon, 67)
