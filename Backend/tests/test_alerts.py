import random

from airwatch.models.schemas import AirQualityData, AlertType, Pollutant, Pollutants, Weather
from airwatch.services.alerts import AlertDeriver, alert_type_for_aqi
from airwatch.services.aqi import category_for_aqi

from conftest import NOW


def _sample(station_id, aqi, dominant=Pollutant.PM25):
    return AirQualityData(
        id=f"data-{station_id}",
        station_id=station_id,
        timestamp=NOW,
        aqi=aqi,
        category=category_for_aqi(aqi),
        dominant_pollutant=dominant,
        pollutants=Pollutants(pm25=aqi / 2, pm10=0, o3=0, no2=0, so2=0, co=0),
        weather=Weather(temperature=20, humidity=50, wind_speed=3, wind_direction=90, pressure=1010, precipitation=0),
    )


def test_alert_type_bands():
    assert alert_type_for_aqi(101) == AlertType.WARNING
    assert alert_type_for_aqi(200) == AlertType.WARNING
    assert alert_type_for_aqi(201) == AlertType.DANGER
    assert alert_type_for_aqi(300) == AlertType.DANGER
    assert alert_type_for_aqi(301) == AlertType.EMERGENCY


def test_alerts_only_above_threshold_and_sorted(directory):
    samples = [
        _sample("station-001", 50),
        _sample("station-002", 120),
        _sample("station-003", 210),
        _sample("station-004", 310, Pollutant.CO),
    ]
    alerts = AlertDeriver(random.Random(1), directory=directory).derive_alerts(samples, 100, now=NOW)

    assert [alert.level for alert in alerts] == [310, 210, 120]
    assert [alert.type for alert in alerts] == [AlertType.EMERGENCY, AlertType.DANGER, AlertType.WARNING]
    assert [alert.station_id for alert in alerts] == ["station-004", "station-003", "station-002"]
    assert alerts[0].pollutant == Pollutant.CO


def test_threshold_is_strict(directory):
    alerts = AlertDeriver(random.Random(2), directory=directory).derive_alerts(
        [_sample("station-001", 100)], 100, now=NOW
    )
    assert alerts == []


def test_alert_content(directory):
    alert = AlertDeriver(random.Random(3), directory=directory).derive_alerts(
        [_sample("station-001", 180)], now=NOW
    )[0]

    assert alert.timestamp == NOW
    assert "PM2.5" in alert.message
    assert "station-001" in alert.message
    assert "180" in alert.message
    assert alert.recommendations
    assert alert.affected.districts == ["Chaoyang District"]
    assert "Children" in alert.affected.population
    assert 1 <= alert.expected_duration <= 24
    assert alert.id.startswith("alert-")


def test_unknown_station_district(directory):
    alert = AlertDeriver(random.Random(4), directory=directory).derive_alerts(
        [_sample("mobile-unit-9", 250)], now=NOW
    )[0]
    assert alert.affected.districts == ["Unknown"]
