import asyncio
import random

import pytest

from airwatch.api.facade import BAD_REQUEST, NOT_FOUND, AirQualityFacade
from airwatch.models.schemas import Station

from conftest import NOW


def run(coroutine):
    return asyncio.run(coroutine)


def test_get_all_stations(facade):
    response = run(facade.get_all_stations())
    assert response.success is True
    assert response.error is None
    assert response.timestamp == NOW
    assert [station.id for station in response.data] == facade.directory.station_ids


def test_get_station(facade):
    response = run(facade.get_station("station-003"))
    assert response.success
    assert isinstance(response.data, Station)
    assert response.data.location.city == "Shanghai"


def test_get_unknown_station_is_not_found(facade):
    response = run(facade.get_station("nonexistent-id"))
    assert response.success is False
    assert response.data is None
    assert response.error.code == NOT_FOUND


def test_realtime_for_unknown_station_is_not_found(facade):
    response = run(facade.get_station_realtime_data("nonexistent-id"))
    assert response.error.code == NOT_FOUND


def test_realtime_snapshot_covers_directory(facade):
    response = run(facade.get_realtime_air_quality())
    assert [sample.station_id for sample in response.data] == facade.directory.station_ids
    assert all(sample.timestamp == NOW for sample in response.data)


def test_station_history_is_past_day(facade):
    response = run(facade.get_station_historical_data("station-001"))
    assert len(response.data) == 24
    assert response.data[-1].timestamp == NOW


def test_historical_range_with_bad_date_is_bad_request(facade):
    response = run(facade.get_historical_data("station-001", "not-a-date", "2024-01-02"))
    assert response.success is False
    assert response.error.code == BAD_REQUEST


def test_generation_accepts_any_station_id(facade):
    response = run(facade.get_historical_data("mobile-unit-9", "2024-01-01", "2024-01-02"))
    assert response.success
    assert len(response.data) == 8


def test_forecast_and_prediction_horizons(facade):
    forecast = run(facade.get_station_forecast("station-001")).data
    prediction = run(facade.get_advanced_aqi_prediction("station-001", 3)).data
    assert len(forecast.predictions) == 24
    assert len(prediction.predictions) == 72
    assert prediction.predictions[0].timestamp > NOW


def test_alerts_exceed_threshold():
    facade = AirQualityFacade(rng=random.Random(5), latency_scale=0, alert_threshold=0, clock=lambda: NOW)
    alerts = run(facade.get_current_alerts()).data
    # every sample has a positive AQI with overwhelming probability, so every station alerts
    assert len(alerts) == len(facade.directory)
    levels = [alert.level for alert in alerts]
    assert levels == sorted(levels, reverse=True)


def test_health_impacts_accepts_strings(facade):
    response = run(facade.get_health_impacts("pm25", 80, "Respiratory"))
    assert response.success
    assert len(response.data) == 2


def test_invalid_enum_is_bad_request(facade):
    assert run(facade.get_health_impacts("lead", 10)).error.code == BAD_REQUEST
    response = run(facade.get_trend_analysis("station-001", "pm25", "2024-01-01", "2024-02-01", "fortnight"))
    assert response.error.code == BAD_REQUEST


def test_analysis_operations(facade):
    ids = facade.directory.station_ids
    clusters = run(facade.get_cluster_analysis(ids, "2024-01-01", "2024-01-31")).data
    correlations = run(facade.get_correlation_analysis(ids, "2024-01-01", "2024-01-31", "Spearman")).data
    attribution = run(facade.get_source_attribution("station-002", "2024-01-02T08:00:00Z")).data
    trend = run(facade.get_trend_analysis("station-002", "o3", "2024-01-01", "2024-12-01", "month")).data

    assert sum(cluster.size for cluster in clusters.clusters) == len(ids)
    assert correlations.method.value == "Spearman"
    assert abs(sum(source.contribution for source in attribution.sources) - 1) < 1e-6
    assert len(trend.data_points) == 11
    assert clusters.generated_at == NOW


def test_same_seed_gives_same_responses(directory):
    def build():
        return AirQualityFacade(rng=random.Random(77), directory=directory, latency_scale=0, clock=lambda: NOW)

    first, second = build(), build()
    assert run(first.get_realtime_air_quality()) == run(second.get_realtime_air_quality())
    assert run(first.get_station_forecast("station-004")) == run(second.get_station_forecast("station-004"))


def test_delay_can_be_cancelled(directory):
    slow = AirQualityFacade(rng=random.Random(1), directory=directory, latency_scale=100, clock=lambda: NOW)

    async def call_with_timeout():
        return await asyncio.wait_for(slow.get_all_stations(), timeout=0.05)

    with pytest.raises(asyncio.TimeoutError):
        run(call_with_timeout())
