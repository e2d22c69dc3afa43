import pytest
from fastapi.testclient import TestClient

from airwatch.api.facade import get_facade
from airwatch.main import app


@pytest.fixture
def client(facade):
    app.dependency_overrides[get_facade] = lambda: facade
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root_lists_endpoints(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json()["endpoints"]["stations"] == "/api/stations"


def test_health_check(client):
    res = client.get("/api/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"
    assert res.json()["stations"] == 5


def test_stations_use_camel_case(client):
    res = client.get("/api/stations")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert len(body["data"]) == 5
    for key in ["id", "name", "location", "active", "installationDate", "lastMaintenance"]:
        assert key in body["data"][0]


def test_unknown_station_returns_404(client):
    res = client.get("/api/stations/nonexistent-id")
    assert res.status_code == 404
    body = res.json()
    assert body["success"] is False
    assert body["error"]["code"] == "NOT_FOUND"


def test_station_realtime(client):
    res = client.get("/api/stations/station-001/realtime")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["stationId"] == "station-001"
    assert "dominantPollutant" in data


def test_historical_range_bad_date_returns_400(client):
    res = client.get("/api/stations/station-001/historical",
                     params={"start_date": "garbage", "end_date": "2024-01-02"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "BAD_REQUEST"


def test_historical_range(client):
    res = client.get("/api/stations/station-001/historical",
                     params={"start_date": "2024-01-01", "end_date": "2024-01-02"})
    assert res.status_code == 200
    assert len(res.json()["data"]) == 8


def test_prediction_days(client):
    res = client.get("/api/stations/station-002/prediction", params={"days": 2})
    assert res.status_code == 200
    data = res.json()["data"]
    assert len(data["predictions"]) == 48
    assert "forecastMethod" in data


def test_source_attribution_defaults_to_now(client):
    res = client.get("/api/stations/station-001/source-attribution")
    assert res.status_code == 200
    assert "sourceType" in res.json()["data"]["sources"][0]


def test_alerts(client):
    res = client.get("/api/air-quality/alerts")
    assert res.status_code == 200
    levels = [alert["level"] for alert in res.json()["data"]]
    assert all(level > 100 for level in levels)
    assert levels == sorted(levels, reverse=True)


def test_health_impacts(client):
    res = client.get("/api/air-quality/health-impacts",
                     params={"pollutant": "pm25", "concentration": 80, "population_group": "Respiratory"})
    assert res.status_code == 200
    assert len(res.json()["data"]) == 2
    assert "riskLevel" in res.json()["data"][0]


def test_health_impacts_rejects_unknown_pollutant(client):
    res = client.get("/api/air-quality/health-impacts", params={"pollutant": "lead", "concentration": 1})
    assert res.status_code == 422


def test_exposure_risk(client):
    res = client.get("/api/air-quality/exposure-risk", params={"aqi": 180, "hours": 8})
    assert res.status_code == 200
    assert res.json()["data"]["risk"] == 72


def test_clusters_default_to_all_stations(client):
    res = client.get("/api/analysis/clusters", params={"start_date": "2024-01-01", "end_date": "2024-01-31"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert len(data["stationIds"]) == 5
    assert "timeRange" in data


def test_correlations_for_selected_stations(client):
    res = client.get("/api/analysis/correlations", params={
        "station_ids": ["station-001", "station-002"],
        "start_date": "2024-01-01",
        "end_date": "2024-01-31",
        "method": "Kendall",
    })
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["stationIds"] == ["station-001", "station-002"]
    assert data["method"] == "Kendall"
    assert "pValue" in data["correlations"][0]


def test_trend(client):
    res = client.get("/api/analysis/trend", params={
        "station_id": "station-003",
        "pollutant": "no2",
        "start_date": "2024-01-01",
        "end_date": "2024-01-31",
        "interval": "week",
    })
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["pollutant"] == "no2"
    assert len(data["dataPoints"]) == 10
    assert "changeRate" in data["trend"]
