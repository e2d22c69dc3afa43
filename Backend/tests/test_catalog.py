import pytest
from pydantic import ValidationError

from airwatch.catalog import DEFAULT_CATALOG
from airwatch.directory import StationDirectory
from airwatch.models.schemas import AqiCategory, Pollutant
from airwatch.services.health_impact import HealthImpactService


def test_station_location_cannot_be_changed():
    station = StationDirectory(DEFAULT_CATALOG).stations[0]
    with pytest.raises(ValidationError):
        station.location.district = "Elsewhere"
    assert StationDirectory(DEFAULT_CATALOG).district_of("station-001") == "Chaoyang District"


def test_health_impact_lists_cannot_be_changed():
    service = HealthImpactService()
    impact = service.find_impacts(Pollutant.PM25, 10)[0]

    with pytest.raises(AttributeError):
        impact.recommendations.append("Extra advice")
    with pytest.raises(ValidationError):
        impact.concentration_range.max = 500
    assert len(service.find_impacts(Pollutant.PM25, 10)[0].recommendations) == 1


def test_catalog_tables_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CATALOG.pollutant_names[0] = (Pollutant.PM25, "Fine dust")
    with pytest.raises(ValidationError):
        DEFAULT_CATALOG.alert_recommendations = ()


def test_catalog_lookups():
    assert DEFAULT_CATALOG.pollutant_name(Pollutant.PM25) == "PM2.5"
    assert DEFAULT_CATALOG.recommendations_for(AqiCategory.HAZARDOUS)
    assert len(DEFAULT_CATALOG.alert_recommendations) == len(AqiCategory)
