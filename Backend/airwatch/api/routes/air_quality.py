"""
API routes for network-wide air quality, alerts and health guidance
"""
from typing import List

from fastapi import APIRouter, Depends, Query

from airwatch.api.facade import AirQualityFacade, get_facade
from airwatch.api.routes.common import to_http
from airwatch.models.schemas import (
    AirQualityData,
    Alert,
    ApiResponse,
    ExposureRisk,
    HealthImpact,
    Pollutant,
    PopulationGroup,
)

router = APIRouter(prefix="/api/air-quality", tags=["air-quality"])


@router.get("/realtime", response_model=ApiResponse[List[AirQualityData]])
async def get_realtime_air_quality(facade: AirQualityFacade = Depends(get_facade)):
    """Get one current sample per station"""
    return to_http(await facade.get_realtime_air_quality())


@router.get("/alerts", response_model=ApiResponse[List[Alert]])
async def get_current_alerts(facade: AirQualityFacade = Depends(get_facade)):
    """Get alerts for stations currently above the alert threshold, worst first"""
    return to_http(await facade.get_current_alerts())


@router.get("/health-impacts", response_model=ApiResponse[List[HealthImpact]])
async def get_health_impacts(
    pollutant: Pollutant,
    concentration: float = Query(..., ge=0),
    population_group: PopulationGroup = PopulationGroup.GENERAL,
    facade: AirQualityFacade = Depends(get_facade)
):
    """
    Get health effects for a pollutant concentration

    Args:
        pollutant: Pollutant key
        concentration: Concentration in the pollutant's unit
        population_group: Population group; General entries are always included

    Returns:
        Matching health impact entries
    """
    return to_http(await facade.get_health_impacts(pollutant, concentration, population_group))


@router.get("/exposure-risk", response_model=ApiResponse[ExposureRisk])
async def get_exposure_risk(
    aqi: int = Query(..., ge=0),
    hours: float = Query(8, ge=0, le=24),
    facade: AirQualityFacade = Depends(get_facade)
):
    """Get the 0-100 exposure risk score for spending `hours` at an AQI"""
    return to_http(await facade.get_exposure_risk(aqi, hours))
