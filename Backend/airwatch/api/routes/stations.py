"""
API routes for stations and station-scoped data
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from airwatch.api.facade import AirQualityFacade, get_facade
from airwatch.api.routes.common import to_http
from airwatch.models.schemas import (
    AirQualityData,
    ApiResponse,
    Forecast,
    SourceAttributionAnalysis,
    Station,
)
from airwatch.utils import utc_now

router = APIRouter(prefix="/api/stations", tags=["stations"])


@router.get("", response_model=ApiResponse[List[Station]])
async def get_all_stations(facade: AirQualityFacade = Depends(get_facade)):
    """Get the station directory"""
    return to_http(await facade.get_all_stations())


@router.get("/{station_id}", response_model=ApiResponse[Station])
async def get_station(station_id: str, facade: AirQualityFacade = Depends(get_facade)):
    """
    Get a single station

    Args:
        station_id: Station identifier

    Returns:
        Station envelope, 404 if the station is not in the directory
    """
    return to_http(await facade.get_station(station_id))


@router.get("/{station_id}/realtime", response_model=ApiResponse[AirQualityData])
async def get_station_realtime(station_id: str, facade: AirQualityFacade = Depends(get_facade)):
    """Get the current sample for a station"""
    return to_http(await facade.get_station_realtime_data(station_id))


@router.get("/{station_id}/history", response_model=ApiResponse[List[AirQualityData]])
async def get_station_history(station_id: str, facade: AirQualityFacade = Depends(get_facade)):
    """Get hourly samples for the past 24 hours"""
    return to_http(await facade.get_station_historical_data(station_id))


@router.get("/{station_id}/historical", response_model=ApiResponse[List[AirQualityData]])
async def get_station_historical_range(
    station_id: str,
    start_date: str = Query(..., description="ISO-8601 start date"),
    end_date: str = Query(..., description="ISO-8601 end date (inclusive)"),
    facade: AirQualityFacade = Depends(get_facade)
):
    """
    Get samples every 6 hours between two dates

    Args:
        station_id: Station identifier
        start_date: First day of the range
        end_date: Last day of the range

    Returns:
        Samples oldest first; empty when end_date is before start_date
    """
    return to_http(await facade.get_historical_data(station_id, start_date, end_date))


@router.get("/{station_id}/forecast", response_model=ApiResponse[Forecast])
async def get_station_forecast(station_id: str, facade: AirQualityFacade = Depends(get_facade)):
    """Get the short-horizon hourly forecast"""
    return to_http(await facade.get_station_forecast(station_id))


@router.get("/{station_id}/prediction", response_model=ApiResponse[Forecast])
async def get_station_prediction(
    station_id: str,
    days: Optional[int] = Query(None, ge=0, le=30),
    facade: AirQualityFacade = Depends(get_facade)
):
    """Get the multi-day hourly AQI prediction"""
    return to_http(await facade.get_advanced_aqi_prediction(station_id, days))


@router.get("/{station_id}/source-attribution", response_model=ApiResponse[SourceAttributionAnalysis])
async def get_source_attribution(
    station_id: str,
    timestamp: Optional[str] = None,
    facade: AirQualityFacade = Depends(get_facade)
):
    """Get the pollution source breakdown for a station at a timestamp (default: now)"""
    timestamp = timestamp or utc_now().isoformat()
    return to_http(await facade.get_source_attribution(station_id, timestamp))
