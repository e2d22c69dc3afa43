"""
API routes for the analysis panels
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from airwatch.api.facade import AirQualityFacade, get_facade
from airwatch.api.routes.common import to_http
from airwatch.models.schemas import (
    ApiResponse,
    ClusterAnalysis,
    CorrelationAnalysis,
    CorrelationMethod,
    Pollutant,
    TrendAnalysis,
    TrendInterval,
)

router = APIRouter(prefix="/api/analysis", tags=["analysis"])


def _station_ids_or_all(station_ids: Optional[List[str]], facade: AirQualityFacade) -> List[str]:
    """Default to the whole directory when no stations are given"""
    return station_ids or facade.directory.station_ids


@router.get("/clusters", response_model=ApiResponse[ClusterAnalysis])
async def get_cluster_analysis(
    start_date: str,
    end_date: str,
    station_ids: Optional[List[str]] = Query(None),
    facade: AirQualityFacade = Depends(get_facade)
):
    """
    Get a cluster analysis over a set of stations

    Args:
        start_date: Start of the analysed range
        end_date: End of the analysed range
        station_ids: Stations to cluster (repeat the parameter); all stations if omitted

    Returns:
        Cluster analysis envelope
    """
    station_ids = _station_ids_or_all(station_ids, facade)
    return to_http(await facade.get_cluster_analysis(station_ids, start_date, end_date))


@router.get("/correlations", response_model=ApiResponse[CorrelationAnalysis])
async def get_correlation_analysis(
    start_date: str,
    end_date: str,
    station_ids: Optional[List[str]] = Query(None),
    method: CorrelationMethod = CorrelationMethod.PEARSON,
    facade: AirQualityFacade = Depends(get_facade)
):
    """Get correlations between pollutant, weather and activity variables"""
    station_ids = _station_ids_or_all(station_ids, facade)
    return to_http(await facade.get_correlation_analysis(station_ids, start_date, end_date, method))


@router.get("/trend", response_model=ApiResponse[TrendAnalysis])
async def get_trend_analysis(
    station_id: str,
    start_date: str,
    end_date: str,
    pollutant: Pollutant = Pollutant.PM25,
    interval: TrendInterval = TrendInterval.DAY,
    facade: AirQualityFacade = Depends(get_facade)
):
    """Get a long-term trend decomposition for one pollutant at one station"""
    return to_http(
        await facade.get_trend_analysis(station_id, pollutant, start_date, end_date, interval)
    )
