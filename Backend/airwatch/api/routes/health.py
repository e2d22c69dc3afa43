"""
Health check endpoints
"""
import logging

from fastapi import APIRouter, Depends

from airwatch.api.facade import AirQualityFacade, get_facade
from airwatch.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/")
async def health_check(facade: AirQualityFacade = Depends(get_facade)):
    """Basic health check"""
    return {
        "status": "healthy",
        "service": "airwatch_simulator",
        "environment": settings.environment,
        "stations": len(facade.directory),
        "latency_scale": facade.latency_scale
    }
