"""
FastAPI main application
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from airwatch.api.facade import get_facade
from airwatch.api.routes import air_quality, analysis, health, stations
from airwatch.config import settings
from airwatch.directory import load_directory

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info("Starting AirWatch simulator...")

    load_directory()
    get_facade()

    if settings.random_seed is None:
        logger.info("No RANDOM_SEED configured, generated data will differ between runs")

    yield

    # Shutdown
    logger.info("Shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="AirWatch API",
    description="Synthetic air quality monitoring data for dashboard development",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware - must be added before routes
# Origins are configured via CORS_ORIGINS environment variable (comma-separated)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)

# Include routers
app.include_router(stations.router)
app.include_router(air_quality.router)
app.include_router(analysis.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "AirWatch",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "stations": "/api/stations",
            "realtime": "/api/air-quality/realtime",
            "alerts": "/api/air-quality/alerts",
            "health_impacts": "/api/air-quality/health-impacts",
            "exposure_risk": "/api/air-quality/exposure-risk",
            "clusters": "/api/analysis/clusters",
            "correlations": "/api/analysis/correlations",
            "trend": "/api/analysis/trend",
            "health": "/api/health"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "airwatch.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
