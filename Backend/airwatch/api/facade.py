"""
Access facade: one async operation per dashboard endpoint

Every operation waits an artificial, slightly jittered delay (so UI loading states
can be exercised) and resolves to an ApiResponse envelope. Failures are reported
in the envelope, never raised.
"""
import asyncio
import logging
import random
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence, Union

from airwatch.catalog import DEFAULT_CATALOG, SimulationCatalog
from airwatch.config import settings
from airwatch.directory import StationDirectory
from airwatch.models.schemas import (
    AirQualityData,
    Alert,
    ApiError,
    ApiResponse,
    ClusterAnalysis,
    CorrelationAnalysis,
    CorrelationMethod,
    ExposureRisk,
    Forecast,
    HealthImpact,
    Pollutant,
    PopulationGroup,
    SourceAttributionAnalysis,
    Station,
    TrendAnalysis,
    TrendInterval,
)
from airwatch.services.alerts import AlertDeriver
from airwatch.services.analytics import AnalyticsGenerator
from airwatch.services.health_impact import HealthImpactService
from airwatch.services.sample_generator import SampleGenerator
from airwatch.services.time_series import TimeSeriesBuilder
from airwatch.utils import utc_now

logger = logging.getLogger(__name__)

NOT_FOUND = "NOT_FOUND"
BAD_REQUEST = "BAD_REQUEST"

# Nominal artificial latency per operation, in milliseconds
OPERATION_DELAYS_MS = {
    "get_all_stations": 300,
    "get_station": 200,
    "get_realtime_air_quality": 500,
    "get_station_realtime_data": 300,
    "get_station_historical_data": 700,
    "get_historical_data": 800,
    "get_station_forecast": 800,
    "get_advanced_aqi_prediction": 1800,
    "get_current_alerts": 400,
    "get_health_impacts": 400,
    "get_exposure_risk": 100,
    "get_cluster_analysis": 1200,
    "get_correlation_analysis": 900,
    "get_source_attribution": 1500,
    "get_trend_analysis": 1000,
}


class AirQualityFacade:
    """Async access layer over the generators"""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        catalog: SimulationCatalog = DEFAULT_CATALOG,
        directory: Optional[StationDirectory] = None,
        latency_scale: Optional[float] = None,
        latency_jitter: Optional[float] = None,
        alert_threshold: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        """
        Initialize facade

        Args:
            rng: Random source shared by all generators (seeded from settings if omitted)
            catalog: Reference catalogs
            directory: Station directory (built from the catalog if omitted)
            latency_scale: Multiplier on nominal delays, 0 disables them
            latency_jitter: +/- fraction of jitter applied to each delay
            alert_threshold: AQI above which realtime samples raise alerts
            clock: Source of the current time
        """
        self.rng = rng or random.Random(settings.random_seed)
        self.catalog = catalog
        self.directory = directory or StationDirectory(catalog)
        self.latency_scale = settings.latency_scale if latency_scale is None else latency_scale
        self.latency_jitter = settings.latency_jitter if latency_jitter is None else latency_jitter
        self.alert_threshold = settings.alert_threshold if alert_threshold is None else alert_threshold
        self.clock = clock

        # Jitter has its own source so that latency never shifts the generated data
        self._latency_rng = random.Random()

        self.sample_generator = SampleGenerator(self.rng, catalog)
        self.time_series = TimeSeriesBuilder(self.rng, catalog, self.sample_generator)
        self.analytics = AnalyticsGenerator(self.rng, catalog)
        self.alert_deriver = AlertDeriver(self.rng, catalog, self.directory)
        self.health_impacts = HealthImpactService(catalog)

    # ------------------------------------------------------------------
    # Envelope helpers
    # ------------------------------------------------------------------

    def _success(self, data: Any) -> ApiResponse:
        return ApiResponse(success=True, data=data, timestamp=self.clock())

    def _error(self, code: str, message: str) -> ApiResponse:
        return ApiResponse(
            success=False,
            error=ApiError(code=code, message=message),
            timestamp=self.clock()
        )

    async def _delay(self, operation: str):
        """Simulated backend latency; cancellable like any other await"""
        if self.latency_scale <= 0:
            return
        nominal = OPERATION_DELAYS_MS[operation] * self.latency_scale
        jitter = self._latency_rng.uniform(-self.latency_jitter, self.latency_jitter)
        await asyncio.sleep(max(0.0, nominal * (1 + jitter)) / 1000)

    async def _respond(self, operation: str, producer: Callable[[], Any]) -> ApiResponse:
        """Wait, produce the payload and wrap it; bad input becomes a BAD_REQUEST envelope"""
        await self._delay(operation)
        try:
            data = producer()
        except ValueError as e:
            logger.warning(f"{operation} rejected: {e}")
            return self._error(BAD_REQUEST, str(e))
        return self._success(data)

    # ------------------------------------------------------------------
    # Stations
    # ------------------------------------------------------------------

    async def get_all_stations(self) -> ApiResponse[List[Station]]:
        return await self._respond("get_all_stations", lambda: self.directory.stations)

    async def get_station(self, station_id: str) -> ApiResponse[Station]:
        """Get a station from the directory, NOT_FOUND if it does not exist"""
        await self._delay("get_station")
        station = self.directory.get(station_id)
        if station is None:
            logger.warning(f"Station lookup failed: {station_id}")
            return self._error(NOT_FOUND, f"Station {station_id} does not exist")
        return self._success(station)

    # ------------------------------------------------------------------
    # Observations
    # ------------------------------------------------------------------

    async def get_realtime_air_quality(self) -> ApiResponse[List[AirQualityData]]:
        return await self._respond(
            "get_realtime_air_quality",
            lambda: self.sample_generator.generate_realtime(self.directory.stations, self.clock())
        )

    async def get_station_realtime_data(self, station_id: str) -> ApiResponse[AirQualityData]:
        """Current sample for one directory station, NOT_FOUND if it does not exist"""
        await self._delay("get_station_realtime_data")
        if station_id not in self.directory:
            logger.warning(f"Realtime lookup failed: {station_id}")
            return self._error(NOT_FOUND, f"No data for station {station_id}")
        return self._success(self.sample_generator.generate_sample(station_id, self.clock()))

    async def get_station_historical_data(self, station_id: str) -> ApiResponse[List[AirQualityData]]:
        """Hourly samples for the past 24 hours"""
        return await self._respond(
            "get_station_historical_data",
            lambda: self.time_series.past_window(station_id, 24, now=self.clock())
        )

    async def get_historical_data(
        self,
        station_id: str,
        start_date: str,
        end_date: str
    ) -> ApiResponse[List[AirQualityData]]:
        """Samples every 6 hours between two dates, both inclusive"""
        return await self._respond(
            "get_historical_data",
            lambda: self.time_series.historical_range(station_id, start_date, end_date)
        )

    # ------------------------------------------------------------------
    # Forecasts
    # ------------------------------------------------------------------

    async def get_station_forecast(self, station_id: str) -> ApiResponse[Forecast]:
        return await self._respond(
            "get_station_forecast",
            lambda: self.time_series.forecast_series(
                station_id, settings.forecast_horizon_hours, now=self.clock()
            )
        )

    async def get_advanced_aqi_prediction(
        self,
        station_id: str,
        days: Optional[int] = None
    ) -> ApiResponse[Forecast]:
        """Multi-day hourly prediction; days defaults to settings.prediction_days"""
        days = settings.prediction_days if days is None else days
        return await self._respond(
            "get_advanced_aqi_prediction",
            lambda: self.time_series.forecast_series(station_id, days * 24, now=self.clock())
        )

    # ------------------------------------------------------------------
    # Alerts & health
    # ------------------------------------------------------------------

    async def get_current_alerts(self) -> ApiResponse[List[Alert]]:
        """Alerts derived from a fresh realtime snapshot of every station"""
        def produce() -> List[Alert]:
            now = self.clock()
            samples = self.sample_generator.generate_realtime(self.directory.stations, now)
            return self.alert_deriver.derive_alerts(samples, self.alert_threshold, now=now)

        return await self._respond("get_current_alerts", produce)

    async def get_health_impacts(
        self,
        pollutant: Union[str, Pollutant],
        concentration: float,
        population_group: Union[str, PopulationGroup] = PopulationGroup.GENERAL
    ) -> ApiResponse[List[HealthImpact]]:
        return await self._respond(
            "get_health_impacts",
            lambda: self.health_impacts.find_impacts(
                Pollutant(pollutant), concentration, PopulationGroup(population_group)
            )
        )

    async def get_exposure_risk(self, aqi: int, hours: float) -> ApiResponse[ExposureRisk]:
        return await self._respond(
            "get_exposure_risk",
            lambda: self.health_impacts.exposure_risk(aqi, hours)
        )

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    async def get_cluster_analysis(
        self,
        station_ids: Sequence[str],
        start_date: str,
        end_date: str
    ) -> ApiResponse[ClusterAnalysis]:
        return await self._respond(
            "get_cluster_analysis",
            lambda: self.analytics.cluster_analysis(station_ids, start_date, end_date, now=self.clock())
        )

    async def get_correlation_analysis(
        self,
        station_ids: Sequence[str],
        start_date: str,
        end_date: str,
        method: Union[str, CorrelationMethod] = CorrelationMethod.PEARSON
    ) -> ApiResponse[CorrelationAnalysis]:
        return await self._respond(
            "get_correlation_analysis",
            lambda: self.analytics.correlation_analysis(
                station_ids, start_date, end_date, CorrelationMethod(method), now=self.clock()
            )
        )

    async def get_source_attribution(
        self,
        station_id: str,
        timestamp: str
    ) -> ApiResponse[SourceAttributionAnalysis]:
        return await self._respond(
            "get_source_attribution",
            lambda: self.analytics.source_attribution(station_id, timestamp, now=self.clock())
        )

    async def get_trend_analysis(
        self,
        station_id: str,
        pollutant: Union[str, Pollutant],
        start_date: str,
        end_date: str,
        interval: Union[str, TrendInterval] = TrendInterval.DAY
    ) -> ApiResponse[TrendAnalysis]:
        return await self._respond(
            "get_trend_analysis",
            lambda: self.analytics.trend_analysis(
                station_id,
                Pollutant(pollutant),
                start_date,
                end_date,
                TrendInterval(interval),
                now=self.clock()
            )
        )


# Global facade instance (created on first use)
_facade: Optional[AirQualityFacade] = None


def get_facade() -> AirQualityFacade:
    """Get facade instance; used as a FastAPI dependency"""
    global _facade
    if _facade is None:
        from airwatch.directory import get_directory
        _facade = AirQualityFacade(directory=get_directory())
        logger.info(
            f"Access facade ready (seed={settings.random_seed}, latency_scale={settings.latency_scale})"
        )
    return _facade
