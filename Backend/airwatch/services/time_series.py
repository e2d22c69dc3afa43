"""
Time-series builder: past windows, historical ranges and hourly forecasts
"""
import logging
import math
import random
from datetime import datetime, timedelta
from typing import List, Optional, Union

from airwatch.catalog import DEFAULT_CATALOG, SimulationCatalog
from airwatch.models.schemas import (
    AirQualityData,
    Forecast,
    ForecastAccuracy,
    ForecastPoint,
    Pollutant,
    Pollutants,
)
from airwatch.services.aqi import category_for_aqi
from airwatch.services.sample_generator import SampleGenerator
from airwatch.utils import parse_day, utc_now

logger = logging.getLogger(__name__)

FORECAST_METHOD = "Deep learning model + meteorological, traffic and historical pattern fusion"

# Candidates for a forecast's dominant pollutant (CO is never chosen)
FORECAST_POLLUTANTS = (Pollutant.PM25, Pollutant.PM10, Pollutant.O3, Pollutant.NO2, Pollutant.SO2)

HISTORICAL_SAMPLE_HOURS = (0, 6, 12, 18)
RAIN_DAY_INDEXES = (2, 3)
RAIN_FACTOR = 0.7
WEEKEND_FACTOR = 0.8


class TimeSeriesBuilder:
    """Builds ordered sample sequences on top of the sample generator"""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        catalog: SimulationCatalog = DEFAULT_CATALOG,
        sample_generator: Optional[SampleGenerator] = None
    ):
        self.rng = rng or random.Random()
        self.catalog = catalog
        self.sample_generator = sample_generator or SampleGenerator(self.rng, catalog)

    def past_window(
        self,
        station_id: str,
        hours: int = 24,
        now: Optional[datetime] = None
    ) -> List[AirQualityData]:
        """
        Hourly samples for the last `hours` hours, oldest first, ending at now
        """
        if hours <= 0:
            return []

        now = now or utc_now()
        return [
            self.sample_generator.generate_sample(station_id, now - timedelta(hours=offset))
            for offset in range(hours - 1, -1, -1)
        ]

    def historical_range(
        self,
        station_id: str,
        start_date: Union[str, datetime],
        end_date: Union[str, datetime]
    ) -> List[AirQualityData]:
        """
        Four samples per day (00:00, 06:00, 12:00, 18:00) from start to end, both days inclusive

        Args:
            station_id: Station identifier
            start_date: ISO-8601 date or datetime; only its calendar day (in its own offset) is used
            end_date: ISO-8601 date or datetime; only its calendar day (in its own offset) is used

        Returns:
            Samples oldest first, empty if end_date is before start_date
        """
        start = parse_day(start_date)
        end = parse_day(end_date)
        day_count = (end - start).days + 1

        if day_count <= 0:
            logger.debug(f"Empty historical range for {station_id}: {start_date} > {end_date}")
            return []

        data = []
        for day in range(day_count):
            current = start + timedelta(days=day)
            for hour in HISTORICAL_SAMPLE_HOURS:
                data.append(self.sample_generator.generate_sample(station_id, current.replace(hour=hour)))

        return data

    def forecast_series(
        self,
        station_id: str,
        horizon_hours: int,
        now: Optional[datetime] = None
    ) -> Forecast:
        """
        Hourly AQI forecast with diurnal, rain-day and weekend modulation

        The base AQI follows a slow random walk. Confidence decays linearly from
        0.95 towards 0.45 across the horizon and is rounded to 3 decimals, so it is
        non-increasing: on long horizons neighbouring points can share a value.
        """
        rng = self.rng
        now = now or utc_now()
        predictions = []

        base_aqi = 70 + rng.random() * 30
        dominant = FORECAST_POLLUTANTS[int(rng.random() * len(FORECAST_POLLUTANTS))]

        for i in range(max(horizon_hours, 0)):
            timestamp = now + timedelta(hours=i + 1)

            # Afternoon peak, early-morning low
            hour_factor = math.sin((timestamp.hour - 6) * math.pi / 12) * 0.3 + 1
            rain_factor = RAIN_FACTOR if i // 24 in RAIN_DAY_INDEXES else 1
            weekend_factor = WEEKEND_FACTOR if timestamp.weekday() >= 5 else 1

            aqi = max(0, round(base_aqi * hour_factor * rain_factor * weekend_factor))
            base_aqi += rng.random() * 2 - 1

            predictions.append(ForecastPoint(
                timestamp=timestamp,
                aqi=aqi,
                category=category_for_aqi(aqi),
                dominant_pollutant=dominant,
                pollutants=self._forecast_pollutants(aqi, dominant),
                confidence=round(0.95 - (i / horizon_hours) * 0.5, 3),
            ))

        logger.debug(f"Built {len(predictions)}-hour forecast for {station_id}")

        return Forecast(
            station_id=station_id,
            generated_at=now,
            predictions=predictions,
            forecast_method=FORECAST_METHOD,
            accuracy=ForecastAccuracy(
                historical=0.82 + rng.random() * 0.08,
                recent=0.88 + rng.random() * 0.07,
            ),
        )

    def _forecast_pollutants(self, aqi: int, dominant: Pollutant) -> Pollutants:
        """Concentrations scaled from the AQI, with the dominant pollutant biased upward"""
        rng = self.rng

        def pick(pollutant: Pollutant, boosted: float, regular: float) -> float:
            return boosted if pollutant == dominant else regular

        pm25 = pick(Pollutant.PM25, aqi * 0.6, aqi * 0.3 * rng.random())
        pm10 = pick(Pollutant.PM10, aqi * 1.2, aqi * 0.7 * rng.random())
        o3 = pick(Pollutant.O3, 40 + aqi * 0.7, 20 + aqi * 0.3 * rng.random())
        no2 = pick(Pollutant.NO2, 30 + aqi * 0.5, 10 + aqi * 0.2 * rng.random())
        so2 = pick(Pollutant.SO2, 20 + aqi * 0.4, 5 + aqi * 0.1 * rng.random())
        co = 0.5 + aqi * 0.02 * rng.random()

        return Pollutants(
            pm25=round(pm25),
            pm10=round(pm10),
            o3=round(o3),
            no2=round(no2),
            so2=round(so2),
            co=round(co, 1),
        )
