"""
Synthetic sample generator: one pollutant/weather observation per station and timestamp
"""
import logging
import random
from datetime import datetime
from typing import Iterable, List, Optional, Union

from airwatch.catalog import DEFAULT_CATALOG, SimulationCatalog
from airwatch.models.schemas import AirQualityData, Pollutants, Station, Weather
from airwatch.services.aqi import category_for_aqi, compute_aqi, dominant_pollutant
from airwatch.utils import make_id, parse_timestamp, utc_now

logger = logging.getLogger(__name__)


class SampleGenerator:
    """Generates independent random observations from an injected random source"""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        catalog: SimulationCatalog = DEFAULT_CATALOG
    ):
        self.rng = rng or random.Random()
        self.catalog = catalog

    def draw_pollutants(self) -> Pollutants:
        """Draw pollutant concentrations from bounded uniforms"""
        rng = self.rng
        return Pollutants(
            pm25=float(int(rng.random() * 150)),
            pm10=float(int(rng.random() * 200)),
            o3=float(int(rng.random() * 120)),
            no2=float(int(rng.random() * 100)),
            so2=float(int(rng.random() * 50)),
            co=round(rng.random() * 10, 2),
        )

    def draw_weather(self) -> Weather:
        """Draw weather values, each independent of the others"""
        rng = self.rng
        return Weather(
            temperature=float(int(rng.random() * 35) - 5),
            humidity=float(int(rng.random() * 100)),
            wind_speed=round(rng.random() * 15, 1),
            wind_direction=float(int(rng.random() * 360)),
            pressure=float(int(rng.random() * 60) + 970),
            precipitation=round(rng.random() * 20, 1),
        )

    def generate_sample(self, station_id: str, timestamp: Union[str, datetime]) -> AirQualityData:
        """
        Generate one observation

        Args:
            station_id: Any station identifier (not checked against the directory)
            timestamp: ISO-8601 string or datetime of the observation

        Returns:
            Sample whose category and dominant pollutant are derived from its own values
        """
        moment = parse_timestamp(timestamp)
        pollutants = self.draw_pollutants()
        aqi = compute_aqi(pollutants, self.catalog)
        weather = self.draw_weather()

        return AirQualityData(
            id=make_id("data", moment, self.rng),
            station_id=station_id,
            timestamp=moment,
            aqi=aqi,
            category=category_for_aqi(aqi),
            dominant_pollutant=dominant_pollutant(pollutants, self.catalog),
            pollutants=pollutants,
            weather=weather,
        )

    def generate_realtime(
        self,
        stations: Iterable[Station],
        timestamp: Optional[datetime] = None
    ) -> List[AirQualityData]:
        """One sample per station, all sharing the same timestamp"""
        moment = timestamp or utc_now()
        samples = [self.generate_sample(station.id, moment) for station in stations]
        logger.debug(f"Generated realtime snapshot for {len(samples)} stations")
        return samples
