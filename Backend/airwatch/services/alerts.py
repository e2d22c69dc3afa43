"""
Alert deriver: threshold-triggered alerts from a set of samples
"""
import logging
import random
from datetime import datetime
from typing import Iterable, List, Optional

from airwatch.catalog import DEFAULT_CATALOG, SimulationCatalog
from airwatch.directory import StationDirectory
from airwatch.models.schemas import AffectedArea, AirQualityData, Alert, AlertType
from airwatch.services.aqi import category_for_aqi
from airwatch.utils import make_id, utc_now

logger = logging.getLogger(__name__)

DEFAULT_ALERT_THRESHOLD = 100


def alert_type_for_aqi(aqi: int) -> AlertType:
    """Emergency above 300, Danger above 200, otherwise Warning"""
    if aqi > 300:
        return AlertType.EMERGENCY
    if aqi > 200:
        return AlertType.DANGER
    return AlertType.WARNING


class AlertDeriver:
    """Derives alert records for samples whose AQI exceeds a threshold"""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        catalog: SimulationCatalog = DEFAULT_CATALOG,
        directory: Optional[StationDirectory] = None
    ):
        self.rng = rng or random.Random()
        self.catalog = catalog
        self.directory = directory or StationDirectory(catalog)

    def derive_alerts(
        self,
        samples: Iterable[AirQualityData],
        threshold: int = DEFAULT_ALERT_THRESHOLD,
        now: Optional[datetime] = None
    ) -> List[Alert]:
        """
        Build alerts for samples with aqi > threshold

        Args:
            samples: Observations to scan
            threshold: AQI a sample must exceed to raise an alert
            now: Alert timestamp

        Returns:
            Alerts ordered by AQI, highest first
        """
        now = now or utc_now()
        flagged = sorted(
            (sample for sample in samples if sample.aqi > threshold),
            key=lambda sample: sample.aqi,
            reverse=True
        )

        alerts = [self._build_alert(sample, now) for sample in flagged]
        if alerts:
            logger.info(f"Derived {len(alerts)} alerts above AQI {threshold}")
        return alerts

    def _build_alert(self, sample: AirQualityData, now: datetime) -> Alert:
        category = category_for_aqi(sample.aqi)
        pollutant_name = self.catalog.pollutant_name(sample.dominant_pollutant)

        return Alert(
            id=make_id("alert", now, self.rng),
            station_id=sample.station_id,
            timestamp=now,
            type=alert_type_for_aqi(sample.aqi),
            pollutant=sample.dominant_pollutant,
            level=sample.aqi,
            message=(
                f"{pollutant_name} concentration exceeds the standard at station "
                f"{sample.station_id}: AQI is {sample.aqi} ({category.value})."
            ),
            recommendations=list(self.catalog.recommendations_for(category)),
            affected=AffectedArea(
                districts=[self.directory.district_of(sample.station_id)],
                population=list(self.catalog.affected_population),
            ),
            expected_duration=self.rng.randint(1, 24),
        )
