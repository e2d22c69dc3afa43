"""
Health impact lookup and exposure risk scoring
"""
import logging
from typing import List

from airwatch.catalog import DEFAULT_CATALOG, SimulationCatalog
from airwatch.models.schemas import ExposureRisk, HealthImpact, Pollutant, PopulationGroup

logger = logging.getLogger(__name__)


class HealthImpactService:
    """Service for looking up health effects of pollutant concentrations"""

    def __init__(self, catalog: SimulationCatalog = DEFAULT_CATALOG):
        self.catalog = catalog

    def find_impacts(
        self,
        pollutant: Pollutant,
        concentration: float,
        population_group: PopulationGroup = PopulationGroup.GENERAL
    ) -> List[HealthImpact]:
        """
        Catalog entries covering a concentration for a population group

        Args:
            pollutant: Pollutant key
            concentration: Measured concentration (range bounds are inclusive)
            population_group: Requested group; General entries always apply

        Returns:
            Matching health impact entries in catalog order
        """
        impacts = [
            impact for impact in self.catalog.health_impacts
            if impact.pollutant == pollutant
            and impact.concentration_range.min <= concentration <= impact.concentration_range.max
            and impact.population_group in (population_group, PopulationGroup.GENERAL)
        ]
        logger.debug(
            f"Found {len(impacts)} health impacts for {pollutant.value}={concentration} "
            f"({population_group.value})"
        )
        return impacts

    def exposure_risk(self, aqi: int, hours: float) -> ExposureRisk:
        """
        Exposure risk score (0-100) for spending `hours` at a given AQI

        Base risk is aqi * hours / 24, weighted up non-linearly for the higher bands.
        """
        risk = aqi * hours / 24

        if aqi > 300:
            risk *= 1.5
        elif aqi > 200:
            risk *= 1.3
        elif aqi > 150:
            risk *= 1.2
        elif aqi > 100:
            risk *= 1.1

        return ExposureRisk(aqi=aqi, hours=hours, risk=max(0, min(100, round(risk))))
