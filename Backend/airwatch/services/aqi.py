"""
AQI rules: category banding, AQI formula and dominant pollutant selection
"""
from typing import Tuple

from airwatch.catalog import DEFAULT_CATALOG, SimulationCatalog
from airwatch.models.schemas import AqiCategory, Pollutant, Pollutants

# Upper bound (inclusive) of each band; anything above the last bound is Hazardous
CATEGORY_BREAKPOINTS: Tuple[Tuple[int, AqiCategory], ...] = (
    (50, AqiCategory.GOOD),
    (100, AqiCategory.MODERATE),
    (150, AqiCategory.UNHEALTHY_FOR_SENSITIVE_GROUPS),
    (200, AqiCategory.UNHEALTHY),
    (300, AqiCategory.VERY_UNHEALTHY),
)


def category_for_aqi(aqi: float) -> AqiCategory:
    """
    Map an AQI value to its severity band

    Bands are half-open (lo, hi]: 50 is Good, 51 is Moderate.
    """
    for upper, category in CATEGORY_BREAKPOINTS:
        if aqi <= upper:
            return category
    return AqiCategory.HAZARDOUS


def compute_aqi(pollutants: Pollutants, catalog: SimulationCatalog = DEFAULT_CATALOG) -> int:
    """
    Max-of-normalized AQI

    aqi = round(max(pm25*2, pm10*1, o3*1.2, no2*1.5, so2*2, co*30))
    """
    return round(max(pollutants.value_of(pollutant) * weight for pollutant, weight in catalog.aqi_weights))


def dominant_pollutant(pollutants: Pollutants, catalog: SimulationCatalog = DEFAULT_CATALOG) -> Pollutant:
    """
    Pollutant with the highest concentration relative to its reference standard

    Ties go to the pollutant listed first in the catalog.
    """
    best, best_ratio = None, None
    for pollutant, standard in catalog.reference_standards:
        ratio = pollutants.value_of(pollutant) / standard
        if best_ratio is None or ratio > best_ratio:
            best, best_ratio = pollutant, ratio
    return best
