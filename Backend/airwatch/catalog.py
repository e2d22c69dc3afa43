"""
Immutable reference catalogs for the simulation
Station directory, text templates and reference standards injected into the generators
"""
from datetime import date
from typing import Tuple

from pydantic import BaseModel, ConfigDict

from airwatch.models.schemas import (
    AqiCategory,
    ConcentrationRange,
    HealthImpact,
    Pollutant,
    PopulationGroup,
    RiskLevel,
    Station,
    StationLocation,
)


class SourceArchetype(BaseModel):
    """Candidate pollution source for attribution"""
    model_config = ConfigDict(frozen=True)

    source_type: str
    details: str


class SimulationCatalog(BaseModel):
    """Read-only configuration shared by every generator"""
    model_config = ConfigDict(frozen=True)

    stations: Tuple[Station, ...]
    # (pollutant, reference standard) in catalog order, used to pick the dominant pollutant
    reference_standards: Tuple[Tuple[Pollutant, float], ...]
    # Multipliers for the max-of-normalized AQI formula
    aqi_weights: Tuple[Tuple[Pollutant, float], ...]
    pollutant_names: Tuple[Tuple[Pollutant, str], ...]
    cluster_characteristics: Tuple[str, ...]
    correlation_pairs: Tuple[Tuple[str, str], ...]
    source_archetypes: Tuple[SourceArchetype, ...]
    breakpoint_causes: Tuple[str, ...]
    alert_recommendations: Tuple[Tuple[AqiCategory, Tuple[str, ...]], ...]
    affected_population: Tuple[str, ...]
    health_impacts: Tuple[HealthImpact, ...]

    def pollutant_name(self, pollutant: Pollutant) -> str:
        """Display name for a pollutant, falling back to its key"""
        for key, name in self.pollutant_names:
            if key == pollutant:
                return name
        return pollutant.value

    def recommendations_for(self, category: AqiCategory) -> Tuple[str, ...]:
        for key, recommendations in self.alert_recommendations:
            if key == category:
                return recommendations
        return ()


DEFAULT_STATIONS: Tuple[Station, ...] = (
    Station(
        id="station-001",
        name="Beijing Chaoyang District Monitoring Station",
        location=StationLocation(
            latitude=39.9219,
            longitude=116.4419,
            address="East Third Ring Road North, Chaoyang District, Beijing",
            district="Chaoyang District",
            city="Beijing",
        ),
        active=True,
        installation_date=date(2020, 1, 15),
        last_maintenance=date(2023, 3, 22),
    ),
    Station(
        id="station-002",
        name="Beijing Haidian District Monitoring Station",
        location=StationLocation(
            latitude=39.9631,
            longitude=116.3039,
            address="Tsinghua Garden, Haidian District, Beijing",
            district="Haidian District",
            city="Beijing",
        ),
        active=True,
        installation_date=date(2019, 10, 10),
        last_maintenance=date(2023, 2, 15),
    ),
    Station(
        id="station-003",
        name="Shanghai Pudong New Area Monitoring Station",
        location=StationLocation(
            latitude=31.2246,
            longitude=121.5438,
            address="Century Avenue, Pudong New Area, Shanghai",
            district="Pudong New Area",
            city="Shanghai",
        ),
        active=True,
        installation_date=date(2020, 5, 20),
        last_maintenance=date(2023, 1, 30),
    ),
    Station(
        id="station-004",
        name="Guangzhou Tianhe District Monitoring Station",
        location=StationLocation(
            latitude=23.1255,
            longitude=113.3552,
            address="Tianhe Road, Tianhe District, Guangzhou",
            district="Tianhe District",
            city="Guangzhou",
        ),
        active=True,
        installation_date=date(2021, 2, 8),
        last_maintenance=date(2023, 4, 10),
    ),
    Station(
        id="station-005",
        name="Shenzhen Nanshan District Monitoring Station",
        location=StationLocation(
            latitude=22.5324,
            longitude=113.9292,
            address="Science and Technology Park, Nanshan District, Shenzhen",
            district="Nanshan District",
            city="Shenzhen",
        ),
        active=True,
        installation_date=date(2019, 8, 25),
        last_maintenance=date(2023, 3, 15),
    ),
)


DEFAULT_HEALTH_IMPACTS: Tuple[HealthImpact, ...] = (
    HealthImpact(
        pollutant=Pollutant.PM25,
        concentration_range=ConcentrationRange(min=0, max=35),
        population_group=PopulationGroup.GENERAL,
        short_term_effects=["Generally no noticeable effects"],
        long_term_effects=["Long-term exposure may slightly raise the risk of respiratory disease"],
        recommendations=["Normal activities"],
        risk_level=RiskLevel.LOW,
    ),
    HealthImpact(
        pollutant=Pollutant.PM25,
        concentration_range=ConcentrationRange(min=35, max=150),
        population_group=PopulationGroup.GENERAL,
        short_term_effects=["Possible mild coughing", "Eye discomfort"],
        long_term_effects=["Higher risk of respiratory disease", "Possible cardiovascular effects"],
        recommendations=["Reduce prolonged outdoor activity", "Keep doors and windows closed"],
        risk_level=RiskLevel.MEDIUM,
    ),
    HealthImpact(
        pollutant=Pollutant.PM25,
        concentration_range=ConcentrationRange(min=150, max=999),
        population_group=PopulationGroup.GENERAL,
        short_term_effects=["Coughing", "Shortness of breath", "Eye irritation"],
        long_term_effects=["Significantly higher risk of respiratory disease", "Higher risk of cardiovascular disease"],
        recommendations=["Avoid outdoor activity", "Wear a mask", "Use an air purifier"],
        risk_level=RiskLevel.HIGH,
    ),
    HealthImpact(
        pollutant=Pollutant.PM25,
        concentration_range=ConcentrationRange(min=35, max=150),
        population_group=PopulationGroup.RESPIRATORY,
        short_term_effects=["Aggravated asthma symptoms", "Breathing discomfort"],
        long_term_effects=["Reduced lung function", "Worsening of chronic respiratory disease"],
        recommendations=["Avoid outdoor activity", "Carry asthma medication", "Wear an N95 mask"],
        risk_level=RiskLevel.HIGH,
    ),
    HealthImpact(
        pollutant=Pollutant.O3,
        concentration_range=ConcentrationRange(min=0, max=70),
        population_group=PopulationGroup.GENERAL,
        short_term_effects=["Generally no noticeable effects"],
        long_term_effects=["May slightly affect lung health"],
        recommendations=["Normal activities"],
        risk_level=RiskLevel.LOW,
    ),
    HealthImpact(
        pollutant=Pollutant.O3,
        concentration_range=ConcentrationRange(min=70, max=999),
        population_group=PopulationGroup.GENERAL,
        short_term_effects=["Coughing", "Chest pain", "Shortness of breath"],
        long_term_effects=["Lung damage", "Higher risk of respiratory infection"],
        recommendations=["Avoid strenuous outdoor activity", "Especially during hot afternoons"],
        risk_level=RiskLevel.MEDIUM,
    ),
)


DEFAULT_CATALOG = SimulationCatalog(
    stations=DEFAULT_STATIONS,
    reference_standards=(
        (Pollutant.PM25, 35.0),
        (Pollutant.PM10, 70.0),
        (Pollutant.O3, 70.0),
        (Pollutant.NO2, 40.0),
        (Pollutant.SO2, 20.0),
        (Pollutant.CO, 4.0),
    ),
    aqi_weights=(
        (Pollutant.PM25, 2.0),
        (Pollutant.PM10, 1.0),
        (Pollutant.O3, 1.2),
        (Pollutant.NO2, 1.5),
        (Pollutant.SO2, 2.0),
        (Pollutant.CO, 30.0),
    ),
    pollutant_names=(
        (Pollutant.PM25, "PM2.5"),
        (Pollutant.PM10, "PM10"),
        (Pollutant.O3, "Ozone (O3)"),
        (Pollutant.NO2, "Nitrogen dioxide (NO2)"),
        (Pollutant.SO2, "Sulfur dioxide (SO2)"),
        (Pollutant.CO, "Carbon monoxide (CO)"),
    ),
    cluster_characteristics=(
        "Industrial-zone air quality profile",
        "Commercial-district air quality pattern",
        "Typical residential pollution profile",
        "Pollution pattern near transport hubs",
        "Pollutant build-up during hot weather",
        "Wind direction drives pollutant transport",
        "Pronounced night/day pollution difference",
        "Marked improvement after rainfall",
    ),
    correlation_pairs=(
        ("pm25", "temperature"),
        ("pm25", "humidity"),
        ("pm25", "windSpeed"),
        ("pm10", "pm25"),
        ("o3", "temperature"),
        ("o3", "so2"),
        ("no2", "traffic_flow"),
        ("so2", "industrial_activity"),
        ("aqi", "precipitation"),
        ("co", "traffic_congestion"),
    ),
    source_archetypes=(
        SourceArchetype(
            source_type="Vehicle emissions",
            details="Mainly motor vehicle exhaust, including nitrogen oxides and particulate matter",
        ),
        SourceArchetype(
            source_type="Industrial activity",
            details="Emissions from nearby industrial parks, containing heavy metals and volatile organic compounds",
        ),
        SourceArchetype(
            source_type="Coal combustion",
            details="Sulfur dioxide and particulates from power plants and residential winter heating",
        ),
        SourceArchetype(
            source_type="Construction",
            details="Construction site dust raising PM10 and PM2.5",
        ),
        SourceArchetype(
            source_type="Regional transport",
            details="Pollutants carried by wind from upwind cities or industrial areas",
        ),
        SourceArchetype(
            source_type="Secondary pollution",
            details="Ozone and other secondary pollutants formed by photochemical reactions of primary pollutants",
        ),
        SourceArchetype(
            source_type="Biogenic emissions",
            details="Volatile organic compounds and pollen released by vegetation",
        ),
    ),
    breakpoint_causes=(
        "Environmental policy enacted",
        "Major industrial project commissioned",
        "Traffic control measures",
        "Abrupt change in meteorological conditions",
        "Increase in seasonal pollution sources",
    ),
    alert_recommendations=(
        (AqiCategory.GOOD, ("All groups can carry on normal activities",)),
        (AqiCategory.MODERATE, ("Unusually sensitive people should reduce outdoor activity",)),
        (AqiCategory.UNHEALTHY_FOR_SENSITIVE_GROUPS, (
            "Children, the elderly and people with respiratory or heart disease should reduce prolonged or heavy outdoor exertion",
            "Consider wearing a mask outdoors",
        )),
        (AqiCategory.UNHEALTHY, (
            "Children, the elderly and people with heart or lung disease should stop outdoor activity",
            "The general public should reduce outdoor activity",
            "Keep windows closed and run an air purifier",
        )),
        (AqiCategory.VERY_UNHEALTHY, (
            "Children, the elderly and people with heart or lung disease should stay indoors and avoid exertion",
            "The general public should avoid outdoor activity",
            "Keep windows closed and run an air purifier",
        )),
        (AqiCategory.HAZARDOUS, (
            "Children, the elderly and the sick should stay indoors and avoid exertion",
            "The general public should avoid all outdoor activity",
            "Wear an N95 mask if going outside is unavoidable",
        )),
    ),
    affected_population=("Children", "Elderly", "People with respiratory disease"),
    health_impacts=DEFAULT_HEALTH_IMPACTS,
)
