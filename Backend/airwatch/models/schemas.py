"""
Pydantic schemas for the synthetic air quality data and the API envelope
"""
from datetime import date, datetime
from enum import Enum
from typing import Dict, Generic, List, Optional, Tuple, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Pollutant(str, Enum):
    """Pollutant keys, in catalog order (used for tie-breaking)"""
    PM25 = "pm25"
    PM10 = "pm10"
    O3 = "o3"
    NO2 = "no2"
    SO2 = "so2"
    CO = "co"


class AqiCategory(str, Enum):
    """AQI severity bands, least to most severe"""
    GOOD = "Good"
    MODERATE = "Moderate"
    UNHEALTHY_FOR_SENSITIVE_GROUPS = "Unhealthy for Sensitive Groups"
    UNHEALTHY = "Unhealthy"
    VERY_UNHEALTHY = "Very Unhealthy"
    HAZARDOUS = "Hazardous"


class AlertType(str, Enum):
    WARNING = "Warning"
    DANGER = "Danger"
    EMERGENCY = "Emergency"


class TrendDirection(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class TrendInterval(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class CorrelationMethod(str, Enum):
    PEARSON = "Pearson"
    SPEARMAN = "Spearman"
    KENDALL = "Kendall"


class Relationship(str, Enum):
    STRONG_POSITIVE = "Strong Positive"
    MODERATE_POSITIVE = "Moderate Positive"
    WEAK_POSITIVE = "Weak Positive"
    NO_CORRELATION = "No Correlation"
    WEAK_NEGATIVE = "Weak Negative"
    MODERATE_NEGATIVE = "Moderate Negative"
    STRONG_NEGATIVE = "Strong Negative"


class PopulationGroup(str, Enum):
    GENERAL = "General"
    CHILDREN = "Children"
    ELDERLY = "Elderly"
    RESPIRATORY = "Respiratory"
    CARDIOVASCULAR = "Cardiovascular"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys for the dashboard"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Station Schemas
class StationLocation(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    latitude: float
    longitude: float
    address: str
    district: str
    city: str


class Station(CamelModel):
    """Static monitoring station directory entry"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    location: StationLocation
    active: bool
    installation_date: date
    last_maintenance: date


# Sample Schemas
class Pollutants(CamelModel):
    """Pollutant concentrations: pm25/pm10 in µg/m³, o3/no2/so2 in ppb, co in ppm"""
    pm25: float
    pm10: float
    o3: float
    no2: float
    so2: float
    co: float

    def value_of(self, pollutant: Pollutant) -> float:
        """Concentration for a pollutant key"""
        return getattr(self, pollutant.value)


class Weather(CamelModel):
    temperature: float  # °C
    humidity: float  # %
    wind_speed: float  # m/s
    wind_direction: float  # degrees
    pressure: float  # hPa
    precipitation: float  # mm


class AirQualityData(CamelModel):
    """One synthetic observation for a station"""
    id: str
    station_id: str
    timestamp: datetime
    aqi: int = Field(ge=0)
    category: AqiCategory
    dominant_pollutant: Pollutant
    pollutants: Pollutants
    weather: Weather


# Forecast Schemas
class ForecastPoint(CamelModel):
    timestamp: datetime
    aqi: int = Field(ge=0)
    category: AqiCategory
    dominant_pollutant: Pollutant
    pollutants: Pollutants
    confidence: float = Field(ge=0, le=1)


class ForecastAccuracy(CamelModel):
    historical: float = Field(ge=0, lt=1)
    recent: float = Field(ge=0, lt=1)


class Forecast(CamelModel):
    station_id: str
    generated_at: datetime
    predictions: List[ForecastPoint]
    forecast_method: str
    accuracy: ForecastAccuracy


# Analysis Schemas
class TimeRange(CamelModel):
    start: str
    end: str


class CentroidWeather(CamelModel):
    temperature: float
    humidity: float
    wind_speed: float


class Centroid(CamelModel):
    aqi: int
    pollutants: Pollutants
    weather: CentroidWeather


class Cluster(CamelModel):
    id: int
    size: int
    centroid: Centroid
    characteristics: List[str]
    stations: List[str]


class ClusterQuality(CamelModel):
    silhouette_score: float = Field(ge=0.65, le=0.95)
    davies_bouldin_index: float = Field(ge=0.3, le=0.8)


class ClusterAnalysis(CamelModel):
    id: str
    generated_at: datetime
    station_ids: List[str]
    time_range: TimeRange
    clusters: List[Cluster]
    algorithm: str
    parameters: Dict[str, Union[int, str]]
    quality: ClusterQuality


class Correlation(CamelModel):
    variable1: str
    variable2: str
    coefficient: float = Field(ge=-0.95, le=0.95)
    p_value: float = Field(ge=0, le=0.1)
    relationship: Relationship
    significant: bool


class CorrelationAnalysis(CamelModel):
    id: str
    generated_at: datetime
    station_ids: List[str]
    time_range: TimeRange
    correlations: List[Correlation]
    method: CorrelationMethod


class SourceContribution(CamelModel):
    source_type: str
    contribution: float = Field(ge=0, le=1)
    confidence: float = Field(ge=0.6, le=0.9)
    details: Optional[str] = None


class SourceAttributionAnalysis(CamelModel):
    id: str
    generated_at: datetime
    station_id: str
    timestamp: datetime
    sources: List[SourceContribution]
    methodology: str
    uncertainty: float = Field(ge=0.1, le=0.25)


class TrendTimeRange(TimeRange):
    interval: TrendInterval


class Breakpoint(CamelModel):
    timestamp: datetime
    significance: float
    possible_cause: Optional[str] = None


class TrendSummary(CamelModel):
    direction: TrendDirection
    change_rate: float
    seasonality: bool
    breakpoints: List[Breakpoint]


class TrendDataPoint(CamelModel):
    timestamp: datetime
    value: float = Field(ge=0)
    trend: float
    seasonal: Optional[float] = None
    residual: Optional[float] = None


class TrendAnalysis(CamelModel):
    id: str
    generated_at: datetime
    station_id: str
    pollutant: Pollutant
    time_range: TrendTimeRange
    trend: TrendSummary
    data_points: List[TrendDataPoint]
    methodology: str


# Alert Schemas
class AffectedArea(CamelModel):
    districts: List[str]
    population: List[str]


class Alert(CamelModel):
    id: str
    station_id: str
    timestamp: datetime
    type: AlertType
    pollutant: Pollutant
    level: int
    message: str
    recommendations: List[str]
    affected: AffectedArea
    expected_duration: int  # hours


# Health Schemas
class ConcentrationRange(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    min: float
    max: float


class HealthImpact(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    pollutant: Pollutant
    concentration_range: ConcentrationRange
    population_group: PopulationGroup
    short_term_effects: Tuple[str, ...]
    long_term_effects: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    risk_level: RiskLevel


class ExposureRisk(CamelModel):
    aqi: int
    hours: float
    risk: int = Field(ge=0, le=100)


# API Response Schemas
T = TypeVar("T")


class ApiError(CamelModel):
    code: str  # "NOT_FOUND" | "BAD_REQUEST"
    message: str


class ApiResponse(CamelModel, Generic[T]):
    """Uniform envelope returned by every facade operation"""
    success: bool
    data: Optional[T] = None
    error: Optional[ApiError] = None
    timestamp: datetime
