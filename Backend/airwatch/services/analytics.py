"""
Derived-analytics generators: clusters, correlations, source attribution and trend decomposition

These synthesize self-consistent structures for the analysis panels. The algorithm
and methodology names are display labels; no statistics are computed.
"""
import logging
import math
import random
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Union

from dateutil.relativedelta import relativedelta

from airwatch.catalog import DEFAULT_CATALOG, SimulationCatalog
from airwatch.models.schemas import (
    Breakpoint,
    Centroid,
    CentroidWeather,
    Cluster,
    ClusterAnalysis,
    ClusterQuality,
    Correlation,
    CorrelationAnalysis,
    CorrelationMethod,
    Pollutant,
    Pollutants,
    Relationship,
    SourceAttributionAnalysis,
    SourceContribution,
    TimeRange,
    TrendAnalysis,
    TrendDataPoint,
    TrendDirection,
    TrendInterval,
    TrendSummary,
    TrendTimeRange,
)
from airwatch.utils import make_id, parse_timestamp, utc_now

logger = logging.getLogger(__name__)

CLUSTER_ALGORITHM = "K-means clustering"
ATTRIBUTION_METHODOLOGY = "Receptor model combined with source apportionment"
TREND_METHODOLOGY = "Time-series decomposition and trend analysis"

MIN_TREND_POINTS = 10


def classify_correlation(coefficient: float) -> Relationship:
    """
    Relationship label for a correlation coefficient

    ±0.7 strong, ±0.3 moderate, otherwise weak; |coefficient| < 0.1 is no correlation.
    """
    if abs(coefficient) < 0.1:
        return Relationship.NO_CORRELATION
    if coefficient > 0.7:
        return Relationship.STRONG_POSITIVE
    if coefficient > 0.3:
        return Relationship.MODERATE_POSITIVE
    if coefficient > 0:
        return Relationship.WEAK_POSITIVE
    if coefficient > -0.3:
        return Relationship.WEAK_NEGATIVE
    if coefficient > -0.7:
        return Relationship.MODERATE_NEGATIVE
    return Relationship.STRONG_NEGATIVE


def trend_point_count(start: datetime, end: datetime, interval: TrendInterval) -> int:
    """Number of points the interval yields between start and end, at least MIN_TREND_POINTS"""
    span_days = (end - start).total_seconds() / 86400

    if interval == TrendInterval.DAY:
        count = math.ceil(span_days)
    elif interval == TrendInterval.WEEK:
        count = math.ceil(span_days / 7)
    elif interval == TrendInterval.MONTH:
        count = (end.year - start.year) * 12 + (end.month - start.month)
    elif interval == TrendInterval.YEAR:
        count = end.year - start.year + 1
    else:
        raise ValueError(f"Unknown trend interval: {interval}")

    return max(count, MIN_TREND_POINTS)


def step_timestamp(start: datetime, interval: TrendInterval, index: int) -> datetime:
    """Timestamp of the index-th point, stepping by calendar units"""
    if interval == TrendInterval.DAY:
        return start + timedelta(days=index)
    if interval == TrendInterval.WEEK:
        return start + timedelta(weeks=index)
    if interval == TrendInterval.MONTH:
        return start + relativedelta(months=index)
    if interval == TrendInterval.YEAR:
        return start + relativedelta(years=index)
    raise ValueError(f"Unknown trend interval: {interval}")


def breakpoint_bounds(point_count: int) -> tuple:
    """Exclusive (low, high) index bounds for a breakpoint: the middle 40% of the series"""
    return math.floor(point_count * 0.3), math.ceil(point_count * 0.7)


class AnalyticsGenerator:
    """Stateless generators for the analysis artifacts, driven by an injected random source"""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        catalog: SimulationCatalog = DEFAULT_CATALOG
    ):
        self.rng = rng or random.Random()
        self.catalog = catalog

    # ------------------------------------------------------------------
    # Clusters
    # ------------------------------------------------------------------

    def cluster_analysis(
        self,
        station_ids: Sequence[str],
        start_date: str,
        end_date: str,
        now: Optional[datetime] = None
    ) -> ClusterAnalysis:
        """
        Partition stations into 2-4 synthetic clusters

        Every distinct station ends up in exactly one cluster and no cluster is empty.

        Args:
            station_ids: Stations to cluster (duplicates are ignored)
            start_date: Start of the analysed range, echoed back
            end_date: End of the analysed range, echoed back
            now: Generation time

        Returns:
            Cluster analysis with centroid, characteristics and quality scores
        """
        rng = self.rng
        now = now or utc_now()
        stations = list(dict.fromkeys(station_ids))

        cluster_count = min(rng.randint(2, 4), len(stations))
        members = self._partition(stations, cluster_count)

        clusters = []
        for index, cluster_stations in enumerate(members):
            clusters.append(Cluster(
                id=index + 1,
                size=len(cluster_stations),
                centroid=self._centroid(),
                characteristics=rng.sample(list(self.catalog.cluster_characteristics), 2),
                stations=cluster_stations,
            ))

        logger.debug(f"Generated {len(clusters)} clusters for {len(stations)} stations")

        return ClusterAnalysis(
            id=make_id("cluster", now, rng),
            generated_at=now,
            station_ids=list(station_ids),
            time_range=TimeRange(start=start_date, end=end_date),
            clusters=clusters,
            algorithm=CLUSTER_ALGORITHM,
            parameters={
                "k": cluster_count,
                "iterations": rng.randint(100, 199),
                "distanceMetric": "euclidean",
            },
            quality=ClusterQuality(
                silhouette_score=0.65 + rng.random() * 0.3,
                davies_bouldin_index=0.3 + rng.random() * 0.5,
            ),
        )

    def _partition(self, stations: List[str], cluster_count: int) -> List[List[str]]:
        """Coin-flip stations into clusters; the last cluster takes whatever is left"""
        rng = self.rng
        if cluster_count <= 0:
            return []

        members: List[List[str]] = [[] for _ in range(cluster_count)]
        remaining = list(stations)
        for index in range(cluster_count - 1):
            kept = []
            for station_id in remaining:
                if rng.random() >= 0.5:
                    members[index].append(station_id)
                else:
                    kept.append(station_id)
            remaining = kept
        members[-1].extend(remaining)

        # Seed empty clusters with one station taken from a cluster that can spare it
        for cluster in members:
            if cluster:
                continue
            donors = [other for other in members if len(other) > 1]
            donor = rng.choice(donors)
            cluster.append(donor.pop(rng.randrange(len(donor))))

        return members

    def _centroid(self) -> Centroid:
        rng = self.rng
        return Centroid(
            aqi=int(rng.random() * 200) + 30,
            pollutants=Pollutants(
                pm25=float(int(rng.random() * 150)),
                pm10=float(int(rng.random() * 200)),
                o3=float(int(rng.random() * 120)),
                no2=float(int(rng.random() * 100)),
                so2=float(int(rng.random() * 50)),
                co=round(rng.random() * 10, 2),
            ),
            weather=CentroidWeather(
                temperature=float(int(rng.random() * 35) - 5),
                humidity=float(int(rng.random() * 100)),
                wind_speed=round(rng.random() * 15, 1),
            ),
        )

    # ------------------------------------------------------------------
    # Correlations
    # ------------------------------------------------------------------

    def correlation_analysis(
        self,
        station_ids: Sequence[str],
        start_date: str,
        end_date: str,
        method: CorrelationMethod = CorrelationMethod.PEARSON,
        now: Optional[datetime] = None
    ) -> CorrelationAnalysis:
        """Annotate each catalog variable pair with a random coefficient and p-value"""
        rng = self.rng
        now = now or utc_now()

        correlations = []
        for variable1, variable2 in self.catalog.correlation_pairs:
            coefficient = round((rng.random() * 2 - 1) * 0.95, 3)
            p_value = round(rng.random() * 0.1, 4)
            correlations.append(Correlation(
                variable1=variable1,
                variable2=variable2,
                coefficient=coefficient,
                p_value=p_value,
                relationship=classify_correlation(coefficient),
                significant=p_value < 0.05,
            ))

        return CorrelationAnalysis(
            id=make_id("corr", now, rng),
            generated_at=now,
            station_ids=list(station_ids),
            time_range=TimeRange(start=start_date, end=end_date),
            correlations=correlations,
            method=method,
        )

    # ------------------------------------------------------------------
    # Source attribution
    # ------------------------------------------------------------------

    def source_attribution(
        self,
        station_id: str,
        timestamp: Union[str, datetime],
        now: Optional[datetime] = None
    ) -> SourceAttributionAnalysis:
        """
        Attribute pollution to 3-5 source archetypes

        Contributions are whole percentages, each at least 1%, and add up to exactly 100%.
        """
        rng = self.rng
        now = now or utc_now()
        moment = parse_timestamp(timestamp)

        archetypes = list(self.catalog.source_archetypes)
        rng.shuffle(archetypes)
        selected = archetypes[:rng.randint(3, 5)]

        percentages = []
        remaining = 100
        for index in range(len(selected) - 1):
            # Leave at least 1% for every source still to come
            reserve = len(selected) - index - 1
            ceiling = max(1, int((remaining - reserve) * 0.8))
            share = rng.randint(1, ceiling)
            percentages.append(share)
            remaining -= share
        percentages.append(remaining)

        sources = [
            SourceContribution(
                source_type=archetype.source_type,
                contribution=share / 100,
                confidence=round(0.6 + rng.random() * 0.3, 3),
                details=archetype.details,
            )
            for archetype, share in zip(selected, percentages)
        ]

        return SourceAttributionAnalysis(
            id=make_id("attr", now, rng),
            generated_at=now,
            station_id=station_id,
            timestamp=moment,
            sources=sources,
            methodology=ATTRIBUTION_METHODOLOGY,
            uncertainty=0.1 + rng.random() * 0.15,
        )

    # ------------------------------------------------------------------
    # Trend decomposition
    # ------------------------------------------------------------------

    def trend_analysis(
        self,
        station_id: str,
        pollutant: Pollutant,
        start_date: str,
        end_date: str,
        interval: TrendInterval = TrendInterval.DAY,
        now: Optional[datetime] = None
    ) -> TrendAnalysis:
        """
        Synthesize a decomposed series: trend + seasonal + residual + breakpoint step

        Args:
            station_id: Station identifier
            pollutant: Pollutant the series describes
            start_date: ISO-8601 start of the range
            end_date: ISO-8601 end of the range
            interval: Spacing of the points
            now: Generation time

        Returns:
            Trend analysis with at least 10 data points and 0-1 breakpoints
        """
        rng = self.rng
        now = now or utc_now()
        start = parse_timestamp(start_date)
        end = parse_timestamp(end_date)

        point_count = trend_point_count(start, end, interval)

        direction = list(TrendDirection)[int(rng.random() * 3)]
        if direction == TrendDirection.STABLE:
            change_rate = rng.random() * 0.05
        else:
            sign = 1 if direction == TrendDirection.INCREASING else -1
            change_rate = sign * (rng.random() * 0.3 + 0.05)

        seasonality = rng.random() > 0.3

        breakpoints = []
        breakpoint_index = None
        if rng.random() < 0.5:
            low, high = breakpoint_bounds(point_count)
            breakpoint_index = rng.randint(low + 1, high - 1)
            breakpoints.append(Breakpoint(
                timestamp=step_timestamp(start, interval, breakpoint_index),
                significance=0.7 + rng.random() * 0.3,
                possible_cause=rng.choice(self.catalog.breakpoint_causes),
            ))

        base_value = 30 + rng.random() * 50
        seasonal_amplitude = base_value * 0.3 if seasonality else 0
        if direction == TrendDirection.INCREASING:
            step_shift = base_value * 0.2
        elif direction == TrendDirection.DECREASING:
            step_shift = -base_value * 0.2
        else:
            step_shift = 0

        data_points = []
        for i in range(point_count):
            trend_value = base_value + base_value * change_rate * (i / point_count)
            seasonal = (
                seasonal_amplitude * math.sin(i * (2 * math.pi / (point_count / 4)))
                if seasonality else 0
            )
            residual = (rng.random() * 2 - 1) * base_value * 0.1
            breakpoint_effect = step_shift if breakpoint_index is not None and i > breakpoint_index else 0

            value = max(0, trend_value + seasonal + residual + breakpoint_effect)

            data_points.append(TrendDataPoint(
                timestamp=step_timestamp(start, interval, i),
                value=round(value, 1),
                trend=round(trend_value, 1),
                seasonal=round(seasonal, 1),
                residual=round(residual, 1),
            ))

        logger.debug(
            f"Trend for {station_id}/{pollutant.value}: {direction.value}, "
            f"{point_count} points, {len(breakpoints)} breakpoints"
        )

        return TrendAnalysis(
            id=make_id("trend", now, rng),
            generated_at=now,
            station_id=station_id,
            pollutant=pollutant,
            time_range=TrendTimeRange(start=start_date, end=end_date, interval=interval),
            trend=TrendSummary(
                direction=direction,
                change_rate=change_rate,
                seasonality=seasonality,
                breakpoints=breakpoints,
            ),
            data_points=data_points,
            methodology=TREND_METHODOLOGY,
        )
