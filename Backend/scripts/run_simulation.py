#!/usr/bin/env python3
"""
Script to run every facade operation once and print a summary of the generated data
"""
import asyncio
import logging
import os
import random
import sys
from datetime import timedelta

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from airwatch.api.facade import AirQualityFacade
from airwatch.config import settings
from airwatch.directory import load_directory
from airwatch.models.schemas import CorrelationMethod, Pollutant, PopulationGroup, TrendInterval
from airwatch.utils import utc_now

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _report(label: str, response) -> bool:
    """Print one envelope line, return whether it succeeded"""
    if response.success:
        print(f"✓ {label}")
    else:
        print(f"❌ {label}: {response.error.code} - {response.error.message}")
    return response.success


async def run_simulation(seed=None, latency_scale: float = 0.0):
    """Run a complete pass over the facade"""
    print("=" * 80)
    print("AIRWATCH - SIMULATION CYCLE")
    print("=" * 80)
    print(f"Start time: {utc_now()}")
    print(f"Seed: {seed}\n")

    facade = AirQualityFacade(
        rng=random.Random(seed),
        directory=load_directory(),
        latency_scale=latency_scale
    )
    station_ids = facade.directory.station_ids
    first_station = station_ids[0]
    today = utc_now().date()
    start_date = (today - timedelta(days=30)).isoformat()
    end_date = today.isoformat()
    failures = 0

    try:
        print("Step 1: Stations...")
        response = await facade.get_all_stations()
        failures += not _report(f"{len(response.data or [])} stations", response)
        response = await facade.get_station("nonexistent-id")
        print(f"✓ Unknown station rejected with {response.error.code}\n")

        print("Step 2: Observations...")
        response = await facade.get_realtime_air_quality()
        if _report("Realtime snapshot", response):
            for sample in response.data:
                print(f"  - {sample.station_id}: AQI {sample.aqi} ({sample.category.value}), "
                      f"dominant {sample.dominant_pollutant.value}")
        else:
            failures += 1
        response = await facade.get_station_historical_data(first_station)
        failures += not _report(f"Past 24h for {first_station}: {len(response.data or [])} samples", response)
        response = await facade.get_historical_data(first_station, start_date, end_date)
        failures += not _report(f"Historical range {start_date}..{end_date}: "
                                f"{len(response.data or [])} samples", response)
        print()

        print("Step 3: Forecasts...")
        response = await facade.get_station_forecast(first_station)
        failures += not _report(f"Forecast: {len(response.data.predictions) if response.data else 0} points", response)
        response = await facade.get_advanced_aqi_prediction(first_station)
        if _report(f"Prediction ({settings.prediction_days} days)", response):
            accuracy = response.data.accuracy
            print(f"  - Points: {len(response.data.predictions)}")
            print(f"  - Accuracy: historical {accuracy.historical:.2%}, recent {accuracy.recent:.2%}")
        else:
            failures += 1
        print()

        print("Step 4: Alerts & health...")
        response = await facade.get_current_alerts()
        if _report(f"{len(response.data or [])} alerts", response):
            for alert in response.data:
                print(f"  - [{alert.type.value}] {alert.message}")
        else:
            failures += 1
        response = await facade.get_health_impacts(Pollutant.PM25, 80, PopulationGroup.CHILDREN)
        failures += not _report(f"Health impacts for PM2.5=80: {len(response.data or [])} entries", response)
        response = await facade.get_exposure_risk(180, 8)
        failures += not _report(f"Exposure risk at AQI 180 for 8h: {response.data.risk if response.data else '-'}",
                                response)
        print()

        print("Step 5: Analysis...")
        response = await facade.get_cluster_analysis(station_ids, start_date, end_date)
        if _report("Cluster analysis", response):
            for cluster in response.data.clusters:
                print(f"  - Cluster {cluster.id} ({cluster.size}): {', '.join(cluster.stations)}")
        else:
            failures += 1
        response = await facade.get_correlation_analysis(
            station_ids, start_date, end_date, CorrelationMethod.SPEARMAN
        )
        if _report("Correlation analysis", response):
            significant = [c for c in response.data.correlations if c.significant]
            print(f"  - Significant pairs: {len(significant)}/{len(response.data.correlations)}")
        else:
            failures += 1
        response = await facade.get_source_attribution(first_station, utc_now().isoformat())
        if _report("Source attribution", response):
            for source in response.data.sources:
                print(f"  - {source.source_type}: {source.contribution:.0%}")
        else:
            failures += 1
        response = await facade.get_trend_analysis(
            first_station, Pollutant.PM25, start_date, end_date, TrendInterval.DAY
        )
        if _report("Trend analysis", response):
            trend = response.data.trend
            print(f"  - {trend.direction.value} ({trend.change_rate}% per year), "
                  f"{len(trend.breakpoints)} breakpoint(s)")
        else:
            failures += 1
        print()

        # Summary
        print("=" * 80)
        print("SIMULATION CYCLE COMPLETE" if failures == 0 else f"SIMULATION CYCLE FINISHED WITH {failures} FAILURE(S)")
        print("=" * 80)
        print(f"End time: {utc_now()}\n")

        print("Next steps:")
        print("1. Start the API: uvicorn airwatch.main:app --reload")
        print("2. Query API endpoints:")
        print("   - GET http://localhost:8000/api/stations")
        print("   - GET http://localhost:8000/api/air-quality/realtime")
        print("   - GET http://localhost:8000/api/air-quality/alerts")
        print("   - GET http://localhost:8000/api/analysis/clusters?start_date=...&end_date=...")
        print("\n")

    except Exception as e:
        logger.error(f"Simulation error: {e}", exc_info=True)
        print(f"\n❌ Error during simulation: {e}\n")
        failures += 1

    return failures


if __name__ == "__main__":
    sys.exit(1 if asyncio.run(run_simulation(seed=settings.random_seed)) else 0)
