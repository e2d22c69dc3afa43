import random
from datetime import datetime, timezone

import pytest

from airwatch.api.facade import AirQualityFacade
from airwatch.catalog import DEFAULT_CATALOG
from airwatch.directory import StationDirectory

# Wednesday, so the first forecast days are weekdays
NOW = datetime(2024, 1, 3, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def directory():
    return StationDirectory(DEFAULT_CATALOG)


@pytest.fixture
def facade(directory):
    """Facade without artificial latency and with a fixed clock"""
    return AirQualityFacade(
        rng=random.Random(42),
        directory=directory,
        latency_scale=0,
        clock=lambda: NOW
    )
