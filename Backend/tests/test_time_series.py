import math
import random
from datetime import datetime, timedelta, timezone

from airwatch.models.schemas import Pollutant
from airwatch.services.aqi import category_for_aqi
from airwatch.services.time_series import RAIN_FACTOR, WEEKEND_FACTOR, TimeSeriesBuilder

from conftest import NOW


class ConstantRandom(random.Random):
    """Random source whose random() is always 0.5, so the forecast random walk stays flat"""

    def random(self):
        return 0.5


def test_past_window_is_hourly_and_ends_now():
    builder = TimeSeriesBuilder(random.Random(1))
    window = builder.past_window("station-001", 24, now=NOW)

    assert len(window) == 24
    assert window[-1].timestamp == NOW
    assert window[0].timestamp == NOW - timedelta(hours=23)
    for earlier, later in zip(window, window[1:]):
        assert later.timestamp - earlier.timestamp == timedelta(hours=1)


def test_past_window_with_no_hours_is_empty():
    builder = TimeSeriesBuilder(random.Random(1))
    assert builder.past_window("station-001", 0, now=NOW) == []


def test_historical_range_samples_four_times_a_day():
    builder = TimeSeriesBuilder(random.Random(2))
    data = builder.historical_range("station-001", "2024-01-01", "2024-01-03")

    assert len(data) == 12
    assert {sample.timestamp.hour for sample in data} == {0, 6, 12, 18}
    assert data[0].timestamp == datetime(2024, 1, 1, 0, tzinfo=timezone.utc)
    assert data[-1].timestamp == datetime(2024, 1, 3, 18, tzinfo=timezone.utc)
    assert [s.timestamp for s in data] == sorted(s.timestamp for s in data)


def test_historical_range_ignores_time_of_day():
    builder = TimeSeriesBuilder(random.Random(2))
    data = builder.historical_range("station-001", "2024-01-01T15:30:00Z", "2024-01-01T09:00:00Z")
    assert len(data) == 4


def test_reversed_historical_range_is_empty():
    builder = TimeSeriesBuilder(random.Random(3))
    assert builder.historical_range("station-001", "2024-01-05", "2024-01-01") == []


def test_forecast_points_are_hourly_after_now():
    builder = TimeSeriesBuilder(random.Random(4))
    forecast = builder.forecast_series("station-003", 24, now=NOW)

    assert forecast.station_id == "station-003"
    assert forecast.generated_at == NOW
    assert len(forecast.predictions) == 24
    for i, point in enumerate(forecast.predictions):
        assert point.timestamp == NOW + timedelta(hours=i + 1)
        assert point.category == category_for_aqi(point.aqi)
        assert point.dominant_pollutant != Pollutant.CO
        assert 0 < point.confidence <= 0.95


def test_forecast_confidence_never_increases():
    builder = TimeSeriesBuilder(random.Random(5))
    predictions = builder.forecast_series("station-001", 7 * 24, now=NOW).predictions
    confidences = [point.confidence for point in predictions]
    assert confidences[0] == 0.95
    assert all(a >= b for a, b in zip(confidences, confidences[1:]))


def test_forecast_with_zero_horizon_has_no_points():
    builder = TimeSeriesBuilder(random.Random(6))
    forecast = builder.forecast_series("station-001", 0, now=NOW)
    assert forecast.predictions == []
    assert 0.82 <= forecast.accuracy.historical < 0.9
    assert 0.88 <= forecast.accuracy.recent < 0.95


def test_forecast_applies_rain_and_weekend_factors():
    # Monday midnight: days 2-3 are rain days, Saturday is day 5
    now = datetime(2024, 1, 1, 0, tzinfo=timezone.utc)
    builder = TimeSeriesBuilder(ConstantRandom())
    predictions = builder.forecast_series("station-001", 7 * 24, now=now).predictions

    base_aqi = 85  # 70 + 0.5 * 30
    hour_factor = math.sin((2 - 6) * math.pi / 12) * 0.3 + 1  # every point below is at 02:00

    monday = predictions[1]
    wednesday = predictions[2 * 24 + 1]
    saturday = predictions[5 * 24 + 1]
    assert monday.timestamp.hour == wednesday.timestamp.hour == saturday.timestamp.hour == 2
    assert saturday.timestamp.weekday() == 5

    assert monday.aqi == round(base_aqi * hour_factor)
    assert wednesday.aqi == round(base_aqi * hour_factor * RAIN_FACTOR)
    assert saturday.aqi == round(base_aqi * hour_factor * WEEKEND_FACTOR)


def test_forecast_dominant_pollutant_is_biased_upward():
    builder = TimeSeriesBuilder(ConstantRandom())
    point = builder.forecast_series("station-001", 1, now=NOW).predictions[0]
    # int(0.5 * 5) picks the third candidate
    assert point.dominant_pollutant == Pollutant.O3
    assert point.pollutants.o3 == round(40 + point.aqi * 0.7)


def test_historical_range_uses_the_day_of_an_offset_timestamp():
    builder = TimeSeriesBuilder(random.Random(3))
    data = builder.historical_range("station-001", "2024-01-01T00:00+08:00", "2024-01-01T23:00+08:00")
    assert len(data) == 4
    assert data[0].timestamp == datetime(2024, 1, 1, 0, tzinfo=timezone.utc)


def test_long_horizon_confidence_is_non_increasing_and_bounded():
    builder = TimeSeriesBuilder(random.Random(7))
    predictions = builder.forecast_series("station-001", 30 * 24, now=NOW).predictions
    confidences = [point.confidence for point in predictions]

    assert len(confidences) == 30 * 24
    assert all(a >= b for a, b in zip(confidences, confidences[1:]))
    assert confidences[-1] < confidences[0]
    assert confidences[-1] >= 0.45
