"""Tests for the seasonal model."""
import random
import pytest
from datetime import datetime
from unittest.mock import Mock

import seasonal_model
from seasonal_model import (
    clamp_range,
    clamp_temperature,
    condition_probability_table,
    initial_temperature,
    is_midday,
    is_night,
    pick_condition,
    season_of,
)
from weather_data import Season, WeatherCondition


@pytest.mark.parametrize("month,expected", [
    (1, Season.WINTER),
    (2, Season.WINTER),
    (3, Season.SPRING),
    (4, Season.SPRING),
    (5, Season.SPRING),
    (6, Season.SUMMER),
    (7, Season.SUMMER),
    (8, Season.SUMMER),
    (9, Season.AUTUMN),
    (10, Season.AUTUMN),
    (11, Season.AUTUMN),
    (12, Season.WINTER),
])
def test_season_of_every_month(month, expected):
    """Every month maps to exactly one season."""
    assert season_of(datetime(2025, month, 15, 12, 0)) is expected


def test_season_of_is_idempotent():
    ts = datetime(2024, 12, 31, 23, 59)
    assert season_of(ts) is season_of(ts) is Season.WINTER


def test_clamp_ranges():
    assert clamp_range(Season.WINTER) == (-15.0, 15.0)
    assert clamp_range(Season.SPRING) == (5.0, 25.0)
    assert clamp_range(Season.AUTUMN) == (5.0, 25.0)
    assert clamp_range(Season.SUMMER) == (15.0, 45.0)


def test_clamp_temperature():
    assert clamp_temperature(Season.SUMMER, 50.0) == 45.0
    assert clamp_temperature(Season.SUMMER, 10.0) == 15.0
    assert clamp_temperature(Season.WINTER, -20.0) == -15.0
    assert clamp_temperature(Season.SPRING, 12.5) == 12.5


def test_initial_temperature_uses_range():
    """Initial temperature scales one uniform draw onto the season range."""
    rng = Mock()
    rng.random.return_value = 0.0
    assert initial_temperature(Season.WINTER, rng) == -15.0
    rng.random.return_value = 0.5
    assert initial_temperature(Season.SPRING, rng) == 15.0
    assert initial_temperature(Season.SUMMER, rng) == 30.0


@pytest.mark.parametrize("season", list(Season))
def test_initial_temperature_within_band(season):
    rng = random.Random(7)
    low, high = clamp_range(season)
    for _ in range(200):
        assert low <= initial_temperature(season, rng) <= high


@pytest.mark.parametrize("hour,expected", [
    (0, True), (5, True), (6, False), (12, False), (21, False), (22, True), (23, True),
])
def test_is_night(hour, expected):
    assert is_night(hour) is expected


@pytest.mark.parametrize("hour,expected", [
    (9, False), (10, True), (15, True), (16, False),
])
def test_is_midday(hour, expected):
    assert is_midday(hour) is expected


@pytest.mark.parametrize("season", list(Season))
def test_night_table_ignores_season(season):
    table, fallback = condition_probability_table(season, 23)
    assert table == [(0.2, WeatherCondition.THUNDERSTORM), (0.5, WeatherCondition.CLOUDY)]
    assert fallback is WeatherCondition.RAIN


def test_day_tables():
    """Daytime tables match the per-season thresholds."""
    assert condition_probability_table(Season.WINTER, 12) == (
        [(0.3, WeatherCondition.SNOW), (0.6, WeatherCondition.CLOUDY)], WeatherCondition.SUNNY)
    assert condition_probability_table(Season.SPRING, 12) == (
        [(0.2, WeatherCondition.RAIN), (0.4, WeatherCondition.CLOUDY)], WeatherCondition.SUNNY)
    assert condition_probability_table(Season.SUMMER, 12) == (
        [(0.1, WeatherCondition.THUNDERSTORM), (0.3, WeatherCondition.CLOUDY)], WeatherCondition.SUNNY)
    assert condition_probability_table(Season.AUTUMN, 12) == (
        [(0.3, WeatherCondition.RAIN), (0.6, WeatherCondition.CLOUDY)], WeatherCondition.SUNNY)


def test_table_is_a_copy():
    """Callers can't modify the shared tables."""
    table, _ = condition_probability_table(Season.SUMMER, 12)
    table.clear()
    assert seasonal_model.DAY_TABLES[Season.SUMMER]


@pytest.mark.parametrize("draw,expected", [
    (0.0, WeatherCondition.THUNDERSTORM),
    (0.09, WeatherCondition.THUNDERSTORM),
    (0.1, WeatherCondition.CLOUDY),
    (0.29, WeatherCondition.CLOUDY),
    (0.3, WeatherCondition.SUNNY),
    (0.99, WeatherCondition.SUNNY),
])
def test_pick_condition_summer_day(draw, expected):
    table, fallback = condition_probability_table(Season.SUMMER, 12)
    assert pick_condition(table, fallback, draw) is expected


def test_pick_condition_night_fallback():
    table, fallback = condition_probability_table(Season.WINTER, 2)
    assert pick_condition(table, fallback, 0.5) is WeatherCondition.RAIN
    assert pick_condition(table, fallback, 0.49) is WeatherCondition.CLOUDY
