"""Seasonal model - pure functions mapping time to season bounds and condition odds."""
import random
from datetime import datetime
from typing import Dict, List, Tuple

from weather_data import Season, WeatherCondition

# (cumulative threshold, condition) pairs, evaluated in order, first match wins
ConditionTable = List[Tuple[float, WeatherCondition]]

NIGHT_START_HOUR = 22
NIGHT_END_HOUR = 6
MIDDAY_START_HOUR = 10
MIDDAY_END_HOUR = 16

# Initial draw range and hard clamp band share the same bounds
TEMPERATURE_RANGES: Dict[Season, Tuple[float, float]] = {
    Season.WINTER: (-15.0, 15.0),
    Season.SPRING: (5.0, 25.0),
    Season.SUMMER: (15.0, 45.0),
    Season.AUTUMN: (5.0, 25.0),
}

# Push-back applied when the previous temperature left the band
BAND_CORRECTION: Dict[Season, float] = {
    Season.WINTER: 0.5,
    Season.SUMMER: 1.5,
    Season.SPRING: 0.3,
    Season.AUTUMN: 0.3,
}

SEASONAL_BIAS: Dict[Season, float] = {
    Season.WINTER: -0.3,
    Season.SUMMER: 0.3,
    Season.SPRING: 0.0,
    Season.AUTUMN: 0.0,
}

CONDITION_OFFSETS: Dict[WeatherCondition, float] = {
    WeatherCondition.THUNDERSTORM: -4.5,
    WeatherCondition.SNOW: -0.5,
    WeatherCondition.SUNNY: 0.9,
    WeatherCondition.CLOUDY: -1.3,
    WeatherCondition.RAIN: -2.2,
}

NIGHT_TABLE: ConditionTable = [
    (0.2, WeatherCondition.THUNDERSTORM),
    (0.5, WeatherCondition.CLOUDY),
]
NIGHT_FALLBACK = WeatherCondition.RAIN

DAY_TABLES: Dict[Season, ConditionTable] = {
    Season.WINTER: [(0.3, WeatherCondition.SNOW), (0.6, WeatherCondition.CLOUDY)],
    Season.SPRING: [(0.2, WeatherCondition.RAIN), (0.4, WeatherCondition.CLOUDY)],
    Season.SUMMER: [(0.1, WeatherCondition.THUNDERSTORM), (0.3, WeatherCondition.CLOUDY)],
    Season.AUTUMN: [(0.3, WeatherCondition.RAIN), (0.6, WeatherCondition.CLOUDY)],
}
DAY_FALLBACK = WeatherCondition.SUNNY


def season_of(timestamp: datetime) -> Season:
    """
    Get the calendar season for a timestamp.

    Total over all months: December through February wrap to WINTER.
    """
    month = timestamp.month
    for season in Season:
        if season.contains_month(month):
            return season
    return Season.WINTER


def is_night(hour: int) -> bool:
    return hour >= NIGHT_START_HOUR or hour < NIGHT_END_HOUR


def is_midday(hour: int) -> bool:
    return MIDDAY_START_HOUR <= hour < MIDDAY_END_HOUR


def clamp_range(season: Season) -> Tuple[float, float]:
    """Hard (min, max) temperature band for a season in degrees Celsius."""
    return TEMPERATURE_RANGES[season]


def clamp_temperature(season: Season, temperature: float) -> float:
    low, high = clamp_range(season)
    return max(low, min(high, temperature))


def initial_temperature(season: Season, rng: random.Random) -> float:
    """
    Draw a starting temperature uniformly from the season's range.

    Args:
        season: Season of the simulation start
        rng: Random source (one draw is consumed)

    Returns:
        Temperature in degrees Celsius
    """
    low, high = clamp_range(season)
    return rng.random() * (high - low) + low


def condition_probability_table(season: Season, hour: int) -> Tuple[ConditionTable, WeatherCondition]:
    """
    Get the ordered cumulative condition table for a season and hour of day.

    The night window [22:00, 06:00) uses a single table for every season.

    Returns:
        Tuple of (thresholds, fallback condition used when no threshold matches)
    """
    if is_night(hour):
        return list(NIGHT_TABLE), NIGHT_FALLBACK
    return list(DAY_TABLES[season]), DAY_FALLBACK


def pick_condition(table: ConditionTable, fallback: WeatherCondition, draw: float) -> WeatherCondition:
    for threshold, condition in table:
        if draw < threshold:
            return condition
    return fallback
