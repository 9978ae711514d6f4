"""Weather simulation engine - bounded random walk over seasons with synchronous publishing."""
import logging
import random
from datetime import date, datetime, time, timedelta
from typing import Callable, List, Optional, Tuple, Union

import seasonal_model
from weather_data import Season, WeatherCondition, WeatherSample
from weather_observer import InvalidConfiguration, WeatherObserverBase

Subscriber = Union[WeatherObserverBase, Callable[[WeatherSample], None]]

BASE_CHANGE_SPREAD = 1.5  # base change is uniform in [-0.75, 0.75)
MIDDAY_WARMING = 0.7
SNOW_MELT_THRESHOLD = 2.0
COLD_THRESHOLD = 3.0


def _parse_start_date(start_date) -> date:
    if isinstance(start_date, datetime):
        return start_date.date()
    if isinstance(start_date, date):
        return start_date
    if isinstance(start_date, str):
        try:
            return date.fromisoformat(start_date.strip())
        except ValueError as e:
            raise InvalidConfiguration(f"Invalid start date {start_date!r}: {e}") from e
    raise InvalidConfiguration(f"Start date must be a date or ISO string, got {type(start_date).__name__}")


class WeatherSimulationEngine:
    """
    Generates one weather sample per step and pushes it to subscribers.

    State (last temperature, last timestamp, season) is owned by the engine
    and only changes inside step(). The engine is single-threaded: step() is
    not reentrant and callers must serialize invocations, typically via a
    single pacing loop.

    Notification is synchronous and in registration order. Duplicate
    subscriptions are allowed and produce duplicate notifications.
    """

    def __init__(
        self,
        start_date: Union[date, str],
        interval_minutes: int,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        isolate_subscriber_errors: bool = False
    ):
        """
        Initialize the simulation at midnight of start_date.

        Args:
            start_date: First simulated day (date, datetime or "YYYY-MM-DD")
            interval_minutes: Simulated minutes per step, at least 1
            rng: Random source; a private random.Random(seed) when omitted
            seed: Seed for the private random source (ignored if rng is given)
            isolate_subscriber_errors: Log subscriber failures and keep
                notifying instead of propagating the first one

        Raises:
            InvalidConfiguration: If the interval or start date is invalid
        """
        if isinstance(interval_minutes, bool) or not isinstance(interval_minutes, int):
            raise InvalidConfiguration(f"Interval must be an integer number of minutes, got {interval_minutes!r}")
        if interval_minutes < 1:
            raise InvalidConfiguration(f"Interval must be at least 1 minute, got {interval_minutes}")
        first_day = _parse_start_date(start_date)

        self._rng = rng if rng is not None else random.Random(seed)
        self._interval = timedelta(minutes=interval_minutes)
        self._interval_minutes = interval_minutes
        self.isolate_subscriber_errors = isolate_subscriber_errors

        self._last_timestamp = datetime.combine(first_day, time(0, 0))
        self._current_season = seasonal_model.season_of(self._last_timestamp)
        self._last_temperature = seasonal_model.initial_temperature(self._current_season, self._rng)
        self._latest_sample: Optional[WeatherSample] = None
        self._subscribers: List[Subscriber] = []

        logging.info(
            "Weather simulation ready: start=%s season=%s temp=%.1f°C interval=%smin",
            self._last_timestamp.isoformat(),
            self._current_season.name,
            self._last_temperature,
            interval_minutes,
        )

    @property
    def last_temperature(self) -> float:
        return self._last_temperature

    @property
    def last_timestamp(self) -> datetime:
        return self._last_timestamp

    @property
    def current_season(self) -> Season:
        return self._current_season

    @property
    def interval_minutes(self) -> int:
        return self._interval_minutes

    @property
    def latest_sample(self) -> Optional[WeatherSample]:
        """Most recent sample, or None before the first step."""
        return self._latest_sample

    @property
    def subscribers(self) -> Tuple[Subscriber, ...]:
        return tuple(self._subscribers)

    def subscribe(self, subscriber: Subscriber) -> None:
        """Register a subscriber; it is notified after those registered before it."""
        if not isinstance(subscriber, WeatherObserverBase) and not callable(subscriber):
            raise TypeError(f"Subscriber must be a WeatherObserverBase or callable, got {type(subscriber).__name__}")
        self._subscribers.append(subscriber)
        logging.debug(f"Subscriber registered ({len(self._subscribers)} total)")

    def unsubscribe(self, subscriber: Subscriber) -> None:
        """Remove the first registration of subscriber (by identity); no-op if absent."""
        for index, registered in enumerate(self._subscribers):
            if registered is subscriber:
                del self._subscribers[index]
                logging.debug(f"Subscriber removed ({len(self._subscribers)} left)")
                return

    def step(self) -> WeatherSample:
        """
        Advance the simulation by one interval and publish the new sample.

        Returns:
            WeatherSample: The sample delivered to every subscriber

        Raises:
            Exception: The first subscriber failure, unless subscriber
                errors are isolated. State is committed before notifying,
                so a failing subscriber does not roll the simulation back.
        """
        timestamp = self._last_timestamp + self._interval
        season = seasonal_model.season_of(timestamp)

        condition = self._draw_condition(timestamp, season)
        delta = self._temperature_delta(condition, timestamp, season, self._last_temperature)
        temperature = seasonal_model.clamp_temperature(season, self._last_temperature + delta)
        precipitation = self._precipitation_probability(condition, season, temperature)

        if condition is WeatherCondition.SNOW and temperature > SNOW_MELT_THRESHOLD:
            condition = WeatherCondition.CLOUDY
        if temperature < COLD_THRESHOLD:
            condition = WeatherCondition.SNOW if self._rng.random() < 0.5 else WeatherCondition.CLOUDY
            # Only snow carries precipitation below the cold threshold
            if condition is not WeatherCondition.SNOW:
                precipitation = 0

        sample = WeatherSample(
            temperature=temperature,
            precipitation_probability=precipitation,
            condition=condition,
            timestamp=timestamp,
        )

        self._last_temperature = temperature
        self._last_timestamp = timestamp
        self._current_season = season
        self._latest_sample = sample

        logging.debug(
            "Step %s: season=%s delta=%+.2f temp=%.2f°C precip=%s%% condition=%s",
            timestamp.isoformat(),
            season.name,
            delta,
            temperature,
            precipitation,
            condition.name,
        )

        self._notify(sample)
        return sample

    def run(self, steps: int) -> List[WeatherSample]:
        """Run several steps back to back and return the samples in order."""
        if isinstance(steps, bool) or not isinstance(steps, int) or steps < 0:
            raise InvalidConfiguration(f"Step count must be a non-negative integer, got {steps!r}")
        return [self.step() for _ in range(steps)]

    def _notify(self, sample: WeatherSample) -> None:
        # Iterate a snapshot so callbacks may (un)subscribe safely
        for subscriber in list(self._subscribers):
            try:
                if isinstance(subscriber, WeatherObserverBase):
                    subscriber.update(sample)
                else:
                    subscriber(sample)
            except Exception:
                if not self.isolate_subscriber_errors:
                    raise
                logging.exception(f"Subscriber {subscriber!r} failed for sample at {sample.timestamp.isoformat()}")

    def _draw_condition(self, timestamp: datetime, season: Season) -> WeatherCondition:
        table, fallback = seasonal_model.condition_probability_table(season, timestamp.hour)
        return seasonal_model.pick_condition(table, fallback, self._rng.random())

    def _temperature_delta(
        self,
        condition: WeatherCondition,
        timestamp: datetime,
        season: Season,
        last_temperature: float
    ) -> float:
        base_change = self._rng.random() * BASE_CHANGE_SPREAD - BASE_CHANGE_SPREAD / 2
        hour = timestamp.hour

        if seasonal_model.is_night(hour):
            # Subtracting a negative drop: summer nights warm by 1.5, others by 0.5
            base_change -= (-1.5 if season is Season.SUMMER else -0.5)
        elif seasonal_model.is_midday(hour):
            base_change += MIDDAY_WARMING

        low, high = seasonal_model.clamp_range(season)
        correction = seasonal_model.BAND_CORRECTION[season]
        if last_temperature > high:
            base_change -= correction
        if last_temperature < low:
            base_change += correction
        base_change += seasonal_model.SEASONAL_BIAS[season]

        return base_change + seasonal_model.CONDITION_OFFSETS.get(condition, 0.0)

    def _precipitation_probability(self, condition: WeatherCondition, season: Season, temperature: float) -> int:
        rng = self._rng
        if temperature < COLD_THRESHOLD:
            return rng.randint(30, 70) if condition is WeatherCondition.SNOW else 0

        if season is Season.WINTER:
            return rng.randint(30, 70) if condition is WeatherCondition.SNOW else rng.randint(0, 20)
        if season is Season.SPRING:
            return rng.randint(30, 80)
        if season is Season.SUMMER:
            return rng.randint(50, 100) if condition is WeatherCondition.THUNDERSTORM else rng.randint(0, 30)
        if season is Season.AUTUMN:
            return rng.randint(40, 100)
        return rng.randint(0, 40)
