"""Weather observer abstraction - anything that accepts a generated sample."""
import logging
from abc import ABC, abstractmethod
from typing import Callable, List

from weather_data import WeatherSample


class WeatherObserverBase(ABC):
    """Abstract base class for weather sample subscribers."""

    @abstractmethod
    def update(self, sample: WeatherSample) -> None:
        """
        Receive a newly generated weather sample.

        Called synchronously from the simulator's step, in registration order.
        Subscription changes made from here apply from the next step.

        Args:
            sample: The generated sample (immutable)
        """
        pass


class CallbackObserver(WeatherObserverBase):
    """Adapter that lets a plain function act as an observer."""

    def __init__(self, callback: Callable[[WeatherSample], None]):
        self.callback = callback

    def update(self, sample: WeatherSample) -> None:
        self.callback(sample)


class LoggingObserver(WeatherObserverBase):
    """Observer that writes every sample to the log."""

    def __init__(self, level: int = logging.INFO):
        self.level = level

    def update(self, sample: WeatherSample) -> None:
        logging.log(
            self.level,
            "Weather %s: temp=%.1f°C precip=%s%% condition=%s",
            sample.timestamp.strftime("%Y-%m-%d %H:%M"),
            sample.temperature,
            sample.precipitation_probability,
            sample.condition.name,
        )


class RecordingObserver(WeatherObserverBase):
    """Observer that keeps every sample it receives, in order."""

    def __init__(self):
        self.samples: List[WeatherSample] = []

    def update(self, sample: WeatherSample) -> None:
        self.samples.append(sample)

    @property
    def latest(self):
        return self.samples[-1] if self.samples else None


class WeatherSimulationError(Exception):
    """Base exception for the weather simulator."""
    pass


class InvalidConfiguration(WeatherSimulationError):
    """Raised when the simulator is built with a bad start date or interval."""
    pass
