"""Weather domain model - pure data structures shared by the simulator and its subscribers."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Tuple


class Season(Enum):
    """Calendar season with its inclusive month range (start, end)."""
    SPRING = (3, 5)
    SUMMER = (6, 8)
    AUTUMN = (9, 11)
    WINTER = (12, 2)  # wraps over the year end

    @property
    def months(self) -> Tuple[int, int]:
        return self.value

    def contains_month(self, month: int) -> bool:
        """Check whether a month (1-12) falls inside this season."""
        start, end = self.value
        if start <= end:
            return start <= month <= end
        return month >= start or month <= end


class WeatherCondition(Enum):
    """Categorical sky/precipitation state of one sample."""
    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAIN = "rain"
    SNOW = "snow"
    THUNDERSTORM = "thunderstorm"


PRECIPITATING_CONDITIONS = frozenset(
    {WeatherCondition.RAIN, WeatherCondition.SNOW, WeatherCondition.THUNDERSTORM}
)


@dataclass(frozen=True)
class WeatherSample:
    """One generated weather reading. Frozen so subscribers can't mutate it."""
    temperature: float  # degrees Celsius
    precipitation_probability: int  # percent, 0-100
    condition: WeatherCondition
    timestamp: datetime

    @property
    def has_precipitation(self) -> bool:
        return self.condition in PRECIPITATING_CONDITIONS

    @property
    def is_freezing(self) -> bool:
        return self.temperature < 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation for logging and CLI output."""
        return {
            "temperature": round(self.temperature, 2),
            "precipitation_probability": self.precipitation_probability,
            "condition": self.condition.name,
            "timestamp": self.timestamp.isoformat(),
        }
