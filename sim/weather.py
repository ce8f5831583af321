# sim/weather.py
"""
Weather inputs consumed by the simulation.

The simulation only ever reads the latest `WeatherSnapshot`; a missing
snapshot is valid and maps to fixed neutral factors.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class WeatherSnapshot:
    temp: float       # °C
    humidity: float   # %
    wind: float = 0.0  # km/h
    code: int = 0     # WMO weather code


@dataclass(frozen=True)
class ForecastDay:
    day: str
    temp_max: float
    temp_min: float
    code: int


FALLBACK_SNAPSHOT = WeatherSnapshot(temp=28, humidity=45, wind=9, code=0)

FALLBACK_FORECAST: List[ForecastDay] = [
    ForecastDay('Mon', 30, 22, 0),
    ForecastDay('Tue', 32, 24, 1),
    ForecastDay('Wed', 29, 21, 3),
    ForecastDay('Thu', 27, 20, 61),
    ForecastDay('Fri', 28, 21, 2),
]

# used when no snapshot has arrived yet
DEFAULT_TEMP_FACTOR = 0.3
DEFAULT_HUMIDITY_FACTOR = 0.5

# WMO codes for drizzle/rain, rain showers and thunderstorms
PRECIPITATION_RANGES = ((51, 67), (80, 82), (95, 99))


def temp_factor(weather: Optional[WeatherSnapshot]) -> float:
    if weather is None:
        return DEFAULT_TEMP_FACTOR
    return (weather.temp - 20) / 30


def humidity_factor(weather: Optional[WeatherSnapshot]) -> float:
    if weather is None:
        return DEFAULT_HUMIDITY_FACTOR
    return (100 - weather.humidity) / 100


def env_factor(weather: Optional[WeatherSnapshot]) -> float:
    """Drying pressure of the environment: mean of the temperature and dryness factors."""
    return (temp_factor(weather) + humidity_factor(weather)) / 2


def is_precipitation(code) -> bool:
    if code is None:
        return False
    return any(lo <= code <= hi for lo, hi in PRECIPITATION_RANGES)


def weather_category(code) -> str:
    """Coarse category for display: clear, cloudy or rain."""
    if code == 0:
        return 'clear'
    if code <= 3:
        return 'cloudy'
    return 'rain'
