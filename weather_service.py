"""
Weather provider for the twin: a single best-effort read of current
conditions and a 5-day forecast from Open-Meteo (no API key). Any failure
falls back to static values so the simulation always has a snapshot.
"""

from datetime import datetime
import logging
import math

import requests

from sim.weather import FALLBACK_FORECAST, FALLBACK_SNAPSHOT, ForecastDay, WeatherSnapshot

logger = logging.getLogger(__name__)

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
FORECAST_DAYS = 5


def _round_half_up(x):
    return int(math.floor(float(x) + 0.5))


def fallback_weather():
    return FALLBACK_SNAPSHOT, list(FALLBACK_FORECAST)


def build_params(cfg=None):
    cfg = cfg or {}
    return {
        "latitude": cfg.get("latitude", 28.6139),
        "longitude": cfg.get("longitude", 77.2090),
        "current": "temperature_2m,relative_humidity_2m,wind_speed_10m,weather_code",
        "daily": "weather_code,temperature_2m_max,temperature_2m_min",
        "timezone": cfg.get("timezone", "Asia/Kolkata"),
        "forecast_days": cfg.get("forecast_days", FORECAST_DAYS),
    }


def parse_payload(data, days=FORECAST_DAYS):
    """
    Convert an Open-Meteo response into (WeatherSnapshot, [ForecastDay]).
    Raises KeyError/TypeError/ValueError on a malformed payload.
    """
    current = data["current"]
    snapshot = WeatherSnapshot(
        temp=_round_half_up(current["temperature_2m"]),
        humidity=float(current["relative_humidity_2m"]),
        wind=_round_half_up(current["wind_speed_10m"]),
        code=int(current["weather_code"]),
    )

    daily = data["daily"]
    dates = daily["time"]
    if len(dates) < days:
        raise ValueError(f"expected {days} forecast days, got {len(dates)}")
    forecast = []
    for idx, date in enumerate(dates[:days]):
        forecast.append(ForecastDay(
            day=datetime.strptime(date, "%Y-%m-%d").strftime("%a"),
            temp_max=_round_half_up(daily["temperature_2m_max"][idx]),
            temp_min=_round_half_up(daily["temperature_2m_min"][idx]),
            code=int(daily["weather_code"][idx]),
        ))
    return snapshot, forecast


def fetch_weather(cfg=None):
    """Fetch current weather and forecast; never raises, falls back to static values."""
    cfg = cfg or {}
    url = cfg.get("url", OPEN_METEO_URL)
    try:
        r = requests.get(url, params=build_params(cfg), timeout=cfg.get("timeout", 10))
        r.raise_for_status()
        return parse_payload(r.json(), cfg.get("forecast_days", FORECAST_DAYS))
    except (requests.RequestException, KeyError, TypeError, ValueError, IndexError) as e:
        logger.warning("Weather fetch failed (%s); using fallback weather", e)
        return fallback_weather()
