# sim/status.py
"""
Status classifier: maps a plant's moisture against its optimal band to a
discrete health label. Thresholds are checked top to bottom and the first
match wins, so the order of `_RULES` matters.
"""

from enum import Enum


HIGH_HUMIDITY = 70


class PlantStatus(Enum):
    NEEDS_WATER = "Needs Water"
    WATER_SOON = "Water Soon"
    TOO_WET = "Too Wet"
    HEALTHY = "Healthy"


# (guard, status) pairs, evaluated in order
_RULES = (
    (lambda m, p: m < p.optimal_min - 10, PlantStatus.NEEDS_WATER),
    (lambda m, p: m < p.optimal_min, PlantStatus.WATER_SOON),
    (lambda m, p: m > p.optimal_max, PlantStatus.TOO_WET),
)


def classify(moisture, profile):
    for guard, status in _RULES:
        if guard(moisture, profile):
            return status
    return PlantStatus.HEALTHY


def system_insight(modes, weather=None):
    """One-line advisory for the current modes and weather."""
    if modes.vacation_mode:
        return "Vacation mode active. Emergency watering only when moisture drops below 25%."
    if weather is not None and weather.humidity > HIGH_HUMIDITY:
        return "High humidity detected. Watering frequency automatically reduced to prevent root rot."
    return "All systems optimal. Your plants are thriving with smart watering schedules."
