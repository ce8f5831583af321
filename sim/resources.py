# sim/resources.py
"""
ResourceLedger
--------------
Shared resources of the irrigation rig:
- rainwater tank level (%), clamped to [0, 100]
- solar battery charge (%), clamped to [20, 100]
- cumulative water saved (L), never decreases

Fields are read-only from outside; they change only through the charge /
replenish / accumulate operations used by the engine and the manual override.
"""

from dataclasses import dataclass

import numpy as np

TANK_MIN, TANK_MAX = 0.0, 100.0
SOLAR_MIN, SOLAR_MAX = 20.0, 100.0


@dataclass
class LedgerDelta:
    """Resource changes produced by one tick."""
    tank_charge: float = 0.0
    water_saved: float = 0.0
    rained: bool = False


class ResourceLedger:
    def __init__(self, cfg=None):
        cfg = cfg or {}

        self.rain_replenish = cfg.get('rain_replenish', 0.3)
        self.solar_gain = cfg.get('solar_gain', 0.5)

        self._tank_level = float(np.clip(cfg.get('tank_level', 68.0), TANK_MIN, TANK_MAX))
        self._solar_charge = float(np.clip(cfg.get('solar_charge', 87.0), SOLAR_MIN, SOLAR_MAX))
        self._water_saved = max(0.0, float(cfg.get('water_saved', 25.0)))

    @property
    def tank_level(self):
        return self._tank_level

    @property
    def solar_charge(self):
        return self._solar_charge

    @property
    def water_saved(self):
        return self._water_saved

    # Mutations -----------------------------------------------------------
    def charge_tank(self, units):
        """Draw `units` from the tank, flooring at empty."""
        self._tank_level = float(np.clip(self._tank_level - units, TANK_MIN, TANK_MAX))
        return self._tank_level

    def replenish_tank(self, units=None):
        units = self.rain_replenish if units is None else units
        self._tank_level = float(np.clip(self._tank_level + units, TANK_MIN, TANK_MAX))
        return self._tank_level

    def accumulate_saved(self, units):
        if units < 0:
            raise ValueError(f"water_saved only accumulates, got {units}")
        self._water_saved += units
        return self._water_saved

    def update_solar(self, is_day, usage):
        """Daylight charges by `solar_gain - usage`; at night the system only drains."""
        delta = self.solar_gain - usage if is_day else -usage
        self._solar_charge = float(np.clip(self._solar_charge + delta, SOLAR_MIN, SOLAR_MAX))
        return self._solar_charge

    def apply(self, delta: LedgerDelta):
        """Apply a tick's aggregated water usage and rainfall."""
        if delta.tank_charge > 0:
            self.charge_tank(delta.tank_charge)
        if delta.water_saved > 0:
            self.accumulate_saved(delta.water_saved)
        if delta.rained:
            self.replenish_tank()

    def snapshot(self):
        return {
            "tank_level": self._tank_level,
            "solar_charge": self._solar_charge,
            "water_saved": self._water_saved,
        }
