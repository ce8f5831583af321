# sim/engine.py
"""
SimulationEngine
----------------
Advances every plant and the shared resources by one tick.

Per plant:
  1. environment factor from the latest weather (neutral defaults if none)
  2. natural decay: decay_rate * env_factor * decay_scale, never negative
  3. watering decision, first match wins:
       auto-watering (not on vacation) and below the optimal band
       vacation mode and below the emergency floor
       otherwise no watering
  4. clamp moisture to [5, 100]
  5. append to the trailing history window
  6. reclassify status

Then, once per tick: aggregated tank draw, rain top-up, solar charge update.

All arithmetic depends only on the inputs; `now` is used for timestamps and
the day/night check.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional, Tuple
import logging

import numpy as np

from sim.resources import LedgerDelta
from sim.weather import env_factor, is_precipitation

logger = logging.getLogger(__name__)


@dataclass
class TickReport:
    delta: LedgerDelta
    watered: List[object] = field(default_factory=list)
    emergency_watered: List[object] = field(default_factory=list)
    resources: dict = field(default_factory=dict)


class SimulationEngine:
    def __init__(self, cfg=None):
        cfg = cfg or {}
        sim_cfg = cfg.get('simulation', {})
        water_cfg = cfg.get('watering', {})
        res_cfg = cfg.get('resources', {})

        # Moisture model
        self.decay_scale = sim_cfg.get('decay_scale', 0.5)
        self.moisture_floor = sim_cfg.get('moisture_floor', 5.0)
        self.moisture_ceiling = sim_cfg.get('moisture_ceiling', 100.0)
        self.history_label = sim_cfg.get('history_label', '0h')

        # Watering rules
        self.auto_tank_charge = water_cfg.get('auto_tank_charge', 5.0)
        self.auto_water_saved = water_cfg.get('auto_water_saved', 0.5)
        self.vacation_threshold = water_cfg.get('vacation_threshold', 25.0)
        self.vacation_absorption_factor = water_cfg.get('vacation_absorption_factor', 0.6)
        self.vacation_tank_charge = water_cfg.get('vacation_tank_charge', 3.0)

        # Solar
        self.solar_usage_auto = res_cfg.get('solar_usage_auto', 0.2)
        self.solar_usage_idle = res_cfg.get('solar_usage_idle', 0.1)
        self.daylight_start = res_cfg.get('daylight_start_hour', 6)
        self.daylight_end = res_cfg.get('daylight_end_hour', 18)

    # Helpers -------------------------------------------------------------
    def is_daylight(self, now: datetime) -> bool:
        return self.daylight_start <= now.hour <= self.daylight_end

    def solar_usage(self, auto_watering: bool) -> float:
        return self.solar_usage_auto if auto_watering else self.solar_usage_idle

    def decay(self, profile, weather) -> float:
        """Moisture lost this tick; the environment only ever dries the soil."""
        return max(0.0, profile.decay_rate * env_factor(weather) * self.decay_scale)

    # Step update ---------------------------------------------------------
    def step_plant(self, plant, profile, weather, modes, now) -> Tuple[float, float, Optional[str]]:
        """
        Advance a single plant in place.

        Returns (tank_charge, water_saved, branch) where branch is 'auto',
        'vacation' or None.
        """
        moisture = plant.moisture
        candidate = moisture - self.decay(profile, weather)

        charge, saved, branch = 0.0, 0.0, None
        if modes.auto_watering and not modes.vacation_mode and candidate < profile.optimal_min:
            new_moisture = min(self.moisture_ceiling, moisture + profile.water_absorption)
            charge, saved, branch = self.auto_tank_charge, self.auto_water_saved, 'auto'
        elif modes.vacation_mode and candidate < self.vacation_threshold:
            new_moisture = min(self.moisture_ceiling,
                               moisture + profile.water_absorption * self.vacation_absorption_factor)
            charge, branch = self.vacation_tank_charge, 'vacation'
        else:
            new_moisture = candidate

        if branch is not None:
            plant.last_watered_at = now

        plant.moisture = float(np.clip(new_moisture, self.moisture_floor, self.moisture_ceiling))
        plant.record(now, label=self.history_label)
        plant.reclassify(profile)
        return charge, saved, branch

    def tick(self, ctx, now: Optional[datetime] = None) -> TickReport:
        now = now or datetime.now()
        # mode flags are read once, at the start of the tick
        modes = replace(ctx.modes)
        weather = ctx.weather

        report = TickReport(delta=LedgerDelta())
        for plant in ctx.plants:
            profile = ctx.profile_for(plant)
            charge, saved, branch = self.step_plant(plant, profile, weather, modes, now)
            report.delta.tank_charge += charge
            report.delta.water_saved += saved
            if branch == 'auto':
                report.watered.append(plant.id)
            elif branch == 'vacation':
                report.emergency_watered.append(plant.id)
            logger.debug("plant %s (%s): moisture=%.2f status=%s branch=%s",
                         plant.id, plant.species, plant.moisture, plant.status.value, branch)

        report.delta.rained = weather is not None and is_precipitation(weather.code)
        ctx.ledger.apply(report.delta)
        ctx.ledger.update_solar(self.is_daylight(now), self.solar_usage(modes.auto_watering))

        report.resources = ctx.ledger.snapshot()
        logger.info("tick: watered=%s emergency=%s tank=%.1f solar=%.1f saved=%.1f",
                    report.watered, report.emergency_watered,
                    report.resources['tank_level'], report.resources['solar_charge'],
                    report.resources['water_saved'])
        return report
