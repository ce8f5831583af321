# sim/context.py
"""
Simulation context: the single owner of all mutable twin state (plants,
resource ledger, mode flags, latest weather). The engine and the manual
override receive it by reference; readers use `snapshot()`.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional
import logging

from sim.plant import PlantState, HISTORY_CAPACITY
from sim.profiles import PlantProfile, get_profile, load_profiles
from sim.resources import ResourceLedger
from sim.status import system_insight
from sim.weather import ForecastDay, WeatherSnapshot

logger = logging.getLogger(__name__)


@dataclass
class Modes:
    auto_watering: bool = True
    vacation_mode: bool = False


@dataclass
class SimulationContext:
    plants: List[PlantState]
    profiles: Dict[str, PlantProfile]
    ledger: ResourceLedger
    modes: Modes = field(default_factory=Modes)
    weather: Optional[WeatherSnapshot] = None
    forecast: List[ForecastDay] = field(default_factory=list)

    def profile_for(self, plant: PlantState) -> PlantProfile:
        return get_profile(self.profiles, plant.species)

    def set_weather(self, weather, forecast=None):
        self.weather = weather
        if forecast is not None:
            self.forecast = list(forecast)

    def snapshot(self):
        return {
            "plants": [p.to_dict() for p in self.plants],
            "resources": self.ledger.snapshot(),
            "modes": {
                "auto_watering": self.modes.auto_watering,
                "vacation_mode": self.modes.vacation_mode,
            },
            "weather": self.weather,
            "forecast": list(self.forecast),
            "insight": system_insight(self.modes, self.weather),
        }


def build_context(cfg, now=None, rng=None):
    """
    Seed the twin from config.

    Every plant must resolve to a configured species; an unknown species is
    fatal (UnknownSpeciesError). When `rng` is given and
    `simulation.backfill_history` is on, each plant gets a synthetic 24h trail.
    """
    cfg = cfg or {}
    now = now or datetime.now()
    sim_cfg = cfg.get('simulation', {})
    capacity = sim_cfg.get('history_capacity', HISTORY_CAPACITY)
    backfill = rng is not None and sim_cfg.get('backfill_history', True)

    profiles = load_profiles(cfg)
    plants = []
    seen = set()
    for entry in cfg.get('plants', []):
        plant_id = entry['id']
        if plant_id in seen:
            raise ValueError(f"Duplicate plant id: {plant_id!r}")
        seen.add(plant_id)

        profile = get_profile(profiles, entry['species'])
        minutes_ago = entry.get('last_watered_minutes_ago', 0)
        plant = PlantState(
            plant_id,
            entry['species'],
            entry['moisture'],
            last_watered_at=now - timedelta(minutes=minutes_ago),
            capacity=capacity,
        )
        if backfill:
            plant.backfill_history(now, rng)
        plant.reclassify(profile)
        plants.append(plant)

    modes_cfg = cfg.get('modes', {})
    modes = Modes(
        auto_watering=bool(modes_cfg.get('auto_watering', True)),
        vacation_mode=bool(modes_cfg.get('vacation_mode', False)),
    )
    logger.info("Seeded %d plants across %d species", len(plants), len(profiles))
    return SimulationContext(
        plants=plants,
        profiles=profiles,
        ledger=ResourceLedger(cfg.get('resources', {})),
        modes=modes,
    )
