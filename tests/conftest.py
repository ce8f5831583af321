from datetime import datetime

import pytest

from config import load_config
from sim.context import Modes, SimulationContext
from sim.plant import PlantState
from sim.profiles import PlantProfile
from sim.resources import ResourceLedger

# noon, so solar is in its daylight branch
NOON = datetime(2025, 6, 1, 12, 0, 0)
MIDNIGHT = datetime(2025, 6, 1, 0, 0, 0)


@pytest.fixture
def cfg():
    return load_config()


@pytest.fixture
def cabbage():
    return PlantProfile(optimal_min=60, optimal_max=80, decay_rate=0.15, water_absorption=25)


def make_ctx(profile, moistures, auto=True, vacation=False, weather=None, tank=68.0, solar=87.0, saved=25.0):
    plants = [PlantState(i + 1, 'Test', m) for i, m in enumerate(moistures)]
    for p in plants:
        p.reclassify(profile)
    return SimulationContext(
        plants=plants,
        profiles={'Test': profile},
        ledger=ResourceLedger({'tank_level': tank, 'solar_charge': solar, 'water_saved': saved}),
        modes=Modes(auto_watering=auto, vacation_mode=vacation),
        weather=weather,
    )
