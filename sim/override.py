# sim/override.py
"""Manual "water all" action, applied immediately outside the tick cadence."""

from datetime import datetime
import logging

import numpy as np

logger = logging.getLogger(__name__)


def water_all(ctx, now=None, tank_charge_per_plant=5.0, water_saved=3.0,
              moisture_floor=5.0, moisture_ceiling=100.0):
    """
    Unconditionally top up every plant by its profile's absorption.

    No thresholds and no emergency floor apply; moisture is still clamped to
    [moisture_floor, moisture_ceiling]. The tank is charged for every
    plant, while `water_saved` is credited once for the whole batch.
    """
    now = now or datetime.now()
    for plant in ctx.plants:
        profile = ctx.profile_for(plant)
        plant.moisture = float(np.clip(plant.moisture + profile.water_absorption,
                                       moisture_floor, moisture_ceiling))
        plant.last_watered_at = now
        plant.reclassify(profile)

    total_used = len(ctx.plants) * tank_charge_per_plant
    ctx.ledger.accumulate_saved(water_saved)
    ctx.ledger.charge_tank(total_used)
    logger.info("Manual watering of %d plants: tank=%.1f saved=%.1f",
                len(ctx.plants), ctx.ledger.tank_level, ctx.ledger.water_saved)
    return total_used
