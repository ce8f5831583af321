# sim/plant.py
"""
PlantState
----------
Mutable per-plant state for the irrigation twin: current soil moisture (%),
the last watering time, a bounded trailing window of moisture readings and
the derived health status.

Moisture is a percentage in [5, 100] once the engine has ticked.
"""

from collections import deque
from datetime import timedelta
from typing import NamedTuple

import numpy as np

from sim.status import classify

HISTORY_CAPACITY = 25


class HistoryPoint(NamedTuple):
    label: str
    moisture: float
    timestamp: object  # datetime


class PlantState:
    def __init__(self, plant_id, species, moisture, last_watered_at=None,
                 capacity=HISTORY_CAPACITY):
        self.id = plant_id
        self.species = species
        self.moisture = float(moisture)
        self.last_watered_at = last_watered_at
        self.history = deque(maxlen=capacity)
        self.status = None

    def __repr__(self):
        return (f"PlantState(id={self.id!r}, species={self.species!r}, "
                f"moisture={self.moisture:.2f}, status={self.status})")

    # History -------------------------------------------------------------
    def record(self, now, label="0h"):
        """Append the current moisture; the oldest point drops out once full."""
        self.history.append(HistoryPoint(label, self.moisture, now))

    def backfill_history(self, now, rng=None, hours=24):
        """
        Seed a synthetic hourly trail ending at `now`, jittered around the
        current moisture and kept within [10, 100].
        """
        rng = rng if rng is not None else np.random.default_rng()
        for i in range(hours, -1, -1):
            jitter = (rng.random() - 0.3) * 5
            m = float(np.clip(self.moisture + jitter, 10.0, 100.0))
            self.history.append(HistoryPoint(f"{i}h", m, now - timedelta(hours=i)))

    # Derived -------------------------------------------------------------
    def reclassify(self, profile):
        self.status = classify(self.moisture, profile)
        return self.status

    def water_need(self):
        """Relative water need used for the comparison chart."""
        return int(np.floor((100 - self.moisture) * 0.5 + 0.5))

    def to_dict(self):
        return {
            "id": self.id,
            "species": self.species,
            "moisture": self.moisture,
            "last_watered_at": self.last_watered_at,
            "status": self.status.value if self.status else None,
            "history": [p._asdict() for p in self.history],
        }
