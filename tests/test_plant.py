from datetime import timedelta

import numpy as np

from sim.plant import HISTORY_CAPACITY, PlantState
from sim.status import PlantStatus
from tests.conftest import NOON


def test_history_is_bounded_ring():
    p = PlantState(1, 'Cabbage', 70)
    for i in range(HISTORY_CAPACITY + 5):
        p.moisture = float(i)
        p.record(NOON + timedelta(seconds=i))
    assert len(p.history) == HISTORY_CAPACITY
    assert p.history[0].moisture == 5.0
    assert p.history[-1].moisture == float(HISTORY_CAPACITY + 4)
    assert p.history[-1].label == "0h"


def test_backfill_history_stays_in_range():
    p = PlantState(1, 'Mint', 98)
    p.backfill_history(NOON, rng=np.random.default_rng(0))
    assert len(p.history) == 25
    assert p.history[0].label == "24h"
    assert p.history[-1].label == "0h"
    assert p.history[0].timestamp == NOON - timedelta(hours=24)
    assert all(10.0 <= pt.moisture <= 100.0 for pt in p.history)


def test_reclassify_and_water_need(cabbage):
    p = PlantState(1, 'Cabbage', 49)
    assert p.reclassify(cabbage) == PlantStatus.NEEDS_WATER
    assert p.status == PlantStatus.NEEDS_WATER
    assert p.water_need() == 26  # (100 - 49) * 0.5 = 25.5 rounds up
    d = p.to_dict()
    assert d['status'] == "Needs Water"
    assert d['history'] == []
