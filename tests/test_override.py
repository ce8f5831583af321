import pytest

from sim.override import water_all
from sim.profiles import PlantProfile
from sim.status import PlantStatus
from tests.conftest import NOON, make_ctx


def test_water_all_six_plants(cabbage):
    ctx = make_ctx(cabbage, [72, 38, 28, 75, 82, 42], tank=68)
    used = water_all(ctx, now=NOON)
    assert used == 30
    assert ctx.ledger.tank_level == pytest.approx(38)
    assert ctx.ledger.water_saved == pytest.approx(28)  # +3 once, not per plant
    assert [p.moisture for p in ctx.plants] == [97, 63, 53, 100, 100, 67]
    assert all(p.last_watered_at == NOON for p in ctx.plants)


def test_water_all_ignores_thresholds_and_modes(cabbage):
    ctx = make_ctx(cabbage, [95], auto=False, vacation=True)
    water_all(ctx, now=NOON)
    assert ctx.plants[0].moisture == 100
    assert ctx.plants[0].status == PlantStatus.TOO_WET
    assert len(ctx.plants[0].history) == 0


def test_water_all_floors_tank(cabbage):
    ctx = make_ctx(cabbage, [50] * 6, tank=10)
    water_all(ctx, now=NOON)
    assert ctx.ledger.tank_level == 0
    assert 20 <= ctx.ledger.solar_charge <= 100


def test_water_all_with_default_seed(cfg):
    from sim.context import build_context
    ctx = build_context(cfg, now=NOON)
    water_all(ctx, now=NOON)
    assert ctx.ledger.tank_level == pytest.approx(38)
    assert ctx.ledger.water_saved == pytest.approx(28)
    by_species = {p.species: p.moisture for p in ctx.plants}
    assert by_species['Cabbage'] == 97
    assert by_species['Mint'] == 100
    assert by_species['Aloe Vera'] == 40


def test_water_all_clamps_under_adversarial_profiles():
    cases = [
        PlantProfile(optimal_min=60, optimal_max=80, decay_rate=0.1, water_absorption=-500),
        PlantProfile(optimal_min=60, optimal_max=80, decay_rate=0.1, water_absorption=1000),
        PlantProfile(optimal_min=60, optimal_max=80, decay_rate=0.1, water_absorption=-3),
    ]
    for profile in cases:
        ctx = make_ctx(profile, [1, 5, 6, 50, 99, 100, 150], tank=68)
        for _ in range(3):
            water_all(ctx, now=NOON)
            assert all(5 <= p.moisture <= 100 for p in ctx.plants)
            assert 0 <= ctx.ledger.tank_level <= 100


def test_water_all_uses_configured_bounds(cabbage):
    ctx = make_ctx(cabbage, [70, 40])
    water_all(ctx, now=NOON, moisture_floor=10, moisture_ceiling=90)
    assert [p.moisture for p in ctx.plants] == [90, 65]
