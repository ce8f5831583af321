import numpy as np

from sim.context import build_context
from sim.engine import SimulationEngine
from viz.plot_utils import plot_dashboard_summary
from tests.conftest import NOON


def test_dashboard_summary_writes_files(cfg, tmp_path):
    ctx = build_context(cfg, now=NOON, rng=np.random.default_rng(0))
    SimulationEngine(cfg).tick(ctx, now=NOON)
    plot_dashboard_summary(ctx, out_dir=str(tmp_path), prefix='t')
    assert (tmp_path / 't_moisture.png').exists()
    assert (tmp_path / 't_water_needs.png').exists()
    summary = (tmp_path / 't_summary.txt').read_text()
    assert 'Cabbage' in summary
    assert 'tank_level' in summary
