# viz/plot_utils.py
"""
Utility plotting functions for the irrigation twin.

Provides:
- per-plant moisture trends over the trailing history window
- water-needs comparison bar chart
- a dashboard summary (plots + text) for the end of a run

Note: uses matplotlib and expects PlantState objects from sim.plant.
"""

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import os


def plot_moisture_history(plants, out_path=None, title=None):
    """Plot each plant's moisture history, oldest point on the left."""
    plt.figure(figsize=(12, 6))
    ax = plt.gca()
    for plant in plants:
        moisture = [p.moisture for p in plant.history]
        ax.plot(range(len(moisture)), moisture, label=plant.species, linewidth=2)
    ax.set_xlabel('Sample (oldest -> newest)')
    ax.set_ylabel('Moisture (%)')
    ax.set_ylim(0, 100)
    ax.legend(loc='upper left')

    if title:
        plt.title(title)

    if out_path:
        plt.savefig(out_path, dpi=150)
        plt.close()
    else:
        plt.show()


def plot_water_needs(plants, out_path=None):
    """Bar chart of relative water need per plant (3-letter species labels)."""
    names = [p.species[:3] for p in plants]
    needs = [p.water_need() for p in plants]

    plt.figure(figsize=(8, 4))
    plt.bar(names, needs, color='tab:blue')
    plt.ylabel('Water need')
    plt.title('Water needs comparison')

    if out_path:
        plt.savefig(out_path, dpi=150)
        plt.close()
    else:
        plt.show()


def plot_dashboard_summary(ctx, out_dir='plots', prefix='run'):
    """Create and save plots plus a text summary of the current twin state"""
    os.makedirs(out_dir, exist_ok=True)
    plot_moisture_history(ctx.plants, out_path=os.path.join(out_dir, f'{prefix}_moisture.png'),
                          title=f'{prefix} moisture trend')
    plot_water_needs(ctx.plants, out_path=os.path.join(out_dir, f'{prefix}_water_needs.png'))

    snap = ctx.snapshot()
    with open(os.path.join(out_dir, f'{prefix}_summary.txt'), 'w') as f:
        for plant in snap['plants']:
            f.write(f"{plant['species']}: {plant['moisture']:.1f}% ({plant['status']})\n")
        res = snap['resources']
        f.write(f"tank_level: {res['tank_level']:.1f}\n")
        f.write(f"solar_charge: {res['solar_charge']:.1f}\n")
        f.write(f"water_saved: {res['water_saved']:.1f}\n")
        f.write(f"insight: {snap['insight']}\n")

    print(f'[viz] saved run summary to {out_dir}/{prefix}_*')
