#!/usr/bin/env python3
"""
main.py - Orchestrator for the AquaSprout irrigation twin

Usage examples:
    python main.py sim_run --ticks 24
    python main.py sim_run --ticks 60 --interval 0 --vacation --offline
    python main.py sim_run --ticks 12 --water_all_at 3 8 --plot_dir plots
    python main.py weather
    python main.py profiles

This script expects to be run from the project root.
"""
import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

import numpy as np

# Ensure project root is on PYTHONPATH
ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from config import load_config
from sim.context import build_context
from sim.controller import SimulationController
from sim.engine import SimulationEngine
from sim.profiles import UnknownSpeciesError, load_profiles
from sim.weather import weather_category
from weather_service import fallback_weather, fetch_weather


def setup_logging(prefix="sim_run"):
    log_dir = ROOT / "logs"
    log_dir.mkdir(exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"{prefix}_{timestamp}.log"

    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s | %(levelname)s | %(message)s',
        handlers=[
            logging.FileHandler(log_file, mode='w'),
            logging.StreamHandler()  # Also print to console
        ]
    )
    return log_file


def sim_run(args):
    log_file = setup_logging()
    logger = logging.getLogger(__name__)

    cfg = load_config(args.config)
    sim_cfg = cfg.get('simulation', {})
    if args.no_auto:
        cfg.setdefault('modes', {})['auto_watering'] = False
    if args.vacation:
        cfg.setdefault('modes', {})['vacation_mode'] = True

    # load_config has already seeded the global numpy generator
    try:
        ctx = build_context(cfg, now=datetime.now(), rng=np.random)
    except UnknownSpeciesError as e:
        logger.error("Cannot start simulation: %s", e)
        return 1

    interval = sim_cfg.get('tick_seconds', 5) if args.interval is None else args.interval
    controller = SimulationController(ctx, SimulationEngine(cfg), interval=interval,
                                      override_cfg=cfg.get('watering', {}))
    weather_cfg = cfg.get('weather', {})
    controller.start_weather_fetch(fallback_weather if args.offline else (lambda: fetch_weather(weather_cfg)))

    water_all_at = set(args.water_all_at or [])

    logger.info("="*80)
    logger.info("SIMULATION RUN STARTED")
    logger.info(f"Ticks: {args.ticks} | Interval: {interval}s")
    logger.info(f"Auto-watering: {ctx.modes.auto_watering} | Vacation: {ctx.modes.vacation_mode}")
    logger.info(f"Log file: {log_file}")
    logger.info("="*80)
    for plant in ctx.plants:
        logger.info(f"  {plant.species}: {plant.moisture:.1f}% ({plant.status.value})")

    def on_tick(ctl, report):
        logger.info(f"TICK {ctl.tick_count}/{args.ticks}")
        for plant in ctl.ctx.plants:
            logger.info(f"  {plant.species}: {plant.moisture:.2f}% ({plant.status.value})")
        if ctl.tick_count in water_all_at:
            ctl.water_all()

    try:
        controller.run(args.ticks, on_tick=on_tick)
    finally:
        controller.close()

    snap = ctx.snapshot()
    logger.info("="*80)
    logger.info("Final resources:")
    for key, value in snap['resources'].items():
        logger.info(f"  {key}: {value:.2f}")
    logger.info(f"Insight: {snap['insight']}")
    logger.info("="*80)

    if args.plot_dir:
        from viz.plot_utils import plot_dashboard_summary
        plot_dashboard_summary(ctx, out_dir=args.plot_dir)

    print(f"[main] Sim finished after {controller.tick_count} ticks.")
    print(f"[main] Detailed log saved to: {log_file}")
    return 0


def weather(args):
    cfg = load_config(args.config)
    snapshot, forecast = fallback_weather() if args.offline else fetch_weather(cfg.get('weather', {}))
    print(f"[main] Now: {snapshot.temp}°C, humidity {snapshot.humidity}%, wind {snapshot.wind} km/h "
          f"({weather_category(snapshot.code)})")
    for day in forecast:
        print(f"[main]   {day.day}: {day.temp_max}°/{day.temp_min}° ({weather_category(day.code)})")
    return 0


def profiles(args):
    cfg = load_config(args.config)
    for name, p in load_profiles(cfg).items():
        print(f"{name:<12} band {p.optimal_min:.0f}-{p.optimal_max:.0f}%  "
              f"decay {p.decay_rate:.2f}  absorption {p.water_absorption:.0f}")
    return 0


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="AquaSprout irrigation twin - main orchestrator")
    p.add_argument("--config", type=str, default=None, help="path to YAML config (default: configs/defaults.yaml)")
    sub = p.add_subparsers(dest="cmd")

    s = sub.add_parser("sim_run", help="Run the moisture/resource simulation")
    s.add_argument("--ticks", type=int, default=24, help="number of ticks to run")
    s.add_argument("--interval", type=float, default=None, help="seconds between ticks (default from config)")
    s.add_argument("--no_auto", action='store_true', help="Start with auto-watering off")
    s.add_argument("--vacation", action='store_true', help="Start in vacation mode")
    s.add_argument("--water_all_at", type=int, nargs='*', help="Tick numbers after which to water all plants")
    s.add_argument("--offline", action='store_true', help="Skip the weather fetch and use fallback weather")
    s.add_argument("--plot_dir", type=str, default=None, help="Write plots and a summary to this directory")

    w = sub.add_parser("weather", help="Show current weather and forecast")
    w.add_argument("--offline", action='store_true', help="Show fallback weather")

    sub.add_parser("profiles", help="List plant profiles")

    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if not args.cmd:
        print("No command given. Use -h to see options.")
        return 0
    if args.cmd == "sim_run":
        return sim_run(args)
    elif args.cmd == "weather":
        return weather(args)
    elif args.cmd == "profiles":
        return profiles(args)
    print("Unknown command:", args.cmd)
    return 1


if __name__ == "__main__":
    sys.exit(main())
