# sim/controller.py
"""
SimulationController
--------------------
Cooperative scheduler around a SimulationContext. Ticks run one at a time on
a fixed interval (the next tick is scheduled when the timer fires, not from
measured tick duration). The weather read is a one-shot background job whose
result is picked up at the start of the first tick after it completes; the
loop never waits on it.

Mode changes and the manual override are plain synchronous calls between
ticks, so there is only ever one mutator of the context.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
import logging
import time

from sim.override import water_all
from sim.weather import FALLBACK_FORECAST, FALLBACK_SNAPSHOT

logger = logging.getLogger(__name__)


class SimulationController:
    def __init__(self, ctx, engine, interval=5.0, clock=datetime.now, sleep=time.sleep,
                 override_cfg=None):
        override_cfg = override_cfg or {}
        self.ctx = ctx
        self.engine = engine
        self.interval = interval
        self.clock = clock
        self.sleep = sleep
        self.tank_charge_per_plant = override_cfg.get('manual_tank_charge_per_plant', 5.0)
        self.manual_water_saved = override_cfg.get('manual_water_saved', 3.0)

        self.tick_count = 0
        self._weather_future = None
        self._executor = None

    # Weather -------------------------------------------------------------
    def start_weather_fetch(self, fetch):
        """Kick off `fetch()` (returning (snapshot, forecast)) in the background."""
        self.close()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="weather")
        self._weather_future = self._executor.submit(fetch)
        return self._weather_future

    def poll_weather(self):
        """Adopt a finished weather fetch. Returns True if new weather was applied."""
        future = self._weather_future
        if future is None or not future.done():
            return False
        self._weather_future = None
        self._executor.shutdown(wait=False)
        self._executor = None

        exc = future.exception()
        if exc is not None:
            logger.warning("Weather fetch raised %r; using fallback weather", exc)
            snapshot, forecast = FALLBACK_SNAPSHOT, FALLBACK_FORECAST
        else:
            snapshot, forecast = future.result()
        self.ctx.set_weather(snapshot, forecast)
        logger.info("Weather: %.0f°C, %.0f%% humidity, code %s", snapshot.temp, snapshot.humidity, snapshot.code)
        return True

    def close(self):
        """Shut down the weather worker, waiting for an in-flight fetch to finish."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        self._weather_future = None

    # Controls ------------------------------------------------------------
    def set_auto_watering(self, enabled):
        self.ctx.modes.auto_watering = bool(enabled)
        logger.info("Auto-watering %s", "on" if enabled else "off")

    def set_vacation_mode(self, enabled):
        self.ctx.modes.vacation_mode = bool(enabled)
        logger.info("Vacation mode %s", "on" if enabled else "off")

    def water_all(self):
        return water_all(self.ctx, now=self.clock(),
                         tank_charge_per_plant=self.tank_charge_per_plant,
                         water_saved=self.manual_water_saved,
                         moisture_floor=self.engine.moisture_floor,
                         moisture_ceiling=self.engine.moisture_ceiling)

    # Loop ----------------------------------------------------------------
    def step(self):
        self.poll_weather()
        report = self.engine.tick(self.ctx, now=self.clock())
        self.tick_count += 1
        return report

    def run(self, ticks, on_tick=None):
        """Run `ticks` ticks, sleeping `interval` seconds before each one."""
        reports = []
        for _ in range(ticks):
            self.sleep(self.interval)
            report = self.step()
            reports.append(report)
            if on_tick is not None:
                on_tick(self, report)
        return reports
