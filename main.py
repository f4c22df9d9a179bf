#!/usr/bin/env python3
"""
main.py
=======
Entry point: builds the route simulator, starts the background bridge
and opens the pygame view (or logs snapshots when headless).

Environment overrides
---------------------
``ROUTE_CONFIG_FILE``   JSON route file (default: built-in Kolkata route)
``ROUTE_TICK_RATE_HZ``  simulation ticks per second
``ROUTE_HEADLESS``      ``1`` to skip the window and log snapshots instead
``ROUTE_LOG_LEVEL``     ``DEBUG`` / ``INFO`` / ``WARNING``
"""

import logging
import os
import time

import config
from logging_setup import setup_logging
from sim.route_config import RouteConfig, build_simulator, load_route_config
from sim.routes import default_route_config
from sim.sim_bridge import SimBridge


def load_config() -> RouteConfig:
    route_file = os.environ.get("ROUTE_CONFIG_FILE", config.DEFAULT_ROUTE_FILE)
    if route_file:
        return load_route_config(route_file)
    return default_route_config()


def run_headless(bridge: SimBridge, log: logging.Logger) -> None:
    """Log one snapshot per report interval until interrupted."""
    while True:
        time.sleep(config.HEADLESS_REPORT_INTERVAL_S)
        snap = bridge.get_snapshot()
        log.info(
            "progress=%.1f speed=%d %s street=%r next=%s eta=%dmin%s",
            snap.progress,
            snap.speed_display_units,
            snap.speed_unit,
            snap.street_label,
            snap.next_stop.name,
            snap.eta_minutes,
            " CONGESTED" if snap.congested else "",
        )


def main():
    level_name = os.environ.get("ROUTE_LOG_LEVEL", "INFO").upper()
    setup_logging(
        getattr(logging, level_name, logging.INFO),
        log_file=config.LOG_FILE,
        debug_file=config.DEBUG_LOG_FILE,
    )
    log = logging.getLogger("main")

    route_config = load_config()
    simulator = build_simulator(route_config)
    tick_rate = float(os.environ.get("ROUTE_TICK_RATE_HZ", config.DEFAULT_TICK_RATE_HZ))
    bridge = SimBridge(simulator, tick_rate_hz=tick_rate, config=route_config)
    headless = os.environ.get("ROUTE_HEADLESS", "0") == "1"

    log.info("Starting %s (%s)", route_config.title or route_config.name,
             "headless" if headless else "pygame")
    bridge.start()
    try:
        if headless:
            run_headless(bridge, log)
        else:
            from ui import run_pygame_view
            run_pygame_view(
                bridge,
                width=config.WINDOW_WIDTH,
                height=config.WINDOW_HEIGHT,
                fps=config.TARGET_FPS,
            )
    except KeyboardInterrupt:
        log.info("Shutting down...")
    finally:
        bridge.stop()


if __name__ == "__main__":
    main()
