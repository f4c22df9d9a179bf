#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf; it never imports from
other project packages.
"""

# ── Simulation defaults ──────────────────────────────────────────────────────
DEFAULT_TICK_RATE_HZ: float = 30.0
DEFAULT_ROUTE_FILE: str = ""          # empty → built-in Kolkata route
HEADLESS_REPORT_INTERVAL_S: float = 1.0

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 1200
WINDOW_HEIGHT: int = 800
TARGET_FPS: int = 60

# ── HTTP endpoint defaults ───────────────────────────────────────────────────
API_HOST: str = "0.0.0.0"
API_PORT: int = 8000

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_FILE: str = "route_sim.log"
DEBUG_LOG_FILE: str = "simulator_debug.log"
