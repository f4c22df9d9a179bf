"""
api.py
======
Optional read-only FastAPI server exposing the live route snapshot.

Start the server::

    python api.py          # → http://localhost:8000/snapshot

Endpoints: ``/health``, ``/snapshot`` (latest
:class:`~sim.simulator.SimulationSnapshot`) and ``/route`` (static path,
stops and zones).  The server never steps the simulation itself; it
only reads what the :class:`~sim.sim_bridge.SimBridge` publishes.

.. note::

   This server is **not** required to run the pygame view.
   It exists for external integrations and testing.
"""

import logging
from typing import List, Optional, Tuple

import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel

import config
from sim.sim_bridge import SimBridge

log = logging.getLogger("api")


# ── Pydantic response schemas ────────────────────────────────────────────────


class PositionModel(BaseModel):
    x: float
    y: float


class StopOut(BaseModel):
    id: str
    name: str
    progress: float
    x: float
    y: float


class SnapshotOut(BaseModel):
    """One simulation tick as seen by an observer."""
    progress: float
    speed_display_units: int
    speed_unit: str
    speed_factor: float
    congested: bool
    street_label: str
    position: PositionModel
    heading_degrees: float
    next_stop: StopOut
    eta_minutes: int
    lap: int
    elapsed_s: float
    alert: Optional[str] = None
    delay_minutes: int = 0
    reached_stop_ids: List[str]


class ZoneOut(BaseModel):
    lower: float
    upper: float
    factor: float
    congested: bool
    name: str
    alert: str
    delay_minutes: int
    polyline: List[Tuple[float, float]]


class RouteOut(BaseModel):
    name: str
    title: str
    driver_name: str = ""
    vehicle_plate: str = ""
    total_length: float
    map_size: Tuple[float, float]
    polyline: List[Tuple[float, float]]
    stops: List[StopOut]
    zones: List[ZoneOut]


class HealthOut(BaseModel):
    status: str
    running: bool
    paused: bool


# ── FastAPI application ──────────────────────────────────────────────────────

def create_app(bridge: SimBridge) -> FastAPI:
    """Build the app around an existing bridge (started or not)."""
    app = FastAPI(
        title="Route Simulation API",
        description="Live position, speed and next stop of the simulated bus.",
        version="1.0",
    )

    @app.get("/health", response_model=HealthOut)
    def health():
        return HealthOut(status="ok", running=bridge.running, paused=bridge.is_paused())

    @app.get("/snapshot", response_model=SnapshotOut)
    def snapshot():
        """Latest snapshot published by the bridge."""
        return bridge.get_snapshot().as_dict()

    @app.get("/route", response_model=RouteOut)
    def route():
        """Static route description for map renderers."""
        return bridge.get_route()

    return app


# ── Standalone entry point ───────────────────────────────────────────────────

if __name__ == "__main__":
    from logging_setup import setup_logging
    from sim.route_config import build_simulator
    from sim.routes import default_route_config

    setup_logging(logging.INFO, log_file=config.LOG_FILE, debug_file=config.DEBUG_LOG_FILE)
    route_config = default_route_config()
    sim_bridge = SimBridge(
        build_simulator(route_config),
        tick_rate_hz=config.DEFAULT_TICK_RATE_HZ,
        config=route_config,
    )
    sim_bridge.start()
    log.info("Starting route API on http://%s:%d", config.API_HOST, config.API_PORT)
    try:
        uvicorn.run(create_app(sim_bridge), host=config.API_HOST, port=config.API_PORT)
    finally:
        sim_bridge.stop()
