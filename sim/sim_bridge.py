"""
sim/sim_bridge.py
=================
Background-thread driver for :class:`sim.simulator.RouteSimulator`.
The UI and the HTTP endpoint poll the bridge for the latest snapshot
without blocking.

Public API consumed by :mod:`ui.pygame_view` and :mod:`api`
-----------------------------------------------------------
* ``get_snapshot()``   → ``SimulationSnapshot``
* ``get_route()``      → ``dict``
* ``is_paused()``      → ``bool``
* ``set_paused(bool)`` → ``None``
* ``reset()``          → ``None``
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

from sim.errors import InvalidTickError
from sim.route_config import RouteConfig
from sim.simulator import RouteSimulator, SimulationSnapshot

log = logging.getLogger("sim_bridge")


def route_overview(simulator: RouteSimulator, config: Optional[RouteConfig] = None) -> Dict[str, Any]:
    """Static description of the route for renderers.

    Includes the sampled path, stops, and the sampled stretch of every
    speed zone so congestion can be overlaid without touching the
    geometry again.
    """
    geometry = simulator.geometry
    zones = []
    for zone in simulator.policy.zones:
        zone_info = zone.as_dict()
        zone_info["polyline"] = [
            (p.x, p.y)
            for p in geometry.polyline_between(
                geometry.arc_length_at(zone.lower), geometry.arc_length_at(zone.upper)
            )
        ]
        zones.append(zone_info)

    overview: Dict[str, Any] = {
        "name": "route",
        "title": "",
        "origin_label": "",
        "destination_label": "",
        "departure": "",
        "arrival": "",
        "driver_name": "",
        "vehicle_plate": "",
        "map_size": (1600.0, 900.0),
        "total_length": geometry.total_length,
        "polyline": [(p.x, p.y) for p in geometry.polyline()],
        "stops": [stop.as_dict() for stop in simulator.stops],
        "zones": zones,
    }
    if config is not None:
        overview.update(
            name=config.name,
            title=config.title,
            origin_label=config.origin_label,
            destination_label=config.destination_label,
            departure=config.departure,
            arrival=config.arrival,
            driver_name=config.driver_name,
            vehicle_plate=config.vehicle_plate,
            map_size=config.map_size,
        )
    return overview


class SimBridge:
    """Simulation driver running in a background thread.

    The thread steps the simulator about ``tick_rate_hz`` times per
    second, passing the *measured* real time since the previous tick,
    and caches the resulting snapshot for reader threads.

    Parameters
    ----------
    simulator : RouteSimulator
        The engine to drive; the bridge becomes its only caller.
    tick_rate_hz : float
        Target ticks per second.
    config : RouteConfig or None
        Route metadata surfaced through :meth:`get_route`.
    time_source : callable
        Monotonic clock in seconds; injectable for tests.
    """

    def __init__(
        self,
        simulator: RouteSimulator,
        tick_rate_hz: float = 30.0,
        config: Optional[RouteConfig] = None,
        time_source: Callable[[], float] = time.perf_counter,
    ) -> None:
        if tick_rate_hz <= 0:
            raise ValueError("tick_rate_hz must be positive")
        self._simulator = simulator
        self._tick_rate_hz = tick_rate_hz
        self._time_source = time_source
        self._route = route_overview(simulator, config)

        self._lock = threading.Lock()

        # Cached state: written by sim thread, read by UI thread
        self._snapshot: SimulationSnapshot = simulator.snapshot()
        self._last_time: Optional[float] = None
        self._rejected_ticks = 0

        self._thread: Optional[threading.Thread] = None
        self._running = False
        self._paused = False

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        """Spawn the background simulation thread."""
        if self._running:
            return
        self._running = True
        self._last_time = None
        self._thread = threading.Thread(
            target=self._loop, daemon=True, name="SimBridge"
        )
        self._thread.start()
        log.info("SimBridge started at %.1f Hz", self._tick_rate_hz)

    def stop(self) -> None:
        """Signal the thread to stop and wait for it to join."""
        self._running = False
        if self._thread:
            self._thread.join(timeout=2.0)
        log.info("SimBridge stopped")

    @property
    def running(self) -> bool:
        return self._running

    @property
    def rejected_ticks(self) -> int:
        return self._rejected_ticks

    # ── Reader API ────────────────────────────────────────────────────────────

    def get_snapshot(self) -> SimulationSnapshot:
        with self._lock:
            return self._snapshot

    def get_route(self) -> Dict[str, Any]:
        """Static route description (see :func:`route_overview`)."""
        return dict(self._route)

    def is_paused(self) -> bool:
        return self._paused

    def set_paused(self, paused: bool) -> None:
        """Pause / unpause the simulation tick.

        Time spent paused is not fed to the simulator on resume.
        """
        self._paused = paused
        self._last_time = None
        log.info("SimBridge %s", "paused" if paused else "resumed")

    def reset(self) -> None:
        """Put the vehicle back at its start progress."""
        with self._lock:
            self._simulator.reset()
            self._snapshot = self._simulator.snapshot()
            self._last_time = None
        log.info("SimBridge reset")

    # ── Background loop ───────────────────────────────────────────────────────

    def _loop(self) -> None:
        period = 1.0 / self._tick_rate_hz
        while self._running:
            t0 = time.perf_counter()
            if not self._paused:
                try:
                    self._tick_from_clock()
                except Exception:
                    log.exception("SimBridge tick error")
            time.sleep(max(0.0, period - (time.perf_counter() - t0)))

    def _tick_from_clock(self) -> None:
        now = self._time_source()
        last = self._last_time
        self._last_time = now
        if last is None:
            return
        self._tick(now - last)

    # ── tick ──────────────────────────────────────────────────────────────────

    def _tick(self, dt: float) -> Optional[SimulationSnapshot]:
        """Step the simulator once and publish the snapshot.

        A rejected ``dt`` is logged and skipped; the previous snapshot
        stays current.
        """
        with self._lock:
            try:
                snapshot = self._simulator.step(dt)
            except InvalidTickError as exc:
                self._rejected_ticks += 1
                log.warning("SimBridge rejected tick: %s", exc)
                return None
            self._snapshot = snapshot
        return snapshot
