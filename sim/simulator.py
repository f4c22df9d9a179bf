#!/usr/bin/env python3
"""
sim/simulator.py
================
Per-tick route simulation.

:class:`RouteSimulator` composes :class:`~sim.geometry.PathGeometry`,
:class:`~sim.speed_policy.SpeedZonePolicy`, :class:`~sim.stops.StopTable`
and :class:`~sim.clock.SimulationClock`.  Its only mutable state is the
clock's progress; every field of the returned
:class:`SimulationSnapshot` is derived from that progress and the static
configuration on each call.

The simulator performs no I/O and is not thread-safe: a single driver
(see :class:`sim.sim_bridge.SimBridge`) must serialize calls to
:meth:`RouteSimulator.step`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from sim.clock import ClockState, SimulationClock
from sim.errors import RouteConfigError
from sim.geometry import DEFAULT_LOOKAHEAD, PathGeometry, Point
from sim.speed_policy import SpeedDecision, SpeedZonePolicy
from sim.stops import Stop, StopTable

log = logging.getLogger("simulator")

DEFAULT_ETA_SCALE: float = 0.5
"""Minutes of ETA per progress unit still to cover."""


@dataclass(frozen=True)
class SimulationSnapshot:
    """Fully derived vehicle state for one tick.

    Attributes
    ----------
    progress : float
        Route progress in ``[0, 100)``.
    speed_display_units : int
        Speed shown to riders (see :attr:`speed_unit`).
    congested : bool
        True while inside a congestion zone (and not crawling at a stop).
    street_label : str
        Name of the street the vehicle is on.
    position : Point
        Map coordinate of the vehicle.
    heading_degrees : float
        Direction of travel, ``atan2`` convention in map coordinates.
    next_stop : Stop
        Upcoming stop; wraps to the first stop after the last.
    eta_minutes : int
        Minutes to :attr:`next_stop`, never below 1.
    """

    progress: float
    speed_display_units: int
    congested: bool
    street_label: str
    position: Point
    heading_degrees: float
    next_stop: Stop
    eta_minutes: int
    speed_factor: float
    speed_unit: str
    lap: int
    elapsed_s: float
    alert: Optional[str]
    delay_minutes: int
    reached_stop_ids: Tuple[str, ...]

    def as_dict(self) -> Dict[str, Any]:
        """JSON-compatible mapping of every field."""
        return {
            "progress": self.progress,
            "speed_display_units": self.speed_display_units,
            "speed_unit": self.speed_unit,
            "speed_factor": self.speed_factor,
            "congested": self.congested,
            "street_label": self.street_label,
            "position": {"x": self.position.x, "y": self.position.y},
            "heading_degrees": self.heading_degrees,
            "next_stop": self.next_stop.as_dict(),
            "eta_minutes": self.eta_minutes,
            "lap": self.lap,
            "elapsed_s": self.elapsed_s,
            "alert": self.alert,
            "delay_minutes": self.delay_minutes,
            "reached_stop_ids": list(self.reached_stop_ids),
        }


class RouteSimulator:
    """Drives one vehicle along a route and derives its live state.

    Parameters
    ----------
    geometry : PathGeometry
        The route path.
    stops : StopTable
        Stops and street labels.
    policy : SpeedZonePolicy or None
        Speed modulation; uses defaults (no zones) when *None*.
    start_progress : float
        Initial progress.
    lookahead : float
        Heading look-ahead distance in path units.
    eta_scale : float
        Minutes per progress unit of remaining gap.
    """

    def __init__(
        self,
        geometry: PathGeometry,
        stops: StopTable,
        policy: Optional[SpeedZonePolicy] = None,
        start_progress: float = 0.0,
        lookahead: float = DEFAULT_LOOKAHEAD,
        eta_scale: float = DEFAULT_ETA_SCALE,
    ) -> None:
        if not (math.isfinite(lookahead) and lookahead > 0.0):
            raise RouteConfigError("lookahead must be a positive number")
        if not (math.isfinite(eta_scale) and eta_scale > 0.0):
            raise RouteConfigError("eta_scale must be a positive number")
        if not (math.isfinite(start_progress) and 0.0 <= start_progress < 100.0):
            raise RouteConfigError("start_progress must lie in [0, 100)")

        self.geometry = geometry
        self.stops = stops
        self.policy = policy or SpeedZonePolicy()
        self.lookahead = float(lookahead)
        self.eta_scale = float(eta_scale)
        self._clock = SimulationClock(start_progress)
        log.info(
            "RouteSimulator ready: length=%.1f stops=%d zones=%d start=%.1f",
            geometry.total_length,
            len(stops),
            len(self.policy.zones),
            start_progress,
        )

    # ── state ─────────────────────────────────────────────────────────────

    @property
    def progress(self) -> float:
        return self._clock.progress

    @property
    def state(self) -> ClockState:
        return self._clock.state

    @property
    def total_length(self) -> float:
        return self.geometry.total_length

    def reset(self) -> None:
        """Return to the start progress; the next step starts a new run."""
        self._clock.reset()
        log.info("RouteSimulator reset to progress %.1f", self.progress)

    # ── ticking ───────────────────────────────────────────────────────────

    def step(self, dt: float) -> SimulationSnapshot:
        """Advance by *dt* seconds and return the new snapshot.

        Speed and congestion come from the progress *before* the
        advance; every positional field reflects the progress after it.

        Raises
        ------
        InvalidTickError
            For a negative or non-finite *dt*; state is unchanged.
        """
        decision = self.policy.target_speed(self.progress, self.stops)
        self._clock.advance(dt, decision.factor)
        snapshot = self._build_snapshot(decision)
        log.debug(
            "tick dt=%.4f progress=%.3f factor=%.2f reason=%s",
            dt,
            snapshot.progress,
            decision.factor,
            decision.reason,
        )
        return snapshot

    def snapshot(self) -> SimulationSnapshot:
        """Snapshot of the current progress without advancing."""
        return self._build_snapshot(self.policy.target_speed(self.progress, self.stops))

    def eta_minutes(self, stop: Stop, progress: float) -> int:
        """Minutes to *stop*: ``max(1, round(gap * eta_scale))``."""
        gap = self.stops.progress_gap(stop, progress)
        return max(1, int(math.floor(gap * self.eta_scale + 0.5)))

    def _build_snapshot(self, decision: SpeedDecision) -> SimulationSnapshot:
        progress = self.progress
        arc = self.geometry.arc_length_at(progress)
        next_stop = self.stops.next_stop(progress)
        zone = decision.zone if decision.congested else None
        return SimulationSnapshot(
            progress=progress,
            speed_display_units=self.policy.display_speed(decision.factor),
            congested=decision.congested,
            street_label=self.stops.label_for(progress),
            position=self.geometry.point_at(arc),
            heading_degrees=self.geometry.heading_at(arc, self.lookahead),
            next_stop=next_stop,
            eta_minutes=self.eta_minutes(next_stop, progress),
            speed_factor=decision.factor,
            speed_unit=self.policy.speed_unit,
            lap=self._clock.laps,
            elapsed_s=self._clock.elapsed_s,
            alert=(zone.alert or None) if zone is not None else None,
            delay_minutes=zone.delay_minutes if zone is not None else 0,
            reached_stop_ids=tuple(stop.id for stop in self.stops.reached(progress)),
        )
