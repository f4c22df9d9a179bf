#!/usr/bin/env python3
"""
sim/speed_policy.py
===================
Zone-based speed modulation for the route simulation.

Every tunable lives in the frozen :class:`SpeedZonePolicy` dataclass so
experiments can swap policies without touching the simulator.  The
policy maps a progress value to a :class:`SpeedDecision`; the rules are
checked in priority order and the first match wins:

1. stop proximity band → crawl factor, never congested;
2. congestion zone     → the zone's factor and flag;
3. open road           → the default factor.

Factors are *progress units per second of elapsed time*, a design-time
tunable rather than a physical speed.  :meth:`SpeedZonePolicy.display_speed`
turns one into the speed shown to riders.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from sim.errors import RouteConfigError
from sim.stops import Stop

REASON_STOP = "stop"
REASON_ZONE = "zone"
REASON_OPEN_ROAD = "open_road"


@dataclass(frozen=True)
class SpeedZone:
    """Fixed progress range ``[lower, upper)`` with its own speed factor."""

    lower: float
    upper: float
    factor: float
    congested: bool = True
    name: str = ""
    """Short place name shown by renderers (e.g. a crossing)."""

    alert: str = ""
    """Rider-facing message while the vehicle is inside the zone."""

    delay_minutes: int = 0
    """Expected extra delay reported alongside :attr:`alert`."""

    def contains(self, progress: float) -> bool:
        return self.lower <= progress < self.upper

    def as_dict(self) -> Dict[str, Any]:
        return {
            "lower": self.lower,
            "upper": self.upper,
            "factor": self.factor,
            "congested": self.congested,
            "name": self.name,
            "alert": self.alert,
            "delay_minutes": self.delay_minutes,
        }


@dataclass(frozen=True)
class SpeedDecision:
    """Outcome of one :meth:`SpeedZonePolicy.target_speed` query."""

    factor: float
    congested: bool
    reason: str
    zone: Optional[SpeedZone] = None
    stop: Optional[Stop] = None


@dataclass(frozen=True)
class SpeedZonePolicy:
    """Immutable bag of speed-modulation parameters.

    Raises :class:`~sim.errors.RouteConfigError` at construction when a
    factor is not positive or the zones are unsorted, overlapping or
    outside ``[0, 100]``.
    """

    zones: Tuple[SpeedZone, ...] = ()
    """Congestion zones, ascending and non-overlapping."""

    proximity_epsilon: float = 2.0
    """Half-width of the crawl band around every stop (progress units)."""

    crawl_factor: float = 0.8
    """Factor applied inside a stop's proximity band."""

    open_road_factor: float = 5.0
    """Factor applied outside every zone and band."""

    display_multiplier: float = 9.0
    """Converts a factor into display speed units."""

    speed_unit: str = "km/h"
    """Unit label for :meth:`display_speed`."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "zones", tuple(self.zones))
        for name in ("crawl_factor", "open_road_factor", "display_multiplier"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0.0):
                raise RouteConfigError(f"{name} must be a positive number, got {value}")
        if not (math.isfinite(self.proximity_epsilon) and self.proximity_epsilon >= 0.0):
            raise RouteConfigError("proximity_epsilon must be a non-negative number")
        self._validate_zones(self.zones)

    @staticmethod
    def _validate_zones(zones: Iterable[SpeedZone]) -> None:
        previous: Optional[SpeedZone] = None
        for zone in zones:
            if not (0.0 <= zone.lower < zone.upper <= 100.0):
                raise RouteConfigError(
                    f"zone [{zone.lower}, {zone.upper}) must satisfy 0 <= lower < upper <= 100"
                )
            if not (math.isfinite(zone.factor) and zone.factor > 0.0):
                raise RouteConfigError(f"zone factor must be positive, got {zone.factor}")
            if previous is not None and zone.lower < previous.upper:
                raise RouteConfigError(
                    f"zone [{zone.lower}, {zone.upper}) overlaps or precedes "
                    f"[{previous.lower}, {previous.upper})"
                )
            previous = zone

    def target_speed(self, progress: float, stops: Iterable[Stop]) -> SpeedDecision:
        """Speed factor and congestion flag for *progress*."""
        for stop in stops:
            if abs(progress - stop.progress) < self.proximity_epsilon:
                return SpeedDecision(
                    factor=self.crawl_factor,
                    congested=False,
                    reason=REASON_STOP,
                    stop=stop,
                )
        zone = self.zone_at(progress)
        if zone is not None:
            return SpeedDecision(
                factor=zone.factor,
                congested=zone.congested,
                reason=REASON_ZONE,
                zone=zone,
            )
        return SpeedDecision(
            factor=self.open_road_factor,
            congested=False,
            reason=REASON_OPEN_ROAD,
        )

    def zone_at(self, progress: float) -> Optional[SpeedZone]:
        for zone in self.zones:
            if zone.contains(progress):
                return zone
        return None

    def display_speed(self, factor: float) -> int:
        """Display speed for *factor*, rounded half up."""
        return int(math.floor(factor * self.display_multiplier + 0.5))
