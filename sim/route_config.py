#!/usr/bin/env python3
"""
sim/route_config.py
===================
Route configuration schema and simulator factory.

A route file is JSON validated by the pydantic :class:`RouteConfig`
model.  Shape errors (missing fields, wrong types, out-of-range
progress) are caught here; semantic checks (ordering, overlaps,
positive path length) are enforced by the engine classes themselves.
Either way the caller sees a :class:`~sim.errors.RouteConfigError`.

Example::

    config = load_route_config("routes/morning.json")
    simulator = build_simulator(config)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from sim.errors import RouteConfigError
from sim.geometry import DEFAULT_LOOKAHEAD, PathGeometry, Point
from sim.simulator import DEFAULT_ETA_SCALE, RouteSimulator
from sim.speed_policy import SpeedZone, SpeedZonePolicy
from sim.stops import DEFAULT_NEXT_STOP_EPSILON, Stop, StopTable, StreetLabel

log = logging.getLogger("route_config")


# ── Schema ────────────────────────────────────────────────────────────────────

class PointModel(BaseModel):
    x: float
    y: float


class StopModel(BaseModel):
    """One stop in the route file."""
    id: str
    name: str
    progress: float = Field(ge=0.0, le=100.0)
    x: float
    y: float

    def to_stop(self) -> Stop:
        return Stop(id=self.id, name=self.name, progress=self.progress, x=self.x, y=self.y)


class SpeedZoneModel(BaseModel):
    """One congestion zone ``[lower, upper)``."""
    lower: float = Field(ge=0.0, le=100.0)
    upper: float = Field(ge=0.0, le=100.0)
    factor: float = Field(gt=0.0)
    congested: bool = True
    name: str = ""
    alert: str = ""
    delay_minutes: int = Field(default=0, ge=0)

    def to_zone(self) -> SpeedZone:
        return SpeedZone(**self.model_dump())


class StreetLabelModel(BaseModel):
    threshold: float = Field(ge=0.0, lt=100.0)
    label: str


class SpeedPolicyModel(BaseModel):
    """Tunables mirrored from :class:`~sim.speed_policy.SpeedZonePolicy`."""
    zones: List[SpeedZoneModel] = Field(default_factory=list)
    proximity_epsilon: float = Field(default=2.0, ge=0.0)
    crawl_factor: float = Field(default=0.8, gt=0.0)
    open_road_factor: float = Field(default=5.0, gt=0.0)
    display_multiplier: float = Field(default=9.0, gt=0.0)
    speed_unit: str = "km/h"

    def to_policy(self) -> SpeedZonePolicy:
        return SpeedZonePolicy(
            zones=tuple(zone.to_zone() for zone in self.zones),
            proximity_epsilon=self.proximity_epsilon,
            crawl_factor=self.crawl_factor,
            open_road_factor=self.open_road_factor,
            display_multiplier=self.display_multiplier,
            speed_unit=self.speed_unit,
        )


class RouteConfig(BaseModel):
    """Complete description of a simulated route.

    Exactly one of ``path`` (SVG path data) or ``points`` (polyline
    control points) describes the geometry.
    """
    name: str = "route"
    title: str = ""
    origin_label: str = ""
    destination_label: str = ""
    departure: str = ""
    arrival: str = ""
    driver_name: str = ""
    vehicle_plate: str = ""

    path: Optional[str] = None
    points: List[PointModel] = Field(default_factory=list)
    stops: List[StopModel]
    labels: List[StreetLabelModel]
    policy: SpeedPolicyModel = Field(default_factory=SpeedPolicyModel)

    start_progress: float = Field(default=0.0, ge=0.0, lt=100.0)
    lookahead: float = Field(default=DEFAULT_LOOKAHEAD, gt=0.0)
    eta_scale: float = Field(default=DEFAULT_ETA_SCALE, gt=0.0)
    next_stop_epsilon: float = Field(default=DEFAULT_NEXT_STOP_EPSILON, ge=0.0)

    map_width: float = Field(default=1600.0, gt=0.0)
    map_height: float = Field(default=900.0, gt=0.0)

    @model_validator(mode="after")
    def _one_geometry_source(self) -> "RouteConfig":
        if bool(self.path) == bool(self.points):
            raise ValueError("exactly one of 'path' or 'points' must be given")
        return self

    @property
    def map_size(self) -> Tuple[float, float]:
        return self.map_width, self.map_height


# ── Factories ─────────────────────────────────────────────────────────────────

def build_geometry(config: RouteConfig) -> PathGeometry:
    if config.path:
        return PathGeometry.from_svg(config.path)
    return PathGeometry.from_points(Point(p.x, p.y) for p in config.points)


def build_stop_table(config: RouteConfig) -> StopTable:
    return StopTable(
        stops=[s.to_stop() for s in config.stops],
        labels=[StreetLabel(threshold=entry.threshold, label=entry.label) for entry in config.labels],
        next_stop_epsilon=config.next_stop_epsilon,
    )


def build_simulator(config: RouteConfig) -> RouteSimulator:
    """Construct a ready-to-step :class:`RouteSimulator` from *config*."""
    simulator = RouteSimulator(
        geometry=build_geometry(config),
        stops=build_stop_table(config),
        policy=config.policy.to_policy(),
        start_progress=config.start_progress,
        lookahead=config.lookahead,
        eta_scale=config.eta_scale,
    )
    log.info("Built simulator for route %r", config.name)
    return simulator


def load_route_config(path: Union[str, Path]) -> RouteConfig:
    """Read and validate a JSON route file.

    Raises
    ------
    RouteConfigError
        If the file cannot be read or does not match the schema.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RouteConfigError(f"cannot read route file {path}: {exc}") from exc
    try:
        config = RouteConfig.model_validate_json(text)
    except ValidationError as exc:
        raise RouteConfigError(f"invalid route file {path}: {exc}") from exc
    log.info("Loaded route %r from %s", config.name, path)
    return config
