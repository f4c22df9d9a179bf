#!/usr/bin/env python3
"""
sim/errors.py
=============
Exception types raised by the route engine.

Configuration problems surface at construction time as
:class:`RouteConfigError`; bad per-tick input surfaces from
:meth:`sim.simulator.RouteSimulator.step` as :class:`InvalidTickError`.
"""


class RouteSimError(ValueError):
    """Base class for every error raised by the route engine."""


class RouteConfigError(RouteSimError):
    """The route, stop, zone or label configuration is invalid."""


class InvalidTickError(RouteSimError):
    """A tick was requested with a negative or non-finite ``dt``."""
