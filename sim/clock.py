#!/usr/bin/env python3
"""
sim/clock.py
============
Progress clock for a recurring route.

:class:`SimulationClock` is a two-state machine (``IDLE`` → ``RUNNING``)
that advances a progress value in ``[0, 100)`` by ``factor * dt`` per
tick.  Overshoot past 100 wraps with true modulo, so a stalled driver
that hands in a large ``dt`` still lands on a consistent position.
There is no terminal state.
"""

from __future__ import annotations

import logging
import math
from enum import Enum

from sim.errors import InvalidTickError, RouteConfigError

log = logging.getLogger("clock")

ROUTE_SPAN: float = 100.0


class ClockState(Enum):
    IDLE = "idle"
    RUNNING = "running"


def wrap_progress(value: float) -> float:
    """Map *value* into ``[0, 100)`` with true modulo."""
    wrapped = value % ROUTE_SPAN
    # Float modulo of a tiny negative can round up to exactly 100.
    return 0.0 if wrapped >= ROUTE_SPAN else wrapped


class SimulationClock:
    """Advances route progress from elapsed time and a speed factor.

    Parameters
    ----------
    start_progress : float
        Initial progress; wrapped into ``[0, 100)``.
    """

    def __init__(self, start_progress: float = 0.0) -> None:
        if not math.isfinite(start_progress):
            raise RouteConfigError("start_progress must be finite")
        self._start = wrap_progress(float(start_progress))
        self.reset()

    def reset(self) -> None:
        """Return to ``IDLE`` at the start progress."""
        self._progress = self._start
        self._state = ClockState.IDLE
        self.ticks = 0
        self.elapsed_s = 0.0
        self.laps = 0

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def state(self) -> ClockState:
        return self._state

    @property
    def start_progress(self) -> float:
        return self._start

    def advance(self, dt: float, factor: float) -> float:
        """Advance by ``factor * dt`` and return the new progress.

        Raises
        ------
        InvalidTickError
            If *dt* is negative, not finite or not a real number, if
            *factor* is negative or not finite, or if the advance itself
            overflows.  Progress and state are left untouched.
        """
        if isinstance(dt, (str, bytes)):
            raise InvalidTickError(f"dt must be a real number, got {dt!r}")
        try:
            dt = float(dt)
        except (TypeError, ValueError) as exc:
            raise InvalidTickError(f"dt must be a real number, got {dt!r}") from exc
        if not (math.isfinite(dt) and dt >= 0.0):
            raise InvalidTickError(f"dt must be a finite, non-negative number, got {dt!r}")
        if not (math.isfinite(factor) and factor >= 0.0):
            raise InvalidTickError(f"speed factor must be finite and non-negative, got {factor!r}")

        raw = self._progress + factor * dt
        if not math.isfinite(raw):
            raise InvalidTickError(f"advance of {factor!r} * {dt!r} overflows")

        if self._state is ClockState.IDLE:
            self._state = ClockState.RUNNING
            log.debug("clock running from progress %.2f", self._progress)

        if raw >= ROUTE_SPAN:
            wraps = int(raw // ROUTE_SPAN)
            self.laps += wraps
            log.info("lap completed (total %d)", self.laps)
        self._progress = wrap_progress(raw)
        self.ticks += 1
        self.elapsed_s += dt
        return self._progress
