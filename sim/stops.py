#!/usr/bin/env python3
"""
sim/stops.py
============
Stop table and street-label lookup.

:class:`StopTable` holds the ordered, immutable list of :class:`Stop`
entries anchored to progress values, plus the ``(threshold, label)``
table used to name the street the vehicle is currently on.
"""

from __future__ import annotations

import bisect
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple

from sim.errors import RouteConfigError

DEFAULT_NEXT_STOP_EPSILON: float = 1.0
"""A stop counts as *next* only once it lies this far ahead."""


@dataclass(frozen=True)
class Stop:
    """A named stop anchored to a progress value and a map coordinate."""

    id: str
    name: str
    progress: float
    x: float
    y: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "progress": self.progress,
            "x": self.x,
            "y": self.y,
        }


@dataclass(frozen=True)
class StreetLabel:
    """Street name in effect from *threshold* progress onwards."""

    threshold: float
    label: str


class StopTable:
    """Ordered stops plus the street-label thresholds.

    Parameters
    ----------
    stops : iterable of Stop
        Strictly ascending by ``progress``, each in ``[0, 100]``.
    labels : iterable of StreetLabel
        Strictly ascending thresholds; the first must be ``0``.
    next_stop_epsilon : float
        Minimum lead a stop needs over the current progress to count as
        the next one.
    """

    def __init__(
        self,
        stops: Iterable[Stop],
        labels: Iterable[StreetLabel],
        next_stop_epsilon: float = DEFAULT_NEXT_STOP_EPSILON,
    ) -> None:
        self._stops: Tuple[Stop, ...] = tuple(stops)
        self._labels: Tuple[StreetLabel, ...] = tuple(labels)
        self._validate_stops()
        self._validate_labels()
        if not (math.isfinite(next_stop_epsilon) and next_stop_epsilon >= 0.0):
            raise RouteConfigError("next_stop_epsilon must be a non-negative number")
        self.next_stop_epsilon = float(next_stop_epsilon)
        self._thresholds = [entry.threshold for entry in self._labels]

    def _validate_stops(self) -> None:
        if not self._stops:
            raise RouteConfigError("stop table is empty")
        seen_ids = set()
        previous = None
        for stop in self._stops:
            if not (math.isfinite(stop.progress) and 0.0 <= stop.progress <= 100.0):
                raise RouteConfigError(
                    f"stop {stop.id!r} progress {stop.progress} outside [0, 100]"
                )
            if stop.id in seen_ids:
                raise RouteConfigError(f"duplicate stop id {stop.id!r}")
            seen_ids.add(stop.id)
            if previous is not None and stop.progress <= previous.progress:
                raise RouteConfigError(
                    f"stop {stop.id!r} is not after {previous.id!r}; "
                    "stops must be strictly ascending by progress"
                )
            previous = stop

    def _validate_labels(self) -> None:
        if not self._labels:
            raise RouteConfigError("street label table is empty")
        if self._labels[0].threshold != 0.0:
            raise RouteConfigError("street label table must start at progress 0")
        for prev, entry in zip(self._labels, self._labels[1:]):
            if not (math.isfinite(entry.threshold) and entry.threshold > prev.threshold):
                raise RouteConfigError(
                    f"street label threshold {entry.threshold} is not ascending"
                )
            if entry.threshold >= 100.0:
                raise RouteConfigError(
                    f"street label threshold {entry.threshold} outside [0, 100)"
                )

    # ── accessors ─────────────────────────────────────────────────────────

    @property
    def stops(self) -> Tuple[Stop, ...]:
        return self._stops

    @property
    def labels(self) -> Tuple[StreetLabel, ...]:
        return self._labels

    @property
    def first(self) -> Stop:
        return self._stops[0]

    def __iter__(self):
        return iter(self._stops)

    def __len__(self) -> int:
        return len(self._stops)

    # ── queries ───────────────────────────────────────────────────────────

    def next_stop(self, progress: float) -> Stop:
        """First stop strictly beyond ``progress + next_stop_epsilon``.

        Past the last stop the route wraps and the first stop is next.
        """
        limit = progress + self.next_stop_epsilon
        for stop in self._stops:
            if stop.progress > limit:
                return stop
        return self._stops[0]

    def label_for(self, progress: float) -> str:
        """Label of the last threshold at or below *progress*."""
        idx = bisect.bisect_right(self._thresholds, progress) - 1
        return self._labels[max(idx, 0)].label

    def reached(self, progress: float) -> Tuple[Stop, ...]:
        """Stops already reached on the current lap."""
        return tuple(stop for stop in self._stops if stop.progress <= progress)

    @staticmethod
    def progress_gap(stop: Stop, progress: float) -> float:
        """Forward progress distance to *stop*, wrapping past 100."""
        return (stop.progress - progress) % 100.0
