#!/usr/bin/env python3
"""
sim/geometry.py
===============
Route geometry: an immutable parametric path sampled by arc length.

A path is a contiguous chain of :class:`LineSegment`,
:class:`QuadraticSegment` and :class:`CubicSegment` pieces.  At
construction :class:`PathGeometry` samples every piece densely with
numpy, keeps the resulting polyline and its cumulative chord lengths,
and from then on answers every position / heading query by linear
interpolation over that table.

Paths can be built from raw control points (:meth:`PathGeometry.from_points`)
or from SVG path data (:meth:`PathGeometry.from_svg`, commands
``M L H V Q C Z`` in absolute and relative form).

Coordinates follow the map convention used by the renderer: *x* grows to
the right, *y* grows downwards, so a heading of 90° points down the
screen.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Sequence, Tuple, Union

import numpy as np

from sim.errors import RouteConfigError

DEFAULT_LOOKAHEAD: float = 10.0
"""Look-ahead distance (path units) used to smooth the heading."""

DEFAULT_SAMPLES_PER_CURVE: int = 64
"""Sample count per curved segment when measuring the path."""

_MIN_HEADING_SPAN = 1e-9
_CONTIGUITY_TOL = 1e-6


class Point(NamedTuple):
    """A 2D map coordinate."""

    x: float
    y: float


def _as_point(value: Union[Point, Tuple[float, float], Sequence[float]]) -> Point:
    x, y = value
    return Point(float(x), float(y))


# ── Segments ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LineSegment:
    """Straight piece from *start* to *end*."""

    start: Point
    end: Point

    def sample(self, n: int) -> np.ndarray:
        return np.array([self.start, self.end], dtype=float)


@dataclass(frozen=True)
class QuadraticSegment:
    """Quadratic Bézier piece (SVG ``Q``)."""

    start: Point
    control: Point
    end: Point

    def sample(self, n: int) -> np.ndarray:
        t = np.linspace(0.0, 1.0, n)[:, None]
        p0, p1, p2 = (np.asarray(p, dtype=float) for p in (self.start, self.control, self.end))
        u = 1.0 - t
        return u * u * p0 + 2.0 * u * t * p1 + t * t * p2


@dataclass(frozen=True)
class CubicSegment:
    """Cubic Bézier piece (SVG ``C``)."""

    start: Point
    control1: Point
    control2: Point
    end: Point

    def sample(self, n: int) -> np.ndarray:
        t = np.linspace(0.0, 1.0, n)[:, None]
        p0, p1, p2, p3 = (
            np.asarray(p, dtype=float)
            for p in (self.start, self.control1, self.control2, self.end)
        )
        u = 1.0 - t
        return u ** 3 * p0 + 3.0 * u * u * t * p1 + 3.0 * u * t * t * p2 + t ** 3 * p3


Segment = Union[LineSegment, QuadraticSegment, CubicSegment]


# ── SVG path data ─────────────────────────────────────────────────────────────

_TOKEN_RE = re.compile(
    r"[MmLlHhVvQqCcZz]|[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
)
_ARITY = {"M": 2, "L": 2, "H": 1, "V": 1, "Q": 4, "C": 6}


def parse_svg_path(d: str) -> List[Segment]:
    """Parse SVG path data into a list of segments.

    Supports ``M L H V Q C Z`` (and lowercase relative forms), including
    implicit command repetition.  Anything else raises
    :class:`~sim.errors.RouteConfigError`.
    """
    tokens = _TOKEN_RE.findall(d or "")
    if not tokens or tokens[0] not in ("M", "m"):
        raise RouteConfigError("path data must start with a moveto command")
    leftover = _TOKEN_RE.sub("", d).replace(",", "").strip()
    if leftover:
        raise RouteConfigError(f"unsupported path data: {leftover[:20]!r}")

    segments: List[Segment] = []
    pos = start = Point(0.0, 0.0)
    cmd = ""
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if tok.isalpha():
            cmd = tok
            i += 1
            if cmd in ("Z", "z"):
                if pos != start:
                    segments.append(LineSegment(pos, start))
                pos = start
                continue
        elif cmd in ("", "Z", "z"):
            raise RouteConfigError(f"number {tok!r} without a drawing command")

        upper = cmd.upper()
        arity = _ARITY[upper]
        args = tokens[i:i + arity]
        if len(args) < arity or any(a.isalpha() for a in args):
            raise RouteConfigError(f"command {cmd!r} expects {arity} numbers")
        nums = [float(a) for a in args]
        i += arity

        rel = cmd.islower()
        ox, oy = (pos.x, pos.y) if rel else (0.0, 0.0)

        if upper == "M":
            pos = start = Point(ox + nums[0], oy + nums[1])
            # Extra coordinate pairs after a moveto are implicit linetos.
            cmd = "l" if rel else "L"
        elif upper == "L":
            end = Point(ox + nums[0], oy + nums[1])
            segments.append(LineSegment(pos, end))
            pos = end
        elif upper == "H":
            end = Point(ox + nums[0], pos.y)
            segments.append(LineSegment(pos, end))
            pos = end
        elif upper == "V":
            end = Point(pos.x, oy + nums[0])
            segments.append(LineSegment(pos, end))
            pos = end
        elif upper == "Q":
            ctrl = Point(ox + nums[0], oy + nums[1])
            end = Point(ox + nums[2], oy + nums[3])
            segments.append(QuadraticSegment(pos, ctrl, end))
            pos = end
        elif upper == "C":
            c1 = Point(ox + nums[0], oy + nums[1])
            c2 = Point(ox + nums[2], oy + nums[3])
            end = Point(ox + nums[4], oy + nums[5])
            segments.append(CubicSegment(pos, c1, c2, end))
            pos = end
    return segments


# ── Path geometry ─────────────────────────────────────────────────────────────

class PathGeometry:
    """Immutable sampled path with precomputed arc length.

    Parameters
    ----------
    segments : sequence of Segment
        Contiguous pieces; each piece must start where the previous ended.
    samples_per_curve : int
        Number of samples taken along each curved piece.

    Raises
    ------
    RouteConfigError
        If the path is empty, discontinuous, non-finite or has zero length.
    """

    def __init__(
        self,
        segments: Iterable[Segment],
        samples_per_curve: int = DEFAULT_SAMPLES_PER_CURVE,
    ) -> None:
        self._segments: Tuple[Segment, ...] = tuple(segments)
        if not self._segments:
            raise RouteConfigError("path has no segments")
        if samples_per_curve < 2:
            raise RouteConfigError("samples_per_curve must be at least 2")

        for prev, seg in zip(self._segments, self._segments[1:]):
            if math.hypot(seg.start.x - prev.end.x, seg.start.y - prev.end.y) > _CONTIGUITY_TOL:
                raise RouteConfigError(
                    f"path is not continuous at ({prev.end.x}, {prev.end.y})"
                )

        chunks = [self._segments[0].sample(samples_per_curve)[:1]]
        chunks.extend(seg.sample(samples_per_curve)[1:] for seg in self._segments)
        points = np.vstack(chunks)
        if not np.all(np.isfinite(points)):
            raise RouteConfigError("path coordinates must be finite")

        steps = np.hypot(*np.diff(points, axis=0).T)
        moving = steps > 0.0
        self._points = points[np.concatenate(([True], moving))]
        self._cumulative = np.concatenate(([0.0], np.cumsum(steps[moving])))
        self._total_length = float(self._cumulative[-1])
        if not self._total_length > 0.0:
            raise RouteConfigError("path length must be positive")

    # ── constructors ──────────────────────────────────────────────────────

    @classmethod
    def from_points(
        cls, points: Iterable[Union[Point, Tuple[float, float]]]
    ) -> "PathGeometry":
        """Polyline through the given control points."""
        pts = [_as_point(p) for p in points]
        if len(pts) < 2:
            raise RouteConfigError("a path needs at least two points")
        return cls(LineSegment(a, b) for a, b in zip(pts, pts[1:]))

    @classmethod
    def from_svg(
        cls, d: str, samples_per_curve: int = DEFAULT_SAMPLES_PER_CURVE
    ) -> "PathGeometry":
        """Path described by SVG path data (e.g. ``"M 0 0 Q 50 0 50 50"``)."""
        return cls(parse_svg_path(d), samples_per_curve=samples_per_curve)

    # ── queries ───────────────────────────────────────────────────────────

    @property
    def total_length(self) -> float:
        return self._total_length

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    def arc_length_at(self, progress: float) -> float:
        """Arc length for a progress value in ``[0, 100]``."""
        return progress / 100.0 * self._total_length

    def point_at(self, arc_length: float) -> Point:
        """Point at *arc_length*, clamped to ``[0, total_length]``."""
        a = self._clamp(arc_length)
        return Point(
            float(np.interp(a, self._cumulative, self._points[:, 0])),
            float(np.interp(a, self._cumulative, self._points[:, 1])),
        )

    def heading_at(self, arc_length: float, lookahead: float = DEFAULT_LOOKAHEAD) -> float:
        """Heading in degrees from *arc_length* towards a look-ahead point.

        The look-ahead point is clamped to the path end.  When that
        leaves no span to measure (the very end of the path) the
        heading of the final *lookahead* stretch is returned instead.
        """
        if not lookahead > 0.0:
            raise RouteConfigError("lookahead must be positive")
        here = self._clamp(arc_length)
        ahead = min(here + lookahead, self._total_length)
        if ahead - here < _MIN_HEADING_SPAN:
            here = max(0.0, self._total_length - lookahead)
            ahead = self._total_length
        p = self.point_at(here)
        q = self.point_at(ahead)
        return math.degrees(math.atan2(q.y - p.y, q.x - p.x))

    def polyline(self) -> List[Point]:
        """Every sampled point along the path, start to end."""
        return [Point(float(x), float(y)) for x, y in self._points]

    def polyline_between(self, start_arc: float, end_arc: float) -> List[Point]:
        """Sampled points covering ``[start_arc, end_arc]`` (clamped)."""
        a0, a1 = sorted((self._clamp(start_arc), self._clamp(end_arc)))
        inner = (self._cumulative > a0) & (self._cumulative < a1)
        return (
            [self.point_at(a0)]
            + [Point(float(x), float(y)) for x, y in self._points[inner]]
            + [self.point_at(a1)]
        )

    def _clamp(self, arc_length: float) -> float:
        return min(max(float(arc_length), 0.0), self._total_length)

    def __repr__(self) -> str:
        return (
            f"PathGeometry(segments={len(self._segments)}, "
            f"total_length={self._total_length:.2f})"
        )
