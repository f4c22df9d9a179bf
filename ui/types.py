"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]


@dataclass
class Camera:
    """Viewport mapping map coordinates (y grows down) to screen pixels.

    The map is fitted into the viewport, then scaled by ``zoom`` around
    the focus point.
    """
    screen_w: int
    screen_h: int
    map_w: float = 1600.0
    map_h: float = 900.0
    focus_x: float = 800.0
    focus_y: float = 450.0
    zoom: float = 0.85
    tilt_deg: float = 0.0
    """Perspective tilt; 0 is the flat 2D map, 45 the 3D view."""

    @property
    def scale(self) -> float:
        return min(self.screen_w / self.map_w, self.screen_h / self.map_h) * self.zoom

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        s = self.scale
        sx = self.screen_w / 2 + (wx - self.focus_x) * s
        sy = self.screen_h / 2 + (wy - self.focus_y) * s * self.tilt_factor
        return sx, sy

    @property
    def tilt_factor(self) -> float:
        return math.cos(math.radians(self.tilt_deg))

    def screen_heading(self, heading_deg: float) -> float:
        """Map heading as it appears on screen under the current tilt."""
        rad = math.radians(heading_deg)
        return math.degrees(math.atan2(math.sin(rad) * self.tilt_factor, math.cos(rad)))

    def center_on_map(self) -> None:
        self.focus_x = self.map_w / 2
        self.focus_y = self.map_h / 2


@dataclass
class BusRenderState:
    """Smoothed bus pose for interpolation between bridge ticks."""
    x: float
    y: float
    heading_deg: float
    initialised: bool = False
