#!/usr/bin/env python3

from .types import BusRenderState, Camera, ColorRGB, ColorRGBA
from .constants import ViewConstants
from .draw_bus import BusRenderer
from .hud import HudRenderer
from .pygame_view import PygameRouteView, run_pygame_view

__all__ = [
    "BusRenderState",
    "Camera",
    "ColorRGB",
    "ColorRGBA",
    "ViewConstants",
    "BusRenderer",
    "HudRenderer",
    "PygameRouteView",
    "run_pygame_view",
]
