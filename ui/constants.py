#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from .types import ColorRGB


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    # Dark map palette
    BG_COLOR: ColorRGB = (24, 27, 33)
    GRID_COLOR: ColorRGB = (42, 51, 64)
    ROUTE_ROAD_COLOR: ColorRGB = (69, 80, 97)
    ROUTE_DASH_COLOR: ColorRGB = (86, 98, 117)
    TEXT_COLOR: ColorRGB = (156, 165, 179)
    HIGHLIGHT_COLOR: ColorRGB = (34, 211, 238)
    TRAFFIC_COLOR: ColorRGB = (239, 68, 68)
    ALERT_COLOR: ColorRGB = (249, 115, 22)
    STOP_FILL_COLOR: ColorRGB = (30, 41, 59)
    STOP_PENDING_COLOR: ColorRGB = (100, 116, 139)
    BUS_BODY_COLOR: ColorRGB = (241, 245, 249)
    BUS_WINDOW_COLOR: ColorRGB = (96, 165, 250)
    DRIVER_OK_COLOR: ColorRGB = (34, 197, 94)
    DRIVER_CALL_COLOR: ColorRGB = (22, 163, 74)

    HUD_BG_COLOR: ColorRGB = (15, 23, 42)
    HUD_CARD_COLOR: ColorRGB = (36, 47, 62)
    HUD_BORDER_COLOR: ColorRGB = (51, 65, 85)
    HUD_TEXT_COLOR: ColorRGB = (241, 245, 249)
    HUD_MUTED_COLOR: ColorRGB = (100, 116, 139)

    GLOW_ALPHA = 70
    HUD_BLINK_MS = 500

    # Widths in map units (scaled by the camera)
    ROUTE_ROAD_WIDTH = 28
    TRAVELED_WIDTH = 8
    TRAFFIC_WIDTH = 8
    STOP_RADIUS = 6
    BUS_LENGTH = 64
    BUS_WIDTH = 32

    PANEL_HEIGHT = 130
    PROGRESS_BAR_HEIGHT = 10

    ZOOM_DEFAULT = 0.85
    ZOOM_STEP = 0.2
    ZOOM_MIN = 0.4
    ZOOM_MAX = 2.0
    FOLLOW_ZOOM = 1.6
    TILT_3D_DEG = 45.0
    SMOOTHING_PER_S = 12.0

    SCREENSHOT_DIR = "screenshots"
