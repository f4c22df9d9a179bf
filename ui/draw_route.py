"""
ui/draw_route.py
================
Renders the route map: background grid, route underlay, the traveled
overlay (filled in proportion to progress), congestion overlays and the
stop markers.

All functions are *pure renderers*: they read data and draw to a surface.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Sequence, Tuple

import pygame

from ui.constants import ViewConstants as C
from ui.helpers import draw_alpha_lines, render_text, scaled_width, to_screen
from ui.types import Camera

_GRID_STEP = 100.0   # map units between grid lines
_DASH_LEN = 12.0
_DASH_GAP = 12.0


def draw_grid(screen: pygame.Surface, cam: Camera) -> None:
    """City-block grid covering the whole map."""
    x = 0.0
    while x <= cam.map_w:
        top = cam.world_to_screen(x, 0.0)
        bottom = cam.world_to_screen(x, cam.map_h)
        pygame.draw.line(screen, C.GRID_COLOR, top, bottom, 1)
        x += _GRID_STEP
    y = 0.0
    while y <= cam.map_h:
        left = cam.world_to_screen(0.0, y)
        right = cam.world_to_screen(cam.map_w, y)
        pygame.draw.line(screen, C.GRID_COLOR, left, right, 1)
        y += _GRID_STEP


def draw_route_underlay(
    screen: pygame.Surface, cam: Camera, polyline: Sequence[Tuple[float, float]]
) -> None:
    """Wide road under the whole route plus a dashed centre line."""
    pts = to_screen(cam, polyline)
    if len(pts) < 2:
        return
    width = scaled_width(cam, C.ROUTE_ROAD_WIDTH)
    pygame.draw.lines(screen, C.ROUTE_ROAD_COLOR, False, pts, width)
    for p in pts:
        pygame.draw.circle(screen, C.ROUTE_ROAD_COLOR, p, width // 2)
    _draw_dashes(screen, pts, C.ROUTE_DASH_COLOR, cam.scale)


def draw_traveled(
    screen: pygame.Surface, cam: Camera, traveled: Sequence[Tuple[float, float]]
) -> None:
    """Glowing highlight over the part of the route already covered."""
    pts = to_screen(cam, traveled)
    if len(pts) < 2:
        return
    width = scaled_width(cam, C.TRAVELED_WIDTH)
    draw_alpha_lines(screen, (*C.HIGHLIGHT_COLOR, C.GLOW_ALPHA), pts, width * 3)
    pygame.draw.lines(screen, C.HIGHLIGHT_COLOR, False, pts, width)


def draw_congestion(
    screen: pygame.Surface, cam: Camera, zones: Iterable[Dict[str, Any]]
) -> None:
    """Red overlay on every congested zone stretch."""
    width = scaled_width(cam, C.TRAFFIC_WIDTH)
    for zone in zones:
        if not zone.get("congested", True):
            continue
        pts = to_screen(cam, zone.get("polyline", []))
        if len(pts) >= 2:
            pygame.draw.lines(screen, C.TRAFFIC_COLOR, False, pts, width)


def draw_stops(
    screen: pygame.Surface,
    cam: Camera,
    stops: Iterable[Dict[str, Any]],
    reached_ids: Iterable[str],
    font: pygame.font.Font,
) -> None:
    """Stop markers; reached stops are ringed in the highlight colour."""
    reached = set(reached_ids)
    radius = max(3, int(C.STOP_RADIUS * cam.scale))
    ring = max(1, int(3 * cam.scale))
    for stop in stops:
        sx, sy = cam.world_to_screen(stop["x"], stop["y"])
        centre = (int(sx), int(sy))
        color = C.HIGHLIGHT_COLOR if stop["id"] in reached else C.STOP_PENDING_COLOR
        pygame.draw.circle(screen, C.STOP_FILL_COLOR, centre, radius)
        pygame.draw.circle(screen, color, centre, radius, ring)
        render_text(
            screen, font, stop["name"], (centre[0], centre[1] + radius + 6),
            C.TEXT_COLOR, anchor="midtop",
        )


def _draw_dashes(
    screen: pygame.Surface,
    pts: Sequence[Tuple[int, int]],
    color: Tuple[int, int, int],
    scale: float,
) -> None:
    dash = max(2.0, _DASH_LEN * scale)
    gap = max(2.0, _DASH_GAP * scale)
    drawing = True
    remaining = dash
    for (x0, y0), (x1, y1) in zip(pts, pts[1:]):
        seg = pygame.Vector2(x1 - x0, y1 - y0)
        length = seg.length()
        if length == 0:
            continue
        direction = seg / length
        pos = 0.0
        while pos < length:
            step = min(remaining, length - pos)
            if drawing:
                a = pygame.Vector2(x0, y0) + direction * pos
                b = pygame.Vector2(x0, y0) + direction * (pos + step)
                pygame.draw.line(screen, color, a, b, 2)
            pos += step
            remaining -= step
            if remaining <= 0:
                drawing = not drawing
                remaining = dash if drawing else gap
