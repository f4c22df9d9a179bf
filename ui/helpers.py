"""
ui/helpers.py
=============
Pure utility functions shared across UI modules:
interpolation, polyline slicing, coordinate transforms, alpha-surface
drawing and text rendering.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
import pygame

from ui.types import Camera

PointXY = Tuple[float, float]


# ── Interpolation helpers ─────────────────────────────────────────────────────

def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def angle_lerp(a: float, b: float, t: float) -> float:
    """Shortest-arc angle interpolation (degrees)."""
    diff = (b - a) % 360
    if diff > 180:
        diff -= 360
    return (a + diff * t) % 360


# ── Polyline helpers ──────────────────────────────────────────────────────────

def polyline_cumulative(points: Sequence[PointXY]) -> np.ndarray:
    """Cumulative distance along *points*, starting at 0."""
    arr = np.asarray(points, dtype=float)
    if len(arr) < 2:
        return np.zeros(len(arr))
    steps = np.hypot(*np.diff(arr, axis=0).T)
    return np.concatenate(([0.0], np.cumsum(steps)))


def traveled_polyline(
    points: Sequence[PointXY],
    cumulative: np.ndarray,
    arc_length: float,
    end_point: PointXY,
) -> List[PointXY]:
    """Portion of the route already covered, ending at the vehicle."""
    cut = int(np.searchsorted(cumulative, arc_length, side="right"))
    return list(points[:cut]) + [tuple(end_point)]


def to_screen(cam: Camera, points: Sequence[PointXY]) -> List[Tuple[int, int]]:
    out = []
    for x, y in points:
        sx, sy = cam.world_to_screen(x, y)
        out.append((int(sx), int(sy)))
    return out


def scaled_width(cam: Camera, width: float) -> int:
    return max(1, int(round(width * cam.scale)))


# ── Alpha drawing helpers ─────────────────────────────────────────────────────

def draw_alpha_rect(
    target: pygame.Surface,
    color: Tuple[int, ...],
    rect: pygame.Rect,
    border_radius: int = 0,
) -> None:
    """Draw a semi-transparent rectangle (colour tuple with 4 channels)."""
    tmp = pygame.Surface((rect.w, rect.h), pygame.SRCALPHA)
    pygame.draw.rect(tmp, color, (0, 0, rect.w, rect.h), border_radius=border_radius)
    target.blit(tmp, rect.topleft)


def draw_alpha_lines(
    target: pygame.Surface,
    color: Tuple[int, ...],
    points: Sequence[Tuple[int, int]],
    width: int,
) -> None:
    """Draw a semi-transparent open polyline over the whole target."""
    if len(points) < 2:
        return
    tmp = pygame.Surface(target.get_size(), pygame.SRCALPHA)
    pygame.draw.lines(tmp, color, False, points, width)
    target.blit(tmp, (0, 0))


# ── Text helper ──────────────────────────────────────────────────────────────

def render_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: Tuple[int, int],
    color: Tuple[int, ...] = (230, 230, 235),
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
    img = font.render(text, True, color)
    rect = img.get_rect(**{anchor: pos})
    surface.blit(img, rect)
    return rect
