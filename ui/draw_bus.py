#!/usr/bin/env python3
"""Bus sprite rendering and pose smoothing (mixin)."""

from __future__ import annotations

import math

import pygame

from .helpers import angle_lerp, lerp
from .types import BusRenderState


class BusRenderer:
    """Mixin that draws the bus marker and eases it towards each snapshot."""

    def animate_bus(self, snapshot, delta_time: float) -> None:
        """Ease the rendered pose towards the latest snapshot.

        A wrap back to the route start snaps instead of sliding across
        the map.
        """
        state = self.bus_state
        target_x, target_y = snapshot.position
        if not state.initialised or math.hypot(target_x - state.x, target_y - state.y) > 200.0:
            state.x, state.y = target_x, target_y
            state.heading_deg = snapshot.heading_degrees
            state.initialised = True
            return
        t = min(1.0, delta_time * self.SMOOTHING_PER_S)
        state.x = lerp(state.x, target_x, t)
        state.y = lerp(state.y, target_y, t)
        state.heading_deg = angle_lerp(state.heading_deg, snapshot.heading_degrees, t)

    def draw_bus(self, surface: pygame.Surface, state: BusRenderState) -> None:
        scale = self.camera.scale
        w = max(8, int(self.BUS_LENGTH * scale))
        h = max(4, int(self.BUS_WIDTH * scale))
        sprite = pygame.Surface((w, h), pygame.SRCALPHA)

        # Body
        body = pygame.Rect(0, 0, w, h)
        pygame.draw.rect(sprite, self.BUS_BODY_COLOR, body, border_radius=max(1, h // 8))

        # Windscreen at the front (+x)
        ws = pygame.Rect(w - max(2, w // 5), 0, max(2, w // 5), h)
        pygame.draw.rect(sprite, self.BUS_WINDOW_COLOR, ws)

        # Headlights / taillights
        light = max(1, h // 8)
        pygame.draw.circle(sprite, (250, 204, 21), (w - light, light * 2), light)
        pygame.draw.circle(sprite, (250, 204, 21), (w - light, h - light * 2), light)
        pygame.draw.circle(sprite, (239, 68, 68), (light, light * 2), light)
        pygame.draw.circle(sprite, (239, 68, 68), (light, h - light * 2), light)

        # Border
        pygame.draw.rect(sprite, (203, 213, 225), body, width=1, border_radius=max(1, h // 8))

        # Map y grows down, so a positive heading turns clockwise on screen.
        rotated = pygame.transform.rotate(sprite, -self.camera.screen_heading(state.heading_deg))
        sx, sy = self.camera.world_to_screen(state.x, state.y)
        dest = rotated.get_rect(center=(int(sx), int(sy)))
        surface.blit(rotated, dest)
