#!/usr/bin/env python3
"""
Main view class: combines all UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           – Camera, BusRenderState, colour aliases
    ├── constants.py       – ViewConstants mixin (all class-level constants)
    ├── helpers.py         – interpolation, polyline and drawing utilities
    ├── draw_route.py      – pure route / stop / congestion renderers
    ├── draw_bus.py        – BusRenderer mixin (sprite, pose smoothing)
    ├── hud.py             – HudRenderer mixin  (cards, panel, debug, splash)
    └── pygame_view.py     – PygameRouteView (this file – main loop)
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import Any, Optional

import pygame

from . import draw_route
from .constants import ViewConstants
from .draw_bus import BusRenderer
from .helpers import polyline_cumulative, traveled_polyline
from .hud import HudRenderer
from .types import BusRenderState, Camera


class PygameRouteView(
    ViewConstants,
    BusRenderer,
    HudRenderer,
):
    """Live bus-tracker visualiser powered by Pygame.

    Polls a :class:`~sim.sim_bridge.SimBridge` once per frame; never
    steps the simulation itself.
    """

    def __init__(self, bridge: Any, width: int = 1200, height: int = 800, fps: int = 60):
        self.bridge = bridge
        self.width = width
        self.height = height
        self.fps = fps

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_body: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.route = bridge.get_route()
        map_w, map_h = self.route["map_size"]
        self.camera = Camera(
            screen_w=width,
            screen_h=height - self.PANEL_HEIGHT,
            map_w=map_w,
            map_h=map_h,
            zoom=self.ZOOM_DEFAULT,
        )
        self.camera.center_on_map()
        self._route_points = [tuple(p) for p in self.route["polyline"]]
        self._route_cumulative = polyline_cumulative(self._route_points)

        self.time_seconds = 0.0
        self.bus_state = BusRenderState(x=0.0, y=0.0, heading_deg=0.0)

        # UI state
        self.paused = False
        self.follow = False
        self.show_debug = False
        self.show_splash = True
        self._screenshot_flash_until = 0.0

    @staticmethod
    def _load_font(size: int, bold: bool = False) -> pygame.font.Font:
        return pygame.font.SysFont("dejavusans,arial,helvetica", size, bold=bold)

    # ------------------------------------------------------------------ #
    #  Resize / camera                                                     #
    # ------------------------------------------------------------------ #
    def _handle_resize(self, new_w: int, new_h: int) -> None:
        self.width = max(600, new_w)
        self.height = max(400, new_h)
        self.camera.screen_w = self.width
        self.camera.screen_h = self.height - self.PANEL_HEIGHT
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )

    def _reset_view(self) -> None:
        self.follow = False
        self.camera.zoom = self.ZOOM_DEFAULT
        self.camera.center_on_map()

    def _toggle_view_mode(self) -> None:
        self.camera.tilt_deg = 0.0 if self.camera.tilt_deg else self.TILT_3D_DEG

    def _toggle_follow(self) -> None:
        self.follow = not self.follow
        if self.follow:
            self.camera.zoom = max(self.camera.zoom, self.FOLLOW_ZOOM)
        else:
            self._reset_view()

    # ------------------------------------------------------------------ #
    #  Screenshot                                                          #
    # ------------------------------------------------------------------ #
    def _take_screenshot(self) -> None:
        if self.screen is None:
            return
        os.makedirs(self.SCREENSHOT_DIR, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.SCREENSHOT_DIR, f"route_{stamp}.png")
        pygame.image.save(self.screen, path)
        self._screenshot_flash_until = self.time_seconds + 0.35

    # ------------------------------------------------------------------ #
    #  Key handling                                                        #
    # ------------------------------------------------------------------ #
    def _handle_key(self, key: int) -> None:
        if key == pygame.K_SPACE:
            self.paused = not self.paused
            self.bridge.set_paused(self.paused)
        elif key == pygame.K_F3:
            self.show_debug = not self.show_debug
        elif key == pygame.K_f:
            self._toggle_follow()
        elif key == pygame.K_v:
            self._toggle_view_mode()
        elif key == pygame.K_0:
            self._reset_view()
        elif key == pygame.K_r:
            self.bus_state.initialised = False
            self.bridge.reset()
        elif key == pygame.K_F12:
            self._take_screenshot()
        elif key in (pygame.K_EQUALS, pygame.K_PLUS):
            self.camera.zoom = min(self.ZOOM_MAX, self.camera.zoom + self.ZOOM_STEP)
        elif key == pygame.K_MINUS:
            self.camera.zoom = max(self.ZOOM_MIN, self.camera.zoom - self.ZOOM_STEP)

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.route.get("title") or "LIVE BUS TRACKER")
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        self.font_small = self._load_font(14, bold=False)
        self.font_tiny = self._load_font(11, bold=True)
        self.font_body = self._load_font(17, bold=True)
        self.font_title = self._load_font(28, bold=True)

        running = True
        while running:
            delta_time = self.clock.tick(self.fps) / 1000.0
            self.time_seconds += delta_time

            # ---- events ------------------------------------------------- #
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    self._handle_resize(event.w, event.h)
                elif event.type == pygame.KEYDOWN:
                    if self.show_splash:
                        self.show_splash = False
                        continue
                    self._handle_key(event.key)

            # ---- splash ------------------------------------------------- #
            if self.show_splash:
                self.screen.fill(self.BG_COLOR)
                self._draw_splash(self.screen, self.time_seconds)
                pygame.display.flip()
                continue

            # ---- poll bridge -------------------------------------------- #
            snapshot = self.bridge.get_snapshot()
            if not self.paused:
                self.animate_bus(snapshot, delta_time)
            if self.follow:
                self.camera.focus_x = self.bus_state.x
                self.camera.focus_y = self.bus_state.y

            # ---- render ------------------------------------------------- #
            self.screen.fill(self.BG_COLOR)
            draw_route.draw_grid(self.screen, self.camera)
            draw_route.draw_route_underlay(self.screen, self.camera, self._route_points)

            arc = snapshot.progress / 100.0 * self.route["total_length"]
            traveled = traveled_polyline(
                self._route_points, self._route_cumulative, arc, snapshot.position
            )
            draw_route.draw_traveled(self.screen, self.camera, traveled)
            if snapshot.congested:
                draw_route.draw_congestion(self.screen, self.camera, self.route["zones"])
            draw_route.draw_stops(
                self.screen, self.camera, self.route["stops"],
                snapshot.reached_stop_ids, self.font_tiny,
            )
            self.draw_bus(self.screen, self.bus_state)

            # HUD layers (drawn on top, unzoomed)
            self.draw_next_stop_card(self.screen, snapshot)
            self.draw_info_panel(self.screen, snapshot, self.route, self.time_seconds)
            self.draw_driver_card(self.screen, self.route)
            if self.show_debug:
                self._draw_debug_overlay(self.screen, snapshot, delta_time)
            if self.paused:
                self._draw_pause_banner(self.screen)
            if self.time_seconds < self._screenshot_flash_until:
                flash = pygame.Surface(
                    (self.width, self.height), pygame.SRCALPHA
                )
                flash.fill((255, 255, 255, 40))
                self.screen.blit(flash, (0, 0))

            pygame.display.flip()

        pygame.quit()


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_pygame_view(
    bridge: Any, width: int = 1200, height: int = 800, fps: int = 60
) -> None:
    view = PygameRouteView(bridge=bridge, width=width, height=height, fps=fps)
    view.run()


if __name__ == "__main__":
    raise SystemExit(
        "pygame_view.py needs a bridge object. Run `python main.py` "
        "or call run_pygame_view(your_bridge)."
    )
