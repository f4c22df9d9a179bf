#!/usr/bin/env python3
"""Next-stop card, info panel, traffic alert, splash, debug overlay and pause banner (mixin)."""

from __future__ import annotations

from typing import Any, Mapping

import pygame

from .helpers import draw_alpha_rect, render_text


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    # ------------------------------------------------------------------ #
    #  Next stop card (top left)                                           #
    # ------------------------------------------------------------------ #

    def draw_next_stop_card(self, surface: pygame.Surface, snapshot: Any) -> None:
        if self.font_small is None or self.font_tiny is None or self.font_body is None:
            return
        rect = pygame.Rect(16, 16, 260, 72)
        draw_alpha_rect(surface, (*self.HUD_CARD_COLOR, 230), rect, border_radius=12)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, rect, width=1, border_radius=12)

        render_text(surface, self.font_tiny, "NEXT STOP", (rect.x + 14, rect.y + 10), self.HIGHLIGHT_COLOR)
        render_text(surface, self.font_body, snapshot.next_stop.name, (rect.x + 14, rect.y + 26), self.HUD_TEXT_COLOR)
        render_text(
            surface, self.font_tiny, f"{snapshot.eta_minutes} min away",
            (rect.x + 14, rect.y + 50), self.TEXT_COLOR,
        )

    # ------------------------------------------------------------------ #
    #  Bottom info panel                                                   #
    # ------------------------------------------------------------------ #

    def draw_info_panel(
        self, surface: pygame.Surface, snapshot: Any, route: Mapping[str, Any], tick: float
    ) -> None:
        if self.font_small is None or self.font_tiny is None or self.font_body is None:
            return
        panel = pygame.Rect(0, self.height - self.PANEL_HEIGHT, self.width, self.PANEL_HEIGHT)
        pygame.draw.rect(surface, self.HUD_BG_COLOR, panel)
        pygame.draw.line(surface, self.HUD_BORDER_COLOR, panel.topleft, panel.topright, 1)

        # Route title + current street
        title = route.get("title") or route.get("name", "")
        render_text(surface, self.font_body, title, (panel.x + 24, panel.y + 18), self.HUD_TEXT_COLOR)
        render_text(
            surface, self.font_small, snapshot.street_label,
            (panel.x + 24, panel.y + 44), self.TEXT_COLOR,
        )
        render_text(
            surface, self.font_tiny, f"LAP {snapshot.lap + 1}",
            (panel.x + 24, panel.y + 66), self.HUD_MUTED_COLOR,
        )

        # Progress bar with origin / speed / destination labels
        bar_w = min(560, max(200, self.width - 560))
        bar_x = panel.centerx - bar_w // 2 + 60
        bar_y = panel.y + 40
        render_text(
            surface, self.font_tiny, (route.get("origin_label") or "START").upper(),
            (bar_x, bar_y - 20), self.HUD_MUTED_COLOR,
        )
        render_text(
            surface, self.font_tiny, (route.get("destination_label") or "END").upper(),
            (bar_x + bar_w, bar_y - 20), self.HUD_MUTED_COLOR, anchor="topright",
        )
        speed_color = self.ALERT_COLOR if snapshot.congested else self.HIGHLIGHT_COLOR
        render_text(
            surface, self.font_small,
            f"{snapshot.speed_display_units} {snapshot.speed_unit}",
            (bar_x + bar_w // 2, bar_y - 22), speed_color, anchor="midtop",
        )
        track = pygame.Rect(bar_x, bar_y, bar_w, self.PROGRESS_BAR_HEIGHT)
        pygame.draw.rect(surface, self.HUD_CARD_COLOR, track, border_radius=5)
        fill_w = int(bar_w * snapshot.progress / 100.0)
        if fill_w > 0:
            pygame.draw.rect(
                surface, self.HIGHLIGHT_COLOR,
                (bar_x, bar_y, fill_w, self.PROGRESS_BAR_HEIGHT), border_radius=5,
            )
        if route.get("departure"):
            render_text(surface, self.font_small, route["departure"], (bar_x, bar_y + 18), self.HUD_TEXT_COLOR)
            render_text(surface, self.font_tiny, "Departed", (bar_x, bar_y + 36), self.HUD_MUTED_COLOR)
        if route.get("arrival"):
            render_text(
                surface, self.font_small, route["arrival"],
                (bar_x + bar_w, bar_y + 18), self.HUD_TEXT_COLOR, anchor="topright",
            )
            render_text(
                surface, self.font_tiny, "ETA",
                (bar_x + bar_w, bar_y + 36), self.HUD_MUTED_COLOR, anchor="topright",
            )

        if snapshot.alert:
            self._draw_traffic_alert(surface, snapshot, panel, tick)

    def _draw_traffic_alert(
        self, surface: pygame.Surface, snapshot: Any, panel: pygame.Rect, tick: float
    ) -> None:
        rect = pygame.Rect(16, panel.y - 52, min(520, self.width - 32), 40)
        draw_alpha_rect(surface, (*self.ALERT_COLOR, 40), rect, border_radius=10)
        blink_on = int((tick * 1000) // self.HUD_BLINK_MS) % 2 == 0
        border = self.ALERT_COLOR if blink_on else self.HUD_BORDER_COLOR
        pygame.draw.rect(surface, border, rect, width=1, border_radius=10)
        render_text(
            surface, self.font_small, snapshot.alert,
            (rect.x + 14, rect.centery), (254, 215, 170), anchor="midleft",
        )
        if snapshot.delay_minutes:
            render_text(
                surface, self.font_tiny, f"+{snapshot.delay_minutes}m delay",
                (rect.right - 12, rect.centery), self.ALERT_COLOR, anchor="midright",
            )

    # ------------------------------------------------------------------ #
    #  Driver card (bottom right, inside the panel)                        #
    # ------------------------------------------------------------------ #

    def draw_driver_card(self, surface: pygame.Surface, route: Mapping[str, Any]) -> None:
        if not route.get("driver_name") or self.font_small is None or self.font_tiny is None:
            return
        panel_y = self.height - self.PANEL_HEIGHT
        rect = pygame.Rect(self.width - 24 - 230, panel_y + 30, 230, 56)
        draw_alpha_rect(surface, (*self.HUD_CARD_COLOR, 128), rect, border_radius=14)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, rect, width=1, border_radius=14)

        # Avatar with a verified badge
        avatar = (rect.x + 30, rect.centery)
        pygame.draw.circle(surface, self.HUD_MUTED_COLOR, avatar, 18)
        pygame.draw.circle(surface, self.HUD_BORDER_COLOR, avatar, 18, 2)
        initials = "".join(part[0] for part in route["driver_name"].split()[:2]).upper()
        render_text(surface, self.font_tiny, initials, avatar, self.HUD_TEXT_COLOR, anchor="center")
        pygame.draw.circle(surface, self.DRIVER_OK_COLOR, (avatar[0] + 13, avatar[1] + 13), 5)

        render_text(
            surface, self.font_small, route["driver_name"],
            (rect.x + 58, rect.y + 10), self.HUD_TEXT_COLOR,
        )
        render_text(
            surface, self.font_tiny, route.get("vehicle_plate", ""),
            (rect.x + 58, rect.y + 32), self.TEXT_COLOR,
        )

        # Call badge
        call = pygame.Rect(rect.right - 52, rect.y + 10, 40, 36)
        pygame.draw.line(
            surface, self.HUD_BORDER_COLOR,
            (call.x - 10, rect.y + 12), (call.x - 10, rect.bottom - 12), 1,
        )
        pygame.draw.rect(surface, self.DRIVER_CALL_COLOR, call, border_radius=10)
        render_text(surface, self.font_tiny, "CALL", call.center, self.HUD_TEXT_COLOR, anchor="center")

    # ------------------------------------------------------------------ #
    #  Splash screen                                                       #
    # ------------------------------------------------------------------ #

    def _draw_splash(self, surface: pygame.Surface, tick: float) -> None:
        if self.font_title is None or self.font_small is None:
            return
        title = self.font_title.render("LIVE BUS TRACKER", True, (240, 240, 240))
        surface.blit(
            title,
            title.get_rect(center=(self.width // 2, self.height // 2 - 30)),
        )
        if int(tick * 2) % 2 == 0:
            prompt = self.font_small.render("Press any key to start", True, (160, 160, 160))
            surface.blit(
                prompt,
                prompt.get_rect(center=(self.width // 2, self.height // 2 + 20)),
            )
        lines = [
            "SPACE  Pause/Resume",
            "+ / -  Zoom in/out",
            "0      Reset view",
            "F      Follow bus",
            "V      2D / 3D view",
            "R      Restart route",
            "F3     Debug overlay",
            "F12    Screenshot",
        ]
        y = self.height // 2 + 60
        for line in lines:
            t = self.font_tiny.render(line, True, (100, 100, 100)) if self.font_tiny else None
            if t:
                surface.blit(t, t.get_rect(center=(self.width // 2, y)))
                y += 16

    # ------------------------------------------------------------------ #
    #  Debug / FPS overlay                                                 #
    # ------------------------------------------------------------------ #

    def _draw_debug_overlay(
        self, surface: pygame.Surface, snapshot: Any, dt: float
    ) -> None:
        if self.font_tiny is None:
            return
        fps = self.clock.get_fps() if self.clock else 0.0
        lines = [
            f"FPS  {fps:.1f}",
            f"DT   {dt * 1000:.1f} ms",
            f"PROG {snapshot.progress:.2f}",
            f"FAC  {snapshot.speed_factor:.2f}",
            f"HDG  {snapshot.heading_degrees:.1f}",
            f"POS  {snapshot.position.x:.0f},{snapshot.position.y:.0f}",
            f"ZOOM {self.camera.zoom:.1f}x",
            f"VIEW {'3D' if self.camera.tilt_deg else '2D'}",
            f"SIM  {snapshot.elapsed_s:.1f}s",
        ]
        x, y = self.width - 140, 16
        for line in lines:
            text = self.font_tiny.render(line, True, (0, 255, 127))
            surface.blit(text, (x, y))
            y += 14

    # ------------------------------------------------------------------ #
    #  Pause banner                                                        #
    # ------------------------------------------------------------------ #

    def _draw_pause_banner(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 100))
        surface.blit(overlay, (0, 0))
        if self.font_title:
            text = self.font_title.render("PAUSED", True, (220, 220, 220))
            surface.blit(text, text.get_rect(center=(self.width // 2, self.height // 2)))
