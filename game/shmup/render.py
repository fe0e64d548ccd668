"""
Arcade window that draws a Simulation with primitive shapes.

The simulation uses screen coordinates (y down); arcade's origin is the
bottom-left corner, so every y is flipped here.
"""

from __future__ import annotations

import math

import arcade

from .entities import ProjectileKind
from .explosions import Burst, ExplosionEffect, ScreenFlash
from .simulation import GameState, Simulation


class ShmupWindow(arcade.Window):
    """Arcade window for rendering the simulation state"""

    def __init__(self, sim: Simulation, width: int, height: int):
        super().__init__(width, height, "JDV-Type - Arcade")
        self.sim = sim

        self.BG = (5, 5, 18)
        self.BAND_C = (20, 20, 45)
        self.PLAYER_C = (100, 150, 255)
        self.DAMAGE_C = (255, 50, 50)
        self.BULLET_C = (255, 255, 255)
        self.MINE_C = (255, 0, 0)
        self.POWER_UP_C = (255, 255, 255)
        self.HUD_C = (220, 220, 220)

    def _y(self, y: float) -> float:
        return self.height - y

    def on_draw(self):
        """Draw the current simulation state"""
        self.clear()
        arcade.set_background_color(self.BG)
        sim = self.sim

        # Scrolling bands stand in for the level backdrop
        band_w = sim.background.display_width / 8
        for i in range(10):
            left = sim.background.x + i * band_w * 2
            arcade.draw_lrbt_rectangle_filled(
                left, left + band_w, 0, self.height, self.BAND_C
            )

        for p in sim.power_ups:
            cx = p.pos.x + p.display_width / 2
            cy = p.pos.y + p.display_height / 2
            arcade.draw_circle_filled(cx, self._y(cy), p.display_width / 2, self.POWER_UP_C)

        for e in sim.enemies:
            cx, cy = e.center
            color = e.tint[:3] if e.tint else e.explosion_color
            arcade.draw_circle_filled(cx, self._y(cy), e.display_width / 2, color)
            # Heading tick shows the visual rotation
            r = e.display_width / 2
            arcade.draw_line(
                cx, self._y(cy),
                cx + math.cos(e.rotation) * r, self._y(cy + math.sin(e.rotation) * r),
                e.explosion_secondary_color, 2,
            )

        for b in sim.player_bullets:
            arcade.draw_lrbt_rectangle_filled(
                b.pos.x, b.pos.x + 10, self._y(b.pos.y + 5), self._y(b.pos.y), self.BULLET_C
            )

        for p in sim.enemy_projectiles:
            if p.kind is ProjectileKind.MINE:
                if p.detonated:
                    arcade.draw_circle_filled(p.pos.x, self._y(p.pos.y), p.detonation_radius, (255, 100, 0, 150))
                    arcade.draw_circle_filled(p.pos.x, self._y(p.pos.y), p.detonation_radius / 2, (255, 200, 0, 100))
                else:
                    arcade.draw_circle_filled(p.pos.x, self._y(p.pos.y), p.radius / 2, self.MINE_C)
            else:
                arcade.draw_circle_filled(p.pos.x, self._y(p.pos.y), 3, self.BULLET_C)

        player = sim.player
        pcx = player.pos.x + player.display_width / 2
        pcy = player.pos.y + player.display_height / 2
        arcade.draw_circle_filled(
            pcx, self._y(pcy), player.display_width / 2,
            self.DAMAGE_C if player.is_damaged else self.PLAYER_C,
        )

        for fx in sim.effects:
            self._draw_effect(fx)

        if sim.transition_alpha > 0:
            arcade.draw_lrbt_rectangle_filled(
                0, self.width, 0, self.height, (0, 0, 0, int(sim.transition_alpha))
            )

        txt = (f"SCORE: {sim.score}  HIGH: {sim.high_score}  LIVES: {sim.lives}  "
               f"LEVEL: {sim.level}  WAVE: {sim.wave_number}")
        arcade.draw_text(txt, 12, self.height - 24, self.HUD_C, 14)
        if sim.state is not GameState.PLAYING:
            arcade.draw_text(
                sim.state.value.replace("_", " ").upper(),
                self.width / 2, self.height / 2, self.HUD_C, 32, anchor_x="center",
            )

    def _draw_effect(self, fx):
        if isinstance(fx, ExplosionEffect):
            a = int(fx.alpha * 255)
            x, y = fx.pos.x, self._y(fx.pos.y)
            arcade.draw_circle_filled(x, y, fx.radius, (*fx.color[:3], a))
            arcade.draw_circle_filled(x, y, fx.radius / 2, (*fx.secondary_color[:3], int(a * 0.8)))
        elif isinstance(fx, Burst):
            arcade.draw_circle_filled(
                fx.pos.x, self._y(fx.pos.y), fx.size / 2, (*fx.color[:3], max(0, int(fx.alpha)))
            )
        elif isinstance(fx, ScreenFlash) and fx.alpha > 0:
            arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, (255, 0, 0, int(fx.alpha)))
