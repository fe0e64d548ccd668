"""
Explosion and screen effects.

Every destroyable entity produces a deterministic list of ExplosionEffect
descriptors: one main blast plus a type-specific set of ripples. The tables
below are the visual-timing contract for each entity type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .utils import Vector2

Color = Tuple[int, ...]


@dataclass
class ExplosionEffect:
    """Expanding, fading circle drawn with an outer and an inner color"""
    pos: Vector2
    radius: float = 10.0
    color: Color = (255, 100, 0)
    secondary_color: Color = (255, 200, 0)
    alpha: float = 1.0
    growth_rate: float = 2.0
    fade_rate: float = 5.0
    finished: bool = False

    def __post_init__(self):
        self.max_alpha = self.alpha

    def update(self):
        if self.finished:
            return
        self.radius += self.growth_rate
        self.alpha -= self.fade_rate / 255
        if self.alpha <= 0:
            self.alpha = 0.0
            self.finished = True


@dataclass
class Burst:
    """Simple expanding ring, used for the power-up pickup"""
    pos: Vector2
    size: float = 50.0
    alpha: float = 255.0
    color: Color = (255, 200, 100)
    finished: bool = False

    def update(self):
        self.size += 5
        self.alpha -= 10
        if self.alpha <= 0:
            self.finished = True


@dataclass
class ScreenFlash:
    """Full-screen red flash shown when the player is hit"""
    alpha: float = 100.0
    fade_speed: float = 5.0
    finished: bool = False

    def update(self):
        self.alpha -= self.fade_speed
        if self.alpha <= 0:
            self.finished = True


def regular_explosion(cx: float, cy: float, color: Color, secondary: Color) -> List[ExplosionEffect]:
    """Main blast + 3 ripples with decreasing opacity"""
    effects = [ExplosionEffect(Vector2(cx, cy), 15, color, secondary, 1.0, 2.5, 5)]
    for i in range(1, 4):
        effects.append(ExplosionEffect(
            Vector2(cx, cy),
            10 + i * 8,
            color,
            secondary,
            0.7 - i * 0.15,
            3 + i * 0.5,
            4,
        ))
    return effects


def swarm_explosion(cx: float, cy: float, color: Color, secondary: Color) -> List[ExplosionEffect]:
    """Main blast + 2 gentler ripples"""
    effects = [ExplosionEffect(Vector2(cx, cy), 15, color, secondary, 1.0, 2.5, 5)]
    for i in range(1, 3):
        effects.append(ExplosionEffect(
            Vector2(cx, cy),
            10 + i * 8,
            color,
            secondary,
            0.7 - i * 0.2,
            2.5 + i * 0.5,
            4,
        ))
    return effects


def kamikaze_explosion(cx: float, cy: float, color: Color, secondary: Color) -> List[ExplosionEffect]:
    """Regular set with an extra large, slow-fading ripple on top"""
    effects = regular_explosion(cx, cy, color, secondary)
    effects.append(ExplosionEffect(Vector2(cx, cy), 25, color, secondary, 0.4, 4, 3))
    return effects


def boss_explosion(cx: float, cy: float, color: Color, secondary: Color) -> List[ExplosionEffect]:
    """Large main blast + 5 wide ripples with variable fade rates"""
    effects = [ExplosionEffect(Vector2(cx, cy), 30, color, secondary, 1.0, 3, 3)]
    for i in range(1, 6):
        effects.append(ExplosionEffect(
            Vector2(cx, cy),
            20 + i * 15,
            color,
            secondary,
            0.8 - i * 0.12,
            3 + i * 0.4,
            2 + i * 0.5,
        ))
    return effects


MINE_COLOR = (255, 100, 0)
MINE_SECONDARY_COLOR = (255, 200, 0)


def mine_explosion(cx: float, cy: float) -> List[ExplosionEffect]:
    effects = [ExplosionEffect(Vector2(cx, cy), 20, MINE_COLOR, MINE_SECONDARY_COLOR, 1.0, 3, 4)]
    for i in range(1, 4):
        effects.append(ExplosionEffect(
            Vector2(cx, cy),
            15 + i * 10,
            MINE_COLOR,
            MINE_SECONDARY_COLOR,
            0.7 - i * 0.15,
            3.5 + i * 0.5,
            4,
        ))
    return effects
