"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import Optional
import numpy as np


@dataclass
class Vector2:
    """Mutable 2D vector owned by a single entity"""
    x: float = 0.0
    y: float = 0.0

    def add(self, other: "Vector2") -> "Vector2":
        self.x += other.x
        self.y += other.y
        return self

    def copy(self) -> "Vector2":
        return Vector2(self.x, self.y)

    @staticmethod
    def from_angle(angle: float, magnitude: float = 1.0) -> "Vector2":
        """Vector pointing along `angle` (radians) with the given length"""
        return Vector2(math.cos(angle) * magnitude, math.sin(angle) * magnitude)

    def limit(self, max_len: float) -> "Vector2":
        """Scale down in place so the length never exceeds max_len"""
        l = math.hypot(self.x, self.y)
        if l > max_len > 0:
            self.x = self.x / l * max_len
            self.y = self.y / l * max_len
        return self


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x2 - x1, y2 - y1)


def rect_overlap(ax, ay, aw, ah, bx, by, bw, bh) -> bool:
    """Open-interval axis-aligned rectangle overlap (touching edges do not count)"""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def point_in_rect(px, py, rx, ry, rw, rh) -> bool:
    """Point strictly inside the rectangle"""
    return rx < px < rx + rw and ry < py < ry + rh


def hitbox_overlap(a, b) -> bool:
    """Rect overlap between two entities using position + hitbox size"""
    return rect_overlap(
        a.pos.x, a.pos.y, a.hitbox_width, a.hitbox_height,
        b.pos.x, b.pos.y, b.hitbox_width, b.hitbox_height,
    )


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
