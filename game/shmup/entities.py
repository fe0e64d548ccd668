"""
Game entity dataclasses: projectiles, player ship, power-up, background
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .config import PLAYER_CONFIG, PLAYFIELD, POWER_UP_CONFIG
from .explosions import ExplosionEffect, mine_explosion
from .utils import Vector2, clamp, distance


class ProjectileKind(str, Enum):
    BULLET = "bullet"
    MINE = "mine"


@dataclass
class Bullet:
    """Point projectile moving linearly until it leaves the playfield"""
    pos: Vector2
    vel: Vector2
    alive: bool = True
    kind: ProjectileKind = field(default=ProjectileKind.BULLET, init=False)

    def update(self, now: float = 0.0) -> bool:
        self.pos.add(self.vel)
        return False

    def is_off_screen(self, width: float = PLAYFIELD["width"], height: float = PLAYFIELD["height"]) -> bool:
        return self.pos.x < 0 or self.pos.x > width or self.pos.y < 0 or self.pos.y > height


@dataclass
class Mine:
    """
    Stationary hazard with a timed fuse.

    armed -> (now - created_at > fuse) -> detonating, radius grows every tick
    -> spent once the radius passes max_detonation_radius.
    """
    pos: Vector2
    vel: Vector2
    created_at: float
    fuse: float = 3000
    radius: float = 10.0
    detonated: bool = False
    detonation_radius: float = 0.0
    max_detonation_radius: float = 100.0
    growth_step: float = 5.0
    hit_player: bool = False
    alive: bool = True
    kind: ProjectileKind = field(default=ProjectileKind.MINE, init=False)

    def update(self, now: float) -> bool:
        """Advance one tick; True means the mine is spent and must be removed"""
        self.pos.add(self.vel)

        if not self.detonated and now - self.created_at > self.fuse:
            self.detonated = True

        if self.detonated:
            self.detonation_radius += self.growth_step
            if self.detonation_radius > self.max_detonation_radius:
                return True
        return False

    def is_off_screen(self, width: float = PLAYFIELD["width"], height: float = PLAYFIELD["height"]) -> bool:
        r = self.radius
        return self.pos.x < -r or self.pos.x > width + r or self.pos.y < -r or self.pos.y > height + r

    def check_collision(self, target) -> bool:
        # No contact damage while armed
        if not self.detonated:
            return False
        cx = target.pos.x + target.display_width / 2
        cy = target.pos.y + target.display_height / 2
        d = distance(self.pos.x, self.pos.y, cx, cy)
        return d < self.detonation_radius + (target.hitbox_width + target.hitbox_height) / 4

    def create_explosion(self) -> List[ExplosionEffect]:
        return mine_explosion(self.pos.x, self.pos.y)


@dataclass
class Controls:
    """Per-tick control state, already polled by the shell"""
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    rotate_ccw: bool = False
    rotate_cw: bool = False
    shoot: bool = False


@dataclass
class PlayerShip:
    """Player ship with inertia, free rotation and a shot cooldown"""
    arena_width: float = PLAYFIELD["width"]
    arena_height: float = PLAYFIELD["height"]
    pos: Vector2 = None  # type: ignore
    vel: Vector2 = field(default_factory=Vector2)
    display_width: float = PLAYER_CONFIG["display_size"]
    display_height: float = PLAYER_CONFIG["display_size"]
    hitbox_width: float = PLAYER_CONFIG["hitbox_size"]
    hitbox_height: float = PLAYER_CONFIG["hitbox_size"]
    rotation: float = 0.0
    shoot_interval: float = PLAYER_CONFIG["shoot_interval"]
    last_shot_time: float = -math.inf
    is_damaged: bool = False
    damage_time: float = 0.0

    def __post_init__(self):
        if self.pos is None:
            self.pos = Vector2(PLAYER_CONFIG["start_x"], self.arena_height / 2)

    def reset_position(self):
        self.pos = Vector2(PLAYER_CONFIG["start_x"], self.arena_height / 2)
        self.vel = Vector2()

    def move(self, controls: Controls, now: float):
        cfg = PLAYER_CONFIG

        if controls.rotate_ccw:
            self.rotation -= cfg["rotation_speed"]
        if controls.rotate_cw:
            self.rotation += cfg["rotation_speed"]

        ax, ay = 0.0, 0.0
        if controls.left:
            ax -= cfg["acceleration"]
        if controls.right:
            ax += cfg["acceleration"]
        if controls.up:
            ay -= cfg["acceleration"]
        if controls.down:
            ay += cfg["acceleration"]

        self.vel.x += ax
        self.vel.y += ay
        self.vel.limit(cfg["max_speed"])

        if ax == 0:
            self.vel.x *= cfg["friction"]
        if ay == 0:
            self.vel.y *= cfg["friction"]

        if abs(self.vel.x) < cfg["stop_threshold"]:
            self.vel.x = 0.0
        if abs(self.vel.y) < cfg["stop_threshold"]:
            self.vel.y = 0.0

        self.pos.add(self.vel)

        max_x = self.arena_width - self.display_width
        max_y = self.arena_height - self.display_height
        self.pos.x = clamp(self.pos.x, 0, max_x)
        self.pos.y = clamp(self.pos.y, 0, max_y)

        # Stop dead against a wall
        if self.pos.x <= 0 or self.pos.x >= max_x:
            self.vel.x = 0.0
        if self.pos.y <= 0 or self.pos.y >= max_y:
            self.vel.y = 0.0

        if self.is_damaged and now - self.damage_time > cfg["damage_flash_duration"]:
            self.is_damaged = False

    def shoot(self, now: float) -> Optional[Bullet]:
        if now - self.last_shot_time <= self.shoot_interval:
            return None
        cx = self.pos.x + self.display_width / 2
        cy = self.pos.y + self.display_height / 2
        offset = Vector2.from_angle(self.rotation, self.display_width / 2)
        self.last_shot_time = now
        return Bullet(
            Vector2(cx + offset.x, cy + offset.y),
            Vector2.from_angle(self.rotation, PLAYER_CONFIG["bullet_speed"]),
        )

    def take_damage(self, now: float):
        """Start the damage flash; life accounting belongs to the simulation"""
        self.is_damaged = True
        self.damage_time = now


@dataclass
class PowerUp:
    """Invulnerability + rapid fire pickup drifting slowly to the left"""
    pos: Vector2
    vel: Vector2 = field(default_factory=lambda: Vector2(-POWER_UP_CONFIG["speed"], 0.0))
    display_width: float = POWER_UP_CONFIG["size"]
    display_height: float = POWER_UP_CONFIG["size"]
    hitbox_width: float = POWER_UP_CONFIG["size"]
    hitbox_height: float = POWER_UP_CONFIG["size"]
    rotation: float = 0.0
    rotation_speed: float = POWER_UP_CONFIG["rotation_speed"]

    def update(self) -> bool:
        """Advance one tick; True when it has drifted off the left edge"""
        self.pos.add(self.vel)
        self.rotation += self.rotation_speed
        return self.is_off_screen()

    def is_off_screen(self) -> bool:
        return self.pos.x < -self.display_width


@dataclass
class Background:
    """Scroll offset and vertical parallax for the level backdrop"""
    arena_height: float = PLAYFIELD["height"]
    display_width: float = PLAYFIELD["width"] * 1.05
    speed: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self):
        self.display_height = self.arena_height * 1.05
        self.y = -self.display_height * 0.025

    def update(self, player: Optional[PlayerShip] = None):
        self.x -= self.speed
        if self.x <= -self.display_width:
            self.x += self.display_width
        if player is not None:
            self.y = -self.display_height * 0.05 * (player.pos.y / self.arena_height)
