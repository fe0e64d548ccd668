"""
Enemy behaviors
---------------
Six regular variants and one boss, all sharing the Enemy base:

- WaveEnemy       sinusoidal vertical offset around its spawn line
- ShooterEnemy    slow drift, aimed shot every 2s
- KamikazeEnemy   drifts, then charges along a locked heading
- SwarmEnemy      5-strong train following a figure-8 path
- TurretEnemy     near stationary, cycles three bullet patterns
- MinelayerEnemy  zigzag, drops mines
- BossEnemy       three health-keyed phases, one per level

Every `update(now, frame)` returns a (possibly empty) list of projectiles.
`now` is the tick time in ms, `frame` the tick counter; neither is read from
a clock here.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar, List, Optional, Tuple, Union

from .config import LEVEL_CONFIG, PLAYFIELD, WAVE_CONFIG
from .entities import Bullet, Mine, PlayerShip
from .explosions import (
    Color,
    ExplosionEffect,
    boss_explosion,
    kamikaze_explosion,
    regular_explosion,
    swarm_explosion,
)
from .utils import Vector2, clamp, distance

logger = logging.getLogger(__name__)

BOSS_TYPE_BASE = 100
MINELAYER_SCORE_TYPE = 7


class EnemyKind(IntEnum):
    WAVE = 1
    SHOOTER = 2
    KAMIKAZE = 3
    SWARM = 4
    TURRET = 5
    MINELAYER = 6
    BOSS = BOSS_TYPE_BASE


class Category(str, Enum):
    REGULAR = "regular"
    BOSS = "boss"


Projectile = Union[Bullet, Mine]


@dataclass
class Enemy:
    """Shared state and default behavior: drift left, no weapon"""
    pos: Vector2
    player: PlayerShip  # read-only, used for aiming
    speed: float = 2.0
    display_width: float = 64
    display_height: float = 64
    hitbox_width: float = 50
    hitbox_height: float = 50
    health: int = 1
    rotation: float = 0.0
    tint: Optional[Color] = None
    explosion_color: Color = (255, 255, 255)
    explosion_secondary_color: Color = (200, 200, 200)

    kind: ClassVar[EnemyKind] = EnemyKind.WAVE
    category: ClassVar[Category] = Category.REGULAR

    def __post_init__(self):
        if self.player is None:
            raise ValueError(f"{type(self).__name__} needs a player to track")
        self.start = self.pos.copy()

    @property
    def alive(self) -> bool:
        return self.health > 0

    @property
    def type_code(self) -> int:
        return int(self.kind)

    @property
    def center(self) -> Tuple[float, float]:
        return self.pos.x + self.display_width / 2, self.pos.y + self.display_height / 2

    def update(self, now: float, frame: int) -> List[Projectile]:
        self.pos.x -= self.speed
        return []

    def take_damage(self, amount: float) -> bool:
        """Lower health; True when this hit leaves health at or below zero"""
        self.health -= amount
        return self.health <= 0

    def is_off_screen(self) -> bool:
        # Only the left edge despawns regular enemies
        return self.pos.x < -self.display_width

    def create_explosion(self) -> List[ExplosionEffect]:
        cx, cy = self.center
        return regular_explosion(cx, cy, self.explosion_color, self.explosion_secondary_color)

    def _bullet_from_center(self, vel: Vector2) -> Bullet:
        cx, cy = self.center
        return Bullet(Vector2(cx, cy), vel)

    def _angle_to_player(self) -> float:
        return math.atan2(self.player.pos.y - self.pos.y, self.player.pos.x - self.pos.x)


@dataclass
class WaveEnemy(Enemy):
    amplitude: float = 50.0
    frequency: float = 0.02
    phase: float = 0.0
    explosion_color: Color = (255, 0, 0)
    explosion_secondary_color: Color = (200, 50, 50)

    kind: ClassVar[EnemyKind] = EnemyKind.WAVE

    def update(self, now, frame):
        self.pos.x -= self.speed
        travelled = self.start.x - self.pos.x
        self.pos.y = self.start.y + self.amplitude * math.sin(self.frequency * travelled + self.phase)
        return []


@dataclass
class ShooterEnemy(Enemy):
    health: int = 2
    display_width: float = 70
    display_height: float = 70
    hitbox_width: float = 55
    hitbox_height: float = 55
    shoot_interval: float = 2000
    last_shot_time: float = 0.0
    bullet_speed: float = 5.0
    explosion_color: Color = (255, 127, 0)
    explosion_secondary_color: Color = (200, 100, 0)

    kind: ClassVar[EnemyKind] = EnemyKind.SHOOTER

    def update(self, now, frame):
        self.pos.x -= self.speed * 0.8
        self.rotation = self._angle_to_player() + math.pi / 2

        if now - self.last_shot_time > self.shoot_interval:
            self.last_shot_time = now
            return self.shoot()
        return []

    def shoot(self) -> List[Projectile]:
        return [self._bullet_from_center(Vector2.from_angle(self._angle_to_player(), self.bullet_speed))]


@dataclass
class KamikazeEnemy(Enemy):
    display_width: float = 60
    display_height: float = 60
    hitbox_width: float = 45
    hitbox_height: float = 45
    charge_speed: float = 8.0
    charge_distance: float = 300.0
    charge_tint: Color = (255, 100, 100, 255)
    is_charging: bool = False
    heading: float = math.pi
    explosion_color: Color = (255, 255, 0)
    explosion_secondary_color: Color = (200, 200, 0)

    kind: ClassVar[EnemyKind] = EnemyKind.KAMIKAZE

    def update(self, now, frame):
        if not self.is_charging:
            d = distance(self.pos.x, self.pos.y, self.player.pos.x, self.player.pos.y)
            if d < self.charge_distance:
                self.is_charging = True
                self.heading = self._angle_to_player()
                self.rotation = self.heading
                self.tint = self.charge_tint

        if self.is_charging:
            self.pos.x += math.cos(self.heading) * self.charge_speed
            self.pos.y += math.sin(self.heading) * self.charge_speed
        else:
            self.pos.x -= self.speed
        return []

    def create_explosion(self):
        cx, cy = self.center
        return kamikaze_explosion(cx, cy, self.explosion_color, self.explosion_secondary_color)


@dataclass
class SwarmEnemy(Enemy):
    formation_index: int = 0
    speed: float = 3.0
    path_time: float = 0.0
    path_speed: float = 0.02
    loop_height: float = 150.0
    explosion_color: Color = (0, 255, 0)
    explosion_secondary_color: Color = (0, 200, 50)

    kind: ClassVar[EnemyKind] = EnemyKind.SWARM

    def update(self, now, frame):
        self.path_time += self.path_speed
        t = self.path_time

        self.pos.x -= self.speed
        # Figure-8: the path crosses itself once per loop
        self.pos.y = self.start.y + self.loop_height * math.sin(t) * math.cos(t * 0.5)

        dy = self.loop_height * (math.cos(t) * math.cos(t * 0.5) - 0.5 * math.sin(t) * math.sin(t * 0.5))
        self.rotation = math.atan2(dy, -self.speed) + math.pi / 2
        return []

    def create_explosion(self):
        cx, cy = self.center
        return swarm_explosion(cx, cy, self.explosion_color, self.explosion_secondary_color)


@dataclass
class TurretEnemy(Enemy):
    health: int = 3
    speed: float = 1.0
    display_width: float = 80
    display_height: float = 80
    hitbox_width: float = 65
    hitbox_height: float = 65
    shoot_interval: float = 1500
    last_shot_time: float = 0.0
    bullet_pattern: int = 0
    rotation_speed: float = 0.01
    explosion_color: Color = (0, 0, 255)
    explosion_secondary_color: Color = (50, 50, 200)

    kind: ClassVar[EnemyKind] = EnemyKind.TURRET

    def update(self, now, frame):
        self.pos.x -= self.speed * 0.5
        self.rotation += self.rotation_speed

        if now - self.last_shot_time > self.shoot_interval:
            self.last_shot_time = now
            self.bullet_pattern = (self.bullet_pattern + 1) % 3
            return self.shoot()
        return []

    def shoot(self) -> List[Projectile]:
        x = self.pos.x
        y = self.pos.y + self.display_height / 2

        if self.bullet_pattern == 0:
            # 3-way spread
            return [
                Bullet(Vector2(x, y), Vector2.from_angle(math.pi + a, 5))
                for a in (-math.pi / 6, 0.0, math.pi / 6)
            ]
        if self.bullet_pattern == 1:
            # vertical line
            return [Bullet(Vector2(x, y + off), Vector2(-5, 0)) for off in (-30, 0, 30)]
        return [Bullet(Vector2(x, y), Vector2(-8, 0))]


@dataclass
class MinelayerEnemy(Enemy):
    speed: float = 3.0
    display_width: float = 70
    display_height: float = 70
    hitbox_width: float = 55
    hitbox_height: float = 55
    drop_interval: float = 1000
    last_drop_time: float = 0.0
    tint: Optional[Color] = (255, 255, 150, 255)
    explosion_color: Color = (143, 0, 255)
    explosion_secondary_color: Color = (120, 0, 200)

    kind: ClassVar[EnemyKind] = EnemyKind.MINELAYER

    @property
    def type_code(self) -> int:
        # Spawned as kind 6, scored as type 7
        return MINELAYER_SCORE_TYPE

    def update(self, now, frame):
        self.pos.x -= self.speed
        self.pos.y = self.start.y + math.sin(frame * 0.1) * 50
        self.rotation = math.atan2(math.cos(frame * 0.1) * 50 * 0.1, -self.speed) + math.pi / 2

        if now - self.last_drop_time > self.drop_interval:
            self.last_drop_time = now
            return [self.drop_mine(now)]
        return []

    def drop_mine(self, now: float) -> Mine:
        cx, cy = self.center
        return Mine(Vector2(cx, cy), Vector2(0, 0), created_at=now)


PHASE_TINTS: Tuple[Optional[Color], ...] = (
    None,
    (150, 150, 255, 255),
    (255, 100, 100, 255),
)
PHASE_SHOOT_INTERVALS = (1000, 800, 500)


@dataclass
class BossEnemy(Enemy):
    """
    Level boss with three phases.

    Motion and fire pattern follow the health band (>15, >10, <=10).
    The phase index, which drives the shot interval and tint, only moves
    forward inside take_damage and by at most one step per call.
    """
    level: int = 1
    arena_width: float = PLAYFIELD["width"]
    arena_height: float = PLAYFIELD["height"]
    health: int = 20
    speed: float = 1.0
    display_width: float = 196
    display_height: float = 196
    hitbox_width: float = 100
    hitbox_height: float = 100
    phase: int = 0
    shoot_interval: float = PHASE_SHOOT_INTERVALS[0]
    last_shot_time: float = 0.0
    has_reached_center: bool = False
    explosion_color: Color = (75, 0, 130)
    explosion_secondary_color: Color = (60, 0, 100)

    kind: ClassVar[EnemyKind] = EnemyKind.BOSS
    category: ClassVar[Category] = Category.BOSS

    def __post_init__(self):
        super().__post_init__()
        if self.level < 1:
            raise ValueError(f"boss level must be >= 1, got {self.level}")
        self.target_x = self.arena_width / 2
        self.target_y = self.arena_height / 2
        self.tint = PHASE_TINTS[self.phase]

    @property
    def type_code(self) -> int:
        return BOSS_TYPE_BASE + self.level

    def update(self, now, frame):
        if self.health > 15:
            self._glide_and_bob(frame)
        elif self.health > 10:
            self._circle(frame)
        else:
            self._erratic(frame)

        if now - self.last_shot_time > self.shoot_interval:
            self.last_shot_time = now
            return self.shoot(frame)
        return []

    def _glide_and_bob(self, frame: int):
        if not self.has_reached_center:
            dist_x = self.target_x - self.pos.x
            dist_y = self.target_y - self.pos.y
            if abs(dist_x) > 5:
                self.pos.x += dist_x * 0.05
            if abs(dist_y) > 5:
                self.pos.y += dist_y * 0.05
            if abs(dist_x) < 5 and abs(dist_y) < 5:
                self.has_reached_center = True
        else:
            self.pos.y += (self.target_y - self.pos.y) * 0.05
            if abs(self.pos.y - self.target_y) < 10:
                self.target_y = random.uniform(100, self.arena_height - 100)
        self.rotation = math.sin(frame * 0.02) * 0.2

    def _circle(self, frame: int):
        angle = frame * 0.02
        self.pos.x = self.target_x + math.cos(angle) * 100
        self.pos.y = self.arena_height / 2 + math.sin(angle) * 100
        self.rotation = angle + math.pi / 2

    def _erratic(self, frame: int):
        self.pos.x += math.sin(frame * 0.1) * 3
        self.pos.y += math.cos(frame * 0.13) * 3
        self.pos.x = clamp(self.pos.x, self.target_x - 150, self.target_x + 150)
        self.pos.y = clamp(self.pos.y, 50, self.arena_height - 50)
        self.rotation = math.sin(frame * 0.1) * 0.5

    def shoot(self, frame: int) -> List[Projectile]:
        if self.health > 15:
            return [self._bullet_from_center(Vector2.from_angle(self._angle_to_player(), 6))]
        if self.health > 10:
            # spiral, rotating with the frame counter
            return [
                self._bullet_from_center(Vector2.from_angle(frame * 0.1 + i * 2 * math.pi / 8, 4))
                for i in range(8)
            ]
        return [
            self._bullet_from_center(
                Vector2.from_angle(random.uniform(-math.pi, math.pi), random.uniform(3, 7))
            )
            for _ in range(5)
        ]

    def take_damage(self, amount: float) -> bool:
        self.health -= amount

        # A single hit advances at most one phase
        if self.health <= 15 and self.phase == 0:
            self._enter_phase(1)
        elif self.health <= 10 and self.phase == 1:
            self._enter_phase(2)

        return self.health <= 0

    def _enter_phase(self, phase: int):
        self.phase = phase
        self.shoot_interval = PHASE_SHOOT_INTERVALS[phase]
        self.tint = PHASE_TINTS[phase]
        logger.debug("Boss level %d entered phase %d (health=%s)", self.level, phase, self.health)

    def create_explosion(self):
        cx, cy = self.center
        return boss_explosion(cx, cy, self.explosion_color, self.explosion_secondary_color)


def create_enemy(
    type_code: int,
    x: float,
    y: float,
    player: PlayerShip,
    now: float = 0.0,
    arena_width: float = PLAYFIELD["width"],
    arena_height: float = PLAYFIELD["height"],
) -> List[Enemy]:
    """
    Build the enemies for one spawn request.

    Swarm requests produce the whole 5-strong train; every other type
    produces one enemy. Codes 101..(100 + max level) build that level's boss;
    any other unknown code falls back to a default wave enemy. `player` is
    required: aiming and charging read its position.
    """
    pos = Vector2(x, y)

    if type_code == EnemyKind.WAVE:
        return [WaveEnemy(
            pos,
            player,
            amplitude=random.uniform(30, 80),
            frequency=random.uniform(0.01, 0.05),
            phase=random.uniform(0, 2 * math.pi),
        )]
    if type_code == EnemyKind.SHOOTER:
        return [ShooterEnemy(pos, player, last_shot_time=now)]
    if type_code == EnemyKind.KAMIKAZE:
        return [KamikazeEnemy(pos, player)]
    if type_code == EnemyKind.SWARM:
        return [
            SwarmEnemy(
                Vector2(x + i * 80, y),
                player,
                formation_index=i,
                path_time=i * math.pi / 3,
            )
            for i in range(WAVE_CONFIG["swarm_size"])
        ]
    if type_code == EnemyKind.TURRET:
        return [TurretEnemy(pos, player, last_shot_time=now)]
    if type_code == EnemyKind.MINELAYER:
        return [MinelayerEnemy(pos, player, last_drop_time=now)]
    if BOSS_TYPE_BASE < type_code <= BOSS_TYPE_BASE + LEVEL_CONFIG["max_level"]:
        return [create_boss(type_code - BOSS_TYPE_BASE, player, now, arena_width, arena_height, x, y)]

    logger.debug("Unknown enemy type %r, spawning default wave enemy", type_code)
    return [WaveEnemy(pos, player)]


def create_boss(
    level: int,
    player: PlayerShip,
    now: float = 0.0,
    arena_width: float = PLAYFIELD["width"],
    arena_height: float = PLAYFIELD["height"],
    x: Optional[float] = None,
    y: Optional[float] = None,
) -> BossEnemy:
    """Boss for `level`, entering from beyond the right edge by default"""
    if x is None:
        x = arena_width + 100
    if y is None:
        y = arena_height / 2
    return BossEnemy(
        Vector2(x, y),
        player,
        level=level,
        arena_width=arena_width,
        arena_height=arena_height,
        last_shot_time=now,
    )
