"""
Wave composition and pacing.

The live roster is always passed in; nothing here keeps a reference to it.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Iterable, List

from .config import PLAYFIELD, WAVE_CONFIG
from .enemies import Category, Enemy, EnemyKind, create_boss, create_enemy
from .entities import PlayerShip

logger = logging.getLogger(__name__)


def has_boss(roster: Iterable[Enemy]) -> bool:
    return any(e.category is Category.BOSS for e in roster)


def count_kind(roster: Iterable[Enemy], kind: EnemyKind) -> int:
    return sum(1 for e in roster if e.kind == kind)


def wave_interval(difficulty: float) -> float:
    """Time between waves, shrinking with difficulty down to a floor"""
    cfg = WAVE_CONFIG
    return max(cfg["min_interval"], cfg["base_interval"] - difficulty * cfg["interval_per_difficulty"])


def eligible_types(difficulty: float) -> List[EnemyKind]:
    types = [EnemyKind.WAVE]
    if difficulty >= 1:
        types.append(EnemyKind.SHOOTER)
    if difficulty >= 2:
        types += [EnemyKind.KAMIKAZE, EnemyKind.SWARM]
    if difficulty >= 3:
        types += [EnemyKind.TURRET, EnemyKind.MINELAYER]
    return types


def spawn_wave(
    difficulty: float,
    level: int,
    boss_defeated: bool,
    player: PlayerShip,
    roster: List[Enemy],
    now: float = 0.0,
    width: float = PLAYFIELD["width"],
    height: float = PLAYFIELD["height"],
) -> List[Enemy]:
    """
    Enemies for the next wave.

    - nothing while a boss is on the field
    - the level boss alone once difficulty reaches the boss threshold
    - otherwise 3..(6 + difficulty) slots of eligible regular types; a swarm
      fills 5 slots at once and turrets are re-rolled past the cap
    """
    cfg = WAVE_CONFIG

    if has_boss(roster):
        return []

    if not boss_defeated and difficulty >= cfg["boss_difficulty"]:
        logger.debug("Spawning level %d boss at difficulty %.1f", level, difficulty)
        return [create_boss(level, player, now, width, height)]

    num_slots = int(random.uniform(3, 6 + difficulty))
    types = eligible_types(difficulty)
    turret_count = count_kind(roster, EnemyKind.TURRET)
    margin = cfg["spawn_margin"]

    new_enemies: List[Enemy] = []
    slot = 0
    while slot < num_slots:
        kind = random.choice(types)
        if kind == EnemyKind.TURRET and turret_count >= cfg["max_turrets"]:
            continue

        x = width + slot * cfg["spawn_spacing"]
        y = random.uniform(margin, height - margin)
        group = create_enemy(kind, x, y, player, now, width, height)
        new_enemies += group

        if kind == EnemyKind.TURRET:
            turret_count += 1
        slot += len(group)

    logger.debug("Spawned wave of %d enemies (difficulty %.1f)", len(new_enemies), difficulty)
    return new_enemies


@dataclass
class WaveState:
    """Difficulty ramp and wave timer"""
    difficulty: float = 0.0
    last_wave_time: float = 0.0
    interval: float = WAVE_CONFIG["base_interval"]

    @property
    def wave_number(self) -> int:
        return math.floor(self.difficulty * 2 + 1)

    def due(self, now: float) -> bool:
        return now - self.last_wave_time > self.interval

    def advance(self, now: float):
        """Record a wave at `now` and ramp difficulty for the next one"""
        self.last_wave_time = now
        self.difficulty += WAVE_CONFIG["difficulty_step"]
        self.interval = wave_interval(self.difficulty)

    def reset(self, now: float):
        self.difficulty = 0.0
        self.last_wave_time = now
        self.interval = WAVE_CONFIG["base_interval"]
