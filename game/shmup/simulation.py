"""
Simulation - per-tick update and combat resolution
--------------------------------------------------
Owns every live collection (enemies, player bullets, enemy projectiles,
power-ups, effects) and advances them in a fixed order:

1. background + player (controls), power-up timer
2. time-gated wave spawn
3. player bullets, then enemy projectiles
4. enemies (emitted projectiles are collected)
5. power-ups and effects
6. collisions: player bullets x enemies -> player x power-ups
   -> enemy projectiles x player -> enemies x player
7. level transition / end-state checks

Each collision pass prunes what it destroyed before the next pass runs, so
an enemy shot down this tick can never also ram the player this tick.
Time is injected: `step(now, controls)` takes the tick time in ms.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Optional

from .config import LEVEL_CONFIG, LIVES, PLAYER_CONFIG, PLAYFIELD, POWER_UP_CONFIG, SCORE_PER_TYPE
from .enemies import Category, Enemy
from .entities import Background, Bullet, Controls, Mine, PlayerShip, PowerUp, ProjectileKind
from .explosions import Burst, ScreenFlash
from .spawner import WaveState, spawn_wave
from .utils import Vector2, clamp, hitbox_overlap, point_in_rect

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    START = "start"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    VICTORY = "victory"


class Simulation:
    """Entity simulation and collision/combat loop for one game session"""

    def __init__(
        self,
        width: int = PLAYFIELD["width"],
        height: int = PLAYFIELD["height"],
        lives: int = LIVES,
        max_level: int = LEVEL_CONFIG["max_level"],
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"playfield must be positive, got {width}x{height}")
        if lives < 1:
            raise ValueError(f"lives must be >= 1, got {lives}")
        if max_level < 1:
            raise ValueError(f"max_level must be >= 1, got {max_level}")

        self.width = width
        self.height = height
        self.initial_lives = lives
        self.max_level = max_level
        self.high_score = 0

        self._events: Dict[str, int] = {}
        self.reset(0.0)

    # ----------------------------
    # Session lifecycle
    # ----------------------------

    def reset(self, now: float):
        """Back to the title state with a fresh level 1 session"""
        self.state = GameState.START
        self.state_time = now
        self.frame = 0

        self.player = PlayerShip(arena_width=self.width, arena_height=self.height)
        self.background = Background(arena_height=self.height, display_width=self.width * 1.05)
        self.enemies: List[Enemy] = []
        self.player_bullets: List[Bullet] = []
        self.enemy_projectiles: List[Bullet | Mine] = []
        self.power_ups: List[PowerUp] = []
        self.effects: list = []

        self.score = 0
        self.lives = self.initial_lives
        self.level = 1
        self.boss_defeated = False
        self.waves = WaveState(last_wave_time=now)

        self.indestructible = False
        self.power_up_active = False
        self.power_up_start = 0.0
        self.should_spawn_power_up = False
        self.power_up_spawned = False

        self.transitioning = False
        self.transition_started = False
        self.transition_time = 0.0
        self.fade_state: Optional[str] = None
        self.fade_start = 0.0
        self.transition_alpha = 0.0

    def start(self, now: float):
        if self.state is not GameState.START:
            return
        self.reset(now)
        self.state = GameState.PLAYING
        logger.debug("Game started at t=%.0f", now)

    def toggle_indestructible(self) -> bool:
        """Debug switch: enemy fire and contact stop costing lives"""
        self.indestructible = not self.indestructible
        return self.indestructible

    @property
    def invulnerable(self) -> bool:
        return self.indestructible or self.power_up_active

    @property
    def wave_number(self) -> int:
        return self.waves.wave_number

    # ----------------------------
    # Tick
    # ----------------------------

    def step(self, now: float, controls: Optional[Controls] = None) -> Dict[str, int]:
        """Advance one tick and return the events it produced"""
        self._events = {
            "score": 0, "kills": 0, "hits": 0, "shots": 0, "lives_lost": 0,
            "boss_defeated": 0, "power_up": 0, "level_up": 0,
        }

        if self.state in (GameState.GAME_OVER, GameState.VICTORY):
            self._update_end_screen(now)
            return self._events
        if self.state is not GameState.PLAYING:
            return self._events

        if controls is None:
            controls = Controls()
        self.frame += 1

        self._update_player(now, controls)
        self._spawn_logic(now)
        self._update_projectiles(now)
        self._update_enemies(now)
        self._update_power_ups_and_effects()
        self._handle_collisions(now)
        self._update_level_transition(now)

        return self._events

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _update_player(self, now: float, controls: Controls):
        self.background.update(self.player)
        self.player.move(controls, now)

        if controls.shoot:
            bullet = self.player.shoot(now)
            if bullet is not None:
                self.player_bullets.append(bullet)
                self._events["shots"] += 1

        if self.power_up_active and now - self.power_up_start > POWER_UP_CONFIG["duration"]:
            self.power_up_active = False
            self.player.shoot_interval = PLAYER_CONFIG["shoot_interval"]
            logger.debug("Power-up expired")

        # Arm a drop: the next weapon kill leaves a power-up behind
        if (
            self.wave_number >= POWER_UP_CONFIG["wave_threshold"]
            and not self.power_up_spawned
            and not self.power_up_active
            and not self.power_ups
        ):
            self.should_spawn_power_up = True

    def _spawn_logic(self, now: float):
        if not self.waves.due(now):
            return
        self.enemies += spawn_wave(
            self.waves.difficulty,
            self.level,
            self.boss_defeated,
            self.player,
            self.enemies,
            now,
            self.width,
            self.height,
        )
        self.waves.advance(now)

    def _update_projectiles(self, now: float):
        for b in self.player_bullets:
            b.update(now)
            if b.is_off_screen(self.width, self.height):
                b.alive = False
        self.player_bullets = [b for b in self.player_bullets if b.alive]

        for p in self.enemy_projectiles:
            spent = p.update(now)
            if spent or p.is_off_screen(self.width, self.height):
                p.alive = False
        self.enemy_projectiles = [p for p in self.enemy_projectiles if p.alive]

    def _update_enemies(self, now: float):
        for enemy in self.enemies:
            self.enemy_projectiles += enemy.update(now, self.frame)

        # Leaving the field costs nothing
        self.enemies = [e for e in self.enemies if not e.is_off_screen()]

    def _update_power_ups_and_effects(self):
        self.power_ups = [p for p in self.power_ups if not p.update()]

        for fx in self.effects:
            fx.update()
        self.effects = [fx for fx in self.effects if not fx.finished]

    def _handle_collisions(self, now: float):
        self._collide_bullets_enemies(now)
        self._collide_player_power_ups(now)
        self._collide_projectiles_player(now)
        self._collide_enemies_player(now)

    def _collide_bullets_enemies(self, now: float):
        for b in reversed(self.player_bullets):
            for e in reversed(self.enemies):
                if not e.alive:
                    continue
                if point_in_rect(b.pos.x, b.pos.y, e.pos.x, e.pos.y, e.hitbox_width, e.hitbox_height):
                    b.alive = False
                    self._events["hits"] += 1
                    if e.take_damage(1):
                        self._destroy_enemy(e, now)
                    break

        self.enemies = [e for e in self.enemies if e.alive]
        self.player_bullets = [b for b in self.player_bullets if b.alive]

    def _destroy_enemy(self, enemy: Enemy, now: float):
        if enemy.category is Category.BOSS:
            self.boss_defeated = True
            self._events["boss_defeated"] += 1
            logger.debug("Level %d boss defeated", self.level)

        self.effects += enemy.create_explosion()
        points = SCORE_PER_TYPE * enemy.type_code
        self.score += points
        self._events["score"] += points
        self._events["kills"] += 1

        if self.should_spawn_power_up:
            self.power_ups.append(PowerUp(enemy.pos.copy()))
            self.should_spawn_power_up = False
            self.power_up_spawned = True

    def _collide_player_power_ups(self, now: float):
        remaining = []
        for p in self.power_ups:
            if hitbox_overlap(p, self.player):
                self._activate_power_up(p, now)
            else:
                remaining.append(p)
        self.power_ups = remaining

    def _activate_power_up(self, power_up: PowerUp, now: float):
        self.power_up_active = True
        self.power_up_start = now
        self.player.shoot_interval = PLAYER_CONFIG["power_up_shoot_interval"]
        self._events["power_up"] += 1

        cx = power_up.pos.x + power_up.display_width / 2
        cy = power_up.pos.y + power_up.display_height / 2
        for _ in range(POWER_UP_CONFIG["burst_count"]):
            self.effects.append(Burst(Vector2(cx, cy), color=(255, 255, 255)))
        logger.debug("Power-up collected at t=%.0f", now)

    def _collide_projectiles_player(self, now: float):
        if self.invulnerable:
            return
        player = self.player

        for p in reversed(self.enemy_projectiles):
            if self.state is not GameState.PLAYING:
                break
            if p.kind is ProjectileKind.MINE:
                # A blast hurts once, then keeps expanding harmlessly
                if p.hit_player or not p.check_collision(player):
                    continue
                p.hit_player = True
                self.effects += p.create_explosion()
            else:
                if not point_in_rect(p.pos.x, p.pos.y, player.pos.x, player.pos.y,
                                     player.hitbox_width, player.hitbox_height):
                    continue
                p.alive = False
            self._player_hit(now)

        self.enemy_projectiles = [p for p in self.enemy_projectiles if p.alive]

    def _collide_enemies_player(self, now: float):
        rammed = set()
        for e in reversed(self.enemies):
            if self.state is not GameState.PLAYING:
                break
            if not hitbox_overlap(e, self.player):
                continue
            self.effects += e.create_explosion()
            rammed.add(id(e))
            if not self.invulnerable:
                self._player_hit(now)

        if rammed:
            self.enemies = [e for e in self.enemies if id(e) not in rammed]

    def _player_hit(self, now: float):
        self.player.take_damage(now)
        self.effects.append(ScreenFlash())
        self.lives -= 1
        self._events["lives_lost"] += 1
        if self.lives <= 0:
            self._end(GameState.GAME_OVER, now)

    # ----------------------------
    # Level / state transitions
    # ----------------------------

    def _update_level_transition(self, now: float):
        if self.state is not GameState.PLAYING:
            return
        cfg = LEVEL_CONFIG

        if self.boss_defeated and not self.transitioning:
            self.transitioning = True
            self.transition_started = False
            self.transition_time = now

        if not self.transitioning:
            return

        if not self.transition_started and now - self.transition_time >= cfg["transition_delay"]:
            self.transition_started = True
            self.fade_state = "fade_out"
            self.fade_start = now

        if not self.transition_started:
            return

        elapsed = now - self.fade_start
        fade = cfg["fade_duration"]
        if self.fade_state == "fade_out":
            self.transition_alpha = clamp(255 * elapsed / fade, 0, 255)
            if elapsed >= fade:
                self.fade_state = "fade_in"
                self.fade_start = now
                self.transition_alpha = 255
        elif self.fade_state == "fade_in":
            self.transition_alpha = clamp(255 - 255 * elapsed / fade, 0, 255)
            if elapsed >= fade:
                self._complete_level(now)

    def _complete_level(self, now: float):
        self.transitioning = False
        self.transition_started = False
        self.fade_state = None
        self.transition_alpha = 0.0
        self.boss_defeated = False
        self.level += 1
        self._events["level_up"] += 1

        if self.level > self.max_level:
            self._end(GameState.VICTORY, now)
            return

        logger.debug("Entering level %d", self.level)
        self.player.reset_position()
        self.enemies = []
        self.player_bullets = []
        self.enemy_projectiles = []
        self.effects = []
        self.waves.reset(now)
        self.power_up_spawned = False

    def _end(self, state: GameState, now: float):
        self.state = state
        self.state_time = now
        self.high_score = max(self.high_score, self.score)
        logger.debug("%s at t=%.0f with score %d", state.value, now, self.score)

    def _update_end_screen(self, now: float):
        if self.state is GameState.GAME_OVER:
            duration = LEVEL_CONFIG["game_over_duration"]
        else:
            duration = LEVEL_CONFIG["victory_duration"]
        if now - self.state_time > duration:
            self.reset(now)
