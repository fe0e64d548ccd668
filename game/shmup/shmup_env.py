"""
ShmupEnv - gymnasium wrapper around the shoot-'em-up simulation
---------------------------------------------------------------
- Simulation owns all gameplay; this class only maps actions to Controls,
  builds observations and shapes rewards from the per-tick events
- Simulated clock: every step advances `dt_ms`, no wall-clock reads
- Vector observation: player state + top-K nearest enemies + top-M nearest
  enemy projectiles
- MultiDiscrete action space: [move(5), shoot(2), rotate(3)]
- Arcade window for human rendering (imported on first render)

Quick test:
    python -m game.shmup.shmup_env
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import LEVEL_CONFIG, LIVES, PLAYER_CONFIG, PLAYFIELD
from .enemies import Category
from .entities import Controls
from .simulation import GameState, Simulation
from .utils import clamp, seed_everything

DEFAULT_REWARD = {
    "R_SCORE": 0.01,     # per score point
    "R_KILL": 0.5,
    "R_BOSS": 10.0,
    "R_LEVEL": 5.0,
    "R_LIFE": 2.0,       # penalty per life lost
    "R_SHOT": 0.005,
    "R_TIME": 0.001,
    "R_DEATH": 5.0,
}


class ShmupEnv(gym.Env):
    """Side-scrolling shoot-'em-up environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = PLAYFIELD["width"],
        height: int = PLAYFIELD["height"],
        dt_ms: float = 1000 / PLAYFIELD["fps"],
        max_steps: int = 36_000,  # 10 minutes at 60 FPS
        k_enemies: int = 6,
        m_projectiles: int = 6,
        lives: int = LIVES,
        max_level: int = LEVEL_CONFIG["max_level"],
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode!r}"
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.dt_ms = dt_ms
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_projectiles = m_projectiles
        self.lives = lives
        self.max_level = max_level
        self.reward_config = dict(DEFAULT_REWARD)
        if reward_config:
            self.reward_config.update(reward_config)

        # move: 0 stay, 1 up, 2 down, 3 left, 4 right
        # shoot: 0/1
        # rotate: 0 none, 1 ccw, 2 cw
        self.action_space = spaces.MultiDiscrete([5, 2, 3])

        # Player: pos(2) vel(2) lives(1) power-up(1)
        # Each enemy: rel pos(2) health(1) boss flag(1)
        # Each projectile: rel pos(2)
        obs_dim = 2 + 2 + 1 + 1 + (self.k_enemies * 4) + (self.m_projectiles * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self.sim: Simulation = None  # type: ignore
        self.now = 0.0
        self._step_count = 0
        self._events: Dict[str, int] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self.now = 0.0
        self._step_count = 0
        self._events = {}

        self.sim = Simulation(
            width=self.width, height=self.height, lives=self.lives, max_level=self.max_level
        )
        self.sim.start(self.now)

        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self.sim is not None, "Call reset() before step()"

        move, shoot, rotate = int(action[0]), int(action[1]), int(action[2])
        controls = Controls(
            up=move == 1,
            down=move == 2,
            left=move == 3,
            right=move == 4,
            shoot=shoot == 1,
            rotate_ccw=rotate == 1,
            rotate_cw=rotate == 2,
        )

        self.now += self.dt_ms
        self._events = self.sim.step(self.now, controls)

        reward = self._compute_reward()

        terminated = self.sim.state in (GameState.GAME_OVER, GameState.VICTORY)
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        player = self.sim.player
        px = player.pos.x + player.display_width / 2
        py = player.pos.y + player.display_height / 2
        max_speed = PLAYER_CONFIG["max_speed"]

        obs_parts = [
            (px / self.width) * 2 - 1,
            (py / self.height) * 2 - 1,
            clamp(player.vel.x / max_speed, -1, 1),
            clamp(player.vel.y / max_speed, -1, 1),
            (self.sim.lives / max(1, self.lives)) * 2 - 1,
            1.0 if self.sim.power_up_active else -1.0,
        ]

        def rel(x, y):
            return clamp((x - px) / self.width, -1, 1), clamp((y - py) / self.height, -1, 1)

        enemies_sorted = sorted(
            self.sim.enemies,
            key=lambda e: (e.center[0] - px) ** 2 + (e.center[1] - py) ** 2,
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                dx, dy = rel(*e.center)
                health = clamp(e.health / 20.0, 0, 1)
                obs_parts += [dx, dy, health, 1.0 if e.category is Category.BOSS else 0.0]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        projectiles_sorted = sorted(
            self.sim.enemy_projectiles,
            key=lambda p: (p.pos.x - px) ** 2 + (p.pos.y - py) ** 2,
        )
        for i in range(self.m_projectiles):
            if i < len(projectiles_sorted):
                p = projectiles_sorted[i]
                obs_parts += list(rel(p.pos.x, p.pos.y))
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        rc = self.reward_config
        ev = self._events

        reward = 0.0
        reward += rc["R_SCORE"] * ev.get("score", 0)
        reward += rc["R_KILL"] * ev.get("kills", 0)
        reward += rc["R_BOSS"] * ev.get("boss_defeated", 0)
        reward += rc["R_LEVEL"] * ev.get("level_up", 0)

        reward -= rc["R_LIFE"] * ev.get("lives_lost", 0)
        reward -= rc["R_SHOT"] * ev.get("shots", 0)
        reward -= rc["R_TIME"]

        if self.sim.state is GameState.GAME_OVER:
            reward -= rc["R_DEATH"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.sim.score,
            "lives": self.sim.lives,
            "level": self.sim.level,
            "difficulty": self.sim.waves.difficulty,
            "state": self.sim.state.value,
            "num_enemies": len(self.sim.enemies),
            "num_projectiles": len(self.sim.enemy_projectiles),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .render import ShmupWindow
            self._window = ShmupWindow(self.sim, self.width, self.height)

        self._window.sim = self.sim
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42, max_steps: Optional[int] = None) -> float:
    """Run one episode with uniformly random actions and return its total reward"""
    kwargs = {"render_mode": "human" if render else None}
    if max_steps is not None:
        kwargs["max_steps"] = max_steps
    env = ShmupEnv(**kwargs)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(1 / env.metadata["render_fps"])

    print(f"Random episode return: {total:.2f}  score: {info['score']}  level: {info['level']}")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
