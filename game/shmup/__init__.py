"""2D shoot-'em-up core - enemy behaviors, projectiles and the combat loop"""

from .enemies import BossEnemy, Category, Enemy, EnemyKind, create_boss, create_enemy
from .entities import Bullet, Controls, Mine, PlayerShip, PowerUp, ProjectileKind
from .explosions import ExplosionEffect
from .simulation import GameState, Simulation
from .spawner import WaveState, count_kind, has_boss, spawn_wave, wave_interval
from .shmup_env import ShmupEnv, run_random_episode

__all__ = [
    'BossEnemy', 'Category', 'Enemy', 'EnemyKind', 'create_boss', 'create_enemy',
    'Bullet', 'Controls', 'Mine', 'PlayerShip', 'PowerUp', 'ProjectileKind',
    'ExplosionEffect',
    'GameState', 'Simulation',
    'WaveState', 'count_kind', 'has_boss', 'spawn_wave', 'wave_interval',
    'ShmupEnv', 'run_random_episode',
]
