import numpy as np
import pytest

from game.shmup import ShmupEnv
from game.shmup.entities import Bullet
from game.shmup.simulation import GameState
from game.shmup.utils import Vector2
from rl.configs.shmup_config import reward_params
from rl.evaluate import main, make_policy


def test_reset_and_step_stay_in_spaces():
    env = ShmupEnv(k_enemies=4, m_projectiles=3)
    assert env.observation_space.shape == (6 + 4 * 4 + 3 * 2,)

    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert info["lives"] == 5
    assert info["state"] == "playing"

    env.action_space.seed(0)
    for _ in range(400):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        assert isinstance(reward, float)
        if terminated or truncated:
            break
    env.close()


def test_clock_is_simulated():
    env = ShmupEnv(dt_ms=10)
    env.reset(seed=1)
    for _ in range(501):
        env.step(np.array([0, 0, 0]))
    assert env.now == pytest.approx(5010)
    # the first wave is due after 5000 ms
    assert env.sim.waves.difficulty == 0.5


def test_truncates_at_max_steps():
    env = ShmupEnv(max_steps=3)
    env.reset(seed=2)
    results = [env.step(np.array([0, 0, 0]))[3] for _ in range(3)]
    assert results == [False, False, True]


def test_game_over_terminates_with_penalty():
    env = ShmupEnv(lives=1)
    env.reset(seed=3)
    env.sim.enemies.clear()
    env.sim.enemy_projectiles.append(Bullet(Vector2(120, 320), Vector2(0, 0)))

    _, reward, terminated, truncated, info = env.step(np.array([0, 0, 0]))

    assert terminated and not truncated
    assert env.sim.state is GameState.GAME_OVER
    rc = env.reward_config
    assert reward == pytest.approx(-rc["R_LIFE"] - rc["R_TIME"] - rc["R_DEATH"])


def test_action_mapping_moves_and_shoots():
    env = ShmupEnv()
    env.reset(seed=4)
    start_y = env.sim.player.pos.y
    _, _, _, _, _ = env.step(np.array([2, 1, 0]))
    assert env.sim.player.pos.y > start_y
    assert len(env.sim.player_bullets) == 1


def test_reward_configs():
    assert set(reward_params("survival")) == {
        "R_SCORE", "R_KILL", "R_BOSS", "R_LEVEL", "R_LIFE", "R_SHOT", "R_TIME", "R_DEATH",
    }
    with pytest.raises(ValueError):
        reward_params("nope")


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        make_policy("sniper", ShmupEnv())


def test_evaluate_cli_runs_headless(capsys):
    stats = main(["--policy", "fire", "--n-episodes", "2", "--no-render", "--max-steps", "50"])
    assert stats["episode_lengths"] == [50, 50]
    assert len(stats["episode_rewards"]) == 2
    assert "Evaluation Results" in capsys.readouterr().out
