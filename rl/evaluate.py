"""
Evaluation script for scripted policies on the shoot-'em-up environment
"""

import argparse
import time
from typing import Optional

import numpy as np

from game.shmup import ShmupEnv
from rl.configs.shmup_config import ENV_CONFIG, EVAL_CONFIG, reward_params


def make_policy(name: str, env: ShmupEnv):
    """
    Map a policy name to an observation -> action callable.

    random: uniform samples from the action space
    idle:   never moves or shoots
    fire:   holds the trigger and tracks the nearest enemy vertically
    """
    if name == "random":
        return lambda obs: env.action_space.sample()
    if name == "idle":
        return lambda obs: np.array([0, 0, 0], dtype=np.int64)
    if name == "fire":
        def fire(obs):
            # obs[6:8] is the nearest enemy's position relative to the player
            dy = obs[7]
            move = 0
            if dy < -0.02:
                move = 1
            elif dy > 0.02:
                move = 2
            return np.array([move, 1, 0], dtype=np.int64)
        return fire
    raise ValueError(f"Unknown policy: {name}")


def evaluate_policy(
    policy: str = "random",
    n_episodes: int = 5,
    render: bool = False,
    seed: Optional[int] = None,
    reward_config: str = "baseline",
    max_steps: Optional[int] = None,
):
    """
    Evaluate a scripted policy

    Args:
        policy: Policy name ('random', 'idle' or 'fire')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Random seed; episode i uses seed + i
        reward_config: Name of the reward shaping config
        max_steps: Override for the episode step limit
    """
    env_kwargs = dict(ENV_CONFIG)
    if max_steps is not None:
        env_kwargs["max_steps"] = max_steps
    env = ShmupEnv(
        render_mode="human" if render else None,
        reward_config=reward_params(reward_config),
        **env_kwargs,
    )
    act = make_policy(policy, env)

    episode_rewards = []
    episode_lengths = []
    episode_scores = []
    episode_levels = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)
        if seed is not None:
            env.action_space.seed(seed + episode)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(act(obs))
            total_reward += reward
            steps += 1
            if render:
                time.sleep(1 / env.metadata["render_fps"])

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info["score"])
        episode_levels.append(info["level"])

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Score = {info['score']}, "
              f"Level = {info['level']}, Length = {steps}")

    env.close()

    mean_reward = np.mean(episode_rewards)
    std_reward = np.std(episode_rewards)
    mean_length = np.mean(episode_lengths)
    mean_score = np.mean(episode_scores)

    print("\n" + "="*50)
    print(f"Evaluation Results - {policy} ({n_episodes} episodes):")
    print(f"Mean Reward: {mean_reward:.2f} ± {std_reward:.2f}")
    print(f"Mean Score: {mean_score:.1f}")
    print(f"Mean Episode Length: {mean_length:.1f}")
    print(f"Best Level Reached: {max(episode_levels)}")
    print("="*50)

    return {
        "mean_reward": mean_reward,
        "std_reward": std_reward,
        "mean_length": mean_length,
        "mean_score": mean_score,
        "episode_rewards": episode_rewards,
        "episode_lengths": episode_lengths,
        "episode_scores": episode_scores,
        "episode_levels": episode_levels,
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="Evaluate scripted policies on the shmup environment")
    parser.add_argument(
        "--policy",
        type=str,
        default="random",
        choices=EVAL_CONFIG["policies"],
        help="Policy to run (default: random)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=EVAL_CONFIG["n_episodes"],
        help=f"Number of evaluation episodes (default: {EVAL_CONFIG['n_episodes']})",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Disable rendering",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=EVAL_CONFIG["seed"],
        help=f"Random seed (default: {EVAL_CONFIG['seed']})",
    )
    parser.add_argument(
        "--reward-config",
        type=str,
        default="baseline",
        choices=["baseline", "survival", "aggressive"],
        help="Reward shaping config (default: baseline)",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Override the episode step limit",
    )

    args = parser.parse_args(argv)

    return evaluate_policy(
        policy=args.policy,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        reward_config=args.reward_config,
        max_steps=args.max_steps,
    )


if __name__ == "__main__":
    main()
