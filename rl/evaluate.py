"""
Evaluation script for scripted policies on the arcade environments
"""

import argparse
import csv
import logging
import os
import time
from typing import Optional, Dict, Any

import numpy as np

from game.arcade2d import InvadersEnv, PongEnv
from rl.configs.arcade_config import ENV_CONFIGS, EVAL_CONFIG
from rl.policies import make_policy

logger = logging.getLogger(__name__)

ENVS = {
    "invaders": InvadersEnv,
    "pong": PongEnv,
}

CSV_FIELDS = ["episode", "reward", "length", "score", "outcome"]


def make_env(game: str, render_mode: Optional[str] = None, **overrides):
    """Build an environment from the stored config, with optional overrides"""
    if game not in ENVS:
        raise ValueError(f"Unknown game: {game}")
    env_config, rewards = ENV_CONFIGS[game]
    kwargs = {**env_config, **overrides}
    return ENVS[game](render_mode=render_mode, reward_config=rewards, **kwargs)


def _summarize(game: str, info: Dict[str, Any]):
    if game == "invaders":
        return info["score"], info["status"]
    player, ai = info["player_points"], info["ai_points"]
    outcome = "won" if player > ai else "lost" if ai > player else "draw"
    return player, outcome


def evaluate_policy(
    game: str = "invaders",
    policy: str = "heuristic",
    n_episodes: int = 10,
    render: bool = False,
    seed: Optional[int] = None,
    csv_path: Optional[str] = None,
    **env_overrides,
) -> Dict[str, Any]:
    """
    Run a scripted policy for a number of episodes

    Args:
        game: 'invaders' or 'pong'
        policy: 'heuristic' or 'random'
        n_episodes: Number of episodes to run
        render: Whether to open a window
        seed: Base seed; episode i uses seed + i
        csv_path: Optional path for a per-episode CSV
    """
    env = make_env(game, render_mode="human" if render else None, **env_overrides)
    kwargs = {}
    if game == "invaders" and policy == "heuristic":
        kwargs["fire_every"] = EVAL_CONFIG["invaders_fire_every"]
    agent = make_policy(policy, game, env, **kwargs)

    episode_rewards = []
    episode_lengths = []
    rows = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            action, _ = agent.predict(obs, deterministic=True)
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1
            if render:
                time.sleep(EVAL_CONFIG["render_delay"])

        score, outcome = _summarize(game, info)
        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        rows.append([episode, total_reward, steps, score, outcome])

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Length = {steps}, Score = {score}, Outcome = {outcome}")

    env.close()

    if csv_path:
        os.makedirs(os.path.dirname(csv_path) or ".", exist_ok=True)
        with open(csv_path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_FIELDS)
            writer.writerows(rows)
        logger.info("Wrote %d episodes to %s", len(rows), csv_path)

    mean_reward = float(np.mean(episode_rewards)) if episode_rewards else 0.0
    std_reward = float(np.std(episode_rewards)) if episode_rewards else 0.0
    mean_length = float(np.mean(episode_lengths)) if episode_lengths else 0.0

    print("\n" + "=" * 50)
    print(f"{game} / {policy} ({n_episodes} episodes):")
    print(f"Mean Reward: {mean_reward:.2f} ± {std_reward:.2f}")
    print(f"Mean Episode Length: {mean_length:.1f}")
    print("=" * 50)

    return {
        "mean_reward": mean_reward,
        "std_reward": std_reward,
        "mean_length": mean_length,
        "episode_rewards": episode_rewards,
        "episode_lengths": episode_lengths,
    }


def main():
    parser = argparse.ArgumentParser(description="Evaluate a scripted policy on an arcade environment")
    parser.add_argument(
        "--game",
        type=str,
        default="invaders",
        choices=sorted(ENVS),
        help="Environment to run (default: invaders)",
    )
    parser.add_argument(
        "--policy",
        type=str,
        default="heuristic",
        choices=["heuristic", "random"],
        help="Policy to evaluate (default: heuristic)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=EVAL_CONFIG["n_episodes"],
        help=f"Number of episodes (default: {EVAL_CONFIG['n_episodes']})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=EVAL_CONFIG["seed"],
        help=f"Random seed (default: {EVAL_CONFIG['seed']})",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Open a window while evaluating",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Write per-episode results to this CSV file",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate the random policy for comparison",
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(name)s %(levelname)s: %(message)s")

    results = evaluate_policy(
        game=args.game,
        policy=args.policy,
        n_episodes=args.n_episodes,
        render=args.render,
        seed=args.seed,
        csv_path=args.csv,
    )

    if args.compare_random and args.policy != "random":
        print("\n")
        random_results = evaluate_policy(
            game=args.game,
            policy="random",
            n_episodes=args.n_episodes,
            seed=args.seed,
        )
        improvement = results["mean_reward"] - random_results["mean_reward"]
        print(f"\nImprovement over random: {improvement:.2f}")


if __name__ == "__main__":
    main()
