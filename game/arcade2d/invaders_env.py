"""
InvadersEnv - Space Invaders as a Gymnasium environment
-------------------------------------------------------
- Same simulation as the playable window (InvadersGame)
- 1 agent that moves left/right and shoots (no cooldown)
- Vector observation: player/formation summary + k nearest alien bullets
- MultiDiscrete action space: [move(3), shoot(2)]

Quick test:
    python -m game.arcade2d.invaders_env
"""

from __future__ import annotations

import math
from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .invaders import InvadersGame, InvadersConfig, SessionStatus
from .raster import FrameSurface
from .render import draw_invaders
from .utils import clamp, seed_everything

DEFAULT_REWARDS = {
    "R_KILL": 1.0,
    "R_LIFE": 3.0,
    "R_SHOT": 0.01,
    "R_TIME": 0.001,
    "R_WIN": 10.0,
    "R_LOSS": 10.0,
}


class InvadersEnv(gym.Env):
    """Space Invaders with the formation, lives and scoring of the arcade build"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        max_steps: int = 18000,  # 5 minutes at 60 FPS
        start_lives: int = 3,
        k_bullets: int = 3,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        self.render_mode = render_mode

        self.config = InvadersConfig(width=width, height=height, start_lives=start_lives).validate()
        self.max_steps = max_steps
        self.k_bullets = k_bullets
        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k in DEFAULT_REWARDS})

        # move: 0 stay, 1 left, 2 right
        # shoot: 0/1
        self.action_space = spaces.MultiDiscrete([3, 2])

        # Player x, lives, aliens left, direction, formation left/right/bottom, timer
        # Each alien bullet: rel x, rel y, present
        obs_dim = 8 + self.k_bullets * 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self.game: InvadersGame = InvadersGame(self.config)
        self._step_count = 0
        self._events: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self._step_count = 0
        self.game.reset()
        self.game.start()

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, shoot = int(action[0]), int(action[1])

        if move == 1:
            self.game.move_player(-1)
        elif move == 2:
            self.game.move_player(1)

        shots = 1.0 if shoot and self.game.shoot() else 0.0

        before = self.game.status
        self._events = dict(self.game.step())
        self._events["shot"] = shots

        status = self.game.status
        self._events["won"] = float(before is not status and status is SessionStatus.WON)
        self._events["lost"] = float(before is not status and status is SessionStatus.LOST)

        reward = self._compute_reward()

        terminated = status in (SessionStatus.WON, SessionStatus.LOST)
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        cfg = self.config
        s = self.game.session
        p = s.player
        px = p.x + p.width / 2

        total = max(1, cfg.rows * cfg.cols)
        obs_parts = [
            px / cfg.width * 2 - 1,
            s.lives / cfg.start_lives * 2 - 1,
            len(s.aliens) / total * 2 - 1,
        ]

        if s.aliens:
            left = min(a.x for a in s.aliens)
            right = max(a.x + a.width for a in s.aliens)
            bottom = max(a.y + a.height for a in s.aliens)
            obs_parts += [
                float(s.aliens[0].direction),
                clamp(left / cfg.width * 2 - 1, -1, 1),
                clamp(right / cfg.width * 2 - 1, -1, 1),
                clamp(bottom / p.y * 2 - 1, -1, 1),
            ]
        else:
            obs_parts += [0.0, 0.0, 0.0, 0.0]

        obs_parts.append(min(s.timer / max(1, cfg.fire_delay), 1.0) * 2 - 1)

        # Alien bullets: k nearest to the ship
        incoming = sorted(
            (b for b in s.bullets if not b.from_player),
            key=lambda b: math.hypot(b.x - px, b.y - p.y),
        )
        for i in range(self.k_bullets):
            if i < len(incoming):
                b = incoming[i]
                obs_parts += [
                    clamp((b.x - px) / cfg.width, -1, 1),
                    clamp((b.y - p.y) / cfg.height, -1, 1),
                    1.0,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        r = self.rewards
        reward = 0.0

        reward += r["R_KILL"] * self._events.get("kill", 0.0)
        reward -= r["R_LIFE"] * self._events.get("life_lost", 0.0)
        reward -= r["R_SHOT"] * self._events.get("shot", 0.0)
        reward -= r["R_TIME"]

        # Paid once, on the step the game ends
        reward += r["R_WIN"] * self._events.get("won", 0.0)
        reward -= r["R_LOSS"] * self._events.get("lost", 0.0)

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        s = self.game.session
        return {
            "score": s.score,
            "lives": s.lives,
            "num_aliens": len(s.aliens),
            "num_bullets": len(s.bullets),
            "status": s.status.value,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            surface = FrameSurface(self.config.width, self.config.height)
            draw_invaders(surface, self.game.session, self.config)
            return surface.frame

        if self._window is None:
            from .window import InvadersWindow
            self._window = InvadersWindow(self.game, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(render: bool = True, seed: int = 42) -> float:
    """Play one episode with random actions; returns the episode return"""
    env = InvadersEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}  score: {info['score']}  outcome: {info['status']}")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
