"""
PongEnv - the left paddle as a Gymnasium agent against the tracking paddle.

Discrete actions: 0 stay, 1 up, 2 down. An episode ends after `max_points`
points have been played or `max_steps` frames.
"""

from __future__ import annotations

from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .pong import PongGame, PongConfig
from .raster import FrameSurface
from .render import draw_pong
from .utils import clamp, seed_everything

DEFAULT_REWARDS = {
    "R_POINT": 1.0,
    "R_RETURN": 0.1,
}


class PongEnv(gym.Env):
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 500,
        ball_speed: float = 5.0,
        max_points: int = 5,
        max_steps: int = 6000,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        self.render_mode = render_mode

        self.config = PongConfig(width=width, height=height, ball_speed=ball_speed).validate()
        if max_points <= 0:
            raise ValueError(f"max_points must be positive, got {max_points}")
        self.max_points = max_points
        self.max_steps = max_steps
        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k in DEFAULT_REWARDS})

        self.action_space = spaces.Discrete(3)
        # ball x, y, vx, vy, player y, ai y
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(6,), dtype=np.float32)

        self._window = None
        self.game = PongGame(self.config)
        self._step_count = 0
        self._points = {"player": 0, "ai": 0}

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self._step_count = 0
        self._points = {"player": 0, "ai": 0}
        self.game.reset()

        return self._get_obs(), self._get_info()

    def step(self, action):
        action = int(action)
        if action == 1:
            self.game.move_player(-1)
        elif action == 2:
            self.game.move_player(1)

        events = self.game.step()
        self._points["player"] += int(events["player_point"])
        self._points["ai"] += int(events["ai_point"])

        r = self.rewards
        reward = r["R_POINT"] * (events["player_point"] - events["ai_point"])
        reward += r["R_RETURN"] * events["player_return"]

        terminated = self._points["player"] + self._points["ai"] >= self.max_points
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    def _get_obs(self) -> np.ndarray:
        cfg = self.config
        s = self.game.session
        b = s.ball
        travel = cfg.height - cfg.paddle_height
        return np.array([
            clamp(b.x / cfg.width * 2 - 1, -1, 1),
            clamp(b.y / cfg.height * 2 - 1, -1, 1),
            clamp(b.vx / b.speed, -1, 1),
            clamp(b.vy / b.speed, -1, 1),
            s.player.y / travel * 2 - 1 if travel else 0.0,
            s.ai.y / travel * 2 - 1 if travel else 0.0,
        ], dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "player_points": self._points["player"],
            "ai_points": self._points["ai"],
            "step": self._step_count,
        }

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            surface = FrameSurface(self.config.width, self.config.height)
            draw_pong(surface, self.game.session, self.config)
            return surface.frame

        if self._window is None:
            from .window import PongWindow
            self._window = PongWindow(self.game, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None
