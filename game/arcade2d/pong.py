"""
Pong simulation: a pointer/keyboard-driven paddle on the left, a tracking
paddle on the right and a ball that leaves a paddle at an angle set by where
it struck. Points are reported as events; no score is kept.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Dict, Optional

from .entities import Paddle, Ball
from .utils import clamp, polar

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PongConfig:
    width: int = 800
    height: int = 500
    paddle_width: float = 15.0
    paddle_height: float = 100.0
    paddle_margin: float = 10.0
    paddle_speed: float = 5.0
    ball_radius: float = 10.0
    ball_speed: float = 5.0
    max_bounce_angle: float = math.pi / 4
    ai_speed: float = 5.0
    ai_deadzone: float = 10.0

    def validate(self) -> "PongConfig":
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Court must have positive size, got {self.width}x{self.height}")
        for name in ("ball_speed", "paddle_speed", "ai_speed"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.paddle_height > self.height:
            raise ValueError("Paddle taller than the court")
        return self


@dataclass
class PongSession:
    player: Paddle
    ai: Paddle
    ball: Ball


def new_session(cfg: PongConfig, rng=random) -> PongSession:
    mid = (cfg.height - cfg.paddle_height) / 2
    player = Paddle(x=cfg.paddle_margin, y=mid, width=cfg.paddle_width, height=cfg.paddle_height)
    ai = Paddle(
        x=cfg.width - cfg.paddle_width - cfg.paddle_margin,
        y=mid,
        width=cfg.paddle_width,
        height=cfg.paddle_height,
    )
    ball = Ball(x=0.0, y=0.0, vx=0.0, vy=0.0, radius=cfg.ball_radius, speed=cfg.ball_speed)
    serve(ball, cfg, rng)
    return PongSession(player=player, ai=ai, ball=ball)


def serve(ball: Ball, cfg: PongConfig, rng=random):
    """Centre the ball and launch it at a random angle, magnitude `ball.speed`"""
    ball.x = cfg.width / 2
    ball.y = cfg.height / 2
    direction = 1 if rng.random() > 0.5 else -1
    angle = rng.uniform(-cfg.max_bounce_angle, cfg.max_bounce_angle)
    ball.vx, ball.vy = polar(ball.speed, angle, direction)


def clamp_paddle(paddle: Paddle, height: float):
    paddle.y = clamp(paddle.y, 0.0, height - paddle.height)


def move_paddle(paddle: Paddle, dy: float, height: float):
    paddle.y += dy
    clamp_paddle(paddle, height)


def point_paddle(paddle: Paddle, pointer_y: float, height: float):
    paddle.y = pointer_y - paddle.height / 2
    clamp_paddle(paddle, height)


def in_span(ball: Ball, paddle: Paddle) -> bool:
    return paddle.y < ball.y < paddle.y + paddle.height


def deflect(ball: Ball, paddle: Paddle, direction: int, max_angle: float):
    """Leave the paddle at an angle proportional to the hit offset from its centre"""
    offset = (ball.y - paddle.center) / (paddle.height / 2)
    ball.vx, ball.vy = polar(ball.speed, offset * max_angle, direction)


def track(paddle: Paddle, target_y: float, cfg: PongConfig):
    if paddle.center < target_y - cfg.ai_deadzone:
        paddle.y += cfg.ai_speed
    elif paddle.center > target_y + cfg.ai_deadzone:
        paddle.y -= cfg.ai_speed
    clamp_paddle(paddle, cfg.height)


def update_pong(session: PongSession, cfg: PongConfig, rng=random) -> Dict[str, float]:
    """
    Advance one frame. Returns event counts:
    wall, player_return, ai_return, player_point, ai_point.
    """
    events = {"wall": 0.0, "player_return": 0.0, "ai_return": 0.0, "player_point": 0.0, "ai_point": 0.0}
    ball = session.ball
    r = ball.radius

    ball.x += ball.vx
    ball.y += ball.vy

    if ball.y - r < 0:
        ball.vy = abs(ball.vy)
        events["wall"] += 1.0
    elif ball.y + r > cfg.height:
        ball.vy = -abs(ball.vy)
        events["wall"] += 1.0

    player, ai = session.player, session.ai
    if ball.x - r < player.x + player.width and in_span(ball, player):
        deflect(ball, player, 1, cfg.max_bounce_angle)
        events["player_return"] += 1.0

    if ball.x + r > ai.x and in_span(ball, ai):
        deflect(ball, ai, -1, cfg.max_bounce_angle)
        events["ai_return"] += 1.0

    if ball.x - r < 0 or ball.x + r > cfg.width:
        if ball.x - r < 0:
            events["ai_point"] += 1.0
        else:
            events["player_point"] += 1.0
        serve(ball, cfg, rng)

    track(ai, ball.y, cfg)
    return events


class PongGame:
    """Holds the court and applies paddle intents between frames"""

    def __init__(self, config: Optional[PongConfig] = None, rng=None):
        self.config = (config or PongConfig()).validate()
        self.rng = rng if rng is not None else random
        self.session = new_session(self.config, self.rng)

    def reset(self):
        self.session = new_session(self.config, self.rng)

    def move_player(self, direction: int):
        move_paddle(self.session.player, direction * self.config.paddle_speed, self.config.height)

    def point_player(self, pointer_y: float):
        point_paddle(self.session.player, pointer_y, self.config.height)

    def step(self) -> Dict[str, float]:
        events = update_pong(self.session, self.config, self.rng)
        if events["player_point"] or events["ai_point"]:
            logger.debug("Point to %s", "player" if events["player_point"] else "ai")
        return events
