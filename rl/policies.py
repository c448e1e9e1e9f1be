"""
Scripted baseline policies for the arcade environments.
Each exposes `predict(obs, deterministic=True) -> (action, state)`.
"""

from typing import Optional

import numpy as np


class RandomPolicy:
    """Uniform samples from the action space"""

    def __init__(self, env):
        self.env = env

    def predict(self, obs, deterministic: bool = True):
        return self.env.action_space.sample(), None


class InvadersHeuristic:
    """
    Steers under the lowest alien, sidesteps close incoming bullets and
    fires on a fixed cadence once roughly aligned.
    """

    def __init__(self, env, fire_every: int = 20, dodge_range: float = 120.0):
        self.env = env
        self.fire_every = fire_every
        self.dodge_range = dodge_range
        self._frame = 0

    def predict(self, obs, deterministic: bool = True):
        session = self.env.game.session
        player = session.player
        px = player.x + player.width / 2
        self._frame += 1

        move = 0
        target: Optional[float] = None
        if session.aliens:
            lowest = max(session.aliens, key=lambda a: (a.y, -abs(a.x + a.width / 2 - px)))
            target = lowest.x + lowest.width / 2

        threat = None
        for b in session.bullets:
            if b.from_player:
                continue
            if 0 < player.y - b.y < self.dodge_range and abs(b.x - px) < player.width:
                threat = b
                break

        if threat is not None:
            move = 2 if threat.x <= px else 1
        elif target is not None and abs(target - px) > player.speed:
            move = 2 if target > px else 1

        aligned = target is not None and abs(target - px) < player.width / 2
        shoot = 1 if aligned and self._frame % self.fire_every == 0 else 0

        return np.array([move, shoot], dtype=np.int64), None


class PongTracker:
    """Keeps the paddle centre on the ball's height"""

    def __init__(self, env, deadzone: float = 10.0):
        self.env = env
        self.deadzone = deadzone

    def predict(self, obs, deterministic: bool = True):
        session = self.env.game.session
        center = session.player.center
        if center < session.ball.y - self.deadzone:
            return 2, None
        if center > session.ball.y + self.deadzone:
            return 1, None
        return 0, None


HEURISTICS = {
    "invaders": InvadersHeuristic,
    "pong": PongTracker,
}


def make_policy(name: str, game: str, env, **kwargs):
    if name == "random":
        return RandomPolicy(env)
    if name == "heuristic":
        if game not in HEURISTICS:
            raise ValueError(f"No heuristic policy for game: {game}")
        return HEURISTICS[game](env, **kwargs)
    raise ValueError(f"Unknown policy: {name}")
