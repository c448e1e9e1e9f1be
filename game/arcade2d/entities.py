"""
Game entity dataclasses
"""

from dataclasses import dataclass

PLAYER_COLOR = (0, 255, 0)
ALIEN_COLOR = (255, 0, 255)
PLAYER_BULLET_COLOR = (0, 255, 255)
ALIEN_BULLET_COLOR = (255, 0, 0)


@dataclass
class Player:
    """Player ship, anchored at its top-left corner"""
    x: float
    y: float
    width: float = 50.0
    height: float = 30.0
    speed: float = 5.0


@dataclass
class Alien:
    """Single member of the invading formation"""
    x: float
    y: float
    width: float = 40.0
    height: float = 30.0
    direction: int = 1  # 1 right, -1 left
    speed: float = 0.5


@dataclass
class Bullet:
    """Projectile; negative speed travels up (player), positive down (alien)"""
    x: float
    y: float
    speed: float
    width: float = 3.0
    height: float = 15.0

    @property
    def from_player(self) -> bool:
        return self.speed < 0

    @property
    def color(self):
        return PLAYER_BULLET_COLOR if self.speed < 0 else ALIEN_BULLET_COLOR


@dataclass
class Paddle:
    """Pong paddle; only y moves"""
    x: float
    y: float
    width: float = 15.0
    height: float = 100.0

    @property
    def center(self) -> float:
        return self.y + self.height / 2


@dataclass
class Ball:
    """Pong ball, positioned by its centre"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float = 10.0
    speed: float = 5.0
