"""2D arcade module - Space Invaders and Pong simulations, environments and windows"""

from .invaders import InvadersGame, InvadersConfig, SessionStatus, run_frames
from .pong import PongGame, PongConfig
from .invaders_env import InvadersEnv, run_random_episode
from .pong_env import PongEnv

__all__ = [
    'InvadersGame', 'InvadersConfig', 'SessionStatus', 'run_frames',
    'PongGame', 'PongConfig',
    'InvadersEnv', 'PongEnv', 'run_random_episode',
]
