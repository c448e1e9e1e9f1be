"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def rect_collide(a, b) -> bool:
    """Strict axis-aligned overlap of two objects with x, y, width, height"""
    return (a.x < b.x + b.width and
            a.x + a.width > b.x and
            a.y < b.y + b.height and
            a.y + a.height > b.y)


def polar(speed: float, angle: float, direction: int = 1) -> Tuple[float, float]:
    """Velocity of the given magnitude at `angle` from the x axis, x sign set by `direction`"""
    return direction * speed * math.cos(angle), speed * math.sin(angle)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
