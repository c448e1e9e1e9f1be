"""
Held-key tracking for the windows' frame driver.

A key moves the player once per frame while it is down. A press and release
that both land between two frames still counts for the next frame.
"""

from typing import Iterable, Set


class HeldKeys:

    def __init__(self):
        self._down: Set[int] = set()
        self._tapped: Set[int] = set()

    def press(self, key: int):
        self._down.add(key)
        self._tapped.add(key)

    def release(self, key: int):
        self._down.discard(key)

    def clear(self):
        self._down.clear()
        self._tapped.clear()

    def active(self, keys: Iterable[int]) -> bool:
        return any(k in self._down or k in self._tapped for k in keys)

    def axis(self, negative: Iterable[int], positive: Iterable[int]) -> int:
        """-1, 0 or 1 for this frame; forgets taps once read"""
        value = int(self.active(positive)) - int(self.active(negative))
        self._tapped.clear()
        return value
