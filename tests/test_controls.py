"""
Tests for held-key tracking used by the windows' frame driver
"""

from game.arcade2d.controls import HeldKeys
from game.arcade2d.invaders import InvadersGame

LEFT, RIGHT = 1, 2


def frame(keys: HeldKeys, game: InvadersGame):
    """What a window's on_update does with keyboard state"""
    direction = keys.axis((LEFT,), (RIGHT,))
    if direction:
        game.move_player(direction)


def test_press_moves_once_on_the_next_frame():
    keys = HeldKeys()
    game = InvadersGame()
    game.start()
    x = game.session.player.x

    keys.press(RIGHT)
    frame(keys, game)

    assert game.session.player.x == x + 5


def test_held_key_moves_every_frame():
    keys = HeldKeys()
    game = InvadersGame()
    game.start()
    x = game.session.player.x

    keys.press(LEFT)
    for _ in range(3):
        frame(keys, game)
    keys.release(LEFT)
    frame(keys, game)

    assert game.session.player.x == x - 15


def test_tap_between_frames_still_counts_once():
    keys = HeldKeys()

    keys.press(LEFT)
    keys.release(LEFT)

    assert keys.axis((LEFT,), (RIGHT,)) == -1
    assert keys.axis((LEFT,), (RIGHT,)) == 0


def test_opposite_keys_cancel():
    keys = HeldKeys()
    keys.press(LEFT)
    keys.press(RIGHT)

    assert keys.axis((LEFT,), (RIGHT,)) == 0


def test_clear_forgets_everything():
    keys = HeldKeys()
    keys.press(RIGHT)

    keys.clear()

    assert keys.axis((LEFT,), (RIGHT,)) == 0
