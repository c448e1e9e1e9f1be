"""
Tests for the Pong simulation
"""

import math
import random

import pytest

from game.arcade2d.entities import Ball, Paddle
from game.arcade2d.pong import (
    PongConfig,
    PongGame,
    deflect,
    serve,
    track,
    update_pong,
)


@pytest.fixture
def game():
    return PongGame(rng=random.Random(7))


def place_ball(game, x, y, vx, vy):
    ball = game.session.ball
    ball.x, ball.y, ball.vx, ball.vy = x, y, vx, vy
    return ball


class TestSetup:

    def test_paddles_start_centred(self, game):
        s = game.session

        assert s.player.x == 10
        assert s.ai.x == 800 - 15 - 10
        assert s.player.y == s.ai.y == (500 - 100) / 2

    def test_first_serve_has_configured_speed(self, game):
        ball = game.session.ball

        assert (ball.x, ball.y) == (400, 250)
        assert math.hypot(ball.vx, ball.vy) == pytest.approx(5.0)

    def test_invalid_config_rejected(self):
        with pytest.raises(ValueError):
            PongConfig(ball_speed=0).validate()
        with pytest.raises(ValueError):
            PongConfig(height=50).validate()

    @pytest.mark.parametrize("overrides", [
        {"paddle_speed": -5},
        {"paddle_speed": 0},
        {"ai_speed": 0},
        {"ai_speed": -1},
        {"ball_speed": -5},
    ])
    def test_non_positive_speeds_rejected(self, overrides):
        with pytest.raises(ValueError):
            PongGame(PongConfig(**overrides))


class TestDeflect:

    @pytest.mark.parametrize("offset", [-49.0, -20.0, 0.0, 13.0, 49.0])
    def test_speed_preserved(self, offset):
        paddle = Paddle(x=10, y=200)
        ball = Ball(x=30, y=paddle.center + offset, vx=-3, vy=4)

        deflect(ball, paddle, 1, math.pi / 4)

        assert math.hypot(ball.vx, ball.vy) == pytest.approx(ball.speed)
        assert ball.vx > 0

    def test_centre_hit_goes_straight(self):
        paddle = Paddle(x=10, y=200)
        ball = Ball(x=30, y=paddle.center, vx=-5, vy=2)

        deflect(ball, paddle, 1, math.pi / 4)

        assert ball.vx == pytest.approx(5.0)
        assert ball.vy == pytest.approx(0.0)

    def test_angle_follows_offset(self):
        paddle = Paddle(x=10, y=200)
        ball = Ball(x=30, y=paddle.center + 25, vx=-5, vy=0)

        deflect(ball, paddle, -1, math.pi / 4)

        assert math.atan2(ball.vy, -ball.vx) == pytest.approx(0.5 * math.pi / 4)
        assert ball.vx < 0


class TestUpdate:

    def test_player_paddle_returns_ball(self, game):
        player = game.session.player
        place_ball(game, 30, player.center + 20, -5, 0)

        events = update_pong(game.session, game.config, game.rng)

        ball = game.session.ball
        assert events["player_return"] == 1
        assert ball.vx > 0
        assert math.hypot(ball.vx, ball.vy) == pytest.approx(5.0)

    def test_ai_paddle_returns_ball(self, game):
        ai = game.session.ai
        place_ball(game, 770, ai.center - 10, 5, 0)

        events = update_pong(game.session, game.config, game.rng)

        ball = game.session.ball
        assert events["ai_return"] == 1
        assert ball.vx < 0
        assert math.hypot(ball.vx, ball.vy) == pytest.approx(5.0)

    def test_miss_outside_span_scores_and_serves(self, game):
        place_ball(game, 12, 50, -5, 0)

        events = update_pong(game.session, game.config, game.rng)

        ball = game.session.ball
        assert events["ai_point"] == 1
        assert events["player_return"] == 0
        assert (ball.x, ball.y) == (400, 250)
        assert math.hypot(ball.vx, ball.vy) == pytest.approx(5.0)
        assert abs(ball.vy) <= 5.0 * math.sin(math.pi / 4) + 1e-9

    def test_right_exit_is_player_point(self, game):
        game.session.ai.y = 0
        place_ball(game, 792, 450, 5, 0)

        events = update_pong(game.session, game.config, game.rng)

        assert events["player_point"] == 1
        assert game.session.ball.x == 400

    def test_top_wall_reflects(self, game):
        place_ball(game, 400, 12, 3, -4)

        events = update_pong(game.session, game.config, game.rng)

        assert events["wall"] == 1
        assert game.session.ball.vy == 4

    def test_bottom_wall_reflects(self, game):
        place_ball(game, 400, 488, 3, 4)

        update_pong(game.session, game.config, game.rng)

        assert game.session.ball.vy == -4


class TestTracking:

    def test_follows_ball_outside_deadzone(self):
        cfg = PongConfig()
        paddle = Paddle(x=775, y=200)

        track(paddle, 400, cfg)
        assert paddle.y == 205

        track(paddle, 100, cfg)
        assert paddle.y == 200

    def test_holds_inside_deadzone(self):
        cfg = PongConfig()
        paddle = Paddle(x=775, y=200)

        track(paddle, 258, cfg)

        assert paddle.y == 200

    def test_clamped_at_walls(self):
        cfg = PongConfig()
        paddle = Paddle(x=775, y=2)

        track(paddle, -100, cfg)

        assert paddle.y == 0


class TestPlayerInput:

    def test_keyboard_clamps(self, game):
        for _ in range(100):
            game.move_player(-1)
        assert game.session.player.y == 0

        for _ in range(100):
            game.move_player(1)
        assert game.session.player.y == 400

    def test_pointer_centres_and_clamps(self, game):
        game.point_player(300)
        assert game.session.player.y == 250

        game.point_player(1000)
        assert game.session.player.y == 400

        game.point_player(-50)
        assert game.session.player.y == 0


class TestInvariants:

    def test_paddles_stay_on_court(self):
        rng = random.Random(3)
        game = PongGame(rng=random.Random(11))
        cfg = game.config

        for _ in range(3000):
            game.point_player(rng.uniform(-200, 700))
            events = game.step()
            for paddle in (game.session.player, game.session.ai):
                assert 0 <= paddle.y <= cfg.height - paddle.height
            if events["player_return"] or events["ai_return"]:
                ball = game.session.ball
                assert math.hypot(ball.vx, ball.vy) == pytest.approx(cfg.ball_speed)

    def test_serve_magnitude_bounded(self):
        cfg = PongConfig()
        ball = Ball(x=0, y=0, vx=0, vy=0)
        rng = random.Random(5)

        for _ in range(200):
            serve(ball, cfg, rng)
            assert math.hypot(ball.vx, ball.vy) <= cfg.ball_speed + 1e-9
            assert (ball.x, ball.y) == (cfg.width / 2, cfg.height / 2)

    def test_reset_replaces_court(self, game):
        old = game.session
        game.point_player(0)

        game.reset()

        assert game.session is not old
        assert game.session.player.y == 200
