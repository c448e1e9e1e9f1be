"""
Draw routines shared by the arcade window and the numpy rasterizer.

A surface exposes clear, fill_rect, fill_triangle, fill_circle and draw_text in
top-left origin coordinates. Draw routines only read the session.
"""

from __future__ import annotations

from .entities import PLAYER_COLOR, ALIEN_COLOR
from .invaders import InvadersSession, InvadersConfig, SessionStatus
from .pong import PongSession, PongConfig

BG = (0, 0, 0)
EYE_C = (0, 0, 0)
TEXT_C = (255, 255, 255)
WIN_C = (0, 255, 0)
LOSE_C = (255, 0, 0)

PONG_PLAYER_C = (0, 255, 255)
PONG_AI_C = (255, 0, 255)
PONG_BALL_C = (0, 255, 255)
DIVIDER_C = (85, 85, 85)


def draw_player(surface, player):
    surface.fill_triangle(
        (player.x + player.width / 2, player.y),
        (player.x, player.y + player.height),
        (player.x + player.width, player.y + player.height),
        PLAYER_COLOR,
    )


def draw_alien(surface, alien):
    surface.fill_rect(alien.x, alien.y, alien.width, alien.height, ALIEN_COLOR)
    # Eyes
    surface.fill_rect(alien.x + 10, alien.y + 10, 5, 5, EYE_C)
    surface.fill_rect(alien.x + alien.width - 15, alien.y + 10, 5, 5, EYE_C)


def draw_bullet(surface, bullet):
    surface.fill_rect(bullet.x, bullet.y, bullet.width, bullet.height, bullet.color)


def draw_banner(surface, cfg, title: str, title_color, lines=(), shade: int = 178):
    cx, cy = cfg.width / 2, cfg.height / 2
    surface.fill_rect(0, 0, cfg.width, cfg.height, (0, 0, 0, shade))
    surface.draw_text(title, cx, cy - 40, title_color, 36)
    for i, line in enumerate(lines):
        surface.draw_text(line, cx, cy + 10 + i * 40, TEXT_C, 24)


def draw_invaders(surface, session: InvadersSession, cfg: InvadersConfig):
    surface.clear(BG)

    draw_player(surface, session.player)
    for alien in session.aliens:
        draw_alien(surface, alien)
    for bullet in session.bullets:
        draw_bullet(surface, bullet)

    status = session.status
    if status is SessionStatus.PAUSED:
        surface.fill_rect(0, 0, cfg.width, cfg.height, (0, 0, 0, 128))
        surface.draw_text("GAME PAUSED", cfg.width / 2, cfg.height / 2, WIN_C, 30)
    elif status is SessionStatus.LOST:
        draw_banner(surface, cfg, "GAME OVER", LOSE_C,
                    [f"Final Score: {session.score}", "Press ENTER to play again"])
    elif status is SessionStatus.WON:
        draw_banner(surface, cfg, "YOU WON!", WIN_C,
                    [f"Final Score: {session.score}", "Press ENTER for a new game"])
    elif status is SessionStatus.IDLE:
        surface.draw_text("Press ENTER to start", cfg.width / 2, cfg.height / 2, TEXT_C, 24)


def draw_pong(surface, session: PongSession, cfg: PongConfig):
    surface.clear(BG)

    # Dashed centre line
    x = cfg.width / 2 - 1
    y = 0.0
    while y < cfg.height:
        surface.fill_rect(x, y, 2, 10, DIVIDER_C)
        y += 25

    for paddle, color in ((session.player, PONG_PLAYER_C), (session.ai, PONG_AI_C)):
        surface.fill_rect(paddle.x, paddle.y, paddle.width, paddle.height, color)

    ball = session.ball
    surface.fill_circle(ball.x, ball.y, ball.radius, PONG_BALL_C)
