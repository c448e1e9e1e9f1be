"""
Space Invaders simulation
-------------------------
- Plain session dataclass holding score, lives, timer and entity lists
- Free functions for per-entity movement and spawning
- `update_session` advances one frame; `InvadersGame` owns the lifecycle
  (idle -> running <-> paused -> won/lost -> reset)

Coordinates have their origin at the top-left corner with y growing downward.
"""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .entities import Player, Alien, Bullet
from .utils import clamp, rect_collide

logger = logging.getLogger(__name__)

StatsListener = Callable[[int, int], None]


class SessionStatus(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class InvadersConfig:
    """Game constants; defaults reproduce the classic browser build"""
    width: int = 800
    height: int = 600
    start_lives: int = 3
    kill_score: int = 10

    # Formation
    rows: int = 5
    cols: int = 8
    grid_x: float = 80.0
    grid_y: float = 50.0
    col_spacing: float = 60.0
    row_spacing: float = 40.0
    alien_speed: float = 0.5
    edge_padding: float = 10.0
    drop_step: float = 15.0

    # Player
    player_speed: float = 5.0
    player_bottom_margin: float = 20.0

    # Bullets
    player_bullet_speed: float = -8.0
    alien_bullet_speed: float = 5.0

    # Alien fire: silent until `fire_delay` frames, then ramps up to a cap
    fire_delay: int = 300
    fire_base_chance: float = 0.0005
    fire_ramp_frames: float = 6000.0
    fire_ramp_chance: float = 0.001
    fire_max_chance: float = 0.002

    def validate(self) -> "InvadersConfig":
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas must have positive size, got {self.width}x{self.height}")
        if self.rows < 0 or self.cols < 0:
            raise ValueError("Formation rows/cols must be non-negative")
        if self.start_lives <= 0:
            raise ValueError(f"start_lives must be positive, got {self.start_lives}")
        if self.player_bullet_speed >= 0 or self.alien_bullet_speed <= 0:
            raise ValueError("Player bullets must travel up (<0) and alien bullets down (>0)")
        for name in ("alien_speed", "player_speed", "drop_step", "fire_ramp_frames"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.fire_delay < 0:
            raise ValueError(f"fire_delay must be non-negative, got {self.fire_delay}")
        return self


@dataclass
class InvadersSession:
    """Everything that changes during one game"""
    player: Player
    aliens: List[Alien] = field(default_factory=list)
    bullets: List[Bullet] = field(default_factory=list)
    score: int = 0
    lives: int = 3
    timer: int = 0
    status: SessionStatus = SessionStatus.IDLE

    @property
    def running(self) -> bool:
        return self.status in (SessionStatus.RUNNING, SessionStatus.PAUSED)

    @property
    def paused(self) -> bool:
        return self.status is SessionStatus.PAUSED


# ----------------------------
# Entity functions
# ----------------------------

def spawn_player(cfg: InvadersConfig) -> Player:
    player = Player(x=0.0, y=0.0, speed=cfg.player_speed)
    player.x = cfg.width / 2 - player.width / 2
    player.y = cfg.height - player.height - cfg.player_bottom_margin
    return player


def spawn_formation(cfg: InvadersConfig) -> List[Alien]:
    return [
        Alien(
            x=cfg.grid_x + col * cfg.col_spacing,
            y=cfg.grid_y + row * cfg.row_spacing,
            speed=cfg.alien_speed,
        )
        for row in range(cfg.rows)
        for col in range(cfg.cols)
    ]


def spawn_bullet(x: float, y: float, speed: float) -> Bullet:
    """Bullet centred horizontally on `x`"""
    bullet = Bullet(x=x, y=y, speed=speed)
    bullet.x -= bullet.width / 2
    return bullet


def move_player(player: Player, direction: int, width: float):
    player.x = clamp(player.x + direction * player.speed, 0.0, width - player.width)


def center_player(player: Player, pointer_x: float, width: float):
    """Centre the ship on the pointer; pointers outside the canvas are ignored"""
    if 0 < pointer_x < width:
        player.x = clamp(pointer_x - player.width / 2, 0.0, width - player.width)


def move_alien(alien: Alien):
    alien.x += alien.speed * alien.direction


def drop_and_reverse(alien: Alien, drop: float):
    alien.y += drop
    alien.direction *= -1


def move_bullet(bullet: Bullet):
    bullet.y += bullet.speed


def off_screen(bullet: Bullet, height: float) -> bool:
    return bullet.y < 0 or bullet.y > height


def fire_chance(timer: int, cfg: InvadersConfig) -> float:
    """Per-alien, per-frame probability of shooting"""
    if timer < cfg.fire_delay:
        return 0.0
    chance = cfg.fire_base_chance + (timer / cfg.fire_ramp_frames) * cfg.fire_ramp_chance
    return min(chance, cfg.fire_max_chance)


def move_formation(aliens: List[Alien], cfg: InvadersConfig) -> bool:
    """
    Move every alien, then react as a group if any of them reached a margin.
    Returns True when the formation dropped and reversed.
    """
    for alien in aliens:
        move_alien(alien)

    left = cfg.edge_padding
    right = cfg.width - cfg.edge_padding
    hit_edge = any(a.x <= left or a.x + a.width >= right for a in aliens)

    if hit_edge:
        for alien in aliens:
            drop_and_reverse(alien, cfg.drop_step)
    return hit_edge


def new_session(cfg: InvadersConfig, status: SessionStatus = SessionStatus.IDLE) -> InvadersSession:
    return InvadersSession(
        player=spawn_player(cfg),
        aliens=spawn_formation(cfg),
        bullets=[],
        score=0,
        lives=cfg.start_lives,
        timer=0,
        status=status,
    )


# ----------------------------
# Frame update
# ----------------------------

def update_session(
    session: InvadersSession,
    cfg: InvadersConfig,
    rng=random,
    on_change: Optional[Callable[[], None]] = None,
) -> Dict[str, float]:
    """
    Advance one frame. Returns per-frame event counts:
    kill, life_lost, alien_shot.
    `on_change` is called after every score or lives change.
    """
    events = {"kill": 0.0, "life_lost": 0.0, "alien_shot": 0.0}
    if session.status is not SessionStatus.RUNNING:
        return events

    session.timer += 1

    if not session.aliens:
        session.status = SessionStatus.WON
        return events

    move_formation(session.aliens, cfg)

    chance = fire_chance(session.timer, cfg)
    if chance > 0:
        for alien in session.aliens:
            if rng.random() < chance:
                session.bullets.append(
                    spawn_bullet(alien.x + alien.width / 2, alien.y + alien.height, cfg.alien_bullet_speed)
                )
                events["alien_shot"] += 1.0

    player = session.player
    if any(a.y + a.height >= player.y for a in session.aliens):
        session.status = SessionStatus.LOST
        return events

    # Walk backwards so removals don't shift unvisited entries
    bullets = session.bullets
    aliens = session.aliens
    for i in range(len(bullets) - 1, -1, -1):
        bullet = bullets[i]
        move_bullet(bullet)

        if off_screen(bullet, cfg.height):
            del bullets[i]
            continue

        if bullet.from_player:
            for j in range(len(aliens) - 1, -1, -1):
                if rect_collide(bullet, aliens[j]):
                    session.score += cfg.kill_score
                    del bullets[i]
                    del aliens[j]
                    events["kill"] += 1.0
                    if on_change is not None:
                        on_change()
                    break
        elif rect_collide(bullet, player):
            session.lives = max(session.lives - 1, 0)
            del bullets[i]
            events["life_lost"] += 1.0
            if on_change is not None:
                on_change()
            if session.lives <= 0:
                session.status = SessionStatus.LOST
                return events

    if not aliens:
        session.status = SessionStatus.WON

    return events


# ----------------------------
# Lifecycle
# ----------------------------

class InvadersGame:
    """Owns the current session and applies start/pause/reset intents"""

    def __init__(
        self,
        config: Optional[InvadersConfig] = None,
        on_stats: Optional[StatsListener] = None,
        rng=None,
    ):
        self.config = (config or InvadersConfig()).validate()
        self.on_stats = on_stats
        self.rng = rng if rng is not None else random
        self.session = new_session(self.config)
        self._notify()

    @property
    def status(self) -> SessionStatus:
        return self.session.status

    @property
    def active(self) -> bool:
        """True while the simulation branch runs"""
        return self.session.status is SessionStatus.RUNNING

    def start(self):
        status = self.session.status
        if status is SessionStatus.PAUSED:
            self.session.status = SessionStatus.RUNNING
            logger.info("Resumed")
        elif status is not SessionStatus.RUNNING:
            self.session = new_session(self.config, SessionStatus.RUNNING)
            self._notify()
            logger.info("Started new game")

    def toggle_pause(self):
        if self.session.status is SessionStatus.RUNNING:
            self.session.status = SessionStatus.PAUSED
            logger.info("Paused")
        elif self.session.status is SessionStatus.PAUSED:
            self.session.status = SessionStatus.RUNNING
            logger.info("Resumed")

    def reset(self):
        self.session = new_session(self.config)
        self._notify()
        logger.info("Reset")

    # Player intents

    def move_player(self, direction: int):
        if self.active:
            move_player(self.session.player, direction, self.config.width)

    def point_player(self, pointer_x: float):
        if self.active:
            center_player(self.session.player, pointer_x, self.config.width)

    def shoot(self) -> bool:
        if not self.active:
            return False
        player = self.session.player
        self.session.bullets.append(
            spawn_bullet(player.x + player.width / 2, player.y, self.config.player_bullet_speed)
        )
        return True

    def step(self) -> Dict[str, float]:
        before = self.session.status
        events = update_session(self.session, self.config, self.rng, self._notify)

        if before is not self.session.status:
            if self.session.status is SessionStatus.WON:
                logger.info("Formation cleared, final score %d", self.session.score)
            elif self.session.status is SessionStatus.LOST:
                logger.info("Game over, final score %d", self.session.score)
        return events

    def _notify(self):
        if self.on_stats is not None:
            self.on_stats(self.session.score, self.session.lives)


def run_frames(game: InvadersGame, max_frames: int) -> int:
    """Step the game until it stops running or `max_frames` elapse; returns frames simulated"""
    frames = 0
    while frames < max_frames and game.active:
        game.step()
        frames += 1
    return frames
