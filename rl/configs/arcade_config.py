"""
Environment and evaluation configuration for the arcade environments
"""

# Environment parameters
INVADERS_ENV_CONFIG = {
    "width": 800,
    "height": 600,
    "max_steps": 18000,  # 5 minutes at 60 FPS
    "start_lives": 3,
    "k_bullets": 3,
}

PONG_ENV_CONFIG = {
    "width": 800,
    "height": 500,
    "ball_speed": 5.0,
    "max_points": 5,
    "max_steps": 6000,
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

INVADERS_REWARDS = {
    "R_KILL": 1.0,       # Per alien destroyed
    "R_LIFE": 3.0,       # Penalty per life lost
    "R_SHOT": 0.01,      # Penalty per shot (discourage spraying)
    "R_TIME": 0.001,     # Small time penalty
    "R_WIN": 10.0,       # Formation cleared
    "R_LOSS": 10.0,      # Out of lives or overrun
}

PONG_REWARDS = {
    "R_POINT": 1.0,      # +/- per point won/lost
    "R_RETURN": 0.1,     # Per successful return
}

ENV_CONFIGS = {
    "invaders": (INVADERS_ENV_CONFIG, INVADERS_REWARDS),
    "pong": (PONG_ENV_CONFIG, PONG_REWARDS),
}

# ==============================================================================
# EVALUATION SETTINGS
# ==============================================================================

EVAL_CONFIG = {
    "n_episodes": 10,
    "seed": 42,
    "invaders_fire_every": 20,   # frames between heuristic shots
    "render_delay": 1 / 60,      # seconds between rendered frames
}
