"""Tuning constants and the level catalog.

All geometry lives in one logical 800x500 coordinate space with y growing
downward. Time is measured in seconds; the constants reproduce the classic
per-frame tuning at 60 frames per second.
"""
from dataclasses import dataclass

from .errors import InvalidLevelCatalog

# --- Timing ---
FPS = 60
FRAME_DT = 1.0 / FPS
MAX_STEPS = 20000

# --- Display / world ---
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 500

# --- Player ---
PLAYER_X = 100.0
PLAYER_WIDTH = 40.0
PLAYER_HEIGHT = 50.0
GROUND_Y = 350.0                          # player top while standing
GROUND_SURFACE_Y = GROUND_Y + PLAYER_HEIGHT

# --- Physics ---
GRAVITY = 4320.0                          # px/s^2, 1.2 px/frame^2
JUMP_VELOCITY = -720.0                    # px/s, -12 px/frame
CROUCH_DURATION = 0.8                     # s

# --- Hazards ---
GAP_WIDTH = 50.0
GAP_DEPTH = 20.0
OBSTACLE_WIDTH = 40.0
OBSTACLE_HEIGHT = 60.0
OBSTACLE_CLEARANCE = 30.0                 # space between obstacle and ground

# --- Challenge flow ---
TRIGGER_DISTANCE = 150.0
RETIRE_X = -200.0
FIRST_SPAWN_X = SCREEN_WIDTH + 200.0
SPAWN_X = SCREEN_WIDTH + 300.0
ICON_PROMPT_MIN_LEVEL = 2

# --- Scoring ---
JUMP_ANSWER_POINTS = 100
SLIDE_ANSWER_POINTS = 50
PASS_BONUS_POINTS = 10
COIN_DIVISOR = 10


@dataclass(frozen=True)
class LevelDefinition:
    id: int
    points_required: int
    initial_scroll_speed: float
    scroll_speed_increment: float
    scroll_speed_cap: float


DEFAULT_LEVELS = (
    LevelDefinition(1, 2500, 300.0, 12.0, 720.0),
    LevelDefinition(2, 4000, 360.0, 15.0, 780.0),
    LevelDefinition(3, 6000, 420.0, 18.0, 840.0),
)


def validate_levels(levels):
    """Return the catalog as a tuple, raising InvalidLevelCatalog if malformed."""
    levels = tuple(levels)
    if not levels:
        raise InvalidLevelCatalog("level catalog is empty")

    seen = set()
    for level in levels:
        if level.id in seen:
            raise InvalidLevelCatalog(f"duplicate level id {level.id}")
        seen.add(level.id)
        if level.points_required <= 0:
            raise InvalidLevelCatalog(f"level {level.id}: points_required must be positive")
        if level.scroll_speed_increment < 0:
            raise InvalidLevelCatalog(f"level {level.id}: negative scroll_speed_increment")
        if level.initial_scroll_speed > level.scroll_speed_cap:
            raise InvalidLevelCatalog(
                f"level {level.id}: initial scroll speed exceeds cap "
                f"({level.initial_scroll_speed} > {level.scroll_speed_cap})"
            )
    return levels
