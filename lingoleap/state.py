from dataclasses import dataclass, field
from enum import Enum


class RunPhase(Enum):
    MENU = "menu"
    START = "start"
    PLAYING = "playing"
    GAME_OVER = "gameOver"
    LEVEL_COMPLETE = "levelComplete"


@dataclass
class SessionState:
    current_level: int
    phase: RunPhase = RunPhase.MENU
    run_id: int = 0
    score: int = 0
    scroll_speed: float = 0.0
    ticks: int = 0
    elapsed: float = 0.0


@dataclass(frozen=True)
class SessionEvent:
    """Something that happened during a run, delivered to session listeners."""

    kind: str
    run_id: int
    score: int
    data: dict = field(default_factory=dict)
