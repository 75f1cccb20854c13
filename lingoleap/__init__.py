from gymnasium.envs.registration import register

from .challenges import Challenge, ChallengeGenerator, ChallengeKind, ChallengeState
from .collision import CollisionJudge
from .config import DEFAULT_LEVELS, FRAME_DT, LevelDefinition
from .errors import (
    InsufficientVocabulary,
    InvalidAnswerEvent,
    InvalidLevelCatalog,
    InvalidPhaseTransition,
    LevelLocked,
    LingoLeapError,
)
from .lifecycle import AnswerOutcome, ChallengeLifecycle
from .physics import Hitbox, PhysicsSimulator, PlayerState
from .progression import InMemoryProgressStore, ProgressionController, ProgressRecord, ProgressSink, RunResult
from .session import GameSession
from .state import RunPhase, SessionEvent, SessionState
from .vocabulary import DEFAULT_VOCABULARY, VocabularyEntry, VocabularyPool
from .world import WorldScroller

__version__ = "0.1.0"

register(id="LingoLeap-v0", entry_point="lingoleap.env:GameEnv")
