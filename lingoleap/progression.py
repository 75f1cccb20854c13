import logging
from dataclasses import dataclass, replace
from typing import Protocol

from .config import COIN_DIVISOR
from .state import RunPhase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressRecord:
    unlocked_level_ids: frozenset = frozenset({1})
    current_level: int = 1
    total_coins: int = 0


@dataclass(frozen=True)
class RunResult:
    phase: RunPhase
    score: int
    coins_awarded: int = 0
    unlocked_level_id: int = None
    new_high_score: bool = False


class ProgressSink(Protocol):
    def save_high_score(self, score): ...

    def save_progress(self, record): ...


class InMemoryProgressStore:
    """Progress sink that keeps everything in memory, with a history of saves."""

    def __init__(self, record=None, high_score=0):
        self.record = record if record is not None else ProgressRecord()
        self.high_score = high_score
        self.history = []

    def load(self):
        return self.record, self.high_score

    def save_high_score(self, score):
        self.high_score = score
        self.history.append(("high_score", score))

    def save_progress(self, record):
        self.record = record
        self.history.append(("progress", record))


class ProgressionController:
    """
    Score keeping for one run against the active level's goal.

    Reaching ``points_required`` completes the level, pays out coins and
    unlocks the next level; a fatal event before that ends the run. Either
    way the run is over and further awards are ignored.
    """

    def __init__(self, levels, sink, record=None, high_score=0):
        self.levels = tuple(levels)
        self.sink = sink
        self.record = record if record is not None else ProgressRecord()
        self.high_score = high_score
        self.level = None
        self.score = 0
        self.result = None

    @property
    def finished(self):
        return self.result is not None

    def next_level(self, level):
        ids = [lvl.id for lvl in self.levels]
        index = ids.index(level.id)
        if index + 1 < len(self.levels):
            return self.levels[index + 1]
        return None

    def begin(self, level):
        self.level = level
        self.score = 0
        self.result = None

    def award(self, points):
        if points < 0:
            raise ValueError(f"score awards cannot be negative: {points}")
        if self.finished:
            return None
        self.score += points
        if self.score >= self.level.points_required:
            return self._complete_level()
        return None

    def fail(self):
        if self.finished:
            return None
        if self.score >= self.level.points_required:
            return self._complete_level()
        self.result = RunResult(RunPhase.GAME_OVER, self.score, new_high_score=self._record_high_score())
        return self.result

    def _complete_level(self):
        coins = self.score // COIN_DIVISOR
        record = replace(self.record, total_coins=self.record.total_coins + coins)

        unlocked = None
        following = self.next_level(self.level)
        if following is not None:
            if following.id not in record.unlocked_level_ids:
                unlocked = following.id
                record = replace(record, unlocked_level_ids=record.unlocked_level_ids | {following.id})
                logger.info("level %d unlocked", following.id)
            record = replace(record, current_level=following.id)

        self.record = record
        self.sink.save_progress(record)
        self.result = RunResult(
            RunPhase.LEVEL_COMPLETE,
            self.score,
            coins_awarded=coins,
            unlocked_level_id=unlocked,
            new_high_score=self._record_high_score(),
        )
        return self.result

    def _record_high_score(self):
        if self.score <= self.high_score:
            return False
        self.high_score = self.score
        self.sink.save_high_score(self.score)
        return True
