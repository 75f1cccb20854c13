import logging

import numpy as np

from .challenges import ChallengeGenerator, ChallengeKind
from .collision import CollisionJudge
from .config import (
    DEFAULT_LEVELS,
    FRAME_DT,
    JUMP_ANSWER_POINTS,
    PASS_BONUS_POINTS,
    SLIDE_ANSWER_POINTS,
    validate_levels,
)
from .errors import InvalidAnswerEvent, InvalidPhaseTransition, LevelLocked
from .lifecycle import AnswerOutcome, ChallengeLifecycle
from .physics import PhysicsSimulator
from .progression import InMemoryProgressStore, ProgressionController
from .state import RunPhase, SessionEvent, SessionState
from .vocabulary import VocabularyPool
from .world import WorldScroller

logger = logging.getLogger(__name__)

_TRANSITIONS = {
    RunPhase.MENU: {RunPhase.START},
    RunPhase.START: {RunPhase.PLAYING, RunPhase.MENU},
    RunPhase.PLAYING: {RunPhase.GAME_OVER, RunPhase.LEVEL_COMPLETE, RunPhase.MENU},
    RunPhase.GAME_OVER: {RunPhase.START, RunPhase.MENU},
    RunPhase.LEVEL_COMPLETE: {RunPhase.START, RunPhase.MENU},
}

_ANSWER_POINTS = {
    ChallengeKind.JUMP: JUMP_ANSWER_POINTS,
    ChallengeKind.SLIDE: SLIDE_ANSWER_POINTS,
}


class GameSession:
    """
    One player's game: menus, runs and everything that happens in a tick.

    ``step`` advances the simulation by ``dt`` seconds and ``submit_answer``
    is the only outside input while playing. Both return the events they
    produced; the same events are also pushed to every registered listener.
    """

    def __init__(self, vocabulary=None, levels=DEFAULT_LEVELS, sink=None, record=None, high_score=0,
                 np_random=None, physics=None, judge=None, listeners=()):
        self.levels = validate_levels(levels)
        self.vocabulary = vocabulary if vocabulary is not None else VocabularyPool()
        self.np_random = np_random if np_random is not None else np.random.default_rng()
        self.sink = sink if sink is not None else InMemoryProgressStore(record, high_score)

        self.physics = physics or PhysicsSimulator()
        self.judge = judge or CollisionJudge()
        self.generator = ChallengeGenerator(self.vocabulary, self.np_random)
        self.progression = ProgressionController(self.levels, self.sink, record, high_score)
        self.scroller = WorldScroller(self.levels[0])
        self.lifecycle = ChallengeLifecycle(self.generator, self.physics, self.scroller)
        self.player = self.physics.new_player()

        start_level = self.progression.record.current_level
        if start_level not in self._level_ids():
            start_level = self.levels[0].id
        self.state = SessionState(current_level=start_level, scroll_speed=self.scroller.speed)

        self.listeners = list(listeners)
        self._outbox = []

    # --- Accessors ---

    @property
    def phase(self):
        return self.state.phase

    @property
    def score(self):
        return self.state.score

    @property
    def challenge(self):
        return self.lifecycle.challenge

    @property
    def level(self):
        return self.get_level(self.state.current_level)

    @property
    def record(self):
        return self.progression.record

    @property
    def high_score(self):
        return self.progression.high_score

    def _level_ids(self):
        return [level.id for level in self.levels]

    def get_level(self, level_id):
        for level in self.levels:
            if level.id == level_id:
                return level
        raise KeyError(f"no level with id {level_id}")

    def add_listener(self, listener):
        self.listeners.append(listener)

    # --- Phase control ---

    def _enter(self, phase):
        if phase not in _TRANSITIONS[self.state.phase]:
            raise InvalidPhaseTransition(self.state.phase, phase)
        logger.debug("phase %s -> %s", self.state.phase.value, phase.value)
        self.state.phase = phase

    def _emit(self, event_kind, **data):
        event = SessionEvent(event_kind, self.state.run_id, self.state.score, data)
        self._outbox.append(event)
        for listener in self.listeners:
            listener(event)

    def _drain(self):
        events, self._outbox = self._outbox, []
        return events

    def _playable_level(self, level_id):
        level = self.get_level(level_id)
        if level.id not in self.record.unlocked_level_ids:
            raise LevelLocked(f"level {level.id} is locked")
        return level

    def select_level(self, level_id):
        level = self._playable_level(level_id)
        if self.state.phase is not RunPhase.START:
            self._enter(RunPhase.START)
        self.state.current_level = level.id
        return level

    def start_run(self, level_id=None, np_random=None):
        """Begin a fresh run, abandoning any run still in progress."""
        if level_id is None:
            level_id = self.state.current_level
        self._playable_level(level_id)
        if self.state.phase is RunPhase.PLAYING:
            self.stop_run()
        level = self.select_level(level_id)

        if np_random is not None:
            self.np_random = np_random
            self.generator.np_random = np_random

        self.player = self.physics.new_player()
        self.scroller.reset(level)
        self.progression.begin(level)
        # Raises InsufficientVocabulary with the session still in START
        first = self.lifecycle.start(level)

        self.state.run_id += 1
        self.state.score = 0
        self.state.scroll_speed = self.scroller.speed
        self.state.ticks = 0
        self.state.elapsed = 0.0
        self._enter(RunPhase.PLAYING)
        logger.info("run %d started on level %d", self.state.run_id, level.id)

        self._emit("run_started", level=level.id)
        self._emit("challenge_spawned", serial=first.serial, kind=first.kind.value)
        return self._drain()

    def stop_run(self):
        """Leave the current run for the menu, dropping the in-flight challenge."""
        if self.state.phase is RunPhase.MENU:
            return
        self._enter(RunPhase.MENU)
        self.lifecycle.discard()
        self.player = self.physics.new_player()

    # --- Scoring ---

    def _award(self, points):
        result = self.progression.award(points)
        self.state.score = self.progression.score
        if result is not None:
            self._finish(result)

    def _fail(self, cause):
        result = self.progression.fail()
        if result is not None:
            self._finish(result, cause)

    def _finish(self, result, cause=None):
        self._enter(result.phase)
        self.lifecycle.discard()
        if result.phase is RunPhase.LEVEL_COMPLETE:
            logger.info("run %d completed level %d with %d points", self.state.run_id,
                        self.state.current_level, result.score)
            self._emit("level_complete", level=self.state.current_level, coins=result.coins_awarded,
                       unlocked_level=result.unlocked_level_id, new_high_score=result.new_high_score)
            if self.record.current_level in self._level_ids():
                self.state.current_level = self.record.current_level
        else:
            logger.info("run %d over (%s) with %d points", self.state.run_id, cause, result.score)
            self._emit("game_over", cause=cause, new_high_score=result.new_high_score)

    # --- Input and simulation ---

    def submit_answer(self, kind, value):
        if self.state.phase is not RunPhase.PLAYING:
            return []

        try:
            outcome = self.lifecycle.submit_answer(kind, value)
        except InvalidAnswerEvent as exc:
            logger.warning("ignoring answer event: %s", exc)
            self._emit("answer_ignored", reason=str(exc))
            return self._drain()

        challenge = self.lifecycle.challenge
        if outcome is AnswerOutcome.IGNORED:
            self._emit("answer_ignored", reason="no pending challenge of that kind")
        elif outcome is AnswerOutcome.CORRECT:
            self._emit("answer_correct", serial=challenge.serial, kind=challenge.kind.value, answer=value)
            self._award(_ANSWER_POINTS[challenge.kind])
        else:
            self._emit("answer_wrong", serial=challenge.serial, kind=challenge.kind.value, answer=value,
                       expected=challenge.correct_answer)
            self._fail("wrong_answer")
        return self._drain()

    def step(self, dt=FRAME_DT):
        if dt <= 0:
            raise ValueError(f"time step must be positive, got {dt}")
        if self.state.phase is not RunPhase.PLAYING:
            return []

        self.state.ticks += 1
        self.state.elapsed += dt

        self.physics.update(self.player, dt)
        scrolled = self.scroller.advance(dt)
        self.lifecycle.advance(scrolled)

        challenge = self.lifecycle.challenge
        if self.lifecycle.fire_dodge(self.player):
            self._emit("dodge", serial=challenge.serial, kind=challenge.kind.value)

        if self.judge.is_fatal(self.player, challenge, swept=scrolled):
            self._emit("collision", serial=challenge.serial, kind=challenge.kind.value)
            self._fail("collision")
            return self._drain()

        retired = self.lifecycle.retire_if_offscreen()
        if retired is not None:
            self.state.scroll_speed = self.scroller.speed
            self._emit("challenge_retired", serial=retired.serial, scroll_speed=self.scroller.speed)
            self._award(PASS_BONUS_POINTS)

        if self.state.phase is RunPhase.PLAYING and self.lifecycle.needs_replacement:
            replacement = self.lifecycle.replace_retired()
            if replacement is not None:
                self._emit("challenge_spawned", serial=replacement.serial, kind=replacement.kind.value)

        return self._drain()

    def snapshot(self):
        player = self.player
        challenge = self.lifecycle.challenge
        snap = {
            "phase": self.state.phase.value,
            "run_id": self.state.run_id,
            "score": self.state.score,
            "high_score": self.progression.high_score,
            "level": self.state.current_level,
            "scroll_speed": self.state.scroll_speed,
            "ticks": self.state.ticks,
            "elapsed": self.state.elapsed,
            "player": {
                "x": player.horizontal_position,
                "y": player.vertical_position,
                "vy": player.vertical_velocity,
                "airborne": player.airborne,
                "crouching": player.crouching,
            },
            "challenge": None,
        }
        if challenge is not None:
            snap["challenge"] = {
                "serial": challenge.serial,
                "kind": challenge.kind.value,
                "prompt": challenge.prompt,
                "options": list(challenge.options),
                "x": challenge.world_x,
                "state": challenge.state.value,
            }
        return snap
