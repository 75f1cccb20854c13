import logging
from enum import Enum

from .challenges import ChallengeKind
from .config import FIRST_SPAWN_X, RETIRE_X, SPAWN_X, TRIGGER_DISTANCE
from .errors import InsufficientVocabulary

logger = logging.getLogger(__name__)


class AnswerOutcome(Enum):
    IGNORED = "ignored"
    CORRECT = "correct"
    WRONG = "wrong"


class ChallengeLifecycle:
    """
    Owns the single active challenge from spawn to retirement.

    pending --correct answer--> armed --trigger window--> resolved --off-screen--> retired

    A wrong answer does not move the challenge; the session turns it into a
    game over. Retiring a challenge ratchets the scroller and asks the
    generator for a replacement.
    """

    def __init__(self, generator, physics, scroller, trigger_distance=TRIGGER_DISTANCE,
                 retire_x=RETIRE_X, first_spawn_x=FIRST_SPAWN_X, spawn_x=SPAWN_X):
        self.generator = generator
        self.physics = physics
        self.scroller = scroller
        self.trigger_distance = trigger_distance
        self.retire_x = retire_x
        self.first_spawn_x = first_spawn_x
        self.spawn_x = spawn_x

        self.level = None
        self.challenge = None
        self.spawned = 0
        self._replacement_failed = False

    @property
    def needs_replacement(self):
        return self.challenge is not None and self.challenge.passed

    def start(self, level):
        """Discard whatever is in flight and spawn the first challenge of a run."""
        self.discard()
        self.level = level
        self.spawned = 0
        self.challenge = self._spawn(self.first_spawn_x)
        return self.challenge

    def discard(self):
        self.challenge = None
        self._replacement_failed = False

    def _spawn(self, x):
        challenge = self.generator.generate(x, self.level)
        self.spawned += 1
        challenge.serial = self.spawned
        logger.debug("spawned %s challenge #%d at x=%.1f", challenge.kind.value, challenge.serial, x)
        return challenge

    def submit_answer(self, kind, value):
        kind = ChallengeKind.parse(kind)
        challenge = self.challenge
        if challenge is None or challenge.passed or challenge.cleared or challenge.kind is not kind:
            return AnswerOutcome.IGNORED

        if value != challenge.correct_answer:
            return AnswerOutcome.WRONG

        challenge.cleared = True
        challenge.armed_to_avoid = True
        logger.debug("challenge #%d armed", challenge.serial)
        return AnswerOutcome.CORRECT

    def advance(self, distance):
        if self.challenge is not None and not self.challenge.passed:
            self.challenge.world_x -= distance

    def fire_dodge(self, player):
        """Fire the primed dodge once the player is grounded inside the trigger window."""
        challenge = self.challenge
        if challenge is None or not challenge.armed_to_avoid or not player.grounded:
            return False

        gap = challenge.world_x - player.horizontal_position
        if not 0 < gap < self.trigger_distance:
            return False

        if challenge.kind is ChallengeKind.JUMP:
            self.physics.trigger_jump(player)
        else:
            self.physics.trigger_crouch(player)
        challenge.armed_to_avoid = False
        challenge.resolved = True
        logger.debug("challenge #%d resolved with a %s at gap %.1f", challenge.serial, challenge.kind.value, gap)
        return True

    def retire_if_offscreen(self):
        """Retire the challenge once it has scrolled past the trailing edge.

        Returns the retired challenge, or None when nothing was retired.
        """
        challenge = self.challenge
        if challenge is None or challenge.passed or challenge.world_x >= self.retire_x:
            return None
        challenge.passed = True
        self.scroller.ratchet()
        logger.debug("challenge #%d retired, scroll speed now %.1f", challenge.serial, self.scroller.speed)
        return challenge

    def replace_retired(self):
        if not self.needs_replacement:
            return None
        try:
            replacement = self._spawn(self.spawn_x)
        except InsufficientVocabulary as exc:
            if not self._replacement_failed:
                logger.error("could not generate the next challenge, keeping #%d: %s", self.challenge.serial, exc)
                self._replacement_failed = True
            return None

        self._replacement_failed = False
        self.challenge = replacement
        return replacement
