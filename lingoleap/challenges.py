from dataclasses import dataclass
from enum import Enum

from .config import ICON_PROMPT_MIN_LEVEL
from .errors import InsufficientVocabulary, InvalidAnswerEvent


class ChallengeKind(Enum):
    JUMP = "jump"
    SLIDE = "slide"

    @classmethod
    def parse(cls, value):
        """Accept a kind, its name/value string or its action index (0 jump, 1 slide)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        elif isinstance(value, int) and not isinstance(value, bool):
            kinds = list(cls)
            if 0 <= value < len(kinds):
                return kinds[value]
        raise InvalidAnswerEvent(f"unknown answer kind {value!r}")


class ChallengeState(Enum):
    PENDING = "pending"
    ARMED = "armed"
    RESOLVED = "resolved"
    RETIRED = "retired"


@dataclass
class Challenge:
    kind: ChallengeKind
    prompt: str
    correct_answer: str
    options: tuple
    world_x: float
    icon_prompt: bool = False
    serial: int = 0
    cleared: bool = False         # answered correctly, collision suppressed
    armed_to_avoid: bool = False  # dodge primed, waiting for the trigger window
    resolved: bool = False        # dodge fired
    passed: bool = False          # scrolled off-screen and retired

    @property
    def state(self):
        if self.passed:
            return ChallengeState.RETIRED
        if self.resolved:
            return ChallengeState.RESOLVED
        if self.armed_to_avoid:
            return ChallengeState.ARMED
        return ChallengeState.PENDING


class ChallengeGenerator:
    """
    Builds quiz challenges from a vocabulary pool.

    Jump challenges ask for the translation of the source term, slide
    challenges for the source term of a translation. From
    ``icon_prompt_min_level`` on, the prompt is the entry's icon and the
    answer is always the source term.

    All randomness comes from ``np_random`` so a seeded generator makes the
    output reproducible.
    """

    def __init__(self, vocabulary, np_random, icon_prompt_min_level=ICON_PROMPT_MIN_LEVEL):
        self.vocabulary = vocabulary
        self.np_random = np_random
        self.icon_prompt_min_level = icon_prompt_min_level

    def generate(self, spawn_x, level, kind=None):
        level_id = getattr(level, "id", level)
        entry = self.vocabulary.sample(self.np_random)

        if kind is None:
            kind = ChallengeKind.JUMP if self.np_random.random() < 0.5 else ChallengeKind.SLIDE
        else:
            kind = ChallengeKind.parse(kind)

        icon_prompt = level_id >= self.icon_prompt_min_level and bool(entry.icon)
        if icon_prompt:
            prompt, answer_field = entry.icon, "source_term"
        elif kind is ChallengeKind.JUMP:
            prompt, answer_field = entry.source_term, "target_term"
        else:
            prompt, answer_field = entry.target_term, "source_term"

        correct = getattr(entry, answer_field)
        choices = [correct] + self._pick_distractors(entry, answer_field)
        order = self.np_random.permutation(len(choices))

        return Challenge(
            kind=kind,
            prompt=prompt,
            correct_answer=correct,
            options=tuple(choices[int(i)] for i in order),
            world_x=float(spawn_x),
            icon_prompt=icon_prompt,
        )

    def _pick_distractors(self, entry, answer_field):
        candidates = []
        for other in self.vocabulary.all_except(entry, answer_field):
            value = getattr(other, answer_field)
            if value not in candidates:
                candidates.append(value)

        if len(candidates) < 2:
            raise InsufficientVocabulary(
                f"need 3 distinct {answer_field} values to build a challenge, "
                f"pool has {len(candidates) + 1}"
            )

        picks = self.np_random.choice(len(candidates), size=2, replace=False)
        return [candidates[int(i)] for i in picks]
