import numpy as np
import pytest

from conftest import make_challenge
from lingoleap.challenges import ChallengeGenerator, ChallengeKind, ChallengeState
from lingoleap.config import DEFAULT_LEVELS, FIRST_SPAWN_X, SPAWN_X
from lingoleap.errors import InvalidAnswerEvent
from lingoleap.lifecycle import AnswerOutcome, ChallengeLifecycle
from lingoleap.physics import PhysicsSimulator
from lingoleap.vocabulary import VocabularyPool
from lingoleap.world import WorldScroller


@pytest.fixture
def lifecycle(pool: VocabularyPool) -> ChallengeLifecycle:
    physics = PhysicsSimulator()
    generator = ChallengeGenerator(pool, np.random.default_rng(8))
    cycle = ChallengeLifecycle(generator, physics, WorldScroller(DEFAULT_LEVELS[0]))
    cycle.start(DEFAULT_LEVELS[0])
    return cycle


def test_start_spawns_the_first_challenge(lifecycle: ChallengeLifecycle) -> None:
    assert lifecycle.challenge.world_x == FIRST_SPAWN_X
    assert lifecycle.challenge.serial == 1
    assert lifecycle.challenge.state is ChallengeState.PENDING


def test_answer_for_the_other_kind_is_ignored(lifecycle: ChallengeLifecycle) -> None:
    lifecycle.challenge = make_challenge(ChallengeKind.JUMP, 500)
    assert lifecycle.submit_answer(ChallengeKind.SLIDE, "agua") is AnswerOutcome.IGNORED
    assert lifecycle.challenge.state is ChallengeState.PENDING


def test_correct_answer_arms_and_repeats_are_ignored(lifecycle: ChallengeLifecycle) -> None:
    lifecycle.challenge = make_challenge(ChallengeKind.JUMP, 500)
    assert lifecycle.submit_answer("jump", "agua") is AnswerOutcome.CORRECT
    assert lifecycle.challenge.state is ChallengeState.ARMED
    assert lifecycle.challenge.cleared
    assert lifecycle.submit_answer("jump", "agua") is AnswerOutcome.IGNORED
    assert lifecycle.submit_answer("jump", "casa") is AnswerOutcome.IGNORED


def test_wrong_answer_leaves_the_challenge_pending(lifecycle: ChallengeLifecycle) -> None:
    lifecycle.challenge = make_challenge(ChallengeKind.SLIDE, 500)
    assert lifecycle.submit_answer(ChallengeKind.SLIDE, "food") is AnswerOutcome.WRONG
    assert lifecycle.challenge.state is ChallengeState.PENDING


def test_unknown_kind_raises(lifecycle: ChallengeLifecycle) -> None:
    with pytest.raises(InvalidAnswerEvent):
        lifecycle.submit_answer("duck", "agua")


def test_dodge_waits_for_the_trigger_window(lifecycle: ChallengeLifecycle) -> None:
    player = lifecycle.physics.new_player()
    lifecycle.challenge = make_challenge(ChallengeKind.JUMP, player.horizontal_position + 150)
    lifecycle.submit_answer("jump", "agua")

    assert lifecycle.fire_dodge(player) is False
    lifecycle.advance(1.0)
    assert lifecycle.fire_dodge(player) is True
    assert player.airborne
    assert lifecycle.challenge.state is ChallengeState.RESOLVED
    assert lifecycle.challenge.armed_to_avoid is False
    assert lifecycle.fire_dodge(player) is False


def test_dodge_never_fires_once_the_hazard_is_behind(lifecycle: ChallengeLifecycle) -> None:
    player = lifecycle.physics.new_player()
    lifecycle.challenge = make_challenge(ChallengeKind.SLIDE, player.horizontal_position)
    lifecycle.submit_answer("slide", "water")
    assert lifecycle.fire_dodge(player) is False
    assert lifecycle.challenge.state is ChallengeState.ARMED


def test_dodge_waits_until_the_player_is_grounded(lifecycle: ChallengeLifecycle) -> None:
    player = lifecycle.physics.new_player()
    lifecycle.physics.trigger_jump(player)
    lifecycle.challenge = make_challenge(ChallengeKind.SLIDE, player.horizontal_position + 50)
    lifecycle.submit_answer("slide", "water")
    assert lifecycle.fire_dodge(player) is False
    assert not player.crouching


def test_retirement_ratchets_and_replaces(lifecycle: ChallengeLifecycle) -> None:
    challenge = lifecycle.challenge
    challenge.world_x = -199.0
    assert lifecycle.retire_if_offscreen() is None

    lifecycle.advance(5.0)
    assert lifecycle.retire_if_offscreen() is challenge
    assert challenge.state is ChallengeState.RETIRED
    assert lifecycle.scroller.speed == 312.0
    assert lifecycle.retire_if_offscreen() is None

    lifecycle.advance(5.0)
    assert challenge.world_x == -204.0

    replacement = lifecycle.replace_retired()
    assert replacement is lifecycle.challenge
    assert replacement.serial == 2
    assert replacement.world_x == SPAWN_X
    assert lifecycle.replace_retired() is None
