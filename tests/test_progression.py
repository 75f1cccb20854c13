import pytest

from lingoleap.config import DEFAULT_LEVELS
from lingoleap.progression import InMemoryProgressStore, ProgressionController, ProgressRecord
from lingoleap.state import RunPhase


@pytest.fixture
def controller(store: InMemoryProgressStore) -> ProgressionController:
    progression = ProgressionController(DEFAULT_LEVELS, store, high_score=1000)
    progression.begin(DEFAULT_LEVELS[0])
    return progression


def test_crossing_the_goal_completes_the_level(controller: ProgressionController, store: InMemoryProgressStore) -> None:
    assert controller.award(2490) is None

    result = controller.award(10)

    assert result.phase is RunPhase.LEVEL_COMPLETE
    assert result.score == 2500
    assert result.coins_awarded == 250
    assert result.unlocked_level_id == 2
    assert result.new_high_score is True
    assert store.record == ProgressRecord(frozenset({1, 2}), current_level=2, total_coins=250)
    assert store.high_score == 2500


def test_awards_after_the_run_ended_are_ignored(controller: ProgressionController) -> None:
    controller.award(2500)
    assert controller.award(100) is None
    assert controller.fail() is None
    assert controller.score == 2500


def test_replaying_an_unlocked_level_only_adds_coins(store: InMemoryProgressStore) -> None:
    record = ProgressRecord(frozenset({1, 2}), current_level=1, total_coins=40)
    controller = ProgressionController(DEFAULT_LEVELS, store, record=record, high_score=9000)
    controller.begin(DEFAULT_LEVELS[0])

    result = controller.award(2555)

    assert result.unlocked_level_id is None
    assert result.coins_awarded == 255
    assert result.new_high_score is False
    assert store.record.total_coins == 295
    assert store.record.unlocked_level_ids == frozenset({1, 2})
    assert store.high_score == 0
    assert ("high_score", 2555) not in store.history


def test_completing_the_last_level_unlocks_nothing(store: InMemoryProgressStore) -> None:
    record = ProgressRecord(frozenset({1, 2, 3}), current_level=3)
    controller = ProgressionController(DEFAULT_LEVELS, store, record=record)
    controller.begin(DEFAULT_LEVELS[2])

    result = controller.award(6000)

    assert result.unlocked_level_id is None
    assert store.record.current_level == 3
    assert store.record.total_coins == 600


def test_failure_records_only_a_better_high_score(controller: ProgressionController, store: InMemoryProgressStore) -> None:
    controller.award(400)
    result = controller.fail()
    assert result.phase is RunPhase.GAME_OVER
    assert result.new_high_score is False
    assert store.history == []

    controller.begin(DEFAULT_LEVELS[0])
    controller.award(1200)
    result = controller.fail()
    assert result.new_high_score is True
    assert store.history == [("high_score", 1200)]


def test_negative_awards_are_rejected(controller: ProgressionController) -> None:
    with pytest.raises(ValueError):
        controller.award(-10)
