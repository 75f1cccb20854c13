from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lingoleap.challenges import Challenge, ChallengeKind  # noqa: E402
from lingoleap.config import LevelDefinition  # noqa: E402
from lingoleap.progression import InMemoryProgressStore  # noqa: E402
from lingoleap.session import GameSession  # noqa: E402
from lingoleap.vocabulary import VocabularyEntry, VocabularyPool  # noqa: E402


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def pool() -> VocabularyPool:
    return VocabularyPool()


@pytest.fixture
def store() -> InMemoryProgressStore:
    return InMemoryProgressStore()


@pytest.fixture
def session(pool: VocabularyPool, store: InMemoryProgressStore, rng: np.random.Generator) -> GameSession:
    game = GameSession(vocabulary=pool, sink=store, np_random=rng)
    game.start_run(1)
    return game


@pytest.fixture
def endless_levels() -> tuple[LevelDefinition, ...]:
    return (LevelDefinition(1, 10**9, 300.0, 12.0, 720.0),)


def make_challenge(kind: ChallengeKind, world_x: float) -> Challenge:
    if kind is ChallengeKind.JUMP:
        return Challenge(kind, "water", "agua", ("comida", "agua", "casa"), world_x)
    return Challenge(kind, "agua", "water", ("water", "food", "house"), world_x)


def tiny_pool(*pairs: tuple[str, str]) -> VocabularyPool:
    return VocabularyPool([VocabularyEntry(source, target) for source, target in pairs])
