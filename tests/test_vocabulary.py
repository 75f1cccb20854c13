import numpy as np
import pytest

from lingoleap.errors import InsufficientVocabulary
from lingoleap.vocabulary import DEFAULT_VOCABULARY, VocabularyEntry, VocabularyPool


def test_default_pool_has_twenty_unique_entries() -> None:
    pool = VocabularyPool()
    assert len(pool) == 20
    assert len({entry.key for entry in pool}) == 20
    assert all(entry.icon for entry in pool)


def test_duplicate_pairs_collapse_to_first_occurrence() -> None:
    first = VocabularyEntry("sun", "sol", "☀️", "nature")
    again = VocabularyEntry("sun", "sol", None, "other")
    pool = VocabularyPool([first, again, VocabularyEntry("moon", "luna")])
    assert list(pool) == [first, VocabularyEntry("moon", "luna")]


def test_all_except_filters_on_the_requested_field() -> None:
    pool = VocabularyPool(
        [
            VocabularyEntry("yes", "sí"),
            VocabularyEntry("no", "no"),
            VocabularyEntry("nope", "no"),
        ]
    )
    entry = VocabularyEntry("no", "no")
    assert [e.source_term for e in pool.all_except(entry, "target_term")] == ["yes"]
    assert [e.source_term for e in pool.all_except(entry, "source_term")] == ["yes", "nope"]


def test_unknown_field_is_rejected() -> None:
    with pytest.raises(ValueError, match="unknown vocabulary field"):
        VocabularyPool().all_except(DEFAULT_VOCABULARY[0], "icon")


def test_sample_is_reproducible_for_a_seed() -> None:
    pool = VocabularyPool()
    first = [pool.sample(np.random.default_rng(7)) for _ in range(3)]
    second = [pool.sample(np.random.default_rng(7)) for _ in range(3)]
    assert first == second
    assert first[0] in DEFAULT_VOCABULARY


def test_sampling_an_empty_pool_fails() -> None:
    with pytest.raises(InsufficientVocabulary):
        VocabularyPool([]).sample(np.random.default_rng(0))
