from dataclasses import dataclass

from .errors import InsufficientVocabulary

ANSWER_FIELDS = ("source_term", "target_term")


@dataclass(frozen=True)
class VocabularyEntry:
    """One word pair. Two entries are the same word when both terms match."""

    source_term: str
    target_term: str
    icon: str = None
    category: str = "general"

    @property
    def key(self):
        return (self.source_term, self.target_term)


DEFAULT_VOCABULARY = (
    VocabularyEntry("hello", "hola", "👋", "greetings"),
    VocabularyEntry("goodbye", "adiós", "🚪", "greetings"),
    VocabularyEntry("please", "por favor", "🙏", "greetings"),
    VocabularyEntry("thank you", "gracias", "💐", "greetings"),
    VocabularyEntry("yes", "sí", "✅", "basics"),
    VocabularyEntry("no", "no", "❌", "basics"),
    VocabularyEntry("water", "agua", "💧", "food"),
    VocabularyEntry("food", "comida", "🍲", "food"),
    VocabularyEntry("house", "casa", "🏠", "places"),
    VocabularyEntry("friend", "amigo", "🧑‍🤝‍🧑", "people"),
    VocabularyEntry("family", "familia", "👪", "people"),
    VocabularyEntry("love", "amor", "❤️", "people"),
    VocabularyEntry("time", "tiempo", "⏰", "time"),
    VocabularyEntry("day", "día", "🌤️", "time"),
    VocabularyEntry("night", "noche", "🌙", "time"),
    VocabularyEntry("sun", "sol", "☀️", "nature"),
    VocabularyEntry("moon", "luna", "🌕", "nature"),
    VocabularyEntry("star", "estrella", "⭐", "nature"),
    VocabularyEntry("book", "libro", "📖", "school"),
    VocabularyEntry("school", "escuela", "🏫", "school"),
)


def _check_field(by_field):
    if by_field not in ANSWER_FIELDS:
        raise ValueError(f"unknown vocabulary field {by_field!r}, expected one of {ANSWER_FIELDS}")


class VocabularyPool:
    """
    Read-only snapshot of the word list the game quizzes on.

    Edits made by the vocabulary editor only reach the game when a new pool
    is built between runs.
    """

    def __init__(self, entries=DEFAULT_VOCABULARY):
        unique = {}
        for entry in entries:
            unique.setdefault(entry.key, entry)
        self._entries = tuple(unique.values())

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def sample(self, np_random):
        if not self._entries:
            raise InsufficientVocabulary("vocabulary pool is empty")
        return self._entries[int(np_random.integers(len(self._entries)))]

    def all_except(self, entry, by_field):
        """Entries whose ``by_field`` value differs from the given entry's."""
        _check_field(by_field)
        excluded = getattr(entry, by_field)
        return [e for e in self._entries if getattr(e, by_field) != excluded]
