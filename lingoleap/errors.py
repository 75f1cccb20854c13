class LingoLeapError(Exception):
    """Base class for errors raised by the game core."""


class InsufficientVocabulary(LingoLeapError):
    """The vocabulary pool cannot supply three distinct answer options."""


class InvalidAnswerEvent(LingoLeapError):
    """An answer was submitted for a kind that does not exist."""


class InvalidPhaseTransition(LingoLeapError):
    def __init__(self, current, requested):
        super().__init__(f"cannot move from {current.value} to {requested.value}")
        self.current = current
        self.requested = requested


class LevelLocked(LingoLeapError):
    """The requested level has not been unlocked yet."""


class InvalidLevelCatalog(LingoLeapError):
    pass
