"""Base classifier and the personalization levels it produces."""
from abc import ABC, abstractmethod
from enum import IntEnum


class PersonalizationLevel(IntEnum):
    """How much of the user's profile goes into the AI prompt. Ordered."""
    NONE = 0
    LIGHT = 1
    MODERATE = 2
    FULL = 3


class BaseRequestClassifier(ABC):
    """Maps a raw user query to a PersonalizationLevel.

    Implementations must be safe for concurrent reads once constructed.
    """

    @abstractmethod
    def classify(self, text: str) -> PersonalizationLevel:
        """Classify a query. Must not raise."""
        pass


class FixedLevelClassifier(BaseRequestClassifier):
    """Always answers the same level. Handy as a deterministic stand-in."""

    def __init__(self, level: PersonalizationLevel = PersonalizationLevel.LIGHT):
        self.level = level

    def classify(self, text: str) -> PersonalizationLevel:
        return self.level
