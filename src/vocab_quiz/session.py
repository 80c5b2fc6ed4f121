"""Current word and position in the loaded word list."""
from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional

from .errors import EmptySessionError
from .models import Word


class SessionState(str, Enum):
    EMPTY = "empty"
    READY = "ready"


class QuizSession:
    """Owns the word list and the index of the active word.

    ``revision`` changes on every :meth:`load` and :meth:`advance`; per-word
    UI state recorded under an older revision is stale.
    """

    def __init__(self, words: Optional[Iterable[Word]] = None):
        self.words: List[Word] = []
        self.index = 0
        self.revision = 0
        if words is not None:
            self.load(words)

    def __len__(self) -> int:
        return len(self.words)

    @property
    def state(self) -> SessionState:
        return SessionState.READY if self.words else SessionState.EMPTY

    def load(self, words: Iterable[Word]) -> None:
        self.words = list(words)
        self.index = 0
        self.revision += 1

    def current(self) -> Word:
        if not self.words:
            raise EmptySessionError("No words loaded")
        return self.words[self.index]

    def advance(self) -> Optional[Word]:
        """Rotate to the next word; does nothing while the session is empty."""

        if not self.words:
            return None
        self.index = (self.index + 1) % len(self.words)
        self.revision += 1
        return self.words[self.index]
