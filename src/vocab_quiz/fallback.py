"""Offline word lists used when the relation service cannot be reached."""
from __future__ import annotations

from typing import FrozenSet, Iterable, Optional, Tuple

from .models import Relation

FALLBACK_SYNONYMS: Tuple[str, ...] = ("large", "huge", "massive", "gigantic", "immense", "colossal")
FALLBACK_ANTONYMS: Tuple[str, ...] = ("small", "tiny", "little", "miniature", "petite", "minute")


class FallbackCatalog:
    """Fixed synonym and antonym lists."""

    def __init__(
        self,
        synonyms: Optional[Iterable[str]] = None,
        antonyms: Optional[Iterable[str]] = None,
    ):
        self.synonyms = tuple(FALLBACK_SYNONYMS if synonyms is None else synonyms)
        self.antonyms = tuple(FALLBACK_ANTONYMS if antonyms is None else antonyms)

    def for_relation(self, relation: Relation) -> Tuple[str, ...]:
        """Return the ordered list for ``relation``, as shown in suggestions."""

        return self.synonyms if relation is Relation.SYNONYM else self.antonyms

    def accepted(self, relation: Relation) -> FrozenSet[str]:
        return frozenset(word.strip().lower() for word in self.for_relation(relation))
