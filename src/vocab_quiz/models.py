"""Dataclasses describing quiz words, answers and verdicts."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union


class Relation(str, Enum):
    """Lexical relation between the quiz word and an answer.

    The value doubles as the query parameter understood by the relation
    service.
    """

    SYNONYM = "rel_syn"
    ANTONYM = "rel_ant"

    @property
    def label(self) -> str:
        return "synonym" if self is Relation.SYNONYM else "antonym"

    @classmethod
    def parse(cls, value: str) -> "Relation":
        key = value.strip().lower()
        aliases = {
            "syn": cls.SYNONYM,
            "synonym": cls.SYNONYM,
            "rel_syn": cls.SYNONYM,
            "ant": cls.ANTONYM,
            "antonym": cls.ANTONYM,
            "rel_ant": cls.ANTONYM,
        }
        try:
            return aliases[key]
        except KeyError:
            raise ValueError(f"Unknown relation: {value!r}") from None


@dataclass(frozen=True)
class Word:
    text: str
    part_of_speech: str = ""
    definition: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Word":
        """Build a word from a dataset record.

        ``partOfSpeech`` wins over the shorter ``pos`` key when both exist.
        """

        text = data.get("word")
        if not isinstance(text, str):
            raise ValueError("word entry is missing a string 'word' field")
        if not text.strip():
            raise ValueError("word entry has a blank 'word' field")
        pos = data.get("partOfSpeech") or data.get("pos") or ""
        return cls(text=text, part_of_speech=str(pos), definition=str(data.get("definition") or ""))

    def to_dict(self) -> Dict[str, str]:
        return {"word": self.text, "partOfSpeech": self.part_of_speech, "definition": self.definition}


@dataclass(frozen=True)
class RelationQuery:
    word: str
    relation: Relation

    def params(self) -> Dict[str, str]:
        return {self.relation.value: self.word}


@dataclass(frozen=True)
class Remote:
    """Related words returned by the relation service, lowercased."""

    words: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class Unavailable:
    """The relation service could not answer this call."""

    reason: str = ""


RelationResult = Union[Remote, Unavailable]


class VerdictSource(str, Enum):
    REMOTE = "remote"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Verdict:
    accepted: bool
    source: VerdictSource


@dataclass(frozen=True)
class SuggestionSet:
    """Candidate words for the current prefix.

    An empty set is the "no suggestions" state; a cleared display is
    represented by ``None`` wherever suggestion state is delivered.
    """

    words: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.words

    def __iter__(self):
        return iter(self.words)

    def __len__(self) -> int:
        return len(self.words)


@dataclass(frozen=True)
class SubmittedSentence:
    word: str
    sentence: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, str]:
        return {
            "word": self.word,
            "sentence": self.sentence,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SubmittedSentence":
        created = data.get("createdAt")
        if not isinstance(created, str):
            raise ValueError("sentence entry is missing 'createdAt'")
        # datetime.fromisoformat only understands a trailing "Z" on 3.11+
        if created.endswith("Z"):
            created = created[:-1] + "+00:00"
        return cls(
            word=str(data["word"]),
            sentence=str(data["sentence"]),
            created_at=datetime.fromisoformat(created),
        )


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class Feedback:
    message: str
    severity: Severity = Severity.INFO
    duration: Optional[float] = 3.0
