"""JSON persistence for submitted sentences."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional

from .models import SubmittedSentence

LOGGER = logging.getLogger(__name__)


def safe_parse(raw: Optional[str]) -> List[Any]:
    """Decode a stored array, treating missing or corrupt data as empty."""

    if raw is None or not raw.strip():
        return []
    try:
        parsed = json.loads(raw)
    except ValueError as exc:
        LOGGER.warning("Discarding unreadable sentence history: %s", exc)
        return []
    if not isinstance(parsed, list):
        LOGGER.warning("Discarding sentence history that is not an array")
        return []
    return parsed


class SentenceStore:
    """Append-only list of :class:`SubmittedSentence` kept in a JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_raw(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Could not read %s: %s", self.path, exc)
            return None

    def append(self, sentence: SubmittedSentence) -> None:
        records: List[Any] = safe_parse(self._read_raw())
        records.append(sentence.to_dict())
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # the store file is only ever replaced whole
        handle, temp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(handle, "w", encoding="utf8") as temp:
                json.dump(records, temp)
            os.replace(temp_name, self.path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise

    def all(self) -> List[SubmittedSentence]:
        sentences: List[SubmittedSentence] = []
        for record in safe_parse(self._read_raw()):
            if not isinstance(record, dict):
                continue
            try:
                sentences.append(SubmittedSentence.from_dict(record))
            except (KeyError, ValueError) as exc:
                LOGGER.debug("Skipping malformed sentence record %r: %s", record, exc)
        return sentences

