"""Loading and building quiz word lists."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional

import httpx
import nltk
from nltk.corpus import wordnet as wn
from tqdm import tqdm

from .errors import DatasetError
from .models import Word

LOGGER = logging.getLogger(__name__)

POS_MAP = {
    "n": "noun",
    "v": "verb",
    "a": "adjective",
    "s": "adjective",
    "r": "adverb",
}


def parse_words(payload: Any) -> List[Word]:
    """Turn a decoded JSON payload into words, rejecting anything but an array."""

    if not isinstance(payload, list):
        raise DatasetError("word list must be a JSON array")
    words: List[Word] = []
    for position, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise DatasetError(f"word list entry {position} is not an object")
        try:
            words.append(Word.from_dict(entry))
        except ValueError as exc:
            raise DatasetError(f"word list entry {position}: {exc}") from exc
    return words


def load_words(source: str | Path, timeout: float = 10.0) -> List[Word]:
    """Load a word list from a file path or an ``http(s)`` URL."""

    text = str(source)
    if text.startswith(("http://", "https://")):
        try:
            response = httpx.get(text, timeout=timeout)
        except httpx.HTTPError as exc:
            raise DatasetError(f"could not fetch {text}: {exc}") from exc
        if response.status_code != 200:
            raise DatasetError(f"could not fetch {text}: status {response.status_code}")
        raw = response.text
    else:
        path = Path(source)
        try:
            raw = path.read_text(encoding="utf8")
        except OSError as exc:
            raise DatasetError(f"could not read {path}: {exc}") from exc
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise DatasetError(f"{text} is not valid JSON") from exc
    words = parse_words(payload)
    LOGGER.info("Loaded %s words from %s", len(words), text)
    return words


def ensure_wordnet(download: bool = True) -> None:
    """Ensure the WordNet corpus is available."""

    try:
        wn.ensure_loaded()
    except LookupError:
        if not download:
            raise DatasetError("WordNet corpus is not installed")
        LOGGER.info("Downloading WordNet corpus via NLTK…")
        if not nltk.download("wordnet", quiet=True):
            raise DatasetError("WordNet corpus could not be downloaded")
        try:
            wn.ensure_loaded()
        except LookupError as exc:
            raise DatasetError("WordNet corpus could not be loaded") from exc


def build_word_list(words: Iterable[str], download: bool = True) -> List[Word]:
    """Describe each word with its first WordNet sense.

    Words WordNet does not know are skipped with a warning.
    """

    ensure_wordnet(download)
    result: List[Word] = []
    for word in tqdm(list(words), desc="WordNet"):
        text = word.strip()
        if not text:
            continue
        synsets = wn.synsets(text.replace(" ", "_"))
        if not synsets:
            LOGGER.warning("No WordNet entry for %s", text)
            continue
        synset = synsets[0]
        result.append(
            Word(
                text=text,
                part_of_speech=POS_MAP.get(synset.pos(), ""),
                definition=synset.definition(),
            )
        )
    return result


def write_words(words: Iterable[Word], destination: str | Path) -> Path:
    path = Path(destination)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps([word.to_dict() for word in words], indent=2), encoding="utf8")
    return path


def read_word_file(path: Optional[str | Path]) -> List[str]:
    """Read one word per line, ignoring blanks and ``#`` comments."""

    if path is None:
        return []
    lines = Path(path).read_text(encoding="utf8").splitlines()
    return [line.strip() for line in lines if line.strip() and not line.lstrip().startswith("#")]
