"""Runtime settings resolved from the environment."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

LOGGER = logging.getLogger(__name__)

DATAMUSE_URL = "https://api.datamuse.com/words"
DEFAULT_LOOKUP_TIMEOUT = 5.0
DEFAULT_DEBOUNCE = 0.2
STORE_FILENAME = "sentences.json"


def default_store_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """Return where submitted sentences are kept.

    An explicit ``VOCAB_QUIZ_STORE`` wins, then ``$XDG_DATA_HOME``, then a
    ``sentences.json`` already present in the working directory, and finally
    ``~/.local/share/vocab_quiz``.
    """

    env = os.environ if env is None else env
    override = env.get("VOCAB_QUIZ_STORE")
    if override:
        return Path(override).expanduser()
    xdg = env.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "vocab_quiz" / STORE_FILENAME
    local = Path.cwd() / STORE_FILENAME
    if local.exists():
        return local
    return Path.home() / ".local" / "share" / "vocab_quiz" / STORE_FILENAME


def _float_setting(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        LOGGER.warning("Ignoring %s=%r: not a number", name, raw)
        return default
    if value < 0:
        LOGGER.warning("Ignoring %s=%r: must not be negative", name, raw)
        return default
    return value


@dataclass
class Settings:
    lookup_url: str = DATAMUSE_URL
    lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT
    debounce: float = DEFAULT_DEBOUNCE
    store_path: Path = field(default_factory=lambda: Path(STORE_FILENAME))
    words_source: str = "words.json"
    speech_command: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            lookup_url=env.get("VOCAB_QUIZ_LOOKUP_URL") or DATAMUSE_URL,
            lookup_timeout=_float_setting(env, "VOCAB_QUIZ_LOOKUP_TIMEOUT", DEFAULT_LOOKUP_TIMEOUT),
            debounce=_float_setting(env, "VOCAB_QUIZ_DEBOUNCE", DEFAULT_DEBOUNCE),
            store_path=default_store_path(env),
            words_source=env.get("VOCAB_QUIZ_WORDS") or "words.json",
            speech_command=env.get("VOCAB_QUIZ_SPEECH_COMMAND") or None,
        )
