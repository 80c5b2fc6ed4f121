"""Speak the quiz word through the host's text-to-speech command."""
from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from typing import List, Optional, Sequence

from .errors import SpeechError, SpeechUnavailableError

LOGGER = logging.getLogger(__name__)

KNOWN_COMMANDS: Sequence[str] = ("say", "espeak-ng", "espeak", "spd-say")


def find_speech_command(preferred: Optional[str] = None) -> Optional[List[str]]:
    """Return the argv prefix of a usable TTS command, if any."""

    if preferred:
        argv = shlex.split(preferred)
        if argv and shutil.which(argv[0]):
            return argv
        LOGGER.warning("Configured speech command %r not found", preferred)
        return None
    for name in KNOWN_COMMANDS:
        if shutil.which(name):
            return [name]
    return None


class Speaker:
    def __init__(self, command: Optional[Sequence[str]] = None, preferred: Optional[str] = None):
        self.command = list(command) if command is not None else find_speech_command(preferred)
        self._process: Optional[subprocess.Popen] = None

    @property
    def available(self) -> bool:
        return bool(self.command)

    def speak(self, text: str) -> None:
        if not self.command:
            raise SpeechUnavailableError("No speech synthesis command available")
        self.cancel()
        try:
            self._process = subprocess.Popen(
                [*self.command, text],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise SpeechError(str(exc)) from exc

    def cancel(self) -> None:
        """Stop the previous utterance if it is still playing."""

        if self._process is not None and self._process.poll() is None:
            self._process.terminate()
        self._process = None
