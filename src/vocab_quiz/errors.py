"""Exceptions raised by the quiz engine."""
from __future__ import annotations


class QuizError(Exception):
    """Base class for quiz errors."""


class QuizInputError(QuizError):
    """The learner's input was rejected before any lookup happened."""


class EmptyAnswerError(QuizInputError):
    pass


class DatasetError(QuizError):
    """The word list could not be loaded."""


class EmptySessionError(QuizError):
    pass


class SpeechError(QuizError):
    pass


class SpeechUnavailableError(SpeechError):
    """No text-to-speech facility exists on this host."""
