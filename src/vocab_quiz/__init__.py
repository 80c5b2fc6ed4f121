"""Vocabulary quiz engine: answer validation and typing suggestions."""

from .app import QuizApp
from .fallback import FallbackCatalog
from .lookup import RelationLookupClient
from .models import Relation, Remote, Unavailable, Verdict, VerdictSource, Word
from .session import QuizSession
from .suggestions import SuggestionEngine, compute_suggestions
from .validation import AnswerValidator

__all__ = [
    "AnswerValidator",
    "FallbackCatalog",
    "QuizApp",
    "QuizSession",
    "Relation",
    "RelationLookupClient",
    "Remote",
    "SuggestionEngine",
    "Unavailable",
    "Verdict",
    "VerdictSource",
    "Word",
    "compute_suggestions",
]
