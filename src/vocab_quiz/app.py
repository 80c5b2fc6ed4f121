"""Quiz controller tying the session to validation, suggestions and feedback."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from .config import Settings
from .dataset import load_words
from .errors import DatasetError, SpeechError, SpeechUnavailableError
from .fallback import FallbackCatalog
from .feedback import FeedbackChannel
from .lookup import RelationLookupClient
from .models import Relation, Severity, SubmittedSentence, SuggestionSet, Verdict, Word
from .session import QuizSession, SessionState
from .speech import Speaker
from .store import SentenceStore
from .suggestions import SuggestionEngine
from .validation import EMPTY_ANSWER_PROMPTS, AnswerValidator, normalize_answer

LOGGER = logging.getLogger(__name__)

SuggestionListener = Callable[[Optional[SuggestionSet]], None]

CORRECT_MESSAGES = {
    Relation.SYNONYM: "Correct Synonym!",
    Relation.ANTONYM: "Correct Antonym!",
}


@dataclass
class AnswerField:
    """State of one synonym or antonym input."""

    relation: Relation
    engine: SuggestionEngine
    value: str = ""
    generation: int = 0
    listeners: List[SuggestionListener] = field(default_factory=list)

    def notify(self, suggestions: Optional[SuggestionSet]) -> None:
        for listener in self.listeners:
            listener(suggestions)


class QuizApp:
    """Drives one quiz: the active word, two answer fields and a sentence.

    Each answer submission is tagged with the field's generation and the
    session revision; a verdict that resolves after a newer submission for
    the same field, or after the word changed, is dropped.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[QuizSession] = None,
        lookup: Optional[RelationLookupClient] = None,
        catalog: Optional[FallbackCatalog] = None,
        store: Optional[SentenceStore] = None,
        feedback: Optional[FeedbackChannel] = None,
        speaker: Optional[Speaker] = None,
    ):
        self.settings = settings or Settings.from_env()
        self.session = session or QuizSession()
        self.catalog = catalog or FallbackCatalog()
        self.lookup = lookup or RelationLookupClient(self.settings.lookup_url, self.settings.lookup_timeout)
        self.validator = AnswerValidator(self.lookup)
        self.store = store or SentenceStore(self.settings.store_path)
        self.feedback = feedback or FeedbackChannel()
        self.speaker = speaker if speaker is not None else Speaker(preferred=self.settings.speech_command)
        self.sentence = ""
        self.fields: Dict[Relation, AnswerField] = {relation: self._make_field(relation) for relation in Relation}

    def _make_field(self, relation: Relation) -> AnswerField:
        engine = SuggestionEngine(self.catalog.for_relation(relation), delay=self.settings.debounce)
        answer_field = AnswerField(relation=relation, engine=engine)
        engine.on_update = answer_field.notify

        def write_selection(text: str) -> None:
            answer_field.value = text

        engine.on_select = write_selection
        return answer_field

    async def aclose(self) -> None:
        for answer_field in self.fields.values():
            answer_field.engine.cancel()
        self.feedback.dismiss()
        await self.lookup.aclose()

    # ------------------------------------------------------------------
    # word list
    # ------------------------------------------------------------------
    def load(self, words: Iterable[Word]) -> None:
        self.session.load(words)
        self._reset_word_state()

    def load_from(self, source: str | Path) -> bool:
        """Load a word list, reporting failures through the feedback channel."""

        try:
            words = load_words(source)
        except DatasetError as exc:
            LOGGER.error("Failed to load words: %s", exc)
            self.session.load([])
            self._reset_word_state()
            self.feedback.show("Failed to load vocabulary.", Severity.DANGER)
            return False
        self.load(words)
        return True

    def current_word(self) -> Optional[Word]:
        if self.session.state is SessionState.EMPTY:
            return None
        return self.session.current()

    def next_word(self) -> Optional[Word]:
        word = self.session.advance()
        if word is None:
            return None
        self._reset_word_state()
        self.feedback.show("New word loaded!", Severity.INFO, 1.5)
        return word

    def _reset_word_state(self) -> None:
        for answer_field in self.fields.values():
            answer_field.value = ""
            answer_field.engine.cancel()
        self.sentence = ""
        self.feedback.dismiss()

    # ------------------------------------------------------------------
    # answers
    # ------------------------------------------------------------------
    def on_suggestions(self, relation: Relation, listener: SuggestionListener) -> None:
        self.fields[relation].listeners.append(listener)

    def type_answer(self, relation: Relation, text: str) -> None:
        answer_field = self.fields[relation]
        answer_field.value = text
        answer_field.engine.schedule(text)

    def select_suggestion(self, relation: Relation, text: str) -> None:
        self.fields[relation].engine.select(text)

    async def check_answer(self, relation: Relation, text: Optional[str] = None) -> Optional[Verdict]:
        """Grade the field's answer and report it; ``None`` when nothing was graded."""

        answer_field = self.fields[relation]
        if text is not None:
            answer_field.value = text
        if not normalize_answer(answer_field.value):
            self.feedback.show(EMPTY_ANSWER_PROMPTS[relation], Severity.WARNING)
            return None
        word = self.current_word()
        target = word.text.strip().lower() if word is not None else ""
        if not target:
            self.feedback.show("No word loaded.", Severity.WARNING)
            return None

        answer_field.generation += 1
        ticket = (answer_field.generation, self.session.revision)
        verdict = await self.validator.validate(
            target,
            relation,
            answer_field.value,
            self.catalog.for_relation(relation),
        )

        if ticket != (answer_field.generation, self.session.revision):
            LOGGER.debug("Discarding stale %s verdict for %r", relation.label, word.text)
            return None
        if verdict.accepted:
            self.feedback.show(CORRECT_MESSAGES[relation], Severity.SUCCESS)
        else:
            self.feedback.show("Try again.", Severity.DANGER)
        return verdict

    # ------------------------------------------------------------------
    # sentences and speech
    # ------------------------------------------------------------------
    def submit_sentence(self, text: Optional[str] = None) -> Optional[SubmittedSentence]:
        if text is not None:
            self.sentence = text
        word = self.current_word()
        target = word.text.strip().lower() if word is not None else ""
        if not target:
            return None
        sentence = self.sentence.strip()
        if not sentence:
            self.feedback.show("Please write a sentence.", Severity.WARNING)
            return None
        if target not in sentence.lower():
            self.feedback.show(f'Your sentence must include the word: "{target}"', Severity.DANGER)
            return None

        record = SubmittedSentence(word=target, sentence=sentence)
        self.store.append(record)
        self.sentence = ""
        self.feedback.show("Sentence submitted successfully!", Severity.SUCCESS)
        return record

    def play_word(self) -> bool:
        word = self.current_word()
        if word is None or not word.text.strip():
            return False
        try:
            self.speaker.speak(word.text.strip())
        except SpeechUnavailableError:
            self.feedback.show("Speech synthesis not supported on this system.", Severity.WARNING)
            return False
        except SpeechError as exc:
            LOGGER.error("Speech error: %s", exc)
            self.feedback.show("Speech synthesis error.", Severity.DANGER)
            return False
        return True
