from __future__ import annotations

import asyncio

import _bootstrap  # noqa: F401
import pytest

from vocab_quiz.app import QuizApp
from vocab_quiz.config import Settings
from vocab_quiz.feedback import FeedbackChannel
from vocab_quiz.models import Remote, Unavailable, Word
from vocab_quiz.speech import Speaker
from vocab_quiz.store import SentenceStore


class FakeLookup:
    """Stands in for the relation client and records every call."""

    def __init__(self, result=None):
        self.result = Unavailable("offline") if result is None else result
        self.calls = []

    async def lookup(self, word, relation):
        self.calls.append((word, relation))
        return self.result

    async def aclose(self):
        pass


class GatedLookup(FakeLookup):
    """Blocks the first call until ``release`` is set."""

    def __init__(self, result=None):
        super().__init__(result)
        self.release = None

    async def lookup(self, word, relation):
        self.calls.append((word, relation))
        if len(self.calls) == 1:
            if self.release is None:
                self.release = asyncio.Event()
            await self.release.wait()
        return self.result


@pytest.fixture()
def sample_words():
    return [
        Word("big", "adjective", "of considerable size"),
        Word("happy", "adjective", "feeling pleasure"),
        Word("fast", "adverb", "quickly"),
    ]


@pytest.fixture()
def offline_lookup():
    return FakeLookup(Unavailable("offline"))


@pytest.fixture()
def remote_lookup():
    return FakeLookup(Remote(frozenset({"small", "tiny"})))


@pytest.fixture()
def make_app(tmp_path, sample_words):
    def factory(lookup=None, speaker=None, words=None):
        settings = Settings(store_path=tmp_path / "sentences.json", debounce=0.01)
        app = QuizApp(
            settings=settings,
            lookup=lookup or FakeLookup(),
            store=SentenceStore(settings.store_path),
            feedback=FeedbackChannel(),
            speaker=speaker or Speaker(command=[]),
        )
        app.load(sample_words if words is None else words)
        return app

    return factory
