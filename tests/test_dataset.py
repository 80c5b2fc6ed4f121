import json

import _bootstrap  # noqa: F401
import pytest

from vocab_quiz import dataset
from vocab_quiz.dataset import build_word_list, load_words, parse_words, read_word_file, write_words
from vocab_quiz.errors import DatasetError
from vocab_quiz.models import Word


def test_parse_accepts_pos_aliases():
    words = parse_words(
        [
            {"word": "big", "partOfSpeech": "adjective", "definition": "large"},
            {"word": "run", "pos": "verb"},
        ]
    )
    assert words == [Word("big", "adjective", "large"), Word("run", "verb", "")]


@pytest.mark.parametrize("payload", [{"word": "big"}, ["big"], [{"definition": "no word"}], None])
def test_parse_rejects_malformed_payloads(payload):
    with pytest.raises(DatasetError):
        parse_words(payload)


def test_load_words_from_file(tmp_path):
    path = tmp_path / "words.json"
    path.write_text(json.dumps([{"word": "big", "pos": "adjective", "definition": "large"}]))
    assert load_words(path) == [Word("big", "adjective", "large")]


def test_load_words_rejects_invalid_json(tmp_path):
    path = tmp_path / "words.json"
    path.write_text("not json")
    with pytest.raises(DatasetError):
        load_words(path)


def test_load_words_missing_file(tmp_path):
    with pytest.raises(DatasetError):
        load_words(tmp_path / "absent.json")


def test_write_words_round_trips_through_loader(tmp_path):
    destination = tmp_path / "nested" / "words.json"
    write_words([Word("big", "adjective", "large")], destination)
    assert load_words(destination) == [Word("big", "adjective", "large")]


def test_read_word_file_skips_comments(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("# quiz words\nbig\n\n  fast \n")
    assert read_word_file(path) == ["big", "fast"]


class FakeSynset:
    def __init__(self, pos, definition):
        self._pos = pos
        self._definition = definition

    def pos(self):
        return self._pos

    def definition(self):
        return self._definition


class FakeWordNet:
    entries = {
        "big": [FakeSynset("s", "above average in size")],
        "ice_cream": [FakeSynset("n", "frozen dessert")],
    }

    def synsets(self, word):
        return self.entries.get(word, [])


def test_build_word_list_uses_first_sense(monkeypatch):
    monkeypatch.setattr(dataset, "wn", FakeWordNet())
    monkeypatch.setattr(dataset, "ensure_wordnet", lambda download=True: None)
    words = build_word_list(["big", "ice cream", "zzzz", " "])
    assert words == [
        Word("big", "adjective", "above average in size"),
        Word("ice cream", "noun", "frozen dessert"),
    ]


def test_blank_words_are_rejected():
    with pytest.raises(DatasetError):
        parse_words([{"word": "big"}, {"word": "  "}])


class MissingWordNet:
    def ensure_loaded(self):
        raise LookupError("wordnet")


def test_failed_wordnet_download_is_a_dataset_error(monkeypatch):
    monkeypatch.setattr(dataset, "wn", MissingWordNet())
    monkeypatch.setattr(dataset.nltk, "download", lambda *args, **kwargs: False)
    with pytest.raises(DatasetError):
        dataset.ensure_wordnet()


def test_wordnet_still_missing_after_download(monkeypatch):
    monkeypatch.setattr(dataset, "wn", MissingWordNet())
    monkeypatch.setattr(dataset.nltk, "download", lambda *args, **kwargs: True)
    with pytest.raises(DatasetError):
        dataset.ensure_wordnet()


def test_wordnet_without_download_is_a_dataset_error(monkeypatch):
    monkeypatch.setattr(dataset, "wn", MissingWordNet())
    with pytest.raises(DatasetError):
        dataset.ensure_wordnet(download=False)
