import json

import _bootstrap  # noqa: F401
import pytest

from vocab_quiz import cli
from vocab_quiz.errors import DatasetError
from vocab_quiz.lookup import RelationLookupClient
from vocab_quiz.models import Remote, Unavailable, Word


def test_suggest_prints_prefix_matches(capsys):
    cli.main(["suggest", "antonym", "MI"])
    assert capsys.readouterr().out.strip() == "miniature  minute"


def test_suggest_reports_no_matches(capsys):
    cli.main(["suggest", "synonym", "zz"])
    assert "No suggestions found" in capsys.readouterr().out


def test_check_falls_back_when_service_is_down(monkeypatch, capsys):
    async def offline(self, word, relation):
        return Unavailable("offline")

    monkeypatch.setattr(RelationLookupClient, "lookup", offline)
    cli.main(["check", "big", "synonym", "Huge"])
    assert capsys.readouterr().out.strip() == "Huge is correct (fallback)"


def test_check_uses_remote_words(monkeypatch, capsys):
    async def remote(self, word, relation):
        return Remote(frozenset({"enormous"}))

    monkeypatch.setattr(RelationLookupClient, "lookup", remote)
    cli.main(["check", "big", "synonym", "huge"])
    assert capsys.readouterr().out.strip() == "huge is incorrect (remote)"


def test_check_rejects_blank_answer(capsys):
    with pytest.raises(SystemExit):
        cli.main(["check", "big", "antonym", "  "])
    assert "Please enter an antonym." in capsys.readouterr().err


def test_sentence_and_history(tmp_path, capsys):
    store = tmp_path / "sentences.json"
    cli.main(["--store", str(store), "sentence", "big", "The dog is small"])
    assert "must include the word" in capsys.readouterr().out
    assert not store.exists()

    cli.main(["--store", str(store), "sentence", "big", "The dog is big"])
    assert "[success]" in capsys.readouterr().out

    cli.main(["--store", str(store), "history"])
    output = capsys.readouterr().out
    assert "The dog is big" in output
    assert "Word" in output


def test_history_with_empty_store(tmp_path, capsys):
    cli.main(["--store", str(tmp_path / "missing.json"), "history"])
    assert "No sentences submitted yet" in capsys.readouterr().out


def test_build_words_writes_dataset(monkeypatch, tmp_path):
    calls = []

    def fake_build_word_list(words, download=True):
        calls.append((list(words), download))
        return [Word("big", "adjective", "large")]

    monkeypatch.setattr(cli, "build_word_list", fake_build_word_list)
    output = tmp_path / "out" / "words.json"
    cli.main(["build-words", "big", "--output", str(output), "--no-download"])
    assert calls == [(["big"], False)]
    assert json.loads(output.read_text()) == [{"word": "big", "partOfSpeech": "adjective", "definition": "large"}]


def test_build_words_requires_input():
    with pytest.raises(SystemExit):
        cli.main(["build-words"])


def test_quiz_session_runs_commands(monkeypatch, tmp_path, capsys):
    words = tmp_path / "words.json"
    words.write_text(json.dumps([{"word": "big", "pos": "adjective", "definition": "large"}, {"word": "fast"}]))

    async def offline(self, word, relation):
        return Unavailable("offline")

    monkeypatch.setattr(RelationLookupClient, "lookup", offline)
    lines = iter(["syn large", "ant huge", ":next", ":quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

    cli.main(["--store", str(tmp_path / "s.json"), "quiz", "--words", str(words)])
    output = capsys.readouterr().out
    assert "Correct Synonym!" in output
    assert "Try again." in output
    assert "fast" in output


@pytest.mark.parametrize("command", [["check", "  ", "synonym", "large"], ["sentence", " ", "A big dog"]])
def test_blank_quiz_word_is_rejected(command, tmp_path, capsys):
    with pytest.raises(SystemExit):
        cli.main(["--store", str(tmp_path / "s.json"), *command])
    assert "must not be blank" in capsys.readouterr().err
    assert not (tmp_path / "s.json").exists()


def test_build_words_reports_missing_wordnet(monkeypatch, tmp_path, capsys):
    def offline(words, download=True):
        raise DatasetError("WordNet corpus could not be downloaded")

    monkeypatch.setattr(cli, "build_word_list", offline)
    with pytest.raises(SystemExit):
        cli.main(["build-words", "big", "--output", str(tmp_path / "words.json")])
    assert "could not be downloaded" in capsys.readouterr().err
