"""Command line interface for the vocabulary quiz."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from .app import QuizApp
from .config import Settings
from .dataset import build_word_list, read_word_file, write_words
from .errors import DatasetError, QuizInputError
from .fallback import FallbackCatalog
from .feedback import FeedbackChannel
from .lookup import RelationLookupClient
from .models import Feedback, Relation, SubmittedSentence, SuggestionSet, Word
from .session import QuizSession
from .store import SentenceStore
from .suggestions import compute_suggestions
from .validation import AnswerValidator

try:
    from tabulate import tabulate
except ImportError:  # pragma: no cover - optional dependency
    tabulate = None

LOGGER = logging.getLogger("vocab_quiz")

QUIZ_HELP = """Commands:
  syn <answer>      check a synonym
  ant <answer>      check an antonym
  ? syn|ant <text>  show suggestions for partial input
  say <sentence>    submit a sentence using the word
  :next             move to the next word
  :play             speak the word
  :quit             leave the quiz"""


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Vocabulary quiz with synonym and antonym checking")
    parser.add_argument("--store", help="JSON file that keeps submitted sentences")
    parser.add_argument("--lookup-url", help="Word relation service endpoint")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser("build-words", help="Build a word list from WordNet")
    build_parser.add_argument("words", nargs="*", help="Words to include")
    build_parser.add_argument("--from-file", help="File with one word per line")
    build_parser.add_argument("--output", default="words.json", help="Where to write the word list")
    build_parser.add_argument("--no-download", action="store_true", help="Fail instead of downloading WordNet")

    check_parser = subparsers.add_parser("check", help="Check a synonym or antonym answer")
    check_parser.add_argument("word", help="Quiz word")
    check_parser.add_argument("relation", choices=["synonym", "antonym"])
    check_parser.add_argument("answer", help="Learner's answer")

    suggest_parser = subparsers.add_parser("suggest", help="Show fallback suggestions for a prefix")
    suggest_parser.add_argument("relation", choices=["synonym", "antonym"])
    suggest_parser.add_argument("prefix", help="Partial answer")

    sentence_parser = subparsers.add_parser("sentence", help="Submit a sentence using a word")
    sentence_parser.add_argument("word", help="Word the sentence must contain")
    sentence_parser.add_argument("sentence", help="Sentence text")

    subparsers.add_parser("history", help="List submitted sentences")

    quiz_parser = subparsers.add_parser("quiz", help="Run an interactive quiz")
    quiz_parser.add_argument("--words", help="Word list file or URL")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    settings = Settings.from_env()
    if args.store:
        settings.store_path = Path(args.store)
    if args.lookup_url:
        settings.lookup_url = args.lookup_url

    if args.command == "build-words":
        requested = list(args.words) + read_word_file(args.from_file)
        if not requested:
            parser.error("No words given. Pass words or --from-file.")
        try:
            words = build_word_list(requested, download=not args.no_download)
        except DatasetError as exc:
            parser.error(str(exc))
        output = write_words(words, args.output)
        LOGGER.info("Wrote %s words to %s", len(words), output)
    elif args.command == "check":
        if not args.word.strip():
            parser.error("The quiz word must not be blank.")
        relation = Relation.parse(args.relation)
        try:
            accepted, source = asyncio.run(_check(settings, args.word, relation, args.answer))
        except QuizInputError as exc:
            parser.error(str(exc))
        verdict = "correct" if accepted else "incorrect"
        print(f"{args.answer.strip()} is {verdict} ({source})")
    elif args.command == "suggest":
        relation = Relation.parse(args.relation)
        suggestions = compute_suggestions(args.prefix, FallbackCatalog().for_relation(relation))
        _print_suggestions(suggestions)
    elif args.command == "sentence":
        if not args.word.strip():
            parser.error("The quiz word must not be blank.")
        app = QuizApp(
            settings=settings,
            session=QuizSession([Word(args.word)]),
            feedback=FeedbackChannel(_print_feedback),
        )
        app.submit_sentence(args.sentence)
    elif args.command == "history":
        _print_history(SentenceStore(settings.store_path).all())
    elif args.command == "quiz":
        asyncio.run(_run_quiz(settings, args.words or settings.words_source))


async def _check(settings: Settings, word: str, relation: Relation, answer: str) -> tuple[bool, str]:
    async with RelationLookupClient(settings.lookup_url, settings.lookup_timeout) as lookup:
        validator = AnswerValidator(lookup)
        catalog = FallbackCatalog()
        verdict = await validator.validate(word.strip().lower(), relation, answer, catalog.for_relation(relation))
    return verdict.accepted, verdict.source.value


async def _run_quiz(settings: Settings, source: str) -> None:
    loop = asyncio.get_running_loop()
    app = QuizApp(settings=settings)
    app.feedback.on_change = _print_feedback
    for relation in Relation:
        app.on_suggestions(relation, _print_suggestions)
    try:
        if not app.load_from(source):
            return
        print(QUIZ_HELP)
        _print_word(app.current_word())
        while True:
            line = (await loop.run_in_executor(None, input, "> ")).strip()
            if line in (":quit", ":q"):
                break
            if line == ":next":
                _print_word(app.next_word())
            elif line == ":play":
                app.play_word()
            elif line.startswith("? "):
                parts = line[2:].split(" ", 1)
                try:
                    relation = Relation.parse(parts[0])
                except ValueError as exc:
                    print(exc)
                    continue
                app.type_answer(relation, parts[1] if len(parts) > 1 else "")
                await asyncio.sleep(settings.debounce + 0.05)
            else:
                command, _, rest = line.partition(" ")
                if command in ("syn", "ant"):
                    await app.check_answer(Relation.parse(command), rest)
                elif command == "say":
                    app.submit_sentence(rest)
                else:
                    print(QUIZ_HELP)
    except (EOFError, KeyboardInterrupt):
        pass
    finally:
        await app.aclose()


def _print_word(word: Optional[Word]) -> None:
    if word is None:
        return
    print(f"\n{word.text} ({word.part_of_speech})")
    if word.definition:
        print(f"  {word.definition}")


def _print_feedback(feedback: Optional[Feedback]) -> None:
    if feedback is None:
        return
    print(f"[{feedback.severity.value}] {feedback.message}")


def _print_suggestions(suggestions: Optional[SuggestionSet]) -> None:
    if suggestions is None:
        return
    if suggestions.is_empty:
        print("No suggestions found")
        return
    print("  ".join(suggestions))


def _print_history(sentences: list[SubmittedSentence]) -> None:
    if not sentences:
        print("No sentences submitted yet")
        return
    rows = [[entry.created_at.isoformat(timespec="seconds"), entry.word, entry.sentence] for entry in sentences]
    headers = ["Submitted", "Word", "Sentence"]
    if tabulate:
        print(tabulate(rows, headers=headers))
    else:
        print(json.dumps(dict(headers=headers, rows=rows), indent=2))


if __name__ == "__main__":  # pragma: no cover
    main()
