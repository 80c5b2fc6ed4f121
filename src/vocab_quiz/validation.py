"""Grade synonym and antonym answers."""
from __future__ import annotations

import logging
from typing import Iterable

from .errors import EmptyAnswerError
from .lookup import RelationLookupClient
from .models import Relation, Remote, Unavailable, Verdict, VerdictSource

LOGGER = logging.getLogger(__name__)

EMPTY_ANSWER_PROMPTS = {
    Relation.SYNONYM: "Please enter a synonym.",
    Relation.ANTONYM: "Please enter an antonym.",
}


def normalize_answer(text: str) -> str:
    return text.strip().lower()


class AnswerValidator:
    """Check an answer against the relation service, or the fallback list
    when the service is unavailable.

    Only exact membership after normalisation counts; there is no fuzzy
    matching and no partial credit.
    """

    def __init__(self, lookup: RelationLookupClient):
        self.lookup = lookup

    async def validate(
        self,
        word: str,
        relation: Relation,
        user_input: str,
        fallback: Iterable[str],
    ) -> Verdict:
        answer = normalize_answer(user_input or "")
        if not answer:
            raise EmptyAnswerError(EMPTY_ANSWER_PROMPTS[relation])

        result = await self.lookup.lookup(word, relation)
        if isinstance(result, Remote):
            verdict = Verdict(accepted=answer in result.words, source=VerdictSource.REMOTE)
        elif isinstance(result, Unavailable):
            accepted = {normalize_answer(item) for item in fallback}
            verdict = Verdict(accepted=answer in accepted, source=VerdictSource.FALLBACK)
        else:
            raise TypeError(f"Unexpected relation result: {result!r}")
        LOGGER.debug(
            "%s %r for %r: accepted=%s via %s",
            relation.label,
            answer,
            word,
            verdict.accepted,
            verdict.source.value,
        )
        return verdict
