"""Client for the remote word-relation service."""
from __future__ import annotations

import logging
from typing import Any, Optional, Set

import httpx

from .config import DATAMUSE_URL, DEFAULT_LOOKUP_TIMEOUT
from .models import Relation, RelationQuery, RelationResult, Remote, Unavailable

LOGGER = logging.getLogger(__name__)


class RelationLookupClient:
    """Ask a Datamuse-compatible service for synonyms or antonyms.

    Every failure mode (bad status, malformed body, transport error, timeout)
    comes back as :class:`Unavailable`; ``lookup`` never raises for them.
    There are no retries and nothing is cached.
    """

    def __init__(
        self,
        base_url: str = DATAMUSE_URL,
        timeout: float = DEFAULT_LOOKUP_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RelationLookupClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def lookup(self, word: str, relation: Relation) -> RelationResult:
        if not word:
            raise ValueError("lookup requires a non-empty word")
        query = RelationQuery(word=word, relation=relation)
        try:
            response = await self.client.get(self.base_url, params=query.params(), timeout=self.timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            LOGGER.debug("Relation service unreachable for %s: %s", query, exc)
            return Unavailable(f"transport error: {exc.__class__.__name__}")
        if response.status_code != 200:
            LOGGER.debug("Relation service returned %s for %s", response.status_code, query)
            return Unavailable(f"status {response.status_code}")
        try:
            payload = response.json()
        except ValueError:
            LOGGER.debug("Relation service sent a non-JSON body for %s", query)
            return Unavailable("malformed body")
        if not isinstance(payload, list):
            LOGGER.debug("Relation service sent a non-array payload for %s", query)
            return Unavailable("payload is not an array")
        return Remote(frozenset(_related_words(payload)))


def _related_words(payload: list[Any]) -> Set[str]:
    words: Set[str] = set()
    for item in payload:
        if not isinstance(item, dict):
            continue
        text = item.get("word")
        if isinstance(text, str) and text:
            words.add(text.lower())
    return words
