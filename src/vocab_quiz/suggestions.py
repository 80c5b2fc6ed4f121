"""Prefix suggestions delivered after the learner pauses typing."""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable, Optional, Sequence

from .config import DEFAULT_DEBOUNCE
from .models import SuggestionSet

LOGGER = logging.getLogger(__name__)

UpdateCallback = Callable[[Optional[SuggestionSet]], None]
SelectCallback = Callable[[str], None]
ComputeFunction = Callable[[str, Sequence[str]], Optional[SuggestionSet]]


def compute_suggestions(prefix: str, candidates: Iterable[str]) -> Optional[SuggestionSet]:
    """Return candidates starting with ``prefix`` in their original order.

    A blank prefix clears the display and yields ``None``; a prefix nothing
    starts with yields an empty :class:`SuggestionSet`.
    """

    needle = prefix.strip().lower()
    if not needle:
        return None
    return SuggestionSet(tuple(word for word in candidates if word.lower().startswith(needle)))


class SuggestionEngine:
    """Debounced suggestion source for one answer field.

    Every :meth:`schedule` call replaces the pending timer, so only the last
    call inside ``delay`` seconds computes and delivers. Timers are tagged with
    a generation number and a superseded timer never delivers.
    """

    def __init__(
        self,
        candidates: Sequence[str],
        on_update: Optional[UpdateCallback] = None,
        on_select: Optional[SelectCallback] = None,
        delay: float = DEFAULT_DEBOUNCE,
        compute: ComputeFunction = compute_suggestions,
    ):
        self.candidates = tuple(candidates)
        self.on_update = on_update
        self.on_select = on_select
        self.delay = delay
        self.compute = compute
        self.current: Optional[SuggestionSet] = None
        self._generation = 0
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def generation(self) -> int:
        return self._generation

    def schedule(self, text: str) -> None:
        """Arm the delivery timer for ``text``; must run inside an event loop."""

        loop = asyncio.get_running_loop()
        self._cancel_timer()
        self._generation += 1
        self._handle = loop.call_later(self.delay, self._fire, self._generation, text)

    def select(self, text: str) -> None:
        """Choose ``text``: write it to the owning field and clear the set."""

        self._cancel_timer()
        self._generation += 1
        if self.on_select is not None:
            self.on_select(text)
        self._deliver(None)

    def cancel(self) -> None:
        """Drop any pending delivery and clear the displayed set."""

        self._cancel_timer()
        self._generation += 1
        self._deliver(None)

    def _fire(self, generation: int, text: str) -> None:
        if generation != self._generation:
            LOGGER.debug("Dropping superseded suggestion timer %s", generation)
            return
        self._handle = None
        self._deliver(self.compute(text, self.candidates))

    def _deliver(self, suggestions: Optional[SuggestionSet]) -> None:
        self.current = suggestions
        if self.on_update is not None:
            self.on_update(suggestions)

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
