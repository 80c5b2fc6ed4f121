"""Single-slot feedback messages for the learner."""
from __future__ import annotations

import asyncio
from typing import Callable, Optional

from .models import Feedback, Severity

FeedbackListener = Callable[[Optional[Feedback]], None]


class FeedbackChannel:
    """Holds at most one visible message; the newest replaces the oldest.

    Messages with a positive duration are dismissed automatically when an
    event loop is running. Without one they stay until replaced.
    """

    def __init__(self, on_change: Optional[FeedbackListener] = None):
        self.on_change = on_change
        self.current: Optional[Feedback] = None
        self._timer: Optional[asyncio.TimerHandle] = None

    def show(self, message: str, severity: Severity = Severity.INFO, duration: Optional[float] = 3.0) -> Feedback:
        self._cancel_timer()
        feedback = Feedback(message=message, severity=severity, duration=duration)
        self._set(feedback)
        if duration:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = None
            if loop is not None:
                self._timer = loop.call_later(duration, self._expire, feedback)
        return feedback

    def dismiss(self) -> None:
        self._cancel_timer()
        self._set(None)

    def _expire(self, feedback: Feedback) -> None:
        self._timer = None
        if self.current is feedback:
            self._set(None)

    def _set(self, feedback: Optional[Feedback]) -> None:
        self.current = feedback
        if self.on_change is not None:
            self.on_change(feedback)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
