"""Serialized event processing.

Every mutation of session state runs as a *step* on an :class:`EventQueue`.
Steps run one at a time in submission order. A step submitted while another
is running, whether from inside that step or from another thread, is queued
and executed by the thread that is already draining the queue, so two steps
never interleave.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import partial
from typing import Any

from mpris_session.domain.shared.exceptions import InvalidOperationError
from mpris_session.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)


class EventQueue:
    """Single ordered execution context for session events."""

    def __init__(self) -> None:
        self._pending: deque[Callable[[], Any]] = deque()
        self._mutex = threading.Lock()
        self._draining = False

    @property
    def busy(self) -> bool:
        return self._draining

    @property
    def pending(self) -> int:
        return len(self._pending)

    def submit(self, step: Callable[..., Any], *args: Any) -> None:
        """Run *step* now, or after the steps already queued."""
        with self._mutex:
            self._pending.append(partial(step, *args))
            if self._draining:
                return
            self._draining = True
        self._drain()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        """Run the body as one step, propagating its exceptions.

        Steps submitted while the body runs are executed right after it.
        """
        with self._mutex:
            if self._draining:
                raise InvalidOperationError(
                    "exclusive", "draining", ErrorMessages.QUEUE_BUSY
                )
            self._draining = True
        try:
            yield
        finally:
            self._drain()

    def _drain(self) -> None:
        try:
            while True:
                with self._mutex:
                    if not self._pending:
                        self._draining = False
                        return
                    step = self._pending.popleft()
                try:
                    step()
                except Exception:
                    logger.exception(LogTemplates.EVENT_STEP_FAILED, step)
        except BaseException:
            # Interrupts propagate; the next submit drains what is left.
            with self._mutex:
                self._draining = False
            raise
