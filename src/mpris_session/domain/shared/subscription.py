"""Idempotent cancel handles for live event registrations."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable

from mpris_session.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

CancelFunc = Callable[[], object]


class Subscription:
    """A live registration that is released at most once.

    Calling :meth:`cancel` (or the subscription itself) a second time is a
    no-op. The underlying cancel function may raise; the subscription still
    counts as released so the function is never retried.
    """

    __slots__ = ("_cancel", "_lock", "name")

    def __init__(self, cancel: CancelFunc, name: str = "") -> None:
        self._cancel: CancelFunc | None = cancel
        self._lock = threading.Lock()
        self.name = name

    @property
    def active(self) -> bool:
        return self._cancel is not None

    def cancel(self) -> bool:
        """Release the registration. Returns False if it was already released."""
        with self._lock:
            cancel, self._cancel = self._cancel, None
        if cancel is None:
            return False
        cancel()
        return True

    __call__ = cancel

    def __repr__(self) -> str:
        state = "active" if self.active else "cancelled"
        return f"Subscription({self.name!r}, {state})"


def cancel_all(subscriptions: Iterable[Subscription]) -> int:
    """Cancel every subscription, logging failures instead of raising.

    Returns the number of subscriptions whose cancel function raised.
    """
    failures = 0
    for subscription in subscriptions:
        try:
            subscription.cancel()
        except Exception as e:
            failures += 1
            logger.warning(LogTemplates.SUBSCRIPTION_CANCEL_FAILED, subscription.name, e)
    return failures
