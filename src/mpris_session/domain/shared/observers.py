"""Ordered observer lists with reentrancy-safe notification."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from mpris_session.domain.shared.messages import LogTemplates
from mpris_session.domain.shared.subscription import Subscription

logger = logging.getLogger(__name__)

T = TypeVar("T")
Observer = Callable[[T], object]


class ObserverList(Generic[T]):
    """Observers called synchronously in registration order.

    The list is copied before each notification, so an observer may add or
    remove observers (itself included) from inside its callback. Exceptions
    raised by an observer are logged and do not stop the others.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._observers: list[Observer[T]] = []

    def __len__(self) -> int:
        return len(self._observers)

    def subscribe(self, observer: Observer[T]) -> Subscription:
        self._observers.append(observer)
        logger.debug("Subscribed observer to %s", self._name)
        return Subscription(lambda: self._discard(observer), name=f"{self._name} observer")

    def _discard(self, observer: Observer[T]) -> None:
        # Identity match so the same callable registered twice is removed once.
        for index, registered in enumerate(self._observers):
            if registered is observer:
                del self._observers[index]
                return

    def notify(self, value: T) -> None:
        for observer in tuple(self._observers):
            try:
                observer(value)
            except Exception:
                logger.exception(LogTemplates.OBSERVER_FAILED, self._name)

    def clear(self) -> None:
        self._observers.clear()
