"""Insertion-ordered, identity-unique collection of tracked players."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from mpris_session.domain.players.entities import MediaPlayer, PlayerHandle
from mpris_session.domain.shared.exceptions import BusinessRuleViolationError
from mpris_session.domain.shared.messages import ErrorMessages


class PlayerRegistry:
    """Ordered set of :class:`PlayerHandle` keyed by identity.

    Not thread-safe; mutate only from a serialized event step. Readers on
    other threads should use :meth:`snapshot`.
    """

    def __init__(self) -> None:
        self._handles: list[PlayerHandle] = []

    def __len__(self) -> int:
        return len(self._handles)

    def __iter__(self) -> Iterator[PlayerHandle]:
        return iter(tuple(self._handles))

    def __contains__(self, identity: object) -> bool:
        return self.find(identity) is not None  # type: ignore[arg-type]

    def add(self, handle: PlayerHandle) -> None:
        """Append *handle* at the tail."""
        if self.find(handle.identity) is not None:
            raise BusinessRuleViolationError(
                "unique_identity",
                ErrorMessages.DUPLICATE_PLAYER.format(identity=handle.identity),
            )
        self._handles.append(handle)

    def remove(self, identity: str) -> PlayerHandle | None:
        for index, handle in enumerate(self._handles):
            if handle.identity == identity:
                return self._handles.pop(index)
        return None

    def find(self, identity: str) -> PlayerHandle | None:
        for handle in self._handles:
            if handle.identity == identity:
                return handle
        return None

    def last(self) -> PlayerHandle | None:
        return self._handles[-1] if self._handles else None

    def last_matching(self, predicate: Callable[[PlayerHandle], bool]) -> PlayerHandle | None:
        """Return the most recently added handle satisfying *predicate*."""
        for handle in reversed(self._handles):
            if predicate(handle):
                return handle
        return None

    def snapshot(self) -> tuple[MediaPlayer, ...]:
        return tuple(handle.to_view() for handle in self._handles)

    def clear(self) -> list[PlayerHandle]:
        """Remove every handle, returning them in insertion order."""
        handles, self._handles = self._handles, []
        return handles
