"""Active-player selection.

The selector favours stability over recency. An active player keeps its
place after it stops unless another player is actually playing, and a player
that starts playing takes over only from an active player that is not
playing. Ties are settled at the moment of the triggering event, so the last
player to transition into Playing wins.
"""

from __future__ import annotations

import logging

from mpris_session.domain.players.entities import PlayerHandle
from mpris_session.domain.players.registry import PlayerRegistry
from mpris_session.domain.players.value_objects import PlaybackStatus

logger = logging.getLogger(__name__)


def _is_playing(handle: PlayerHandle) -> bool:
    return handle.has_status(PlaybackStatus.PLAYING)


def _is_paused(handle: PlayerHandle) -> bool:
    return handle.has_status(PlaybackStatus.PAUSED)


class ActivePlayerSelector:
    """Tracks which identity in a :class:`PlayerRegistry` is active.

    The active player is stored as an identity and resolved through the
    registry on demand. Every transition method returns True when the active
    identity changed.
    """

    def __init__(self, registry: PlayerRegistry) -> None:
        self._registry = registry
        self._active: str | None = None

    @property
    def registry(self) -> PlayerRegistry:
        return self._registry

    @property
    def active(self) -> str | None:
        return self._active

    def active_handle(self) -> PlayerHandle | None:
        if self._active is None:
            return None
        return self._registry.find(self._active)

    def _set_active(self, identity: str | None) -> bool:
        if identity == self._active:
            return False
        self._active = identity
        return True

    def status_changed(self, identity: str, status: PlaybackStatus | None) -> bool:
        """Apply a status report from a tracked player.

        A known *status* becomes the player's last known status; ``None``
        leaves it as it was. Untracked identities are ignored.
        """
        handle = self._registry.find(identity)
        if handle is None:
            return False
        if status is not None:
            handle.status = status

        if self._active is None:
            return self._set_active(identity)

        if identity == self._active:
            if status is not PlaybackStatus.PLAYING:
                playing = self._registry.last_matching(_is_playing)
                if playing is not None:
                    return self._set_active(playing.identity)
            return False

        if status is PlaybackStatus.PLAYING:
            active = self.active_handle()
            if active is None or not _is_playing(active):
                return self._set_active(identity)
        return False

    def added(self, handle: PlayerHandle) -> bool:
        """Register *handle* and apply its initial status."""
        self._registry.add(handle)
        return self.status_changed(handle.identity, handle.status)

    def removed(self, identity: str) -> tuple[PlayerHandle | None, bool]:
        """Drop *identity* from the registry and reselect if it was active.

        Returns the removed handle (None if it was not tracked) and whether
        the active identity changed. The caller owns releasing the handle's
        subscription.
        """
        handle = self._registry.remove(identity)
        if identity != self._active:
            return handle, False

        fallback = (
            self._registry.last_matching(_is_playing)
            or self._registry.last_matching(_is_paused)
            or self._registry.last()
        )
        changed = self._set_active(fallback.identity if fallback is not None else None)
        if changed:
            logger.debug("Active player %s removed, fell back to %s", identity, self._active)
        return handle, changed

    def reset(self) -> list[PlayerHandle]:
        """Forget every player and the active identity."""
        self._active = None
        return self._registry.clear()
