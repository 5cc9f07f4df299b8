"""Port interfaces for the message bus and remote player endpoints."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from mpris_session.domain.players.value_objects import BusName, PlaybackStatus

OwnershipHandler = Callable[[BusName, bool, bool], None]
"""Called with ``(name, previous_owner_empty, new_owner_empty)``."""

StatusHandler = Callable[[PlaybackStatus], None]

CancelFunc = Callable[[], object]


class BusNameWatcher(ABC):
    """Interface for bus name enumeration and ownership notifications."""

    @abstractmethod
    def list_names(self) -> list[BusName]:
        """Return every currently registered bus name.

        Raises:
            ConnectionError: The bus cannot be reached.
        """
        ...

    @abstractmethod
    def on_ownership_changed(self, handler: OwnershipHandler) -> CancelFunc:
        """Subscribe to name ownership changes and return a cancel function.

        A name appears when its previous owner is empty and disappears when
        its new owner is empty. Handlers may be called from any thread.

        Raises:
            ConnectionError: The subscription cannot be registered.
        """
        ...


class PlayerEndpoint(ABC):
    """Status capability of one remote player session."""

    @property
    @abstractmethod
    def identity(self) -> BusName:
        ...

    @abstractmethod
    def get_status(self) -> PlaybackStatus:
        """Read the current playback status with a blocking round trip.

        Raises:
            RemoteError: The player rejected the call.
            TimeoutError: The player did not answer in time.
        """
        ...

    @abstractmethod
    def observe_status(self, handler: StatusHandler) -> CancelFunc:
        """Subscribe to playback status changes and return a cancel function.

        Raises:
            RemoteError: The subscription cannot be registered.
        """
        ...


EndpointFactory = Callable[[BusName, float], PlayerEndpoint]
"""Builds an endpoint from a bus name and a call timeout in seconds."""
