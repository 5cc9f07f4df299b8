"""Session Manager

Tracks every MPRIS player on the bus and keeps the active-player selection
current. Bus notifications may arrive on any thread; each one is funneled
into the manager's :class:`EventQueue` and processed as a single step, so
the registry and selector are only ever touched by one step at a time.
Readers get immutable snapshots that are swapped at the end of every step.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from types import TracebackType
from typing import TYPE_CHECKING

from ...config.settings import Settings, get_settings
from ...domain.players.entities import MediaPlayer, PlayerHandle
from ...domain.players.registry import PlayerRegistry
from ...domain.players.selector import ActivePlayerSelector
from ...domain.players.value_objects import PlaybackStatus, is_media_player_bus_name
from ...domain.shared.event_queue import EventQueue
from ...domain.shared.exceptions import RemoteError
from ...domain.shared.messages import LogTemplates
from ...domain.shared.observers import ObserverList
from ...domain.shared.subscription import Subscription, cancel_all

if TYPE_CHECKING:
    from ..interfaces.bus import BusNameWatcher, EndpointFactory, PlayerEndpoint

logger = logging.getLogger(__name__)

# Key of the bus-level subscription in the subscription table; never a valid bus name.
BUS_SUBSCRIPTION_KEY = ""

Players = tuple[MediaPlayer, ...]


class SessionManager:
    """Supervises the players on a bus and selects the active one.

    Construction subscribes to ownership changes, enumerates the players
    already on the bus and processes them in enumeration order before
    returning. A ``ConnectionError`` from the watcher propagates and leaves
    nothing subscribed.
    """

    def __init__(
        self,
        watcher: BusNameWatcher,
        endpoint_factory: EndpointFactory,
        *,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings if settings is not None else get_settings()
        self._watcher = watcher
        self._endpoint_factory = endpoint_factory

        self._registry = PlayerRegistry()
        self._selector = ActivePlayerSelector(self._registry)
        self._events = EventQueue()
        self._subscriptions: dict[str, list[Subscription]] = {}

        self._players_changed: ObserverList[Players] = ObserverList("players_changed")
        self._active_changed: ObserverList[MediaPlayer | None] = ObserverList(
            "active_player_changed"
        )

        self._players: Players = ()
        self._active: MediaPlayer | None = None
        self._closed = False
        self._close_lock = threading.Lock()
        self._released = threading.Event()

        with self._events.exclusive():
            try:
                self._start()
            except BaseException as e:
                logger.error(LogTemplates.MANAGER_START_FAILED, e)
                self.close()
                raise

        logger.info(
            LogTemplates.MANAGER_STARTED,
            self._settings.environment,
            len(self._players),
            self._selector.active,
        )

    # === Public API ===

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def closed(self) -> bool:
        return self._closed

    def players(self) -> Players:
        """Tracked players in the order they were added."""
        return self._players

    def active_player(self) -> MediaPlayer | None:
        return self._active

    def on_players_changed(self, observer: Callable[[Players], object]) -> Subscription:
        """Call *observer* with the new player tuple whenever membership changes."""
        return self._players_changed.subscribe(observer)

    def on_active_player_changed(
        self, observer: Callable[[MediaPlayer | None], object]
    ) -> Subscription:
        """Call *observer* with the new active player whenever the selection changes."""
        return self._active_changed.subscribe(observer)

    def close(self) -> None:
        """Cancel the bus subscription and every player subscription.

        Safe to call more than once. When another thread is processing an
        event, teardown runs on that thread right after the current step, so
        ``closed`` may already be true while subscriptions are still live and
        observers may still fire from that step. Use :meth:`wait_closed` to
        block until everything has been released.
        """
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self._events.submit(self._teardown)

    def wait_closed(self, timeout: float | None = None) -> bool:
        """Block until teardown has finished; False if *timeout* expired first.

        Must not be called from an observer, since teardown waits for the
        observer's own step to end.
        """
        return self._released.wait(timeout)

    def __enter__(self) -> SessionManager:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        active = self._selector.active
        return f"<SessionManager {state} players={len(self._players)} active={active!r}>"

    # === Lifecycle ===

    def _start(self) -> None:
        cancel = self._watcher.on_ownership_changed(self._on_ownership_changed)
        self._subscriptions[BUS_SUBSCRIPTION_KEY] = [Subscription(cancel, name="bus ownership")]

        strict = self._settings.session.strict_enumeration
        for name in self._watcher.list_names():
            if self._matches(name):
                self._add(name, strict=strict)

    def _teardown(self) -> None:
        bus = self._subscriptions.pop(BUS_SUBSCRIPTION_KEY, [])
        players = [s for subs in self._subscriptions.values() for s in subs]
        self._subscriptions.clear()
        cancel_all([*bus, *players])

        self._selector.reset()
        self._players = ()
        self._active = None
        self._players_changed.clear()
        self._active_changed.clear()
        self._released.set()
        logger.info(LogTemplates.MANAGER_CLOSED)

    def _matches(self, name: str) -> bool:
        return is_media_player_bus_name(name, self._settings.bus.name_prefix)

    # === Bus callbacks (any thread) ===

    def _on_ownership_changed(
        self, name: str, previous_owner_empty: bool, new_owner_empty: bool
    ) -> None:
        if self._closed or not self._matches(name):
            return
        if previous_owner_empty:
            self._events.submit(self._handle_appeared, name)
        if new_owner_empty:
            self._events.submit(self._handle_disappeared, name)

    def _on_status(self, handle: PlayerHandle, status: PlaybackStatus) -> None:
        if self._closed:
            return
        self._events.submit(self._handle_status, handle, status)

    # === Event steps ===

    def _handle_appeared(self, name: str) -> None:
        if self._closed:
            return
        self._add(name, strict=False)

    def _handle_disappeared(self, name: str) -> None:
        if self._closed:
            return
        previous_active = self._selector.active
        handle, _ = self._selector.removed(name)
        if handle is None:
            logger.debug(LogTemplates.PLAYER_NOT_TRACKED, name)
            return
        cancel_all(self._subscriptions.pop(name, []))
        logger.info(LogTemplates.PLAYER_REMOVED, name)
        self._publish(previous_active, players_changed=True)

    def _handle_status(self, handle: PlayerHandle, status: PlaybackStatus) -> None:
        # A late notification from a removed (or replaced) player is dropped.
        if self._closed or self._registry.find(handle.identity) is not handle:
            return
        previous_active = self._selector.active
        self._selector.status_changed(handle.identity, status)
        logger.debug(LogTemplates.PLAYER_STATUS_CHANGED, handle.identity, status)
        self._publish(previous_active, players_changed=False)

    def _add(self, name: str, *, strict: bool) -> None:
        if name in self._registry:
            logger.debug(LogTemplates.PLAYER_ALREADY_TRACKED, name)
            return
        endpoint = self._endpoint_factory(name, self._settings.bus.timeout_s)
        handle = PlayerHandle(
            identity=name, endpoint=endpoint, status=self._read_status(endpoint, name, strict)
        )

        try:
            cancel = endpoint.observe_status(lambda status: self._on_status(handle, status))
        except RemoteError as e:
            if strict:
                raise
            logger.warning(LogTemplates.PLAYER_SUBSCRIBE_FAILED, name, e)
            return

        handle.subscription = Subscription(cancel, name=f"{name} status")
        previous_active = self._selector.active
        self._selector.added(handle)
        self._subscriptions[name] = [handle.subscription]
        logger.info(LogTemplates.PLAYER_ADDED, name, handle.status)
        self._publish(previous_active, players_changed=True)

    def _read_status(
        self, endpoint: PlayerEndpoint, name: str, strict: bool
    ) -> PlaybackStatus | None:
        try:
            return endpoint.get_status()
        except (RemoteError, TimeoutError) as e:
            if strict:
                raise
            logger.warning(LogTemplates.PLAYER_STATUS_UNAVAILABLE, name, e)
            return None

    def _publish(self, previous_active: str | None, *, players_changed: bool) -> None:
        """Swap in fresh snapshots, then notify observers of what changed."""
        self._players = self._registry.snapshot()
        active = self._selector.active_handle()
        self._active = active.to_view() if active is not None else None

        if players_changed:
            self._players_changed.notify(self._players)
        if self._selector.active != previous_active:
            logger.info(LogTemplates.ACTIVE_PLAYER_CHANGED, previous_active, self._selector.active)
            self._active_changed.notify(self._active)
