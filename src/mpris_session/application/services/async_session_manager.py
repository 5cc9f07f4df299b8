"""asyncio wrapper around :class:`SessionManager`.

The wrapped manager stays the single serialized core. Blocking work
(construction, teardown) runs in a worker thread and observer callbacks are
re-posted onto the owning event loop in the order they were produced.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import TYPE_CHECKING, Any, TypeVar

from ...domain.shared.messages import LogTemplates
from .session_manager import Players, SessionManager

if TYPE_CHECKING:
    from ...config.settings import Settings
    from ...domain.players.entities import MediaPlayer
    from ...domain.shared.subscription import Subscription
    from ..interfaces.bus import BusNameWatcher, EndpointFactory

logger = logging.getLogger(__name__)

T = TypeVar("T")
Callback = Callable[[T], Awaitable[None] | None]


class AsyncSessionManager:
    """Exposes a :class:`SessionManager` to asyncio code."""

    def __init__(self, manager: SessionManager, loop: asyncio.AbstractEventLoop) -> None:
        self._manager = manager
        self._loop = loop
        self._tasks: set[asyncio.Task[Any]] = set()

    @classmethod
    async def create(
        cls,
        watcher: BusNameWatcher,
        endpoint_factory: EndpointFactory,
        *,
        settings: Settings | None = None,
    ) -> AsyncSessionManager:
        """Build the manager off the event loop, propagating its errors."""
        loop = asyncio.get_running_loop()
        manager = await asyncio.to_thread(
            SessionManager, watcher, endpoint_factory, settings=settings
        )
        return cls(manager, loop)

    @property
    def manager(self) -> SessionManager:
        return self._manager

    @property
    def closed(self) -> bool:
        return self._manager.closed

    def players(self) -> Players:
        return self._manager.players()

    def active_player(self) -> MediaPlayer | None:
        return self._manager.active_player()

    def on_players_changed(self, callback: Callback[Players]) -> Subscription:
        """Run *callback* on the event loop whenever membership changes.

        Coroutine callbacks are scheduled as tasks.
        """
        return self._manager.on_players_changed(
            lambda players: self._post("players_changed", callback, players)
        )

    def on_active_player_changed(self, callback: Callback[MediaPlayer | None]) -> Subscription:
        return self._manager.on_active_player_changed(
            lambda player: self._post("active_player_changed", callback, player)
        )

    async def wait_for_active_player(
        self,
        predicate: Callable[[MediaPlayer | None], bool] | None = None,
        timeout: float | None = None,
    ) -> MediaPlayer | None:
        """Wait until the active player satisfies *predicate*.

        The default predicate waits for any active player. The predicate is
        checked now and on every active-player change. Raises TimeoutError
        when *timeout* elapses first.
        """
        check = predicate or (lambda player: player is not None)
        future: asyncio.Future[MediaPlayer | None] = self._loop.create_future()

        def resolve(player: MediaPlayer | None) -> None:
            if not future.done() and check(player):
                future.set_result(player)

        subscription = self.on_active_player_changed(resolve)
        try:
            resolve(self.active_player())
            return await asyncio.wait_for(future, timeout)
        finally:
            subscription.cancel()

    async def aclose(self) -> None:
        await asyncio.to_thread(self._manager.close)
        await asyncio.to_thread(self._manager.wait_closed)
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def __aenter__(self) -> AsyncSessionManager:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # === Loop dispatch ===

    def _post(self, name: str, callback: Callback[T], value: T) -> None:
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._invoke, name, callback, value)

    def _invoke(self, name: str, callback: Callback[T], value: T) -> None:
        try:
            result = callback(value)
        except Exception:
            logger.exception(LogTemplates.CALLBACK_FAILED, name)
            return
        if asyncio.iscoroutine(result):
            task = self._loop.create_task(self._await_callback(name, result))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _await_callback(self, name: str, coro: Awaitable[None]) -> None:
        try:
            await coro
        except Exception:
            logger.exception(LogTemplates.CALLBACK_FAILED, name)
