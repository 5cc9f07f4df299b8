"""Track MPRIS media players on a message bus and pick the active one."""

from mpris_session.application.interfaces.bus import (
    BusNameWatcher,
    EndpointFactory,
    PlayerEndpoint,
)
from mpris_session.application.services.async_session_manager import AsyncSessionManager
from mpris_session.application.services.session_manager import SessionManager
from mpris_session.domain.players.entities import MediaPlayer
from mpris_session.domain.players.value_objects import BusName, PlaybackStatus
from mpris_session.domain.shared.exceptions import RemoteError
from mpris_session.domain.shared.subscription import Subscription

__all__ = [
    "AsyncSessionManager",
    "BusName",
    "BusNameWatcher",
    "EndpointFactory",
    "MediaPlayer",
    "PlaybackStatus",
    "PlayerEndpoint",
    "RemoteError",
    "SessionManager",
    "Subscription",
]
