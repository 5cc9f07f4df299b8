"""
Players Bounded Context

Contains player identities and statuses, the ordered player registry and
the active-player selection rules.
"""

from mpris_session.domain.players.entities import MediaPlayer, PlayerHandle
from mpris_session.domain.players.registry import PlayerRegistry
from mpris_session.domain.players.selector import ActivePlayerSelector
from mpris_session.domain.players.value_objects import BusName, PlaybackStatus

__all__ = [
    "ActivePlayerSelector",
    "BusName",
    "MediaPlayer",
    "PlaybackStatus",
    "PlayerHandle",
    "PlayerRegistry",
]
