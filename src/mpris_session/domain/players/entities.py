"""Player records kept by the registry and the views handed to callers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from mpris_session.domain.players.value_objects import BusName, PlaybackStatus

if TYPE_CHECKING:
    from mpris_session.domain.shared.subscription import Subscription


class MediaPlayer(BaseModel):
    """Immutable snapshot of one tracked player, safe to share across threads."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    identity: BusName
    status: PlaybackStatus | None = None
    endpoint: Any = None

    @property
    def is_playing(self) -> bool:
        return self.status is PlaybackStatus.PLAYING

    @property
    def is_paused(self) -> bool:
        return self.status is PlaybackStatus.PAUSED


@dataclass(eq=False)
class PlayerHandle:
    """Registry record for one tracked identity.

    Holds the endpoint, the last known status (``None`` when it could not be
    read) and the single status subscription owned by the handle.
    """

    identity: BusName
    endpoint: Any
    status: PlaybackStatus | None = None
    subscription: Subscription | None = None

    def has_status(self, status: PlaybackStatus) -> bool:
        return self.status is status

    def to_view(self) -> MediaPlayer:
        return MediaPlayer(identity=self.identity, status=self.status, endpoint=self.endpoint)
