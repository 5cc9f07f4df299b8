"""Immutable value objects and well-known names for MPRIS players."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import Field

from mpris_session.domain.shared.messages import ErrorMessages

BusName = Annotated[str, Field(min_length=1)]
"""Unique bus-level name of one remote player session."""

MEDIA_PLAYER2_PREFIX = "org.mpris.MediaPlayer2"
MEDIA_PLAYER2_OBJECT_PATH = "/org/mpris/MediaPlayer2"


class MediaPlayer2Interface(StrEnum):
    """D-Bus interfaces exported at :data:`MEDIA_PLAYER2_OBJECT_PATH`."""

    ROOT = "org.mpris.MediaPlayer2"
    PLAYER = "org.mpris.MediaPlayer2.Player"
    TRACK_LIST = "org.mpris.MediaPlayer2.TrackList"
    PLAYLISTS = "org.mpris.MediaPlayer2.Playlists"


class PlaybackStatus(StrEnum):
    """Playback state reported by a player.

    Values are the strings used on the wire. An unknown status (the read
    failed) is represented as ``None`` wherever a status is optional.
    """

    PLAYING = "Playing"
    PAUSED = "Paused"
    STOPPED = "Stopped"

    @classmethod
    def from_wire(cls, value: str) -> PlaybackStatus:
        """Parse the protocol string, raising ValueError for anything else."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(ErrorMessages.UNKNOWN_PLAYBACK_STATUS.format(value=value)) from None


def media_player_bus_name(name: str, instance: str | None = None) -> str:
    """Build ``org.mpris.MediaPlayer2.<name>[.<instance>]``."""
    if not name or not name.strip():
        raise ValueError(ErrorMessages.EMPTY_PLAYER_NAME)
    if instance:
        return f"{MEDIA_PLAYER2_PREFIX}.{name}.{instance}"
    return f"{MEDIA_PLAYER2_PREFIX}.{name}"


def is_media_player_bus_name(name: str, prefix: str = MEDIA_PLAYER2_PREFIX) -> bool:
    return name.startswith(prefix)
