"""
Application Interfaces (Ports)

Abstract interfaces that define the contract between the session manager
and the bus binding layer that supplies name ownership and player status.
"""

from mpris_session.application.interfaces.bus import (
    BusNameWatcher,
    EndpointFactory,
    OwnershipHandler,
    PlayerEndpoint,
)

__all__ = [
    "BusNameWatcher",
    "EndpointFactory",
    "OwnershipHandler",
    "PlayerEndpoint",
]
