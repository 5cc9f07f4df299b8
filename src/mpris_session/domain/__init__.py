# ruff: noqa: N999
"""
Domain Layer

Contains the bus-independent session logic:
- shared/: Exceptions, messages, subscriptions, observers and the event queue
- players/: Player identities, the registry and active-player selection
"""

from mpris_session.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
