"""
Shared Domain Kernel

Contains exceptions and lifecycle primitives shared by every layer.
"""

from mpris_session.domain.shared.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    InvalidOperationError,
    RemoteError,
)
from mpris_session.domain.shared.subscription import Subscription

__all__ = [
    "BusinessRuleViolationError",
    "DomainError",
    "InvalidOperationError",
    "RemoteError",
    "Subscription",
]
