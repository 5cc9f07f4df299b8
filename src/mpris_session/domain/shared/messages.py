"""Centralized message constants for error messages and log output."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Bus name / status validation
    EMPTY_PLAYER_NAME = "Player name cannot be empty"
    EMPTY_NAME_PREFIX = "Bus name prefix cannot be empty"
    UNKNOWN_PLAYBACK_STATUS = "Unknown playback status '{value}'"

    # Registry rules
    DUPLICATE_PLAYER = "Player '{identity}' is already tracked"

    # Event queue
    QUEUE_BUSY = "Event queue is already processing"

    # Settings
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Manager lifecycle
    MANAGER_STARTED = "Session manager started (%s) with %d players (active: %s)"
    MANAGER_CLOSED = "Session manager closed"
    MANAGER_START_FAILED = "Session manager failed to start: %r"

    # Player lifecycle
    PLAYER_ADDED = "Added player %s (status: %s)"
    PLAYER_REMOVED = "Removed player %s"
    PLAYER_ALREADY_TRACKED = "Ignoring appearance of already tracked player %s"
    PLAYER_NOT_TRACKED = "Ignoring disappearance of untracked player %s"
    PLAYER_STATUS_CHANGED = "Player %s status changed to %s"
    PLAYER_STATUS_UNAVAILABLE = "Could not read status of %s, treating as unknown: %r"
    PLAYER_SUBSCRIBE_FAILED = "Could not observe status of %s, not tracking it: %r"
    ACTIVE_PLAYER_CHANGED = "Active player changed from %s to %s"

    # Subscriptions / observers
    SUBSCRIPTION_CANCEL_FAILED = "Failed to cancel subscription %s: %r"
    OBSERVER_FAILED = "Error in %s observer"
    EVENT_STEP_FAILED = "Error while processing queued event %s"
    CALLBACK_FAILED = "Error in async %s callback"
