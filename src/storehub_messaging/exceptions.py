"""Messaging-specific exceptions for storehub_messaging."""

from __future__ import annotations

from storehub_core.primitives.exceptions import DeliveryError


class MessagingError(DeliveryError):
    """Base class for all messaging-related infrastructure errors."""


class MessagingConnectionError(MessagingError):
    """Raised when connectivity to the message broker fails."""


class MessagingSerializationError(MessagingError):
    """Raised when a command body cannot be encoded or decoded."""
