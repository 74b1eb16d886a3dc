"""Authentication exceptions of the gateway."""

from __future__ import annotations

from storehub_core.primitives.exceptions import (
    AuthenticationError,
    DeliveryError,
    ErrorKind,
    StoreHubError,
)

from ..schemas import INTERNAL_ERROR_TEXT


class TokenError(AuthenticationError):
    """Raised when the bearer token is missing, malformed or rejected."""


class AuthProviderUnavailableError(DeliveryError):
    """Raised when the token service cannot be reached or misbehaves."""

    default_message = INTERNAL_ERROR_TEXT


class SignInError(StoreHubError):
    """Base class for credential errors answered with 400."""

    kind = ErrorKind.VALIDATION


class UnknownUserError(SignInError):
    default_message = "User with provided login does not exist"


class WrongPasswordError(SignInError):
    default_message = "Wrong password provided"
