"""Authentication against the external token service."""

from __future__ import annotations

from .dependencies import get_caller
from .exceptions import (
    AuthProviderUnavailableError,
    SignInError,
    TokenError,
    UnknownUserError,
    WrongPasswordError,
)
from .provider import AuthProviderClient
from .token import extract_bearer_token, extract_login
from .users import AuthService, InMemoryUserRepository

__all__ = [
    "AuthProviderClient",
    "AuthProviderUnavailableError",
    "AuthService",
    "InMemoryUserRepository",
    "SignInError",
    "TokenError",
    "UnknownUserError",
    "WrongPasswordError",
    "extract_bearer_token",
    "extract_login",
    "get_caller",
]
