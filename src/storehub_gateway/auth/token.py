"""Bearer token extraction and claim reading."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from joserfc import jws
from joserfc.errors import JoseError

from .exceptions import TokenError

if TYPE_CHECKING:
    from collections.abc import Mapping

LOGIN_CLAIM = "login"


def extract_bearer_token(headers: Mapping[str, str]) -> str:
    """Extract the token from ``Authorization: Bearer <token>``.

    Raises:
        TokenError: header absent or not in bearer form.
    """
    auth_header = headers.get("Authorization") or headers.get("authorization")
    if not auth_header:
        raise TokenError("no access token in headers")

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise TokenError("invalid token format")

    return parts[1]


def extract_login(token: str) -> str:
    """Read the ``login`` claim without checking the signature.

    Only call this on a token the auth provider has already validated.

    Raises:
        TokenError: token is not a compact JWS or carries no string login.
    """
    try:
        compact = jws.extract_compact(token.encode("ascii"))
        claims = json.loads(compact.payload)
    except (JoseError, ValueError) as e:
        raise TokenError("invalid token payload") from e

    login = claims.get(LOGIN_CLAIM) if isinstance(claims, dict) else None
    if not isinstance(login, str) or not login:
        raise TokenError("invalid token payload")
    return login
