"""FastAPI dependencies for authentication."""

from __future__ import annotations

from fastapi import Request

from .token import extract_bearer_token, extract_login


async def get_caller(request: Request) -> str:
    """Resolve the caller's login from a provider-validated bearer token.

    Use this as a FastAPI dependency on every storage route.

    Raises:
        TokenError: answered with 401 by the error handlers.
    """
    token = extract_bearer_token(request.headers)
    await request.app.state.auth_provider.validate(token)
    return extract_login(token)
