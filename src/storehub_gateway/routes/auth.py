"""Sign-in route."""

from __future__ import annotations

from fastapi import APIRouter, Request

from ..schemas import Envelope, LoginRequest

router = APIRouter(prefix="/auth", tags=["auth"])

ACCESS_TOKEN_LABEL = "Access token"


@router.post("/login", response_model=Envelope)
async def login(credentials: LoginRequest, request: Request) -> Envelope:
    token = await request.app.state.auth_service.sign_in(
        credentials.login, credentials.password
    )
    return Envelope(message=ACCESS_TOKEN_LABEL, body=token)
