"""Request and response bodies of the gateway."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

SUCCESS = "Success"
ERROR = "Error"
PROCESSING_TEXT = (
    "Storage service is processing your message. Check status through logs"
)
PUBLISH_FAILED_TEXT = "Failed to publish a message"
INVALID_ARGUMENT_TEXT = "Invalid argument passed"
INTERNAL_ERROR_TEXT = "Internal server error"


class Envelope(BaseModel):
    """Every gateway answer: a label and a body."""

    message: str
    body: Any = None

    @classmethod
    def success(cls, body: Any) -> Envelope:
        return cls(message=SUCCESS, body=body)

    @classmethod
    def error(cls, body: Any) -> Envelope:
        return cls(message=ERROR, body=body)


class LoginRequest(BaseModel):
    login: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6, max_length=40)
