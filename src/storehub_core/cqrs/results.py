"""Result message — the outcome posted back to the gateway."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

GENERIC_ERROR_TEXT = "internal error"


class Outcome(str, enum.Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ResultMessage:
    """Outcome of one processed command.

    Carries no correlation id: the receiver cannot tell which request it
    answers.
    """

    outcome: Outcome
    message: str
    payload: Any = None

    @classmethod
    def success(cls, message: str, payload: Any = None) -> ResultMessage:
        return cls(outcome=Outcome.SUCCESS, message=message, payload=payload)

    @classmethod
    def failure(cls, message: str) -> ResultMessage:
        return cls(outcome=Outcome.ERROR, message=message)

    @property
    def is_success(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    def to_wire(self) -> dict[str, Any]:
        """Render as ``{"error": text}`` or ``{"message": text | payload}``."""
        if not self.is_success:
            return {"error": self.message}
        return {"message": self.message if self.payload is None else self.payload}
