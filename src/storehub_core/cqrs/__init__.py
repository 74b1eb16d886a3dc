from __future__ import annotations

from .commands import Action, CommandMessage
from .results import GENERIC_ERROR_TEXT, Outcome, ResultMessage

__all__ = [
    "GENERIC_ERROR_TEXT",
    "Action",
    "CommandMessage",
    "Outcome",
    "ResultMessage",
]
