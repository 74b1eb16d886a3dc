"""CommandSerializer — JSON roundtrip of command messages."""

from __future__ import annotations

import json

from pydantic import ValidationError as PydanticValidationError

from storehub_core.cqrs.commands import CommandMessage

from .exceptions import MessagingSerializationError


class CommandSerializer:
    """Serialize/deserialize CommandMessage to/from JSON bytes."""

    def serialize(self, command: CommandMessage) -> bytes:
        """Encode command to UTF-8 JSON bytes."""
        try:
            return json.dumps(command.to_wire()).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise MessagingSerializationError(str(e)) from e

    def deserialize(self, raw: bytes) -> CommandMessage:
        """Decode JSON bytes to CommandMessage.

        The action tag is not checked here; unknown tags decode fine.
        """
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MessagingSerializationError(str(e)) from e
        if not isinstance(data, dict):
            raise MessagingSerializationError(
                f"expected a JSON object, got {type(data).__name__}"
            )
        try:
            return CommandMessage.model_validate(data)
        except PydanticValidationError as e:
            raise MessagingSerializationError(str(e)) from e
