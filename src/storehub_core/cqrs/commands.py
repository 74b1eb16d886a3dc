"""Command message — the queued intent to act on a store."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from ..domain.models import WireModel


class Action(str, enum.Enum):
    """Closed set of actions the storage worker understands."""

    CREATE_STORE = "create_store"
    CREATE_STORE_VERSION = "create_store_version"
    DELETE_STORE = "delete_store"
    DELETE_STORE_VERSION = "delete_store_version"
    GET_STORE = "get_store"
    GET_STORE_HISTORY = "get_store_history"
    GET_STORE_VERSION = "get_store_version"

    @classmethod
    def parse(cls, value: str) -> Action | None:
        """Return the member for *value*, or None for an unknown tag."""
        try:
            return cls(value)
        except ValueError:
            return None


class CommandMessage(BaseModel):
    """Wire envelope of a command.

    ``action`` stays a plain string so that messages carrying an unknown tag
    still decode; routing decides what to do with them.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    action: str
    store_id: str = Field(default="", alias="storeId")
    version_id: str = Field(default="", alias="versionId")
    data: dict[str, Any] | None = None
    user_login: str = Field(default="", alias="userLogin")

    @field_validator("store_id", "version_id", "user_login", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def build(
        cls,
        action: Action,
        *,
        user_login: str,
        store_id: str | int = "",
        version_id: str | int = "",
        data: WireModel | None = None,
    ) -> CommandMessage:
        return cls(
            action=action.value,
            user_login=user_login,
            store_id=str(store_id),
            version_id=str(version_id),
            data=data.to_wire() if data is not None else None,
        )

    @property
    def known_action(self) -> Action | None:
        return Action.parse(self.action)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
