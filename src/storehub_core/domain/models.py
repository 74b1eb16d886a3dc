"""Store and StoreVersion models plus the payloads that create them."""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

WIRE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_ADDRESS_RE = re.compile(r"^[A-Za-z\s]+,\s?[A-Za-z\s]+,\s?[A-Za-z0-9\s]+$")
_OWNER_NAME_RE = re.compile(r"^[A-Za-z\s]+,\s?[A-Za-z\s]+$")
_TIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")


def format_wire_time(value: datetime) -> str:
    return value.strftime(WIRE_TIME_FORMAT)


class WireModel(BaseModel):
    """Immutable model exchanged over the wire with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class _ScheduleFields(WireModel):
    owner_name: str
    opening_time: str
    closing_time: str

    @field_validator("owner_name")
    @classmethod
    def _owner_name_format(cls, value: str) -> str:
        if not _OWNER_NAME_RE.match(value):
            raise PydanticCustomError(
                "ownerNameFormat", "owner name must look like 'Last, First'"
            )
        return value

    @field_validator("opening_time", "closing_time")
    @classmethod
    def _time_format(cls, value: str) -> str:
        if not _TIME_RE.match(value):
            raise PydanticCustomError(
                "timeFormat", "time must be formatted as YYYY-MM-DD HH:MM:SS"
            )
        try:
            datetime.strptime(value, WIRE_TIME_FORMAT)
        except ValueError as exc:
            raise PydanticCustomError(
                "timeFormat", "time is not a valid calendar time"
            ) from exc
        return value


class StoreData(_ScheduleFields):
    """Attributes supplied by a client when creating a store."""

    name: str = Field(min_length=3, max_length=40)
    address: str

    @field_validator("address")
    @classmethod
    def _address_format(cls, value: str) -> str:
        if not _ADDRESS_RE.match(value):
            raise PydanticCustomError(
                "addressFormat", "address must look like 'City, Street, Number'"
            )
        return value


class StoreVersionData(_ScheduleFields):
    """Attributes supplied by a client when creating a new store version."""


class Store(WireModel):
    store_id: int
    name: str
    address: str
    creator_login: str
    owner_name: str
    opening_time: str
    closing_time: str
    created_at: datetime

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return format_wire_time(value)


class StoreVersion(WireModel):
    """Point-in-time snapshot of a store's mutable attributes."""

    version_id: int
    store_id: int
    version_number: int = Field(ge=1)
    creator_login: str
    owner_name: str
    opening_time: str
    closing_time: str
    created_at: datetime
    is_current: bool

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return format_wire_time(value)
