from __future__ import annotations

from .models import (
    WIRE_TIME_FORMAT,
    Store,
    StoreData,
    StoreVersion,
    StoreVersionData,
    WireModel,
    format_wire_time,
)

__all__ = [
    "WIRE_TIME_FORMAT",
    "Store",
    "StoreData",
    "StoreVersion",
    "StoreVersionData",
    "WireModel",
    "format_wire_time",
]
