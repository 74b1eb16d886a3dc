"""storehub_gateway — HTTP front door that queues store commands."""

from __future__ import annotations

from .app import create_app
from .config import GatewaySettings

__all__ = ["GatewaySettings", "create_app"]
