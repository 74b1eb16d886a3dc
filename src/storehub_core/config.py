"""Shared settings building blocks, driven by pydantic-settings.

Sources, highest priority first: init kwargs, ``STOREHUB_*`` environment
variables (nested with ``__``), ``.env``, a JSON config file, defaults.
The JSON file defaults to ``configs/config.json`` and can be moved with
``STOREHUB_CONFIG_PATH``. A missing file is ignored.
"""

from __future__ import annotations

import enum
import os
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    SettingsConfigDict,
)

if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource

DEFAULT_CONFIG_PATH = "configs/config.json"
CONFIG_PATH_ENV = "STOREHUB_CONFIG_PATH"


class AppEnv(str, enum.Enum):
    DEVELOPMENT = "development"
    RELEASE = "release"


class RabbitMQSettings(BaseModel):
    host: str = "localhost"
    port: int = 5672
    username: str = "guest"
    password: str = "guest"
    queue: str = "CreateQueue"
    connect_attempts: int = Field(default=5, ge=1)
    connect_delay: float = Field(default=2.0, ge=0)
    timeout: float = Field(default=5.0, gt=0)

    @property
    def url(self) -> str:
        return f"amqp://{self.username}:{self.password}@{self.host}:{self.port}/"


class StoreHubSettings(BaseSettings):
    """Base for the per-service settings models."""

    model_config = SettingsConfigDict(
        env_prefix="STOREHUB_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    app_env: AppEnv = AppEnv.DEVELOPMENT
    log_level: str = "INFO"

    @property
    def log_format(self) -> str:
        return "json" if self.app_env is AppEnv.RELEASE else "text"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        json_file = os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls, json_file=json_file),
        )
