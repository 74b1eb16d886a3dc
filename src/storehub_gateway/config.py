"""Settings of the HTTP gateway."""

from __future__ import annotations

from pydantic import BaseModel, Field

from storehub_core.config import RabbitMQSettings, StoreHubSettings


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8080
    shutdown_timeout: int = Field(default=10, ge=0)


class AuthProviderSettings(BaseModel):
    """Location of the token service and how hard to try reaching it."""

    host: str = "localhost"
    port: int = 8081
    timeout: float = Field(default=5.0, gt=0)
    retry: int = Field(default=5, ge=1)
    retry_delay: float = Field(default=2.0, ge=0)

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"


def _demo_users() -> dict[str, str]:
    return {"user1": "password1", "user2": "password2", "user3": "password3"}


class GatewaySettings(StoreHubSettings):
    server: ServerSettings = Field(default_factory=ServerSettings)
    rabbitmq: RabbitMQSettings = Field(default_factory=RabbitMQSettings)
    auth: AuthProviderSettings = Field(default_factory=AuthProviderSettings)
    users: dict[str, str] = Field(default_factory=_demo_users)
