"""Domain and infrastructure exceptions for storehub."""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    """Closed set of error kinds that survive process boundaries.

    Transport layers map these to status codes or wire messages; they never
    compare exception instances.
    """

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    CONFLICT = "conflict"
    PERSISTENCE = "persistence"
    DELIVERY = "delivery"
    INTERNAL = "internal"


class StoreHubError(Exception):
    """Root exception for the whole project."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class DomainError(StoreHubError):
    """Base class for business rule failures."""


class ValidationError(StoreHubError):
    """Raised when input is malformed and rejected before dispatch.

    Carries structured errors: ``{field: [messages]}``.
    """

    kind = ErrorKind.VALIDATION
    default_message = "invalid argument passed"

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
            super().__init__(errors)
        else:
            self.errors = errors or {}
            super().__init__(str(self.errors) if self.errors else None)


class AuthenticationError(StoreHubError):
    """Raised when a bearer token is missing, malformed or rejected."""

    kind = ErrorKind.AUTHENTICATION
    default_message = "not authenticated"


class NotFoundError(DomainError):
    """Raised when a store or a version is absent."""

    kind = ErrorKind.NOT_FOUND
    default_message = "not found"


class StoreNotFoundError(NotFoundError):
    default_message = "store not found"

    def __init__(self, store_id: object = None) -> None:
        self.store_id = store_id
        super().__init__()


class VersionNotFoundError(NotFoundError):
    default_message = "store version not found"

    def __init__(self, version_id: object = None) -> None:
        self.version_id = version_id
        super().__init__()


class PermissionDeniedError(DomainError):
    """Raised when someone other than the creator mutates a store."""

    kind = ErrorKind.PERMISSION_DENIED
    default_message = "user is not a store creator"


class InfrastructureError(StoreHubError):
    """Base class for all infrastructure-related errors."""


class PersistenceError(InfrastructureError):
    """Raised when storage is unavailable or a constraint fails."""

    kind = ErrorKind.PERSISTENCE
    default_message = "failed to persist changes"


class ConflictError(PersistenceError):
    """Raised when two writers collide on the same version chain.

    Retryable: the losing transaction was rolled back and may run again.
    """

    kind = ErrorKind.CONFLICT
    default_message = "concurrent modification of the version chain"


class DeliveryError(InfrastructureError):
    """Raised when the broker or a callback endpoint cannot be reached."""

    kind = ErrorKind.DELIVERY
    default_message = "failed to deliver message"


class InternalError(StoreHubError):
    """Raised for unexpected failures; the text never leaks internals."""

    kind = ErrorKind.INTERNAL
