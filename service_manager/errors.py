"""Exception hierarchy for lookups against remote chain backends."""
from __future__ import annotations

from typing import Any

from pydantic import ValidationError


class ServiceManagerError(Exception):
    """Base exception for all resolution errors."""

    kind = "ServiceManagerError"

    def __init__(
        self,
        message: str,
        network: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.network = network
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "error_type": self.kind,
            "message": self.message,
            "network": self.network,
            "context": self.context,
        }


class NetworkUnreachableError(ServiceManagerError):
    """Transport-level failure: DNS, connection refused, timeout."""

    kind = "NetworkUnreachable"


class BadResponseError(ServiceManagerError):
    """Upstream answered, but not with a usable success response."""

    kind = "BadResponse"

    def __init__(
        self,
        message: str,
        status: int | None = None,
        network: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, network, context)
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["status"] = self.status
        return data


class SchemaValidationError(ServiceManagerError):
    """Payload does not match the expected structural contract."""

    kind = "SchemaValidationFailure"


class NotFoundInRegistryError(ServiceManagerError):
    """Unknown network / entity type / field combination."""

    kind = "NotFoundInRegistry"


def describe_failure(exc: BaseException) -> str:
    """Map an exception to the failure kind used in log records."""
    if isinstance(exc, ServiceManagerError):
        return exc.kind
    if isinstance(exc, ValidationError):
        return SchemaValidationError.kind
    return "Unexpected"
