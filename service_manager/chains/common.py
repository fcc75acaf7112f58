"""Pieces shared by every chain-family adapter."""
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, BeforeValidator, ValidationError

from ..errors import SchemaValidationError, describe_failure
from ..models import AssociatedRef, Entity

logger = logging.getLogger(__name__)

ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{40}")

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_quantity(value: Any) -> Any:
    """Accept ``"0x1a"`` hex quantities as well as decimal strings and ints."""
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            return int(text, 16)
        return int(text)
    return value


# Integer that upstream may send as hex ("0x1"), decimal string or number.
Quantity = Annotated[int, BeforeValidator(parse_quantity)]


class RpcEnvelope(BaseModel, Generic[T]):
    """JSON-RPC 2.0 success envelope."""

    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: T


def validate(model: type[ModelT], data: Any) -> ModelT:
    """Validate ``data`` against ``model``, raising SchemaValidationError."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationError(
            f"{model.__name__}: {e.error_count()} validation error(s)",
            context={"errors": e.errors(include_url=False)[:5]},
        ) from e


def validate_raw(model: type[ModelT], raw: str) -> ModelT:
    """Re-parse an ``Entity.raw`` string into its canonical record."""
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        raise SchemaValidationError(
            f"{model.__name__}: raw record does not parse"
        ) from e


def log_lookup_failure(
    operation: str, network: str, value: str, error: BaseException
) -> None:
    """Record why a lookup degraded to "not found"."""
    kind = describe_failure(error)
    logger.warning(
        "%s failed on %s for %r (%s): %s",
        operation,
        network,
        value,
        kind,
        error,
        extra={"network": network, "operation": operation, "failure_kind": kind},
    )


def format_timestamp(seconds: int) -> str:
    """``Tue, 14 Mar 2023 12:00:00 UTC``."""
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return moment.strftime("%a, %d %b %Y %H:%M:%S UTC")


def is_evm_address(value: str) -> bool:
    """``0x`` followed by exactly 40 hex digits."""
    return bool(ADDRESS_RE.fullmatch(value))


async def no_associated(entity: Entity) -> list[AssociatedRef]:
    """Deriver for leaf entity types."""
    return []
