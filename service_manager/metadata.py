"""Metadata builder: turns plain field mappings into typed display values.

Numbers and strings always survive as ``string`` values. Anything else has to
pass the typed-value schema; fields that don't are dropped, so callers must
not assume every requested field appears in the output.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .models import TypedValue

logger = logging.getLogger(__name__)


class _StringValue(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid")

    type: Literal["string"]
    payload: str


class _StatusValue(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid")

    type: Literal["status"]
    payload: Union[bool, int]


class _ListValue(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid")

    type: Literal["list"]
    payload: list[str]


ValueSchema: TypeAdapter[Any] = TypeAdapter(
    Annotated[
        Union[_StringValue, _StatusValue, _ListValue],
        Field(discriminator="type"),
    ]
)


def status(payload: bool | int) -> dict[str, Any]:
    """Shorthand for a status-typed metadata entry."""
    return {"type": "status", "payload": payload}


def _stringify(value: int | float | str) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def coerce_typed_value(value: Any) -> TypedValue:
    """Coerce a value into a TypedValue.

    Raises:
        ValueError: the value matches no known typed-value shape.
    """
    if isinstance(value, TypedValue):
        value = value.to_dict()
    elif isinstance(value, (list, tuple)):
        value = {"type": "list", "payload": list(value)}

    try:
        parsed = ValueSchema.validate_python(value)
    except ValidationError as e:
        raise ValueError(f"Not a typed value: {value!r}") from e

    payload = parsed.payload
    if isinstance(payload, list):
        payload = tuple(payload)
    return TypedValue(kind=parsed.type, payload=payload)


def build_metadata(fields: Mapping[str, Any]) -> dict[str, TypedValue]:
    """Build display metadata, preserving field order and dropping bad values."""
    metadata: dict[str, TypedValue] = {}

    for name, value in fields.items():
        if isinstance(value, (int, float, str)) and not isinstance(value, bool):
            metadata[name] = TypedValue(kind="string", payload=_stringify(value))
            continue
        try:
            metadata[name] = coerce_typed_value(value)
        except ValueError:
            logger.debug("Dropping metadata field %r: %r", name, value)

    return metadata
