"""Data models: all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TypedValue:
    """Tagged metadata value (``string``, ``status``, ``list``)."""

    kind: str
    payload: Any

    def to_dict(self) -> dict[str, Any]:
        payload = list(self.payload) if isinstance(self.payload, tuple) else self.payload
        return {"type": self.kind, "payload": payload}


@dataclass(frozen=True)
class EntityContext:
    """Where an entity came from."""

    network: str
    entity_type_name: str


@dataclass(frozen=True)
class Entity:
    """Network-agnostic record produced by resolving an identifier.

    ``raw`` holds the serialized canonical record for the entity type, so the
    associated-entity deriver can re-parse it without another RPC round trip.
    """

    unique_identifier: str
    unique_identifier_label: str
    context: EntityContext
    metadata: dict[str, TypedValue] = field(default_factory=dict)
    raw: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "uniqueIdentifier": self.unique_identifier,
            "uniqueIdentifierLabel": self.unique_identifier_label,
            "metadata": {k: v.to_dict() for k, v in self.metadata.items()},
            "context": {
                "network": self.context.network,
                "entityTypeName": self.context.entity_type_name,
            },
            "raw": self.raw,
        }


@dataclass(frozen=True)
class AssociatedRef:
    """Deferred pointer to another entity, resolved by calling the resolver again."""

    network_label: str
    entity_type: str
    field_name: str
    field_value: str

    def to_dict(self) -> dict[str, str]:
        return {
            "networkLabel": self.network_label,
            "entityType": self.entity_type,
            "fieldName": self.field_name,
            "fieldValue": self.field_value,
        }
