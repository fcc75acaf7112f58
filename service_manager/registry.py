"""Network / entity-type registry.

Populated at startup from static configuration and refreshed whenever dynamic
network configuration is loaded. Definitions are immutable; registering a
label again swaps in the new definition whole.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from .errors import NotFoundInRegistryError
from .interfaces.getter import AssociatedDeriver, GetMany, GetOne

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Getter:
    """Single-field resolution function, either one-result or many-result."""

    field: str
    get_one: GetOne | None = None
    get_many: GetMany | None = None

    def __post_init__(self) -> None:
        if (self.get_one is None) == (self.get_many is None):
            raise ValueError(
                f"Getter '{self.field}' needs exactly one of get_one / get_many"
            )


@dataclass(frozen=True)
class EntityTypeDefinition:
    name: str
    getters: tuple[Getter, ...]
    get_associated: AssociatedDeriver

    def __post_init__(self) -> None:
        fields = [g.field for g in self.getters]
        if len(fields) != len(set(fields)):
            raise ValueError(f"Entity type '{self.name}' has duplicate getter fields")


@dataclass(frozen=True)
class NetworkDefinition:
    label: str
    entity_types: tuple[EntityTypeDefinition, ...]

    def __post_init__(self) -> None:
        names = [t.name for t in self.entity_types]
        if len(names) != len(set(names)):
            raise ValueError(f"Network '{self.label}' has duplicate entity types")


class Registry:
    """In-memory catalog of networks and their entity types."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._networks: dict[str, NetworkDefinition] = {}

    def add_network(self, definition: NetworkDefinition) -> None:
        """Register ``definition``, replacing any prior one with the same label."""
        with self._lock:
            networks = dict(self._networks)
            replaced = definition.label in networks
            networks[definition.label] = definition
            self._networks = networks

        logger.info(
            "%s network %s (%s)",
            "Replaced" if replaced else "Registered",
            definition.label,
            ", ".join(t.name for t in definition.entity_types),
        )

    def networks(self) -> tuple[str, ...]:
        return tuple(self._networks)

    def get_network(self, label: str) -> NetworkDefinition:
        network = self._networks.get(label)
        if network is None:
            raise NotFoundInRegistryError(f"Unknown network '{label}'", network=label)
        return network

    def lookup(self, network_label: str, entity_type_name: str) -> EntityTypeDefinition:
        network = self.get_network(network_label)
        for entity_type in network.entity_types:
            if entity_type.name == entity_type_name:
                return entity_type
        raise NotFoundInRegistryError(
            f"Network '{network_label}' has no entity type '{entity_type_name}'",
            network=network_label,
        )

    @staticmethod
    def lookup_getter(entity_type: EntityTypeDefinition, field: str) -> Getter:
        for getter in entity_type.getters:
            if getter.field == field:
                return getter
        raise NotFoundInRegistryError(
            f"Entity type '{entity_type.name}' has no getter for '{field}'"
        )
