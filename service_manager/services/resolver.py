"""Resolver: the single entry point callers use to look entities up."""
from __future__ import annotations

import logging

from ..errors import NotFoundInRegistryError, describe_failure
from ..models import AssociatedRef, Entity
from ..registry import Getter, Registry

logger = logging.getLogger(__name__)


class Resolver:
    """Dispatch lookups to the getters and derivers held by a registry.

    Nothing raises across this boundary: registry misses and any failure
    inside a getter or deriver come back as ``None`` or an empty list.
    """

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    @property
    def registry(self) -> Registry:
        return self._registry

    def _find_getter(self, network: str, entity_type: str, field: str) -> Getter | None:
        try:
            definition = self._registry.lookup(network, entity_type)
            return self._registry.lookup_getter(definition, field)
        except NotFoundInRegistryError as e:
            logger.info("Cannot resolve %s/%s by %s: %s", network, entity_type, field, e)
            return None

    async def resolve_one(
        self, network: str, entity_type: str, field: str, value: str
    ) -> Entity | None:
        getter = self._find_getter(network, entity_type, field)
        if getter is None:
            return None
        if getter.get_one is None:
            logger.info("%s/%s by %s resolves many, not one", network, entity_type, field)
            return None

        try:
            return await getter.get_one(value)
        except Exception as e:
            logger.error(
                "Getter %s/%s/%s raised (%s): %s",
                network, entity_type, field, describe_failure(e), e,
            )
            return None

    async def resolve_many(
        self, network: str, entity_type: str, field: str, value: str
    ) -> list[Entity]:
        getter = self._find_getter(network, entity_type, field)
        if getter is None:
            return []
        if getter.get_many is None:
            logger.info("%s/%s by %s resolves one, not many", network, entity_type, field)
            return []

        try:
            return list(await getter.get_many(value))
        except Exception as e:
            logger.error(
                "Getter %s/%s/%s raised (%s): %s",
                network, entity_type, field, describe_failure(e), e,
            )
            return []

    async def resolve_associated(self, entity: Entity) -> list[AssociatedRef]:
        context = entity.context
        try:
            definition = self._registry.lookup(context.network, context.entity_type_name)
        except NotFoundInRegistryError as e:
            logger.info("No associated entities for %s: %s", entity.unique_identifier, e)
            return []

        try:
            return list(await definition.get_associated(entity))
        except Exception as e:
            logger.error(
                "Associated-entity deriver for %s/%s raised (%s): %s",
                context.network, context.entity_type_name, describe_failure(e), e,
            )
            return []

    async def resolve_ref(self, ref: AssociatedRef) -> Entity | None:
        """Follow a lazy reference produced by ``resolve_associated``."""
        return await self.resolve_one(
            ref.network_label, ref.entity_type, ref.field_name, ref.field_value
        )
