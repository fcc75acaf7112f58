"""Getter / deriver protocols: the contract every chain family implements."""
from collections.abc import Sequence
from typing import Protocol

from ..models import AssociatedRef, Entity


class GetOne(Protocol):
    """Resolve one entity from a field value; ``None`` when not found."""

    async def __call__(self, value: str) -> Entity | None: ...


class GetMany(Protocol):
    """Resolve every entity matching a field value; empty when none."""

    async def __call__(self, value: str) -> Sequence[Entity]: ...


class AssociatedDeriver(Protocol):
    """Derive lazy references to entities linked from ``entity``."""

    async def __call__(self, entity: Entity) -> Sequence[AssociatedRef]: ...
