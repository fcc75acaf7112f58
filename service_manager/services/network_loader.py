"""Remote (EVM / SVM) network registration, static and dynamic."""
from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from ..chains.common import validate
from ..chains.evm import build_evm_entity_types
from ..chains.svm import build_svm_entity_types
from ..config import RemoteEndpoints, RemoteNetworkConfig, SettingsConfig
from ..errors import BadResponseError
from ..interfaces.transport import Transport
from ..registry import EntityTypeDefinition, NetworkDefinition, Registry

logger = logging.getLogger(__name__)


class RemoteEndpointsModel(BaseModel):
    evm: str | None = None
    svm: str | None = None


class RemoteNetworkDescriptor(BaseModel):
    """One entry of the ``chain-config`` document."""

    provider: str
    name: str
    id: str
    endpoints: RemoteEndpointsModel

    def to_config(self) -> RemoteNetworkConfig:
        return RemoteNetworkConfig(
            provider=self.provider,
            name=self.name,
            id=self.id,
            endpoints=RemoteEndpoints(
                evm=self.endpoints.evm or None,
                svm=self.endpoints.svm or None,
            ),
        )


class ChainConfigDocument(BaseModel):
    # Entries are validated individually by load_dynamic_networks.
    result: list[Any]


def build_remote_network(
    network: RemoteNetworkConfig, client: Transport, settings: SettingsConfig
) -> NetworkDefinition | None:
    """Entity types for every endpoint the network declares.

    A network with both an EVM and an SVM endpoint gets ``EVM ``/``SVM ``
    prefixed entity types, all under the one label.
    """
    evm, svm = network.endpoints.evm, network.endpoints.svm
    if not evm and not svm:
        return None

    both = bool(evm and svm)
    entity_types: list[EntityTypeDefinition] = []
    if evm:
        entity_types += build_evm_entity_types(
            client, network, settings, "EVM " if both else ""
        )
    if svm:
        entity_types += build_svm_entity_types(client, network, "SVM " if both else "")

    return NetworkDefinition(label=network.name, entity_types=tuple(entity_types))


def add_remote(
    registry: Registry,
    network: RemoteNetworkConfig,
    client: Transport,
    settings: SettingsConfig,
) -> bool:
    """Register one remote network. Returns False when it has no endpoints."""
    definition = build_remote_network(network, client, settings)
    if definition is None:
        logger.info("Skipping network %s: no EVM or SVM endpoint", network.name)
        return False
    registry.add_network(definition)
    return True


async def load_dynamic_networks(
    registry: Registry, client: Transport, settings: SettingsConfig
) -> list[str]:
    """Fetch ``<endpoint>/chain-config`` and register every descriptor in it.

    Returns the labels registered. A failed fetch is logged and registers
    nothing; networks already in the registry stay as they are.
    """
    endpoint = settings.add_network_endpoint
    if not endpoint:
        return []

    url = f"{endpoint}/chain-config"
    try:
        response = await client.get(url)
        if not response.ok:
            raise BadResponseError(f"HTTP {response.status}", status=response.status)
        document = validate(ChainConfigDocument, response.data)
    except Exception as e:
        logger.error("Could not load dynamic networks from %s: %s", url, e)
        return []

    labels: list[str] = []
    for item in document.result:
        try:
            descriptor = RemoteNetworkDescriptor.model_validate(item)
        except ValidationError as e:
            logger.warning("Skipping invalid network descriptor %r: %s", item, e)
            continue
        if add_remote(registry, descriptor.to_config(), client, settings):
            labels.append(descriptor.name)

    logger.info("Loaded %d dynamic network(s) from %s", len(labels), url)
    return labels
