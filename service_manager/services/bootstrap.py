"""Build the registry and resolver from static configuration."""
from __future__ import annotations

import logging

from ..chains.cosmos import build_cosmos_network
from ..config import AppConfig
from ..interfaces.transport import Transport
from ..registry import Registry
from ..rpc.client import RpcClient
from .network_loader import add_remote
from .resolver import Resolver

logger = logging.getLogger(__name__)


def build_registry(config: AppConfig, client: Transport) -> Registry:
    """Register every configured network that has an endpoint."""
    registry = Registry()

    for network in config.cosmos_networks:
        if not network.rpc:
            logger.debug("Skipping network %s: no RPC endpoint configured", network.label)
            continue
        registry.add_network(build_cosmos_network(network, client))

    for network in config.remote_networks:
        add_remote(registry, network, client, config.settings)

    return registry


def create_resolver(config: AppConfig, client: Transport | None = None) -> Resolver:
    """Resolver over a freshly built registry."""
    if client is None:
        client = RpcClient(timeout=config.settings.rpc_timeout)
    return Resolver(build_registry(config, client))
