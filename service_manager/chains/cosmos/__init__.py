"""Cosmos / Tendermint chain family."""
from .adapter import CosmosAdapter
from .network import build_cosmos_network

__all__ = ["CosmosAdapter", "build_cosmos_network"]
