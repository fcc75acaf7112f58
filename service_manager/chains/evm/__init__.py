"""EVM (Ethereum JSON-RPC) chain family."""
from .adapter import EvmAdapter
from .network import build_evm_entity_types

__all__ = ["EvmAdapter", "build_evm_entity_types"]
