"""SVM (Solana JSON-RPC) chain family."""
from .adapter import SvmAdapter
from .network import build_svm_entity_types

__all__ = ["SvmAdapter", "build_svm_entity_types"]
