"""HTTP / JSON-RPC transport."""
from .client import JsonResponse, RpcClient

__all__ = ["JsonResponse", "RpcClient"]
