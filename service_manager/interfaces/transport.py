"""Transport protocol: HTTP / JSON-RPC abstraction used by adapters."""
from typing import Any, Protocol

from ..rpc.client import JsonResponse


class Transport(Protocol):
    """Abstract interface for outbound upstream calls."""

    async def get(self, url: str) -> JsonResponse: ...

    async def post(self, url: str, payload: Any) -> JsonResponse: ...

    async def rpc_call(self, url: str, method: str, params: list[Any]) -> Any: ...
