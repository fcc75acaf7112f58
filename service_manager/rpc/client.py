"""HTTP / JSON-RPC transport shared by every chain-family adapter."""
import asyncio
import logging
import ssl
from dataclasses import dataclass
from typing import Any

import aiohttp
import certifi

from ..errors import BadResponseError, NetworkUnreachableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JsonResponse:
    """Decoded JSON body plus the HTTP status it arrived with."""

    status: int
    data: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class RpcClient:
    """Single-attempt HTTP client. No retries, no endpoint fallback."""

    def __init__(self, timeout: int = 30) -> None:
        self.timeout = timeout

    async def _request(
        self, method: str, url: str, payload: Any | None = None
    ) -> JsonResponse:
        ssl_context = ssl.create_default_context(cafile=certifi.where())

        try:
            connector = aiohttp.TCPConnector(ssl=ssl_context)
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.request(
                    method,
                    url,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    status = response.status
                    try:
                        data = await response.json(content_type=None)
                    except ValueError as e:
                        raise BadResponseError(
                            f"Undecodable body from {url}: {e}", status=status
                        ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            raise NetworkUnreachableError(f"{method} {url} failed: {e}") from e

        logger.debug("%s %s -> %s", method, url, status)
        return JsonResponse(status=status, data=data)

    async def get(self, url: str) -> JsonResponse:
        """GET a JSON document. Non-2xx statuses are returned, not raised."""
        return await self._request("GET", url)

    async def post(self, url: str, payload: Any) -> JsonResponse:
        """POST a JSON body. Non-2xx statuses are returned, not raised."""
        return await self._request("POST", url, payload)

    async def rpc_call(self, url: str, method: str, params: list[Any]) -> Any:
        """Make a JSON-RPC 2.0 call and return its ``result`` member."""
        payload = {"method": method, "params": params, "id": 1, "jsonrpc": "2.0"}

        response = await self.post(url, payload)
        if not response.ok:
            raise BadResponseError(
                f"{method}: HTTP {response.status}", status=response.status
            )
        if not isinstance(response.data, dict):
            raise BadResponseError(f"{method}: response is not a JSON-RPC object")
        if "error" in response.data:
            raise BadResponseError(f"{method}: RPC Error: {response.data['error']}")

        return response.data.get("result")
