import httpx
from typing import Any, Dict, Optional


class HttpClient:
    """Shared upstream fetcher, opened and closed by the app lifespan."""

    def __init__(self, timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def start(self):
        self.client = httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def stop(self):
        if self.client:
            await self.client.aclose()
            self.client = None

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        if not self.client:
            raise RuntimeError("HTTP client not initialized.")
        return await self.client.get(url, params=params)
