"""
Shared Outbound HTTP

One httpx.AsyncClient serves the upstream forwarder, the Gemini content client
and the Supabase log store. The lifespan builds it once and closes it on shutdown.
"""

from typing import Any, Optional

import httpx


class HttpClient:
    """
    Lazily created httpx.AsyncClient

    The connection pool is opened on the first request, so instances can be built
    at import time or in sync code. Tests pass an `httpx.MockTransport`.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            timeout: Per-request timeout in seconds, None waits indefinitely
            headers: Headers sent with every request
            transport: Replacement transport, None uses the network
        """
        self.timeout = timeout
        self.base_headers = dict(headers or {})
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers=self.base_headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is None:
            return
        await self._client.aclose()
        self._client = None

    async def post(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        json: Optional[Any] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        POST and read the whole response

        Extra keyword arguments (`params`, `content`, ...) go to httpx unchanged.
        Transport failures surface as `httpx.RequestError`; HTTP error statuses
        are returned, not raised.
        """
        return await self.client.post(url, headers=headers, json=json, **kwargs)
