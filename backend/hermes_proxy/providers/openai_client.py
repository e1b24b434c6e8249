"""
OpenAI Protocol Client

Forwards chat completion requests to an OpenAI compatible upstream
(OpenAI itself or Gemini's OpenAI compatibility endpoint).
"""

import json
import logging
from typing import Any

import httpx

from hermes_proxy.common.errors import UpstreamTransportError
from hermes_proxy.common.http_client import HttpClient
from hermes_proxy.common.timer import Timer
from hermes_proxy.domain.provider import UpstreamProvider
from hermes_proxy.providers.base import ProviderClient, ProviderResponse

logger = logging.getLogger(__name__)


class OpenAIClient(ProviderClient):
    """
    OpenAI Protocol Client

    Sends exactly one request per call, no retries.
    """

    def __init__(self, http_client: HttpClient):
        """
        Initialize Client

        Args:
            http_client: Shared HTTP client
        """
        self.http_client = http_client

    @staticmethod
    def _read_body(response: httpx.Response) -> Any:
        """
        Parse the response body

        Non-JSON bodies (HTML error pages, plain text) are wrapped into the
        OpenAI error envelope; the upstream status travels separately.
        """
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return {"error": {"message": response.text}}

    async def forward(
        self,
        provider: UpstreamProvider,
        body: dict[str, Any],
    ) -> ProviderResponse:
        url = provider.chat_completions_url
        headers = self._prepare_headers(provider.api_key)

        logger.debug(
            "OpenAI Request: provider=%s url=%s body=%s",
            provider.name,
            url,
            json.dumps(body, ensure_ascii=False, default=str),
        )

        with Timer() as timer:
            try:
                response = await self.http_client.post(url, headers=headers, json=body)
            except httpx.RequestError as e:
                logger.error(
                    "Upstream %s unreachable after %sms: %s",
                    provider.name,
                    timer.stop(),
                    e,
                )
                raise UpstreamTransportError(
                    message=f"Request error: {e}",
                    details={"provider": provider.name, "url": url},
                ) from e
            response_body = self._read_body(response)

        return ProviderResponse(
            status_code=response.status_code,
            body=response_body,
            total_time_ms=timer.elapsed_ms,
        )
