"""
Forwarding Client Interface

A forwarding client sends one chat completion body to an upstream and reports
whatever came back.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from hermes_proxy.domain.provider import UpstreamProvider


@dataclass
class ProviderResponse:
    """Upstream answer as the proxy returns it"""

    # HTTP status code, passed through to the caller unchanged
    status_code: int
    # Parsed JSON body, or the text error envelope for non-JSON bodies
    body: Any = None
    # Wall-clock duration of the upstream call (ms)
    total_time_ms: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 400


class ProviderClient(ABC):
    """Sends requests to an UpstreamProvider"""

    @abstractmethod
    async def forward(
        self,
        provider: UpstreamProvider,
        body: dict[str, Any],
    ) -> ProviderResponse:
        """
        Forward a chat completion request to the upstream provider

        Args:
            provider: Upstream provider configuration
            body: Request body, model already resolved

        Returns:
            ProviderResponse: Provider response, whatever its status

        Raises:
            UpstreamTransportError: The upstream could not be reached
        """
        pass

    def _prepare_headers(self, api_key: Optional[str]) -> dict[str, str]:
        """
        Outbound headers: JSON content type and the provider key

        Caller headers, the tenant bearer token included, are never forwarded.
        """
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        return headers
