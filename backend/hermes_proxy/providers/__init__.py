"""
Upstream Provider Module Initialization
"""

from hermes_proxy.providers.base import ProviderClient, ProviderResponse
from hermes_proxy.providers.openai_client import OpenAIClient
from hermes_proxy.providers.gemini_client import GeminiClientError, GeminiContentClient
from hermes_proxy.providers.factory import build_upstream_provider

__all__ = [
    "ProviderClient",
    "ProviderResponse",
    "OpenAIClient",
    "GeminiClientError",
    "GeminiContentClient",
    "build_upstream_provider",
]
