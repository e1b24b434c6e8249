"""
Provider Factory Module

Builds the upstream provider configuration selected by UPSTREAM_PROVIDER.
"""

from hermes_proxy.config import Settings
from hermes_proxy.domain.provider import UpstreamProvider


def build_upstream_provider(settings: Settings) -> UpstreamProvider:
    """
    Build the configured upstream provider

    Args:
        settings: Application settings

    Returns:
        UpstreamProvider: Provider configuration, possibly without an API key

    Raises:
        ValueError: Unsupported provider name
    """
    name = settings.UPSTREAM_PROVIDER.lower()

    if name == "gemini":
        return UpstreamProvider(
            name="gemini",
            base_url=settings.GEMINI_OPENAI_BASE_URL,
            api_key=settings.GEMINI_API_KEY,
            api_key_setting="GEMINI_API_KEY",
            default_model=settings.GEMINI_DEFAULT_MODEL,
            model_marker="gemini",
            log_provider="gemini-openai",
        )
    if name == "openai":
        return UpstreamProvider(
            name="openai",
            base_url=settings.OPENAI_BASE_URL,
            api_key=settings.OPENAI_API_KEY,
            api_key_setting="OPENAI_API_KEY",
            default_model=settings.OPENAI_DEFAULT_MODEL,
            model_marker="gpt",
            log_provider="openai",
        )
    raise ValueError(f"Unsupported upstream provider: {settings.UPSTREAM_PROVIDER}")
