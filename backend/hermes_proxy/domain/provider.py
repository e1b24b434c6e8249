"""
Upstream Provider Domain Model

Describes the LLM backend the proxy forwards to. Both supported upstreams speak
the OpenAI chat completion protocol and differ only in the values below.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UpstreamProvider:
    """
    Upstream Provider Configuration

    Built once from settings and shared by every request.
    """

    # Provider name, "gemini" or "openai"
    name: str
    # Base URL, "/chat/completions" is appended
    base_url: str
    # Server-held API key, never the tenant token
    api_key: Optional[str]
    # Setting that holds api_key, named in the misconfiguration error
    api_key_setting: str
    # Model forced when the requested one does not contain model_marker
    default_model: str
    # Requested models containing this substring are forwarded unchanged
    model_marker: str
    # Provider label written to prompt logs
    log_provider: str

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def chat_completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"
