"""
Model Routing Module

Decides which model a request is forwarded with. The default policy keeps
models that belong to the upstream (name contains the provider marker, e.g.
"gemini") and forces the provider's default model for everything else, which
keeps usage on the free tier.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from hermes_proxy.domain.provider import UpstreamProvider

# requested model (None when absent) -> forwarded model
ModelResolver = Callable[[Optional[str]], str]


def marker_resolver(marker: str, default_model: str) -> ModelResolver:
    """
    Substring rule: keep models containing `marker` (case-sensitive), else `default_model`

    >>> marker_resolver("gemini", "gemini-1.5-flash")("gpt-4")
    'gemini-1.5-flash'
    """

    def resolve(requested_model: Optional[str]) -> str:
        if requested_model and marker in requested_model:
            return requested_model
        return default_model

    return resolve


@dataclass(frozen=True)
class RouteDecision:
    """Routing result for one request"""

    requested_model: Optional[str]
    target_model: str
    provider: UpstreamProvider

    @property
    def is_rewritten(self) -> bool:
        return self.requested_model != self.target_model


class ModelRouter:
    """
    Model Router

    Stateless; one instance is shared by all requests.
    """

    def __init__(
        self,
        provider: UpstreamProvider,
        resolver: Optional[ModelResolver] = None,
    ):
        """
        Initialize Router

        Args:
            provider: Upstream provider requests are sent to
            resolver: Model policy, defaults to the provider marker rule
        """
        self.provider = provider
        self.resolver = resolver or marker_resolver(
            provider.model_marker, provider.default_model
        )

    def resolve(self, requested_model: Any) -> RouteDecision:
        requested = requested_model if isinstance(requested_model, str) else None
        return RouteDecision(
            requested_model=requested,
            target_model=self.resolver(requested),
            provider=self.provider,
        )

    def route(self, body: dict[str, Any]) -> RouteDecision:
        """
        Resolve the model and rewrite `body["model"]` in place

        Args:
            body: Request body

        Returns:
            RouteDecision: Requested and forwarded model
        """
        decision = self.resolve(body.get("model"))
        body["model"] = decision.target_model
        return decision
