"""Proxy Core Service Module

Implements core business logic for request proxying."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from hermes_proxy.common.errors import (
    ConfigurationError,
    InternalProxyError,
    InvalidRequestError,
)
from hermes_proxy.common.prompt import detect_tool_name, extract_prompt_text
from hermes_proxy.common.tenant import extract_tenant_id
from hermes_proxy.common.timer import Timer
from hermes_proxy.common.usage_extractor import extract_total_tokens
from hermes_proxy.providers.base import ProviderClient
from hermes_proxy.services.audit_logger import AuditLogger
from hermes_proxy.services.router import ModelRouter

logger = logging.getLogger(__name__)

PROMPT_PREVIEW_LENGTH = 100


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN and Infinity, which are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


@dataclass
class ProxyResult:
    """Status and JSON body returned to the caller"""

    status_code: int
    body: Any
    log_id: Optional[str] = None


def _request_metadata(body: dict[str, Any], original_model: Optional[str]) -> dict[str, Any]:
    """Request body without the (large) messages array"""
    metadata = {key: value for key, value in body.items() if key != "messages"}
    metadata["original_model"] = original_model
    return metadata


class ProxyService:
    """
    Proxy Core Service

    Handles the complete flow of one chat completion request:
    1. Check the upstream is configured
    2. Authenticate the tenant from the bearer token
    3. Parse the body, extract prompt text, detect the calling tool
    4. Resolve the forwarded model
    5. Record the request (fire-and-forget)
    6. Forward to the upstream, single attempt
    7. Record the response (fire-and-forget)
    8. Return upstream status and body unchanged
    """

    def __init__(
        self,
        router: ModelRouter,
        client: ProviderClient,
        audit_logger: AuditLogger,
    ):
        """
        Initialize Service

        Args:
            router: Model router bound to the upstream provider
            client: Forwarding client
            audit_logger: Prompt audit logger
        """
        self.router = router
        self.client = client
        self.audit_logger = audit_logger

    @property
    def provider(self):
        return self.router.provider

    def _parse_body(self, raw_body: bytes) -> dict[str, Any]:
        try:
            body = json.loads(raw_body, parse_constant=_reject_constant)
        except (ValueError, UnicodeDecodeError):
            raise InvalidRequestError()
        if not isinstance(body, dict):
            raise InvalidRequestError(
                message="Request body must be a JSON object",
                code="invalid_body",
            )
        return body

    async def process_request(
        self,
        authorization: Optional[str],
        user_agent: Optional[str],
        raw_body: bytes,
    ) -> ProxyResult:
        """
        Proxy one chat completion request

        Args:
            authorization: Authorization header value
            user_agent: User-Agent header value
            raw_body: Raw request body

        Returns:
            ProxyResult: Upstream status and body (upstream errors included)

        Raises:
            ConfigurationError: Upstream API key not configured
            AuthenticationError: Missing or malformed tenant token
            InvalidRequestError: Body is not a JSON object
            InternalProxyError: Forwarding failed
        """
        provider = self.provider
        if not provider.is_configured:
            logger.error("%s not configured", provider.api_key_setting)
            raise ConfigurationError(message=f"{provider.api_key_setting} is not configured")

        tenant_id = extract_tenant_id(authorization)
        body = self._parse_body(raw_body)

        user_agent = user_agent or "unknown"
        prompt_text = extract_prompt_text(body)
        tool_name = detect_tool_name(user_agent)
        decision = self.router.route(body)

        logger.info(
            "Proxy request: tenant=%s tool=%s model=%s (requested %s) prompt=%r",
            tenant_id,
            tool_name,
            decision.target_model,
            decision.requested_model,
            prompt_text[:PROMPT_PREVIEW_LENGTH],
        )

        log_id = self.audit_logger.record_request(
            tenant_id=tenant_id,
            prompt_text=prompt_text,
            prompt_json=body,
            provider=provider.log_provider,
            tool_name=tool_name,
            user_agent=user_agent,
            model_requested=decision.target_model,
            request_metadata=_request_metadata(body, decision.requested_model),
        )

        timer = Timer()
        try:
            response = await self.client.forward(provider, body)
        except Exception as e:
            elapsed_ms = timer.stop()
            logger.error("Proxy forwarding failed for tenant %s: %s", tenant_id, e, exc_info=True)
            error = InternalProxyError(details=str(e))
            self.audit_logger.record_response(
                log_id=log_id,
                tenant_id=tenant_id,
                response_status=error.status_code,
                response_time_ms=elapsed_ms,
                tokens_used=None,
                response_json=error.to_dict(),
            )
            raise error from e

        self.audit_logger.record_response(
            log_id=log_id,
            tenant_id=tenant_id,
            response_status=response.status_code,
            response_time_ms=response.total_time_ms,
            tokens_used=extract_total_tokens(response.body),
            response_json=response.body,
        )

        if not response.is_success:
            logger.warning(
                "Upstream %s answered %s for tenant %s",
                provider.name,
                response.status_code,
                tenant_id,
            )

        return ProxyResult(
            status_code=response.status_code,
            body=response.body,
            log_id=log_id,
        )

    def describe(self, endpoint: str, service_name: str, version: str) -> dict[str, Any]:
        """Static service descriptor returned by GET on the proxy route"""
        return {
            "service": service_name,
            "status": "operational",
            "version": version,
            "format": "OpenAI-compatible",
            "endpoint": endpoint,
            "model": self.provider.default_model,
            "provider": self.provider.name,
        }
