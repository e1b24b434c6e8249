"""
Google Gemini Content Client

Calls the Gemini generateContent API, either directly with a Google API key or
through a proxy base URL that identifies the caller by Bearer token.
"""

import logging
import re
from typing import Any, Optional

import httpx

from hermes_proxy.common.errors import AppError, ConfigurationError
from hermes_proxy.common.http_client import HttpClient
from hermes_proxy.config import Settings

logger = logging.getLogger(__name__)

GOOGLE_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_CONTENT_MODEL = "gemini-pro"

_V1BETA_SUFFIX = re.compile(r"/v1beta.*$")


class GeminiClientError(AppError):
    """Raised when the Gemini API rejects a request or blocks the generation"""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(
            message=message,
            error_type="gemini_error",
            code="gemini_error",
            status_code=status_code,
        )


class GeminiContentClient:
    """
    Gemini generateContent Client

    With a base URL the API key is sent as `Authorization: Bearer <key>`, so a
    proxy can attribute the call. Without one the key goes in the `key` query
    parameter of the public Google endpoint.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        http_client: Optional[HttpClient] = None,
        default_model: str = DEFAULT_CONTENT_MODEL,
    ):
        if not api_key:
            raise ConfigurationError(
                message="Gemini Configuration Error: missing API key "
                "(set GOOGLE_API_KEY, optionally with GEMINI_BASE_URL)",
            )
        self.api_key = api_key
        self.base_url = base_url
        self.http_client = http_client or HttpClient()
        self.default_model = default_model

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: Optional[HttpClient] = None
    ) -> "GeminiContentClient":
        return cls(
            api_key=settings.GOOGLE_API_KEY,
            base_url=settings.GEMINI_BASE_URL,
            http_client=http_client,
            default_model=settings.GEMINI_CONTENT_MODEL,
        )

    def _build_request(self, model: str) -> tuple[str, dict[str, str], dict[str, str]]:
        """Return (url, headers, query params) for the configured routing"""
        headers = {"Content-Type": "application/json"}
        if self.base_url:
            clean_base = _V1BETA_SUFFIX.sub("", self.base_url.rstrip("/"))
            url = f"{clean_base}/v1beta/models/{model}:generateContent"
            headers["Authorization"] = f"Bearer {self.api_key}"
            return url, headers, {}
        url = f"{GOOGLE_API_BASE_URL}/models/{model}:generateContent"
        return url, headers, {"key": self.api_key}

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        message = f"Gemini API Error: {response.status_code} {response.reason_phrase}"
        text = response.text
        try:
            error_json = response.json()
        except ValueError:
            return f"{message} - {text[:200]}"
        error = error_json.get("error") if isinstance(error_json, dict) else None
        if isinstance(error, dict) and error.get("message"):
            message += f" - {error['message']}"
        return message

    @staticmethod
    def _extract_text(data: Any) -> str:
        """First candidate text, or an empty string when any piece is missing or malformed"""
        if not isinstance(data, dict):
            return ""
        candidates = data.get("candidates")
        candidate = candidates[0] if isinstance(candidates, list) and candidates else None
        if not candidate:
            feedback = data.get("promptFeedback")
            block_reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
            if block_reason:
                raise GeminiClientError(f"Generation blocked: {block_reason}", status_code=400)
            return ""
        content = candidate.get("content") if isinstance(candidate, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        part = parts[0] if isinstance(parts, list) and parts else None
        text = part.get("text") if isinstance(part, dict) else None
        return text if isinstance(text, str) else ""

    async def generate_content(
        self,
        prompt: str,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        """
        Generate text for a single prompt

        Args:
            prompt: Prompt text
            model: Gemini model name, defaults to the client default_model
            temperature: Optional sampling temperature
            max_output_tokens: Optional output token cap

        Returns:
            str: Text of the first candidate, "" when the response has none

        Raises:
            GeminiClientError: Non-2xx or non-JSON response, or blocked generation
        """
        body: dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        generation_config: dict[str, Any] = {}
        if temperature is not None:
            generation_config["temperature"] = temperature
        if max_output_tokens is not None:
            generation_config["maxOutputTokens"] = max_output_tokens
        if generation_config:
            body["generationConfig"] = generation_config

        model = model or self.default_model
        url, headers, params = self._build_request(model)
        logger.debug("Gemini generateContent: url=%s model=%s", url, model)

        response = await self.http_client.post(
            url, headers=headers, json=body, params=params or None
        )
        if not response.is_success:
            message = self._error_message(response)
            logger.error("Error generating content with Gemini: %s", message)
            raise GeminiClientError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            message = f"Gemini API Error: invalid JSON response - {response.text[:200]}"
            logger.error("Error generating content with Gemini: %s", message)
            raise GeminiClientError(message)
        return self._extract_text(data)
