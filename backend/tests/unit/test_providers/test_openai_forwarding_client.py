"""
OpenAI Forwarding Client Unit Tests
"""

import json

import httpx
import pytest

from hermes_proxy.common.errors import UpstreamTransportError
from hermes_proxy.domain.provider import UpstreamProvider
from hermes_proxy.providers.openai_client import OpenAIClient


@pytest.mark.asyncio
async def test_forward_posts_body_with_provider_key(provider, http_client_factory):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["headers"] = request.headers
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "chatcmpl-1", "choices": []})

    client = OpenAIClient(http_client_factory(handler))
    body = {"model": "gemini-1.5-flash", "messages": [{"role": "user", "content": "Hi"}]}

    response = await client.forward(provider, body)

    assert response.status_code == 200
    assert response.is_success
    assert response.body == {"id": "chatcmpl-1", "choices": []}
    assert response.total_time_ms is not None
    assert captured["url"] == (
        "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions"
    )
    assert captured["headers"]["Authorization"] == "Bearer server-key"
    assert captured["headers"]["Content-Type"] == "application/json"
    assert captured["body"] == body


@pytest.mark.asyncio
async def test_trailing_slash_in_base_url(http_client_factory):
    urls = []

    def handler(request: httpx.Request) -> httpx.Response:
        urls.append(str(request.url))
        return httpx.Response(200, json={})

    provider = UpstreamProvider(
        name="openai",
        base_url="https://api.openai.com/v1/",
        api_key="sk-test",
        api_key_setting="OPENAI_API_KEY",
        default_model="gpt-4o-mini",
        model_marker="gpt",
        log_provider="openai",
    )

    await OpenAIClient(http_client_factory(handler)).forward(provider, {"messages": []})

    assert urls == ["https://api.openai.com/v1/chat/completions"]


@pytest.mark.asyncio
async def test_error_status_is_not_raised(provider, http_client_factory):
    payload = {"error": {"message": "API key not valid", "status": "INVALID_ARGUMENT"}}

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json=payload)

    response = await OpenAIClient(http_client_factory(handler)).forward(provider, {})

    assert response.status_code == 400
    assert not response.is_success
    assert response.body == payload


@pytest.mark.asyncio
async def test_non_json_body_wrapped(provider, http_client_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="<html>Service Unavailable</html>")

    response = await OpenAIClient(http_client_factory(handler)).forward(provider, {})

    assert response.status_code == 503
    assert response.body == {"error": {"message": "<html>Service Unavailable</html>"}}


@pytest.mark.asyncio
async def test_transport_error_raised(provider, http_client_factory):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectTimeout("timed out")

    client = OpenAIClient(http_client_factory(handler))

    with pytest.raises(UpstreamTransportError) as exc_info:
        await client.forward(provider, {"messages": []})

    assert exc_info.value.message == "Request error: timed out"
    assert exc_info.value.details["provider"] == "gemini"
    # Single attempt, no retries
    assert len(calls) == 1
