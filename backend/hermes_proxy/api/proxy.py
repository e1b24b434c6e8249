"""
OpenAI Proxy API

OpenAI compatible chat completion endpoint used by developer tools
(Cursor, Continue.dev, Cody, ...).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Header, Request, status
from fastapi.responses import JSONResponse

from hermes_proxy.api.deps import ProxyServiceDep, SettingsDep
from hermes_proxy.common.errors import AppError, InternalProxyError

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_PATH = "/api/openai-proxy/v1/chat/completions"

router = APIRouter(tags=["Proxy - OpenAI"])


@router.post(CHAT_COMPLETIONS_PATH)
async def chat_completions(
    request: Request,
    service: ProxyServiceDep,
    authorization: Optional[str] = Header(None, description="Bearer <tenant UUID>"),
    user_agent: Optional[str] = Header(None),
):
    """
    OpenAI Chat Completions API Proxy

    Upstream status and body are returned unchanged.
    """
    logger.debug("Proxy request received: url=%s user_agent=%s", request.url, user_agent)
    try:
        raw_body = await request.body()
        result = await service.process_request(
            authorization=authorization,
            user_agent=user_agent,
            raw_body=raw_body,
        )
        return JSONResponse(content=result.body, status_code=result.status_code)
    except AppError as e:
        return JSONResponse(content=e.to_dict(), status_code=e.status_code)
    except Exception as e:
        logger.error("Unexpected proxy error: %s", e, exc_info=True)
        return JSONResponse(
            content=InternalProxyError(details=str(e)).to_dict(),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


@router.get(CHAT_COMPLETIONS_PATH)
async def describe_proxy(service: ProxyServiceDep, settings: SettingsDep):
    """
    Service Descriptor

    Health/identity probe for tools that GET the endpoint before using it.
    """
    return service.describe(
        endpoint=CHAT_COMPLETIONS_PATH,
        service_name=settings.APP_NAME,
        version=settings.APP_VERSION,
    )
