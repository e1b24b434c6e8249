"""
API Dependency Injection Module

Builds the shared proxy components once at startup and exposes them to
FastAPI routes.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hermes_proxy.common.http_client import HttpClient
from hermes_proxy.config import Settings, get_settings
from hermes_proxy.providers import OpenAIClient, build_upstream_provider
from hermes_proxy.repositories.prompt_log_repo import PromptLogRepository
from hermes_proxy.repositories.sqlalchemy import SQLAlchemyPromptLogRepository
from hermes_proxy.repositories.supabase import SupabasePromptLogRepository
from hermes_proxy.services import AuditLogger, ModelRouter, ProxyService

logger = logging.getLogger(__name__)


# ============ Builders (called from the application lifespan) ============

def build_prompt_log_repository(
    settings: Settings,
    http_client: HttpClient,
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> Optional[PromptLogRepository]:
    """
    Select the prompt log store from LOG_STORE_TYPE

    Returns None (logging disabled) when the selected store lacks credentials.
    """
    store_type = settings.LOG_STORE_TYPE
    if store_type == "database":
        if session_factory is None:
            logger.warning("No database session factory, prompt logging disabled")
            return None
        return SQLAlchemyPromptLogRepository(session_factory)
    if store_type == "supabase":
        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
            logger.warning(
                "SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY not set, prompt logging disabled"
            )
            return None
        return SupabasePromptLogRepository(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_ROLE_KEY,
            http_client,
        )
    logger.info("Prompt logging disabled (LOG_STORE_TYPE=%s)", store_type)
    return None


def build_proxy_service(
    settings: Settings,
    http_client: HttpClient,
    audit_logger: AuditLogger,
) -> ProxyService:
    provider = build_upstream_provider(settings)
    if not provider.is_configured:
        logger.warning(
            "%s not set, proxy requests will fail until it is configured",
            provider.api_key_setting,
        )
    return ProxyService(
        router=ModelRouter(provider),
        client=OpenAIClient(http_client),
        audit_logger=audit_logger,
    )


# ============ Service Dependencies ============

def get_proxy_service(request: Request) -> ProxyService:
    """Get the proxy service built at startup"""
    return request.app.state.proxy_service


SettingsDep = Annotated[Settings, Depends(get_settings)]
ProxyServiceDep = Annotated[ProxyService, Depends(get_proxy_service)]
