"""
Prompt Log Repository SQLAlchemy Implementation

Each operation opens its own session: writes run on the audit worker, outside
any request scope.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hermes_proxy.db.models import PromptLog as PromptLogORM
from hermes_proxy.domain.prompt_log import (
    PromptLogCreate,
    PromptLogModel,
    PromptLogResponseUpdate,
)
from hermes_proxy.repositories.prompt_log_repo import PromptLogRepository

logger = logging.getLogger(__name__)


def _to_utc_naive(dt: Optional[datetime]) -> Optional[datetime]:
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def _ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class SQLAlchemyPromptLogRepository(PromptLogRepository):
    """
    Prompt Log Repository SQLAlchemy Implementation
    """

    name = "database"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """
        Initialize Repository

        Args:
            session_factory: Async session factory
        """
        self.session_factory = session_factory

    def _to_domain(self, entity: PromptLogORM) -> PromptLogModel:
        return PromptLogModel(
            id=entity.id,
            created_at=_ensure_utc(entity.created_at),
            tenant_id=entity.tenant_id,
            prompt_text=entity.prompt_text,
            prompt_json=entity.prompt_json,
            provider=entity.provider,
            tool_name=entity.tool_name,
            user_agent=entity.user_agent,
            model_requested=entity.model_requested,
            request_metadata=entity.request_metadata,
            response_status=entity.response_status,
            response_time_ms=entity.response_time_ms,
            tokens_used=entity.tokens_used,
            response_json=entity.response_json,
            responded_at=_ensure_utc(entity.responded_at),
        )

    async def create(self, data: PromptLogCreate) -> None:
        entity = PromptLogORM(
            id=data.id,
            created_at=_to_utc_naive(data.created_at),
            tenant_id=data.tenant_id,
            prompt_text=data.prompt_text,
            prompt_json=data.prompt_json,
            provider=data.provider,
            tool_name=data.tool_name,
            user_agent=data.user_agent,
            model_requested=data.model_requested,
            request_metadata=data.request_metadata,
        )
        async with self.session_factory() as session:
            session.add(entity)
            await session.commit()

    async def update_response(
        self,
        log_id: str,
        tenant_id: str,
        data: PromptLogResponseUpdate,
    ) -> None:
        async with self.session_factory() as session:
            entity = await session.get(PromptLogORM, log_id)
            if entity is None or entity.tenant_id != tenant_id:
                logger.warning(
                    "Prompt log %s for tenant %s not found, response not recorded",
                    log_id,
                    tenant_id,
                )
                return
            entity.response_status = data.response_status
            entity.response_time_ms = data.response_time_ms
            entity.tokens_used = data.tokens_used
            entity.response_json = data.response_json
            entity.responded_at = _to_utc_naive(data.responded_at)
            await session.commit()

    async def get_by_id(self, log_id: str) -> PromptLogModel | None:
        async with self.session_factory() as session:
            entity = await session.get(PromptLogORM, log_id)
            return self._to_domain(entity) if entity else None

    async def list_by_tenant(self, tenant_id: str, limit: int = 100) -> list[PromptLogModel]:
        """Most recent logs of a tenant, newest first"""
        stmt = (
            select(PromptLogORM)
            .where(PromptLogORM.tenant_id == tenant_id)
            .order_by(PromptLogORM.created_at.desc())
            .limit(limit)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_domain(entity) for entity in result.scalars().all()]
