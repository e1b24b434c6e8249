"""
SQLAlchemy ORM Model Definitions

- prompt_logs: one row per proxied request, response columns filled in after the upstream call
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy ORM Base Class"""
    pass


class PromptLog(Base):
    """
    Prompt Logs Table

    Append-only: rows are inserted at request time and updated once with the response.
    """
    __tablename__ = "prompt_logs"

    # Opaque log ID (UUID string)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # Request Time (naive UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    # Tenant (candidate) ID from the bearer token
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    prompt_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Forwarded request body
    prompt_json: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    provider: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    tool_name: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    model_requested: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    # Request body without messages
    request_metadata: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    # Response half, NULL until the upstream call completes
    response_status: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    response_time_ms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    tokens_used: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    response_json: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    responded_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    __table_args__ = (
        Index("idx_prompt_logs_tenant_time", "tenant_id", "created_at"),
        Index("idx_prompt_logs_status", "response_status"),
    )
