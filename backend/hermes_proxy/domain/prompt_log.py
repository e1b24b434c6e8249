"""
Prompt Log Domain Model

Defines Prompt Log related Data Transfer Objects (DTOs).
A prompt log is created when a request is received and receives its response
half exactly once, after the upstream call completes.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PromptLogCreate(BaseModel):
    """Create Prompt Log Model (request half)"""

    # Opaque log ID, generated by the audit logger when the request is recorded
    id: str = Field(..., description="Log ID")
    created_at: datetime = Field(default_factory=_utc_now, description="Request Time")
    tenant_id: str = Field(..., description="Tenant (candidate) ID")
    prompt_text: str = Field("", description="Flattened Prompt Text")
    prompt_json: Any = Field(None, description="Forwarded Request Body")
    provider: Optional[str] = Field(None, description="Upstream Provider Label")
    tool_name: Optional[str] = Field(None, description="Detected Developer Tool")
    user_agent: Optional[str] = Field(None, description="Caller User-Agent")
    model_requested: Optional[str] = Field(None, description="Forwarded Model Name")
    request_metadata: Optional[dict[str, Any]] = Field(
        None, description="Request Body Without Messages"
    )


class PromptLogResponseUpdate(BaseModel):
    """Prompt Log Response Update Model (response half)"""

    response_status: int = Field(..., description="Upstream Response Status Code")
    response_time_ms: Optional[int] = Field(None, description="Upstream Call Duration (ms)")
    tokens_used: Optional[int] = Field(None, description="usage.total_tokens")
    response_json: Any = Field(None, description="Response Body")
    responded_at: datetime = Field(default_factory=_utc_now, description="Response Time")


class PromptLogModel(PromptLogCreate):
    """Prompt Log Complete Model"""

    model_config = ConfigDict(from_attributes=True)

    response_status: Optional[int] = None
    response_time_ms: Optional[int] = None
    tokens_used: Optional[int] = None
    response_json: Any = None
    responded_at: Optional[datetime] = None
