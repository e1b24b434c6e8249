"""
Test Configuration Module
"""

from typing import Any, AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from hermes_proxy.common.http_client import HttpClient
from hermes_proxy.db.models import Base
from hermes_proxy.domain.prompt_log import PromptLogCreate, PromptLogResponseUpdate
from hermes_proxy.domain.provider import UpstreamProvider
from hermes_proxy.repositories.prompt_log_repo import PromptLogRepository


# Use in-memory database for testing, one shared connection
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TENANT_ID = "123e4567-e89b-12d3-a456-426614174000"


class RecordingPromptLogRepository(PromptLogRepository):
    """In-memory store that keeps every call, in call order"""

    name = "memory"

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[tuple[str, Any]] = []
        self.created: dict[str, PromptLogCreate] = {}
        self.responses: dict[str, PromptLogResponseUpdate] = {}

    async def create(self, data: PromptLogCreate) -> None:
        self.calls.append(("create", data.id))
        if self.fail:
            raise RuntimeError("log store unavailable")
        self.created[data.id] = data

    async def update_response(
        self, log_id: str, tenant_id: str, data: PromptLogResponseUpdate
    ) -> None:
        self.calls.append(("update_response", log_id))
        if self.fail:
            raise RuntimeError("log store unavailable")
        self.responses[log_id] = data


def make_provider(api_key: str | None = "server-key") -> UpstreamProvider:
    return UpstreamProvider(
        name="gemini",
        base_url="https://generativelanguage.googleapis.com/v1beta/openai",
        api_key=api_key,
        api_key_setting="GEMINI_API_KEY",
        default_model="gemini-1.5-flash",
        model_marker="gemini",
        log_provider="gemini-openai",
    )


def mock_http_client(
    handler: Callable[[httpx.Request], httpx.Response],
) -> HttpClient:
    return HttpClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def tenant_id() -> str:
    return TENANT_ID


@pytest.fixture
def provider() -> UpstreamProvider:
    return make_provider()


@pytest.fixture
def unconfigured_provider() -> UpstreamProvider:
    return make_provider(api_key=None)


@pytest.fixture
def recording_repo() -> RecordingPromptLogRepository:
    return RecordingPromptLogRepository()


@pytest.fixture
def failing_repo() -> RecordingPromptLogRepository:
    return RecordingPromptLogRepository(fail=True)


@pytest.fixture
def http_client_factory():
    """Build an HttpClient whose requests are answered by `handler`"""
    return mock_http_client


@pytest_asyncio.fixture
async def async_engine():
    """Create async database engine for testing"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Clean up
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(async_engine) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory bound to the test engine"""
    yield async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
