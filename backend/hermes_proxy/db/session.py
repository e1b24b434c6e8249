"""
Database Session Management Module

Builds the asynchronous engine and session factory used by the SQL prompt log
store. Supports SQLite (default) and PostgreSQL.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from hermes_proxy.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create asynchronous database engine

    echo=True prints SQL statements in DEBUG mode.
    """
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        connect_args={"check_same_thread": False}
        if settings.DATABASE_TYPE == "sqlite"
        else {},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Do not expire objects after commit, avoids extra queries
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize Database

    Creates the prompt_logs table if it does not exist. Called on application startup.
    """
    from hermes_proxy.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
