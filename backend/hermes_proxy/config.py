"""
Configuration Management Module

Configures application parameters via environment variables or .env file.
Missing upstream or log-store credentials never fail startup; they switch the
affected feature off (misconfiguration error on the proxy route, no-op logging).
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # Application Config
    APP_NAME: str = "Hermes Gemini-Powered Proxy"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Upstream Config
    # Which upstream the proxy forwards to: "gemini" (OpenAI compatibility surface) or "openai"
    UPSTREAM_PROVIDER: Literal["gemini", "openai"] = "gemini"
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_OPENAI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai"
    # Forced model when the request does not name a gemini model (free tier)
    GEMINI_DEFAULT_MODEL: str = "gemini-1.5-flash"
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_DEFAULT_MODEL: str = "gpt-4o-mini"
    # Upstream request timeout (seconds), None disables the timeout
    UPSTREAM_TIMEOUT: Optional[float] = None

    # Prompt Log Store Config
    # "database" uses the SQL database, "supabase" calls the log_prompt RPCs, "none" disables logging
    LOG_STORE_TYPE: Literal["database", "supabase", "none"] = "database"
    # Supports "sqlite" or "postgresql"
    DATABASE_TYPE: Literal["sqlite", "postgresql"] = "sqlite"
    DATABASE_URL: str = "sqlite+aiosqlite:///./hermes_proxy.db"
    SUPABASE_URL: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    # Pending audit operations kept in memory; further operations are dropped
    LOG_QUEUE_MAX_SIZE: int = 1000
    # Seconds to wait for pending audit operations on shutdown
    LOG_DRAIN_TIMEOUT_SECONDS: float = 5.0
    # Max seconds for one log store call before it is abandoned, None waits forever
    LOG_WRITE_TIMEOUT_SECONDS: Optional[float] = 10.0

    # Gemini Content Client Config
    # When set, generateContent calls go through this base URL with a Bearer token
    GEMINI_BASE_URL: Optional[str] = None
    GOOGLE_API_KEY: Optional[str] = None
    GEMINI_CONTENT_MODEL: str = "gemini-pro"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get application configuration (Singleton)

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
