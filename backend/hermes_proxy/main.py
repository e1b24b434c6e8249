"""
Hermes Proxy ASGI Application

Run with `uvicorn hermes_proxy.main:app` (or `python -m hermes_proxy.main`).
"""

import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hermes_proxy.api import proxy_router
from hermes_proxy.api.deps import build_prompt_log_repository, build_proxy_service
from hermes_proxy.common.errors import AppError, InternalProxyError
from hermes_proxy.common.http_client import HttpClient
from hermes_proxy.config import get_settings
from hermes_proxy.db.session import create_engine, create_session_factory, init_db
from hermes_proxy.logging_config import setup_logging
from hermes_proxy.services import AuditLogger

setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Build the shared resources, tear them down in reverse order

    Startup creates the HTTP client, the prompt log store (creating the table
    for the SQL store), the audit logger and the proxy service. Shutdown waits
    up to LOG_DRAIN_TIMEOUT_SECONDS for queued audit writes before closing.
    """
    settings = get_settings()
    http_client = HttpClient(timeout=settings.UPSTREAM_TIMEOUT)

    engine = None
    session_factory = None
    if settings.LOG_STORE_TYPE == "database":
        engine = create_engine(settings)
        await init_db(engine)
        session_factory = create_session_factory(engine)

    repo = build_prompt_log_repository(settings, http_client, session_factory)
    audit_logger = AuditLogger(
        repo,
        max_queue_size=settings.LOG_QUEUE_MAX_SIZE,
        operation_timeout=settings.LOG_WRITE_TIMEOUT_SECONDS,
    )
    audit_logger.start()

    app.state.audit_logger = audit_logger
    app.state.proxy_service = build_proxy_service(settings, http_client, audit_logger)
    logger.info(
        "Proxy ready: upstream=%s log_store=%s",
        settings.UPSTREAM_PROVIDER,
        repo.name if repo else "disabled",
    )

    yield

    await audit_logger.stop(timeout=settings.LOG_DRAIN_TIMEOUT_SECONDS)
    await http_client.close()
    if engine is not None:
        await engine.dispose()
    logger.info("Proxy stopped")


settings = get_settings()

app = FastAPI(
    title=settings.APP_NAME,
    description="OpenAI-compatible LLM proxy with prompt audit logging",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Anything that escapes a route becomes the internal proxy error envelope"""
    logger.error(
        "Unhandled error on %s %s: %s\n%s",
        request.method,
        request.url.path,
        exc,
        traceback.format_exc(),
    )
    return JSONResponse(
        status_code=500,
        content=InternalProxyError(details=str(exc)).to_dict(),
    )


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe, independent of upstream and log store"""
    return {"status": "healthy"}


app.include_router(proxy_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hermes_proxy.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
