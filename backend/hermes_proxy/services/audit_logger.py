"""
Audit Logger Module

Records prompt/response telemetry without blocking the proxied request.

Operations are put on a bounded asyncio queue and persisted by a single
background worker, so a log's insert is always written before its response
update. Persistence is best effort: store failures are logged and dropped,
and a full queue drops new operations. A store call that exceeds the
operation timeout is cancelled, so the worker moves on to the next operation.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from hermes_proxy.domain.prompt_log import PromptLogCreate, PromptLogResponseUpdate
from hermes_proxy.repositories.prompt_log_repo import PromptLogRepository

logger = logging.getLogger(__name__)


@dataclass
class _AuditOperation:
    # e.g. "log_prompt 1f0c..."
    description: str
    run: Callable[[], Awaitable[None]]


@dataclass
class AuditStats:
    submitted: int = 0
    persisted: int = 0
    failed: int = 0
    dropped: int = 0
    skipped: int = 0


class AuditLogger:
    """
    Fire-and-forget Prompt Audit Logger

    Constructed once at startup and shared by all requests. Without a store
    every operation is a no-op that only emits a warning.
    """

    def __init__(
        self,
        repo: Optional[PromptLogRepository],
        max_queue_size: int = 1000,
        operation_timeout: Optional[float] = 10.0,
    ):
        """
        Initialize Audit Logger

        Args:
            repo: Prompt log store, None disables persistence
            max_queue_size: Pending operations kept before dropping (0 means unbounded)
            operation_timeout: Seconds one store call may take, None for no limit
        """
        self.repo = repo
        self.max_queue_size = max_queue_size
        self.operation_timeout = operation_timeout
        self.stats = AuditStats()
        self._queue: Optional[asyncio.Queue[_AuditOperation]] = None
        self._worker: Optional[asyncio.Task] = None

    @property
    def enabled(self) -> bool:
        return self.repo is not None

    def _get_queue(self) -> asyncio.Queue:
        if self._queue is None:
            self._queue = asyncio.Queue(maxsize=self.max_queue_size)
        return self._queue

    def start(self) -> None:
        """Start the background worker (no-op when already running or disabled)"""
        if not self.enabled:
            return
        if self._worker is not None and not self._worker.done():
            return
        queue = self._get_queue()
        self._worker = asyncio.get_running_loop().create_task(
            self._run(queue), name="audit-logger"
        )

    async def drain(self) -> None:
        """Wait until every queued operation has been processed"""
        if self._queue is not None and self._worker is not None:
            await self._queue.join()

    async def stop(self, timeout: Optional[float] = None) -> None:
        """
        Drain pending operations, then stop the worker

        Args:
            timeout: Max seconds to wait for the drain, pending operations are lost after it
        """
        if self._worker is None:
            return
        try:
            await asyncio.wait_for(self.drain(), timeout=timeout)
        except asyncio.TimeoutError:
            pending = self._queue.qsize() if self._queue is not None else 0
            logger.warning("Audit logger stopped with %d pending operation(s)", pending)
        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None

    async def _run(self, queue: asyncio.Queue) -> None:
        while True:
            operation = await queue.get()
            try:
                await asyncio.wait_for(operation.run(), timeout=self.operation_timeout)
                self.stats.persisted += 1
            except asyncio.TimeoutError:
                self.stats.failed += 1
                logger.error(
                    "Timed out after %ss persisting %s",
                    self.operation_timeout,
                    operation.description,
                )
            except Exception:
                self.stats.failed += 1
                logger.exception("Failed to persist %s", operation.description)
            finally:
                queue.task_done()

    def _submit(self, operation: _AuditOperation) -> None:
        if not self.enabled:
            self.stats.skipped += 1
            logger.warning("Prompt log store not configured, skipping %s", operation.description)
            return
        self.start()
        try:
            self._get_queue().put_nowait(operation)
            self.stats.submitted += 1
        except asyncio.QueueFull:
            self.stats.dropped += 1
            logger.warning("Audit queue full, dropping %s", operation.description)

    def record_request(
        self,
        tenant_id: str,
        prompt_text: str,
        prompt_json: Any,
        provider: Optional[str],
        tool_name: Optional[str],
        user_agent: Optional[str],
        model_requested: Optional[str],
        request_metadata: Optional[dict[str, Any]],
    ) -> str:
        """
        Schedule the insert of a new prompt log

        Returns immediately; the insert happens on the background worker.

        Returns:
            str: Log ID to pass to record_response
        """
        log_id = str(uuid.uuid4())
        data = PromptLogCreate(
            id=log_id,
            tenant_id=tenant_id,
            prompt_text=prompt_text,
            prompt_json=prompt_json,
            provider=provider,
            tool_name=tool_name,
            user_agent=user_agent,
            model_requested=model_requested,
            request_metadata=request_metadata,
        )
        repo = self.repo
        self._submit(
            _AuditOperation(
                description=f"log_prompt {log_id}",
                run=lambda: repo.create(data),
            )
        )
        return log_id

    def record_response(
        self,
        log_id: str,
        tenant_id: str,
        response_status: int,
        response_time_ms: Optional[int],
        tokens_used: Optional[int],
        response_json: Any,
    ) -> None:
        """
        Schedule the response update of a prompt log

        Returns immediately; the update happens on the background worker.
        """
        data = PromptLogResponseUpdate(
            response_status=response_status,
            response_time_ms=response_time_ms,
            tokens_used=tokens_used,
            response_json=response_json,
        )
        repo = self.repo
        self._submit(
            _AuditOperation(
                description=f"update_prompt_log_response {log_id}",
                run=lambda: repo.update_response(log_id, tenant_id, data),
            )
        )
