"""
Prompt Log Repository Interface

Defines the write interface the audit logger persists through.
"""

from abc import ABC, abstractmethod

from hermes_proxy.domain.prompt_log import PromptLogCreate, PromptLogResponseUpdate


class PromptLogRepository(ABC):
    """Prompt Log Repository Interface"""

    # Short name used in log messages
    name: str = "prompt_log"

    @abstractmethod
    async def create(self, data: PromptLogCreate) -> None:
        """
        Insert a prompt log with empty response fields

        Args:
            data: Request half of the log
        """
        pass

    @abstractmethod
    async def update_response(
        self,
        log_id: str,
        tenant_id: str,
        data: PromptLogResponseUpdate,
    ) -> None:
        """
        Fill in the response half of a prompt log

        Stores correlate by log ID where they can, otherwise by the tenant's
        most recent log.

        Args:
            log_id: Log ID returned when the request was recorded
            tenant_id: Tenant ID of the request
            data: Response half of the log
        """
        pass
