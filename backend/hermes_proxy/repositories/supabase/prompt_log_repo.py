"""
Prompt Log Repository Supabase Implementation

Persists prompt logs through the `log_prompt` and `update_prompt_log_response`
Postgres functions, called over Supabase's PostgREST RPC endpoint.
"""

from typing import Any

from hermes_proxy.common.http_client import HttpClient
from hermes_proxy.domain.prompt_log import PromptLogCreate, PromptLogResponseUpdate
from hermes_proxy.repositories.prompt_log_repo import PromptLogRepository

LOG_PROMPT_RPC = "log_prompt"
UPDATE_RESPONSE_RPC = "update_prompt_log_response"


class SupabasePromptLogRepository(PromptLogRepository):
    """
    Prompt Log Repository Supabase Implementation

    The RPC keys the response update by candidate ID, so it lands on the
    tenant's most recent log rather than on a specific log ID.
    """

    name = "supabase"

    def __init__(self, supabase_url: str, service_key: str, http_client: HttpClient):
        """
        Initialize Repository

        Args:
            supabase_url: Project URL, e.g. https://xyz.supabase.co
            service_key: Service role key
            http_client: Shared HTTP client
        """
        self.rpc_base_url = f"{supabase_url.rstrip('/')}/rest/v1/rpc"
        self.service_key = service_key
        self.http_client = http_client

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Content-Type": "application/json",
        }

    async def _call(self, function: str, params: dict[str, Any]) -> None:
        response = await self.http_client.post(
            f"{self.rpc_base_url}/{function}",
            headers=self._headers(),
            json=params,
        )
        response.raise_for_status()

    async def create(self, data: PromptLogCreate) -> None:
        await self._call(
            LOG_PROMPT_RPC,
            {
                "p_candidate_id": data.tenant_id,
                "p_prompt_text": data.prompt_text,
                "p_prompt_json": data.prompt_json,
                "p_provider": data.provider,
                "p_tool_name": data.tool_name,
                "p_user_agent": data.user_agent,
                "p_model_requested": data.model_requested,
                "p_request_metadata": data.request_metadata,
                "p_response_status": None,
                "p_response_time_ms": None,
                "p_tokens_used": None,
                "p_response_json": None,
            },
        )

    async def update_response(
        self,
        log_id: str,
        tenant_id: str,
        data: PromptLogResponseUpdate,
    ) -> None:
        await self._call(
            UPDATE_RESPONSE_RPC,
            {
                "p_candidate_id": tenant_id,
                "p_response_status": data.response_status,
                "p_response_time_ms": data.response_time_ms,
                "p_tokens_used": data.tokens_used,
                "p_response_json": data.response_json,
            },
        )
