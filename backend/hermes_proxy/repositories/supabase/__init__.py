"""
Supabase Repository Implementation Module Initialization
"""

from hermes_proxy.repositories.supabase.prompt_log_repo import SupabasePromptLogRepository

__all__ = [
    "SupabasePromptLogRepository",
]
