"""
Data Access Layer Module Initialization
"""

from hermes_proxy.repositories.prompt_log_repo import PromptLogRepository

__all__ = [
    "PromptLogRepository",
]
