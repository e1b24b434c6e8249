"""
Domain Model Module Initialization
"""

from hermes_proxy.domain.prompt_log import (
    PromptLogCreate,
    PromptLogModel,
    PromptLogResponseUpdate,
)

__all__ = [
    "PromptLogCreate",
    "PromptLogModel",
    "PromptLogResponseUpdate",
]
