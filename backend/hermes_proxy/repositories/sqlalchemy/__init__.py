"""
SQLAlchemy Repository Implementation Module Initialization
"""

from hermes_proxy.repositories.sqlalchemy.prompt_log_repo import SQLAlchemyPromptLogRepository

__all__ = [
    "SQLAlchemyPromptLogRepository",
]
