"""
Database Module Initialization
"""

from hermes_proxy.db.session import create_engine, create_session_factory, init_db
from hermes_proxy.db.models import Base, PromptLog

__all__ = [
    "create_engine",
    "create_session_factory",
    "init_db",
    "Base",
    "PromptLog",
]
