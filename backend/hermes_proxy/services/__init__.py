"""
Service Layer Module Initialization
"""

from hermes_proxy.services.audit_logger import AuditLogger
from hermes_proxy.services.proxy_service import ProxyResult, ProxyService
from hermes_proxy.services.router import ModelRouter, RouteDecision, marker_resolver

__all__ = [
    "AuditLogger",
    "ProxyResult",
    "ProxyService",
    "ModelRouter",
    "RouteDecision",
    "marker_resolver",
]
