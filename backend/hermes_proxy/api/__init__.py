"""
API Module Initialization
"""

from hermes_proxy.api.proxy import router as proxy_router

__all__ = [
    "proxy_router",
]
