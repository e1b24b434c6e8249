"""
Hermes Proxy

OpenAI-compatible LLM request proxy with asynchronous prompt audit logging.
"""

__version__ = "1.0.0"
