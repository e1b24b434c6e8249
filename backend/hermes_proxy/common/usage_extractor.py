"""
Usage Extraction

Reads token usage from upstream chat completion responses.
"""

from typing import Any, Optional


def extract_total_tokens(body: Any) -> Optional[int]:
    """
    Get `usage.total_tokens` from a response body

    Returns None when the body has no usage block or the count is missing/zero.
    """
    if not isinstance(body, dict):
        return None
    usage = body.get("usage")
    if not isinstance(usage, dict):
        return None
    total = usage.get("total_tokens")
    # bool is an int subclass
    if isinstance(total, bool) or not isinstance(total, int) or not total:
        return None
    return total
