"""
Tenant Identity Module

The proxy identifies its caller by the bearer token, which carries the
candidate (tenant) UUID. It is a partition key for telemetry, not a secret.
"""

import re
from typing import Optional

from hermes_proxy.common.errors import AuthenticationError

_BEARER_PREFIX = re.compile(r"^Bearer\s+", re.IGNORECASE)
_TENANT_ID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def strip_bearer(authorization: Optional[str]) -> str:
    """
    Remove a leading "Bearer " prefix (any case) and surrounding whitespace.

    >>> strip_bearer("bearer  abc ")
    'abc'
    """
    if not authorization:
        return ""
    return _BEARER_PREFIX.sub("", authorization, count=1).strip()


def is_valid_tenant_id(value: str) -> bool:
    return bool(_TENANT_ID_PATTERN.match(value))


def extract_tenant_id(authorization: Optional[str]) -> str:
    """
    Extract the tenant ID from an Authorization header value

    Args:
        authorization: Raw header value, may be None

    Returns:
        str: Tenant ID, case preserved

    Raises:
        AuthenticationError: Header missing/empty or token is not UUID shaped
    """
    tenant_id = strip_bearer(authorization)
    if not tenant_id:
        raise AuthenticationError()
    if not is_valid_tenant_id(tenant_id):
        raise AuthenticationError(
            message="Invalid candidate ID format",
            code="invalid_candidate_id",
        )
    return tenant_id
