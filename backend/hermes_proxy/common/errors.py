"""
Proxy Errors

Every error the proxy answers with itself carries its HTTP status and renders
the OpenAI style `{"error": {"message": ...}}` envelope, which developer tools
already know how to display.
"""

from typing import Any, Optional


class AppError(Exception):
    """
    Base for errors answered by the proxy itself

    `error_type` and `code` are for logs and callers; only `message` and
    `details` reach the response body.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "app_error",
        code: str = "internal_error",
        details: Optional[Any] = None,
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.code = code
        self.details = details
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Response body; `details` is omitted when None"""
        error: dict[str, Any] = {"message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return {"error": error}


class AuthenticationError(AppError):
    """
    Authentication Error

    Raised when the bearer token is missing or is not a valid tenant ID.
    """

    def __init__(
        self,
        message: str = "Missing or invalid Authorization header",
        code: str = "missing_authorization",
        details: Optional[Any] = None,
    ):
        super().__init__(
            message=message,
            error_type="authentication_error",
            code=code,
            details=details,
            status_code=401,
        )


class InvalidRequestError(AppError):
    """
    Invalid Request Error

    Raised when the request body cannot be used (not JSON, not an object).
    """

    def __init__(
        self,
        message: str = "Invalid JSON in request body",
        code: str = "invalid_json",
        details: Optional[Any] = None,
    ):
        super().__init__(
            message=message,
            error_type="invalid_request_error",
            code=code,
            details=details,
            status_code=400,
        )


class ConfigurationError(AppError):
    """
    Configuration Error

    Raised when a required server-side setting (e.g. the upstream API key) is absent.
    """

    def __init__(
        self,
        message: str = "Server is not configured",
        code: str = "server_misconfigured",
        details: Optional[Any] = None,
    ):
        super().__init__(
            message=message,
            error_type="configuration_error",
            code=code,
            details=details,
            status_code=500,
        )


class UpstreamTransportError(AppError):
    """
    Upstream Transport Error

    Raised when the upstream could not be reached at all (DNS, refused connection, timeout).
    An upstream that answers with a 4xx/5xx status is not an error for the proxy.
    """

    def __init__(
        self,
        message: str = "Upstream request failed",
        code: str = "upstream_unreachable",
        details: Optional[Any] = None,
    ):
        super().__init__(
            message=message,
            error_type="upstream_error",
            code=code,
            details=details,
            status_code=502,
        )


class InternalProxyError(AppError):
    """
    Internal Proxy Error

    The 500 envelope returned for any failure while the request is being proxied.
    """

    def __init__(
        self,
        details: Optional[Any] = None,
        message: str = "Internal proxy error",
        code: str = "internal_error",
    ):
        super().__init__(
            message=message,
            error_type="internal_error",
            code=code,
            details=details,
            status_code=500,
        )
