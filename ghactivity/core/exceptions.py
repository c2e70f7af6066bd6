"""
All custom exceptions for the project.
"""


class BaseAppException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(BaseAppException):
    """Raised when configuration is invalid or missing."""

    pass


class UpstreamError(BaseAppException):
    """Raised when the GitHub REST API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int = 500, details: dict | None = None):
        self.status_code = status_code
        super().__init__(message, details={"status_code": status_code, **(details or {})})


class RateLimitError(UpstreamError):
    """Raised when GitHub API rate limit is exceeded."""

    pass


class ConnectionError(UpstreamError):
    """Raised when network connection fails."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=502, details=details)


class PartialFetchError(BaseAppException):
    """Raised when one item of a batch fails; callers drop that item."""

    pass
