"""
API Exception Classes
"""

from typing import Optional, List, Any


class LangfuseCLIError(Exception):
    """Base exception for all CLI and API client errors"""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(LangfuseCLIError):
    """Required configuration (host or keys) is missing or blank"""
    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = list(missing_fields or [])


class ValidationError(LangfuseCLIError):
    """Client-side validation failed before any request was sent"""
    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class APIError(LangfuseCLIError):
    """General API or connection error"""
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.original_error = original_error


class AuthenticationError(APIError):
    """Authentication failed - invalid public or secret key"""
    def __init__(self, message: str = "Authentication failed. Check your API keys."):
        super().__init__(message, status_code=401)


class NotFoundError(APIError):
    """Requested resource does not exist"""
    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class RateLimitError(APIError):
    """Rate limit still exceeded after retries"""
    def __init__(
        self,
        message: str = "Rate limit exceeded. Please try again later.",
        retry_after: Optional[float] = None,
    ):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after  # Seconds suggested by the server


class TimeoutError(APIError):
    """Request timed out at the connection level"""
    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, original_error=original_error)
