"""ghdash exception classes."""


class DashboardError(Exception):
    """Base exception for all ghdash errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(DashboardError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class NotFoundError(DashboardError):
    """Raised when the requested account or resource does not exist (404)."""

    def __init__(self, message: str = "User not found") -> None:
        super().__init__("NOT_FOUND", message)


class RateLimitedError(DashboardError):
    """Raised when the API quota is exhausted (403)."""

    def __init__(
        self,
        message: str = "API rate limit reached. Configure a token.",
        reset: int | None = None,
    ) -> None:
        super().__init__("RATE_LIMITED", message)
        self.reset = reset


class ApiError(DashboardError):
    """Raised on any other non-success HTTP status."""

    def __init__(self, status: int, message: str | None = None) -> None:
        super().__init__("API_ERROR", message or f"API error ({status})")
        self.status = status


class NetworkError(DashboardError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, message: str) -> None:
        super().__init__("NETWORK_ERROR", message)


class StoreError(DashboardError):
    """Raised when the underlying key-value store fails."""

    def __init__(self, message: str, code: str = "STORE_ERROR") -> None:
        super().__init__(code, message)


class StoreFullError(StoreError):
    """Raised when a write would exceed the store's capacity."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="STORE_FULL")
