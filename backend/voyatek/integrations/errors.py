from typing import Optional


class APIError(Exception):
    """Base class for every failure surfaced by the API client stack."""

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(self.description)

    @property
    def description(self) -> str:
        return "An unknown error occurred"


class InvalidURL(APIError):
    """Raised when an endpoint URL cannot be composed."""

    @property
    def description(self) -> str:
        return "Invalid URL"


class InvalidResponse(APIError):
    """Raised when the reply cannot be classified as an HTTP response."""

    @property
    def description(self) -> str:
        return "Invalid response from server"


class HTTPError(APIError):
    """Raised for any status code outside 200-299."""

    def __init__(self, status_code: int, detail: Optional[str] = None):
        self.status_code = status_code
        super().__init__(detail)

    @property
    def description(self) -> str:
        return f"HTTP Error: {self.status_code}"


class DecodingError(APIError):
    """Raised when a body matches none of the accepted JSON shapes."""

    @property
    def description(self) -> str:
        return f"Failed to decode response: {self.detail}"


class NetworkError(APIError):
    """Raised for transport-level failures (DNS, connect, timeout)."""

    @property
    def description(self) -> str:
        return f"Network error: {self.detail}"


class UnknownError(APIError):
    """Raised when a failure fits none of the other categories."""
