"""Custom exceptions for the Commons search proxy."""


class CommonsProxyError(Exception):
    """Base exception for the proxy."""

    pass


class ValidationError(CommonsProxyError):
    """Raised when a search request parameter is missing or invalid."""

    pass


class UpstreamError(CommonsProxyError):
    """Exception raised when the Commons API returns a non-success status."""

    def __init__(self, status_code: int, message: str = "", response_text: str = ""):
        self.status_code = status_code
        self.message = message or f"API returned {status_code}"
        self.response_text = response_text
        super().__init__(f"Wikimedia API error {status_code}: {self.message}")


class ParseError(CommonsProxyError):
    """Exception raised when the Commons API payload cannot be understood."""

    pass


class NetworkError(CommonsProxyError):
    """Exception raised for network/connection errors."""

    pass


class ConfigurationError(CommonsProxyError):
    """Exception raised for configuration errors."""

    pass
