class TCSionAPIError(Exception):
    """Base exception for TCS iON API errors."""
    pass

class UpstreamNetworkError(TCSionAPIError):
    """Raised when the platform cannot be reached or the request times out."""
    pass

class UpstreamMalformedError(TCSionAPIError):
    """Raised when a response body cannot be parsed into the expected shape."""
    pass

class UpstreamResponseError(TCSionAPIError):
    """Raised when the platform answers with a non-success status code."""

    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        super().__init__(message or f"Unexpected status code {status_code}")

class UpstreamAuthRejectedError(UpstreamResponseError):
    """Raised when the platform rejects the supplied credential (401/403)."""
    pass

class UpstreamServerError(UpstreamResponseError):
    """Raised when the platform fails with a 5xx status."""
    pass
