class GitHubFetchError(Exception):
    """Base class for failures while fetching contribution data."""


class TransportFailure(GitHubFetchError):
    """Raised when the request never produced an HTTP response."""


class ApiFailure(GitHubFetchError):
    """Raised when GitHub answers with a non-success status or reports errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RateLimitError(ApiFailure):
    """Raised when GitHub refuses the request with HTTP 403."""

    def __init__(self, status_code: int = 403) -> None:
        super().__init__("Rate limit exceeded. Please try again later.", status_code)


class ParseFailure(GitHubFetchError):
    """Raised when a response or markup cannot be turned into contribution days."""
