"""Exception hierarchy for product link extraction.

Every error's ``str()`` is a user-safe message that the route layer returns
as-is; the underlying exception (if any) is kept on ``cause`` for logging.
"""

from __future__ import annotations


class ExtractionError(Exception):
    """Base exception for all extraction errors."""

    code = "EXTRACTION_ERROR"
    default_message = "Could not extract product information. Please fill in manually."

    def __init__(
        self,
        message: str | None = None,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.url = url
        self.cause = cause


class InvalidUrlError(ExtractionError):
    """Raised when the input is not a well-formed absolute http(s) URL."""

    code = "INVALID_URL"
    default_message = "Invalid URL format. Please enter a valid URL."


class FetchTimeoutError(ExtractionError):
    """Raised when the page fetch exceeds its time budget."""

    code = "TIMEOUT"
    default_message = "Request timed out. Website took too long to respond."


class NetworkError(ExtractionError):
    """Raised for DNS, connection, TLS and redirect failures."""

    code = "NETWORK_ERROR"
    default_message = "Could not reach website. Please check the URL and try again."


class UpstreamError(ExtractionError):
    """Raised when the target site answers with a non-success HTTP status."""

    code = "UPSTREAM_ERROR"

    def __init__(
        self,
        status_code: int,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(f"Website returned error: {status_code}", url, cause)
        self.status_code = status_code


class ExtractionFailedError(ExtractionError):
    """Raised when the page was fetched but no strategy found usable data."""

    code = "EXTRACTION_FAILED"
    default_message = "Could not find product information on this page."
