"""
Connector exception types.

Raised by the HTTP client; the connector converts them into per-item
FAILED resolutions so one bad item never aborts a batch.
"""

from typing import Any


class ConnectorError(Exception):
    """Base exception for ChemSpider request and response failures."""

    # Whether the client may retry the request that raised this
    retryable: bool = False

    def __init__(
        self,
        message: str,
        connector: str | None = None,
        status_code: int | None = None,
        response_body: Any = None,
    ):
        self.message = message
        self.connector = connector
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(self.message)

    def __str__(self) -> str:
        text = f"[{self.connector}] {self.message}" if self.connector else self.message
        if self.status_code:
            text += f" (HTTP {self.status_code})"
        return text


class RateLimitError(ConnectorError):
    """
    ChemSpider throttled the caller (HTTP 429).

    ``retry_after`` is the server's requested pause in whole seconds, or
    None when the response did not carry a usable Retry-After header.
    """

    retryable = True

    def __init__(
        self,
        message: str = "Too many requests to ChemSpider",
        connector: str | None = None,
        retry_after: int | None = None,
    ):
        super().__init__(message, connector, status_code=429)
        self.retry_after = retry_after

    def __str__(self) -> str:
        text = super().__str__()
        if self.retry_after is None:
            return text
        return f"{text} - retry after {self.retry_after}s"


class NotFoundError(ConnectorError):
    """
    A ChemSpider service path answered 404.

    ChemSpider reports unknown compounds inside a 200 response, so a 404
    means the endpoint itself is wrong (bad base URL or retired service).
    """

    def __init__(self, endpoint: str, connector: str | None = None):
        super().__init__(
            f"ChemSpider endpoint '{endpoint}' not found",
            connector,
            status_code=404,
        )
        self.endpoint = endpoint


class MalformedResponseError(ConnectorError):
    """Raised when a response body is not the expected XML document."""

    def __init__(
        self,
        message: str,
        connector: str | None = None,
        element: str | None = None,
        response_body: Any = None,
    ):
        super().__init__(message, connector, response_body=response_body)
        self.element = element


class AuthenticationError(ConnectorError):
    """The ChemSpider security token is missing or was rejected."""

    def __init__(
        self,
        message: str = "ChemSpider security token rejected",
        connector: str | None = None,
    ):
        super().__init__(message, connector, status_code=401)


class ServiceUnavailableError(ConnectorError):
    """ChemSpider failed on its side (HTTP 5xx other than a token rejection)."""

    retryable = True

    def __init__(
        self,
        message: str = "ChemSpider service unavailable",
        connector: str | None = None,
        status_code: int = 503,
    ):
        super().__init__(message, connector, status_code=status_code)


class TimeoutError(ConnectorError):
    """No ChemSpider response within the configured timeout."""

    retryable = True

    def __init__(
        self,
        message: str = "ChemSpider request timed out",
        connector: str | None = None,
        timeout: float | None = None,
    ):
        super().__init__(message, connector)
        self.timeout = timeout


class TransportError(ConnectorError):
    """Raised when the request never produced an HTTP response."""

    retryable = True
