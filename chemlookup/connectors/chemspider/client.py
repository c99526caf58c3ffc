"""
ChemSpider HTTP client with request throttling.

Low-level API client that handles:
- HTTP GET requests against the ChemSpider ASMX web services
- Security token threading (sent unchanged with every request)
- A fixed pause after every request to avoid overwhelming the service
- Optional retries with exponential backoff for transient failures

This client returns raw XML bodies. Use ChemSpiderNormalizer to convert
them to values and schemas.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import AsyncIterator, Awaitable, Callable
from urllib.parse import urlencode

import httpx

from chemlookup.connectors.exceptions import (
    AuthenticationError,
    ConnectorError,
    NotFoundError,
    RateLimitError,
    ServiceUnavailableError,
    TimeoutError,
    TransportError,
)
from chemlookup.connectors.settings import connector_settings

logger = logging.getLogger(__name__)

CONNECTOR_NAME = "chemspider"

SleepFunc = Callable[[float], Awaitable[None]]


def parse_retry_after(value: str | None) -> int | None:
    """
    Seconds to wait from a Retry-After header.

    Accepts both delta-seconds and HTTP-date forms; anything unparseable
    gives None so the caller falls back to its own backoff.
    """
    if not value:
        return None
    value = value.strip()
    if value.isdigit():
        return int(value)
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring unparseable Retry-After header: {value!r}")
        return None
    if when is None:
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    remaining = (when - datetime.now(timezone.utc)).total_seconds()
    return max(0, int(remaining))


class RequestThrottle:
    """
    Fixed delay applied after every outbound request.

    Requests through one throttle are serialized, so sharing a client across
    tasks still spaces calls at least ``delay`` seconds apart.
    """

    def __init__(self, delay: float, sleep: SleepFunc | None = None):
        self.delay = delay
        self._sleep = sleep or asyncio.sleep
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        async with self._lock:
            try:
                yield
            finally:
                if self.delay > 0:
                    await self._sleep(self.delay)


class ChemSpiderClient:
    """
    Low-level HTTP client for the ChemSpider web services.

    Example:
        async with ChemSpiderClient(token="...") as client:
            # Free text or CAS number search
            xml = await client.simple_search("107-06-2")

            # Compound identifiers (SMILES, InChI, InChIKey)
            xml = await client.get_compound_info("13837650")

            # Extended metadata (formula, masses, logP, common name)
            xml = await client.get_extended_compound_info("13837650")
    """

    BASE_URL = "http://www.chemspider.com"
    SEARCH_ENDPOINT = "/Search.asmx/SimpleSearch"
    COMPOUND_INFO_ENDPOINT = "/Search.asmx/GetCompoundInfo"
    EXTENDED_INFO_ENDPOINT = "/MassSpecAPI.asmx/GetExtendedCompoundInfo"

    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        timeout: int | None = None,
        max_retries: int | None = None,
        request_delay: float | None = None,
        sleep: SleepFunc | None = None,
    ):
        self.token = token or connector_settings.chemspider_token
        if not self.token:
            raise AuthenticationError(
                "A ChemSpider security token is required "
                "(register at https://www.rsc.org/rsc-id/register)",
                connector=CONNECTOR_NAME,
            )

        self.base_url = (
            base_url or connector_settings.chemspider_base_url or self.BASE_URL
        )
        self.timeout = (
            timeout or connector_settings.connector_timeout or self.DEFAULT_TIMEOUT
        )
        self.max_retries = (
            max_retries
            if max_retries is not None
            else connector_settings.chemspider_max_retries
        )
        delay = (
            request_delay
            if request_delay is not None
            else connector_settings.chemspider_request_delay
        )
        self.throttle = RequestThrottle(delay, sleep=sleep)

        self._client: httpx.AsyncClient | None = None

    @property
    def request_delay(self) -> float:
        return self.throttle.delay

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazy initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "Accept": "text/xml, application/xml",
                    "User-Agent": "chemlookup/0.1",
                },
                follow_redirects=True,
            )
        return self._client

    def _backoff_delay(self, attempt: int) -> float:
        """Calculate exponential backoff delay."""
        delay = connector_settings.connector_retry_backoff_base * (2**attempt)
        return min(delay, connector_settings.connector_retry_backoff_max)

    def request_url(self, endpoint: str, params: dict[str, str]) -> str:
        """Full request URL with the token masked, for diagnostics."""
        shown = {k: ("***" if k == "token" else v) for k, v in params.items()}
        return f"{self.base_url}{endpoint}?{urlencode(shown)}"

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    async def get(
        self,
        endpoint: str,
        params: dict[str, str],
        *,
        verbose: bool = False,
    ) -> str:
        """
        Make a throttled GET request and return the raw body.

        The security token is appended to ``params``. Every attempt is
        followed by the fixed request delay, whatever its outcome.

        Raises:
            AuthenticationError: Token rejected
            NotFoundError: Endpoint not found (404)
            RateLimitError: Rate limit exceeded after retries
            ServiceUnavailableError: 5xx after retries
            TimeoutError: Request timed out after retries
            TransportError: Connection failed after retries
            ConnectorError: Other HTTP errors
        """
        params = {**params, "token": self.token}

        url = self.request_url(endpoint, params)
        if verbose or connector_settings.connector_log_requests:
            logger.info(f"ChemSpider GET {url}")
        else:
            logger.debug(f"ChemSpider GET {url}")

        last_error: ConnectorError | None = None

        for attempt in range(self.max_retries + 1):
            try:
                async with self.throttle.slot():
                    return await self._do_request(endpoint, params)

            except ConnectorError as e:
                if not e.retryable:
                    raise
                last_error = e

            if attempt < self.max_retries:
                wait_time = (
                    getattr(last_error, "retry_after", None)
                    or self._backoff_delay(attempt)
                )
                logger.warning(
                    f"ChemSpider {type(last_error).__name__}, retrying in {wait_time}s "
                    f"(attempt {attempt + 1}/{self.max_retries + 1})"
                )
                await asyncio.sleep(wait_time)

        raise last_error or ConnectorError(
            "Request failed after retries", connector=CONNECTOR_NAME
        )

    async def _do_request(self, endpoint: str, params: dict[str, str]) -> str:
        """Execute a single HTTP request and map error statuses."""
        client = await self._get_client()

        try:
            response = await client.get(endpoint, params=params)
        except httpx.TimeoutException as e:
            raise TimeoutError(
                f"Request timed out after {self.timeout}s",
                connector=CONNECTOR_NAME,
                timeout=self.timeout,
            ) from e
        except httpx.RequestError as e:
            raise TransportError(
                f"Request error: {e}",
                connector=CONNECTOR_NAME,
            ) from e

        status = response.status_code

        if status in (401, 403):
            raise AuthenticationError(
                f"Authentication failed: {response.text[:200]}",
                connector=CONNECTOR_NAME,
            )

        if status == 404:
            raise NotFoundError(endpoint, connector=CONNECTOR_NAME)

        if status == 429:
            retry_after = parse_retry_after(response.headers.get("Retry-After"))
            raise RateLimitError(connector=CONNECTOR_NAME, retry_after=retry_after)

        if status >= 500:
            # ChemSpider answers a bad token with a 500 and an "Unauthorized" body
            if "unauthorized" in response.text.lower():
                raise AuthenticationError(
                    f"Security token rejected: {response.text[:200]}",
                    connector=CONNECTOR_NAME,
                )
            raise ServiceUnavailableError(
                f"Server error: {status}",
                connector=CONNECTOR_NAME,
                status_code=status,
            )

        if status >= 400:
            raise ConnectorError(
                f"Request failed: {response.text[:500]}",
                connector=CONNECTOR_NAME,
                status_code=status,
            )

        return response.text

    # =========================================================================
    # ChemSpider-Specific Methods
    # =========================================================================

    async def simple_search(self, query: str, *, verbose: bool = False) -> str:
        """
        Search by free text, CAS number, SMILES, InChI, etc.

        Returns:
            Raw ``<ArrayOfInt>`` XML
        """
        return await self.get(self.SEARCH_ENDPOINT, {"query": query}, verbose=verbose)

    async def get_compound_info(self, csid: str, *, verbose: bool = False) -> str:
        """
        Get identifiers for a CSID.

        Returns:
            Raw ``<CompoundInfo>`` XML (CSID, InChI, InChIKey, SMILES)
        """
        return await self.get(
            self.COMPOUND_INFO_ENDPOINT, {"CSID": csid}, verbose=verbose
        )

    async def get_extended_compound_info(
        self, csid: str, *, verbose: bool = False
    ) -> str:
        """
        Get extended compound metadata for a CSID.

        Returns:
            Raw ``<ExtendedCompoundInfo>`` XML
        """
        return await self.get(
            self.EXTENDED_INFO_ENDPOINT, {"CSID": csid}, verbose=verbose
        )

    # =========================================================================
    # Cleanup
    # =========================================================================

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
