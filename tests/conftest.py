"""
Pytest configuration and fixtures.

Provides reusable fixtures for ChemSpider connector testing:
- mock_http_response: Factory for mocked httpx responses carrying XML
- mock_http_client: AsyncMock standing in for httpx.AsyncClient
- sleeps: Records every throttle pause instead of sleeping
- chemspider_client / chemspider_connector: Wired to the mocks above
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from chemlookup.connectors.chemspider import ChemSpiderClient, ChemSpiderConnector

TEST_TOKEN = "00000000-test-token-0000-000000000000"
TEST_DELAY = 0.1


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest.fixture
def mock_http_response():
    """Factory for creating mock httpx responses with an XML body."""

    def _create(
        status_code: int = 200,
        text: str = "",
        headers: dict | None = None,
    ) -> httpx.Response:
        response = MagicMock(spec=httpx.Response)
        response.status_code = status_code
        response.headers = {"Content-Type": "text/xml; charset=utf-8", **(headers or {})}
        response.text = text
        return response

    return _create


@pytest.fixture
def mock_http_client():
    """httpx.AsyncClient replacement; set ``.get`` per test."""
    client = AsyncMock(spec=httpx.AsyncClient)
    client.get = AsyncMock()
    return client


@pytest.fixture
def sleeps() -> list[float]:
    """Durations passed to the throttle's sleep function."""
    return []


@pytest.fixture
def chemspider_client(mock_http_client, sleeps):
    """ChemSpider client with mocked HTTP and recorded throttle pauses."""

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    client = ChemSpiderClient(
        token=TEST_TOKEN,
        request_delay=TEST_DELAY,
        max_retries=0,
        sleep=fake_sleep,
    )
    client._client = mock_http_client
    return client


@pytest.fixture
def chemspider_connector(chemspider_client):
    """Connector using the mocked client, non-interactive by default."""
    return ChemSpiderConnector(client=chemspider_client, policy="fail")
