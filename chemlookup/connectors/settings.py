"""
Settings for the ChemSpider connector.

Environment variables:
- CHEMSPIDER_BASE_URL: ChemSpider web service base URL
- CHEMSPIDER_TOKEN: ChemSpider security token (register at RSC)
- CHEMSPIDER_REQUEST_DELAY: Fixed pause after every request (seconds)
- CHEMSPIDER_RESOLUTION_POLICY: "first_match", "fail" or "callback"
- CHEMSPIDER_MAX_RETRIES: Max retry attempts (0 = single attempt)

- CONNECTOR_TIMEOUT: Default request timeout (seconds)
- CONNECTOR_RETRY_BACKOFF_BASE: Base delay for exponential backoff
- CONNECTOR_RETRY_BACKOFF_MAX: Maximum backoff delay
- CONNECTOR_LOG_REQUESTS: Log every request URL at INFO
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class ConnectorSettings(BaseSettings):
    """Settings for the ChemSpider connector."""

    # ==========================================================================
    # API Base URL and Credentials
    # ==========================================================================

    chemspider_base_url: str = Field(
        default="http://www.chemspider.com",
        description="ChemSpider web service base URL",
    )
    chemspider_token: str | None = Field(
        default=None,
        description="ChemSpider security token (required for every request)",
    )

    # ==========================================================================
    # HTTP Client Settings
    # ==========================================================================

    connector_timeout: int = Field(
        default=30,
        description="Default request timeout in seconds",
        ge=1,
        le=300,
    )
    chemspider_max_retries: int = Field(
        default=0,
        description="Retry attempts for transient failures (0 = single attempt)",
        ge=0,
        le=10,
    )
    connector_retry_backoff_base: float = Field(
        default=1.0,
        description="Base delay for exponential backoff (seconds)",
        ge=0.1,
        le=10.0,
    )
    connector_retry_backoff_max: float = Field(
        default=60.0,
        description="Maximum backoff delay (seconds)",
        ge=1.0,
        le=300.0,
    )

    # ==========================================================================
    # Rate Limiting
    # ==========================================================================

    chemspider_request_delay: float = Field(
        default=0.1,
        description="Fixed pause after every ChemSpider request (seconds)",
        ge=0.0,
        le=60.0,
    )

    # ==========================================================================
    # Disambiguation
    # ==========================================================================

    chemspider_resolution_policy: str = Field(
        default="fail",
        description="Policy for searches with multiple hits: first_match, fail, callback",
        pattern="^(first_match|fail|callback)$",
    )

    # ==========================================================================
    # Logging
    # ==========================================================================

    connector_log_requests: bool = Field(
        default=False,
        description="Log all request URLs at INFO (token masked)",
    )

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
    }


# Singleton instance
connector_settings = ConnectorSettings()
