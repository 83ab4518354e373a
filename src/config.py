"""
Application configuration management using Pydantic Settings.
Handles environment variables and default values for the service.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host address")
    port: int = Field(default=3000, description="API port")
    api_debug: bool = Field(default=False, description="Enable debug mode")
    api_reload: bool = Field(default=False, description="Enable auto-reload")

    # ENTSO-E API Configuration
    api_key: str = Field(default="", description="ENTSO-E security token (required for fetching)")
    entsoe_base_url: str = Field(
        default="https://web-api.tp.entsoe.eu/api",
        description="Base URL for the ENTSO-E transparency platform API"
    )
    default_domain: str = Field(
        default="10YFI-1--------U",
        description="Bidding zone used when no domain is requested (Finland)"
    )
    document_type: str = Field(default="A44", description="Document type code (A44 = day-ahead prices)")
    request_timeout: float = Field(default=30.0, description="Upstream request timeout in seconds")

    # Cache Configuration
    cache_ttl_seconds: int = Field(default=3600, ge=1, description="Seconds before a cache entry expires")
    max_cache_size: int = Field(default=100, ge=1, description="Maximum number of tracked cache entries")

    # Scheduler Configuration
    refresh_interval_seconds: int = Field(default=3600, ge=1, description="Seconds between background refreshes")
    refresh_enabled: bool = Field(default=True, description="Run the background refresh of current prices")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json/text)")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Settings loaded from the process environment; create_app() accepts overrides
settings = Settings()
