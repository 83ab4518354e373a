"""
Price fetcher - builds ENTSO-E requests and decodes the day-ahead price response.
Performs a single HTTP GET per call; failures are logged and re-raised, never retried.
"""

from datetime import datetime
from typing import List, Optional
from urllib.parse import urlencode

import httpx

from src.config import Settings, settings as default_settings
from src.exceptions import ConfigurationError, DecodeError, NetworkError
from src.logging_config import get_logger
from src.models.price import PricePoint
from src.services.xml_decoder import decode_publication_document
from src.utils.time_utils import format_entsoe_timestamp

logger = get_logger(__name__)


class PriceFetcher:
    """Fetches day-ahead prices for a time window and bidding zone."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.base_url = self.settings.entsoe_base_url
        self.timeout = self.settings.request_timeout

    async def fetch_prices(
        self,
        start: datetime,
        end: datetime,
        domain: Optional[str] = None,
    ) -> List[PricePoint]:
        """
        Fetch and decode day-ahead prices for [start, end) in the given domain.

        Raises:
            ConfigurationError: If no API key is configured
            NetworkError: On transport failure or a non-2xx response
            DecodeError: If the response body is not a valid publication document
        """
        domain = domain or self.settings.default_domain

        try:
            url = self.build_request_url(start, end, domain)
            xml_data = await self._fetch_xml(url)
            points = decode_publication_document(xml_data)
        except (ConfigurationError, NetworkError, DecodeError) as e:
            logger.error(
                "Failed to fetch prices",
                error=str(e),
                error_type=type(e).__name__,
                domain=domain,
                start=start.isoformat(),
                end=end.isoformat(),
            )
            raise

        logger.info("Fetched day-ahead prices", domain=domain, count=len(points))
        return points

    def build_request_url(self, start: datetime, end: datetime, domain: str) -> str:
        """Build the ENTSO-E request URL; the domain is used for both in and out."""
        if not self.settings.api_key:
            raise ConfigurationError("API_KEY environment variable required")

        params = {
            "securityToken": self.settings.api_key,
            "documentType": self.settings.document_type,
            "out_Domain": domain,
            "in_Domain": domain,
            "periodStart": format_entsoe_timestamp(start),
            "periodEnd": format_entsoe_timestamp(end),
        }

        logger.debug(
            "Built ENTSO-E URL",
            domain=domain,
            period_start=params["periodStart"],
            period_end=params["periodEnd"],
        )

        return f"{self.base_url}?{urlencode(params)}"

    async def _fetch_xml(self, url: str) -> str:
        """Download the XML document."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise NetworkError(f"HTTP error: {e}")

        if not response.is_success:
            raise NetworkError(f"HTTP {response.status_code} - {response.reason_phrase}")

        return response.text
