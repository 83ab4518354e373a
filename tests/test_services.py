"""
Unit tests for the price fetcher.
Tests URL construction, the single upstream request and error propagation.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch
from urllib.parse import parse_qsl, urlsplit

import httpx
import pytest

from src.config import Settings
from src.exceptions import ConfigurationError, DataFetchError, DecodeError, NetworkError
from src.services.price_fetcher import PriceFetcher
from src.utils.time_utils import format_entsoe_timestamp
from tests.xml_samples import build_acknowledgement_xml

START = datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
END = datetime(2024, 1, 2, 0, 0, tzinfo=timezone.utc)


def _mock_async_client(mock_client_cls, response=None, side_effect=None):
    """Wire a patched httpx.AsyncClient so that client.get() returns the response."""
    client = AsyncMock()
    if side_effect is not None:
        client.get.side_effect = side_effect
    else:
        client.get.return_value = response
    mock_client_cls.return_value.__aenter__.return_value = client
    return client


def _response(status_code: int, text: str = "") -> httpx.Response:
    return httpx.Response(status_code, text=text, request=httpx.Request("GET", "https://example.test/api"))


class TestTimestampFormatting:
    """Tests for the ENTSO-E period format."""

    def test_format_utc(self):
        assert format_entsoe_timestamp(datetime(2024, 1, 5, 7, 3, tzinfo=timezone.utc)) == "202401050703"

    def test_format_converts_offsets_to_utc(self):
        cet = timezone(timedelta(hours=2))
        assert format_entsoe_timestamp(datetime(2024, 6, 1, 2, 30, tzinfo=cet)) == "202406010030"

    def test_format_naive_is_utc(self):
        assert format_entsoe_timestamp(datetime(2024, 12, 31, 23, 0)) == "202412312300"


class TestPriceFetcher:
    """Tests for the PriceFetcher."""

    @pytest.fixture
    def price_fetcher(self, test_settings):
        """Create a PriceFetcher instance for testing."""
        return PriceFetcher(test_settings)

    def test_build_request_url(self, price_fetcher):
        """Test ENTSO-E URL construction."""
        url = price_fetcher.build_request_url(START, END, "10YFI-1--------U")

        parts = urlsplit(url)
        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://web-api.tp.entsoe.eu/api"
        assert parse_qsl(parts.query) == [
            ("securityToken", "test-token"),
            ("documentType", "A44"),
            ("out_Domain", "10YFI-1--------U"),
            ("in_Domain", "10YFI-1--------U"),
            ("periodStart", "202401010000"),
            ("periodEnd", "202401020000"),
        ]

    def test_build_request_url_requires_api_key(self):
        fetcher = PriceFetcher(Settings(api_key="", refresh_enabled=False))

        with pytest.raises(ConfigurationError, match="API_KEY"):
            fetcher.build_request_url(START, END, "10YFI-1--------U")

    @pytest.mark.asyncio
    async def test_fetch_prices_success(self, price_fetcher, day_ahead_xml):
        """Test a successful fetch decodes the response body."""
        with patch("src.services.price_fetcher.httpx.AsyncClient") as mock_client_cls:
            client = _mock_async_client(mock_client_cls, _response(200, day_ahead_xml))

            points = await price_fetcher.fetch_prices(START, END)

        assert len(points) == 24
        assert points[0].timestamp == START
        client.get.assert_called_once()
        requested_url = client.get.call_args.args[0]
        assert "in_Domain=10YFI-1--------U" in requested_url
        assert "out_Domain=10YFI-1--------U" in requested_url

    @pytest.mark.asyncio
    async def test_fetch_prices_custom_domain(self, price_fetcher, day_ahead_xml):
        with patch("src.services.price_fetcher.httpx.AsyncClient") as mock_client_cls:
            client = _mock_async_client(mock_client_cls, _response(200, day_ahead_xml))

            await price_fetcher.fetch_prices(START, END, "10YSE-1--------K")

        requested_url = client.get.call_args.args[0]
        assert "in_Domain=10YSE-1--------K" in requested_url
        assert "out_Domain=10YSE-1--------K" in requested_url

    @pytest.mark.asyncio
    async def test_missing_api_key_makes_no_request(self):
        fetcher = PriceFetcher(Settings(api_key="", refresh_enabled=False))

        with patch("src.services.price_fetcher.httpx.AsyncClient") as mock_client_cls:
            with pytest.raises(ConfigurationError):
                await fetcher.fetch_prices(START, END)

        mock_client_cls.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_2xx_response(self, price_fetcher):
        """A non-2xx response is a NetworkError carrying status and reason; no retry."""
        with patch("src.services.price_fetcher.httpx.AsyncClient") as mock_client_cls:
            client = _mock_async_client(mock_client_cls, _response(401, "Unauthorized"))

            with pytest.raises(NetworkError, match="HTTP 401 - Unauthorized"):
                await price_fetcher.fetch_prices(START, END)

        assert client.get.call_count == 1

    @pytest.mark.asyncio
    async def test_transport_error(self, price_fetcher):
        with patch("src.services.price_fetcher.httpx.AsyncClient") as mock_client_cls:
            client = _mock_async_client(mock_client_cls, side_effect=httpx.ConnectError("Connection refused"))

            with pytest.raises(NetworkError, match="Connection refused"):
                await price_fetcher.fetch_prices(START, END)

        assert client.get.call_count == 1

    @pytest.mark.asyncio
    async def test_decode_error_propagates(self, price_fetcher):
        with patch("src.services.price_fetcher.httpx.AsyncClient") as mock_client_cls:
            _mock_async_client(mock_client_cls, _response(200, build_acknowledgement_xml("No matching data found")))

            with pytest.raises(DecodeError) as exc_info:
                await price_fetcher.fetch_prices(START, END)

        assert isinstance(exc_info.value, DataFetchError)

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, price_fetcher):
        with patch("src.services.price_fetcher.httpx.AsyncClient") as mock_client_cls, \
                patch("src.services.price_fetcher.logger") as mock_logger:
            _mock_async_client(mock_client_cls, _response(500, "boom"))

            with pytest.raises(NetworkError):
                await price_fetcher.fetch_prices(START, END)

        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.kwargs["error"] == "HTTP 500 - Internal Server Error"
