"""
Test configuration and fixtures for the Electricity Price API tests.
Contains shared fixtures, sample ENTSO-E documents and test utilities.
"""

from datetime import datetime, timedelta, timezone
from typing import List

import pytest
from fastapi.testclient import TestClient

from src.config import Settings
from src.main import create_app
from src.models.price import PricePoint
from tests.xml_samples import build_publication_xml


class FakeClock:
    """Manually advanced monotonic clock for cache tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def test_settings():
    """
    Settings with an API key and the background refresh disabled.
    """
    return Settings(
        api_key="test-token",
        refresh_enabled=False,
        cache_ttl_seconds=3600,
        max_cache_size=10,
        log_format="text",
    )


@pytest.fixture
def test_app(test_settings):
    """
    Create a test instance of the FastAPI application.
    """
    return create_app(test_settings)


@pytest.fixture
def test_client(test_app):
    """
    Create a test client for the FastAPI application (runs the lifespan).
    """
    with TestClient(test_app) as client:
        yield client


@pytest.fixture
def day_ahead_xml() -> str:
    """
    One series of 24 hourly prices starting 2024-01-01T00:00Z.
    """
    prices = [round(40.0 + hour * 1.5, 2) for hour in range(24)]
    prices[3] = -2.15  # Negative prices occur in real markets
    return build_publication_xml([{"start": "2024-01-01T00:00Z", "end": "2024-01-02T00:00Z", "prices": prices}])


@pytest.fixture
def sample_price_points() -> List[PricePoint]:
    """
    Create sample price points for the first day of 2024.
    """
    base_time = datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
    return [
        PricePoint(
            timestamp=base_time + timedelta(hours=hour),
            price=40.0 + hour,
            currency="EUR",
            unit="MWH",
        )
        for hour in range(24)
    ]
