"""
Data models package for the Electricity Price API.
Contains Pydantic models for price points and API responses.
"""

from .price import HealthResponse, PricePoint

__all__ = [
    "PricePoint",
    "HealthResponse",
]
