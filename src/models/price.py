"""
Pydantic data models for price data and API responses.
Defines the structure of decoded price points and the health response.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PricePoint(BaseModel):
    """
    A single hourly day-ahead price decoded from an ENTSO-E publication document.

    Based on the XML structure:
    <TimeSeries>
        <currency_Unit.name>EUR</currency_Unit.name>
        <price_Measure_Unit.name>MWH</price_Measure_Unit.name>
        <Period>
            <timeInterval><start>2024-01-01T23:00Z</start>...</timeInterval>
            <Point><position>1</position><price.amount>42.17</price.amount></Point>
        </Period>
    </TimeSeries>
    """
    timestamp: datetime = Field(
        description="Start of the hour in UTC (period start + (position - 1) hours)"
    )
    price: float = Field(
        description="Price amount from 'price.amount' - can be negative in some markets"
    )
    currency: Optional[str] = Field(
        default=None,
        description="Currency from the series 'currency_Unit.name' (e.g. EUR)"
    )
    unit: Optional[str] = Field(
        default=None,
        description="Measurement unit from the series 'price_Measure_Unit.name' (e.g. MWH)"
    )

    class Config:
        frozen = True


class HealthResponse(BaseModel):
    """
    Health check response model.
    """
    status: str = Field(description="Health status")
    timestamp: datetime = Field(description="Health check timestamp")
    details: Optional[dict] = Field(default=None, description="Additional health details")
