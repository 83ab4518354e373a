"""
FastAPI route handlers for the price endpoints.
Serves cached day-ahead prices, fetching from ENTSO-E on a cache miss.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from src.cache.ttl_cache import CURRENT_PRICES_KEY, BoundedTTLCache, range_cache_key
from src.exceptions import PriceAPIException, ValidationError
from src.logging_config import get_logger
from src.models.price import HealthResponse, PricePoint
from src.scheduler.refresh_scheduler import RefreshScheduler
from src.services.price_fetcher import PriceFetcher
from src.utils.time_utils import day_ahead_window, parse_utc_datetime, utc_now

logger = get_logger(__name__)

router = APIRouter()


def get_cache(request: Request) -> BoundedTTLCache:
    """FastAPI dependency: the cache created at application startup."""
    return request.app.state.cache


def get_fetcher(request: Request) -> PriceFetcher:
    """FastAPI dependency: the ENTSO-E price fetcher."""
    return request.app.state.fetcher


def get_scheduler(request: Request) -> Optional[RefreshScheduler]:
    """FastAPI dependency: the background refresh scheduler, if configured."""
    return getattr(request.app.state, "scheduler", None)


def validate_range_params(start_date: Optional[str], end_date: Optional[str]) -> Tuple[datetime, datetime]:
    """
    Validate and parse the range query parameters.

    Raises:
        ValidationError: If a parameter is missing or not a valid date
    """
    if not start_date or not end_date:
        raise ValidationError("startDate and endDate parameters are required")

    try:
        start = parse_utc_datetime(start_date)
        end = parse_utc_datetime(end_date)
    except ValueError:
        raise ValidationError("Invalid date format")

    return start, end


@router.get("/health", response_model=HealthResponse)
async def health_check(
    cache: BoundedTTLCache = Depends(get_cache),
    scheduler: Optional[RefreshScheduler] = Depends(get_scheduler),
):
    """
    Health check endpoint for monitoring and load balancers.
    Reports cache statistics and whether the background refresh is running.
    """
    details = {
        "service": "electricity-price-api",
        "cache": cache.stats(),
        "scheduler_running": scheduler.is_running if scheduler else False,
        "last_refresh": scheduler.last_refresh.isoformat() if scheduler and scheduler.last_refresh else None,
    }

    return HealthResponse(
        status="healthy",
        timestamp=utc_now(),
        details=details
    )


@router.get("/prices/current", response_model=List[PricePoint])
async def get_current_prices(
    cache: BoundedTTLCache = Depends(get_cache),
    fetcher: PriceFetcher = Depends(get_fetcher),
):
    """
    Day-ahead prices for the next 24 hours in the default domain.

    Served from the cache when a fresh entry exists; otherwise fetched and cached.

    Raises:
        HTTPException: 500 if configuration, fetching or decoding fails.
    """
    data = cache.get(CURRENT_PRICES_KEY)
    if data is not None:
        return data

    start, end = day_ahead_window()
    try:
        data = await fetcher.fetch_prices(start, end)
    except PriceAPIException as e:
        logger.error("Price API error", error=str(e), endpoint="current")
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error("Unexpected error", error=str(e), endpoint="current")
        raise HTTPException(status_code=500, detail=str(e))

    cache.put(CURRENT_PRICES_KEY, data)
    return data


@router.get("/prices/range", response_model=List[PricePoint])
async def get_price_range(
    start_date: Optional[str] = Query(
        default=None,
        alias="startDate",
        description="Start of the window (ISO date or datetime, UTC if no offset)"
    ),
    end_date: Optional[str] = Query(
        default=None,
        alias="endDate",
        description="End of the window (ISO date or datetime, UTC if no offset)"
    ),
    domain: Optional[str] = Query(
        default=None,
        description="ENTSO-E bidding zone code. Defaults to Finland (10YFI-1--------U)."
    ),
    cache: BoundedTTLCache = Depends(get_cache),
    fetcher: PriceFetcher = Depends(get_fetcher),
):
    """
    Day-ahead prices for a custom window and optional domain.

    Raises:
        HTTPException: 400 for missing or invalid dates, 500 if fetching fails.
    """
    try:
        start, end = validate_range_params(start_date, end_date)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    cache_key = range_cache_key(start_date, end_date, domain)
    data = cache.get(cache_key)
    if data is not None:
        return data

    try:
        data = await fetcher.fetch_prices(start, end, domain or None)
    except PriceAPIException as e:
        logger.error("Price API error", error=str(e), start_date=start_date, end_date=end_date, domain=domain)
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error("Unexpected error", error=str(e), start_date=start_date, end_date=end_date, domain=domain)
        raise HTTPException(status_code=500, detail=str(e))

    cache.put(cache_key, data)
    return data
