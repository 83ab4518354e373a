"""
Cache package for the Electricity Price API.
Contains the bounded, time-expiring price cache and its key helpers.
"""

from .ttl_cache import CURRENT_PRICES_KEY, BoundedTTLCache, CacheEntry, range_cache_key

__all__ = [
    "BoundedTTLCache",
    "CacheEntry",
    "CURRENT_PRICES_KEY",
    "range_cache_key",
]
