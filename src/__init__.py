"""
Electricity Price API - cached ENTSO-E day-ahead prices over HTTP

A small service that fetches day-ahead electricity prices from the ENTSO-E
transparency platform and serves them as JSON.

Main components:
- Publication document decoder and price fetcher
- Bounded, time-expiring in-memory cache
- Background refresh scheduler
- Domain exceptions for clear error handling
"""

__version__ = "1.0.0"
