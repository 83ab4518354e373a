"""
Scheduler package for the Electricity Price API.
Contains the background refresh of current prices.
"""

from .refresh_scheduler import RefreshScheduler

__all__ = [
    "RefreshScheduler",
]
