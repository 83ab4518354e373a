"""
API package for the Electricity Price API.
Contains FastAPI route handlers and their dependencies.
"""

from .routes import router

__all__ = [
    "router",
]
