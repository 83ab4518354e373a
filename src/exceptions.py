"""
Domain exceptions for the Electricity Price API.
Provides clear, typed exceptions for fetch, decode and request errors.
"""


class PriceAPIException(Exception):
    """Base exception for all Electricity Price API errors."""
    pass


class ConfigurationError(PriceAPIException):
    """Raised when required configuration (e.g. the API key) is missing."""
    pass


class DataFetchError(PriceAPIException):
    """Raised when fetching price data from the provider fails."""
    pass


class NetworkError(DataFetchError):
    """Raised on transport failures or non-2xx responses from the provider."""
    pass


class DecodeError(DataFetchError):
    """Raised when the provider's XML document cannot be decoded."""
    pass


class ValidationError(PriceAPIException):
    """Raised when request query parameters are missing or malformed."""
    pass
