"""
Services package for the Electricity Price API.
Contains the ENTSO-E price fetcher and the publication document decoder.
"""

from .price_fetcher import PriceFetcher
from .xml_decoder import decode_publication_document

__all__ = [
    "PriceFetcher",
    "decode_publication_document",
]
