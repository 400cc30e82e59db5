"""
Quadency exchange adapter.

This package provides Quadency QUADX integration over REST: request
signing, error mapping and data normalization.

Components:
    - QuadencySigner: Builds and signs requests
    - QuadencyNormalizer: Data format converter
    - QuadencyErrorMapper: HTTP status and body to typed exceptions
    - QuadencyRestClient: aiohttp transport
    - QuadencyAdapter: Main adapter implementing ExchangeAdapter interface

Example:
    >>> from quadency_connector.adapters.quadency import QuadencyAdapter
    >>> from quadency_connector.config.loader import load_config
    >>>
    >>> config = load_config()
    >>> adapter = QuadencyAdapter(config.get_exchange("quadency"))
    >>> markets = await adapter.load_markets()
    >>> await adapter.close()
"""

from quadency_connector.adapters.quadency.adapter import QuadencyAdapter
from quadency_connector.adapters.quadency.errors import QuadencyErrorMapper
from quadency_connector.adapters.quadency.normalizer import QuadencyNormalizer
from quadency_connector.adapters.quadency.rest import HttpResponse, QuadencyRestClient
from quadency_connector.adapters.quadency.signer import QuadencySigner, SignedRequest

__all__ = [
    "HttpResponse",
    "QuadencyAdapter",
    "QuadencyErrorMapper",
    "QuadencyNormalizer",
    "QuadencyRestClient",
    "QuadencySigner",
    "SignedRequest",
]
