"""Async Python client for the Bitvora Bitcoin/Lightning API."""

from .api import (
    BitvoraClient,
    ClientConfig,
    BitvoraError,
    BitvoraTransportError,
    BitvoraAPIError,
    BitvoraDeserializationError,
)

__version__ = "0.1.0"

__all__ = [
    "BitvoraClient",
    "ClientConfig",
    "BitvoraError",
    "BitvoraTransportError",
    "BitvoraAPIError",
    "BitvoraDeserializationError",
]
