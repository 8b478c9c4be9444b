"""Bitvora API client, request/response models and errors."""

from .client import BitvoraClient, ClientConfig
from .errors import (
    BitvoraError,
    BitvoraTransportError,
    BitvoraAPIError,
    BitvoraDeserializationError,
)

__all__ = [
    "BitvoraClient",
    "ClientConfig",
    "BitvoraError",
    "BitvoraTransportError",
    "BitvoraAPIError",
    "BitvoraDeserializationError",
]
