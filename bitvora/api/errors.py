"""Exceptions raised by the Bitvora API client."""

from typing import Optional


class BitvoraError(Exception):
    """Base exception for Bitvora errors."""
    pass


class BitvoraTransportError(BitvoraError):
    """
    Raised when the request never produced an HTTP response.

    Covers connection refused, DNS, TLS and timeout failures, and URLs
    httpx refuses to build (e.g. an identifier with control characters). The
    underlying httpx exception is kept on ``cause``.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class BitvoraAPIError(BitvoraError):
    """
    Raised when the API answers with a non-2xx status.

    ``body`` is the response text exactly as received. It is not parsed.
    """

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Bad request ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class BitvoraDeserializationError(BitvoraError):
    """Raised when a 2xx response body does not match the expected schema."""

    def __init__(self, cause: Exception, body: str):
        super().__init__(f"Serialization error: {cause}")
        self.cause = cause
        self.body = body
