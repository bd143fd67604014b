"""HTTP transport for the Apliiq API."""

from apliiq.infrastructure.http.transport import (
    HttpTransport,
    TransportFailure,
    TransportResponse,
)

__all__ = ["HttpTransport", "TransportFailure", "TransportResponse"]
