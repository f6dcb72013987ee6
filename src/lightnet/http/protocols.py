"""Protocol definitions for the transport and reachability collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Protocol

from multidict import CIMultiDict

from ..models.components import HTTPMethod

# Receives the fraction of the request body sent so far, 0.0 - 1.0
ProgressCallback = Callable[[float], None]


@dataclass
class WireRequest:
    """
    Fully resolved request ready for the transport.

    Built once per call by build_request() and not reused.

    Attributes:
        url: Absolute URL including the encoded query string
        method: HTTP method
        headers: Case-insensitive headers; assignment replaces existing values
        body: Encoded body bytes, or None for no body
        timeout: Total request timeout in seconds
    """

    url: str
    method: HTTPMethod = HTTPMethod.GET
    headers: CIMultiDict[str] = field(default_factory=CIMultiDict)
    body: Optional[bytes] = None
    timeout: float = 20.0


@dataclass(frozen=True)
class HttpResponse:
    """
    Immutable HTTP response returned by a Transport.

    Attributes:
        status_code: HTTP status code, None when no HTTP response was received
        content: Raw response content as bytes, None when there was no body
        content_type: Content-Type header value
        headers: All response headers
        url: Final URL after any redirects
    """

    status_code: Optional[int]
    content: Optional[bytes]
    content_type: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""


class ConnectionStatus(str, Enum):
    """Answer of a reachability oracle."""

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class Transport(Protocol):
    """
    Protocol for HTTP transports.

    This abstraction allows for:
    - Mock implementations in tests
    - Different backends (aiohttp, httpx, etc.)
    """

    async def send(
        self,
        request: WireRequest,
        *,
        on_progress: ProgressCallback | None = None,
        chunk_size: int = 64 * 1024,
    ) -> HttpResponse:
        """
        Send a request and read the full response body.

        Args:
            request: The request to send
            on_progress: Optional per-call upload progress callback
            chunk_size: Body chunk size used when reporting progress

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            NoResponseError on transport-level failures
        """
        ...

    async def aclose(self) -> None:
        """Release the underlying session."""
        ...


class ReachabilityOracle(Protocol):
    """Answers whether the network is currently reachable."""

    def connection_status(self) -> ConnectionStatus:
        ...
