"""API errors raised by the request pipeline."""

from __future__ import annotations


class APIError(Exception):
    """Base class for every failure surfaced by Network.request/upload."""

    description = "Unknown API error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.description
        super().__init__(self.message)


class NoNetworkError(APIError):
    """The pre-flight reachability check reported no network."""

    description = "No network connection"


class InvalidURLError(APIError):
    """The base URL or the joined endpoint path could not be resolved."""

    description = "Invalid URL"


class EncodingFailedError(APIError):
    """Parameters or body could not be serialized."""

    description = "Failed to encode"


class DecodingFailedError(APIError):
    """The response body was absent or could not be decoded into the requested type."""

    description = "Failed to decode"


class NoResponseError(APIError):
    """The transport produced no usable HTTP response."""

    description = "No response"


class BadStatusCodeError(APIError):
    """The HTTP status code is outside [200, 400)."""

    def __init__(self, status_code: int, body: bytes | None = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Bad status code: {status_code}")


class MissingDataError(APIError):
    """An acceptable response carried no body, but decoding needs one."""

    description = "Missing data"


class UnknownAPIError(APIError):
    """Unexpected gap on the success path."""

    description = "Unknown API error"


class RequestCancelledError(APIError):
    """The request was cancelled through its CancelToken."""

    description = "Request cancelled"
