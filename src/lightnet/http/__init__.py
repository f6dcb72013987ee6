"""Request building, transport, and response validation for lightnet."""

from .errors import (
    APIError,
    BadStatusCodeError,
    DecodingFailedError,
    EncodingFailedError,
    InvalidURLError,
    MissingDataError,
    NoNetworkError,
    NoResponseError,
    RequestCancelledError,
    UnknownAPIError,
)
from .builder import build_multipart_body, build_request, encode_query, percent_encode
from .client import CancelToken, Network, request_blocking
from .decoding import JSONParser, decode_json
from .logger import NetworkLogger, pretty_printed_json
from .protocols import (
    ConnectionStatus,
    HttpResponse,
    ProgressCallback,
    ReachabilityOracle,
    Transport,
    WireRequest,
)
from .reachability import RouteReachability, StaticReachability, connection_status
from .transport import AiohttpTransport
from .validator import validate_response

__all__ = [
    # Errors
    "APIError",
    "BadStatusCodeError",
    "DecodingFailedError",
    "EncodingFailedError",
    "InvalidURLError",
    "MissingDataError",
    "NoNetworkError",
    "NoResponseError",
    "RequestCancelledError",
    "UnknownAPIError",
    # Building
    "build_multipart_body",
    "build_request",
    "encode_query",
    "percent_encode",
    # Client
    "CancelToken",
    "Network",
    "request_blocking",
    # Decoding
    "JSONParser",
    "decode_json",
    # Logging
    "NetworkLogger",
    "pretty_printed_json",
    # Protocols
    "ConnectionStatus",
    "HttpResponse",
    "ProgressCallback",
    "ReachabilityOracle",
    "Transport",
    "WireRequest",
    # Collaborators
    "AiohttpTransport",
    "RouteReachability",
    "StaticReachability",
    "connection_status",
    "validate_response",
]
