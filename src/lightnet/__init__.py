"""
lightnet - Lightweight async HTTP client for declarative endpoints.

Usage:
    from lightnet import Endpoint, HTTPMethod, LogLevel, Network

    endpoint = Endpoint("/api/items", http_method=HTTPMethod.POST)
    endpoint.add_body_param("name", "lamp")

    async with Network("https://api.example.com", LogLevel.INFO) as network:
        data = await network.request(endpoint)
"""

__version__ = "1.0.0"

from .http import (
    AiohttpTransport,
    APIError,
    BadStatusCodeError,
    CancelToken,
    ConnectionStatus,
    DecodingFailedError,
    EncodingFailedError,
    InvalidURLError,
    JSONParser,
    MissingDataError,
    Network,
    NoNetworkError,
    NoResponseError,
    RequestCancelledError,
    RouteReachability,
    StaticReachability,
    UnknownAPIError,
    decode_json,
    request_blocking,
)
from .logging_config import setup_logging
from .models import (
    Endpoint,
    HTTPHeaderKey,
    HTTPMethod,
    LogLevel,
    NetworkConfig,
    TimeoutConfig,
    UploadInfo,
    UploadType,
)

__all__ = [
    "__version__",
    # Core
    "Network",
    "request_blocking",
    "CancelToken",
    # Requests
    "Endpoint",
    "HTTPHeaderKey",
    "HTTPMethod",
    "UploadInfo",
    "UploadType",
    # Config
    "LogLevel",
    "NetworkConfig",
    "TimeoutConfig",
    "setup_logging",
    # Decoding
    "JSONParser",
    "decode_json",
    # Collaborators
    "AiohttpTransport",
    "ConnectionStatus",
    "RouteReachability",
    "StaticReachability",
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
]
