"""Lightnet request and configuration models."""

from .components import (
    FORM_URLENCODED,
    JSON_CONTENT_TYPE,
    MULTIPART_FORM_DATA,
    HTTPHeaderKey,
    HTTPHeaders,
    HTTPMethod,
    Parameters,
)
from .config import BaseURL, LogLevel, NetworkConfig, TimeoutConfig
from .endpoint import Endpoint
from .upload import UploadInfo, UploadType

__all__ = [
    # Components
    "FORM_URLENCODED",
    "JSON_CONTENT_TYPE",
    "MULTIPART_FORM_DATA",
    "HTTPHeaderKey",
    "HTTPHeaders",
    "HTTPMethod",
    "Parameters",
    # Config
    "BaseURL",
    "LogLevel",
    "NetworkConfig",
    "TimeoutConfig",
    # Requests
    "Endpoint",
    "UploadInfo",
    "UploadType",
]
