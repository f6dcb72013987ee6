"""Shared HTTP building blocks: methods, header keys, parameter aliases."""

from enum import Enum
from typing import Any

# Parameters encoded into the query string or the request body
Parameters = dict[str, Any]

HTTPHeaders = dict[str, str]

FORM_URLENCODED = "application/x-www-form-urlencoded; charset=utf-8"
JSON_CONTENT_TYPE = "application/json"
MULTIPART_FORM_DATA = "multipart/form-data"


class HTTPMethod(str, Enum):
    """HTTP request method of an Endpoint."""

    GET = "GET"
    POST = "POST"


class HTTPHeaderKey:
    """Common HTTP header keys."""

    ACCEPT_ENCODING = "Accept-Encoding"
    CONTENT_TYPE = "Content-Type"
