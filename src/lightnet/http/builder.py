"""Turn an Endpoint (plus optional upload) into a WireRequest."""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Callable, Optional
from urllib.parse import quote, urlsplit, urlunsplit

from multidict import CIMultiDict

from ..models.components import (
    FORM_URLENCODED,
    JSON_CONTENT_TYPE,
    MULTIPART_FORM_DATA,
    HTTPHeaderKey,
    Parameters,
)
from ..models.endpoint import Endpoint
from ..models.upload import UploadInfo
from .errors import EncodingFailedError, InvalidURLError
from .protocols import WireRequest

logger = logging.getLogger(__name__)

# Characters allowed unescaped in query values: RFC 3986 unreserved only
UNRESERVED_SAFE = "-._~"

# Characters left alone when the endpoint path is joined to the base URL
PATH_SAFE = "/%:@!$&'()*+,;=-._~"


def new_boundary() -> str:
    """Generate a multipart boundary: 'Boundary=' followed by an upper-case UUID."""
    return f"Boundary={str(uuid.uuid4()).upper()}"


def stringify(value: Any) -> str:
    """
    Render a parameter value as text.

    Booleans and None use their JSON spelling so that query strings and
    multipart fields match what a JSON body would carry.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def percent_encode(value: Any) -> str:
    """
    Percent-encode a value leaving only [A-Za-z0-9-._~] unescaped.

    Examples:
        >>> percent_encode("a b")
        'a%20b'
        >>> percent_encode("x&y=z")
        'x%26y%3Dz'
    """
    return quote(stringify(value), safe=UNRESERVED_SAFE)


def encode_query(params: Parameters) -> str:
    """Encode parameters as a query string, one entry per key in insertion order."""
    return "&".join(f"{percent_encode(key)}={percent_encode(value)}" for key, value in params.items())


def join_url(base_url: str, path: str) -> str:
    """
    Append an endpoint path to a base URL as a path component.

    Args:
        base_url: Absolute http(s) URL, optionally with a path prefix
        path: Relative endpoint path, with or without a leading slash

    Returns:
        The joined absolute URL without a query string

    Raises:
        InvalidURLError: If base_url does not parse or cannot be joined
    """
    try:
        parts = urlsplit(base_url.strip())
        # Accessing port validates it
        parts.port
    except (ValueError, AttributeError) as e:
        raise InvalidURLError(f"Invalid URL: {base_url!r}") from e

    if not parts.scheme or not parts.netloc:
        raise InvalidURLError(f"Invalid URL: {base_url!r} has no scheme or host")
    if parts.query or parts.fragment:
        raise InvalidURLError(f"Invalid URL: cannot join a path onto {base_url!r}")

    base_path = parts.path.rstrip("/")
    endpoint_path = quote(path.lstrip("/"), safe=PATH_SAFE) if path else ""
    joined = f"{base_path}/{endpoint_path}" if endpoint_path else base_path or "/"
    return urlunsplit((parts.scheme, parts.netloc, joined, "", ""))


def build_multipart_body(params: Optional[Parameters], upload_info: UploadInfo, boundary: str) -> bytes:
    """
    Build a multipart/form-data body: one part per parameter, then the file part.

    Args:
        params: Optional form fields sent before the file
        upload_info: Upload whose data is sent as the "file" part
        boundary: Boundary string shared with the Content-Type header

    Returns:
        The encoded body bytes
    """
    upload_type = upload_info.type
    body = bytearray()

    for key, value in (params or {}).items():
        body += f"--{boundary}\r\n".encode()
        body += f'Content-Disposition: form-data; name="{key}"\r\n\r\n'.encode()
        body += f"{stringify(value)}\r\n".encode()

    body += f"--{boundary}\r\n".encode()
    body += (
        f'Content-Disposition: form-data; name="{upload_type.field_name}"; '
        f'filename="{upload_type.placeholder_name}"\r\n'
    ).encode()
    body += f"Content-Type: {upload_type.mime_type}\r\n\r\n".encode()
    body += upload_info.data or b""
    body += b"\r\n"
    body += f"--{boundary}--\r\n".encode()

    return bytes(body)


def build_request(
    endpoint: Endpoint,
    base_url: str,
    timeout: float,
    upload_info: Optional[UploadInfo] = None,
    *,
    default_headers: Optional[dict[str, str]] = None,
    boundary_factory: Callable[[], str] = new_boundary,
) -> WireRequest:
    """
    Build the wire request for an endpoint.

    Header precedence, lowest to highest: default headers, the form-urlencoded
    default for URL parameters, application/json for body parameters (both only
    when no Content-Type is present yet), endpoint headers, and finally the
    multipart Content-Type which always wins when upload data is present.

    Args:
        endpoint: Declarative description of the call
        base_url: Base URL the endpoint path is appended to
        timeout: Total request timeout in seconds
        upload_info: Optional upload; its data turns the body into multipart
        default_headers: Client-wide headers with the lowest precedence
        boundary_factory: Generates the multipart boundary

    Returns:
        A fresh WireRequest

    Raises:
        InvalidURLError: If the URL cannot be built
        EncodingFailedError: If body parameters cannot be serialized
    """
    url = join_url(base_url, endpoint.path)
    headers: CIMultiDict[str] = CIMultiDict(default_headers or {})
    body: Optional[bytes] = None

    if endpoint.url_params:
        url = f"{url}?{encode_query(endpoint.url_params)}"
        if HTTPHeaderKey.CONTENT_TYPE not in headers:
            headers[HTTPHeaderKey.CONTENT_TYPE] = FORM_URLENCODED

    boundary: Optional[str] = None
    if upload_info is not None and upload_info.has_data:
        boundary = boundary_factory()
        body = build_multipart_body(endpoint.body_params, upload_info, boundary)
    elif endpoint.body_params:
        try:
            body = json.dumps(endpoint.body_params, indent=2, ensure_ascii=False, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingFailedError(f"Failed to encode body parameters: {e}") from e
        if HTTPHeaderKey.CONTENT_TYPE not in headers:
            headers[HTTPHeaderKey.CONTENT_TYPE] = JSON_CONTENT_TYPE

    for key, value in endpoint.http_headers.items():
        headers[key] = value

    if boundary is not None:
        headers[HTTPHeaderKey.CONTENT_TYPE] = f"{MULTIPART_FORM_DATA}; boundary={boundary}"

    logger.debug(f"Built {endpoint.http_method.value} request for {url}")

    return WireRequest(
        url=url,
        method=endpoint.http_method,
        headers=headers,
        body=body,
        timeout=timeout,
    )
