"""Classify a transport response into a body or an APIError."""

from __future__ import annotations

from .errors import BadStatusCodeError, NoResponseError, UnknownAPIError
from .protocols import HttpResponse

# Accepted status codes: [200, 400)
SUCCESS_STATUS_CODES = range(200, 400)


def validate_response(response: HttpResponse | None) -> bytes:
    """
    Validate the HTTP status code and the existence of a body.

    Args:
        response: Response from the transport, None if nothing was received

    Returns:
        The response body, unchanged

    Raises:
        NoResponseError: No HTTP response / no status code
        BadStatusCodeError: Status outside [200, 400)
        UnknownAPIError: Acceptable status but no body
    """
    if response is None or response.status_code is None:
        raise NoResponseError()

    if response.status_code not in SUCCESS_STATUS_CODES:
        raise BadStatusCodeError(response.status_code, response.content)

    if response.content is None:
        raise UnknownAPIError()

    return response.content
