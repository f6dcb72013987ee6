"""Request/response dumps gated by a LogLevel."""

from __future__ import annotations

import json
import logging

from ..logging_config import add_fallback_handler
from ..models.config import LogLevel
from .protocols import HttpResponse, WireRequest

logger = logging.getLogger(__name__)


def pretty_printed_json(data: bytes | None) -> str | None:
    """
    Pretty-print JSON bytes.

    Returns:
        The indented JSON text, or None if data is not valid UTF-8 JSON
    """
    if not data:
        return None
    try:
        return json.dumps(json.loads(data), indent=2, ensure_ascii=False)
    except (ValueError, UnicodeDecodeError):
        return None


class NetworkLogger:
    """
    Logs outgoing requests and incoming responses.

    Output goes through the stdlib logger "lightnet.network". Nothing is
    logged at LogLevel.OFF; DEBUG additionally dumps JSON response bodies.
    All dump lines are emitted at INFO and gated by this instance's own
    log_level, so clients with different levels never affect each other.
    Logging never raises into the request pipeline.

    Example:
        network_logger = NetworkLogger(LogLevel.DEBUG)
        network_logger.log_request(request)
        network_logger.log_response(response, body)
    """

    def __init__(self, log_level: LogLevel = LogLevel.OFF, output: logging.Logger | None = None) -> None:
        self.log_level = log_level
        self._output = output or logging.getLogger("lightnet.network")

        if log_level != LogLevel.OFF:
            # Only lowered to INFO when the application left the level unset
            if self._output.level == logging.NOTSET and not self._output.isEnabledFor(logging.INFO):
                self._output.setLevel(logging.INFO)
            # Make dumps visible when the application configured no logging at all
            if not self._output.hasHandlers():
                target = self._output if output is not None else logging.getLogger("lightnet")
                add_fallback_handler(target)

    def log_request(self, request: WireRequest) -> None:
        """Log a request with its URL, headers, and body."""
        if self.log_level == LogLevel.OFF:
            return
        try:
            lines = [">>> BEGIN REQUEST <<<", f"{request.method.value} '{request.url}'"]
            lines.extend(f"  {key} : {value}" for key, value in request.headers.items())
            if request.body is not None:
                try:
                    lines.append(f"  HttpBody : {request.body.decode('utf-8')}")
                except UnicodeDecodeError:
                    pass
            lines.append(">>> END REQUEST <<<")
            for line in lines:
                self._output.info(line)
        except Exception as e:
            logger.debug(f"Failed to log request: {e}")

    def log_response(self, response: HttpResponse, body: bytes | None) -> None:
        """Log the status code and URL of a response, and its JSON body at DEBUG."""
        if self.log_level == LogLevel.OFF:
            return
        try:
            self._output.info(">>> BEGIN RESPONSE <<<")
            if response.status_code is not None:
                self._output.info(f"{response.status_code} '{response.url}'")
            if self.log_level >= LogLevel.DEBUG:
                self._output.info(pretty_printed_json(body) or "")
            self._output.info(">>> END RESPONSE <<<")
        except Exception as e:
            logger.debug(f"Failed to log response: {e}")
