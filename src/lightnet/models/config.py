"""Pydantic configuration models for lightnet clients."""

from enum import IntEnum
from typing import Any, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field


class LogLevel(IntEnum):
    """
    Verbosity of the network logger.

    Ordered OFF < INFO < DEBUG. INFO dumps requests and response status
    lines; DEBUG additionally pretty-prints JSON response bodies.
    """

    OFF = 0
    INFO = 1
    DEBUG = 2

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> Any:
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(cls.parse)

    @classmethod
    def parse(cls, v: Any) -> "LogLevel":
        """
        Parse a log level from a member, an int or a name.

        Examples:
            >>> LogLevel.parse("debug")
            <LogLevel.DEBUG: 2>
            >>> LogLevel.parse(1)
            <LogLevel.INFO: 1>
        """
        if isinstance(v, cls):
            return v
        if isinstance(v, int) and not isinstance(v, bool):
            try:
                return cls(v)
            except ValueError as err:
                raise ValueError(f"Invalid log level: {v}") from err
        if isinstance(v, str):
            try:
                return cls[v.strip().upper()]
            except KeyError as err:
                raise ValueError(f"Invalid log level: {v}. Use 'off', 'info' or 'debug'.") from err
        raise ValueError(f"Invalid log level: {v!r}")


class BaseURL(str):
    """
    Absolute http(s) URL every endpoint path is appended to.

    Accepts strings with an http or https scheme and a host, e.g.
    'https://api.example.com' or 'http://localhost:8080/v1'.
    """

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> Any:
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(cls._parse)

    @classmethod
    def _parse(cls, v: Any) -> str:
        if not isinstance(v, str):
            raise ValueError(f"Base URL must be a string, got {type(v).__name__}")
        v = v.strip()
        try:
            parsed = urlparse(v)
        except ValueError as err:
            raise ValueError(f"Invalid base URL: {v}") from err
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"Invalid base URL scheme: {v}. Use http:// or https://")
        if not parsed.netloc:
            raise ValueError(f"Base URL has no host: {v}")
        return v


class TimeoutConfig(BaseModel):
    """Default per-call timeouts in seconds."""

    request: float = Field(20.0, gt=0, description="Timeout for plain requests")
    upload: float = Field(60.0, gt=0, description="Timeout for multipart uploads")

    model_config = {"extra": "forbid", "frozen": True}


class NetworkConfig(BaseModel):
    """
    Root configuration model for a Network client.

    Example:
        config = NetworkConfig(
            base_url="https://api.example.com",
            log_level="debug",
            timeouts={"request": 10.0},
        )
        network = Network(config)
    """

    base_url: BaseURL = Field(..., description="Base URL endpoint paths are appended to")
    log_level: LogLevel = Field(LogLevel.OFF, description="Network logger verbosity (off, info, debug)")
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    check_connectivity: bool = Field(
        True,
        description="Fail fast with NoNetworkError when the reachability oracle reports no network",
    )
    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")
    default_headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers sent with every request; endpoint headers take precedence",
    )
    upload_chunk_size: int = Field(
        64 * 1024,
        ge=1024,
        description="Chunk size in bytes used to stream upload bodies for progress reporting",
    )

    model_config = {"extra": "forbid", "frozen": True}
