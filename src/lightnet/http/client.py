"""Network client: connectivity check, build, send, log, validate."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from types import TracebackType
from typing import Callable, TypeVar

from pydantic import ValidationError

from ..models.config import LogLevel, NetworkConfig
from ..models.endpoint import Endpoint
from ..models.upload import UploadInfo
from .builder import build_request
from .decoding import decode_json
from .errors import InvalidURLError, MissingDataError, NoNetworkError, RequestCancelledError
from .logger import NetworkLogger
from .protocols import (
    ConnectionStatus,
    HttpResponse,
    ProgressCallback,
    ReachabilityOracle,
    Transport,
    WireRequest,
)
from .reachability import RouteReachability, connection_status
from .transport import AiohttpTransport
from .validator import validate_response

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancelToken:
    """
    Cancels in-flight requests it was passed to.

    Example:
        token = CancelToken()
        task = asyncio.create_task(network.request(endpoint, cancel_token=token))
        token.cancel()  # task fails with RequestCancelledError
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


class Network:
    """
    Makes requests described by Endpoints and returns raw response bodies.

    Each call runs: reachability check -> build request -> log -> send ->
    log response -> validate. Every failure surfaces as an APIError
    subclass; nothing is retried.

    Example:
        async with Network("https://api.example.com", LogLevel.INFO) as network:
            data = await network.request(Endpoint("/api/ping", url_params={"q": "a b"}))
            user = await network.request_model(Endpoint("/api/user/1"), User)
    """

    def __init__(
        self,
        config: NetworkConfig | str,
        log_level: LogLevel | str | None = None,
        *,
        transport: Transport | None = None,
        reachability: Callable[[], ReachabilityOracle] = RouteReachability,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: A NetworkConfig, or a base URL string
            log_level: Logger verbosity (default: OFF). Only allowed with a
                base URL string; a NetworkConfig carries its own log_level
            transport: Transport to send requests with (default: AiohttpTransport)
            reachability: Factory for the reachability oracle queried before each call

        Raises:
            InvalidURLError: If config is a string that is not a valid base URL
            ValueError: If log_level is invalid, or is given together with a NetworkConfig
        """
        if isinstance(config, str):
            try:
                config = NetworkConfig(
                    base_url=config,
                    log_level=log_level if log_level is not None else LogLevel.OFF,
                )
            except ValidationError as e:
                if any(error["loc"][:1] == ("base_url",) for error in e.errors()):
                    raise InvalidURLError(f"Invalid base URL: {config!r}") from e
                raise
        elif log_level is not None:
            raise ValueError("log_level cannot be combined with a NetworkConfig; set NetworkConfig.log_level instead")
        self.config = config

        self._network_logger = NetworkLogger(config.log_level)
        self._reachability = reachability
        self._owns_transport = transport is None
        self._transport: Transport = (
            transport if transport is not None else AiohttpTransport(user_agent=config.user_agent)
        )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def log_level(self) -> LogLevel:
        return self.config.log_level

    async def __aenter__(self) -> Network:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.aclose()

    async def request(
        self,
        endpoint: Endpoint,
        timeout: float | None = None,
        *,
        cancel_token: CancelToken | None = None,
    ) -> bytes:
        """
        Perform a request and return the raw response body.

        Args:
            endpoint: Description of the call; later mutation does not affect it
            timeout: Total timeout in seconds (default: config.timeouts.request)
            cancel_token: Optional token to cancel the call

        Returns:
            The response body (usually JSON)

        Raises:
            APIError subclass describing the failure
        """
        return await self._perform(
            endpoint,
            timeout if timeout is not None else self.config.timeouts.request,
            cancel_token=cancel_token,
        )

    async def upload(
        self,
        upload_info: UploadInfo,
        endpoint: Endpoint,
        timeout: float | None = None,
        progress: ProgressCallback | None = None,
        *,
        cancel_token: CancelToken | None = None,
    ) -> bytes:
        """
        Upload data as multipart/form-data and return the raw response body.

        Body parameters of the endpoint become form fields before the file
        part. Without upload data the call is a plain request.

        Args:
            upload_info: File category and bytes to upload
            endpoint: Description of the call
            timeout: Total timeout in seconds (default: config.timeouts.upload)
            progress: Called with the fraction sent (0.0 - 1.0) after each chunk
            cancel_token: Optional token to cancel the call

        Returns:
            The response body

        Raises:
            APIError subclass describing the failure
        """
        return await self._perform(
            endpoint,
            timeout if timeout is not None else self.config.timeouts.upload,
            upload_info=upload_info,
            progress=progress,
            cancel_token=cancel_token,
        )

    async def request_model(
        self,
        endpoint: Endpoint,
        model: type[T],
        timeout: float | None = None,
        *,
        cancel_token: CancelToken | None = None,
    ) -> T:
        """
        Perform a request and decode the JSON body into ``model``.

        Raises:
            MissingDataError: If the response body is empty
            DecodingFailedError: If the body does not decode into ``model``
        """
        data = await self.request(endpoint, timeout, cancel_token=cancel_token)
        if not data:
            raise MissingDataError()
        return decode_json(data, model)

    def is_network_available(self) -> bool:
        """Query the reachability oracle."""
        return connection_status(self._reachability) == ConnectionStatus.AVAILABLE

    async def _perform(
        self,
        endpoint: Endpoint,
        timeout: float,
        *,
        upload_info: UploadInfo | None = None,
        progress: ProgressCallback | None = None,
        cancel_token: CancelToken | None = None,
    ) -> bytes:
        if cancel_token is not None and cancel_token.cancelled:
            raise RequestCancelledError()

        if self.config.check_connectivity and not self.is_network_available():
            raise NoNetworkError()

        request = build_request(
            endpoint.snapshot(),
            self.config.base_url,
            timeout,
            upload_info,
            default_headers=self.config.default_headers,
        )
        self._network_logger.log_request(request)

        response = await self._send(request, progress, cancel_token)

        self._network_logger.log_response(response, response.content)
        return validate_response(response)

    async def _send(
        self,
        request: WireRequest,
        progress: ProgressCallback | None,
        cancel_token: CancelToken | None,
    ) -> HttpResponse:
        send = self._transport.send(request, on_progress=progress, chunk_size=self.config.upload_chunk_size)
        if cancel_token is None:
            return await send

        send_task = asyncio.ensure_future(send)
        cancel_task = asyncio.ensure_future(cancel_token.wait())
        try:
            done, _ = await asyncio.wait({send_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancel_task.cancel()
            if not send_task.done():
                send_task.cancel()

        if send_task in done:
            return send_task.result()

        with contextlib.suppress(asyncio.CancelledError):
            await send_task
        logger.debug(f"Cancelled {request.method.value} {request.url}")
        raise RequestCancelledError()


def request_blocking(
    config: NetworkConfig | str,
    endpoint: Endpoint,
    timeout: float | None = None,
    **kwargs: object,
) -> bytes:
    """
    Blocking request for sync code that can't use async/await.

    WARNING: Do not call from within an existing event loop (e.g., Jupyter,
    asyncio-based frameworks). Use the async Network API instead.

    Args:
        config: A NetworkConfig, or a base URL string
        endpoint: Description of the call
        timeout: Total timeout in seconds
        **kwargs: Additional keyword arguments passed to Network

    Returns:
        The response body
    """
    try:
        asyncio.get_running_loop()
        raise RuntimeError("request_blocking() called from async context. Use 'async with Network()' instead.")
    except RuntimeError as e:
        if "no running event loop" not in str(e).lower():
            raise

    async def _run() -> bytes:
        async with Network(config, **kwargs) as network:  # type: ignore[arg-type]
            return await network.request(endpoint, timeout)

    return asyncio.run(_run())
