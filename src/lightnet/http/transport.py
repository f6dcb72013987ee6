"""aiohttp-backed transport with per-call upload progress."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from types import TracebackType

import aiohttp
from multidict import CIMultiDict
from yarl import URL

from .errors import InvalidURLError, NoResponseError
from .protocols import HttpResponse, ProgressCallback, WireRequest

logger = logging.getLogger(__name__)


def _report_progress(on_progress: ProgressCallback, sent: int, total: int) -> None:
    """Invoke a progress callback, skipping unknown totals and swallowing callback errors."""
    if total <= 0:
        return
    try:
        on_progress(sent / total)
    except Exception as e:
        logger.warning(f"Upload progress callback failed: {e}")


async def _stream_body(body: bytes, chunk_size: int, on_progress: ProgressCallback) -> AsyncIterator[bytes]:
    """
    Yield the body in chunks, reporting sent/total after each chunk is consumed.

    The generator resumes only when the transport asks for the next chunk,
    so each report follows the write of the previous one.
    """
    total = len(body)
    sent = 0
    for start in range(0, total, chunk_size):
        chunk = body[start : start + chunk_size]
        yield chunk
        sent += len(chunk)
        _report_progress(on_progress, sent, total)


class AiohttpTransport:
    """
    Sends WireRequests over a shared aiohttp session.

    The session is created lazily on first use and is safe for concurrent
    requests. Progress callbacks are passed per call, so concurrent uploads
    never share progress state.

    Example:
        async with AiohttpTransport() as transport:
            response = await transport.send(request)
            print(response.status_code)
    """

    def __init__(
        self,
        user_agent: str | None = None,
        connection_limit: int = 100,
        connection_limit_per_host: int = 10,
    ) -> None:
        """
        Initialize the transport.

        Args:
            user_agent: Optional User-Agent header for every request
            connection_limit: Total connection limit of the pool
            connection_limit_per_host: Per-host connection limit of the pool
        """
        self._user_agent = user_agent
        self._connection_limit = connection_limit
        self._connection_limit_per_host = connection_limit_per_host
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AiohttpTransport:
        """Enter async context and create session."""
        self._get_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        await self.aclose()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self._connection_limit,
                limit_per_host=self._connection_limit_per_host,
                ttl_dns_cache=300,
            )
            headers = {"User-Agent": self._user_agent} if self._user_agent else None
            self._session = aiohttp.ClientSession(connector=connector, headers=headers)
        return self._session

    async def aclose(self) -> None:
        """Close the session if one was opened."""
        if self._session:
            await self._session.close()
            self._session = None

    async def send(
        self,
        request: WireRequest,
        *,
        on_progress: ProgressCallback | None = None,
        chunk_size: int = 64 * 1024,
    ) -> HttpResponse:
        """
        Send a request and read the full response body.

        Args:
            request: The request to send
            on_progress: Optional callback receiving sent/total after each body chunk
            chunk_size: Chunk size used when streaming the body for progress

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            InvalidURLError: If aiohttp rejects the URL
            NoResponseError: On connection errors and timeouts
        """
        session = self._get_session()
        headers: CIMultiDict[str] = CIMultiDict(request.headers)

        data: bytes | AsyncIterator[bytes] | None = request.body
        if on_progress is not None and request.body:
            # Explicit length keeps aiohttp from switching to chunked encoding
            headers["Content-Length"] = str(len(request.body))
            data = _stream_body(request.body, chunk_size, on_progress)

        try:
            async with session.request(
                request.method.value,
                URL(request.url, encoded=True),
                headers=headers,
                data=data,
                timeout=aiohttp.ClientTimeout(total=request.timeout),
                allow_redirects=True,
            ) as response:
                content = await response.read()
                return HttpResponse(
                    status_code=response.status,
                    content=content,
                    content_type=response.headers.get("Content-Type", ""),
                    headers=dict(response.headers),
                    url=str(response.url),
                )
        except aiohttp.InvalidURL as e:
            raise InvalidURLError(f"Invalid URL: {request.url}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"Transport error for {request.method.value} {request.url}: {e!r}")
            raise NoResponseError(f"No response from {request.url}: {e}") from e
