"""
Core request/response plumbing based on httpx.

Client owns the base URL and the authenticated httpx client. It builds
requests relative to the base URL, sends them, turns non-2xx answers into
HTTPStatusError and hands bodies to the decoder.
"""
import inspect
import json
import logging
import time
from typing import Any, AsyncIterator, Dict, Optional, Tuple

import httpx
from pydantic import BaseModel, ValidationError

from ..config import ClientConfig
from ..exceptions import (
    DecodeError,
    HTTPStatusError,
    InvalidPathError,
    RequestBuildError,
    TransportError,
)
from ..models import ErrorResponse
from ..transport import create_http_client
from ..types import DiagnosticsEvent, EventHook, HttpMethod
from .decoder import body_snippet, decoder_for

logger = logging.getLogger(__name__)

# Constants
LOG_PREFIX = "[artifactory:client]"
MEDIA_TYPE_JSON = "application/json"


def _json_default(value: Any) -> Any:
    """json.dumps fallback for pydantic models nested in plain containers."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _parse_error_envelope(body: bytes) -> Optional[ErrorResponse]:
    if not body:
        return None
    try:
        parsed = ErrorResponse.model_validate_json(body)
    except ValidationError:
        return None
    return parsed if parsed.errors else None


class Client:
    """
    Shared request builder and dispatcher.

    Created once per server/credential pair and shared by every service. The
    configuration never changes after construction, so one instance can be
    used from concurrent coroutines.

    Args:
        config: resolved client configuration
        http_client: pre-configured httpx client; when omitted one is built from
            ``config`` (auth, timeouts, TLS) and closed by ``close()``
        on_event: optional hook receiving ``request:start``, ``request:end`` and
            ``request:error`` diagnostics events
        logger: logger to use instead of the module logger
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        on_event: Optional[EventHook] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._base_url = httpx.URL(config.base_url)
        self._http = http_client if http_client is not None else create_http_client(config)
        self._own_client = http_client is None
        self._on_event = on_event
        self._logger = logger or logging.getLogger(__name__)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._own_client and not self._http.is_closed:
            await self._http.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Request building
    # -------------------------------------------------------------------------

    def resolve_url(self, path: str) -> httpx.URL:
        """Join ``path`` onto the base URL.

        Leading slashes on ``path`` are ignored so the result is always the base
        URL, one slash, then the path.

        Raises:
            InvalidPathError: if the result is not beneath the base URL
        """
        relative = str(path).lstrip("/")
        try:
            url = self._base_url.join(relative)
        except (httpx.InvalidURL, ValueError) as e:
            raise RequestBuildError(f"Cannot join path '{path}' to {self._base_url}: {e}") from e

        if not str(url).startswith(str(self._base_url)):
            raise InvalidPathError(str(path), str(self._base_url))
        return url

    def new_request(
        self,
        method: HttpMethod,
        path: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Request:
        """Build a request for ``path`` relative to the base URL.

        ``bytes``/``str`` bodies, async iterables and file-like objects are sent
        as they are. Any other value is marshalled to JSON.
        """
        url = self.resolve_url(path)
        content = self._encode_body(body)
        return self._http.build_request(method, url, content=content, headers=headers)

    def new_json_encoded_request(
        self,
        method: HttpMethod,
        path: str,
        value: Any,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Request:
        """Marshal ``value`` to JSON and build a request with a JSON content type."""
        merged = {"Content-Type": MEDIA_TYPE_JSON}
        if headers:
            merged.update(headers)
        return self.new_request(method, path, self._marshal(value), merged)

    def _encode_body(self, body: Any) -> Any:
        if body is None:
            return None
        if isinstance(body, (bytes, str)):
            return body
        if isinstance(body, (bytearray, memoryview)):
            return bytes(body)
        if hasattr(body, "__aiter__"):
            return body
        if hasattr(body, "read"):
            return self._iter_reader(body)
        return self._marshal(body)

    async def _iter_reader(self, reader: Any) -> AsyncIterator[bytes]:
        while True:
            chunk = reader.read(self._config.chunk_size)
            if inspect.isawaitable(chunk):
                chunk = await chunk
            if not chunk:
                break
            yield chunk.encode("utf-8") if isinstance(chunk, str) else chunk

    @staticmethod
    def _marshal(value: Any) -> bytes:
        try:
            if isinstance(value, BaseModel):
                return value.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
            return json.dumps(value, default=_json_default).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise RequestBuildError(f"Cannot marshal request body to JSON: {e}") from e

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    async def do(self, request: httpx.Request, sink: Any = None) -> httpx.Response:
        """Send ``request`` without decoding the body.

        With no ``sink`` the live response is returned with its body unread; the
        caller must drain and close it. With a ``sink`` (anything with a sync or
        async ``write``) the body is streamed into it chunk by chunk and the
        closed response is returned.

        Raises:
            HTTPStatusError: non-2xx status
            TransportError: no response could be obtained
        """
        if sink is not None and not hasattr(sink, "write"):
            raise RequestBuildError(f"Sink of type {type(sink).__name__} has no write()")

        response = await self._send(request)
        if sink is None:
            return response

        try:
            async for chunk in response.aiter_bytes(chunk_size=self._config.chunk_size):
                written = sink.write(chunk)
                if inspect.isawaitable(written):
                    await written
        except httpx.RequestError as e:
            raise TransportError(f"Reading body of {request.method} {request.url}: {e}", request) from e
        finally:
            await response.aclose()
        return response

    async def do_json(self, request: httpx.Request, target: Any) -> Tuple[Any, httpx.Response]:
        """Send ``request``, buffer the body and decode it into ``target``.

        ``target`` is a type (pydantic model, ``List[Model]``, ``str``...) or a
        Decoder instance. A non-2xx status raises HTTPStatusError before any
        decoding is attempted.

        Raises:
            HTTPStatusError: non-2xx status
            TransportError: no response could be obtained
            DecodeError: body does not fit ``target``; the response is on ``.response``
        """
        decoder = decoder_for(target)
        response = await self._send(request)
        try:
            body = await response.aread()
        except httpx.RequestError as e:
            raise TransportError(f"Reading body of {request.method} {request.url}: {e}", request) from e
        finally:
            await response.aclose()
        try:
            return decoder.decode(body), response
        except DecodeError as e:
            e.response = response
            raise

    async def _send(self, request: httpx.Request) -> httpx.Response:
        started = time.perf_counter()
        self._emit("request:start", request)
        self._logger.debug(f"{LOG_PREFIX} Request: {request.method} {request.url}")

        try:
            response = await self._http.send(request, stream=True)
        except httpx.RequestError as e:
            self._emit("request:error", request, duration=time.perf_counter() - started, error=e)
            self._logger.error(f"{LOG_PREFIX} Request failed: {request.method} {request.url}: {e}")
            raise TransportError(f"{request.method} {request.url}: {e}", request) from e

        duration = time.perf_counter() - started
        if response.is_success:
            try:
                self._emit("request:end", request, status=response.status_code, duration=duration)
            except Exception:
                await response.aclose()
                raise
            self._logger.debug(
                f"{LOG_PREFIX} Response: {response.status_code} {request.method} {request.url} "
                f"({duration * 1000:.1f}ms)"
            )
            return response

        # The status error is raised even when the error body cannot be read
        try:
            body = await response.aread()
        except httpx.RequestError as e:
            self._logger.warning(f"{LOG_PREFIX} Could not read error body of {request.url}: {e}")
            body = b""
        finally:
            await response.aclose()

        error = HTTPStatusError(response, _parse_error_envelope(body), body_snippet(body))
        self._emit("request:error", request, status=response.status_code, duration=duration, error=error)
        self._logger.warning(f"{LOG_PREFIX} {error}")
        raise error

    def _emit(
        self,
        name: str,
        request: httpx.Request,
        status: Optional[int] = None,
        duration: Optional[float] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        if self._on_event is None:
            return
        self._on_event(
            DiagnosticsEvent(
                name=name,
                timestamp=time.time(),
                method=request.method,
                url=str(request.url),
                status=status,
                duration=duration,
                error=error,
            )
        )
