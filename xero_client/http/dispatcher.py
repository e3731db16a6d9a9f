"""Request dispatcher for the remote accounting API.

Builds signed, compressed, correctly typed requests, sends them on the calling
thread and turns every outcome that carries a server response into a
``Response``. JSON is requested for reads; writes default to an XML body.
"""

import time
from collections.abc import Callable
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any

import httpx
import structlog

from xero_client.auth.models import ApiUser, Consumer
from xero_client.config.constants import (
    DEFAULT_ACCEPT,
    DEFAULT_ACCEPT_ENCODING,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_WRITE_CONTENT_TYPE,
    RATE_EXCEEDED_CODE,
    RATE_LIMIT_MARKER,
    USER_AGENT_PREFIX,
)
from xero_client.config.settings import Settings
from xero_client.core.http_client import HTTPClientFactory
from xero_client.core.interfaces import Signer, Throttle
from xero_client.exceptions import ConfigurationError
from xero_client.hooks import ApiCallEvent, HookEvent, HookManager
from xero_client.hooks.implementations import ApiCallCallback, CallbackHook, LoggingHook

from .multipart import encode_single_part
from .response import Response


logger = structlog.get_logger(__name__)


RequestBuilder = Callable[[], httpx.Request]


class HttpDispatcher:
    """Issues HTTP calls against the remote API.

    One dispatcher is created per API session and reused for all of its calls.
    Custom headers, ``modified_since``, ``user_agent`` and ``user`` are plain
    instance state; set them before sharing the dispatcher between threads.
    """

    def __init__(
        self,
        base_url: str,
        signer: Signer | None = None,
        consumer: Consumer | None = None,
        user: ApiUser | None = None,
        throttle: Throttle | None = None,
        *,
        client: httpx.Client | None = None,
        hook_manager: HookManager | None = None,
        accept_encoding: str = DEFAULT_ACCEPT_ENCODING,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            base_url: Scheme and host of the remote API
            signer: Computes the Authorization value; requests go unsigned without one
            consumer: Application identity
            user: User identity
            throttle: Rate limiter gating every request
            client: Transport to send requests with; one is created and owned when omitted
            hook_manager: Receives the API_CALLED notification
            accept_encoding: Accept-Encoding value sent with every request

        Raises:
            ConfigurationError: If ``base_url`` is blank
        """
        if not base_url or not base_url.strip():
            raise ConfigurationError("base_url cannot be empty")

        self._base_url = base_url.strip()
        self._signer = signer
        self._consumer = consumer
        self._throttle = throttle
        self._headers: dict[str, str] = {}
        self._accept_encoding = accept_encoding

        self.user = user
        self.modified_since: datetime | None = None
        self.user_agent: str | None = None

        self._owns_client = client is None
        self._client = client if client is not None else HTTPClientFactory.create_client()
        self.hook_manager = hook_manager if hook_manager is not None else HookManager()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        signer: Signer | None = None,
        user: ApiUser | None = None,
        throttle: Throttle | None = None,
        **kwargs: Any,
    ) -> "HttpDispatcher":
        """Build a dispatcher from configuration.

        The consumer comes from ``consumer_key``/``consumer_secret`` and completed
        calls are logged through a ``LoggingHook``.
        """
        consumer = None
        if settings.consumer_key:
            consumer = Consumer(
                consumer_key=settings.consumer_key,
                consumer_secret=settings.consumer_secret,
            )

        accept_encoding = kwargs.pop("accept_encoding", settings.http.accept_encoding)
        owns_client = kwargs.get("client") is None
        if owns_client:
            kwargs["client"] = HTTPClientFactory.create_client(settings=settings.http)

        dispatcher = cls(
            settings.base_url,
            signer=signer,
            consumer=consumer,
            user=user,
            throttle=throttle,
            accept_encoding=accept_encoding,
            **kwargs,
        )
        dispatcher._owns_client = owns_client
        dispatcher.user_agent = settings.user_agent
        dispatcher.hook_manager.register(LoggingHook())
        return dispatcher

    # ==================== Configuration ====================

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def consumer(self) -> Consumer | None:
        return self._consumer

    @property
    def headers(self) -> dict[str, str]:
        """A copy of the custom headers applied to every request."""
        return dict(self._headers)

    def add_header(self, name: str, value: str) -> None:
        """Register a header for all subsequent requests; the last value wins."""
        self._headers[name] = value

    def subscribe(self, callback: ApiCallCallback) -> CallbackHook:
        """Call ``callback`` with an ``ApiCallEvent`` after every completed call.

        Returns:
            The registered hook, for ``unsubscribe``
        """
        hook = CallbackHook(callback)
        self.hook_manager.register(hook)
        return hook

    def unsubscribe(self, hook: CallbackHook) -> None:
        self.hook_manager.unregister(hook)

    def close(self) -> None:
        """Close the transport if this dispatcher created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpDispatcher":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    # ==================== Public calls ====================

    def get(self, endpoint: str, query: str | None = None) -> Response:
        return self.make_call(
            endpoint, lambda: self.create_request(endpoint, "GET", query=query)
        )

    def get_raw(
        self, endpoint: str, mime_type: str, query: str | None = None
    ) -> Response:
        """GET ``endpoint`` accepting ``mime_type`` instead of JSON (e.g. a PDF)."""
        return self.make_call(
            endpoint,
            lambda: self.create_request(endpoint, "GET", accept=mime_type, query=query),
        )

    def delete(self, endpoint: str) -> Response:
        return self.make_call(endpoint, lambda: self.create_request(endpoint, "DELETE"))

    def post(
        self,
        endpoint: str,
        data: str | bytes,
        content_type: str = DEFAULT_WRITE_CONTENT_TYPE,
        query: str | None = None,
    ) -> Response:
        return self._write(endpoint, data, "POST", content_type, query)

    def put(
        self,
        endpoint: str,
        data: str | bytes,
        content_type: str = DEFAULT_WRITE_CONTENT_TYPE,
        query: str | None = None,
    ) -> Response:
        return self._write(endpoint, data, "PUT", content_type, query)

    def post_multipart_form(
        self,
        endpoint: str,
        content_type: str,
        name: str,
        filename: str,
        payload: bytes,
    ) -> Response:
        """POST ``payload`` as the single part of a multipart/form-data body.

        Args:
            endpoint: Target path
            content_type: Media type of the payload
            name: Form field name
            filename: File name reported to the server
            payload: Raw file bytes
        """

        def build() -> httpx.Request:
            body = encode_single_part(payload, content_type, name, filename)
            return self.create_request(
                endpoint,
                "POST",
                content=body.content,
                content_headers={
                    "Content-Type": body.content_type,
                    "Content-Length": str(len(body)),
                    "Connection": "close",
                },
            )

        return self.make_call(endpoint, build)

    def _write(
        self,
        endpoint: str,
        data: str | bytes,
        method: str,
        content_type: str,
        query: str | None,
    ) -> Response:
        content = data.encode("utf-8") if isinstance(data, str) else data

        return self.make_call(
            endpoint,
            lambda: self.create_request(
                endpoint,
                method,
                query=query,
                content=content,
                content_headers={
                    "Content-Type": content_type,
                    "Content-Length": str(len(content)),
                },
            ),
        )

    # ==================== Request building ====================

    def build_url(self, endpoint: str, query: str | None = None) -> httpx.URL:
        """Replace the base address path with ``endpoint`` and its query with ``query``.

        A blank ``query`` leaves the URL without a query component. ``?`` and
        ``#`` inside ``endpoint`` are escaped as part of the path.
        """
        path = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        path = path.replace("?", "%3F").replace("#", "%23")
        target = str(httpx.URL(self._base_url).copy_with(path=path)).split("?", 1)[0]
        if query is not None and query.strip():
            target = f"{target}?{query.strip().lstrip('?')}"
        return httpx.URL(target)

    def create_request(
        self,
        endpoint: str,
        method: str,
        accept: str = DEFAULT_ACCEPT,
        query: str | None = None,
        *,
        content: bytes | None = None,
        content_headers: dict[str, str] | None = None,
    ) -> httpx.Request:
        """Build a signed request ready to send.

        Blocks on the throttle, when one is configured, before returning.

        Args:
            endpoint: Path on the remote API
            method: HTTP method
            accept: Media type for the Accept header
            query: Raw query string replacing any query on the base address
            content: Request body
            content_headers: Body headers such as Content-Type and Content-Length

        Raises:
            Whatever the signer or throttle raises
        """
        url = self.build_url(endpoint, query)

        headers = httpx.Headers()
        headers["Accept-Encoding"] = self._accept_encoding
        headers["Accept"] = accept

        if self.modified_since is not None:
            headers["If-Modified-Since"] = _format_http_date(self.modified_since)

        if self._signer is not None:
            signature = self._signer.get_signature(
                self._consumer, self.user, url, method, self._consumer
            )
            self.add_header("Authorization", signature)

        for name, value in self._headers.items():
            headers[name] = value

        headers["User-Agent"] = self._resolve_user_agent()

        if content_headers:
            for name, value in content_headers.items():
                headers[name] = value

        request = self._client.build_request(
            method,
            url,
            content=content,
            headers=headers,
            timeout=httpx.Timeout(DEFAULT_TIMEOUT_SECONDS),
        )

        if self._throttle is not None:
            self._throttle.wait_until_limit()

        return request

    def _resolve_user_agent(self) -> str:
        if self.user_agent and self.user_agent.strip():
            return self.user_agent
        if self._consumer is None:
            return USER_AGENT_PREFIX
        return f"{USER_AGENT_PREFIX} - {self._consumer.consumer_key}"

    # ==================== Dispatch ====================

    def make_call(self, endpoint: str, build_request: RequestBuilder) -> Response:
        """Build, send and normalize one request.

        Any response the server sent, success or not, comes back as a
        ``Response`` and fires API_CALLED once. Errors while building the
        request and transport failures without a response propagate and fire
        nothing.
        """
        started = time.perf_counter()

        request = build_request()
        method = request.method
        logger.debug("sending_request", method=method, url=str(request.url))

        try:
            http_response = self._client.send(request, follow_redirects=True)
            http_response.raise_for_status()
        except httpx.HTTPStatusError as e:
            response = Response(e.response)
            elapsed_ms = _elapsed_ms(started)
            logger.warning(
                "api_call_http_error",
                endpoint=endpoint,
                method=method,
                status_code=response.status_code,
            )
            self._notify(
                endpoint,
                method,
                elapsed_ms,
                _failure_code(response),
                response,
                body=response.body,
            )
            return response
        except httpx.TransportError as e:
            logger.warning(
                "transport_error",
                endpoint=endpoint,
                method=method,
                elapsed_ms=_elapsed_ms(started),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        response = Response(http_response)
        elapsed_ms = _elapsed_ms(started)
        self._notify(endpoint, method, elapsed_ms, response.status_name, response)
        return response

    def _notify(
        self,
        endpoint: str,
        method: str,
        elapsed_ms: int,
        response_code: str,
        response: Response,
        body: str | None = None,
    ) -> None:
        event = ApiCallEvent(
            endpoint=endpoint,
            method=method,
            elapsed_ms=elapsed_ms,
            response_code=response_code,
            body=body,
        )
        self.hook_manager.emit(
            HookEvent.API_CALLED,
            event.model_dump(),
            call=event,
            response=response,
        )


def _failure_code(response: Response) -> str:
    # The reported code only; the Response keeps its real 503
    if response.status_code == 503 and RATE_LIMIT_MARKER in response.body:
        return RATE_EXCEEDED_CODE
    return response.status_name


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _format_http_date(value: datetime) -> str:
    """Format as an IMF-fixdate; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)
