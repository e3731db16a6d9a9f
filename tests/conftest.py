"""Shared test fixtures for xero_client tests.

The remote API is faked with ``httpx.MockTransport``; every other component
is real.
"""

from collections.abc import Callable
from typing import Any

import httpx
import pytest
import structlog

from xero_client.auth import ApiUser, Consumer
from xero_client.config.settings import get_settings
from xero_client.hooks import ApiCallEvent
from xero_client.http import HttpDispatcher


BASE_URL = "https://api.example.test"


class FakeApi:
    """Request handler recording requests and replaying queued outcomes."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._outcomes: list[httpx.Response | Exception] = []
        self.on_request: Callable[[httpx.Request], None] | None = None

    def respond(
        self,
        status_code: int = 200,
        text: str = "",
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> None:
        if content is not None:
            self._outcomes.append(
                httpx.Response(status_code, content=content, headers=headers)
            )
        else:
            self._outcomes.append(httpx.Response(status_code, text=text, headers=headers))

    def fail(self, error: Exception) -> None:
        self._outcomes.append(error)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.on_request is not None:
            self.on_request(request)
        outcome = self._outcomes.pop(0) if self._outcomes else httpx.Response(200, text="{}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def http_client(fake_api: FakeApi) -> httpx.Client:
    client = httpx.Client(transport=httpx.MockTransport(fake_api))
    yield client
    client.close()


@pytest.fixture
def consumer() -> Consumer:
    return Consumer(consumer_key="CONSUMERKEY123", consumer_secret="s3cret")


@pytest.fixture
def api_user() -> ApiUser:
    return ApiUser(name="jane", organisation_id="org-1")


@pytest.fixture
def make_dispatcher(
    http_client: httpx.Client, consumer: Consumer, api_user: ApiUser
) -> Callable[..., HttpDispatcher]:
    """Factory building dispatchers bound to the fake API."""

    def _make(**kwargs: Any) -> HttpDispatcher:
        kwargs.setdefault("consumer", consumer)
        kwargs.setdefault("user", api_user)
        kwargs.setdefault("client", http_client)
        return HttpDispatcher(BASE_URL, **kwargs)

    return _make


@pytest.fixture
def dispatcher(make_dispatcher: Callable[..., HttpDispatcher]) -> HttpDispatcher:
    return make_dispatcher()


@pytest.fixture
def call_events(dispatcher: HttpDispatcher) -> list[ApiCallEvent]:
    """Events received by a subscriber of ``dispatcher``."""
    events: list[ApiCallEvent] = []
    dispatcher.subscribe(events.append)
    return events


@pytest.fixture(autouse=True)
def clear_settings_cache() -> None:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_structlog() -> None:
    yield
    structlog.reset_defaults()
