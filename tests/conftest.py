"""Shared test fixtures for offline-notifier."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio

from offline_notifier.models import Jid, MessageType, NotifierConfig, OfflineMessageEvent


def make_event(**kwargs: Any) -> OfflineMessageEvent:
    """Factory for OfflineMessageEvent with sensible defaults."""
    defaults: dict[str, Any] = {
        "from_": "alice@example.com",
        "to": "bob@example.com",
        "message_id": "123",
        "body": "hi",
        "type": MessageType.CHAT,
    }
    defaults.update(kwargs)
    for key in ("from_", "to"):
        if isinstance(defaults[key], str):
            defaults[key] = Jid.parse(defaults[key])
    return OfflineMessageEvent(**defaults)


class RecordingTransport:
    """Collects outgoing requests and answers with a fixed status."""

    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code)


@pytest.fixture
def event_factory() -> Callable[..., OfflineMessageEvent]:
    return make_event


@pytest.fixture
def default_config() -> NotifierConfig:
    return NotifierConfig()


@pytest.fixture
def recorder() -> RecordingTransport:
    return RecordingTransport()


@pytest_asyncio.fixture
async def recording_client(recorder: RecordingTransport) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
        yield client


@pytest_asyncio.fixture
async def refusing_client() -> AsyncIterator[httpx.AsyncClient]:
    """Client whose every request fails as if the connection were refused."""

    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(_refuse)) as client:
        yield client
