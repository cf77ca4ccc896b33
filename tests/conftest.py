"""Shared test fixtures for the High Connection adapter."""

from __future__ import annotations

import httpx
import pytest

from highconnection import AdapterConfig, ChannelConfig, HighConnectionAdapter, InMemoryStore


class RecordingTransport:
    """httpx mock transport handler that records requests.

    ``outcomes`` are consumed one per request: an int is returned as the
    response status code, an exception is raised as a transport failure.
    Once exhausted, every request gets a 200.
    """

    def __init__(self, outcomes: list[int | Exception] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._outcomes = list(outcomes or [])

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self._outcomes.pop(0) if self._outcomes else 200
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(outcome, text="OK" if outcome < 300 else "ERROR")

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))

    def sent_param(self, name: str) -> list[str]:
        return [request.url.params[name] for request in self.requests]


@pytest.fixture
def channel() -> ChannelConfig:
    return ChannelConfig(
        uuid="8eb23e93-5ecb-45ba-b726-3b064e0c56ab",
        country="FR",
        username="acc_123",
        password="secret_pw",
    )


@pytest.fixture
def adapter_config() -> AdapterConfig:
    return AdapterConfig(domain="courier.example.com")


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore(known_message_ids=[10, 19128317])


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def adapter(store: InMemoryStore, adapter_config: AdapterConfig, transport: RecordingTransport) -> HighConnectionAdapter:
    return HighConnectionAdapter(store, adapter_config, client=transport.client())


@pytest.fixture
def make_transport() -> type[RecordingTransport]:
    """Factory for transports with scripted outcomes."""
    return RecordingTransport
