from collections.abc import Callable, Iterator

import httpx
import pytest

from collector.app.schemas import Host
from collector.app.services.transport import AuthTransport, Session


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_client() -> Iterator[Callable[[Handler], httpx.Client]]:
    clients: list[httpx.Client] = []

    def _make(handler: Handler) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def make_transport(make_client) -> Callable[[Handler], AuthTransport]:
    def _make(handler: Handler) -> AuthTransport:
        return AuthTransport(make_client(handler), Session(token="fc-token"))

    return _make


@pytest.fixture
def hosts() -> list[Host]:
    return [
        Host(urn="urn:sites:1:hosts:1", name="h1", ip="10.0.0.1"),
        Host(urn="urn:sites:1:hosts:2", name="h2", ip="10.0.0.2"),
    ]
