import json

import httpx
import pytest
from fastapi.testclient import TestClient

from maps_proxy.config import Settings
from maps_proxy.http_client import HttpClient
from maps_proxy.main import create_app
from maps_proxy.services.facility_store import InMemoryKeyValueStore

FRONTEND_KEY = "frontend-key"
SERVER_KEY = "server-key"


class Upstream:
    """Records outbound requests and answers them with a canned response."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.json_body = {"status": "OK", "results": []}
        self.text_body = None
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text_body is not None:
            return httpx.Response(self.status_code, text=self.text_body)
        return httpx.Response(self.status_code, content=json.dumps(self.json_body).encode())

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def settings():
    return Settings(maps_api_key=FRONTEND_KEY, server_api_key=SERVER_KEY)


@pytest.fixture
def make_client(upstream):
    clients = []

    def _make(settings, store=None):
        http_client = HttpClient(transport=httpx.MockTransport(upstream.handler))
        client = TestClient(create_app(settings=settings, http_client=http_client, store=store))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, settings, store):
    return make_client(settings, store)


@pytest.fixture
def client_without_store(make_client, settings):
    return make_client(settings, None)
