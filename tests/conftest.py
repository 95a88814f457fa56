import json

import httpx
import pytest

from api_client import ShopApi
from config import ClientConfig
from token_storage import AUTH_TOKEN_KEY, MemoryStorage

BASE_URL = "http://shop.test"


class Recorder:
    """MockTransport handler that keeps every request and replays one canned response."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.text = ""

    def respond(self, status_code: int = 200, body=None, text: str = ""):
        self.status_code = status_code
        self.text = json.dumps(body) if body is not None else text

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.text)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def make_api(recorder, storage):
    def factory(**overrides):
        values = {"base_url": BASE_URL, "storage": storage, "transport": httpx.MockTransport(recorder)}
        values.update(overrides)
        return ShopApi(ClientConfig(**values))

    return factory


@pytest.fixture
def api(make_api):
    return make_api()


@pytest.fixture
def logged_in(storage):
    storage.set_item(AUTH_TOKEN_KEY, "tok-123")
    return storage
