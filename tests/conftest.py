"""Pytest configuration and fixtures for api-data-explorer tests."""

import json
from collections.abc import Callable

import httpx
import pytest

from api_data_explorer.clients import DummyJsonClient, JsonPlaceholderClient
from api_data_explorer.controller import DataFetchController
from api_data_explorer.strategies import build_strategies

JSONPLACEHOLDER_URL = "https://jsonplaceholder.test"
DUMMYJSON_URL = "https://dummyjson.test"

TOPICS = ["cats", "dogs", "Phones", "weather"]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "e2e: End-to-end tests against the real public APIs")
    config.addinivalue_line("markers", "slow: Tests that take longer to run")


def make_posts(count: int = 100) -> list[dict]:
    return [
        {
            "id": i,
            "userId": (i - 1) // 10 + 1,
            "title": f"post {i} about {TOPICS[i % len(TOPICS)]}",
            "body": f"body text number {i}",
        }
        for i in range(1, count + 1)
    ]


def make_users() -> list[dict]:
    companies = ["Romaguera-Crona", "Deckow-Crist", "Keebler LLC", "Robel-Corkery", "Keebler LLC"]
    return [
        {
            "id": i,
            "name": f"User Number{i}",
            "email": f"user{i}@example.org",
            "phone": "1-770-736-8031",
            "website": "example.org",
            "address": {"city": f"City{i}"},
            "company": {"name": companies[i % len(companies)]},
        }
        for i in range(1, 11)
    ]


def make_products(count: int = 30) -> list[dict]:
    products = []
    for i in range(1, count + 1):
        if i % 3 == 0:
            title, description = f"iPhone {i}", "A smart phone"
        elif i % 5 == 0:
            title, description = f"Case {i}", "Fits any PHONE model"
        else:
            title, description = f"Lamp {i}", "Warm light for the desk"
        products.append({"id": i, "title": title, "description": description, "price": 10 * i, "rating": 4.5, "category": "misc"})
    return products


def make_quotes(count: int = 40) -> list[dict]:
    authors = ["Rumi", "Seneca", "Lao Tzu", "Marcus Aurelius"]
    return [{"id": i, "quote": f"Quote {i} on {'love' if i % 2 else 'time'}", "author": authors[i % len(authors)]} for i in range(1, count + 1)]


class FakeRemote:
    """In-memory stand-in for JSONPlaceholder and DummyJSON behind an httpx.MockTransport."""

    def __init__(self):
        self.posts = make_posts()
        self.users = make_users()
        self.products = make_products()
        self.quotes = make_quotes()
        self.requests: list[httpx.Request] = []
        self.failure: Callable[[httpx.Request], httpx.Response] | None = None

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def fail_with_status(self, status: int) -> None:
        self.failure = lambda request: httpx.Response(status, json={"message": "nope"})

    def fail_with(self, exc_type: type[httpx.TransportError]) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_type("simulated", request=request)

        self.failure = _raise

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.failure is not None:
            return self.failure(request)
        if request.url.host == "jsonplaceholder.test":
            return self._jsonplaceholder(request)
        return self._dummyjson(request)

    def _jsonplaceholder(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/posts":
            if request.method == "POST":
                return httpx.Response(201, json={"id": 101, **_json(request)})
            return httpx.Response(200, json=self.posts)
        if path == "/users":
            return httpx.Response(200, json=self.users)
        if path.startswith("/posts/"):
            return _by_id(self.posts, path)
        if path.startswith("/users/"):
            return _by_id(self.users, path)
        if path == "/comments":
            return httpx.Response(200, json=[{"id": 1, "postId": int(request.url.params.get("postId", 1))}])
        return httpx.Response(404, json={})

    def _dummyjson(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        params = request.url.params
        limit = int(params.get("limit", 30))
        skip = int(params.get("skip", 0))
        if path == "/products":
            return _envelope("products", self.products, limit, skip)
        if path == "/products/search":
            q = params.get("q", "").lower()
            matched = [p for p in self.products if q in p["title"].lower() or q in p["description"].lower()]
            return _envelope("products", matched, limit, skip)
        if path == "/quotes":
            return _envelope("quotes", self.quotes, limit, skip)
        if path.startswith("/products/"):
            return _by_id(self.products, path)
        if path.startswith("/quotes/"):
            return _by_id(self.quotes, path)
        return httpx.Response(404, json={})


def _json(request: httpx.Request) -> dict:
    return json.loads(request.content or b"{}")


def _by_id(items: list[dict], path: str) -> httpx.Response:
    item_id = int(path.rsplit("/", 1)[1])
    for item in items:
        if item["id"] == item_id:
            return httpx.Response(200, json=item)
    return httpx.Response(404, json={})


def _envelope(key: str, items: list[dict], limit: int, skip: int) -> httpx.Response:
    return httpx.Response(200, json={key: items[skip : skip + limit], "total": len(items), "skip": skip, "limit": limit})


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def jsonplaceholder(remote):
    return JsonPlaceholderClient(base_url=JSONPLACEHOLDER_URL, transport=remote.transport)


@pytest.fixture
def dummyjson(remote):
    return DummyJsonClient(base_url=DUMMYJSON_URL, transport=remote.transport)


@pytest.fixture
async def controller(jsonplaceholder, dummyjson):
    ctrl = DataFetchController(build_strategies(jsonplaceholder, dummyjson), clients=(jsonplaceholder, dummyjson))
    yield ctrl
    await ctrl.aclose()
