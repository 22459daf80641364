"""Per-source fetch strategies.

Each Source maps to one strategy that knows how to turn a Query into a Result
against its backend:

- ClientFilteredStrategy: the backend only returns whole collections, so
  filtering and paging happen in memory.
- ServerSearchStrategy: the backend pages and searches, returning a total.
- HybridStrategy: the backend pages but cannot search; a search term filters
  the fetched page and the total is re-derived from that page alone.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

import jmespath
from jmespath.parser import ParsedResult

from .clients import DummyJsonClient, JsonPlaceholderClient
from .models import Item, Query, Result, Source
from .pagination import paginate

SEARCH_FIELDS: dict[Source, tuple[str, ...]] = {
    Source.POSTS: ("title", "body"),
    Source.USERS: ("name", "email", "company.name"),
    Source.PRODUCTS: ("title", "description"),
    Source.QUOTES: ("quote", "author"),
}

FetchOne = Callable[[int], Awaitable[Any]]


def compile_fields(fields: Iterable[str]) -> tuple[ParsedResult, ...]:
    return tuple(jmespath.compile(f) for f in fields)


def matches(item: Item, search_text: str, fields: Iterable[ParsedResult]) -> bool:
    """Case-insensitive substring match of `search_text` on any of `fields`."""
    needle = search_text.lower()
    for field in fields:
        value = field.search(item)
        if value is None:
            continue
        if needle in str(value).lower():
            return True
    return False


def filter_items(items: Iterable[Item], search_text: str, fields: Iterable[ParsedResult]) -> list[Item]:
    items = list(items)
    if not search_text:
        return items
    fields = tuple(fields)
    return [item for item in items if matches(item, search_text, fields)]


def _as_items(value: Any) -> list[Item]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _unwrap(body: Any, items_key: str) -> tuple[list[Item], int]:
    """Pull `(items, total)` out of a paged envelope, defaulting missing parts."""
    if not isinstance(body, dict):
        return [], 0
    items = _as_items(body.get(items_key))
    try:
        total = max(int(body.get("total") or 0), 0)
    except (TypeError, ValueError):
        total = 0
    return items, total


class SourceStrategy(ABC):
    """Fetch, filter and paginate one source."""

    def __init__(self, fetch_one: FetchOne, search_fields: Iterable[str]):
        self.fetch_one = fetch_one
        self.search_fields = tuple(search_fields)
        self._compiled = compile_fields(self.search_fields)

    def matches(self, item: Item, search_text: str) -> bool:
        return matches(item, search_text, self._compiled)

    @abstractmethod
    async def resolve(self, query: Query) -> Result:
        """Resolve a query with at most one outbound request."""


class ClientFilteredStrategy(SourceStrategy):
    def __init__(self, fetch_all: Callable[[], Awaitable[Any]], fetch_one: FetchOne, search_fields: Iterable[str]):
        super().__init__(fetch_one, search_fields)
        self.fetch_all = fetch_all

    async def resolve(self, query: Query) -> Result:
        collection = _as_items(await self.fetch_all())
        filtered = filter_items(collection, query.search_text, self._compiled)
        page = paginate(filtered, query.page, query.page_size)
        return Result(items=page.items, total=page.total)


class ServerSearchStrategy(SourceStrategy):
    def __init__(
        self,
        fetch_page: Callable[..., Awaitable[Any]],
        items_key: str,
        fetch_one: FetchOne,
        search_fields: Iterable[str],
    ):
        super().__init__(fetch_one, search_fields)
        self.fetch_page = fetch_page
        self.items_key = items_key

    async def resolve(self, query: Query) -> Result:
        body = await self.fetch_page(limit=query.page_size, skip=query.skip, search=query.search_text)
        items, total = _unwrap(body, self.items_key)
        return Result(items=items[: query.page_size], total=total)


class HybridStrategy(SourceStrategy):
    def __init__(
        self,
        fetch_page: Callable[..., Awaitable[Any]],
        items_key: str,
        fetch_one: FetchOne,
        search_fields: Iterable[str],
    ):
        super().__init__(fetch_one, search_fields)
        self.fetch_page = fetch_page
        self.items_key = items_key

    async def resolve(self, query: Query) -> Result:
        body = await self.fetch_page(limit=query.page_size, skip=query.skip)
        items, total = _unwrap(body, self.items_key)
        items = items[: query.page_size]
        if not query.has_search:
            return Result(items=items, total=total)
        # The total only counts matches on this page, not across the collection.
        filtered = filter_items(items, query.search_text, self._compiled)
        return Result(items=filtered, total=len(filtered))


def build_strategies(jsonplaceholder: JsonPlaceholderClient, dummyjson: DummyJsonClient) -> Mapping[Source, SourceStrategy]:
    """Dispatch table from Source to the strategy serving it."""
    return {
        Source.POSTS: ClientFilteredStrategy(
            fetch_all=jsonplaceholder.get_posts,
            fetch_one=jsonplaceholder.get_post,
            search_fields=SEARCH_FIELDS[Source.POSTS],
        ),
        Source.USERS: ClientFilteredStrategy(
            fetch_all=jsonplaceholder.get_users,
            fetch_one=jsonplaceholder.get_user,
            search_fields=SEARCH_FIELDS[Source.USERS],
        ),
        Source.PRODUCTS: ServerSearchStrategy(
            fetch_page=dummyjson.get_products,
            items_key="products",
            fetch_one=dummyjson.get_product,
            search_fields=SEARCH_FIELDS[Source.PRODUCTS],
        ),
        Source.QUOTES: HybridStrategy(
            fetch_page=dummyjson.get_quotes,
            items_key="quotes",
            fetch_one=dummyjson.get_quote,
            search_fields=SEARCH_FIELDS[Source.QUOTES],
        ),
    }
