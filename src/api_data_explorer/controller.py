"""Data fetch controller: resolve a Query into a Result or a FetchFailure."""

import logging
from collections.abc import Mapping
from typing import Any

from .clients import DummyJsonClient, JsonPlaceholderClient, translate_error
from .exceptions import FetchError, UnknownSourceError
from .models import ErrorKind, FetchFailure, Item, Query, Result, Source
from .strategies import SourceStrategy, build_strategies

logger = logging.getLogger(__name__)


def parse_source(name: str | Source) -> Source:
    """Resolve a source name such as ``"posts"`` into a Source."""
    if isinstance(name, Source):
        return name
    try:
        return Source(name.strip().lower())
    except ValueError as e:
        valid = ", ".join(s.value for s in Source)
        raise UnknownSourceError(f"Unknown source '{name}'. Choose one of: {valid}") from e


def _failure(error: FetchError) -> FetchFailure:
    return FetchFailure(kind=error.kind, message=error.message, status=error.status)


class DataFetchController:
    """Stateless query resolver over a per-source strategy table.

    `fetch()` never raises for remote or decoding problems: every outcome is
    either a Result or a FetchFailure. Cancellation still propagates.
    """

    def __init__(self, strategies: Mapping[Source, SourceStrategy], clients: tuple[Any, ...] = ()):
        self._strategies = dict(strategies)
        self._clients = clients

    @classmethod
    def create(
        cls,
        *,
        jsonplaceholder_url: str | None = None,
        dummyjson_url: str | None = None,
        **client_kwargs: Any,
    ) -> "DataFetchController":
        """Build a controller with clients configured from settings.

        Args:
            jsonplaceholder_url: Override for the posts/users backend.
            dummyjson_url: Override for the products/quotes backend.
            **client_kwargs: Passed to both clients (e.g. ``timeout``, ``transport``).
        """
        if "base_url" in client_kwargs:
            raise TypeError("base_url is per backend; use jsonplaceholder_url or dummyjson_url")
        jsonplaceholder = JsonPlaceholderClient(jsonplaceholder_url, **client_kwargs)
        dummyjson = DummyJsonClient(dummyjson_url, **client_kwargs)
        return cls(build_strategies(jsonplaceholder, dummyjson), clients=(jsonplaceholder, dummyjson))

    async def __aenter__(self) -> "DataFetchController":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        for client in self._clients:
            await client.aclose()

    async def fetch(self, query: Query) -> Result | FetchFailure:
        """Resolve one query with at most one outbound request."""
        strategy = self._strategies.get(query.source)
        if strategy is None:
            logger.warning(f"No strategy registered for source {query.source.value}")
            return Result()

        try:
            result = await strategy.resolve(query)
        except FetchError as e:
            return _failure(e)
        except Exception as e:
            logger.error(f"Unexpected error resolving {query.source.value}: {e}")
            return _failure(translate_error(e))

        logger.debug(
            f"Resolved {query.source.value} page={query.page} search={query.search_text!r}: {len(result.items)} of {result.total}"
        )
        return result

    async def fetch_item(self, source: Source, item_id: int) -> Item | FetchFailure:
        """Fetch a single record of `source` by id."""
        strategy = self._strategies.get(source)
        if strategy is None:
            return FetchFailure(kind=ErrorKind.UNKNOWN, message=f"Unknown source '{source}'")

        try:
            item = await strategy.fetch_one(item_id)
        except FetchError as e:
            return _failure(e)
        except Exception as e:
            logger.error(f"Unexpected error fetching {source.value} #{item_id}: {e}")
            return _failure(translate_error(e))

        if not isinstance(item, dict):
            return _failure(translate_error(ValueError("unexpected item shape")))
        return item
