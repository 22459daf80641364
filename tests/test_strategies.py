"""Tests for the per-source fetch strategies and the search predicate."""

from api_data_explorer.models import Query, Source
from api_data_explorer.strategies import (
    SEARCH_FIELDS,
    ClientFilteredStrategy,
    HybridStrategy,
    ServerSearchStrategy,
    build_strategies,
    compile_fields,
    filter_items,
    matches,
)


async def _no_item(item_id):
    raise AssertionError("not expected")


class TestMatches:
    def test_case_insensitive_substring(self):
        fields = compile_fields(["title", "body"])
        assert matches({"title": "Hello World", "body": ""}, "WORLD", fields)
        assert not matches({"title": "Hello", "body": "there"}, "world", fields)

    def test_nested_field_path(self):
        fields = compile_fields(SEARCH_FIELDS[Source.USERS])
        user = {"name": "Leanne", "email": "l@april.biz", "company": {"name": "Romaguera-Crona"}}
        assert matches(user, "crona", fields)

    def test_missing_fields_do_not_match(self):
        fields = compile_fields(["title", "company.name"])
        assert not matches({"id": 1}, "x", fields)

    def test_empty_search_keeps_everything(self):
        items = [{"title": "a"}, {"title": "b"}]
        assert filter_items(items, "", compile_fields(["title"])) == items


class TestClientFilteredStrategy:
    def _strategy(self, items):
        async def fetch_all():
            return items

        return ClientFilteredStrategy(fetch_all=fetch_all, fetch_one=_no_item, search_fields=["title"])

    async def test_filters_then_paginates(self):
        items = [{"id": i, "title": "match" if i % 2 else "other"} for i in range(1, 21)]
        result = await self._strategy(items).resolve(Query(source=Source.POSTS, page=2, page_size=4, search_text="MATCH"))

        assert result.total == 10
        assert [item["id"] for item in result.items] == [9, 11, 13, 15]

    async def test_non_list_body_is_empty(self):
        result = await self._strategy({"unexpected": True}).resolve(Query(source=Source.POSTS))
        assert result.items == []
        assert result.total == 0


class TestServerSearchStrategy:
    async def test_passes_paging_and_search_through(self):
        calls = []

        async def fetch_page(limit, skip, search):
            calls.append((limit, skip, search))
            return {"products": [{"id": 1}], "total": 41}

        strategy = ServerSearchStrategy(fetch_page=fetch_page, items_key="products", fetch_one=_no_item, search_fields=["title"])
        result = await strategy.resolve(Query(source=Source.PRODUCTS, page=3, page_size=10, search_text="phone"))

        assert calls == [(10, 20, "phone")]
        assert result.total == 41
        assert result.items == [{"id": 1}]

    async def test_missing_envelope_keys_default(self):
        async def fetch_page(limit, skip, search):
            return {}

        strategy = ServerSearchStrategy(fetch_page=fetch_page, items_key="products", fetch_one=_no_item, search_fields=["title"])
        result = await strategy.resolve(Query(source=Source.PRODUCTS))
        assert result.items == []
        assert result.total == 0

    async def test_oversized_page_is_trimmed(self):
        async def fetch_page(limit, skip, search):
            return {"products": [{"id": i} for i in range(50)], "total": 50}

        strategy = ServerSearchStrategy(fetch_page=fetch_page, items_key="products", fetch_one=_no_item, search_fields=["title"])
        result = await strategy.resolve(Query(source=Source.PRODUCTS, page_size=12))
        assert len(result.items) == 12


class TestHybridStrategy:
    def _strategy(self, calls):
        async def fetch_page(limit, skip):
            calls.append((limit, skip))
            quotes = [{"id": i, "quote": f"q{i}", "author": "Rumi" if i % 3 == 0 else "Seneca"} for i in range(skip + 1, skip + limit + 1)]
            return {"quotes": quotes, "total": 1454}

        return HybridStrategy(fetch_page=fetch_page, items_key="quotes", fetch_one=_no_item, search_fields=["quote", "author"])

    async def test_without_search_uses_remote_total(self):
        calls = []
        result = await self._strategy(calls).resolve(Query(source=Source.QUOTES, page=2, page_size=6))

        assert calls == [(6, 6)]
        assert result.total == 1454
        assert len(result.items) == 6

    async def test_search_filters_the_fetched_page_only(self):
        calls = []
        result = await self._strategy(calls).resolve(Query(source=Source.QUOTES, page=1, page_size=6, search_text="rumi"))

        assert calls == [(6, 0)]
        assert [item["id"] for item in result.items] == [3, 6]
        # Total is re-derived from the filtered page, not the whole collection.
        assert result.total == 2


def test_dispatch_table_covers_every_source(jsonplaceholder, dummyjson):
    strategies = build_strategies(jsonplaceholder, dummyjson)

    assert set(strategies) == set(Source)
    assert isinstance(strategies[Source.POSTS], ClientFilteredStrategy)
    assert isinstance(strategies[Source.USERS], ClientFilteredStrategy)
    assert isinstance(strategies[Source.PRODUCTS], ServerSearchStrategy)
    assert isinstance(strategies[Source.QUOTES], HybridStrategy)
    assert strategies[Source.USERS].search_fields == ("name", "email", "company.name")
