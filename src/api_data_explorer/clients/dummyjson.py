"""DummyJSON client: products, users, posts and quotes with limit/skip paging."""

from typing import Any

from ..config import settings
from .base import ApiClient

DEFAULT_LIMIT = 30


class DummyJsonClient(ApiClient):
    """Client for https://dummyjson.com.

    List endpoints return an envelope such as
    ``{"products": [...], "total": 194, "skip": 0, "limit": 30}``.
    Only products support a remote text search.
    """

    def __init__(self, base_url: str | None = None, **kwargs: Any):
        super().__init__(base_url or settings.http.dummyjson_url, **kwargs)

    # Products

    async def get_products(self, limit: int = DEFAULT_LIMIT, skip: int = 0, search: str = "") -> dict[str, Any]:
        """List products, or search them by text when `search` is non-empty."""
        if search:
            return await self._get("/products/search", params={"q": search, "limit": limit, "skip": skip})
        return await self._get("/products", params={"limit": limit, "skip": skip})

    async def get_product(self, product_id: int) -> dict[str, Any]:
        return await self._get(f"/products/{product_id}")

    async def get_categories(self) -> list[Any]:
        return await self._get("/products/categories")

    async def get_products_by_category(self, category: str, limit: int = DEFAULT_LIMIT, skip: int = 0) -> dict[str, Any]:
        return await self._get(f"/products/category/{category}", params={"limit": limit, "skip": skip})

    # Users

    async def get_users(self, limit: int = DEFAULT_LIMIT, skip: int = 0) -> dict[str, Any]:
        return await self._get("/users", params={"limit": limit, "skip": skip})

    async def get_user(self, user_id: int) -> dict[str, Any]:
        return await self._get(f"/users/{user_id}")

    # Posts

    async def get_posts(self, limit: int = DEFAULT_LIMIT, skip: int = 0) -> dict[str, Any]:
        return await self._get("/posts", params={"limit": limit, "skip": skip})

    async def get_post(self, post_id: int) -> dict[str, Any]:
        return await self._get(f"/posts/{post_id}")

    # Quotes

    async def get_quotes(self, limit: int = DEFAULT_LIMIT, skip: int = 0) -> dict[str, Any]:
        return await self._get("/quotes", params={"limit": limit, "skip": skip})

    async def get_quote(self, quote_id: int) -> dict[str, Any]:
        return await self._get(f"/quotes/{quote_id}")
