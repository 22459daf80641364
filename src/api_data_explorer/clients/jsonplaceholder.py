"""JSONPlaceholder client: posts, users, comments, albums and photos."""

from typing import Any

from ..config import settings
from .base import ApiClient


class JsonPlaceholderClient(ApiClient):
    """Client for https://jsonplaceholder.typicode.com.

    The service has no server-side search or totals; list endpoints return the
    whole collection.
    """

    def __init__(self, base_url: str | None = None, **kwargs: Any):
        super().__init__(base_url or settings.http.jsonplaceholder_url, **kwargs)

    # Posts

    async def get_posts(self, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return await self._get("/posts", params=params)

    async def get_post(self, post_id: int) -> dict[str, Any]:
        return await self._get(f"/posts/{post_id}")

    async def create_post(self, post: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/posts", json=post)

    async def update_post(self, post_id: int, post: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", f"/posts/{post_id}", json=post)

    async def delete_post(self, post_id: int) -> dict[str, Any]:
        return await self._request("DELETE", f"/posts/{post_id}")

    # Users

    async def get_users(self) -> list[dict[str, Any]]:
        return await self._get("/users")

    async def get_user(self, user_id: int) -> dict[str, Any]:
        return await self._get(f"/users/{user_id}")

    # Comments

    async def get_comments(self, post_id: int | None = None) -> list[dict[str, Any]]:
        params = {"postId": post_id} if post_id else None
        return await self._get("/comments", params=params)

    async def get_post_comments(self, post_id: int) -> list[dict[str, Any]]:
        return await self._get(f"/posts/{post_id}/comments")

    # Albums

    async def get_albums(self, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return await self._get("/albums", params=params)

    async def get_album(self, album_id: int) -> dict[str, Any]:
        return await self._get(f"/albums/{album_id}")

    # Photos

    async def get_photos(self, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return await self._get("/photos", params=params)

    async def get_photo(self, photo_id: int) -> dict[str, Any]:
        return await self._get(f"/photos/{photo_id}")

    async def get_album_photos(self, album_id: int) -> list[dict[str, Any]]:
        return await self._get(f"/albums/{album_id}/photos")
