"""Shared async HTTP plumbing for the remote collections.

Every failure leaving this module is a FetchError subclass whose message is
fit to show to a user. Callers never see raw httpx exceptions.
"""

import asyncio
import logging
from typing import Any

import httpx

from ..config import settings
from ..exceptions import (
    FetchError,
    NetworkUnreachableError,
    RequestTimeoutError,
    UnknownFetchError,
    error_for_status,
)

logger = logging.getLogger(__name__)


def translate_error(exc: BaseException) -> FetchError:
    """Map a transport, status or decoding exception onto the fetch error taxonomy."""
    if isinstance(exc, FetchError):
        return exc
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return RequestTimeoutError()
    if isinstance(exc, httpx.HTTPStatusError):
        return error_for_status(exc.response.status_code)
    if isinstance(exc, httpx.TransportError):
        return NetworkUnreachableError()
    return UnknownFetchError()


async def _log_request(request: httpx.Request) -> None:
    logger.debug(f"Making {request.method} request to {request.url}")


class ApiClient:
    """Thin JSON client around one httpx.AsyncClient bound to a base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http.timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={
                "Content-Type": "application/json",
                "User-Agent": user_agent or settings.http.user_agent,
            },
            transport=transport,
            event_hooks={"request": [_log_request]},
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and decode the JSON body.

        `timeout` bounds the whole exchange; httpx alone only bounds each
        connect, read, write and pool step.

        Raises:
            FetchError: On timeout, connectivity failure, non-2xx status or an undecodable body.
        """
        try:
            async with asyncio.timeout(self.timeout):
                response = await self._client.request(method, path, params=params, json=json)
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, TimeoutError, ValueError) as e:
            error = translate_error(e)
            logger.error(f"API Error: {error.message}")
            raise error from e

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)
