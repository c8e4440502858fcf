from __future__ import annotations

import logging
from typing import Any

from ..clients.base import Transport
from ..clients.transport import HttpxTransport
from ..schemas import Post
from ..settings import Settings


logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """The upstream API could not deliver the requested post(s)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _describe(exc: Exception, fallback: str) -> str:
    return str(exc) or fallback


class RemotePostFetcher:
    """Fetches posts from the upstream REST API and hands them back unchanged.

    Pass ``transport`` to substitute the HTTP layer (tests); otherwise an
    HttpxTransport with the configured timeout ceiling is created and owned
    by this instance. Without ``settings`` the environment is read here, at
    construction, so API_BASE_URL takes effect per instance.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        *,
        base_url: str | None = None,
        settings: Settings | None = None,
    ):
        cfg = settings or Settings()
        self._base_url = base_url or cfg.api_base_url
        self._owns_transport = transport is None
        self.transport: Transport = transport if transport is not None else HttpxTransport(cfg.http_timeout_seconds)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_json(self, url: str) -> Any:
        logger.debug("GET %s", url)
        response = await self.transport.get(url)
        response.raise_for_status()
        return response.json()

    async def fetch_by_id(self, post_id: int) -> Post:
        url = f"{self._base_url}/posts/{post_id}"
        try:
            return Post.from_wire(await self._get_json(url))
        except Exception as exc:
            message = f"Failed to fetch post {post_id}: {_describe(exc, 'Unknown error fetching post')}"
            logger.warning(message)
            raise UpstreamError(message) from exc

    async def fetch_all(self) -> list[Post]:
        url = f"{self._base_url}/posts"
        try:
            data = await self._get_json(url)
            if not isinstance(data, list):
                raise TypeError(f"expected a JSON array, got {type(data).__name__}")
            return [Post.from_wire(item) for item in data]
        except Exception as exc:
            message = f"Failed to fetch posts: {_describe(exc, 'Unknown error fetching posts')}"
            logger.warning(message)
            raise UpstreamError(message) from exc

    async def aclose(self) -> None:
        if self._owns_transport:
            await self.transport.aclose()
