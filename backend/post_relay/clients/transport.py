from __future__ import annotations

import asyncio

import httpx

from .base import CancelToken, FetchCancelled, TransportError, TransportResponse


class HttpxTransport:
    """Transport that performs real HTTP GETs with httpx.AsyncClient."""

    def __init__(self, timeout: float | None = 5.0, *, client: httpx.AsyncClient | None = None):
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout), follow_redirects=True)

    async def get(self, url: str, *, cancel: CancelToken | None = None) -> TransportResponse:
        if cancel is None:
            return await self._send(url)

        cancel.raise_if_cancelled()
        request = asyncio.ensure_future(self._send(url))
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait({request, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not request.done():
                request.cancel()
        if request in done:
            return request.result()
        raise FetchCancelled(f"GET {url} was cancelled")

    async def _send(self, url: str) -> TransportResponse:
        try:
            resp = await self.client.get(url)
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc
        return TransportResponse(
            status=resp.status_code,
            status_text=resp.reason_phrase,
            content=resp.content,
            url=url,
        )

    async def aclose(self) -> None:
        await self.client.aclose()
