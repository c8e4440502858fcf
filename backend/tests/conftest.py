from __future__ import annotations

import asyncio

import pytest

from post_relay.clients.base import CancelToken, TransportResponse


SAMPLE_POST = {
    "userId": 1,
    "id": 1,
    "title": "Test Post Title",
    "body": "Test post body content",
}


class FakeTransport:
    """In-memory transport.

    ``result`` may be a TransportResponse (returned), an exception (raised) or
    None, in which case each call stays pending until the test resolves the
    future in ``pending``. The cancel token is recorded but otherwise ignored.
    """

    def __init__(self, result: TransportResponse | BaseException | None = None):
        self.result = result
        self.calls: list[str] = []
        self.tokens: list[CancelToken | None] = []
        self.pending: list[asyncio.Future] = []
        self.closed = False

    async def get(self, url: str, *, cancel: CancelToken | None = None) -> TransportResponse:
        self.calls.append(url)
        self.tokens.append(cancel)
        if self.result is None:
            fut = asyncio.get_running_loop().create_future()
            self.pending.append(fut)
            return await fut
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result

    async def aclose(self) -> None:
        self.closed = True


async def drain() -> None:
    """Let already-resolved tasks run to completion."""
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.fixture
def sample_post() -> dict:
    return dict(SAMPLE_POST)


@pytest.fixture
def ok_transport(sample_post) -> FakeTransport:
    return FakeTransport(TransportResponse.from_json(sample_post))
