from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Protocol


class TransportError(Exception):
    """A GET that failed at the network level or returned an unreadable body."""


class FetchCancelled(Exception):
    """Raised by a transport when the caller's CancelToken fires. Not a failure."""


class CancelToken:
    """Cooperative cancellation flag for a single fetch attempt."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise FetchCancelled("request was cancelled")


@dataclass(frozen=True)
class TransportResponse:
    status: int
    status_text: str
    content: bytes = b""
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        try:
            return json.loads(self.content)
        except ValueError as exc:
            raise TransportError(f"Invalid JSON body from {self.url or 'upstream'}: {exc}") from exc

    def raise_for_status(self) -> None:
        if not self.ok:
            raise TransportError(f"HTTP {self.status}: {self.status_text}")

    @classmethod
    def from_json(cls, data: Any, *, status: int = 200, status_text: str = "OK", url: str = "") -> "TransportResponse":
        return cls(status=status, status_text=status_text, content=json.dumps(data).encode("utf-8"), url=url)


class Transport(Protocol):
    """HTTP GET capability. The relay and PostDisplay use httpx; tests inject a fake."""

    async def get(self, url: str, *, cancel: CancelToken | None = None) -> TransportResponse:
        ...

    async def aclose(self) -> None:
        ...
