"""PostDisplay: fetches one post from the relay API and renders it.

Each (api_base_url, post_id) pair is a RequestIdentity. Changing it, or
unmounting, cancels the attempt in flight; a result is applied only while its
token is live and its identity is still the current one.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from ..clients.base import CancelToken, FetchCancelled, Transport
from ..clients.transport import HttpxTransport
from ..schemas import Post
from ..settings import settings
from .outcome import Failure, Idle, Loading, Outcome, Success, render_outcome


logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"


@dataclass(frozen=True)
class RequestIdentity:
    base_url: str
    post_id: int

    @property
    def url(self) -> str:
        return f"{self.base_url}/posts/{self.post_id}"


@dataclass
class _Attempt:
    identity: RequestIdentity
    token: CancelToken
    task: asyncio.Task


class PostDisplay:
    def __init__(
        self,
        transport: Transport | None = None,
        *,
        api_base_url: str | None = None,
        post_id: int = 1,
    ):
        self._owns_transport = transport is None
        # no timeout on the display side
        self.transport: Transport = transport if transport is not None else HttpxTransport(timeout=None)
        self._props = RequestIdentity(api_base_url or settings.display_api_base, post_id)
        self._identity: RequestIdentity | None = None
        self._attempt: _Attempt | None = None
        self._state: Outcome = Idle()

    @property
    def state(self) -> Outcome:
        return self._state

    @property
    def identity(self) -> RequestIdentity | None:
        return self._identity

    @property
    def mounted(self) -> bool:
        return self._identity is not None

    def mount(self) -> None:
        """Start fetching for the current props. Must be called inside a running event loop."""
        if self._identity == self._props:
            return
        self._start(self._props)

    def update(self, *, api_base_url: str | None = None, post_id: int | None = None) -> None:
        self._props = RequestIdentity(
            api_base_url if api_base_url is not None else self._props.base_url,
            post_id if post_id is not None else self._props.post_id,
        )
        if self.mounted and self._props != self._identity:
            self._start(self._props)

    def unmount(self) -> None:
        self._drop_attempt()
        self._identity = None

    def render(self) -> str:
        return render_outcome(self._state)

    async def settled(self) -> Outcome:
        """Wait until the current attempt has finished and return the resulting state."""
        while self._attempt is not None and not self._attempt.task.done():
            await asyncio.wait({self._attempt.task})
        return self._state

    async def aclose(self) -> None:
        task = self._attempt.task if self._attempt is not None else None
        self.unmount()
        if task is not None:
            await asyncio.wait({task})
        if self._owns_transport:
            await self.transport.aclose()

    def _cancel_attempt(self) -> None:
        if self._attempt is not None:
            self._attempt.token.cancel()

    def _drop_attempt(self) -> None:
        # token and task both; a transport may ignore the token
        attempt, self._attempt = self._attempt, None
        if attempt is not None:
            attempt.token.cancel()
            attempt.task.cancel()

    def _start(self, identity: RequestIdentity) -> None:
        self._cancel_attempt()
        self._identity = identity
        self._state = Loading()
        token = CancelToken()
        task = asyncio.get_running_loop().create_task(self._run(identity, token))
        self._attempt = _Attempt(identity, token, task)

    async def _run(self, identity: RequestIdentity, token: CancelToken) -> None:
        try:
            response = await self.transport.get(identity.url, cancel=token)
            if response.ok:
                outcome: Outcome = Success(Post.from_wire(response.json()))
            else:
                outcome = Failure(f"HTTP {response.status}: {response.status_text}")
        except FetchCancelled:
            logger.debug("fetch for %s cancelled", identity.url)
            return
        except asyncio.CancelledError:
            logger.debug("fetch task for %s cancelled", identity.url)
            raise
        except Exception as exc:
            outcome = Failure(str(exc) or UNKNOWN_ERROR)
        self._apply(identity, token, outcome)

    def _apply(self, identity: RequestIdentity, token: CancelToken, outcome: Outcome) -> None:
        if token.cancelled or identity != self._identity:
            logger.debug("dropping stale result for %s", identity.url)
            return
        self._state = outcome
