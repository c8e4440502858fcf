import asyncio

import httpx
import pytest

from post_relay.clients.base import CancelToken, FetchCancelled, TransportError, TransportResponse
from post_relay.clients.transport import HttpxTransport


def make_transport(handler) -> HttpxTransport:
    return HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_get_returns_status_and_body():
    transport = make_transport(lambda request: httpx.Response(200, json={"id": 1}))

    response = await transport.get("http://upstream.test/posts/1")

    assert response.status == 200
    assert response.status_text == "OK"
    assert response.ok
    assert response.json() == {"id": 1}
    await transport.aclose()


@pytest.mark.asyncio
async def test_non_2xx_is_returned_not_raised():
    transport = make_transport(lambda request: httpx.Response(404))

    response = await transport.get("http://upstream.test/posts/999")

    assert response.status == 404
    assert response.status_text == "Not Found"
    assert not response.ok
    with pytest.raises(TransportError, match="HTTP 404: Not Found"):
        response.raise_for_status()


@pytest.mark.asyncio
async def test_network_error_becomes_transport_error():
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    transport = make_transport(handler)

    with pytest.raises(TransportError, match="Connection refused"):
        await transport.get("http://upstream.test/posts")


@pytest.mark.asyncio
async def test_cancel_token_aborts_pending_request():
    never = asyncio.Event()

    async def handler(request):
        await never.wait()
        return httpx.Response(200, json={})

    transport = make_transport(handler)
    token = CancelToken()
    call = asyncio.ensure_future(transport.get("http://upstream.test/posts/1", cancel=token))
    await asyncio.sleep(0)

    token.cancel()

    with pytest.raises(FetchCancelled):
        await asyncio.wait_for(call, timeout=1)


@pytest.mark.asyncio
async def test_already_cancelled_token_sends_nothing():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={})

    transport = make_transport(handler)
    token = CancelToken()
    token.cancel()

    with pytest.raises(FetchCancelled):
        await transport.get("http://upstream.test/posts/1", cancel=token)
    assert requests == []


@pytest.mark.asyncio
async def test_live_token_does_not_interfere():
    transport = make_transport(lambda request: httpx.Response(200, json=[1, 2]))

    response = await transport.get("http://upstream.test/posts", cancel=CancelToken())

    assert response.json() == [1, 2]


def test_invalid_json_raises_transport_error():
    response = TransportResponse(status=200, status_text="OK", content=b"not json", url="http://x/posts/1")

    with pytest.raises(TransportError, match="Invalid JSON body from http://x/posts/1"):
        response.json()
