from __future__ import annotations

import asyncio
from urllib.parse import parse_qs

import httpx
import pytest

from cex_client.core.errors import TransportError
from cex_client.exchange.adapters.transport import HttpxTransport


def _run(handler, method: str, path: str, params: dict) -> object:
    async def scenario() -> object:
        t = HttpxTransport(
            "https://cex.io/api",
            user_agent="cex_client-test",
            http_transport=httpx.MockTransport(handler),
        )
        try:
            return await t.request(method, path, params)
        finally:
            await t.close()

    return asyncio.run(scenario())


def test_get_sends_query_and_user_agent():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["ua"] = request.headers.get("User-Agent")
        return httpx.Response(200, json={"last": "0.05"})

    out = _run(handler, "GET", "ticker/GHS/BTC/", {})
    assert out == {"last": "0.05"}
    assert seen["url"] == "https://cex.io/api/ticker/GHS/BTC/"
    assert seen["ua"] == "cex_client-test"


def test_post_sends_form_body():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = parse_qs(request.content.decode())
        return httpx.Response(200, json=True)

    out = _run(handler, "POST", "cancel_order/", {"id": "12", "nonce": 5, "skip": None})
    assert out is True
    assert seen["method"] == "POST"
    assert seen["body"] == {"id": ["12"], "nonce": ["5"]}


def test_error_envelope_with_http_error_status_is_returned():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"error": "Permission denied"})

    assert _run(handler, "POST", "balance/", {}) == {"error": "Permission denied"}


def test_http_error_without_envelope_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, json={"message": "bad gateway"})

    with pytest.raises(TransportError):
        _run(handler, "GET", "ticker/GHS/BTC/", {})


def test_undecodable_body_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(TransportError):
        _run(handler, "GET", "ticker/GHS/BTC/", {})


def test_connect_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(TransportError) as ei:
        _run(handler, "GET", "ticker/GHS/BTC/", {})
    assert isinstance(ei.value.__cause__, httpx.ConnectError)
