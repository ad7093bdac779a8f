from __future__ import annotations

import asyncio
import logging

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from towersnatch._transport import HttpFeedClient
from towersnatch.exceptions import SnatchTransportError


def _app(handler) -> web.Application:  # type: ignore[no-untyped-def]
    app = web.Application()
    app.router.add_get("/lc.php", handler)
    return app


@pytest.mark.asyncio
async def test_fetch_returns_body() -> None:
    seen_query: dict[str, str] = {}

    async def handler(request: web.Request) -> web.Response:
        seen_query.update(request.query)
        return web.json_response({"WW": {"A1": {}}})

    async with TestServer(_app(handler)) as server, aiohttp.ClientSession() as session:
        client = HttpFeedClient(str(server.make_url("/lc.php?faction=")), session)
        body = await client.fetch(timeout=5)

    assert body == b'{"WW": {"A1": {}}}'
    assert seen_query == {"faction": ""}


@pytest.mark.asyncio
async def test_non_200_raises_without_body_in_message(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="towersnatch._transport")

    async def handler(request: web.Request) -> web.Response:
        return web.Response(status=503, text="maintenance")

    async with TestServer(_app(handler)) as server, aiohttp.ClientSession() as session:
        client = HttpFeedClient(str(server.make_url("/lc.php")), session)
        with pytest.raises(SnatchTransportError) as excinfo:
            await client.fetch(timeout=5)

    assert excinfo.value.status_code == 503
    assert str(excinfo.value) == "HTTP 503"
    assert "maintenance" in caplog.text


@pytest.mark.asyncio
async def test_deadline_expiry_raises() -> None:
    async def handler(request: web.Request) -> web.Response:
        await asyncio.sleep(0.5)
        return web.json_response({})

    async with TestServer(_app(handler)) as server, aiohttp.ClientSession() as session:
        client = HttpFeedClient(str(server.make_url("/lc.php")), session)
        with pytest.raises(SnatchTransportError, match="Timeout after 0.05s"):
            await client.fetch(timeout=0.05)


@pytest.mark.asyncio
async def test_connection_error_raises() -> None:
    async with aiohttp.ClientSession() as session:
        client = HttpFeedClient("http://127.0.0.1:9/lc.php", session)
        with pytest.raises(SnatchTransportError, match="Request failed"):
            await client.fetch(timeout=5)
