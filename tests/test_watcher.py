from __future__ import annotations

import asyncio
import logging

import pytest

from _support import FakeFeed
from towersnatch.catalog import InMemorySiteCatalog
from towersnatch.client import SnatchClient
from towersnatch.config import SnatchConfig
from towersnatch.watcher import SnatchWatcher


@pytest.mark.asyncio
async def test_tick_broadcasts_announcement(catalog: InMemorySiteCatalog) -> None:
    feed = FakeFeed(b'{"WW": {"A1": {}}}', b'{"WW": {"A1": {}, "A3": {}}}')
    sent: list[str] = []
    async with SnatchClient(SnatchConfig(), catalog, transport=feed) as client:
        watcher = SnatchWatcher(client, sent.append, interval=60)
        assert await watcher.tick() is None
        message = await watcher.tick()

    assert message is not None
    assert sent == [message]


@pytest.mark.asyncio
async def test_async_broadcast_awaited(catalog: InMemorySiteCatalog) -> None:
    feed = FakeFeed(b"{}", b'{"WW": {"A2": {}}}')
    sent: list[str] = []

    async def broadcast(message: str) -> None:
        sent.append(message)

    async with SnatchClient(SnatchConfig(), catalog, transport=feed) as client:
        watcher = SnatchWatcher(client, broadcast, interval=60)
        await watcher.tick()
        await watcher.tick()

    assert len(sent) == 1
    assert "Sandy Ridge" in sent[0]


@pytest.mark.asyncio
async def test_background_loop_runs_until_stopped(catalog: InMemorySiteCatalog) -> None:
    feed = FakeFeed(*([b'{"WW": {"A1": {}}}'] * 50))
    async with SnatchClient(SnatchConfig(), catalog, transport=feed) as client:
        async with SnatchWatcher(client, print, interval=0.01) as watcher:
            await asyncio.sleep(0.05)
            assert watcher.is_running
        assert not watcher.is_running

    assert 2 <= len(feed.timeouts) < 50


@pytest.mark.asyncio
async def test_disabled_watcher_never_polls(catalog: InMemorySiteCatalog) -> None:
    feed = FakeFeed()
    async with SnatchClient(SnatchConfig(), catalog, transport=feed) as client:
        async with SnatchWatcher(client, print, interval=0.01, enabled=False) as watcher:
            await asyncio.sleep(0.02)
            assert not watcher.is_running
    assert feed.timeouts == []


def test_interval_must_be_positive(catalog: InMemorySiteCatalog) -> None:
    client = SnatchClient(SnatchConfig(), catalog, transport=FakeFeed())
    with pytest.raises(ValueError):
        SnatchWatcher(client, print, interval=0)


@pytest.mark.asyncio
async def test_failing_broadcast_keeps_loop_running(
    catalog: InMemorySiteCatalog, caplog: pytest.LogCaptureFixture
) -> None:
    feed = FakeFeed(b"{}", *([b'{"WW": {"A1": {}}}'] * 50))
    attempts: list[str] = []

    def broadcast(message: str) -> None:
        attempts.append(message)
        raise ConnectionError("chat down")

    async with SnatchClient(SnatchConfig(), catalog, transport=feed) as client:
        watcher = SnatchWatcher(client, broadcast, interval=0.01)
        with caplog.at_level(logging.ERROR, logger="towersnatch.watcher"):
            watcher.start()
            await asyncio.sleep(0.1)
            assert watcher.is_running
            await watcher.stop()

    assert len(attempts) == 1
    assert len(feed.timeouts) > 2
    assert "Broadcasting new unplanted sites failed" in caplog.text
    assert "chat down" in caplog.text


@pytest.mark.asyncio
async def test_tick_returns_message_when_broadcast_fails(catalog: InMemorySiteCatalog) -> None:
    feed = FakeFeed(b"{}", b'{"WW": {"A1": {}}}')

    async def broadcast(message: str) -> None:
        raise ConnectionError("chat down")

    async with SnatchClient(SnatchConfig(), catalog, transport=feed) as client:
        watcher = SnatchWatcher(client, broadcast, interval=60)
        await watcher.tick()
        message = await watcher.tick()

    assert message is not None
    assert "WW 1<end>" in message


@pytest.mark.asyncio
async def test_enabled_defaults_from_config(catalog: InMemorySiteCatalog) -> None:
    feed = FakeFeed()
    config = SnatchConfig(announce_enabled=False)
    async with SnatchClient(config, catalog, transport=feed) as client:
        async with SnatchWatcher(client, print, interval=0.01) as watcher:
            await asyncio.sleep(0.02)
            assert not watcher.is_running
    assert feed.timeouts == []


@pytest.mark.asyncio
async def test_explicit_enabled_overrides_config(catalog: InMemorySiteCatalog) -> None:
    feed = FakeFeed(*([b"{}"] * 50))
    config = SnatchConfig(announce_enabled=False)
    async with SnatchClient(config, catalog, transport=feed) as client:
        async with SnatchWatcher(client, print, interval=0.01, enabled=True) as watcher:
            await asyncio.sleep(0.02)
            assert watcher.is_running
    assert feed.timeouts
