"""Background task announcing newly unplanted tower sites."""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from towersnatch.client import SnatchClient
from towersnatch.exceptions import SnatchError

_logger = logging.getLogger(__name__)

Broadcast = Callable[[str], Awaitable[None] | None]


class SnatchWatcher:
    """Run :meth:`SnatchClient.check_for_new_unclaimed_sites` on a fixed interval.

    The first check runs as soon as the watcher starts; it only records
    the baseline.  Announcements are handed to *broadcast*, which may be
    a plain function or a coroutine function.  A failing broadcast is
    logged and the next check still runs.

    *enabled* defaults to the client's ``config.announce_enabled``.
    """

    def __init__(
        self,
        client: SnatchClient,
        broadcast: Broadcast,
        *,
        interval: float,
        enabled: bool | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._client = client
        self._broadcast = broadcast
        self._interval = interval
        self._enabled = client.config.announce_enabled if enabled is None else enabled
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def __aenter__(self) -> SnatchWatcher:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    def start(self) -> None:
        if not self._enabled:
            _logger.info("New-site announcements are disabled")
            return
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run(), name="towersnatch-watcher")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def tick(self) -> str | None:
        """Run one check and deliver its announcement, if any."""
        message = await self._client.check_for_new_unclaimed_sites()
        if message is None:
            return None
        try:
            result = self._broadcast(message)
            if inspect.isawaitable(result):
                await result
        except Exception:
            _logger.exception("Broadcasting new unplanted sites failed")
        return message

    async def _run(self) -> None:
        while True:
            try:
                await self.tick()
            except SnatchError:
                _logger.exception("Periodic check failed")
            await asyncio.sleep(self._interval)
