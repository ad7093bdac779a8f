"""HTTP transport fetching the raw unplanted-sites feed."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import aiohttp

from towersnatch._constants import USER_AGENT
from towersnatch.exceptions import SnatchTransportError

_logger = logging.getLogger(__name__)


class FeedTransport(Protocol):
    """Structural transport interface used by the client.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpFeedClient`) concrete.
    """

    async def fetch(self, timeout: float) -> bytes:
        ...


class HttpFeedClient:
    """Issue a single GET against the feed endpoint and return the body.

    The client knows nothing about sites or regions; it only turns network
    failures, deadline expiry and non-200 replies into
    :class:`SnatchTransportError`.
    """

    def __init__(self, url: str, http_session: aiohttp.ClientSession) -> None:
        self._url = url
        self._http = http_session

    @property
    def url(self) -> str:
        return self._url

    async def fetch(self, timeout: float) -> bytes:
        """Fetch the feed, giving up once *timeout* seconds have elapsed."""
        headers = {"user-agent": USER_AGENT, "accept": "application/json"}

        _logger.debug("GET %s (timeout %.1fs)", self._url, timeout)

        try:
            async with asyncio.timeout(timeout):
                async with self._http.get(self._url, headers=headers) as resp:
                    body = await resp.read()
                    if resp.status != 200:
                        _logger.debug(
                            "HTTP %d from %s: %s",
                            resp.status,
                            self._url,
                            body[:200].decode("utf-8", errors="replace"),
                        )
                        raise SnatchTransportError(
                            f"HTTP {resp.status}",
                            status_code=resp.status,
                            url=self._url,
                        )
        except SnatchTransportError:
            raise
        except TimeoutError as exc:
            raise SnatchTransportError(
                f"Timeout after {timeout:g}s",
                url=self._url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise SnatchTransportError(
                f"Request failed: {exc}",
                url=self._url,
            ) from exc

        _logger.debug("Feed returned %d bytes", len(body))
        return body
