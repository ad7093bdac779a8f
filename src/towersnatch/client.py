"""High-level async client answering ``snatch`` and announcing new sites."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from towersnatch._constants import MSG_PARSE_ERROR, MSG_TRANSPORT_ERROR
from towersnatch._transport import FeedTransport, HttpFeedClient
from towersnatch.catalog import InMemorySiteCatalog, SiteCatalog
from towersnatch.config import SnatchConfig
from towersnatch.engine import SnatchEngine
from towersnatch.exceptions import SnatchConfigError, SnatchError, SnatchParseError, SnatchTransportError
from towersnatch.models.feed import FeedSnapshot
from towersnatch.parser import parse_feed
from towersnatch.render import Markup
from towersnatch.state import LastKnownState

_logger = logging.getLogger(__name__)


class SnatchClient:
    """Async client for the unplanted tower sites feed.

    Usage::

        async with SnatchClient(config, catalog) as client:
            reply = await client.snatch()
            announcement = await client.check_for_new_unclaimed_sites()

    Only one poll runs at a time, so the change-detection baseline is
    never read and written by two polls at once.
    """

    def __init__(
        self,
        config: SnatchConfig,
        catalog: SiteCatalog | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: FeedTransport | None = None,
        markup: Markup | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._external_transport = transport is not None
        self._engine = SnatchEngine(
            catalog if catalog is not None else self._load_catalog(config),
            markup=markup or Markup(config.bot_name),
        )
        self._poll_lock = asyncio.Lock()

    @staticmethod
    def _load_catalog(config: SnatchConfig) -> SiteCatalog:
        if not config.catalog_path:
            raise SnatchConfigError("No catalog given (pass one or set config.catalog_path)")
        return InMemorySiteCatalog.from_json(config.catalog_path)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SnatchClient:
        if not self._external_transport:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpFeedClient(self._config.feed_url, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> FeedTransport:
        if self._transport is None:
            raise SnatchError("Client not initialized. Use 'async with SnatchClient(...) as client:'")
        return self._transport

    async def _fetch_snapshot(self, timeout: float) -> FeedSnapshot:
        body = await self._require_transport().fetch(timeout)
        return parse_feed(body)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def config(self) -> SnatchConfig:
        return self._config

    @property
    def engine(self) -> SnatchEngine:
        return self._engine

    @property
    def state(self) -> LastKnownState:
        """The current change-detection baseline."""
        return self._engine.state

    async def snatch(self) -> str:
        """Answer the ``snatch`` command with all currently unplanted sites.

        Always returns a reply; transport and decoding failures become
        "try again later" messages.
        """
        async with self._poll_lock:
            try:
                snapshot = await self._fetch_snapshot(self._config.query_timeout)
            except SnatchTransportError as exc:
                _logger.info("snatch: feed unavailable: %s", exc)
                return MSG_TRANSPORT_ERROR.format(error=exc)
            except SnatchParseError as exc:
                _logger.info("snatch: feed undecodable: %s", exc)
                return MSG_PARSE_ERROR
            return self._engine.handle_on_demand_query(snapshot)

    async def check_for_new_unclaimed_sites(self) -> str | None:
        """Run one periodic check.

        Returns the announcement to broadcast, or ``None`` when there is
        nothing new or the feed could not be read.  A failed fetch leaves
        the baseline untouched.
        """
        async with self._poll_lock:
            try:
                snapshot = await self._fetch_snapshot(self._config.poll_timeout)
            except (SnatchTransportError, SnatchParseError) as exc:
                _logger.warning("Periodic check aborted: %s", exc)
                return None
            return self._engine.handle_periodic_poll(snapshot)
