"""Join feed snapshots against the catalog, diff them and render replies.

The engine is synchronous and performs no I/O.  It owns the
:data:`~towersnatch.state.LastKnownState`; callers that can trigger
polls concurrently must serialise calls into it (see
:class:`towersnatch.client.SnatchClient`).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from towersnatch._constants import MSG_NOTHING_TO_SNATCH
from towersnatch.catalog import SiteCatalog
from towersnatch.exceptions import RegionResolutionError
from towersnatch.models.feed import FeedSnapshot
from towersnatch.models.site import TowerSite, UnclaimedSiteRef
from towersnatch.parser import extract_site_number
from towersnatch.render import Markup, render_site_detail, render_summary
from towersnatch.state import UNKNOWN, LastKnownState, SiteBaseline

_logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResolvedFeed:
    """Catalog rows matching a feed snapshot.

    ``entries`` keeps feed order for regions and catalog order for the
    sites inside a region.  ``unresolved_region`` names the region that
    stopped resolution, when unknown regions are not skipped.
    """

    entries: list[tuple[TowerSite, UnclaimedSiteRef]] = field(default_factory=list)
    unresolved_region: str | None = None

    @property
    def refs(self) -> list[UnclaimedSiteRef]:
        return [ref for _, ref in self.entries]

    @property
    def error(self) -> RegionResolutionError | None:
        if self.unresolved_region is None:
            return None
        return RegionResolutionError(self.unresolved_region)


class SnatchEngine:
    """Turn feed snapshots into ``snatch`` replies and new-site announcements."""

    def __init__(self, catalog: SiteCatalog, *, markup: Markup | None = None) -> None:
        self._catalog = catalog
        self._markup = markup or Markup()
        self.state: LastKnownState = UNKNOWN

    def resolve_feed(self, snapshot: FeedSnapshot, *, skip_unresolved: bool) -> ResolvedFeed:
        """Resolve every region and site token of *snapshot* against the catalog.

        Tokens without a catalog row are ignored; the feed may know sites
        the local catalog does not.
        """
        resolved = ResolvedFeed()
        for region_name, tokens in snapshot.regions.items():
            region = self._catalog.find_region_by_name(region_name)
            if region is None:
                if not skip_unresolved:
                    resolved.unresolved_region = region_name
                    return resolved
                _logger.debug("Skipping unknown region %r in feed", region_name)
                continue

            site_numbers = {number for number in map(extract_site_number, tokens) if number is not None}
            for site in self._catalog.find_sites_in_region(region.id):
                if site.site_number in site_numbers:
                    resolved.entries.append((site, site.ref))
        return resolved

    def handle_on_demand_query(self, snapshot: FeedSnapshot) -> str:
        """Render every currently unplanted site.

        A successful query also becomes the new baseline for the next
        periodic check.
        """
        if snapshot.is_empty:
            return MSG_NOTHING_TO_SNATCH

        resolved = self.resolve_feed(snapshot, skip_unresolved=False)
        if resolved.error is not None:
            return str(resolved.error)

        self._commit(resolved.refs)
        if not resolved.entries:
            return MSG_NOTHING_TO_SNATCH
        return render_summary(self._blocks(site for site, _ in resolved.entries), new=False, markup=self._markup)

    def handle_periodic_poll(self, snapshot: FeedSnapshot) -> str | None:
        """Return an announcement for sites that became unplanted since the last check.

        Returns ``None`` when there is nothing new, or when there was no
        baseline to compare against yet.
        """
        if snapshot.is_empty:
            self._commit([])
            return None

        resolved = self.resolve_feed(snapshot, skip_unresolved=True)
        previous = self.state
        self._commit(resolved.refs)

        if previous is UNKNOWN:
            _logger.debug("First check since startup, not announcing %d sites", len(resolved.entries))
            return None

        new_refs = set(previous.new_since(resolved.refs))
        new_sites = [site for site, ref in resolved.entries if ref in new_refs]
        if not new_sites:
            return None

        _logger.info("Announcing %d new unplanted sites", len(new_sites))
        attention = f":::{self._markup.highlight('ATTENTION')}::: "
        return attention + render_summary(self._blocks(new_sites), new=True, markup=self._markup)

    def _commit(self, refs: list[UnclaimedSiteRef]) -> None:
        self.state = SiteBaseline.of(refs)
        _logger.debug("Baseline now holds %d sites", len(refs))

    def _blocks(self, sites: Iterable[TowerSite]) -> list[str]:
        return [self._markup.PAGE_BREAK + render_site_detail(site, self._markup) for site in sites]
