"""Reference catalog of regions and tower sites.

The engine only needs two read-only queries, expressed by the
:class:`SiteCatalog` protocol.  :class:`InMemorySiteCatalog` is the
production implementation for static datasets and doubles as a test
fixture.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from towersnatch.exceptions import SnatchCatalogError
from towersnatch.models.region import Region
from towersnatch.models.site import TowerSite

_logger = logging.getLogger(__name__)


class SiteCatalog(Protocol):
    """Structural catalog interface used by the engine."""

    def find_region_by_name(self, name: str) -> Region | None:
        ...

    def find_sites_in_region(self, region_id: int) -> list[TowerSite]:
        ...


class InMemorySiteCatalog:
    """Catalog backed by in-memory region and site rows.

    Sites are returned in the order they were supplied, which is the
    order used when rendering a region's unplanted sites.
    """

    def __init__(self, regions: Iterable[Region], sites: Iterable[TowerSite]) -> None:
        self._regions: dict[int, Region] = {}
        for region in regions:
            if region.id in self._regions:
                raise SnatchCatalogError(f"Duplicate region id {region.id}")
            self._regions[region.id] = region

        self._sites: dict[int, list[TowerSite]] = {region_id: [] for region_id in self._regions}
        seen: set[tuple[int, int]] = set()
        for site in sites:
            if site.region_id not in self._regions:
                raise SnatchCatalogError(f"Site {site.ref} references unknown region id {site.region_id}")
            key = (site.region_id, site.site_number)
            if key in seen:
                raise SnatchCatalogError(f"Duplicate site {site.ref}")
            seen.add(key)
            self._sites[site.region_id].append(site)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InMemorySiteCatalog:
        """Build a catalog from ``{"regions": [...], "sites": [...]}``.

        Site rows may omit ``short_name``/``long_name``; they are filled in
        from the owning region.
        """
        try:
            regions = [Region.model_validate(item) for item in data.get("regions", [])]
        except ValidationError as exc:
            raise SnatchCatalogError(f"Invalid region row: {exc}") from exc

        by_id = {region.id: region for region in regions}
        sites: list[TowerSite] = []
        for item in data.get("sites", []):
            row = dict(item)
            region_id = row.get("region_id", row.get("playfield_id"))
            region = by_id.get(region_id) if isinstance(region_id, int) else None
            if region is not None:
                row.setdefault("short_name", region.short_name)
                row.setdefault("long_name", region.long_name)
            try:
                sites.append(TowerSite.model_validate(row))
            except ValidationError as exc:
                raise SnatchCatalogError(f"Invalid site row {item!r}: {exc}") from exc
        return cls(regions, sites)

    @classmethod
    def from_json(cls, path: str | Path) -> InMemorySiteCatalog:
        """Load a catalog dump from a JSON file."""
        file_path = Path(path)
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise SnatchCatalogError(f"Cannot read catalog {file_path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise SnatchCatalogError(f"Catalog {file_path} is not JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise SnatchCatalogError(f"Catalog {file_path} must contain a JSON object")
        catalog = cls.from_dict(data)
        _logger.debug("Loaded catalog %s: %d regions", file_path, len(catalog._regions))
        return catalog

    def find_region_by_name(self, name: str) -> Region | None:
        for region in self._regions.values():
            if region.matches(name):
                return region
        return None

    def find_sites_in_region(self, region_id: int) -> list[TowerSite]:
        return list(self._sites.get(region_id, []))
