"""towersnatch - Async watcher for unplanted tower sites."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("towersnatch")
except PackageNotFoundError:
    __version__ = "0+local"
from towersnatch._constants import HELP_TEXT
from towersnatch._transport import FeedTransport, HttpFeedClient
from towersnatch.catalog import InMemorySiteCatalog, SiteCatalog
from towersnatch.client import SnatchClient
from towersnatch.config import SnatchConfig
from towersnatch.engine import ResolvedFeed, SnatchEngine
from towersnatch.exceptions import (
    RegionResolutionError,
    SnatchCatalogError,
    SnatchConfigError,
    SnatchError,
    SnatchParseError,
    SnatchTransportError,
)
from towersnatch.models import FeedSnapshot, Region, TowerSite, UnclaimedSiteRef
from towersnatch.parser import extract_site_number, parse_feed
from towersnatch.render import Markup, render_site_detail, render_summary
from towersnatch.state import UNKNOWN, LastKnownState, SiteBaseline
from towersnatch.watcher import SnatchWatcher

__all__ = [
    "__version__",
    "FeedSnapshot",
    "FeedTransport",
    "HELP_TEXT",
    "HttpFeedClient",
    "InMemorySiteCatalog",
    "LastKnownState",
    "Markup",
    "Region",
    "RegionResolutionError",
    "ResolvedFeed",
    "SiteBaseline",
    "SiteCatalog",
    "SnatchCatalogError",
    "SnatchClient",
    "SnatchConfig",
    "SnatchConfigError",
    "SnatchEngine",
    "SnatchError",
    "SnatchParseError",
    "SnatchTransportError",
    "SnatchWatcher",
    "TowerSite",
    "UNKNOWN",
    "UnclaimedSiteRef",
    "extract_site_number",
    "parse_feed",
    "render_site_detail",
    "render_summary",
]
