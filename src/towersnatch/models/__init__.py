"""Data models for regions, tower sites and feed snapshots."""

from towersnatch.models._base import SnatchBaseModel
from towersnatch.models.feed import FeedSnapshot
from towersnatch.models.region import Region
from towersnatch.models.site import TowerSite, UnclaimedSiteRef

__all__ = [
    "FeedSnapshot",
    "Region",
    "SnatchBaseModel",
    "TowerSite",
    "UnclaimedSiteRef",
]
