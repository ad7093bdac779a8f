"""Decoded feed snapshot."""

from __future__ import annotations

from pydantic import Field

from towersnatch.models._base import SnatchBaseModel


class FeedSnapshot(SnatchBaseModel):
    """Per-poll mapping of region name to raw site tokens.

    Regions keep the order in which the feed listed them.
    """

    regions: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.regions
