"""Tower site reference model and its diff identity."""

from __future__ import annotations

from typing import NamedTuple

from pydantic import AliasChoices, Field, model_validator

from towersnatch.models._base import SnatchBaseModel


class UnclaimedSiteRef(NamedTuple):
    """Identity of a site for diffing: ``(region short code, site number)``."""

    short_name: str
    site_number: int

    def __str__(self) -> str:
        return f"{self.short_name} {self.site_number}"


class TowerSite(SnatchBaseModel):
    """A defensible tower site inside one region.

    ``short_name`` and ``long_name`` belong to the owning region; they are
    denormalised onto the row so a site renders without another lookup.
    """

    region_id: int = Field(validation_alias=AliasChoices("region_id", "playfield_id", "playfieldId"))
    site_number: int = Field(ge=0, validation_alias=AliasChoices("site_number", "siteNumber"))
    short_name: str = Field(validation_alias=AliasChoices("short_name", "shortName"))
    long_name: str = Field(validation_alias=AliasChoices("long_name", "longName"))
    site_name: str = Field(validation_alias=AliasChoices("site_name", "siteName"))
    min_ql: int = Field(validation_alias=AliasChoices("min_ql", "minQl", "min_level"))
    max_ql: int = Field(validation_alias=AliasChoices("max_ql", "maxQl", "max_level"))
    x_coord: int = Field(validation_alias=AliasChoices("x_coord", "xCoord", "x"))
    y_coord: int = Field(validation_alias=AliasChoices("y_coord", "yCoord", "y"))

    @model_validator(mode="after")
    def _check_level_range(self) -> TowerSite:
        if self.min_ql > self.max_ql:
            raise ValueError(f"min_ql {self.min_ql} exceeds max_ql {self.max_ql} for {self.ref}")
        return self

    @property
    def ref(self) -> UnclaimedSiteRef:
        return UnclaimedSiteRef(self.short_name, self.site_number)

    @property
    def display_name(self) -> str:
        return f"{self.site_name}, {self.long_name}"
