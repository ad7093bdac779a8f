"""Region (playfield) reference model."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from towersnatch.models._base import SnatchBaseModel


class Region(SnatchBaseModel):
    """A map region able to hold tower sites.

    Parameters
    ----------
    id : int
        Stable region identifier (the playfield id).
    long_name : str
        Human-readable name, as used by the feed (e.g. ``"Wailing Wastes"``).
    short_name : str
        Short code (e.g. ``"WW"``).
    """

    id: int = Field(validation_alias=AliasChoices("id", "playfield_id", "playfieldId"))
    long_name: str = Field(validation_alias=AliasChoices("long_name", "longName", "name"))
    short_name: str = Field(validation_alias=AliasChoices("short_name", "shortName", "code"))

    def matches(self, name: str) -> bool:
        """Case-insensitive match against the long name or the short code."""
        needle = name.strip().casefold()
        return needle in (self.long_name.casefold(), self.short_name.casefold())
